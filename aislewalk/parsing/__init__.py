"""
Домен Parsing (D1): Разбор свободного списка покупок.

Архитектура: 3-этапный пайплайн
- Stage 1: Blocks (заголовки секций, строки товаров)
- Stage 2: Expansion (категория, общее количество, деление на товары)
- Stage 3: Items (количество, заметки, поисковый ключ)

Вход: текст списка покупок
Выход: contracts.ShoppingListDTO (для D2)
"""

from .pipeline import ParsingPipeline, ParsingPipelineResult, parse_shopping_list
from .rules import ConfigLoader, RulesConfig

# Stage exports
from .s1_blocks import BlockStage, BlockResult, Block, BlockKind
from .s2_expansion import ExpansionStage, ExpansionResult, ExpandedEntry
from .s3_items import ItemStage, ItemResult

__all__ = [
    # Pipeline
    "ParsingPipeline",
    "ParsingPipelineResult",
    "parse_shopping_list",
    "ConfigLoader",
    "RulesConfig",
    # Stages
    "BlockStage",
    "BlockResult",
    "Block",
    "BlockKind",
    "ExpansionStage",
    "ExpansionResult",
    "ExpandedEntry",
    "ItemStage",
    "ItemResult",
]
