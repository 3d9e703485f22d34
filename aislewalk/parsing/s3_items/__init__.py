"""
Stage 3: Item Extraction

ЦКП: Записи ParsedItem с количеством, заметками и поисковым ключом.
"""

from .stage import ItemStage, ItemResult
from .quantity_parser import QuantityParser, QtyResult
from .text_normalizer import TextNormalizer, collapse_whitespace
from .lookup_term_builder import LookupTermBuilder

__all__ = [
    "ItemStage",
    "ItemResult",
    "QuantityParser",
    "QtyResult",
    "TextNormalizer",
    "collapse_whitespace",
    "LookupTermBuilder",
]
