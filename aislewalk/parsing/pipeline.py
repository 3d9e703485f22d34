"""
Parsing Pipeline - Оркестратор 3 этапов D1.

Координирует выполнение всех этапов в строгом порядке:
1. Blocks → 2. Expansion → 3. Items

Возвращает ShoppingListDTO (контракт D1->D2).
"""

import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional
from loguru import logger

from contracts.d1_parsing_dto import ParsedItem, ShoppingListDTO

from .domain.exceptions import ShoppingListFileNotFoundError
from .rules.config_loader import ConfigLoader, RulesConfig
from .s1_blocks import BlockStage, BlockResult
from .s2_expansion import ExpansionStage, ExpansionResult
from .s3_items import ItemStage, ItemResult


@dataclass
class ParsingPipelineResult:
    """
    Полный результат пайплайна со всеми промежуточными данными.

    Используется для отладки и анализа.
    """
    # Финальный результат (контракт D1->D2)
    dto: ShoppingListDTO

    # Промежуточные результаты этапов
    blocks: Optional[BlockResult] = None
    expansion: Optional[ExpansionResult] = None
    items: Optional[ItemResult] = None

    # Метрики
    processing_time_ms: float = 0.0
    stages_completed: int = 0

    def to_dict(self) -> dict:
        return {
            "dto": self.dto.model_dump() if self.dto else None,
            "blocks": self.blocks.to_dict() if self.blocks else None,
            "expansion": self.expansion.to_dict() if self.expansion else None,
            "items": self.items.to_dict() if self.items else None,
            "processing_time_ms": self.processing_time_ms,
            "stages_completed": self.stages_completed,
        }


class ParsingPipeline:
    """
    Пайплайн парсинга D1.

    Координирует 3 этапа в строгом порядке:
    1. Block Classification - заголовки секций и строки товаров
    2. Line Expansion - категория, общее количество, деление на товары
    3. Item Extraction - количество, заметки, поисковый ключ

    ЦКП: ShoppingListDTO, записи в порядке исходного текста.
    Ни одна запись не отбрасывается: фильтрация директив - на стороне вызывающего.
    """

    def __init__(
        self,
        block_stage: Optional[BlockStage] = None,
        expansion_stage: Optional[ExpansionStage] = None,
        item_stage: Optional[ItemStage] = None,
        config_loader: Optional[ConfigLoader] = None,
        rules: Optional[RulesConfig] = None,
    ):
        """
        Инициализация пайплайна.

        Args:
            Все этапы опциональны, по умолчанию создаются стандартные.
            config_loader: Загрузчик правил
            rules: Готовые правила (приоритетнее config_loader)
        """
        self.config_loader = config_loader or ConfigLoader()
        self.rules = rules or self.config_loader.load()

        self.block_stage = block_stage or BlockStage(rules=self.rules)
        self.expansion_stage = expansion_stage or ExpansionStage(rules=self.rules)
        self.item_stage = item_stage or ItemStage(rules=self.rules)

        logger.debug("[ParsingPipeline] Инициализирован (3 этапа)")

    def process(self, text: str, source_file: Optional[str] = None) -> ParsingPipelineResult:
        """
        Обрабатывает текст списка через все 3 этапа.

        Args:
            text: Полный текст списка покупок
            source_file: Имя исходного файла (для метаданных)

        Returns:
            ParsingPipelineResult: Полный результат с DTO и промежуточными данными
        """
        start_time = time.time()
        logger.info(f"[ParsingPipeline] Старт обработки: {source_file or '<text>'}")

        stages_completed = 0

        # Stage 1: Blocks
        logger.debug("[ParsingPipeline] Stage 1/3: Blocks")
        blocks = self.block_stage.process(text)
        stages_completed += 1

        # Stage 2: Expansion
        logger.debug("[ParsingPipeline] Stage 2/3: Expansion")
        expansion = self.expansion_stage.process(blocks.blocks)
        stages_completed += 1

        # Stage 3: Items
        logger.debug("[ParsingPipeline] Stage 3/3: Items")
        items = self.item_stage.process(expansion.entries)
        stages_completed += 1

        dto = ShoppingListDTO(
            items=items.items,
            source_file=source_file,
            metrics={
                "blocks_count": len(blocks.blocks),
                "headers_count": len(blocks.headers),
                "items_count": items.shopping_items_count,
                "directives_count": items.directives_count,
            },
        )

        processing_time_ms = (time.time() - start_time) * 1000

        logger.info(
            f"[ParsingPipeline] Завершено за {processing_time_ms:.1f}ms: "
            f"{items.shopping_items_count} товаров, {items.directives_count} директив"
        )

        return ParsingPipelineResult(
            dto=dto,
            blocks=blocks,
            expansion=expansion,
            items=items,
            processing_time_ms=processing_time_ms,
            stages_completed=stages_completed,
        )

    def process_file(self, path: Path) -> ParsingPipelineResult:
        """Читает файл списка (UTF-8) и обрабатывает его."""
        if not path.exists():
            raise ShoppingListFileNotFoundError(
                message=f"Файл не найден: {path}",
                component="ParsingPipeline"
            )

        text = path.read_text(encoding="utf-8")
        return self.process(text, source_file=path.name)


def parse_shopping_list(text: str, rules: Optional[RulesConfig] = None) -> List[ParsedItem]:
    """Разбирает список покупок в записи ParsedItem (товары и директивы по порядку)."""
    return ParsingPipeline(rules=rules).process(text).dto.items
