"""
Stage 3: Item Extraction

ЦКП: Структурированная запись ParsedItem из одной записи Stage 2.

Input: ExpandedEntry
Output: contracts.ParsedItem

Алгоритм (порядок - контракт):
1. Заметки из скобок (text_normalizer)
2. Сокращённая запись: "1/2 & 1/2", префикс "dz" (text_normalizer)
3. Количество: "x2" > "4 cans" > "3-4" (quantity_parser)
4. Сокращение всего названия: "oj" -> "orange juice" (text_normalizer)
5. Поисковый ключ (lookup_term_builder)
6. Оформление названия (text_normalizer)
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional
from loguru import logger

from contracts.d1_parsing_dto import ParsedItem

from ..rules.config_loader import ConfigLoader, RulesConfig
from ..s2_expansion.stage import ExpandedEntry

from .quantity_parser import QuantityParser
from .text_normalizer import TextNormalizer
from .lookup_term_builder import LookupTermBuilder


@dataclass
class ItemResult:
    """
    Результат Stage 3: Item Extraction.

    ЦКП: Записи ParsedItem в порядке исходного текста.
    """
    items: List[ParsedItem] = field(default_factory=list)

    @property
    def shopping_items_count(self) -> int:
        return sum(1 for item in self.items if item.name and not item.is_directive)

    @property
    def directives_count(self) -> int:
        return sum(1 for item in self.items if item.is_directive)

    def to_dict(self) -> dict:
        return {
            "items": [item.model_dump() for item in self.items],
            "items_count": self.shopping_items_count,
            "directives_count": self.directives_count,
        }


class ItemStage:
    """
    Stage 3: Item Extraction - Оркестратор.

    Использует:
    - TextNormalizer: заметки, сокращения, оформление названия
    - QuantityParser: количество
    - LookupTermBuilder: поисковый ключ
    """

    def __init__(self, rules: Optional[RulesConfig] = None):
        """
        Args:
            rules: Таблицы правил (по умолчанию base.yaml)
        """
        self.rules = rules or ConfigLoader().load()
        self.text_normalizer = TextNormalizer()
        self.quantity_parser = QuantityParser()
        self.lookup_term_builder = LookupTermBuilder()

    def process(self, entries: Iterable[ExpandedEntry]) -> ItemResult:
        """Извлекает записи по порядку."""
        return ItemResult(items=[self.extract(entry) for entry in entries])

    def extract(self, entry: ExpandedEntry) -> ParsedItem:
        """
        Извлекает поля товара из записи.

        Args:
            entry: Запись Stage 2

        Returns:
            ParsedItem (товар или директива)
        """
        if entry.is_directive:
            return ParsedItem(
                raw=entry.raw,
                name=None,
                qty="",
                notes="",
                lookup_term=None,
                category=None,
                section=entry.section,
                directive=entry.directive_text,
            )

        # 1. Заметки
        text, notes = self.text_normalizer.extract_notes(entry.item_text or "")

        # 2. Сокращённая запись
        text, dozen = self.text_normalizer.normalize_shorthand(text)

        # 3. Количество
        qty_result = self.quantity_parser.parse(
            text, self.rules, dozen=dozen, shared_qty=entry.shared_qty
        )

        # 4. Сокращение всего названия
        name = self.text_normalizer.expand_abbreviation(qty_result.name, self.rules)

        # 5. Поисковый ключ
        lookup_term = self.lookup_term_builder.build(name, self.rules)

        # 6. Оформление названия
        name = self.text_normalizer.finish_name(name)

        logger.debug(
            f"[ItemStage] '{entry.item_text}' -> name='{name}', qty='{qty_result.qty}' "
            f"({qty_result.rule or 'none'}), lookup='{lookup_term}'"
        )

        return ParsedItem(
            raw=entry.raw,
            name=name,
            qty=qty_result.qty,
            notes=notes,
            lookup_term=lookup_term,
            category=entry.category,
            section=entry.section,
            directive=None,
        )
