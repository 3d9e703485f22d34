"""
Stage 2: Line Expansion

ЦКП: Разворачивание одной строки в несколько записей-кандидатов.

Input: Block (Stage 1)
Output: список ExpandedEntry (товары и директивы)

Алгоритм:
1. Категория строки (prefix_extractor)
2. Общее количество (prefix_extractor)
3. Разделение по запятым, затем по "and" (segmenter)
4. Директивы помечаются и не разбираются дальше
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional
from loguru import logger

from ..rules.config_loader import ConfigLoader, RulesConfig
from ..s1_blocks.stage import Block, BlockKind

from .prefix_extractor import PrefixExtractor
from .segmenter import Segmenter


@dataclass(frozen=True)
class ExpandedEntry:
    """
    Запись после разворачивания строки.

    Ровно одно из item_text / directive_text задано.
    category и shared_qty относятся только к строке-источнику.
    """
    raw: str
    section: Optional[str] = None
    item_text: Optional[str] = None
    directive_text: Optional[str] = None
    category: Optional[str] = None
    shared_qty: Optional[str] = None

    @property
    def is_directive(self) -> bool:
        return self.directive_text is not None

    def to_dict(self) -> dict:
        return {
            "raw": self.raw,
            "section": self.section,
            "item_text": self.item_text,
            "directive_text": self.directive_text,
            "category": self.category,
            "shared_qty": self.shared_qty,
        }


@dataclass
class ExpansionResult:
    """
    Результат Stage 2: Line Expansion.

    ЦКП: Плоский список записей в порядке чтения.
    """
    entries: List[ExpandedEntry] = field(default_factory=list)

    @property
    def directives_count(self) -> int:
        return sum(1 for entry in self.entries if entry.is_directive)

    def to_dict(self) -> dict:
        return {
            "entries": [entry.to_dict() for entry in self.entries],
            "entries_count": len(self.entries),
            "directives_count": self.directives_count,
        }


class ExpansionStage:
    """
    Stage 2: Line Expansion - Оркестратор.

    Использует:
    - PrefixExtractor: категория и общее количество
    - Segmenter: запятые и "and"
    """

    def __init__(self, rules: Optional[RulesConfig] = None):
        """
        Args:
            rules: Таблицы правил (по умолчанию base.yaml)
        """
        self.rules = rules or ConfigLoader().load()
        self.prefix_extractor = PrefixExtractor()
        self.segmenter = Segmenter()

    def process(self, blocks: Iterable[Block]) -> ExpansionResult:
        """Разворачивает все блоки по порядку."""
        result = ExpansionResult()
        for block in blocks:
            result.entries.extend(self.expand(block))
        return result

    def expand(self, block: Block) -> List[ExpandedEntry]:
        """
        Разворачивает один блок в записи.

        Args:
            block: Блок Stage 1

        Returns:
            Записи в порядке слева направо
        """
        if block.kind == BlockKind.DIRECTIVE:
            return [ExpandedEntry(raw=block.raw, section=block.section, directive_text=block.text)]

        # 1-2. Префиксы строки
        category, text = self.prefix_extractor.extract_category(block.text, self.rules)
        shared_qty, text = self.prefix_extractor.extract_shared_qty(text, self.rules)

        # 3. Сегменты
        entries: List[ExpandedEntry] = []
        for segment in self.segmenter.split_commas(text):
            if self.rules.is_directive(segment):
                logger.debug(f"[ExpansionStage] Directive: '{segment}'")
                entries.append(ExpandedEntry(raw=block.raw, section=block.section, directive_text=segment))
                continue

            cleaned = self.segmenter.strip_period(segment)
            if not cleaned:
                continue

            # 4. Товары с общими category / shared_qty строки
            for fragment in self.segmenter.split_and(cleaned, self.rules):
                entries.append(ExpandedEntry(
                    raw=block.raw,
                    section=block.section,
                    item_text=fragment,
                    category=category,
                    shared_qty=shared_qty,
                ))

        if len(entries) > 1:
            logger.debug(f"[ExpansionStage] '{block.text}' -> {len(entries)} записей")
        return entries
