"""
Stage 1: Block Classification

ЦКП: Разбиение текста списка на блоки с контекстом секции.

Входные данные: полный текст списка покупок
Выходные данные: BlockResult (блоки items / directive с секцией)

Алгоритм:
1. Разбиение по переносам строк (LF и CRLF), пустые строки отбрасываются
2. Проверка строки по header_patterns (порядок фиксирован)
3. Заголовок обновляет текущую секцию; текст после двоеточия - отдельный блок
4. Остальные строки - блоки items с текущей секцией
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional
from loguru import logger

from ..rules.config_loader import ConfigLoader, RulesConfig


class BlockKind(str, Enum):
    """Тип блока."""
    HEADER = "header"
    ITEMS = "items"
    DIRECTIVE = "directive"


@dataclass(frozen=True)
class Block:
    """
    Блок списка покупок.

    Строка с товарами (или директивой) и активная секция магазина.
    """
    kind: BlockKind                     # items или directive
    text: str                           # Текст для разбора
    section: Optional[str]              # Текущая секция (None до первого заголовка)
    raw: str                            # Исходная строка целиком

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "text": self.text,
            "section": self.section,
            "raw": self.raw,
        }


@dataclass
class BlockResult:
    """
    Результат Stage 1: Block Classification.

    ЦКП: Упорядоченные блоки с секциями.
    """
    blocks: List[Block] = field(default_factory=list)
    headers: List[str] = field(default_factory=list)
    skipped_lines: int = 0

    def to_dict(self) -> dict:
        return {
            "blocks": [block.to_dict() for block in self.blocks],
            "headers": list(self.headers),
            "blocks_count": len(self.blocks),
            "skipped_lines": self.skipped_lines,
        }


class BlockStage:
    """
    Stage 1: Block Classification.

    ЦКП: Блоки items / directive с унаследованной секцией.

    Заголовки секций ("Aisle 5:", "Frozen section") не попадают в результат,
    только меняют контекст для последующих строк.
    """

    _PARENTHETICAL_RE = re.compile(r"\s*\([^)]*\)\s*")
    # Только переводы строк: U+2028, \x0c и т.п. остаются внутри строки
    _LINE_BREAK_RE = re.compile(r"\r?\n")

    def __init__(self, rules: Optional[RulesConfig] = None):
        """
        Args:
            rules: Таблицы правил (по умолчанию base.yaml)
        """
        self.rules = rules or ConfigLoader().load()

    def process(self, text: str) -> BlockResult:
        """
        Разбивает текст на блоки.

        Args:
            text: Полный текст списка покупок

        Returns:
            BlockResult с блоками в порядке исходного текста
        """
        result = BlockResult()
        current_section: Optional[str] = None

        lines = self._LINE_BREAK_RE.split(text)
        if lines and not lines[-1]:
            # Перевод строки в конце файла не даёт пустой строки
            lines.pop()

        for raw_line in lines:
            line = raw_line.strip()
            if not line:
                result.skipped_lines += 1
                continue

            if self.rules.is_header(line):
                current_section = self.section_label(line)
                result.headers.append(current_section)
                logger.debug(f"[BlockStage] Header: '{line}' -> section '{current_section}'")

                inline = self._inline_text(line)
                if inline:
                    kind = BlockKind.DIRECTIVE if self.rules.is_directive(inline) else BlockKind.ITEMS
                    result.blocks.append(Block(kind=kind, text=inline, section=current_section, raw=line))
                continue

            result.blocks.append(Block(kind=BlockKind.ITEMS, text=line, section=current_section, raw=line))

        logger.debug(
            f"[BlockStage] {len(result.blocks)} блоков, "
            f"{len(result.headers)} заголовков, {result.skipped_lines} пустых строк"
        )
        return result

    def section_label(self, line: str) -> str:
        """Название секции: без скобок и всего, что после первого двоеточия."""
        label = self._PARENTHETICAL_RE.sub(" ", line)
        label = label.split(":", 1)[0]
        return " ".join(label.split())

    @staticmethod
    def _inline_text(line: str) -> str:
        """Текст после первого двоеточия заголовка ('' если нет)."""
        if ":" not in line:
            return ""
        return line.split(":", 1)[1].strip()
