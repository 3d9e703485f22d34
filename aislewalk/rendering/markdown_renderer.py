"""
Markdown Renderer - Список покупок в порядке обхода магазина.

ЦКП: Markdown документ с чекбоксами, сгруппированный по отделам.

Формат:
    # Shopping List — February 14, 2026 Sat 09:30
    **Store:** ShopRite #592 — South Plainfield, NJ

    ## Produce
    - [ ] Avocados ×3-4 *(dark green ones)*

    ---
    <details> с исходным списком
"""

import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional
from loguru import logger

from config.settings import AISLE_SORT_ORDER, UNRANKED_AISLE_ORDER, STORE_LABEL, DEFAULT_STORE_ID
from contracts.d2_lookup_dto import ResolvedItem, UNKNOWN_AISLE

from .domain.exceptions import RenderWriteError


@dataclass
class RenderResult:
    """
    Результат рендеринга.

    ЦКП: Markdown текст и счётчики.
    """
    markdown: str
    found_count: int = 0
    unknown_count: int = 0
    aisles_count: int = 0

    def to_dict(self) -> dict:
        return {
            "found_count": self.found_count,
            "unknown_count": self.unknown_count,
            "aisles_count": self.aisles_count,
            "markdown_length": len(self.markdown),
        }


class MarkdownRenderer:
    """
    Рендерер Markdown.

    Товары без расположения попадают в отдел "Unknown" (в конце маршрута).
    """

    _BLANK_LINES_RE = re.compile(r"\n{3,}")

    def __init__(
        self,
        sort_order: Optional[Mapping[str, int]] = None,
        store_id: str = DEFAULT_STORE_ID,
        store_label: str = STORE_LABEL,
    ):
        """
        Args:
            sort_order: Порядок обхода отделов (по умолчанию AISLE_SORT_ORDER)
            store_id: Номер магазина для заголовка
            store_label: Адрес магазина для заголовка
        """
        self.sort_order = sort_order if sort_order is not None else AISLE_SORT_ORDER
        self.store_id = store_id
        self.store_label = store_label

    def aisle_rank(self, aisle: str) -> int:
        return self.sort_order.get(aisle, UNRANKED_AISLE_ORDER)

    def group_by_aisle(self, resolved: Iterable[ResolvedItem]) -> Dict[str, List[ResolvedItem]]:
        """
        Группирует товары по отделам в порядке обхода.

        Внутри отдела товары сохраняют порядок списка.
        """
        groups: Dict[str, List[ResolvedItem]] = {}
        for entry in resolved:
            # Директивы и записи из одних заметок не попадают в список
            if entry.item.is_directive or not entry.item.name:
                continue
            key = entry.location.aisle or UNKNOWN_AISLE
            groups.setdefault(key, []).append(entry)

        ordered = sorted(groups, key=self.aisle_rank)
        return {aisle: groups[aisle] for aisle in ordered}

    def format_item(self, entry: ResolvedItem) -> str:
        line = f"- [ ] {entry.item.name}"
        if entry.item.qty:
            line += f" ×{entry.item.qty}"
        if entry.location.bay:
            line += f" — {entry.location.bay}"
        if entry.item.notes:
            line += f" *({entry.item.notes})*"
        return line

    def render(
        self,
        resolved: Iterable[ResolvedItem],
        raw_text: str,
        source_name: str,
        generated_at: datetime,
    ) -> RenderResult:
        """
        Рендерит список покупок.

        Args:
            resolved: Товары с расположением
            raw_text: Исходный текст списка (приложение в конце)
            source_name: Имя исходного файла
            generated_at: Время формирования (для заголовка)

        Returns:
            RenderResult
        """
        groups = self.group_by_aisle(resolved)

        title_time = (
            f"{generated_at:%B} {generated_at.day}, {generated_at.year} "
            f"{generated_at:%a} {generated_at:%H:%M}"
        )
        lines = [
            f"# Shopping List — {title_time}",
            f"**Store:** ShopRite #{self.store_id} — {self.store_label}",
            "",
        ]

        found_count = 0
        unknown_count = 0
        for aisle, entries in groups.items():
            lines.append(f"## {aisle}")
            for entry in entries:
                lines.append(self.format_item(entry))
                if aisle == UNKNOWN_AISLE:
                    unknown_count += 1
                else:
                    found_count += 1
            lines.append("")

        lines.extend([
            "---",
            f"<details><summary>Original list ({source_name})</summary>",
            "",
            "```",
            self._BLANK_LINES_RE.sub("\n\n", raw_text).strip(),
            "```",
            "</details>",
            "",
        ])

        logger.debug(
            f"[MarkdownRenderer] {len(groups)} отделов: {found_count} найдено, {unknown_count} unknown"
        )
        return RenderResult(
            markdown="\n".join(lines),
            found_count=found_count,
            unknown_count=unknown_count,
            aisles_count=len(groups),
        )

    @staticmethod
    def output_filename(generated_at: datetime) -> str:
        """Имя файла вида "Feb-14.md"."""
        return f"{generated_at:%b}-{generated_at.day:02d}.md"

    def write(self, result: RenderResult, output_path: Path) -> Path:
        """
        Сохраняет Markdown в файл.

        Raises:
            RenderWriteError: Если не удалось записать файл
        """
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(result.markdown, encoding="utf-8")
        except (IOError, OSError) as e:
            raise RenderWriteError(
                message=f"Не удалось сохранить Markdown: {output_path}",
                component="MarkdownRenderer",
                original_error=e
            )
        logger.debug(f"[MarkdownRenderer] Файл сохранен: {output_path}")
        return output_path
