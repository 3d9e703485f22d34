"""
Segmenter - Разделение строки на сегменты товаров.

ЦКП: Список фрагментов: сначала по запятым, затем по "and" (кроме составных фраз).
"""

import re
from typing import List

from ..rules.config_loader import RulesConfig


class Segmenter:
    """Элемент-функция: делит строку на товары."""

    _COMMA_RE = re.compile(r"\s*,\s*")
    _AND_RE = re.compile(r"\s+and\s+", re.IGNORECASE)
    _TRAILING_PERIOD_RE = re.compile(r"\.\s*$")

    def split_commas(self, text: str) -> List[str]:
        """Сегменты по запятым (пустые отбрасываются)."""
        return [seg.strip() for seg in self._COMMA_RE.split(text) if seg.strip()]

    def strip_period(self, segment: str) -> str:
        """Убирает одну точку в конце сегмента."""
        return self._TRAILING_PERIOD_RE.sub("", segment, count=1).strip()

    def split_and(self, segment: str, rules: RulesConfig) -> List[str]:
        """
        Делит сегмент по слову "and".

        Если сегмент содержит составную фразу ("mac and cheese") - не делит.
        """
        if rules.contains_compound(segment):
            return [segment]

        return [part.strip() for part in self._AND_RE.split(segment) if part.strip()]
