"""
Prefix Extractor - Извлечение префиксов строки.

ЦКП: Категория ("Fruits:") и общее количество ("1 bag each:") из начала строки.

SRP: Только префиксы, без разделения строки на товары.
"""

import re
from typing import Optional, Tuple
from loguru import logger

from ..rules.config_loader import RulesConfig


class PrefixExtractor:
    """
    Экстрактор префиксов строки.

    Порядок проверок фиксирован:
    1. Известная категория ("Cereal:", "Cold cuts (thin):")
    2. Fallback: произвольный текст до двоеточия, если после него список
    3. Общее количество ("2 cans each:")
    """

    _GENERIC_COLON_RE = re.compile(r"^([^,:]{3,}):\s*(.+)")
    _AND_WORD_RE = re.compile(r"\band\b", re.IGNORECASE)

    def extract_category(self, text: str, rules: RulesConfig) -> Tuple[Optional[str], str]:
        """
        Извлекает категорию из начала строки.

        Args:
            text: Текст строки
            rules: Таблицы правил

        Returns:
            (category, remainder) - category None если префикса нет
        """
        match = rules.category_prefix_re.match(text)
        if match:
            return match.group(1).strip(), text[match.end():].strip()

        generic = self._GENERIC_COLON_RE.match(text)
        if generic:
            before = generic.group(1).strip()
            after = generic.group(2).strip()
            is_qty_prefix = bool(rules.shared_qty_phrase_re.match(before))
            if not is_qty_prefix and ("," in after or self._AND_WORD_RE.search(after)):
                logger.debug(f"[PrefixExtractor] Ad-hoc category: '{before}'")
                return before, after

        return None, text

    def extract_shared_qty(self, text: str, rules: RulesConfig) -> Tuple[Optional[str], str]:
        """
        Извлекает общее количество ("1 bag each:") для всех товаров строки.

        Returns:
            (shared_qty, remainder)
        """
        match = rules.shared_qty_re.match(text)
        if match:
            return match.group(1).strip(), text[match.end():].strip()
        return None, text
