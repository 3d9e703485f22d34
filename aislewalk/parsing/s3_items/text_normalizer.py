"""
Text Normalizer - Нормализация текста товара.

ЦКП: Заметки из скобок, раскрытие сокращённой записи, оформление названия.

SRP: Только текстовые преобразования, без извлечения количества.
"""

import re
from typing import List, Tuple

from ..rules.config_loader import RulesConfig


def collapse_whitespace(text: str) -> str:
    """Схлопывает пробелы внутри строки и обрезает края."""
    return " ".join(text.split())


class TextNormalizer:
    """Нормализатор текста товара."""

    _NOTES_RE = re.compile(r"\(([^)]+)\)")
    _HALF_AND_HALF_RES = (
        re.compile(r"1/2\s*&\s*1/2", re.IGNORECASE),
        re.compile(r"1/2\s+and\s+1/2", re.IGNORECASE),
    )
    _DOZEN_PREFIX_RE = re.compile(r"^dz\b\s*", re.IGNORECASE)

    def extract_notes(self, text: str) -> Tuple[str, str]:
        """
        Извлекает заметки из скобок.

        Непарные скобки остаются в тексте как есть.

        Returns:
            (text_without_notes, notes) - заметки через "; "
        """
        notes: List[str] = []

        def _collect(match: re.Match) -> str:
            notes.append(match.group(1).strip())
            return ""

        cleaned = self._NOTES_RE.sub(_collect, text).strip()
        return cleaned, "; ".join(notes)

    def normalize_shorthand(self, text: str) -> Tuple[str, bool]:
        """
        Раскрывает сокращённую запись.

        - "1/2 & 1/2", "1/2 and 1/2" -> "half and half"
        - "Dz eggs" -> "eggs" + флаг дюжины

        Returns:
            (text, dozen)
        """
        for pattern in self._HALF_AND_HALF_RES:
            text = pattern.sub("half and half", text)

        dozen = False
        if self._DOZEN_PREFIX_RE.match(text):
            dozen = True
            text = self._DOZEN_PREFIX_RE.sub("", text, count=1).strip()

        return text, dozen

    def expand_abbreviation(self, name: str, rules: RulesConfig) -> str:
        """Заменяет название целиком, если оно совпадает с сокращением ("oj")."""
        return rules.abbreviations.get(name.lower().strip(), name)

    def finish_name(self, name: str) -> str:
        """Схлопывает пробелы; название в нижнем регистре - с заглавной буквы."""
        name = collapse_whitespace(name)
        if name == name.lower():
            name = name[:1].upper() + name[1:]
        return name
