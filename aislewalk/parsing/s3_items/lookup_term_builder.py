"""
Lookup Term Builder - Построение поискового ключа.

ЦКП: Нормализованный ключ для поиска отдела и кеша ("yellow or white potatoes" -> "potatoes").
"""

import re

from ..rules.config_loader import RulesConfig
from .text_normalizer import collapse_whitespace


class LookupTermBuilder:
    """
    Построитель поискового ключа.

    Шаги (порядок фиксирован):
    1. Альтернативы "A or B" -> одно существительное
    2. Прилагательные в начале (strip_prefixes)
    3. Уточнения в конце (strip_suffixes)
    4. "veggies" -> "vegetables"
    5. Пробелы + нижний регистр
    """

    _OR_RE = re.compile(r"^(.+?)\s+or\s+(.+)$", re.IGNORECASE)
    _VEGGIES_RE = re.compile(r"\bveggies\b", re.IGNORECASE)

    def build(self, name: str, rules: RulesConfig) -> str:
        term = self.resolve_alternatives(name)
        term = self.strip_prefixes(term, rules)
        term = self.strip_suffixes(term, rules)
        term = self._VEGGIES_RE.sub("vegetables", term)
        return self.normalize(term)

    def resolve_alternatives(self, text: str) -> str:
        """
        "A or B" -> одно существительное.

        - общее последнее слово: "yellow potatoes or white potatoes" -> "potatoes"
        - B из нескольких слов: "yellow or white potatoes" -> "potatoes"
        - A из нескольких слов: "dark chocolate or milk" -> "chocolate"
        - иначе B целиком: "tea or coffee" -> "coffee"
        """
        match = self._OR_RE.match(text)
        if not match:
            return text

        left_words = match.group(1).split()
        right_words = match.group(2).split()
        last_left = left_words[-1].lower()
        last_right = right_words[-1].lower()

        if last_left == last_right:
            return last_right
        if len(right_words) > 1:
            return right_words[-1]
        if len(left_words) > 1:
            return left_words[-1]
        return match.group(2).strip()

    def strip_prefixes(self, term: str, rules: RulesConfig) -> str:
        # Каждый префикс проверяется один раз, по порядку таблицы
        for prefix in rules.strip_prefixes:
            if term.lower().startswith(prefix + " "):
                term = term[len(prefix):].strip()
        return term

    def strip_suffixes(self, term: str, rules: RulesConfig) -> str:
        for pattern in rules.strip_suffixes:
            term = pattern.sub("", term, count=1).strip()
        return term

    @staticmethod
    def normalize(term: str) -> str:
        """Пробелы + нижний регистр (идемпотентно)."""
        return collapse_whitespace(term).lower()
