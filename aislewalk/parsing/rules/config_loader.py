"""
Config Loader для правил разбора списка покупок.

ЦКП: Загрузка единой модели RulesConfig (словари + скомпилированные паттерны).

Архитектурный принцип:
- Все списки слов и паттерны - данные, а не ветки кода
- base.yaml поставляется с пакетом, пользовательский YAML переопределяет ключи
- Списки пользовательского YAML наследуют базовые через $extends
- RulesConfig неизменяем и кешируется на процесс
"""

import re
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, ClassVar, Dict, Mapping, Optional, Pattern, Tuple

import yaml
from loguru import logger

from ..domain.exceptions import RulesConfigurationError, RulesFileNotFoundError


BASE_RULES_FILE = Path(__file__).parent / "base.yaml"

_MAPPING_KEYS = ("abbreviations",)
_LIST_KEYS = (
    "and_compounds",
    "directive_patterns",
    "header_patterns",
    "category_nouns",
    "shared_qty_units",
    "qty_units",
    "strip_prefixes",
    "strip_suffixes",
)


@dataclass(frozen=True)
class RulesConfig:
    """
    Неизменяемые таблицы правил для всех этапов разбора.

    - abbreviations: расшифровка сокращений (всё название целиком)
    - and_compounds: составные фразы, которые нельзя делить по "and"
    - directive_patterns / header_patterns: упорядоченные паттерны
    - category_prefix_re / shared_qty_re / leading_qty_re: собраны из списков слов
    - strip_prefixes / strip_suffixes: очистка поискового ключа
    """
    abbreviations: Mapping[str, str]
    and_compounds: Tuple[str, ...]
    directive_patterns: Tuple[Pattern[str], ...]
    header_patterns: Tuple[Pattern[str], ...]
    category_prefix_re: Pattern[str]
    shared_qty_re: Pattern[str]
    shared_qty_phrase_re: Pattern[str]
    leading_qty_re: Pattern[str]
    strip_prefixes: Tuple[str, ...]
    strip_suffixes: Tuple[Pattern[str], ...]

    def is_directive(self, text: str) -> bool:
        return any(p.search(text) for p in self.directive_patterns)

    def is_header(self, text: str) -> bool:
        return any(p.search(text) for p in self.header_patterns)

    def contains_compound(self, text: str) -> bool:
        lower = text.lower()
        return any(compound in lower for compound in self.and_compounds)


class ConfigLoader:
    """
    Загрузчик правил.

    Собирает RulesConfig из base.yaml и (опционально) пользовательского YAML.
    """

    _cache: ClassVar[Dict[str, RulesConfig]] = {}

    def __init__(self, overlay_path: Optional[Path] = None, base_path: Optional[Path] = None):
        """
        Args:
            overlay_path: Пользовательский YAML с правилами (опционально)
            base_path: Базовый YAML (по умолчанию base.yaml рядом с модулем)
        """
        self.overlay_path = Path(overlay_path) if overlay_path else None
        self.base_path = Path(base_path) if base_path else BASE_RULES_FILE

    def load(self) -> RulesConfig:
        """Загружает правила (с кешем на процесс)."""
        cache_key = f"{self.base_path.resolve()}|{self.overlay_path.resolve() if self.overlay_path else ''}"
        if cache_key in self._cache:
            return self._cache[cache_key]

        base_config = self._read_yaml(self.base_path)
        config_data = dict(base_config)

        if self.overlay_path is not None:
            overlay = self._read_yaml(self.overlay_path)
            config_data = self._merge(base_config, overlay)

        rules = self._build(config_data)
        self._cache[cache_key] = rules

        logger.debug(
            f"[ConfigLoader] Загружены правила: "
            f"{len(rules.abbreviations)} abbreviations, "
            f"{len(rules.and_compounds)} and_compounds, "
            f"{len(rules.header_patterns)} header_patterns"
            + (f" (overlay: {self.overlay_path.name})" if self.overlay_path else "")
        )
        return rules

    @classmethod
    def clear_cache(cls) -> None:
        cls._cache.clear()

    @staticmethod
    def _read_yaml(path: Path) -> dict:
        """Читает YAML файл в словарь."""
        if not path.exists():
            raise RulesFileNotFoundError(
                message=f"Файл правил не найден: {path}",
                component="ConfigLoader"
            )

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise RulesConfigurationError(
                message=f"Некорректный YAML: {path}",
                component="ConfigLoader",
                original_error=e
            )

        if not isinstance(data, dict):
            raise RulesConfigurationError(
                message=f"Ожидался словарь на верхнем уровне: {path}",
                component="ConfigLoader"
            )
        return data

    @classmethod
    def _resolve_extends(cls, value: Any, base_config: dict) -> Any:
        """
        Обрабатывает наследование через $extends для списков.
        Поддерживает форматы:
        - Строка: "$extends: key"
        - Словарь: {"$extends": "key"} (автоматически из YAML без кавычек)
        """
        if not isinstance(value, list):
            return value

        result = []
        for item in value:
            extended_key = None

            if isinstance(item, str) and item.startswith("$extends:"):
                extended_key = item.split(":", 1)[1].strip()
            elif isinstance(item, dict) and "$extends" in item:
                extended_key = item["$extends"]

            if extended_key:
                extended = base_config.get(extended_key, [])
                if not extended:
                    logger.warning(f"[ConfigLoader] Ключ '{extended_key}' для $extends не найден в base.yaml")
                else:
                    logger.debug(f"[ConfigLoader] Inheriting {len(extended)} items for '{extended_key}'")
                result.extend(extended)
            else:
                result.append(item)
        return result

    @classmethod
    def _merge(cls, base_config: dict, overlay: dict) -> dict:
        """Накладывает пользовательский YAML на базовый."""
        merged = dict(base_config)
        for key, value in overlay.items():
            if key in _MAPPING_KEYS and isinstance(value, dict):
                merged[key] = {**base_config.get(key, {}), **value}
            else:
                merged[key] = cls._resolve_extends(value, base_config)
        return merged

    @classmethod
    def _build(cls, config_data: dict) -> RulesConfig:
        """Валидирует типы и компилирует паттерны."""
        for key in _LIST_KEYS:
            if not isinstance(config_data.get(key, []), list):
                raise RulesConfigurationError(
                    message=f"Ключ '{key}' должен быть списком",
                    component="ConfigLoader"
                )
        for key in _MAPPING_KEYS:
            if not isinstance(config_data.get(key, {}), dict):
                raise RulesConfigurationError(
                    message=f"Ключ '{key}' должен быть словарём",
                    component="ConfigLoader"
                )

        def strings(key: str) -> Tuple[str, ...]:
            return tuple(str(item) for item in config_data.get(key, []))

        abbreviations = {
            str(k).lower().strip(): str(v)
            for k, v in config_data.get("abbreviations", {}).items()
        }
        category_nouns = "|".join(strings("category_nouns")) or r"(?!)"
        shared_units = "|".join(re.escape(u) for u in strings("shared_qty_units")) or r"(?!)"
        qty_units = "|".join(strings("qty_units")) or r"(?!)"

        try:
            return RulesConfig(
                abbreviations=MappingProxyType(abbreviations),
                and_compounds=tuple(c.lower() for c in strings("and_compounds")),
                directive_patterns=tuple(
                    re.compile(p, re.IGNORECASE) for p in strings("directive_patterns")
                ),
                header_patterns=tuple(
                    re.compile(p, re.IGNORECASE) for p in strings("header_patterns")
                ),
                category_prefix_re=re.compile(
                    rf"^({category_nouns})\s*(?:\([^)]*\)\s*)?:", re.IGNORECASE
                ),
                shared_qty_re=re.compile(
                    rf"^(\d+\s+(?:{shared_units})s?\s+each)\s*:\s*", re.IGNORECASE
                ),
                shared_qty_phrase_re=re.compile(
                    rf"^\d+\s+(?:{shared_units})s?\s+each$", re.IGNORECASE
                ),
                leading_qty_re=re.compile(
                    rf"^(\d+[-–]?\d*)\s+({qty_units})\s+(.+)", re.IGNORECASE
                ),
                strip_prefixes=tuple(p.lower() for p in strings("strip_prefixes")),
                strip_suffixes=tuple(
                    re.compile(p, re.IGNORECASE) for p in strings("strip_suffixes")
                ),
            )
        except re.error as e:
            raise RulesConfigurationError(
                message="Некорректный regex в правилах",
                component="ConfigLoader",
                original_error=e
            )
