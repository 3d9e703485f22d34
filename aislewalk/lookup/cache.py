"""
Lookup Cache - Дисковый кеш найденных расположений.

ЦКП: Повторный запуск не обращается к API за уже найденными товарами.

Формат файла (JSON):
    {"<store_id>": {"<lookup_term>": {"aisle": "Aisle 5", "bay": "B"}}}

Сохраняются только найденные расположения (не Unknown).
"""

import json
from pathlib import Path
from typing import Dict, Optional
from loguru import logger

from contracts.d2_lookup_dto import AisleLocation

from .domain.exceptions import LookupCacheError


class LookupCache:
    """Кеш расположений для одного магазина."""

    def __init__(self, path: Path, store_id: str):
        """
        Args:
            path: Путь к JSON файлу кеша
            store_id: Номер магазина (ключ верхнего уровня)
        """
        self.path = Path(path)
        self.store_id = store_id
        self._entries: Dict[str, AisleLocation] = {}
        self._all_stores: Dict[str, dict] = {}

    @staticmethod
    def key(term: str) -> str:
        return term.lower().strip()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, term: str) -> bool:
        return self.key(term) in self._entries

    def load(self) -> "LookupCache":
        """
        Загружает кеш с диска.

        Отсутствующий файл - пустой кеш; повреждённый файл - предупреждение и пустой кеш.
        """
        self._entries = {}
        self._all_stores = {}

        if not self.path.exists():
            logger.debug(f"[LookupCache] Файл кеша не найден, старт с пустого: {self.path}")
            return self

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (IOError, OSError, json.JSONDecodeError) as e:
            logger.warning(f"[LookupCache] Не удалось прочитать кеш {self.path}: {e}")
            return self

        if not isinstance(data, dict):
            logger.warning(f"[LookupCache] Неожиданный формат кеша: {self.path}")
            return self

        self._all_stores = data
        for term, value in (data.get(self.store_id) or {}).items():
            if isinstance(value, dict) and value.get("aisle"):
                self._entries[self.key(term)] = AisleLocation(
                    aisle=str(value["aisle"]), bay=str(value.get("bay", ""))
                )

        logger.debug(f"[LookupCache] Загружено {len(self._entries)} записей для магазина {self.store_id}")
        return self

    def get(self, term: str) -> Optional[AisleLocation]:
        return self._entries.get(self.key(term))

    def set(self, term: str, location: AisleLocation) -> None:
        self._entries[self.key(term)] = location

    def save(self) -> Path:
        """
        Сохраняет кеш (только найденные расположения).

        Записи других магазинов сохраняются без изменений.

        Raises:
            LookupCacheError: Если не удалось записать файл
        """
        store_data = {
            term: {"aisle": location.aisle, "bay": location.bay}
            for term, location in self._entries.items()
            if not location.is_unknown
        }
        all_stores = {**self._all_stores, self.store_id: store_data}

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(all_stores, f, ensure_ascii=False, indent=2)
        except (IOError, OSError, TypeError) as e:
            raise LookupCacheError(
                message=f"Не удалось сохранить кеш: {self.path}",
                component="LookupCache",
                original_error=e
            )

        self._all_stores = all_stores
        logger.debug(f"[LookupCache] Сохранено {len(store_data)} записей: {self.path}")
        return self.path
