"""
Location Resolver - Привязка расположения к товарам списка.

ЦКП: ResolvedItem для каждого товара (директивы пропускаются).

Алгоритм:
1. Кеш по lookup_term
2. Источник расположения (ILocationProvider)
3. Ошибка источника -> Unknown (без записи в кеш)
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional
from loguru import logger

from contracts.d1_parsing_dto import ParsedItem
from contracts.d2_lookup_dto import AisleLocation, ResolvedItem

from .cache import LookupCache
from .domain.exceptions import LocationLookupError
from .domain.interfaces import ILocationProvider


@dataclass
class ResolutionResult:
    """
    Результат привязки расположений.

    ЦКП: Товары с расположением в порядке списка.
    """
    resolved: List[ResolvedItem] = field(default_factory=list)
    cached_count: int = 0
    failed_count: int = 0

    @property
    def found_count(self) -> int:
        return sum(1 for r in self.resolved if not r.location.is_unknown)

    @property
    def unknown_count(self) -> int:
        return sum(1 for r in self.resolved if r.location.is_unknown)

    def to_dict(self) -> dict:
        return {
            "resolved": [r.model_dump() for r in self.resolved],
            "found_count": self.found_count,
            "unknown_count": self.unknown_count,
            "cached_count": self.cached_count,
            "failed_count": self.failed_count,
        }


class LocationResolver:
    """
    Резолвер расположений.

    Использует:
    - LookupCache: ранее найденные расположения
    - ILocationProvider: источник (storefront API)
    """

    def __init__(self, provider: ILocationProvider, cache: Optional[LookupCache] = None):
        """
        Args:
            provider: Источник расположения
            cache: Кеш (опционально)
        """
        self.provider = provider
        self.cache = cache

    def resolve(self, items: Iterable[ParsedItem]) -> ResolutionResult:
        """
        Находит расположение для каждого товара.

        Args:
            items: Записи парсинга (директивы и записи без названия пропускаются)

        Returns:
            ResolutionResult
        """
        shopping_items = [item for item in items if item.name and not item.is_directive]
        total = len(shopping_items)
        result = ResolutionResult()

        for index, item in enumerate(shopping_items, 1):
            term = item.lookup_term or ""
            from_cache = False
            cached = self.cache.get(term) if self.cache is not None and term else None

            if not term:
                location = AisleLocation.unknown()
                logger.info(f"[LocationResolver] [{index}/{total}] '{item.name}' -> Unknown (пустой ключ)")
            elif cached is not None:
                location = cached
                from_cache = True
                result.cached_count += 1
                logger.info(f"[LocationResolver] [{index}/{total}] {term} -> {location.display} (cached)")
            else:
                location = self._locate(term, index, total, result)

            result.resolved.append(ResolvedItem(item=item, location=location, from_cache=from_cache))

        logger.info(
            f"[LocationResolver] {total} товаров: {result.found_count} найдено, "
            f"{result.unknown_count} unknown ({result.cached_count} из кеша)"
        )
        return result

    def _locate(self, term: str, index: int, total: int, result: ResolutionResult) -> AisleLocation:
        try:
            location = self.provider.locate(term)
        except LocationLookupError as e:
            result.failed_count += 1
            logger.warning(f"[LocationResolver] [{index}/{total}] {term} -> ERROR: {e.message}")
            return AisleLocation.unknown()

        if self.cache is not None:
            self.cache.set(term, location)
        logger.info(f"[LocationResolver] [{index}/{total}] {term} -> {location.display}")
        return location
