"""
Интерфейсы (абстрактные классы) для домена Lookup.
"""

from abc import ABC, abstractmethod

from contracts.d2_lookup_dto import AisleLocation


class ILocationProvider(ABC):
    """Интерфейс для источников расположения товара (домен Lookup)."""

    @abstractmethod
    def locate(self, term: str) -> AisleLocation:
        """
        Находит отдел магазина для товара.

        Args:
            term: Поисковый ключ (ParsedItem.lookup_term)

        Returns:
            AisleLocation (Unknown если товар не найден)

        Raises:
            LocationLookupError: Если источник недоступен
        """
        pass
