"""
Домен Lookup (D2): Поиск отдела магазина для товаров списка.

Вход: contracts.ParsedItem (от D1)
Выход: contracts.ResolvedItem (для D3)

Кеш (JSON) проверяется до обращения к API и обновляется после.
"""

from .aisle_parser import AisleTextParser
from .cache import LookupCache
from .resolver import LocationResolver, ResolutionResult
from .storefront_client import StorefrontClient

__all__ = [
    "AisleTextParser",
    "LookupCache",
    "LocationResolver",
    "ResolutionResult",
    "StorefrontClient",
]
