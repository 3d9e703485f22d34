"""
Доменный слой Lookup: интерфейсы и исключения.
"""

from .interfaces import ILocationProvider
from .exceptions import (
    LocationLookupError,
    LookupRequestError,
    LookupResponseError,
    LookupCacheError,
)

__all__ = [
    "ILocationProvider",
    "LocationLookupError",
    "LookupRequestError",
    "LookupResponseError",
    "LookupCacheError",
]
