"""
Доменный слой Parsing: исключения.
"""

from .exceptions import (
    ParsingError,
    RulesConfigurationError,
    RulesFileNotFoundError,
    ShoppingListFileNotFoundError,
)

__all__ = [
    "ParsingError",
    "RulesConfigurationError",
    "RulesFileNotFoundError",
    "ShoppingListFileNotFoundError",
]
