"""
Контракты DTO между доменами проекта Aislewalk.

Все контракты используют Pydantic v2 для валидации.

Контракты:
- D1 -> D2: ShoppingListDTO, ParsedItem (d1_parsing_dto.py)
- D2 -> D3: AisleLocation, ResolvedItem (d2_lookup_dto.py)
"""

# D1 -> D2 (Parsing -> Lookup)
from .d1_parsing_dto import ParsedItem, ShoppingListDTO

# D2 -> D3 (Lookup -> Rendering)
from .d2_lookup_dto import AisleLocation, ResolvedItem, UNKNOWN_AISLE

__all__ = [
    # D1 -> D2
    "ParsedItem",
    "ShoppingListDTO",
    # D2 -> D3
    "AisleLocation",
    "ResolvedItem",
    "UNKNOWN_AISLE",
]
