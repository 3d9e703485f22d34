"""
DTO контракт: D2 (Lookup) -> D3 (Rendering)

Расположение товара в магазине (отдел + полка) и товар с привязанным расположением.
"""

from pydantic import BaseModel, ConfigDict, Field

from .d1_parsing_dto import ParsedItem

# Отдел для товаров, расположение которых определить не удалось
UNKNOWN_AISLE = "Unknown"


class AisleLocation(BaseModel):
    """
    Расположение товара: отдел ("Aisle 5", "Dairy") и полка/секция ("B").
    """

    aisle: str = Field(UNKNOWN_AISLE, description="Название отдела")
    bay: str = Field("", description="Полка / уточнение внутри отдела")

    model_config = ConfigDict(frozen=True, from_attributes=True)

    @classmethod
    def unknown(cls) -> "AisleLocation":
        return cls(aisle=UNKNOWN_AISLE, bay="")

    @property
    def is_unknown(self) -> bool:
        return self.aisle == UNKNOWN_AISLE

    @property
    def display(self) -> str:
        return f"{self.aisle} {self.bay}" if self.bay else self.aisle


class ResolvedItem(BaseModel):
    """
    Товар списка с найденным (или неизвестным) расположением.
    """

    item: ParsedItem
    location: AisleLocation = Field(default_factory=AisleLocation.unknown)
    from_cache: bool = Field(False, description="Расположение взято из кеша")

    model_config = ConfigDict(frozen=True, from_attributes=True)
