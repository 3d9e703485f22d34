"""
DTO контракт: D1 (Parsing) -> D2 (Lookup) / D3 (Rendering)

Результат разбора свободного списка покупок.
Содержит товары и пропущенные "директивы" в порядке исходного текста.

ИНВАРИАНТ: у каждой записи задано ровно одно из полей name / directive.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ParsedItem(BaseModel):
    """
    Запись списка покупок - товар или директива ("surprise us").
    """

    raw: str = Field(..., description="Исходная строка списка (для трассировки)")
    name: str | None = Field(None, description="Отображаемое название (None для директивы)")
    qty: str = Field("", description="Количество в свободной форме, '' если нет")
    notes: str = Field("", description="Заметки из скобок через '; '")
    lookup_term: str | None = Field(
        None, description="Нормализованный поисковый ключ в нижнем регистре (None для директивы)"
    )
    category: str | None = Field(None, description="Категория строки ('Fruits:')")
    section: str | None = Field(None, description="Секция из заголовка ('Frozen section')")
    directive: str | None = Field(None, description="Пропущенная расплывчатая фраза")

    model_config = ConfigDict(frozen=True, from_attributes=True)

    @field_validator("lookup_term")
    @classmethod
    def validate_lookup_term(cls, v: str | None) -> str | None:
        if v is None:
            return v
        if v != v.lower():
            raise ValueError(f"lookup_term must be lowercase: '{v}'")
        if " ".join(v.split()) != v:
            raise ValueError(f"lookup_term must be whitespace-normalized: '{v}'")
        return v

    @model_validator(mode="after")
    def validate_name_or_directive(self) -> "ParsedItem":
        if (self.name is None) == (self.directive is None):
            raise ValueError("Exactly one of name / directive must be set")
        if (self.lookup_term is None) != (self.directive is not None):
            raise ValueError("lookup_term must be set for items and empty for directives")
        return self

    @property
    def is_directive(self) -> bool:
        return self.directive is not None


class ShoppingListDTO(BaseModel):
    """
    DTO для результата парсинга списка покупок.

    Это output парсинг-слоя.
    Передается в слой поиска отделов, затем в рендеринг.
    """

    items: list[ParsedItem] = Field(
        default_factory=list, description="Товары и директивы в порядке исходного текста"
    )
    source_file: str | None = Field(None, description="Имя исходного файла")
    metrics: dict[str, int] = Field(
        default_factory=dict, description="Метрики парсинга (количество блоков, записей)"
    )

    model_config = ConfigDict(frozen=True, from_attributes=True)

    @property
    def shopping_items(self) -> list[ParsedItem]:
        """Только товары (без директив и записей без названия)."""
        return [item for item in self.items if item.name and not item.is_directive]

    @property
    def directives(self) -> list[ParsedItem]:
        """Только пропущенные директивы."""
        return [item for item in self.items if item.is_directive]
