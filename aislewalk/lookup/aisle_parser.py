"""
Aisle Text Parser - Разбор текста расположения из API магазина.

ЦКП: AisleLocation из строк вида "12B", "AISLE 5", "DAIRY/KOSHER - LEFT".
"""

import re
from typing import Optional

from contracts.d2_lookup_dto import AisleLocation


# Порядок значим: длинные названия раньше коротких ("DAIRY/KOSHER" до "DAIRY")
DEPARTMENTS = [
    "INTERNATIONAL CHEESE", "CUSTOMER SERVICE", "DAIRY/KOSHER",
    "PRODUCE", "BAKERY", "BACKWALL", "DELI", "APPY", "MEAT", "SEAFOOD",
    "FROZEN", "PHARMACY", "FLORAL", "BREAD", "DAIRY", "HBC", "NATURAL",
    "KOSHER", "GROCERY", "BULK",
]

DEPT_DISPLAY = {
    "DAIRY/KOSHER": "Dairy",
    "DAIRY": "Dairy",
    "PRODUCE": "Produce",
    "BAKERY": "Bakery",
    "DELI": "Deli",
    "APPY": "Deli",
    "MEAT": "Meat",
    "SEAFOOD": "Seafood",
    "FROZEN": "Frozen",
    "PHARMACY": "Pharmacy",
    "FLORAL": "Floral",
    "BREAD": "Bread",
    "HBC": "Health & Beauty",
    "NATURAL": "Natural",
    "KOSHER": "Kosher",
    "GROCERY": "Grocery",
    "BULK": "Bulk",
    "INTERNATIONAL CHEESE": "International Cheese",
    "CUSTOMER SERVICE": "Customer Service",
    "BACKWALL": "Backwall",
}


class AisleTextParser:
    """Элемент-функция: текст отдела из API -> AisleLocation."""

    def __init__(self):
        self.aisle_prefix_pattern = re.compile(r'^Aisle\s+', re.IGNORECASE)
        # Паттерн: AISLE5 (после снятия префикса "Aisle ")
        self.aisle_word_pattern = re.compile(r'^AISLE\s*(\d+)$', re.IGNORECASE)
        # Паттерн: 12B
        self.aisle_number_pattern = re.compile(r'^(\d+)([A-Za-z]?)$')
        self.bay_separator_pattern = re.compile(r'^[/,;:\-]+\s*')

    def parse(self, raw: Optional[str]) -> AisleLocation:
        if not raw or not raw.strip():
            return AisleLocation.unknown()

        text = self.aisle_prefix_pattern.sub("", raw.strip()).strip()

        match = self.aisle_word_pattern.match(text)
        if match:
            return AisleLocation(aisle=f"Aisle {int(match.group(1))}", bay="")

        match = self.aisle_number_pattern.match(text)
        if match:
            return AisleLocation(aisle=f"Aisle {int(match.group(1))}", bay=match.group(2))

        upper = text.upper()
        for dept in DEPARTMENTS:
            if upper.startswith(dept):
                remainder = self.bay_separator_pattern.sub("", text[len(dept):].strip()).strip()
                aisle_name = DEPT_DISPLAY.get(dept, dept.capitalize())
                return AisleLocation(aisle=aisle_name, bay=remainder)

        title_cased = " ".join(word.capitalize() for word in text.split())
        return AisleLocation(aisle=title_cased, bay="")
