"""
Unit-тесты для AisleTextParser.

ЦКП: Текст расположения из API -> отдел + полка.
"""

import pytest

from aislewalk.lookup import AisleTextParser
from contracts.d2_lookup_dto import UNKNOWN_AISLE


@pytest.fixture
def parser():
    return AisleTextParser()


@pytest.mark.parametrize("raw,aisle,bay", [
    ("12B", "Aisle 12", "B"),
    ("5", "Aisle 5", ""),
    ("05", "Aisle 5", ""),
    ("AISLE 5", "Aisle 5", ""),
    ("Aisle 12B", "Aisle 12", "B"),
    ("AISLE5", "Aisle 5", ""),
    ("PRODUCE", "Produce", ""),
    ("DAIRY/KOSHER - LEFT", "Dairy", "LEFT"),
    ("DAIRY", "Dairy", ""),
    ("HBC", "Health & Beauty", ""),
    ("APPY", "Deli", ""),
    ("FROZEN 3", "Frozen", "3"),
    ("INTERNATIONAL CHEESE", "International Cheese", ""),
])
def test_parse_known_formats(parser, raw, aisle, bay):
    location = parser.parse(raw)

    assert location.aisle == aisle
    assert location.bay == bay


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_empty_is_unknown(parser, raw):
    location = parser.parse(raw)

    assert location.aisle == UNKNOWN_AISLE
    assert location.is_unknown


def test_unrecognized_text_is_title_cased(parser):
    location = parser.parse("garden center")

    assert location.aisle == "Garden Center"
    assert location.bay == ""
