"""
Unit-тесты для LookupCache.

ЦКП: Найденные расположения переживают перезапуск, Unknown не сохраняется.
"""

import json

import pytest

from aislewalk.lookup import LookupCache
from aislewalk.lookup.domain.exceptions import LookupCacheError
from contracts.d2_lookup_dto import AisleLocation


@pytest.fixture
def cache_path(tmp_path):
    return tmp_path / "cache.json"


def test_missing_file_gives_empty_cache(cache_path):
    cache = LookupCache(cache_path, "592").load()

    assert len(cache) == 0
    assert cache.get("milk") is None


def test_save_and_reload(cache_path):
    cache = LookupCache(cache_path, "592").load()
    cache.set("milk", AisleLocation(aisle="Dairy", bay=""))
    cache.set("tuna", AisleLocation(aisle="Aisle 5", bay="B"))
    cache.save()

    reloaded = LookupCache(cache_path, "592").load()

    assert len(reloaded) == 2
    assert reloaded.get("tuna") == AisleLocation(aisle="Aisle 5", bay="B")


def test_keys_are_normalized(cache_path):
    cache = LookupCache(cache_path, "592")
    cache.set("  Milk ", AisleLocation(aisle="Dairy"))

    assert "milk" in cache
    assert cache.get("MILK").aisle == "Dairy"


def test_unknown_not_persisted(cache_path):
    cache = LookupCache(cache_path, "592").load()
    cache.set("mystery", AisleLocation.unknown())
    cache.set("milk", AisleLocation(aisle="Dairy"))

    # В памяти Unknown доступен (не повторяем запрос в этом запуске)
    assert cache.get("mystery").is_unknown

    cache.save()
    data = json.loads(cache_path.read_text(encoding="utf-8"))

    assert data == {"592": {"milk": {"aisle": "Dairy", "bay": ""}}}


def test_other_stores_preserved(cache_path):
    cache_path.write_text(
        json.dumps({"601": {"bread": {"aisle": "Bakery", "bay": ""}}}), encoding="utf-8"
    )

    cache = LookupCache(cache_path, "592").load()
    assert len(cache) == 0

    cache.set("milk", AisleLocation(aisle="Dairy"))
    cache.save()

    data = json.loads(cache_path.read_text(encoding="utf-8"))
    assert data["601"] == {"bread": {"aisle": "Bakery", "bay": ""}}
    assert data["592"] == {"milk": {"aisle": "Dairy", "bay": ""}}


def test_corrupt_file_gives_empty_cache(cache_path):
    cache_path.write_text("{not json", encoding="utf-8")

    cache = LookupCache(cache_path, "592").load()

    assert len(cache) == 0


def test_invalid_entries_skipped(cache_path):
    cache_path.write_text(
        json.dumps({"592": {"milk": {"aisle": "Dairy"}, "bad": "Aisle 1", "empty": {"aisle": ""}}}),
        encoding="utf-8",
    )

    cache = LookupCache(cache_path, "592").load()

    assert len(cache) == 1
    assert cache.get("milk").bay == ""


def test_save_failure_raises(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("file, not a directory", encoding="utf-8")

    cache = LookupCache(blocker / "cache.json", "592")
    cache.set("milk", AisleLocation(aisle="Dairy"))

    with pytest.raises(LookupCacheError):
        cache.save()
