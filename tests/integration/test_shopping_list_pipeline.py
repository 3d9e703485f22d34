"""
Интеграционные тесты полного пайплайна Aislewalk.

End-to-end тест: текстовый список -> разбор -> поиск отделов (через кеш) -> Markdown.

Источник расположения подменён на словарь в памяти: тесты не обращаются к сети.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Dict, List

import pytest

from aislewalk.lookup import LookupCache
from aislewalk.lookup.domain.interfaces import ILocationProvider
from aislewalk.parsing.domain.exceptions import ShoppingListFileNotFoundError
from aislewalk.pipeline import ShoppingListPipeline
from aislewalk.rendering import MarkdownRenderer
from contracts.d2_lookup_dto import AisleLocation


SHOPPING_LIST = """Fruits: apples and bananas
3-4 avocados (dark green ones)
Dz eggs x2

Aisle 5: pasta, surprise us
4 cans tuna

Frozen section
peas
mystery item
"""

STORE_LOCATIONS = {
    "apples": AisleLocation(aisle="Produce"),
    "bananas": AisleLocation(aisle="Produce"),
    "avocados": AisleLocation(aisle="Produce", bay="B"),
    "eggs": AisleLocation(aisle="Dairy"),
    "pasta": AisleLocation(aisle="Aisle 5", bay="A"),
    "tuna": AisleLocation(aisle="Aisle 5", bay="C"),
    "peas": AisleLocation(aisle="Frozen"),
}

GENERATED_AT = datetime(2026, 2, 14, 9, 30)


class DictProvider(ILocationProvider):
    """Источник расположения из словаря (запоминает запросы)."""

    def __init__(self, locations: Dict[str, AisleLocation]):
        self.locations = locations
        self.calls: List[str] = []

    def locate(self, term: str) -> AisleLocation:
        self.calls.append(term)
        return self.locations.get(term, AisleLocation.unknown())


@pytest.fixture
def list_file(tmp_path) -> Path:
    path = tmp_path / "list.txt"
    path.write_text(SHOPPING_LIST, encoding="utf-8")
    return path


def make_pipeline(tmp_path: Path, provider: ILocationProvider) -> ShoppingListPipeline:
    return ShoppingListPipeline(
        provider=provider,
        cache=LookupCache(tmp_path / "cache.json", "592"),
        renderer=MarkdownRenderer(store_id="592", store_label="South Plainfield, NJ"),
        store_id="592",
    )


@pytest.mark.integration
class TestShoppingListPipeline:
    """Полный прогон списка."""

    def test_markdown_written_next_to_list(self, tmp_path, list_file):
        provider = DictProvider(STORE_LOCATIONS)
        run = make_pipeline(tmp_path, provider).run(list_file, generated_at=GENERATED_AT)

        assert run.output_path == tmp_path / "Feb-14.md"
        assert run.output_path.read_text(encoding="utf-8") == run.render.markdown

    def test_walk_order_and_counts(self, tmp_path, list_file):
        provider = DictProvider(STORE_LOCATIONS)
        run = make_pipeline(tmp_path, provider).run(list_file, generated_at=GENERATED_AT)
        lines = run.render.markdown.splitlines()

        headings = [line for line in lines if line.startswith("## ")]
        assert headings == ["## Produce", "## Aisle 5", "## Dairy", "## Frozen", "## Unknown"]

        assert "- [ ] Avocados ×3-4 — B *(dark green ones)*" in lines
        assert "- [ ] Eggs ×2 dozen" in lines
        assert "- [ ] Tuna ×4 cans — C" in lines
        assert "- [ ] Mystery item" in lines

        assert run.render.found_count == 7
        assert run.render.unknown_count == 1
        assert len(run.parsed.directives) == 1

    def test_directive_not_looked_up(self, tmp_path, list_file):
        provider = DictProvider(STORE_LOCATIONS)
        make_pipeline(tmp_path, provider).run(list_file, generated_at=GENERATED_AT)

        assert "surprise us" not in provider.calls
        assert len(provider.calls) == 8

    def test_cache_reused_on_second_run(self, tmp_path, list_file):
        first = DictProvider(STORE_LOCATIONS)
        make_pipeline(tmp_path, first).run(list_file, generated_at=GENERATED_AT)

        cached = json.loads((tmp_path / "cache.json").read_text(encoding="utf-8"))
        assert cached["592"]["tuna"] == {"aisle": "Aisle 5", "bay": "C"}
        assert "mystery item" not in cached["592"]

        second = DictProvider(STORE_LOCATIONS)
        run = make_pipeline(tmp_path, second).run(list_file, generated_at=GENERATED_AT)

        # Только Unknown запрашивается повторно
        assert second.calls == ["mystery item"]
        assert run.resolution.cached_count == 7

    def test_notes_only_line_skipped(self, tmp_path):
        """Строка из одних заметок не ищется, не считается и не рендерится."""
        list_file = tmp_path / "notes.txt"
        list_file.write_text("(ask at counter)\nmilk\n", encoding="utf-8")
        provider = DictProvider({"milk": AisleLocation(aisle="Dairy")})

        run = make_pipeline(tmp_path, provider).run(list_file, generated_at=GENERATED_AT)

        assert provider.calls == ["milk"]
        assert [i.name for i in run.parsed.shopping_items] == ["Milk"]
        assert run.parsed.metrics["items_count"] == 1
        assert "## Unknown" not in run.render.markdown
        assert "- [ ]  *(ask at counter)*" not in run.render.markdown

    def test_output_dir(self, tmp_path, list_file):
        out_dir = tmp_path / "out"
        run = make_pipeline(tmp_path, DictProvider(STORE_LOCATIONS)).run(
            list_file, output_dir=out_dir, generated_at=GENERATED_AT
        )

        assert run.output_path == out_dir / "Feb-14.md"
        assert run.output_path.exists()

    def test_missing_list_file(self, tmp_path):
        with pytest.raises(ShoppingListFileNotFoundError):
            make_pipeline(tmp_path, DictProvider({})).run(tmp_path / "missing.txt")
