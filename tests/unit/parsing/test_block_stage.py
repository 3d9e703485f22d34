"""
Unit-тесты для Stage 1: Block Classification.

ЦКП: Проверка заголовков секций, наследования секции и встроенного текста.
"""

import pytest

from aislewalk.parsing.s1_blocks import BlockStage, BlockKind


@pytest.fixture
def stage():
    return BlockStage()


class TestBlockClassification:
    """Тесты разбиения текста на блоки."""

    def test_blank_lines_dropped(self, stage):
        result = stage.process("milk\n\n   \neggs\n")

        assert [b.text for b in result.blocks] == ["milk", "eggs"]
        assert result.skipped_lines == 2

    def test_only_line_feeds_split(self, stage):
        """Разделители кроме LF и CRLF (U+2028, \\x0c, \\x85) не делят строку."""
        result = stage.process("milk\u2028eggs\x0cbread\r\ncheese\x85ham")

        assert [b.text for b in result.blocks] == ["milk\u2028eggs\x0cbread", "cheese\x85ham"]

    def test_lines_trimmed(self, stage):
        result = stage.process("   bread   ")

        assert result.blocks[0].text == "bread"
        assert result.blocks[0].raw == "bread"

    def test_section_is_none_before_first_header(self, stage):
        result = stage.process("milk")

        assert result.blocks[0].section is None
        assert result.blocks[0].kind == BlockKind.ITEMS

    def test_header_not_emitted_as_block(self, stage):
        result = stage.process("Frozen section\nice cream")

        assert len(result.blocks) == 1
        assert result.headers == ["Frozen section"]

    def test_section_propagation(self, stage):
        """Заголовок задаёт секцию для всех строк до следующего заголовка."""
        text = "Frozen section\nice cream\npeas\ncorn\nDairy section\nmilk"
        result = stage.process(text)

        sections = [(b.text, b.section) for b in result.blocks]
        assert sections == [
            ("ice cream", "Frozen section"),
            ("peas", "Frozen section"),
            ("corn", "Frozen section"),
            ("milk", "Dairy section"),
        ]

    def test_header_inline_items(self, stage):
        """Текст после двоеточия заголовка - отдельный блок с новой секцией."""
        result = stage.process("Aisle 5: pasta, sauce")

        assert len(result.blocks) == 1
        block = result.blocks[0]
        assert block.kind == BlockKind.ITEMS
        assert block.text == "pasta, sauce"
        assert block.section == "Aisle 5"
        assert block.raw == "Aisle 5: pasta, sauce"

    def test_header_inline_directive(self, stage):
        result = stage.process("Aisle 7: surprise us")

        assert result.blocks[0].kind == BlockKind.DIRECTIVE
        assert result.blocks[0].text == "surprise us"

    def test_header_without_inline_text(self, stage):
        result = stage.process("Aisle 12:\ncheerios")

        assert [b.text for b in result.blocks] == ["cheerios"]
        assert result.blocks[0].section == "Aisle 12"

    def test_header_case_insensitive(self, stage):
        result = stage.process("BACK OF THE STORE\nmilk")

        assert result.blocks[0].section == "BACK OF THE STORE"

    def test_non_header_colon_line_is_items(self, stage):
        result = stage.process("Fruits: apples, pears")

        assert result.headers == []
        assert result.blocks[0].text == "Fruits: apples, pears"


class TestSectionLabel:
    """Тесты формирования названия секции."""

    @pytest.mark.parametrize("line,expected", [
        ("Aisle 5: pasta", "Aisle 5"),
        ("Aisle 12 (cereal aisle): Cheerios", "Aisle 12"),
        ("Frozen section (last)", "Frozen section"),
        ("Across back wall", "Across back wall"),
        ("Last aisle:   ", "Last aisle"),
    ])
    def test_section_label(self, stage, line, expected):
        assert stage.section_label(line) == expected

    def test_parenthetical_header_keeps_inline_text(self, stage):
        result = stage.process("Aisle 12 (cereal aisle): Cheerios")

        assert result.blocks[0].text == "Cheerios"
        assert result.blocks[0].section == "Aisle 12"
