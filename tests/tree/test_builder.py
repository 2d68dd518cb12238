"""Tests for the document helpers in dom_delta.tree.builder.

Covers:
- strip_tag_whitespace removes formatting whitespace around tags
- parse_document accepts str and bytes (declared encodings included),
  rejects malformed or undecodable input
- select_forest returns the selected entries in document order
- log_nodes writes one INFO record per node
"""

from __future__ import annotations

import logging

import pytest

from dom_delta.exceptions import DocumentParseError, DomDeltaError
from dom_delta.tree.builder import (
    log_nodes,
    parse_document,
    select_forest,
    strip_tag_whitespace,
)

NUTRITION = """
<nutrition>
    <food>
        <name>Avocado Dip</name>
        <mfr>Sunnydale</mfr>
    </food>
    <food>
        <name>Bagels, New York Style</name>
        <mfr>Thompson</mfr>
    </food>
</nutrition>
"""


class TestStripTagWhitespace:
    def test_removes_whitespace_between_tags(self) -> None:
        assert strip_tag_whitespace("<a>\n  <b>x</b>\n</a>") == "<a><b>x</b></a>"

    def test_keeps_inner_text_spacing(self) -> None:
        assert strip_tag_whitespace("<a>New York Style</a>") == "<a>New York Style</a>"


class TestParseDocument:
    def test_parses_str(self) -> None:
        root = parse_document(NUTRITION)
        assert root.tag == "nutrition"
        assert root.text is None

    def test_parses_bytes_with_declaration(self) -> None:
        text = b'<?xml version="1.0" encoding="UTF-8"?>\n<nutrition><food/></nutrition>'
        root = parse_document(text)
        assert len(root) == 1

    def test_parses_str_with_declaration(self) -> None:
        text = (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            "<nutrition>\n  <food/>\n</nutrition>"
        )
        root = parse_document(text)
        assert root.tag == "nutrition"
        assert len(root) == 1

    def test_bytes_honour_declared_encoding(self) -> None:
        text = (
            '<?xml version="1.0" encoding="ISO-8859-1"?>\n'
            "<nutrition>\n  <food>Crème brûlée</food>\n</nutrition>"
        ).encode("iso-8859-1")
        root = parse_document(text)
        assert root.findtext("food") == "Crème brûlée"

    def test_undecodable_bytes_raise_parse_error(self) -> None:
        with pytest.raises(DocumentParseError):
            parse_document(b"<n>\xff\xfe</n>")

    def test_malformed_xml_raises(self) -> None:
        with pytest.raises(DocumentParseError):
            parse_document("<nutrition><food></nutrition>")

    def test_parse_error_is_library_error(self) -> None:
        with pytest.raises(DomDeltaError):
            parse_document("not xml")


class TestSelectForest:
    def test_selects_entries_in_order(self) -> None:
        foods = select_forest(parse_document(NUTRITION), "//nutrition/food")
        assert [f.findtext("name") for f in foods] == [
            "Avocado Dip",
            "Bagels, New York Style",
        ]

    def test_no_match_is_empty(self) -> None:
        assert select_forest(parse_document(NUTRITION), "//nutrition/drink") == []


class TestLogNodes:
    def test_one_record_per_node(self, caplog: pytest.LogCaptureFixture) -> None:
        foods = select_forest(parse_document(NUTRITION), "//nutrition/food")
        logger = logging.getLogger("tests.log_nodes")
        with caplog.at_level(logging.INFO, logger="tests.log_nodes"):
            log_nodes(foods, logger)
        assert len(caplog.records) == 2
        assert caplog.records[0].getMessage().startswith("<food><name>Avocado Dip")
