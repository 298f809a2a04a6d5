"""Tests for the expat-based tokenizer."""

import pytest

from wxr_flatten.errors import StructureError
from wxr_flatten.models import EventKind, ParseEvent
from wxr_flatten.tokenizer import XMLTokenizer, tokenize


class TestTokenizerEvents:
    """Test the shape of emitted events."""

    def test_leaf_elements_become_complete_events(self) -> None:
        """Test elements without child elements are reported as complete."""
        events = tokenize('<a><b x="1">t</b><c/></a>')

        assert events == [
            ParseEvent(EventKind.OPEN, 'a'),
            ParseEvent(EventKind.COMPLETE, 'b', 't', {'x': '1'}),
            ParseEvent(EventKind.COMPLETE, 'c'),
            ParseEvent(EventKind.CLOSE, 'a'),
        ]

    def test_leading_text_is_open_value_and_trailing_text_is_text_event(self) -> None:
        """Test text before the first child is the value, text after it is a text event."""
        events = tokenize('<a>lead<b/>tail</a>')

        assert events[0] == ParseEvent(EventKind.OPEN, 'a', 'lead')
        assert events[2] == ParseEvent(EventKind.TEXT, value='tail')
        assert events[3] == ParseEvent(EventKind.CLOSE, 'a')

    def test_whitespace_text_is_skipped(self) -> None:
        """Test pure whitespace produces no values or text events."""
        events = tokenize('<a>\n  <b>1</b>\n</a>')

        assert [e.kind for e in events] == [EventKind.OPEN, EventKind.COMPLETE, EventKind.CLOSE]
        assert events[0].value is None

    def test_whitespace_kept_when_skip_white_disabled(self) -> None:
        """Test whitespace is reported when skip_white is off."""
        events = XMLTokenizer(skip_white=False).tokenize('<a>\n  <b>1</b>\n</a>')

        assert events[0].value == '\n  '
        assert events[2] == ParseEvent(EventKind.TEXT, value='\n')

    def test_cdata_content_is_element_value(self) -> None:
        """Test CDATA sections are read as text."""
        events = tokenize('<a><![CDATA[<p>hi</p>]]></a>')

        assert events == [ParseEvent(EventKind.COMPLETE, 'a', '<p>hi</p>')]

    def test_prefixed_names_are_kept_opaque(self) -> None:
        """Test namespace prefixes stay part of the tag name."""
        events = tokenize('<rss xmlns:wp="urn:wp"><wp:postmeta><wp:meta_key>k</wp:meta_key></wp:postmeta></rss>')

        assert [e.tag for e in events] == ['rss', 'wp:postmeta', 'wp:meta_key', 'wp:postmeta', 'rss']
        assert events[0].attributes == {'xmlns:wp': 'urn:wp'}

    def test_case_folding_upper_cases_tags_and_attribute_names(self) -> None:
        """Test case folding applies to tags and attribute names, not values."""
        events = XMLTokenizer(case_folding=True).tokenize('<wp:Post Id="Abc">Text</wp:Post>')

        assert events == [ParseEvent(EventKind.COMPLETE, 'WP:POST', 'Text', {'ID': 'Abc'})]


class TestTokenizerEdgeCases:
    """Test empty and malformed input."""

    @pytest.mark.parametrize('text', ['', '   \n', '<?xml version="1.0"?>'])
    def test_document_without_elements_yields_no_events(self, text: str) -> None:
        """Test documents without elements produce an empty event list."""
        assert tokenize(text) == []

    def test_malformed_input_raises_structure_error(self) -> None:
        """Test expat errors surface as StructureError."""
        with pytest.raises(StructureError, match='line 1'):
            tokenize('<a><b></a>')
