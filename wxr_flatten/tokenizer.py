"""
Streaming XML tokenizer.
Turns well-formed XML text into a flat list of open/close/complete/text events.
"""

import dataclasses
import logging
from typing import List, Optional
from xml.parsers import expat

from .errors import StructureError
from .models import EventKind, ParseEvent

logger = logging.getLogger(__name__)

NO_ELEMENTS_CODE = expat.errors.codes[expat.errors.XML_ERROR_NO_ELEMENTS]


class _EventCollector:
    """Expat handler state for one tokenize() call."""

    def __init__(self, case_folding: bool, skip_white: bool):
        self.case_folding = case_folding
        self.skip_white = skip_white
        self.events: List[ParseEvent] = []
        self._text: List[str] = []
        # Index of the last open event that has not seen a child element yet
        self._pending: Optional[int] = None

    def _fold(self, name: str) -> str:
        return name.upper() if self.case_folding else name

    def _take_text(self) -> Optional[str]:
        text = ''.join(self._text)
        self._text = []
        if not text or (self.skip_white and not text.strip()):
            return None
        return text

    def _flush_text(self) -> None:
        """Attach buffered text to the pending open event, or emit it."""
        text = self._take_text()
        if text is None:
            return
        if self._pending is not None:
            opened = self.events[self._pending]
            self.events[self._pending] = dataclasses.replace(opened, value=text)
        else:
            self.events.append(ParseEvent(EventKind.TEXT, value=text))

    def start(self, name: str, attrs: dict) -> None:
        self._flush_text()
        attributes = {self._fold(k): v for k, v in attrs.items()} or None
        self.events.append(ParseEvent(EventKind.OPEN, self._fold(name), None, attributes))
        self._pending = len(self.events) - 1

    def end(self, name: str) -> None:
        if self._pending is not None and self._pending == len(self.events) - 1:
            # No child element since the open: this is a leaf
            text = self._take_text()
            opened = self.events[-1]
            self.events[-1] = dataclasses.replace(opened, kind=EventKind.COMPLETE, value=text)
        else:
            self._pending = None
            self._flush_text()
            self.events.append(ParseEvent(EventKind.CLOSE, self._fold(name)))
        self._pending = None

    def data(self, text: str) -> None:
        self._text.append(text)


class XMLTokenizer:
    """Tokenize XML text with expat, keeping prefixed tag names opaque."""

    def __init__(self, case_folding: bool = False, skip_white: bool = True):
        """
        Initialize tokenizer.

        Args:
            case_folding: Upper-case tag and attribute names
            skip_white: Drop text made only of whitespace
        """
        self.case_folding = case_folding
        self.skip_white = skip_white

    def tokenize(self, xml_text: str) -> List[ParseEvent]:
        """
        Tokenize a well-formed XML string.

        Args:
            xml_text: XML document text

        Returns:
            Events in document order (empty if the document has no elements)

        Raises:
            StructureError: If expat rejects the document
        """
        if not xml_text or not xml_text.strip():
            return []

        collector = _EventCollector(self.case_folding, self.skip_white)
        # No namespace_separator: "wp:postmeta" is reported as-is
        parser = expat.ParserCreate()
        parser.buffer_text = True
        parser.StartElementHandler = collector.start
        parser.EndElementHandler = collector.end
        parser.CharacterDataHandler = collector.data

        try:
            parser.Parse(xml_text, True)
        except expat.ExpatError as e:
            if e.code == NO_ELEMENTS_CODE and not collector.events:
                logger.debug("Document contains no elements")
                return []
            raise StructureError(
                f"Tokenizer rejected input at line {e.lineno}, column {e.offset}: "
                f"{expat.ErrorString(e.code)}"
            ) from e

        logger.debug(f"Tokenized {len(collector.events)} events")
        return collector.events


def tokenize(xml_text: str, case_folding: bool = False, skip_white: bool = True) -> List[ParseEvent]:
    """Tokenize XML text with a one-off XMLTokenizer."""
    return XMLTokenizer(case_folding, skip_white).tokenize(xml_text)
