"""
Repair ill-formed XML into well-formed XML text.
Runs lxml in recover mode and serializes the repaired tree.
"""

import logging
import re
from html.entities import name2codepoint
from typing import Any, Dict, Mapping

from lxml import etree

from .errors import SanitizationError

logger = logging.getLogger(__name__)

# Characters outside the XML 1.0 Char production
CONTROL_CHARS_RE = re.compile('[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]')


class XMLSanitizer:
    """Repair XML with lxml. Options are forwarded to lxml.etree.XMLParser."""

    # Consumed here rather than passed to the lxml parser
    OWN_OPTIONS = ('strip_control_chars', 'ascii_chars')

    def __init__(self, options: Mapping[str, Any] = None):
        """
        Initialize sanitizer.

        Args:
            options: Sanitizer options (see config_loader.DEFAULT_SANITIZER_OPTIONS)
        """
        self.options = dict(options or {})

    def _parser_options(self) -> Dict[str, Any]:
        parser_options = {k: v for k, v in self.options.items() if k not in self.OWN_OPTIONS}
        # Input is always handed to lxml as UTF-8 bytes
        parser_options['encoding'] = 'utf-8'
        return parser_options

    def sanitize(self, raw_xml: str) -> str:
        """
        Repair an XML string.

        Args:
            raw_xml: Possibly ill-formed XML text

        Returns:
            Well-formed XML text, or '' for blank input

        Raises:
            SanitizationError: If no well-formed document can be produced
        """
        if not raw_xml or not raw_xml.strip():
            return ''

        if self.options.get('strip_control_chars', False):
            raw_xml, removed = CONTROL_CHARS_RE.subn('', raw_xml)
            if removed:
                logger.info(f"Removed {removed} control characters")

        try:
            parser = etree.XMLParser(**self._parser_options())
        except TypeError as e:
            raise SanitizationError(f"Unsupported sanitizer option: {e}") from e

        try:
            root = etree.fromstring(raw_xml.encode('utf-8'), parser)
        except etree.XMLSyntaxError as e:
            raise SanitizationError(f"Failed to repair XML: {e}") from e

        if root is None:
            raise SanitizationError("Failed to repair XML: no root element recovered")

        for entry in parser.error_log:
            logger.debug(f"Repaired: {entry.message} (line {entry.line})")

        resolved = _resolve_entities(root)
        if resolved:
            logger.info(f"Resolved {resolved} undeclared entity references")

        if self.options.get('ascii_chars', False):
            return etree.tostring(root, encoding='us-ascii', xml_declaration=False).decode('ascii')
        return etree.tostring(root, encoding='unicode')


def _replace_with_text(node: etree._Element, text: str) -> None:
    """Remove a node, keeping its tail and putting text in its place."""
    text += node.tail or ''
    parent = node.getparent()
    previous = node.getprevious()
    if previous is not None:
        previous.tail = (previous.tail or '') + text
    else:
        parent.text = (parent.text or '') + text
    parent.remove(node)


def _resolve_entities(root: etree._Element) -> int:
    """
    Replace entity reference nodes with their characters.

    Recover mode keeps references such as &nbsp; that no DTD declares.
    HTML names become their character and unknown names are dropped.
    """
    entities = list(root.iter(etree.Entity))
    for entity in entities:
        codepoint = name2codepoint.get(entity.name)
        if codepoint is None:
            logger.debug(f"Dropping unknown entity &{entity.name};")
            _replace_with_text(entity, '')
        else:
            _replace_with_text(entity, chr(codepoint))
    return len(entities)


def sanitize(raw_xml: str, options: Mapping[str, Any] = None) -> str:
    """Repair XML text with the given options."""
    return XMLSanitizer(options).sanitize(raw_xml)
