"""
WXR conversion orchestrator.
Coordinates reading, sanitizing, tokenizing, tree building, item location,
flattening and column reconciliation for one export file.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .config_loader import DEFAULT_SANITIZER_OPTIONS, ConverterConfig, merge_config
from .errors import WXRError
from .flattener import flatten_items
from .item_locator import find_items
from .models import Element, FlattenRules, ParseEvent, Record
from .reconciler import Reconciler
from .sanitizer import XMLSanitizer
from .tokenizer import XMLTokenizer
from .tree_builder import build_tree
from .utils import safe_read_file

logger = logging.getLogger(__name__)


def records_from_events(events: Iterable[ParseEvent],
                        rules: FlattenRules = None) -> List[Record]:
    """
    Run the core pipeline on tokenizer events.

    Args:
        events: Tokenizer events
        rules: Tag names to match (WordPress defaults if None)

    Returns:
        Uniform records, one per located item
    """
    rules = rules or FlattenRules()
    tree = build_tree(events)
    items = find_items(tree, rules.item_tag)
    return Reconciler.reconcile(flatten_items(items, rules))


def convert_string(xml_text: str, config: ConverterConfig = None) -> List[Record]:
    """Convert WXR text held in memory."""
    config = config or ConverterConfig()
    options = merge_config(DEFAULT_SANITIZER_OPTIONS, config.sanitizer_options)
    sanitized = XMLSanitizer(options).sanitize(xml_text)
    events = XMLTokenizer(config.case_folding, config.skip_white).tokenize(sanitized)
    return records_from_events(events, config.effective_rules)


class WXRParser:
    """Parse a WordPress export file into uniform records."""

    def __init__(self,
                 file_path: Path = None,
                 sanitizer_options: Optional[Mapping[str, Any]] = None,
                 config: ConverterConfig = None):
        """
        Initialize parser.

        Args:
            file_path: Path to the WXR file (falls back to config.source)
            sanitizer_options: Sanitizer overrides, applied over config overrides
            config: Converter settings
        """
        config = config or ConverterConfig()
        if sanitizer_options:
            config = config.with_sanitizer_options(sanitizer_options)

        file_path = file_path or config.source
        if file_path is None:
            raise ValueError("No source file given")

        self.config = config
        self.file_path = Path(file_path)
        self._sanitizer_config = merge_config(DEFAULT_SANITIZER_OPTIONS, config.sanitizer_options)

        self._xml_string: Optional[str] = None
        self._events: Optional[List[ParseEvent]] = None
        self._tree: Optional[Element] = None
        self._items: Optional[List[Record]] = None

    def get_file(self) -> Path:
        """Get the path to the XML file."""
        return self.file_path

    def get_sanitizer_config(self) -> Dict[str, Any]:
        """Get the complete sanitizer configuration (defaults merged with overrides)."""
        return dict(self._sanitizer_config)

    def _get_xml_string(self) -> str:
        if self._xml_string is None:
            raw = safe_read_file(self.file_path, self.config.source_encoding)
            logger.debug(f"Read {len(raw)} characters from {self.file_path.name}")
            self._xml_string = XMLSanitizer(self._sanitizer_config).sanitize(raw)
        return self._xml_string

    def _get_events(self) -> List[ParseEvent]:
        if self._events is None:
            tokenizer = XMLTokenizer(self.config.case_folding, self.config.skip_white)
            self._events = tokenizer.tokenize(self._get_xml_string())
        return self._events

    def _get_tree(self) -> Element:
        if self._tree is None:
            self._tree = build_tree(self._get_events())
        return self._tree

    def get_items(self) -> List[Record]:
        """
        Get the uniform records of every item in the export.

        Returns:
            Records sharing one column set, in document order

        Raises:
            SanitizationError, EmptyDocumentError, StructureError: with `source` set
            FileNotFoundError: If the file does not exist
        """
        if self._items is not None:
            return self._items

        logger.info(f"Parsing WXR: {self.file_path.name}")
        rules = self.config.effective_rules

        try:
            items = find_items(self._get_tree(), rules.item_tag)
            records = flatten_items(items, rules)
            self._items = Reconciler.reconcile(records)
        except WXRError as e:
            e.source = str(self.file_path)
            logger.error(f"Failed to convert {self.file_path.name}: {e.message}")
            raise

        logger.info(f"Converted {len(self._items)} items from {self.file_path.name}")
        return self._items

    def get_columns(self) -> List[str]:
        """Column names of the converted records."""
        return Reconciler.collect_keys(self.get_items())
