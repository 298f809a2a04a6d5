"""
Flatten one WXR <item> subtree into a single record.
Child elements become columns, attributes become derived columns,
categories are grouped per domain and post-meta pairs become columns.
"""

import logging
from typing import Dict, List, Optional

from .models import BranchElement, FlattenRules, Record

logger = logging.getLogger(__name__)

# ASCII whitespace and NUL only; non-breaking spaces are content
TRIM_CHARS = " \t\n\r\0\x0b"


def trim_value(value: Optional[str]) -> str:
    """Trim a scalar value; a missing value becomes an empty string."""
    if value is None:
        return ''
    return value.strip(TRIM_CHARS)


class ItemFlattener:
    """Builds a flat record from an item element."""

    def __init__(self, rules: FlattenRules = None):
        """
        Initialize flattener.

        Args:
            rules: Tag names to match (WordPress defaults if None)
        """
        self.rules = rules or FlattenRules()

    def flatten(self, item: BranchElement) -> Record:
        """
        Flatten an item element.

        Args:
            item: Branch element located by the item locator

        Returns:
            Record with trimmed string values
        """
        values: Dict[str, Optional[str]] = {}
        values.update(self._build_item_values(item))
        values.update(self._build_categories(item))
        values.update(self._build_post_meta(item))

        return {key: trim_value(value) for key, value in values.items()}

    def _build_item_values(self, item: BranchElement) -> Dict[str, Optional[str]]:
        """Direct child values plus attribute-derived columns; last occurrence wins."""
        skipped = (self.rules.category_tag, self.rules.postmeta_tag)
        values = {}

        for child in item.children:
            if child.tag in skipped:
                continue

            values[child.tag] = child.value

            if child.attributes:
                values.update(self._build_attribute_values(child.tag, child.attributes))

        return values

    @staticmethod
    def _build_attribute_values(tag: str, attributes: Dict[str, str]) -> Dict[str, str]:
        return {f"{tag}_{key}": value for key, value in attributes.items()}

    def _build_categories(self, item: BranchElement) -> Dict[str, str]:
        """Comma-joined category names, one column per domain."""
        domain_attr = self.rules.category_domain_attribute
        grouped: Dict[str, List[str]] = {}

        for child in item.children:
            if child.tag != self.rules.category_tag or not child.attributes:
                continue
            domain = child.attributes.get(domain_attr)
            if domain is None:
                continue
            grouped.setdefault(domain, []).append(child.value or '')

        return {f"category_{domain}": ','.join(names) for domain, names in grouped.items()}

    def _build_post_meta(self, item: BranchElement) -> Dict[str, str]:
        """Key/value pairs from post-meta containers; empty keys are dropped."""
        post_meta = {}

        for child in item.children:
            if child.tag != self.rules.postmeta_tag or not isinstance(child, BranchElement):
                continue

            key = ''
            value = ''
            for entry in child.children:
                if entry.tag == self.rules.meta_key_tag:
                    key = entry.value or ''
                elif entry.tag == self.rules.meta_value_tag:
                    value = entry.value or ''

            if key:
                post_meta[key] = value
            else:
                logger.debug("Skipping post-meta entry without a key")

        return post_meta


def flatten_item(item: BranchElement, rules: FlattenRules = None) -> Record:
    """Flatten a single item element."""
    return ItemFlattener(rules).flatten(item)


def flatten_items(items: List[BranchElement], rules: FlattenRules = None) -> List[Record]:
    """Flatten items in document order."""
    flattener = ItemFlattener(rules)
    return [flattener.flatten(item) for item in items]
