"""
Data models for the WXR flattening pipeline.
Defines parse events, the element tree and flat records using dataclasses.
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Any, Dict, List, Optional
from enum import Enum


class EventKind(str, Enum):
    """Kind of a tokenizer event."""
    OPEN = "open"
    CLOSE = "close"
    COMPLETE = "complete"
    TEXT = "text"
    OTHER = "other"


@dataclass(frozen=True)
class ParseEvent:
    """A single token emitted by the XML tokenizer."""
    kind: EventKind
    tag: Optional[str] = None
    value: Optional[str] = None
    attributes: Optional[Dict[str, str]] = None


@dataclass
class Element:
    """A node of the reconstructed document tree."""
    tag: Optional[str]  # None only for the synthetic document root
    value: Optional[str] = None
    attributes: Optional[Dict[str, str]] = None

    @property
    def is_leaf(self) -> bool:
        return not isinstance(self, BranchElement)


@dataclass
class LeafElement(Element):
    """Element built from a `complete` event. Has no children."""


@dataclass
class BranchElement(Element):
    """Element built from an `open` event. May hold zero or more children."""
    children: List[Element] = field(default_factory=list)


# A flat row: column name -> value, or NULL_MARKER where the item had no value
Record = Dict[str, Optional[str]]

NULL_MARKER = None


@dataclass(frozen=True)
class FlattenRules:
    """Tag names the flattener and locator match against."""
    item_tag: str = "item"
    category_tag: str = "category"
    category_domain_attribute: str = "domain"
    postmeta_tag: str = "wp:postmeta"
    meta_key_tag: str = "wp:meta_key"
    meta_value_tag: str = "wp:meta_value"

    def folded(self) -> "FlattenRules":
        """Upper-cased rules, for documents tokenized with case folding."""
        return FlattenRules(**{k: v.upper() for k, v in asdict(self).items()})


@dataclass
class ConversionSummary:
    """Result of converting one export file."""
    source: str
    file_id: str  # SHA256 hash of file content
    started_at: datetime
    completed_at: Optional[datetime] = None
    item_count: int = 0
    columns: List[str] = field(default_factory=list)
    output_path: Optional[str] = None
    export_stats: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        d = asdict(self)
        d['started_at'] = self.started_at.isoformat()
        if self.completed_at:
            d['completed_at'] = self.completed_at.isoformat()
        d['column_count'] = len(self.columns)
        return d
