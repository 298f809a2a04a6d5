"""
WordPress WXR flattening package.
"""

__version__ = "0.1.0"
__author__ = "Automation Team"

from .models import (
    EventKind,
    ParseEvent,
    Element,
    LeafElement,
    BranchElement,
    Record,
    NULL_MARKER,
    FlattenRules,
    ConversionSummary,
)
from .errors import (
    WXRError,
    SanitizationError,
    EmptyDocumentError,
    StructureError,
)
from .config_loader import (
    ConfigLoader,
    ConverterConfig,
    DEFAULT_SANITIZER_OPTIONS,
    merge_config,
)
from .logging_setup import setup_logging, get_logger
from .sanitizer import XMLSanitizer, sanitize
from .tokenizer import XMLTokenizer, tokenize
from .tree_builder import TreeBuilder, build_tree
from .item_locator import find_items, iter_items
from .flattener import ItemFlattener, flatten_item, flatten_items
from .reconciler import Reconciler, reconcile
from .wxr_parser import WXRParser, convert_string, records_from_events

__all__ = [
    'EventKind',
    'ParseEvent',
    'Element',
    'LeafElement',
    'BranchElement',
    'Record',
    'NULL_MARKER',
    'FlattenRules',
    'ConversionSummary',
    'WXRError',
    'SanitizationError',
    'EmptyDocumentError',
    'StructureError',
    'ConfigLoader',
    'ConverterConfig',
    'DEFAULT_SANITIZER_OPTIONS',
    'merge_config',
    'setup_logging',
    'get_logger',
    'XMLSanitizer',
    'sanitize',
    'XMLTokenizer',
    'tokenize',
    'TreeBuilder',
    'build_tree',
    'find_items',
    'iter_items',
    'ItemFlattener',
    'flatten_item',
    'flatten_items',
    'Reconciler',
    'reconcile',
    'WXRParser',
    'convert_string',
    'records_from_events',
]
