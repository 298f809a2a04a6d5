"""
Base exporter interface and common functionality.
Abstract base for all format-specific exporters.
"""

import logging
from pathlib import Path
from typing import List, Dict, Any, Optional
from abc import ABC, abstractmethod
from datetime import datetime

from .models import Record
from .reconciler import Reconciler

logger = logging.getLogger(__name__)


class Exporter(ABC):
    """Abstract base exporter class."""

    def __init__(self, output_dir: Path):
        """
        Initialize exporter.

        Args:
            output_dir: Directory for export files
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    @abstractmethod
    def export(self, records: List[Record], filename: str, **options) -> Optional[Path]:
        """
        Export records to file.

        Args:
            records: Uniform records
            filename: Output filename
            **options: Format-specific options

        Returns:
            Path to exported file, or None if there was nothing to export
        """
        pass

    def _columns(self, records: List[Record], fields: Optional[List[str]] = None) -> List[str]:
        """Requested fields, or every column in first-seen order."""
        if fields:
            return list(fields)
        return Reconciler.collect_keys(records)

    def _extract_fields(self, record: Record, columns: List[str]) -> Dict[str, Any]:
        """Pick columns from a record; absent columns map to None."""
        return {c: record.get(c) for c in columns}

    def _log_export(self, filename: str, record_count: int):
        """Log export completion."""
        logger.info(f"Exported {record_count} records to {filename}")


class ExportStats:
    """Export operation statistics."""

    def __init__(self):
        self.total_records = 0
        self.export_count = 0
        self.start_time = datetime.now()

    def add_export(self, records: List[Record]):
        """Record export statistics."""
        self.total_records += len(records)
        self.export_count += 1

    def get_duration(self) -> float:
        """Get duration in seconds."""
        return (datetime.now() - self.start_time).total_seconds()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict."""
        return {
            'total_records': self.total_records,
            'export_count': self.export_count,
            'duration_seconds': self.get_duration()
        }
