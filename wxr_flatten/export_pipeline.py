"""
Export pipeline orchestrator.
Picks the exporter for a format and keeps export statistics.
"""

import logging
from pathlib import Path
from typing import List, Dict, Any, Optional

from .models import Record
from .exporter import ExportStats
from .csv_exporter import CSVExporter
from .excel_exporter import ExcelExporter
from .json_exporter import JSONExporter

logger = logging.getLogger(__name__)


class ExportPipeline:
    """Orchestrates export operations across all formats."""

    EXPORTERS = {
        'csv': CSVExporter,
        'excel': ExcelExporter,
        'json': JSONExporter,
        'jsonl': JSONExporter,
    }

    EXTENSIONS = {
        'csv': 'csv',
        'excel': 'xlsx',
        'json': 'json',
        'jsonl': 'jsonl',
    }

    def __init__(self, output_dir: Path):
        """
        Initialize export pipeline.

        Args:
            output_dir: Base output directory
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.stats = ExportStats()

    def default_filename(self, source: Path, format: str) -> str:
        """Output filename derived from the source file name."""
        return f"{Path(source).stem}.{self.EXTENSIONS[format]}"

    def export_records(self, records: List[Record], format: str, filename: str,
                       **options) -> Optional[Path]:
        """
        Export records in specified format.

        Args:
            records: Uniform records
            format: Export format ('csv', 'excel', 'json', 'jsonl')
            filename: Output filename
            **options: Format-specific options

        Returns:
            Path to exported file
        """
        if format not in self.EXPORTERS:
            raise ValueError(f"Unsupported export format: {format}")

        if format == 'jsonl':
            options['format'] = 'jsonl'

        exporter = self.EXPORTERS[format](self.output_dir)

        logger.info(f"Exporting {len(records)} records to {format.upper()}: {filename}")

        export_path = exporter.export(records, filename, **options)
        self.stats.add_export(records)

        return export_path

    def get_export_stats(self) -> Dict[str, Any]:
        """Get export statistics."""
        return self.stats.to_dict()
