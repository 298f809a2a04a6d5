"""
JSON exporter for flattened records.
Supports both JSON array and JSONL (newline-delimited) formats.
"""

import logging
from pathlib import Path
from typing import List, Optional
import json

from .models import Record
from .exporter import Exporter

logger = logging.getLogger(__name__)


class JSONExporter(Exporter):
    """Export records to JSON format."""

    def export(self, records: List[Record], filename: str, **options) -> Optional[Path]:
        """
        Export records to JSON.

        Args:
            records: Uniform records
            filename: Output filename
            **options:
                - fields: List of columns to include
                - format: 'array' (default) or 'jsonl' (newline-delimited)
                - pretty: Pretty print JSON (array format only)
                - indent: Indentation level (default: 2)

        Returns:
            Path to exported JSON file
        """
        fields = options.get('fields')
        json_format = options.get('format', 'array')
        pretty = options.get('pretty', True)
        indent = options.get('indent', 2) if pretty else None

        if not records:
            logger.warning("No records to export")
            return None

        output_path = self.output_dir / filename
        columns = self._columns(records, fields)

        try:
            if json_format == 'jsonl':
                self._export_jsonl(output_path, records, columns)
            else:
                self._export_array(output_path, records, columns, indent)

            self._log_export(filename, len(records))
            return output_path

        except Exception as e:
            logger.error(f"Error exporting JSON: {e}")
            raise

    def _export_array(self, output_path: Path, records: List[Record],
                      columns: List[str], indent: Optional[int]):
        """Export as JSON array."""
        data = [self._extract_fields(record, columns) for record in records]

        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=indent, ensure_ascii=False)

    def _export_jsonl(self, output_path: Path, records: List[Record], columns: List[str]):
        """Export as JSONL (newline-delimited JSON)."""
        with open(output_path, 'w', encoding='utf-8') as f:
            for record in records:
                f.write(json.dumps(self._extract_fields(record, columns), ensure_ascii=False) + '\n')
