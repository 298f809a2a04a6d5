"""
CSV exporter for flattened records.
"""

import logging
from pathlib import Path
from typing import List, Optional
import csv

from .models import Record
from .exporter import Exporter

logger = logging.getLogger(__name__)


class CSVExporter(Exporter):
    """Export records to CSV format."""

    def export(self, records: List[Record], filename: str, **options) -> Optional[Path]:
        """
        Export records to CSV.

        Args:
            records: Uniform records
            filename: Output filename
            **options:
                - fields: List of column names to include
                - delimiter: Field delimiter (default ',')

        Returns:
            Path to exported CSV file
        """
        fields = options.get('fields')
        delimiter = options.get('delimiter', ',')

        if not records:
            logger.warning("No records to export")
            return None

        output_path = self.output_dir / filename
        columns = self._columns(records, fields)

        try:
            with open(output_path, 'w', newline='', encoding='utf-8') as f:
                # None is written as an empty cell
                writer = csv.DictWriter(f, fieldnames=columns, restval='',
                                        extrasaction='ignore', delimiter=delimiter)
                writer.writeheader()

                for record in records:
                    writer.writerow(self._extract_fields(record, columns))

            self._log_export(filename, len(records))
            return output_path

        except Exception as e:
            logger.error(f"Error exporting CSV: {e}")
            raise
