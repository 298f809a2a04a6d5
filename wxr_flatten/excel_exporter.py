"""
Excel exporter for flattened records.
Writes one styled worksheet with a frozen header row.
"""

import logging
from pathlib import Path
from typing import List, Optional
from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Font, PatternFill, Alignment
from openpyxl.utils import get_column_letter

from .models import Record
from .exporter import Exporter

logger = logging.getLogger(__name__)

# Excel cell limit
MAX_CELL_LENGTH = 32767


def _cell_value(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return ILLEGAL_CHARACTERS_RE.sub('', value)[:MAX_CELL_LENGTH]


class ExcelExporter(Exporter):
    """Export records to Excel format."""

    def export(self, records: List[Record], filename: str, **options) -> Optional[Path]:
        """
        Export records to Excel.

        Args:
            records: Uniform records
            filename: Output filename
            **options:
                - fields: List of columns to include
                - sheet_name: Custom sheet name (default 'Items')
                - auto_format: Style the header and set column widths
                - freeze_header: Freeze header row

        Returns:
            Path to exported Excel file
        """
        fields = options.get('fields')
        sheet_name = options.get('sheet_name', 'Items')
        auto_format = options.get('auto_format', True)
        freeze_header = options.get('freeze_header', True)

        if not records:
            logger.warning("No records to export")
            return None

        output_path = self.output_dir / filename
        workbook = Workbook()

        try:
            ws = workbook.active
            ws.title = sheet_name

            columns = self._columns(records, fields)
            ws.append(columns)

            for record in records:
                row = self._extract_fields(record, columns)
                ws.append([_cell_value(row[c]) for c in columns])

            if auto_format:
                header_fill = PatternFill(start_color="366092", end_color="366092",
                                          fill_type="solid")
                header_font = Font(bold=True, color="FFFFFF")

                for cell in ws[1]:
                    cell.fill = header_fill
                    cell.font = header_font
                    cell.alignment = Alignment(horizontal="center", vertical="center")

                for idx, column in enumerate(columns, 1):
                    col_letter = get_column_letter(idx)
                    ws.column_dimensions[col_letter].width = min(40, len(column) + 2)

            if freeze_header:
                ws.freeze_panes = 'A2'

            workbook.save(output_path)
            self._log_export(filename, len(records))
            return output_path

        except Exception as e:
            logger.error(f"Error exporting Excel: {e}")
            raise
