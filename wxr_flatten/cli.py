"""
CLI interface for converting WordPress exports.
Provides commands for converting, previewing and inspecting columns.
"""

import argparse
import dataclasses
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from tabulate import tabulate

from .config_loader import ConfigLoader, ConverterConfig
from .errors import WXRError
from .export_pipeline import ExportPipeline
from .logging_setup import setup_logging
from .models import ConversionSummary
from .utils import compute_file_hash, truncate_string
from .wxr_parser import WXRParser

logger = logging.getLogger(__name__)


def parse_option(text: str) -> Dict[str, Any]:
    """
    Parse a KEY=VALUE sanitizer option.

    The value is read as a YAML scalar, so 'false' is a boolean and '3' an int.
    """
    key, sep, value = text.partition('=')
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"Expected KEY=VALUE, got {text!r}")
    return {key.strip(): yaml.safe_load(value)}


class CLI:
    """Command-line interface for WXR conversion."""

    def __init__(self, config: ConverterConfig, export_config: Dict[str, Any] = None):
        """
        Initialize CLI.

        Args:
            config: Converter settings
            export_config: `export` section of the config file
        """
        self.config = config
        self.export_config = export_config or {}

    def _parser(self, input_path: Path) -> WXRParser:
        return WXRParser(input_path, config=self.config)

    def convert(self, input_path: Path, format: str = None, output_dir: Path = None,
                filename: str = None) -> ConversionSummary:
        """
        Convert an export file and write the records.

        Args:
            input_path: WXR file
            format: Export format (config or 'csv' if None)
            output_dir: Export directory (config or './exports' if None)
            filename: Output filename (derived from input if None)
        """
        format = format or self.export_config.get('format', 'csv')
        output_dir = Path(output_dir or self.export_config.get('output_dir', './exports'))

        summary = ConversionSummary(
            source=str(input_path),
            file_id=compute_file_hash(input_path),
            started_at=datetime.now(),
        )

        parser = self._parser(input_path)
        records = parser.get_items()

        pipeline = ExportPipeline(output_dir)
        filename = filename or pipeline.default_filename(input_path, format)
        output_path = pipeline.export_records(records, format, filename)

        summary.item_count = len(records)
        summary.columns = parser.get_columns()
        summary.output_path = str(output_path) if output_path else None
        summary.export_stats = pipeline.get_export_stats()
        summary.completed_at = datetime.now()
        logger.info(f"Conversion summary: {json.dumps(summary.to_dict())}")

        print(tabulate([
            ['Source', summary.source],
            ['File ID', summary.file_id[:12]],
            ['Items', summary.item_count],
            ['Columns', len(summary.columns)],
            ['Output', summary.output_path or '(nothing written)'],
            ['Export time', f"{summary.export_stats['duration_seconds']:.2f}s"],
        ], tablefmt='simple'))

        return summary

    def preview(self, input_path: Path, limit: int = 10,
                columns: Optional[List[str]] = None) -> None:
        """
        Print the first records as a table.

        Args:
            input_path: WXR file
            limit: Number of records to show
            columns: Columns to show (all if None)
        """
        records = self._parser(input_path).get_items()

        if not records:
            print(f"No items found in {input_path}")
            return

        columns = columns or list(records[0].keys())
        table_data = []
        for record in records[:limit]:
            table_data.append([
                truncate_string(record.get(c) or '', 40) for c in columns
            ])

        print(f"\nItems in {input_path} (showing {len(table_data)} of {len(records)}):\n")
        print(tabulate(table_data, headers=columns, tablefmt='grid'))

    def list_columns(self, input_path: Path) -> None:
        """
        Print every column with the number of records that fill it.

        Args:
            input_path: WXR file
        """
        parser = self._parser(input_path)
        records = parser.get_items()

        table_data = []
        for column in parser.get_columns():
            filled = len([r for r in records if r.get(column)])
            table_data.append([column, filled, len(records)])

        print(tabulate(table_data, headers=['Column', 'Filled', 'Items'], tablefmt='simple'))


def create_argument_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog='wxr-flatten',
        description="Flatten WordPress WXR exports into uniform rows",
    )

    parser.add_argument('--config', type=Path, help='YAML config path')
    parser.add_argument('--opt', type=parse_option, action='append', default=[],
                        metavar='KEY=VALUE', help='Sanitizer option override (repeatable)')
    parser.add_argument('--item-tag', type=str, help='Tag name of the rows (default: item)')
    parser.add_argument('--log-level', type=str, help='Logging level')
    parser.add_argument('--log-dir', type=Path, help='Directory for JSON log files')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    # convert command
    convert_parser = subparsers.add_parser('convert', help='Convert an export file')
    convert_parser.add_argument('input', type=Path, help='WXR file')
    convert_parser.add_argument('--format', choices=sorted(ExportPipeline.EXPORTERS),
                                help='Export format')
    convert_parser.add_argument('--output-dir', type=Path, help='Export directory')
    convert_parser.add_argument('--filename', type=str, help='Output filename')

    # preview command
    preview_parser = subparsers.add_parser('preview', help='Show the first items as a table')
    preview_parser.add_argument('input', type=Path, help='WXR file')
    preview_parser.add_argument('--limit', type=int, default=10, help='Number of items')
    preview_parser.add_argument('--columns', type=str, help='Comma-separated columns')

    # columns command
    columns_parser = subparsers.add_parser('columns', help='List columns and fill counts')
    columns_parser.add_argument('input', type=Path, help='WXR file')

    return parser


def _build_config(args: argparse.Namespace, loader: Optional[ConfigLoader]) -> ConverterConfig:
    config = loader.load_converter_config() if loader else ConverterConfig()

    overrides = {}
    for option in args.opt:
        overrides.update(option)
    if overrides:
        config = config.with_sanitizer_options(overrides)

    if args.item_tag:
        config = dataclasses.replace(
            config, rules=dataclasses.replace(config.rules, item_tag=args.item_tag)
        )
    return config


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        loader = ConfigLoader(args.config) if args.config else None
        log_cfg = loader.load_logging_config() if loader else {}
        setup_logging(
            log_dir=args.log_dir or log_cfg.get('log_dir'),
            log_level=args.log_level or log_cfg.get('level', 'WARNING'),
            json_format=log_cfg.get('json_format', True),
            console_output=log_cfg.get('console_output', True),
        )

        config = _build_config(args, loader)
        cli = CLI(config, loader.load_export_config() if loader else None)

        if args.command == 'convert':
            cli.convert(args.input, args.format, args.output_dir, args.filename)
        elif args.command == 'preview':
            columns = args.columns.split(',') if args.columns else None
            cli.preview(args.input, limit=args.limit, columns=columns)
        elif args.command == 'columns':
            cli.list_columns(args.input)

    except (WXRError, FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
