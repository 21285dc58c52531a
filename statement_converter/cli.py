"""
Command-line interface for the Statement Converter.

Usage:
    statement-converter --help
    statement-converter 2024-9.txt
    statement-converter --dialect bracketed --format csv 2024-9.txt
    statement-converter -o outputs/2024-9.xlsx --labels datas/2024-9.txt
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from statement_converter import StatementConverter, ConvertOptions, Dialect
from statement_converter.errors import StatementParseError
from statement_converter.logging_setup import configure_logging

SUFFIXES = {
    'excel': '.xlsx',
    'csv': '.csv',
    'json': '.json',
}


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog='statement-converter',
        description='Convert delimited text statement exports to Excel/CSV/JSON'
    )

    parser.add_argument(
        'input',
        type=Path,
        help='Statement text export to convert'
    )

    parser.add_argument(
        '-d', '--dialect',
        choices=[d.value for d in Dialect],
        default=Dialect.TABBED.value,
        help='Input line format (default: tabbed)'
    )

    parser.add_argument(
        '-o', '--output',
        type=Path,
        help='Output file (default: input path with the format suffix)'
    )

    parser.add_argument(
        '-f', '--format',
        choices=list(SUFFIXES),
        default='excel',
        help='Output format (default: excel)'
    )

    parser.add_argument(
        '--labels',
        action='store_true',
        help='Use the export\'s own column labels as headers'
    )

    parser.add_argument(
        '--summary',
        action='store_true',
        help='Add a summary sheet to Excel output'
    )

    parser.add_argument(
        '-j', '--workers',
        type=int,
        default=1,
        help='Threads used to parse lines (default: 1)'
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Show debug output'
    )
    verbosity.add_argument(
        '-q', '--quiet',
        action='store_true',
        help='Only report errors'
    )

    args = parser.parse_args(argv)
    if args.workers < 1:
        parser.error('--workers must be at least 1')
    return args


def output_path_for(input_path: Path, output_format: str) -> Path:
    """Default output path: the input path with the format's suffix."""
    return input_path.with_suffix(SUFFIXES[output_format])


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    if args.verbose:
        configure_logging(logging.DEBUG)
    elif args.quiet:
        configure_logging(logging.WARNING)
    else:
        configure_logging()

    options = ConvertOptions(
        dialect=args.dialect,
        output_format=args.format,
        use_labels=args.labels,
        include_summary=args.summary,
        workers=args.workers,
    )
    output_path = args.output or output_path_for(args.input, args.format)

    try:
        result = StatementConverter(options).convert_file(args.input)
        result.raise_for_errors()

        output_path.parent.mkdir(parents=True, exist_ok=True)
        result.export(str(output_path), options)
    except (StatementParseError, OSError, ValueError) as e:
        print(f"✗ {args.input.name}: {e}", file=sys.stderr)
        return 1

    if not args.quiet:
        summary = result.get_summary()
        print(f"✓ {args.input.name}: {summary['total_transactions']} transactions")
        print(f"  Output: {output_path}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
