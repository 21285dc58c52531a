"""
Main StatementConverter class - the primary entry point for converting statements.

This class orchestrates the conversion pipeline:
1. Reads the text export
2. Splits it into non-blank lines
3. Parses every line with the parser of the selected dialect
4. Returns results that export to Excel, CSV or JSON

A conversion either yields a record for every line or stops at the first
malformed line with no records at all.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, List, Dict, Any, Tuple, Type, Union

from statement_converter.dialect import Dialect, get_parser
from statement_converter.errors import StatementParseError
from statement_converter.formats.base import BaseLineParser, LineResult
from statement_converter.output import OutputGenerator, DEFAULT_SHEET_NAME, generate_output
from statement_converter.records import TransactionRecord
from statement_converter.utils.formatting import split_lines

logger = logging.getLogger(__name__)


@dataclass
class ConvertOptions:
    """Options for converting a statement."""
    dialect: Union[Dialect, str] = Dialect.TABBED   # tabbed, spaced, bracketed
    output_format: str = "excel"                   # excel, csv, json
    sheet_name: str = DEFAULT_SHEET_NAME           # Title of the transactions sheet
    use_labels: bool = False                       # Localized headers instead of field names
    include_summary: bool = False                  # Add a summary sheet in Excel
    workers: int = 1                               # Threads parsing lines; 1 is sequential
    encodings: Tuple[str, ...] = ('utf-8-sig', 'gb18030')


class StatementConverter:
    """
    Main converter class for text statement exports.

    Usage:
        from statement_converter import StatementConverter, ConvertOptions

        converter = StatementConverter(ConvertOptions(dialect="bracketed"))
        result = converter.convert_file("2024-9.txt")
        result.to_excel("2024-9.xlsx")

        # Or access records directly
        for record in result.records:
            print(record.transaction_date, record.description)
    """

    def __init__(self, options: Optional[ConvertOptions] = None):
        """
        Initialize the converter.

        Args:
            options: ConvertOptions for customizing conversion
        """
        self.options = options or ConvertOptions()

    def convert_file(self, filepath: Union[str, Path],
                     options: Optional[ConvertOptions] = None) -> 'ConvertResult':
        """
        Convert a statement text file.

        Args:
            filepath: Path to the text export
            options: Override options for this conversion

        Returns:
            ConvertResult with parsed records
        """
        options = options or self.options
        filepath = Path(filepath)
        text = self._read_text_file(filepath, options.encodings)

        result = self.convert_text(text, options)
        result.metadata['source'] = str(filepath)
        return result

    def convert_text(self, text: str, options: Optional[ConvertOptions] = None) -> 'ConvertResult':
        """
        Convert statement text content.

        Args:
            text: Whole statement text
            options: Override options for this conversion

        Returns:
            ConvertResult with one record per non-blank line, or with the first
            error and no records
        """
        options = options or self.options
        parser = get_parser(options.dialect)
        lines = split_lines(text)

        logger.debug("Parsing %d lines as %s", len(lines), parser.dialect)

        if options.workers > 1:
            results = self._parse_parallel(parser, lines, options.workers)
        else:
            results = self._parse_sequential(parser, lines)

        records = []
        for line_result in results:
            if not line_result.ok:
                logger.info("Conversion aborted: %s", line_result.error)
                return ConvertResult(
                    records=[],
                    dialect=parser.dialect,
                    record_type=parser.record_type,
                    errors=[line_result.error],
                    metadata={'line_count': len(lines)},
                )
            records.append(line_result.record)

        logger.info("Parsed %d %s records", len(records), parser.dialect)
        return ConvertResult(
            records=records,
            dialect=parser.dialect,
            record_type=parser.record_type,
            metadata={'line_count': len(lines)},
        )

    def _parse_sequential(self, parser: BaseLineParser, lines: List[str]) -> List[LineResult]:
        """Parse lines in order, stopping after the first failure."""
        results = []
        for line_number, line in enumerate(lines, 1):
            line_result = parser.parse_line(line, line_number)
            results.append(line_result)
            if not line_result.ok:
                break
        return results

    def _parse_parallel(self, parser: BaseLineParser, lines: List[str],
                        workers: int) -> List[LineResult]:
        """Parse lines on a thread pool; results come back in input order."""
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(parser.parse_line, lines, range(1, len(lines) + 1)))

    def _read_text_file(self, filepath: Path, encodings: Tuple[str, ...]) -> str:
        """Read a text export, trying each encoding in turn."""
        for encoding in encodings:
            try:
                with open(filepath, 'r', encoding=encoding) as f:
                    text = f.read()
            except UnicodeDecodeError:
                logger.debug("%s is not valid %s", filepath, encoding)
                continue
            logger.debug("Read %s as %s", filepath, encoding)
            return text

        raise ValueError(f"Could not decode file {filepath} with any of: {', '.join(encodings)}")


class ConvertResult:
    """Result of converting a statement."""

    def __init__(self, records: List[TransactionRecord], dialect: str,
                 record_type: Type[TransactionRecord],
                 errors: List[StatementParseError] = None,
                 metadata: Dict[str, Any] = None):
        """Initialize the convert result."""
        self.records = records
        self.dialect = dialect
        self.record_type = record_type
        self.errors = errors or []
        self.metadata = metadata or {}

    @property
    def ok(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> None:
        """Raise the error that stopped the conversion, if any."""
        if self.errors:
            raise self.errors[0]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'transactions': self.to_list(),
            'dialect': self.dialect,
            'metadata': self.metadata,
            'errors': [str(e) for e in self.errors],
            'transaction_count': len(self.records),
        }

    def to_list(self) -> List[Dict[str, Any]]:
        """Return records as dictionaries."""
        return [record.to_dict() for record in self.records]

    def to_excel(self, filepath: str, sheet_name: str = DEFAULT_SHEET_NAME,
                 use_labels: bool = False, include_summary: bool = False) -> bool:
        """
        Export to Excel format.

        Args:
            filepath: Output file path
            sheet_name: Title of the transactions sheet
            use_labels: Write field labels as headers
            include_summary: Include summary sheet

        Returns:
            True if successful

        Raises:
            StatementParseError: The conversion failed; nothing is written
        """
        self.raise_for_errors()
        return self._generator().to_excel(filepath, sheet_name, use_labels, include_summary)

    def to_csv(self, filepath: str, delimiter: str = ',', use_labels: bool = False) -> bool:
        """
        Export to CSV format.

        Raises:
            StatementParseError: The conversion failed; nothing is written
        """
        self.raise_for_errors()
        return self._generator().to_csv(filepath, delimiter, use_labels)

    def to_json(self, filepath: Optional[str] = None, indent: int = 2) -> str:
        """
        Export to JSON format.

        Raises:
            StatementParseError: The conversion failed; nothing is written
        """
        self.raise_for_errors()
        return self._generator().to_json(filepath, indent)

    def export(self, filepath: str, options: ConvertOptions) -> None:
        """Write the records in options.output_format."""
        self.raise_for_errors()

        kwargs = {}
        if options.output_format == 'excel':
            kwargs = {
                'sheet_name': options.sheet_name,
                'use_labels': options.use_labels,
                'include_summary': options.include_summary,
            }
        elif options.output_format == 'csv':
            kwargs = {'use_labels': options.use_labels}

        generate_output(self.records, self.record_type, options.output_format,
                        filepath, self.dialect, **kwargs)

    def get_summary(self) -> Dict[str, Any]:
        """Get a summary of parsed records."""
        totals = self._generator().get_totals()
        total_deposits = totals.get('deposit_amount', 0.0)
        total_withdrawals = totals.get('withdrawal_amount', 0.0)

        return {
            'total_transactions': len(self.records),
            'total_deposits': total_deposits,
            'total_withdrawals': total_withdrawals,
            'net_amount': total_deposits - total_withdrawals,
            'dialect': self.dialect,
            'errors': len(self.errors),
        }

    def _generator(self) -> OutputGenerator:
        return OutputGenerator(self.records, self.record_type, self.dialect)
