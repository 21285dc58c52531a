"""
Output generation module for converted statements.

Supports multiple output formats:
- Excel (XLSX)
- CSV
- JSON

Columns always follow the declaration order of the record type, one row per
record in the order the records were given.
"""

import csv
import json
import logging
from typing import List, Dict, Any, Optional, Sequence, Type

import openpyxl
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Font, Alignment, PatternFill
from openpyxl.utils import get_column_letter

from statement_converter.records import TransactionRecord

logger = logging.getLogger(__name__)

DEFAULT_SHEET_NAME = "Transactions"


class OutputGenerator:
    """Generate output in various formats from parsed records."""

    def __init__(self, records: Sequence[TransactionRecord],
                 record_type: Type[TransactionRecord], dialect: str = ""):
        """
        Initialize the output generator.

        Args:
            records: Parsed records, all of record_type
            record_type: Record class whose fields define the columns
            dialect: Dialect name recorded in JSON output
        """
        self.records = list(records)
        self.record_type = record_type
        self.dialect = dialect

    def get_headers(self, use_labels: bool = False) -> List[str]:
        """Header row: field names, or the export labels when use_labels is set."""
        if use_labels:
            return self.record_type.column_labels()
        return self.record_type.column_names()

    def to_excel(self, filepath: str, sheet_name: str = DEFAULT_SHEET_NAME,
                 use_labels: bool = False, include_summary: bool = False) -> bool:
        """
        Export records to Excel format.

        Args:
            filepath: Output file path
            sheet_name: Title of the transactions sheet
            use_labels: Write field labels instead of field names as headers
            include_summary: Whether to add a summary sheet

        Returns:
            True if successful
        """
        wb = openpyxl.Workbook()
        ws = wb.active
        ws.title = sheet_name

        headers = self.get_headers(use_labels)
        amount_columns = set(self.record_type.amount_columns())
        amount_indexes = [
            idx for idx, name in enumerate(self.record_type.column_names(), 1)
            if name in amount_columns
        ]

        # Write header
        header_style = Font(bold=True, color="FFFFFF")
        header_fill = PatternFill(start_color="4472C4", fill_type="solid")

        for col_idx, header in enumerate(headers, 1):
            cell = ws.cell(row=1, column=col_idx, value=header)
            cell.font = header_style
            cell.fill = header_fill
            cell.alignment = Alignment(horizontal="center")

        # Write data; None stays an empty cell so absent never reads as zero
        for row_idx, record in enumerate(self.records, 2):
            for col_idx, value in enumerate(record.to_row(), 1):
                if isinstance(value, str):
                    # Control characters are not allowed in worksheet XML
                    value = ILLEGAL_CHARACTERS_RE.sub('', value)
                cell = ws.cell(row=row_idx, column=col_idx, value=value)
                if isinstance(value, str):
                    # Statement text is never a formula
                    cell.data_type = 's'
            for col_idx in amount_indexes:
                ws.cell(row=row_idx, column=col_idx).number_format = '#,##0.00'

        # Auto-adjust column widths
        for col_idx, header in enumerate(headers, 1):
            max_width = len(header) + 2
            for row in ws.iter_rows(min_row=2, max_row=len(self.records) + 1,
                                    min_col=col_idx, max_col=col_idx):
                for cell in row:
                    if cell.value is not None:
                        max_width = max(max_width, len(str(cell.value)) + 2)
            ws.column_dimensions[get_column_letter(col_idx)].width = min(max_width, 50)

        if include_summary:
            self._add_summary_sheet(wb)

        wb.save(filepath)
        logger.info("Wrote %d rows to %s", len(self.records), filepath)
        return True

    def to_csv(self, filepath: str, delimiter: str = ',', use_labels: bool = False) -> bool:
        """
        Export records to CSV format.

        Args:
            filepath: Output file path
            delimiter: CSV delimiter (default: comma)
            use_labels: Write field labels instead of field names as headers

        Returns:
            True if successful
        """
        with open(filepath, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f, delimiter=delimiter)
            writer.writerow(self.get_headers(use_labels))
            for record in self.records:
                writer.writerow(['' if value is None else value for value in record.to_row()])

        logger.info("Wrote %d rows to %s", len(self.records), filepath)
        return True

    def to_json(self, filepath: Optional[str] = None, indent: int = 2) -> str:
        """
        Export records to JSON format.

        Args:
            filepath: Output file path; nothing is written when omitted
            indent: JSON indentation level

        Returns:
            The rendered JSON document
        """
        data = {
            'dialect': self.dialect,
            'transaction_count': len(self.records),
            'transactions': self.to_list(),
        }
        rendered = json.dumps(data, indent=indent, ensure_ascii=False)

        if filepath:
            with open(filepath, 'w', encoding='utf-8') as f:
                f.write(rendered + '\n')
            logger.info("Wrote %d records to %s", len(self.records), filepath)

        return rendered

    def to_list(self) -> List[Dict[str, Any]]:
        """
        Return records as a list of dictionaries.

        Returns:
            List of record dictionaries keyed by field name
        """
        return [record.to_dict() for record in self.records]

    def get_totals(self) -> Dict[str, float]:
        """Sum every numeric column, skipping absent values."""
        totals = {}
        for column in self.record_type.amount_columns():
            totals[column] = sum(
                getattr(record, column) for record in self.records
                if getattr(record, column) is not None
            )
        return totals

    def _add_summary_sheet(self, wb):
        """Add a summary sheet to the workbook."""
        summary = wb.create_sheet("Summary")

        summary.cell(row=1, column=1, value="Summary")
        summary.cell(row=1, column=1).font = Font(bold=True, size=14)

        summary.cell(row=3, column=1, value="Total Transactions")
        summary.cell(row=3, column=2, value=len(self.records))

        totals = self.get_totals()
        deposits = totals.get('deposit_amount', 0.0)
        withdrawals = totals.get('withdrawal_amount', 0.0)
        net_amount = deposits - withdrawals

        rows = [
            ("Total Deposits", deposits),
            ("Total Withdrawals", withdrawals),
            ("Net Amount", net_amount),
        ]
        for offset, (label, value) in enumerate(rows):
            summary.cell(row=4 + offset, column=1, value=label)
            summary.cell(row=4 + offset, column=2, value=value)
            summary.cell(row=4 + offset, column=2).number_format = '#,##0.00'

        # Color code
        net_cell = summary.cell(row=6, column=2)
        if net_amount > 0:
            net_cell.fill = PatternFill(start_color="C6EFCE", fill_type="solid")
        elif net_amount < 0:
            net_cell.fill = PatternFill(start_color="FFC7CE", fill_type="solid")

        for col in [1, 2]:
            summary.column_dimensions[get_column_letter(col)].width = 20


def generate_output(records: Sequence[TransactionRecord], record_type: Type[TransactionRecord],
                    format: str = "excel", filepath: str = None, dialect: str = "",
                    **kwargs) -> Optional[str]:
    """
    Generate output in the specified format.

    Args:
        records: Parsed records
        record_type: Record class whose fields define the columns
        format: Output format ('excel', 'csv', 'json')
        filepath: Output file path (required for file outputs)
        dialect: Dialect name recorded in JSON output
        **kwargs: Passed through to the format's writer

    Returns:
        JSON string for json format without a filepath, None otherwise
    """
    generator = OutputGenerator(records, record_type, dialect)

    if format == 'excel':
        if not filepath:
            raise ValueError("filepath is required for Excel output")
        generator.to_excel(filepath, **kwargs)
        return None
    elif format == 'csv':
        if not filepath:
            raise ValueError("filepath is required for CSV output")
        generator.to_csv(filepath, **kwargs)
        return None
    elif format == 'json':
        if not filepath:
            return generator.to_json(**kwargs)
        generator.to_json(filepath, **kwargs)
        return None
    else:
        raise ValueError(f"Unknown format: {format}. Use 'excel', 'csv', or 'json'.")
