"""
Statement Converter Library

Converts tab- or whitespace-delimited bank/card statement exports into
Excel/CSV/JSON, one typed record per transaction line.

Usage:
    from statement_converter import StatementConverter, ConvertOptions

    converter = StatementConverter(ConvertOptions(dialect="tabbed"))
    result = converter.convert_file("2024-9.txt")
    result.to_excel("2024-9.xlsx")
"""

import logging

from .converter import StatementConverter, ConvertOptions, ConvertResult
from .dialect import Dialect, get_parser
from .errors import StatementParseError, FieldCountError, AmountError
from .formats.base import BaseLineParser, LineResult
from .records import TransactionRecord, TabbedRecord, SpacedRecord, BracketedRecord

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    "StatementConverter",
    "ConvertOptions",
    "ConvertResult",
    "Dialect",
    "get_parser",
    "StatementParseError",
    "FieldCountError",
    "AmountError",
    "BaseLineParser",
    "LineResult",
    "TransactionRecord",
    "TabbedRecord",
    "SpacedRecord",
    "BracketedRecord",
]
