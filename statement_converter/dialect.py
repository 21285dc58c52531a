"""
Input dialect selection.

The dialect of a statement is always chosen by the caller. Exports from the
three formats are not reliably distinguishable from their content, so there
is no detection step.
"""

from enum import Enum
from typing import Union

from statement_converter.formats.base import BaseLineParser
from statement_converter.formats.tabbed import TabbedParser
from statement_converter.formats.spaced import SpacedParser
from statement_converter.formats.bracketed import BracketedParser


class Dialect(Enum):
    """Supported statement export formats."""
    TABBED = "tabbed"          # 10 tab-separated columns
    SPACED = "spaced"          # whitespace-separated, free-width description
    BRACKETED = "bracketed"    # 7 tab-separated columns, [CNY ...] sub-fields


_PARSERS = {
    Dialect.TABBED: TabbedParser,
    Dialect.SPACED: SpacedParser,
    Dialect.BRACKETED: BracketedParser,
}


def get_parser(dialect: Union[Dialect, str]) -> BaseLineParser:
    """
    Return a line parser for the given dialect.

    Args:
        dialect: Dialect member or its value ('tabbed', 'spaced', 'bracketed')

    Returns:
        A fresh parser instance

    Raises:
        ValueError: Unknown dialect name
    """
    try:
        dialect = Dialect(dialect)
    except ValueError:
        names = ', '.join(d.value for d in Dialect)
        raise ValueError(f"Unknown dialect: {dialect}. Use one of: {names}.") from None
    return _PARSERS[dialect]()
