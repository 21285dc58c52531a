"""
Exceptions raised while parsing statement lines.

Every fatal per-line problem is a StatementParseError. Parsers raise these
internally and BaseLineParser.parse_line turns them into LineResult values,
so a conversion stops at the first bad line without writing anything.
"""

from typing import Optional


class StatementParseError(ValueError):
    """A statement line could not be turned into a record."""

    def __init__(self, message: str, line: str = '', line_number: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.line_number = line_number

    def __str__(self) -> str:
        if self.line_number is not None:
            return f"line {self.line_number}: {self.message}"
        return self.message


class FieldCountError(StatementParseError):
    """A line did not split into the number of fields its dialect requires."""

    def __init__(self, line: str, expected: int, actual: int, line_number: Optional[int] = None):
        message = (
            f"expected {expected} fields, got {actual}. "
            f"Line content: {line!r}"
        )
        super().__init__(message, line, line_number)
        self.expected = expected
        self.actual = actual


class AmountError(StatementParseError):
    """A mandatory amount column held something that is not a number."""

    def __init__(self, line: str, column: str, token: str, line_number: Optional[int] = None):
        message = f"invalid {column} {token!r}. Line content: {line!r}"
        super().__init__(message, line, line_number)
        self.column = column
        self.token = token
