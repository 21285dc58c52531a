"""
Base parser class for all dialect line parsers.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, List, Type

from statement_converter.errors import StatementParseError, FieldCountError
from statement_converter.records import TransactionRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LineResult:
    """Outcome of parsing one line: either a record or the error that stopped it."""
    line_number: int
    record: Optional[TransactionRecord] = None
    error: Optional[StatementParseError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class BaseLineParser(ABC):
    """
    Abstract base class for dialect parsers.

    Subclasses split a line into tokens and assemble one record from them.
    Lines never depend on each other, so a parser instance holds no state
    between calls and may be shared across threads.
    """

    dialect: str = "base"
    record_type: Type[TransactionRecord] = TransactionRecord

    # Exact number of tokens a line must split into, None for no check
    field_count: Optional[int] = None

    @abstractmethod
    def split(self, line: str) -> List[str]:
        """Split a line into raw tokens."""
        pass

    @abstractmethod
    def build_record(self, tokens: List[str], line: str) -> TransactionRecord:
        """Assemble a record from a line's tokens."""
        pass

    def parse_line(self, line: str, line_number: int = 0) -> LineResult:
        """
        Parse a single line into a LineResult.

        Args:
            line: Raw line content
            line_number: 1-based position of the line among non-blank lines

        Returns:
            LineResult holding the record, or the StatementParseError raised
            while building it
        """
        try:
            record = self.parse_record(line)
        except StatementParseError as e:
            e.line_number = line_number
            logger.debug("Line %d rejected by %s parser: %s", line_number, self.dialect, e.message)
            return LineResult(line_number=line_number, error=e)
        return LineResult(line_number=line_number, record=record)

    def parse_record(self, line: str) -> TransactionRecord:
        """
        Parse a single line, raising on malformed input.

        Raises:
            FieldCountError: The line has the wrong number of fields
            AmountError: A mandatory amount is not a number
        """
        tokens = self.split(line)
        if self.field_count is not None and len(tokens) != self.field_count:
            raise FieldCountError(line, self.field_count, len(tokens))
        return self.build_record(tokens, line)
