"""
Whitespace-separated statement parser (dialect 2).

Lines are split on runs of whitespace. The first five tokens and the last
four are fixed columns; whatever lies between them is the description, which
may itself contain spaces:

    DATE DATE CURRENCY CARD TYPE <description words...> DEPOSIT WITHDRAWAL CURRENCY AMOUNT

Amounts are lenient: placeholders and unparsable tokens become 0.0, never
None. There is no field-count check. A line shorter than nine tokens still
produces a record, with missing positions read as empty strings and the
leading and trailing columns possibly overlapping.
"""

import logging
from typing import List

from statement_converter.formats.base import BaseLineParser
from statement_converter.records import SpacedRecord
from statement_converter.utils.formatting import parse_amount

logger = logging.getLogger(__name__)

LEADING_COLUMNS = 5
TRAILING_COLUMNS = 4


def _token_at(tokens: List[str], index: int) -> str:
    """Token at index (negative counts from the end), '' when out of range."""
    if index < 0:
        index += len(tokens)
    if 0 <= index < len(tokens):
        return tokens[index]
    return ''


class SpacedParser(BaseLineParser):
    """Parser for variable-width whitespace-separated exports."""

    dialect = "spaced"
    record_type = SpacedRecord

    def split(self, line: str) -> List[str]:
        return line.split()

    def build_record(self, tokens: List[str], line: str) -> SpacedRecord:
        if len(tokens) < LEADING_COLUMNS + TRAILING_COLUMNS:
            logger.debug("Short line (%d tokens), columns may overlap: %r", len(tokens), line)

        return SpacedRecord(
            transaction_date=_token_at(tokens, 0),
            posting_date=_token_at(tokens, 1),
            currency=_token_at(tokens, 2),
            card_number=_token_at(tokens, 3),
            transaction_type=_token_at(tokens, 4),
            description=' '.join(tokens[LEADING_COLUMNS:-TRAILING_COLUMNS]),
            deposit_amount=parse_amount(_token_at(tokens, -4), strip_symbols=False, default=0.0),
            withdrawal_amount=parse_amount(_token_at(tokens, -3), strip_symbols=False, default=0.0),
            transaction_currency=_token_at(tokens, -2),
            transaction_amount=parse_amount(_token_at(tokens, -1), strip_symbols=False, default=0.0),
        )
