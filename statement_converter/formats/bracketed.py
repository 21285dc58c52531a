"""
Tab-separated statement parser with bracketed sub-fields (dialect 3).

Each line holds exactly 7 tab-separated columns:

    ACCOUNT_TYPE  TRANSACTION_DATE  POSTING_DATE  CARD  DEPOSIT  WITHDRAWAL  DESCRIPTION

The description may embed [CNY <amount>] and [汇率 <rate>] spans, which are
lifted into the currency, amount and exchange_rate fields and removed from
the description text.
"""

from typing import List

from statement_converter.formats.base import BaseLineParser
from statement_converter.records import BracketedRecord
from statement_converter.utils.formatting import parse_amount, extract_bracket_fields


class BracketedParser(BaseLineParser):
    """Parser for 7-column exports whose descriptions carry [...] sub-fields."""

    dialect = "bracketed"
    record_type = BracketedRecord
    field_count = 7

    def split(self, line: str) -> List[str]:
        return line.split('\t')

    def build_record(self, tokens: List[str], line: str) -> BracketedRecord:
        extracted = extract_bracket_fields(tokens[6].strip())

        return BracketedRecord(
            account_type=tokens[0],
            transaction_date=tokens[1],
            posting_date=tokens[2],
            card_number=tokens[3],
            description=extracted.description,
            deposit_amount=parse_amount(tokens[4], strip_symbols=False),
            withdrawal_amount=parse_amount(tokens[5], strip_symbols=False),
            currency=extracted.currency,
            amount=extracted.amount,
            exchange_rate=extracted.exchange_rate,
        )
