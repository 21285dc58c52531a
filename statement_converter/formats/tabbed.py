"""
Tab-separated statement parser (dialect 1).

Each line holds exactly 10 tab-separated columns:

    交易日期  记账日期  记账币种  卡号  交易类型  交易描述  存入金额  支出金额  交易币种  交易金额

Deposit and withdrawal columns use '-' or '--' when empty and decode to None.
The transaction amount is mandatory; a line without a usable one is rejected.
"""

from typing import List

from statement_converter.errors import AmountError
from statement_converter.formats.base import BaseLineParser
from statement_converter.records import TabbedRecord
from statement_converter.utils.formatting import parse_amount


class TabbedParser(BaseLineParser):
    """Parser for fixed 10-column tab-separated exports."""

    dialect = "tabbed"
    record_type = TabbedRecord
    field_count = 10

    def split(self, line: str) -> List[str]:
        return line.split('\t')

    def build_record(self, tokens: List[str], line: str) -> TabbedRecord:
        transaction_amount = parse_amount(tokens[9])
        if transaction_amount is None:
            raise AmountError(line, 'transaction amount', tokens[9])

        return TabbedRecord(
            transaction_date=tokens[0],
            posting_date=tokens[1],
            booking_currency=tokens[2],
            card_number=tokens[3],
            transaction_type=tokens[4],
            description=tokens[5],
            deposit_amount=parse_amount(tokens[6]),
            withdrawal_amount=parse_amount(tokens[7]),
            settlement_currency=tokens[8],
            transaction_amount=transaction_amount,
        )
