"""
Transaction record types, one per input dialect.

Records are frozen dataclasses. Field declaration order is the column order
of every export, and each field carries the header label used by the bank's
own exports in its metadata.
"""

from dataclasses import dataclass, field, fields, astuple
from typing import Optional, List, Dict, Any, Tuple


def _column(label: str, **kwargs):
    return field(metadata={'label': label}, **kwargs)


def _amount(label: str, **kwargs):
    return field(metadata={'label': label, 'numeric': True}, **kwargs)


@dataclass(frozen=True)
class TransactionRecord:
    """Base class for all dialect records."""

    @classmethod
    def column_names(cls) -> List[str]:
        """Field names in declaration order."""
        return [f.name for f in fields(cls)]

    @classmethod
    def column_labels(cls) -> List[str]:
        """Display labels in declaration order."""
        return [f.metadata.get('label', f.name) for f in fields(cls)]

    @classmethod
    def amount_columns(cls) -> List[str]:
        """Names of the numeric columns."""
        return [f.name for f in fields(cls) if f.metadata.get('numeric')]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to an ordered dictionary keyed by field name."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def to_row(self) -> Tuple[Any, ...]:
        """Values in column order."""
        return astuple(self)


@dataclass(frozen=True)
class TabbedRecord(TransactionRecord):
    """Dialect 1: tab-separated export with exactly 10 columns."""
    transaction_date: str = _column('交易日期')
    posting_date: str = _column('记账日期')
    booking_currency: str = _column('记账币种')
    card_number: str = _column('卡号')
    transaction_type: str = _column('交易类型')
    description: str = _column('交易描述')
    deposit_amount: Optional[float] = _amount('存入金额')
    withdrawal_amount: Optional[float] = _amount('支出金额')
    settlement_currency: str = _column('交易币种')
    transaction_amount: float = _amount('交易金额')


@dataclass(frozen=True)
class SpacedRecord(TransactionRecord):
    """Dialect 2: whitespace-separated export with a free-width description."""
    transaction_date: str = _column('交易日期')
    posting_date: str = _column('记账日期')
    currency: str = _column('记账币种')
    card_number: str = _column('卡号')
    transaction_type: str = _column('交易类型')
    description: str = _column('交易描述')
    deposit_amount: float = _amount('存入金额')
    withdrawal_amount: float = _amount('支出金额')
    transaction_currency: str = _column('交易币种')
    transaction_amount: float = _amount('交易金额')


@dataclass(frozen=True)
class BracketedRecord(TransactionRecord):
    """Dialect 3: tab-separated export with [CNY ...] / [汇率 ...] sub-fields."""
    account_type: str = _column('账户类型')
    transaction_date: str = _column('交易日期')
    posting_date: str = _column('记账日期')
    card_number: str = _column('卡号')
    description: str = _column('交易描述')
    deposit_amount: Optional[float] = _amount('存入金额')
    withdrawal_amount: Optional[float] = _amount('支出金额')
    currency: Optional[str] = _column('交易币种', default=None)
    amount: Optional[float] = _amount('交易金额', default=None)
    exchange_rate: Optional[float] = _amount('汇率', default=None)
