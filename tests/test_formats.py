"""
Tests for amount parsing, line splitting and the dialect line parsers.
"""

import dataclasses
import pytest
from pathlib import Path

# Add parent directory to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from statement_converter import (
    Dialect, get_parser, FieldCountError, AmountError,
    TabbedRecord, SpacedRecord, BracketedRecord,
)
from statement_converter.formats import TabbedParser, SpacedParser, BracketedParser
from statement_converter.utils.formatting import (
    split_lines, parse_amount, parse_rate, extract_bracket_fields,
)


def tabbed_line(*overrides):
    fields = [
        '2024-09-01', '2024-09-02', 'CNY', '6222****1234', '消费',
        '超市购物', '--', '¥1,234.56', 'CNY', '-1,234.56',
    ]
    for index, value in overrides:
        fields[index] = value
    return '\t'.join(fields)


def bracketed_line(description, deposit='--', withdrawal='88.50'):
    return '\t'.join([
        '信用卡', '2024-09-01', '2024-09-02', '6222****1234',
        deposit, withdrawal, description,
    ])


class TestSplitLines:
    """Tests for the line splitter."""

    def test_drops_blank_lines(self):
        """Test that blank lines are dropped."""
        assert split_lines("a\n\n   \nb\n") == ['a', 'b']

    def test_keeps_line_content_untrimmed(self):
        """Test that kept lines are not trimmed."""
        assert split_lines("  a\tb  \n") == ['  a\tb  ']

    def test_empty_text(self):
        """Test that empty text yields no records."""
        assert split_lines("") == []
        assert split_lines("\n \n\t\n") == []

    def test_preserves_order(self):
        """Test that lines keep file order."""
        text = "\n".join(f"line {i}" for i in range(20))
        assert split_lines(text) == [f"line {i}" for i in range(20)]


class TestParseAmount:
    """Tests for amount normalization."""

    @pytest.mark.parametrize('token', ['-', '--', ' -- ', '\t-'])
    def test_placeholders_are_absent(self, token):
        """Test that dash placeholders decode to absent."""
        assert parse_amount(token) is None
        assert parse_amount(token, strip_symbols=False) is None

    def test_placeholders_use_default(self):
        """Test that placeholders return the default."""
        assert parse_amount('--', strip_symbols=False, default=0.0) == 0.0

    def test_strips_currency_symbols(self):
        """Test stripping currency symbols and separators."""
        assert parse_amount('¥1,234.56') == 1234.56
        assert parse_amount('CNY -12.00') == -12.0
        assert parse_amount('RMB 88') == 88.0

    def test_commas_only(self):
        """Test stripping thousands separators only."""
        assert parse_amount('1,234.56', strip_symbols=False) == 1234.56
        assert parse_amount('-5,000', strip_symbols=False) == -5000.0

    def test_symbols_fail_when_only_commas_stripped(self):
        """Test that symbols are invalid when only commas are stripped."""
        assert parse_amount('¥12', strip_symbols=False) is None
        assert parse_amount('¥12', strip_symbols=False, default=0.0) == 0.0

    @pytest.mark.parametrize('token', ['', 'N/A', '1.2.3', '12-3', '.', '-.', '--5'])
    def test_invalid_is_absent(self, token):
        """Test that invalid tokens decode to absent."""
        assert parse_amount(token) is None

    def test_invalid_uses_default(self):
        """Test that invalid tokens return the default."""
        assert parse_amount('abc', strip_symbols=False, default=0.0) == 0.0

    def test_zero_is_not_absent(self):
        """Test that zero is a value, not absent."""
        assert parse_amount('0.00') == 0.0
        assert parse_amount('0.00') is not None

    def test_decimal_forms(self):
        """Test trailing and leading decimal points."""
        assert parse_amount('5.') == 5.0
        assert parse_amount('.5') == 0.5

    def test_none_token(self):
        """Test a None token."""
        assert parse_amount(None) is None
        assert parse_amount(None, default=0.0) == 0.0


class TestParseRate:
    """Tests for exchange rate parsing."""

    def test_plain_rate(self):
        """Test parsing a plain rate."""
        assert parse_rate(' 7.1234') == 7.1234

    def test_leading_number_only(self):
        """Test that only the leading number is read."""
        assert parse_rate('7.12 USD') == 7.12

    def test_no_number(self):
        """Test tokens without a number."""
        assert parse_rate('n/a') is None
        assert parse_rate('') is None


class TestBracketFields:
    """Tests for [CNY ...] / [汇率 ...] sub-field extraction."""

    def test_amount_and_rate(self):
        """Test extracting an amount and an exchange rate."""
        fields = extract_bracket_fields('消费 [CNY 88.50] [汇率 7.1234]')
        assert fields.description == '消费'
        assert fields.currency == 'CNY'
        assert fields.amount == 88.5
        assert fields.exchange_rate == 7.1234

    def test_last_match_wins(self):
        """Test that the last CNY bracket wins."""
        fields = extract_bracket_fields('退款 [CNY 10.00] 其他 [CNY 20.00]')
        assert fields.amount == 20.0
        assert fields.description == '退款  其他'

    def test_last_rate_wins(self):
        """Test that the last rate bracket wins."""
        fields = extract_bracket_fields('[汇率 7.0][汇率 7.2] 换汇')
        assert fields.exchange_rate == 7.2
        assert fields.description == '换汇'

    def test_unrecognized_brackets_are_removed(self):
        """Test that unrecognized brackets are removed without fields."""
        fields = extract_bracket_fields('[备注 xyz] 转账')
        assert fields.description == '转账'
        assert fields.currency is None
        assert fields.amount is None
        assert fields.exchange_rate is None

    def test_no_brackets(self):
        """Test a description without brackets."""
        fields = extract_bracket_fields('工资')
        assert fields.description == '工资'
        assert fields.currency is None
        assert fields.amount is None
        assert fields.exchange_rate is None

    def test_malformed_amount_keeps_currency(self):
        """Test that a malformed CNY amount still sets the currency."""
        fields = extract_bracket_fields('消费 [CNY abc]')
        assert fields.currency == 'CNY'
        assert fields.amount is None

    def test_amount_with_thousands_separator(self):
        """Test a bracketed amount with a thousands separator."""
        assert extract_bracket_fields('[CNY 1,234.50]').amount == 1234.5

    def test_unclosed_bracket_left_in_place(self):
        """Test that an unclosed bracket stays in the description."""
        fields = extract_bracket_fields('商户 [CNY 5')
        assert fields.description == '商户 [CNY 5'
        assert fields.currency is None

    def test_zero_amount_is_present(self):
        """Test that a zero bracketed amount is present."""
        fields = extract_bracket_fields('[CNY 0.00]')
        assert fields.amount == 0.0
        assert fields.amount is not None


class TestDialectSelection:
    """Tests for choosing a parser by dialect."""

    @pytest.mark.parametrize('dialect, parser_class', [
        (Dialect.TABBED, TabbedParser),
        ('spaced', SpacedParser),
        ('bracketed', BracketedParser),
    ])
    def test_get_parser(self, dialect, parser_class):
        """Test selecting a parser by dialect."""
        assert isinstance(get_parser(dialect), parser_class)

    def test_unknown_dialect(self):
        """Test an unknown dialect name."""
        with pytest.raises(ValueError, match='Unknown dialect'):
            get_parser('csv')


class TestTabbedParser:
    """Tests for the 10-column tab-separated dialect."""

    def test_parse_line(self):
        """Test parsing a well-formed line."""
        result = TabbedParser().parse_line(tabbed_line(), 1)

        assert result.ok
        record = result.record
        assert isinstance(record, TabbedRecord)
        assert record.transaction_date == '2024-09-01'
        assert record.posting_date == '2024-09-02'
        assert record.booking_currency == 'CNY'
        assert record.card_number == '6222****1234'
        assert record.transaction_type == '消费'
        assert record.description == '超市购物'
        assert record.deposit_amount is None
        assert record.withdrawal_amount == 1234.56
        assert record.settlement_currency == 'CNY'
        assert record.transaction_amount == -1234.56

    def test_field_set(self):
        """Test that records carry exactly the declared fields."""
        record = TabbedParser().parse_record(tabbed_line())
        assert len(record.to_dict()) == 10
        assert list(record.to_dict()) == TabbedRecord.column_names()

    @pytest.mark.parametrize('placeholder', ['-', '--'])
    def test_placeholder_amounts_are_absent(self, placeholder):
        """Test that placeholder amounts are absent."""
        record = TabbedParser().parse_record(tabbed_line((6, placeholder), (7, placeholder)))
        assert record.deposit_amount is None
        assert record.withdrawal_amount is None

    def test_description_is_not_trimmed(self):
        """Test that the description is kept as written."""
        record = TabbedParser().parse_record(tabbed_line((5, ' 超市 购物 ')))
        assert record.description == ' 超市 购物 '

    @pytest.mark.parametrize('count', [9, 11])
    def test_wrong_field_count(self, count):
        """Test lines with the wrong number of fields."""
        line = '\t'.join(['x'] * count)
        result = TabbedParser().parse_line(line, 3)

        assert not result.ok
        assert result.record is None
        assert isinstance(result.error, FieldCountError)
        assert result.error.expected == 10
        assert result.error.actual == count
        assert result.error.line == line
        assert result.error.line_number == 3
        assert str(count) in str(result.error)

    def test_wrong_field_count_raises(self):
        """Test that parse_record() raises on the wrong field count."""
        with pytest.raises(FieldCountError, match='expected 10 fields, got 9'):
            TabbedParser().parse_record('\t'.join(['x'] * 9))

    @pytest.mark.parametrize('token', ['--', 'N/A', ''])
    def test_missing_transaction_amount_is_fatal(self, token):
        """Test that a missing transaction amount is fatal."""
        result = TabbedParser().parse_line(tabbed_line((9, token)), 7)

        assert isinstance(result.error, AmountError)
        assert result.error.token == token
        assert result.error.line_number == 7

    def test_records_are_immutable(self):
        """Test that records cannot be modified."""
        record = TabbedParser().parse_record(tabbed_line())
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.description = 'changed'


class TestSpacedParser:
    """Tests for the whitespace-separated dialect."""

    LINE = '2024-09-01 2024-09-02 CNY 6222****1234 消费 STARBUCKS  SHANGHAI   CN -- 1,234.56 CNY 1,234.56'

    def test_parse_line(self):
        """Test parsing a well-formed line."""
        record = SpacedParser().parse_record(self.LINE)

        assert isinstance(record, SpacedRecord)
        assert record.transaction_date == '2024-09-01'
        assert record.posting_date == '2024-09-02'
        assert record.currency == 'CNY'
        assert record.card_number == '6222****1234'
        assert record.transaction_type == '消费'
        assert record.description == 'STARBUCKS SHANGHAI CN'
        assert record.withdrawal_amount == 1234.56
        assert record.transaction_currency == 'CNY'
        assert record.transaction_amount == 1234.56

    def test_placeholder_is_zero_not_absent(self):
        """Test that placeholders decode to zero, not absent."""
        record = SpacedParser().parse_record(self.LINE)
        assert record.deposit_amount == 0.0
        assert record.deposit_amount is not None

    def test_invalid_amounts_are_zero(self):
        """Test that invalid amounts decode to zero."""
        line = 'd1 d2 CNY card 类型 描述 abc ¥5 CNY n/a'
        record = SpacedParser().parse_record(line)
        assert record.deposit_amount == 0.0
        assert record.withdrawal_amount == 0.0
        assert record.transaction_amount == 0.0

    def test_tabs_count_as_whitespace(self):
        """Test that tabs separate tokens too."""
        line = 'd1\td2\tCNY\tcard\t类型\t咖啡\t店\t--\t12.00\tCNY\t12.00'
        record = SpacedParser().parse_record(line)
        assert record.description == '咖啡 店'
        assert record.transaction_amount == 12.0

    def test_empty_description(self):
        """Test a line with no description words."""
        record = SpacedParser().parse_record('d1 d2 CNY card 类型 1.00 -- CNY 1.00')
        assert record.description == ''
        assert record.deposit_amount == 1.0

    def test_no_field_count_check(self):
        """Test that long lines are accepted."""
        result = SpacedParser().parse_line('d1 d2 CNY card 类型 a b c d e f g h 1 2 CNY 3', 1)
        assert result.ok
        assert result.record.description == 'a b c d e f g h'

    def test_short_line_is_degenerate(self):
        """Test that a short line yields a degenerate record."""
        record = SpacedParser().parse_record('2024-09-01 2024-09-02 CNY')

        assert record.transaction_date == '2024-09-01'
        assert record.card_number == ''
        assert record.transaction_type == ''
        assert record.description == ''
        assert record.transaction_currency == '2024-09-02'
        assert record.deposit_amount == 0.0
        assert record.withdrawal_amount == 0.0
        assert record.transaction_amount == 0.0


class TestBracketedParser:
    """Tests for the 7-column dialect with bracketed sub-fields."""

    def test_parse_line(self):
        """Test parsing a well-formed line."""
        result = BracketedParser().parse_line(bracketed_line(' 消费 [CNY 88.50] [汇率 7.1234] '), 1)

        assert result.ok
        record = result.record
        assert isinstance(record, BracketedRecord)
        assert record.account_type == '信用卡'
        assert record.transaction_date == '2024-09-01'
        assert record.posting_date == '2024-09-02'
        assert record.card_number == '6222****1234'
        assert record.deposit_amount is None
        assert record.withdrawal_amount == 88.5
        assert record.description == '消费'
        assert record.currency == 'CNY'
        assert record.amount == 88.5
        assert record.exchange_rate == 7.1234

    def test_field_set(self):
        """Test that records carry exactly the declared fields."""
        record = BracketedParser().parse_record(bracketed_line('消费'))
        assert list(record.to_dict()) == BracketedRecord.column_names()
        assert len(record.to_dict()) == 10

    def test_second_cny_bracket_wins(self):
        """Test that the second CNY bracket wins."""
        record = BracketedParser().parse_record(bracketed_line('消费 [CNY 1.00] [CNY 2.50]'))
        assert record.amount == 2.5

    def test_no_brackets_leaves_fields_absent(self):
        """Test that sub-fields stay absent without brackets."""
        record = BracketedParser().parse_record(bracketed_line('工资', deposit='5,000.00', withdrawal='-'))
        assert record.deposit_amount == 5000.0
        assert record.withdrawal_amount is None
        assert record.currency is None
        assert record.amount is None
        assert record.exchange_rate is None

    def test_strict_amounts(self):
        """Test that deposit and withdrawal parse strictly."""
        record = BracketedParser().parse_record(bracketed_line('消费', deposit='¥5', withdrawal='abc'))
        assert record.deposit_amount is None
        assert record.withdrawal_amount is None

    def test_malformed_cny_bracket_is_not_fatal(self):
        """Test that a malformed CNY bracket is not fatal."""
        result = BracketedParser().parse_line(bracketed_line('消费 [CNY ?]'), 1)
        assert result.ok
        assert result.record.currency == 'CNY'
        assert result.record.amount is None

    @pytest.mark.parametrize('count', [6, 8])
    def test_wrong_field_count(self, count):
        """Test lines with the wrong number of fields."""
        result = BracketedParser().parse_line('\t'.join(['x'] * count), 2)
        assert isinstance(result.error, FieldCountError)
        assert result.error.expected == 7
        assert result.error.actual == count
