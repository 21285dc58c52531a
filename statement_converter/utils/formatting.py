"""
Formatting utilities for line splitting and amount normalization.
"""

import re
from dataclasses import dataclass
from typing import List, Optional


# Pre-compiled regex patterns (compiled once at module load)
_NON_NUMERIC = re.compile(r'[^\d.\-]')
_NUMBER = re.compile(r'^-?(?:\d+\.?\d*|\.\d+)$')
_LEADING_FLOAT = re.compile(r'^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')

# Tokens meaning "no transaction in this column"
PLACEHOLDER_TOKENS = frozenset({'-', '--'})

# Markers inside [...] spans of bracketed descriptions
CNY_MARKER = 'CNY'
RATE_MARKER = '汇率'


def split_lines(text: str) -> List[str]:
    """
    Split raw file content into non-blank lines.

    A line is blank when it is empty after stripping whitespace. Kept lines
    are returned exactly as they appear in the file, in file order.

    Args:
        text: Whole file content

    Returns:
        List of non-blank lines
    """
    if not text:
        return []
    return [line for line in text.split('\n') if line.strip()]


def parse_amount(amount_str: Optional[str], strip_symbols: bool = True,
                 default: Optional[float] = None) -> Optional[float]:
    """
    Parse an amount token and return float.

    Handles formats:
    - 1,234.56 (thousands separators)
    - ¥1,234.56 / CNY 1234.56 (currency symbols, with strip_symbols)
    - -12.00 (leading minus)
    - - or -- (placeholder for "no amount")

    Args:
        amount_str: Amount token to parse
        strip_symbols: Remove everything except digits, '.' and '-' when True,
            only thousands-separator commas when False
        default: Returned for placeholders, empty tokens and parse failures.
            None keeps the amount absent; 0.0 gives the lenient behaviour.

    Returns:
        Float value of the amount, or default
    """
    if amount_str is None:
        return default

    token = amount_str.strip()
    if token in PLACEHOLDER_TOKENS:
        return default

    if strip_symbols:
        token = _NON_NUMERIC.sub('', token)
    else:
        token = token.replace(',', '')

    if not _NUMBER.match(token):
        return default
    return float(token)


def parse_rate(rate_str: str) -> Optional[float]:
    """Parse the leading floating-point number of a token, None if there is none."""
    match = _LEADING_FLOAT.match(rate_str.strip())
    if not match:
        return None
    return float(match.group(0))


@dataclass(frozen=True)
class BracketFields:
    """Sub-fields mined from the [...] spans of a description."""
    description: str
    currency: Optional[str] = None
    amount: Optional[float] = None
    exchange_rate: Optional[float] = None


def extract_bracket_fields(description: str) -> BracketFields:
    """
    Pull [CNY ...] and [汇率 ...] sub-fields out of a free-text description.

    Spans are scanned left to right and never overlap: each '[' is closed by
    the next ']'. A later span with the same marker overwrites the earlier
    value. Every complete span is removed from the description whether or not
    its content was recognized. An unclosed '[' is left in place.

    Examples:
        "消费 [CNY 88.50] [汇率 7.1234]" -> description "消费", currency "CNY",
        amount 88.5, exchange_rate 7.1234

    Args:
        description: Raw description text

    Returns:
        BracketFields with the residual description and any extracted values
    """
    currency = None
    amount = None
    exchange_rate = None
    kept = []

    pos = 0
    while True:
        start = description.find('[', pos)
        if start == -1:
            break
        end = description.find(']', start + 1)
        if end == -1:
            break

        kept.append(description[pos:start])
        content = description[start + 1:end]

        if content.startswith(CNY_MARKER):
            currency = CNY_MARKER
            amount = parse_amount(content[len(CNY_MARKER):], strip_symbols=False)
        elif content.startswith(RATE_MARKER):
            exchange_rate = parse_rate(content[len(RATE_MARKER):])

        pos = end + 1

    kept.append(description[pos:])

    return BracketFields(
        description=''.join(kept).strip(),
        currency=currency,
        amount=amount,
        exchange_rate=exchange_rate,
    )
