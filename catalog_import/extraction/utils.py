"""
Extraction Utilities

Safe cell access and numeric coercion for raw source rows.
None of these functions raise on bad input.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Sequence

from ..models import UNSET_COLUMN

# Leading numeric part of a cell, after optional currency symbol
_NUMBER_PREFIX = re.compile(r'^[-+]?(\d+(\.\d*)?|\.\d+)([eE][-+]?\d+)?')
# Largest exponent written out in plain digits
_MAX_PLAIN_EXPONENT = 15
_CURRENCY_CHARS = '$£€¥ '


def column_value(row: Sequence[Any], column_index: int) -> Any:
    """
    Read one cell from a row.

    Args:
        row: Ordered cell values
        column_index: Zero-based column index, or -1 for an unmapped field

    Returns:
        The raw cell, or '' when the column is unset, out of range,
        or the cell is empty/falsy
    """
    if column_index == UNSET_COLUMN or column_index < 0 or column_index >= len(row):
        return ''
    return row[column_index] or ''


def cell_text(value: Any) -> str:
    """Render a cell value as trimmed text."""
    if value is None:
        return ''
    return str(value).strip()


def parse_decimal(value: Any) -> Optional[Decimal]:
    """
    Parse a cell as a decimal number.

    Accepts numbers, numeric strings, and strings with a leading currency
    symbol or thousands separators ("$1,299.50") and scientific notation
    ("1.2e3"). Trailing text after the number is ignored ("12.50 USD" -> 12.50).

    Returns:
        Decimal value, or None when nothing numeric can be read
    """
    if value is None or value == '' or isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        try:
            result = Decimal(str(value))
        except InvalidOperation:
            return None
        return result if result.is_finite() else None

    text = str(value).strip().lstrip(_CURRENCY_CHARS).replace(',', '')
    match = _NUMBER_PREFIX.match(text)
    if not match:
        return None
    number = Decimal(match.group(0))
    if match.group(3):
        # "1.2e3" is written out as 1200
        if abs(number.adjusted()) > _MAX_PLAIN_EXPONENT:
            return None
        number = Decimal(format(number, 'f'))
    return number


def parse_int(value: Any) -> Optional[int]:
    """
    Parse a cell as an integer, truncating any fractional part.

    Returns:
        Integer value, or None when nothing numeric can be read
    """
    number = parse_decimal(value)
    if number is None:
        return None
    return int(number)


def column_letter(column_index: int) -> str:
    """
    Render a zero-based column index as a spreadsheet column letter.

    Example:
        >>> column_letter(0)
        'A'
        >>> column_letter(27)
        'AB'
        >>> column_letter(-1)
        'Not Set'
    """
    if column_index < 0:
        return 'Not Set'

    letters = ''
    n = column_index + 1
    while n:
        n, remainder = divmod(n - 1, 26)
        letters = chr(65 + remainder) + letters
    return letters
