"""
Field value helpers.

A field is what a form hands to its PDF layout, one per position:
absent (None), text, a number, a checkbox or a date. Absent is kept
distinct from zero and from the empty string all the way to output.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Union

FieldValue = Union[None, str, Decimal, int, bool, date]


def nonzero_or_absent(value: Optional[Decimal]) -> Optional[Decimal]:
    """Lines printed blank rather than "0"."""
    if value is None or value == 0:
        return None
    return value


def field_to_json(value: FieldValue):
    """JSON-friendly form of a field value for ``to_dict`` output."""
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, date):
        return value.isoformat()
    return value


def total_or_absent(amounts: Iterable[Decimal]) -> Optional[Decimal]:
    """
    Total of the given source amounts, or absent when there are none.

    A line fed by zero documents stays blank; a line fed by documents
    that sum to zero shows 0.
    """
    amounts = list(amounts)
    if not amounts:
        return None
    return sum(amounts, Decimal("0"))
