"""
Decimal Math Utilities for Form Line Calculations.

Every line value produced by a form is a Decimal, an absent value
(None) or a non-numeric field. The helpers here implement the two
arithmetic idioms nearly every line uses:

- sum_fields: add optional line values; absent lines count as zero
  only at the moment of summation
- cap: clamp to a statutory range ("not less than zero",
  "limited to ...")

Rounding to whole dollars is done by the caller with round_dollar()
directly after the arithmetic that produces a whole-dollar line, so
intermediate worksheet lines keep their cents.
"""

from decimal import Decimal, ROUND_CEILING, ROUND_HALF_UP
from typing import Iterable, Optional, Union

# Type alias for values that can be converted to Decimal
Numeric = Union[int, float, str, Decimal]

MONEY_PLACES = Decimal("0.01")  # Round to pennies
DOLLAR_PLACES = Decimal("1")

ZERO = Decimal("0")


def to_decimal(value: Numeric) -> Decimal:
    """
    Convert a numeric value to Decimal.

    Examples:
        >>> to_decimal(100)
        Decimal('100')
        >>> to_decimal(100.50)
        Decimal('100.5')
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # Convert float to string first to preserve representation
        return Decimal(str(value))
    return Decimal(value)


def money(value: Numeric) -> Decimal:
    """
    Convert value to money (rounded to pennies, half-up).

    Examples:
        >>> money(100.994)
        Decimal('100.99')
        >>> money("100.995")
        Decimal('101.00')
    """
    return to_decimal(value).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)


def round_dollar(value: Numeric) -> Decimal:
    """
    Round to the nearest whole dollar, half-up, as published tax tables do.

    Examples:
        >>> round_dollar("1711.50")
        Decimal('1712')
        >>> round_dollar("1711.49")
        Decimal('1711')
    """
    return to_decimal(value).quantize(DOLLAR_PLACES, rounding=ROUND_HALF_UP)


def ceil_to(value: Numeric, step: Numeric) -> Decimal:
    """
    Round up to the next multiple of step.

    Phase-out worksheets use this ("if not a multiple of $1,000, round up").

    Examples:
        >>> ceil_to(1, 1000)
        Decimal('1000')
        >>> ceil_to(2000, 1000)
        Decimal('2000')
    """
    step_d = to_decimal(step)
    units = (to_decimal(value) / step_d).to_integral_value(rounding=ROUND_CEILING)
    return units * step_d


def min_decimal(*values: Numeric) -> Decimal:
    return min(to_decimal(v) for v in values)


def max_decimal(*values: Numeric) -> Decimal:
    return max(to_decimal(v) for v in values)


def sum_fields(values: Iterable[Optional[Numeric]]) -> Decimal:
    """
    Sum optional line values, ignoring absent (None) entries.

    Never returns None: an all-absent input sums to zero. This is the
    only place absent becomes zero.

    Examples:
        >>> sum_fields([None, None])
        Decimal('0')
        >>> sum_fields([None, 5])
        Decimal('5')
    """
    total = ZERO
    for value in values:
        if value is not None:
            total += to_decimal(value)
    return total


def cap(
    value: Optional[Numeric],
    floor: Optional[Numeric] = ZERO,
    ceiling: Optional[Numeric] = None,
) -> Decimal:
    """
    Clamp a line amount to the range [floor, ceiling].

    Models "enter -0- if less than zero" and "limited to" instructions.
    Either bound may be None for no limit. An absent value caps as zero.

    Examples:
        >>> cap(-50)
        Decimal('0')
        >>> cap(50, 0, 30)
        Decimal('30')
    """
    result = ZERO if value is None else to_decimal(value)
    if floor is not None:
        result = max(result, to_decimal(floor))
    if ceiling is not None:
        result = min(result, to_decimal(ceiling))
    return result
