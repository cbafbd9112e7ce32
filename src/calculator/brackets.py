"""
Progressive bracket tax.

One algorithm serves every jurisdiction. A flat-rate jurisdiction is a
table with no bounds and a single rate; a surtax is one more bracket.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterator, Optional, Sequence, Tuple

from calculator.decimal_math import Numeric, ZERO, min_decimal, round_dollar, to_decimal


@dataclass(frozen=True)
class BracketTable:
    """
    Ordered bracket upper bounds and their marginal rates.

    ``rates`` is one longer than ``bounds``: the last rate applies above
    the highest bound with no upper limit.
    """
    bounds: Tuple[Decimal, ...]
    rates: Tuple[Decimal, ...]

    def __post_init__(self):
        if len(self.rates) != len(self.bounds) + 1:
            raise ValueError(
                f"Bracket table needs {len(self.bounds) + 1} rates for "
                f"{len(self.bounds)} bounds, got {len(self.rates)}"
            )
        for lower, upper in zip(self.bounds, self.bounds[1:]):
            if upper <= lower:
                raise ValueError(f"Bracket bounds must ascend: {lower} then {upper}")

    @classmethod
    def of(cls, bounds: Sequence[Numeric], rates: Sequence[Numeric]) -> "BracketTable":
        return cls(
            bounds=tuple(to_decimal(b) for b in bounds),
            rates=tuple(to_decimal(r) for r in rates),
        )

    @classmethod
    def flat(cls, rate_value: Numeric) -> "BracketTable":
        return cls(bounds=(), rates=(to_decimal(rate_value),))

    def pairs(self) -> Iterator[Tuple[Optional[Decimal], Decimal]]:
        """(upper bound, rate) pairs; the final bound is None (unbounded)."""
        for index, rate_value in enumerate(self.rates):
            yield (self.bounds[index] if index < len(self.bounds) else None), rate_value

    def marginal_rate(self, income: Numeric) -> Decimal:
        income_d = to_decimal(income)
        for bound, rate_value in self.pairs():
            if bound is None or income_d <= bound:
                return rate_value
        return self.rates[-1]


def progressive_tax(income: Numeric, table: BracketTable) -> Decimal:
    """
    Tax on income before rounding.

    Each slice between the previous bound and the current bound is taxed at
    that bracket's rate. Income equal to a bound is taxed entirely at the
    lower bracket's rate.

    Examples:
        >>> progressive_tax(50000, BracketTable.of(
        ...     [10000, 25000, 40000, 60000],
        ...     ["0.0236", "0.0315", "0.0354", "0.0472", "0.0512"]))
        Decimal('1711.5000')
    """
    income_d = to_decimal(income)
    total_tax = ZERO
    prev_threshold = ZERO

    for threshold, rate_value in table.pairs():
        if income_d <= prev_threshold:
            break

        taxable = income_d - prev_threshold if threshold is None else (
            min_decimal(income_d, threshold) - prev_threshold
        )
        total_tax += taxable * rate_value

        if threshold is None:
            break
        prev_threshold = threshold

    return total_tax


def compute_bracket_tax(income: Numeric, table: BracketTable) -> Decimal:
    """
    Tax on income, rounded half-up to whole dollars.

    Zero or negative income owes nothing.
    """
    if to_decimal(income) <= 0:
        return ZERO
    return round_dollar(progressive_tax(income, table))
