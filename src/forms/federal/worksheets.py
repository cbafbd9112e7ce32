"""
Worksheets from the Form 1040 instructions.

Worksheets are not filed, so they are plain helpers rather than forms.
Each holds the F1040 it belongs to and exposes its line results.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from calculator.brackets import compute_bracket_tax
from calculator.decimal_math import ZERO, cap, min_decimal, money, round_dollar, sum_fields

if TYPE_CHECKING:
    from forms.federal.f1040 import F1040


class SocialSecurityBenefitsWorksheet:
    """Social Security Benefits Worksheet (line 6b)."""

    def __init__(self, f1040: "F1040"):
        self.f1040 = f1040

    def taxable_benefits(self) -> Optional[Decimal]:
        f1040 = self.f1040
        benefits = f1040.l6a()
        if benefits is None:
            return None

        status = f1040.filing_status
        params = f1040.parameters.federal.social_security

        l1 = cap(benefits)
        l2 = l1 * params.first_tier_rate
        l3 = sum_fields([
            f1040.l1z(), f1040.l2b(), f1040.l3b(), f1040.l4b(),
            f1040.l5b(), f1040.l7(), f1040.l8(),
        ])
        l4 = sum_fields([f1040.l2a()])
        l5 = l2 + l3 + l4
        l6 = f1040.schedule_1.adjustments_before_student_loan()
        if l6 >= l5:
            return ZERO
        l7 = l5 - l6
        l8 = params.base_amount.get(status)
        if l8 >= l7:
            return ZERO
        l9 = cap(l7 - l8)
        l10 = params.adjusted_base_amount.get(status)
        l11 = cap(l9 - l10)
        l12 = min_decimal(l9, l10)
        l13 = l12 / 2
        l14 = min_decimal(l2, l13)
        l15 = l11 * params.second_tier_rate
        l16 = l14 + l15
        l17 = l1 * params.second_tier_rate
        return money(min_decimal(l16, l17))


class QualifiedDividendsCapitalGainWorksheet:
    """Qualified Dividends and Capital Gain Tax Worksheet (line 16)."""

    def __init__(self, f1040: "F1040"):
        self.f1040 = f1040

    def net_capital_gain(self) -> Decimal:
        """Line 3: the smaller of Schedule D lines 15 and 16, or line 7 without it."""
        schedule_d = self.f1040.schedule_d
        if schedule_d.is_needed():
            return schedule_d.worksheet_gain()
        return cap(self.f1040.l7())

    def applies(self) -> bool:
        qualified = sum_fields([self.f1040.l3a()])
        return qualified > 0 or self.net_capital_gain() > 0

    def tax(self) -> Decimal:
        f1040 = self.f1040
        status = f1040.filing_status
        federal = f1040.parameters.federal
        params = federal.capital_gains
        table = federal.brackets.table(status)

        l1 = f1040.l15()
        l2 = sum_fields([f1040.l3a()])
        l3 = self.net_capital_gain()
        l4 = l2 + l3
        l5 = cap(l1 - l4)
        l6 = params.zero_rate_max.get(status)
        l7 = min_decimal(l1, l6)
        l8 = min_decimal(l5, l7)
        l9 = l7 - l8
        l10 = min_decimal(l1, l4)
        l12 = l10 - l9
        l13 = params.fifteen_rate_max.get(status)
        l14 = min_decimal(l1, l13)
        l15 = l5 + l9
        l16 = cap(l14 - l15)
        l17 = min_decimal(l12, l16)
        l18 = l17 * params.fifteen_rate
        l19 = l9 + l17
        l20 = l10 - l19
        l21 = l20 * params.twenty_rate
        l22 = compute_bracket_tax(l5, table)
        l23 = round_dollar(l18 + l21 + l22)
        l24 = compute_bracket_tax(l1, table)
        return min_decimal(l23, l24)
