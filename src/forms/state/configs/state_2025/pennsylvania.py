"""
Pennsylvania Form PA-40 for tax year 2025.

PA taxes eight classes of income at one rate with no deductions or
exemptions; losses in one class do not offset another. Retirement
income and social security are not taxable, so nothing is subtracted.
"""

from decimal import Decimal
from typing import Optional

from calculator.decimal_math import cap, sum_fields
from forms.state.state_form import StateReturn
from forms.state.state_registry import register_state
from models.jurisdiction import State


@register_state(State.PA, 2025)
class PennsylvaniaReturn(StateReturn):

    def compensation(self) -> Decimal:
        return self.f1040.l1z()

    def interest(self) -> Decimal:
        return sum_fields([self.f1040.l2b()])

    def dividends(self) -> Decimal:
        return sum_fields([self.f1040.l3b()])

    def net_gains(self) -> Decimal:
        return cap(self.f1040.l7())

    def net_business_income(self) -> Decimal:
        schedule_c = self.f1040.schedule_c
        if not schedule_c.is_needed():
            return Decimal("0")
        return cap(schedule_c.l31())

    def starting_income(self) -> Decimal:
        return (
            self.compensation()
            + self.interest()
            + self.dividends()
            + self.net_gains()
            + self.net_business_income()
        )

    def subtractions(self) -> Optional[Decimal]:
        return None
