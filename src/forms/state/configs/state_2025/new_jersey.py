"""
New Jersey Form NJ-1040 for tax year 2025.

NJ gross income is built from the income categories it taxes rather
than from federal AGI. Social security is not one of them.
"""

from decimal import Decimal
from typing import Optional

from calculator.decimal_math import cap, sum_fields
from forms.state.state_form import StateReturn
from forms.state.state_registry import register_state
from models.jurisdiction import State


@register_state(State.NJ, 2025)
class NewJerseyReturn(StateReturn):

    def net_profits_from_business(self) -> Decimal:
        schedule_c = self.f1040.schedule_c
        if not schedule_c.is_needed():
            return Decimal("0")
        return cap(schedule_c.l31())

    def starting_income(self) -> Decimal:
        return sum_fields([
            self.f1040.l1z(),
            self.f1040.l2b(),
            self.f1040.l3b(),
            cap(self.f1040.l7()),
            self.net_profits_from_business(),
        ])

    def subtractions(self) -> Optional[Decimal]:
        return None
