"""West Virginia Form IT-140 for tax year 2025."""

from decimal import Decimal
from typing import Optional

from calculator.decimal_math import cap, min_decimal, sum_fields
from forms.fields import nonzero_or_absent
from forms.state.state_form import StateReturn
from forms.state.state_registry import register_state
from models.jurisdiction import State
from models.taxpayer import FilingStatus


@register_state(State.WV, 2025)
class WestVirginiaReturn(StateReturn):

    def low_income_exclusion(self) -> Optional[Decimal]:
        """
        Low-income earned income exclusion (Schedule M).

        Applies only when federal AGI does not exceed the exclusion
        amount; the excluded part is limited to earned income.
        """
        if self.filing_status == FilingStatus.MARRIED_SEPARATE:
            limit = self.config.option("low_income_exclusion_mfs")
        else:
            limit = self.config.option("low_income_exclusion")
        if self.f1040.l11() > limit:
            return None
        return nonzero_or_absent(min_decimal(cap(self.f1040.earned_income()), limit))

    def subtractions(self) -> Optional[Decimal]:
        social_security = super().subtractions()
        exclusion = self.low_income_exclusion()
        if social_security is None and exclusion is None:
            return None
        return sum_fields([social_security, exclusion])
