"""California Form 540 for tax year 2025."""

from decimal import Decimal
from typing import Optional

from calculator.decimal_math import cap, round_dollar
from forms.form import cached_line
from forms.state.state_form import StateReturn
from forms.state.state_registry import register_state
from models.jurisdiction import State
from models.taxpayer import FilingStatus


@register_state(State.CA, 2025)
class CaliforniaReturn(StateReturn):
    """
    Exemptions are credits against tax rather than deductions, and the
    Mental Health Services Tax adds 1% on taxable income above 1,000,000.
    """

    def personal_credit_count(self) -> int:
        if self.filing_status in (FilingStatus.MARRIED_JOINT, FilingStatus.QUALIFYING_WIDOW):
            return 2
        return 1

    def exemption_credits(self) -> Decimal:
        personal = self.personal_credit_count() * self.config.option("exemption_credit_personal")
        dependents = len(self.info.taxpayer.dependents) * self.config.option("exemption_credit_dependent")
        return personal + dependents

    def nonrefundable_credits(self) -> Optional[Decimal]:
        return self.exemption_credits()

    def mental_health_tax(self) -> Decimal:
        excess = cap(self.taxable_income() - self.config.option("mental_health_threshold"))
        return round_dollar(excess * self.config.option("mental_health_rate"))

    @cached_line
    def tax(self) -> Decimal:
        return super().tax() + self.mental_health_tax()
