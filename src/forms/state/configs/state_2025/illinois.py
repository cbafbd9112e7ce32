"""
Illinois Form IL-1040 for tax year 2025.

Flat 4.95% on net income. Federal AGI is the base, taxable social
security is subtracted, and the exemption allowance is lost entirely
above the income limit.
"""

from decimal import Decimal
from typing import Optional

from forms.state.state_form import StateReturn
from forms.state.state_registry import register_state
from models.jurisdiction import State
from models.taxpayer import FilingStatus


@register_state(State.IL, 2025)
class IllinoisReturn(StateReturn):

    def exemption_income_limit(self) -> Decimal:
        if self.filing_status == FilingStatus.MARRIED_JOINT:
            return self.config.option("exemption_income_limit_joint")
        return self.config.option("exemption_income_limit_single")

    def exemption_allowed(self) -> bool:
        return self.f1040.l11() <= self.exemption_income_limit()

    def personal_exemptions(self) -> Optional[Decimal]:
        if not self.exemption_allowed():
            return None
        return super().personal_exemptions()

    def dependent_exemptions(self) -> Optional[Decimal]:
        if not self.exemption_allowed():
            return None
        return super().dependent_exemptions()
