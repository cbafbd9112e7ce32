"""New York City resident personal income tax (IT-201 lines 47 to 58)."""

from decimal import Decimal
from typing import Optional

from forms.form import inclusion_check
from forms.local.local_form import LocalReturn
from forms.local.local_registry import register_local
from models.taxpayer import FilingStatus

_JOINT_STATUSES = (FilingStatus.MARRIED_JOINT, FilingStatus.QUALIFYING_WIDOW)


@register_local("NYC")
class NYCResidentTax(LocalReturn):
    """
    NYC tax is computed and paid on the New York State return.

    Only residents owe it; commuters have paid no NYC income tax since
    the nonresident earnings tax was repealed.
    """

    tag = "nyc"
    sequence_index = 150
    reported_on_state_return = True

    @inclusion_check
    def is_needed(self) -> bool:
        return self.resident

    def taxable_income(self) -> Decimal:
        if not self.resident:
            return Decimal("0")
        return self.state_return.taxable_income()

    def credits(self) -> Optional[Decimal]:
        """NYC school tax credit (fixed amount)."""
        if not self.resident:
            return None
        if self.f1040.l11() > self.config.option("school_credit_income_limit"):
            return None
        if self.filing_status in _JOINT_STATUSES:
            return self.config.option("school_credit_joint")
        return self.config.option("school_credit_single")

