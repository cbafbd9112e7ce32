"""City of Detroit income tax return (Form 5118 / 5119)."""

from decimal import Decimal

from calculator.decimal_math import cap, sum_fields
from forms.local.local_form import LocalReturn
from forms.local.local_registry import register_local
from models.taxpayer import FilingStatus


@register_local("DETROIT")
class DetroitCityReturn(LocalReturn):
    tag = "detroit"
    sequence_index = 152

    def exemption_count(self) -> int:
        count = 1 + len(self.info.taxpayer.dependents)
        if self.filing_status == FilingStatus.MARRIED_JOINT and self.info.taxpayer.spouse:
            count += 1
        return count

    def income_subject_to_tax(self) -> Decimal:
        """Residents are taxed on federal AGI, non-residents on Detroit wages."""
        if self.resident:
            return self.f1040.l11()
        return sum_fields(w2.income for w2 in self.city_w2s())

    def taxable_income(self) -> Decimal:
        exemptions = self.exemption_count() * self.config.exemption_amount
        return cap(self.income_subject_to_tax() - exemptions)
