"""Philadelphia wage and net profits tax."""

from decimal import Decimal

from calculator.decimal_math import cap, sum_fields
from forms.local.local_form import LocalReturn
from forms.local.local_registry import register_local


@register_local("PHILADELPHIA")
class PhiladelphiaWageTax(LocalReturn):
    """
    Residents pay on all wages and business net profit; non-residents
    pay the lower rate on wages earned in the city.
    """

    tag = "phila_wage"
    sequence_index = 151

    def wages(self) -> Decimal:
        if self.resident:
            return self.f1040.l1z()
        return sum_fields(w2.income for w2 in self.city_w2s())

    def net_profits(self) -> Decimal:
        schedule_c = self.f1040.schedule_c
        if not self.resident or not schedule_c.is_needed():
            return Decimal("0")
        return cap(schedule_c.l31())

    def taxable_income(self) -> Decimal:
        return self.wages() + self.net_profits()
