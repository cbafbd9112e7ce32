"""Schedule 8812, Credits for Qualifying Children and Other Dependents."""

from decimal import Decimal
from typing import List

from calculator.decimal_math import ZERO, cap, ceil_to, min_decimal, money, sum_fields
from forms.fields import FieldValue
from forms.form import Attachment, inclusion_check
from models.taxpayer import Dependent


class Schedule8812(Attachment):
    tag = "f1040s8"
    sequence_index = 47

    def qualifying_children(self) -> List[Dependent]:
        max_age = self.parameters.federal.child_tax_credit.max_age
        return [
            d for d in self.info.taxpayer.dependents
            if d.is_under(max_age, self.tax_year) and d.ssid
        ]

    def other_dependents(self) -> List[Dependent]:
        children = self.qualifying_children()
        return [d for d in self.info.taxpayer.dependents if d not in children]

    @inclusion_check
    def is_needed(self) -> bool:
        return len(self.info.taxpayer.dependents) > 0

    # Part I

    def l1(self) -> Decimal:
        return self.parent.l11()

    def l3(self) -> Decimal:
        return self.l1()

    def l4(self) -> int:
        return len(self.qualifying_children())

    def l5(self) -> Decimal:
        return self.l4() * self.parameters.federal.child_tax_credit.per_child

    def l6(self) -> int:
        return len(self.other_dependents())

    def l7(self) -> Decimal:
        return self.l6() * self.parameters.federal.child_tax_credit.per_other_dependent

    def l8(self) -> Decimal:
        return self.l5() + self.l7()

    def l9(self) -> Decimal:
        return self.parameters.federal.child_tax_credit.phase_out_threshold.get(self.filing_status)

    def l10(self) -> Decimal:
        params = self.parameters.federal.child_tax_credit
        return ceil_to(cap(self.l3() - self.l9()), params.phase_out_step)

    def l11(self) -> Decimal:
        return self.l10() * self.parameters.federal.child_tax_credit.phase_out_rate

    def l12(self) -> Decimal:
        return cap(self.l8() - self.l11())

    def l13(self) -> Decimal:
        """Credit Limit Worksheet A: tax less the Schedule 3 credits claimed first."""
        schedule_3 = self.parent.schedule_3
        other_credits = schedule_3.l8() if schedule_3.is_needed() else None
        return cap(self.parent.l18() - sum_fields([other_credits]))

    def l14(self) -> Decimal:
        """Nonrefundable child tax credit and credit for other dependents."""
        return min_decimal(self.l12(), self.l13())

    # Part II-A: Additional child tax credit

    def l16a(self) -> Decimal:
        return cap(self.l12() - self.l14())

    def l16b(self) -> Decimal:
        return self.l4() * self.parameters.federal.child_tax_credit.refundable_per_child

    def l17(self) -> Decimal:
        return min_decimal(self.l16a(), self.l16b())

    def l18a(self) -> Decimal:
        return self.parent.earned_income()

    def l19(self) -> Decimal:
        threshold = self.parameters.federal.child_tax_credit.earned_income_threshold
        return cap(self.l18a() - threshold)

    def l20(self) -> Decimal:
        return money(self.l19() * self.parameters.federal.child_tax_credit.earned_income_rate)

    def l27(self) -> Decimal:
        """Additional child tax credit."""
        if self.l4() == 0 or self.l16a() == 0:
            return ZERO
        return min_decimal(self.l17(), self.l20())

    def fields(self) -> List[FieldValue]:
        header = self.parent.header
        return [
            f"{header.first_name} {header.last_name}",
            header.ssn,
            self.l1(),
            self.l3(),
            self.l4(),
            self.l5(),
            self.l6(),
            self.l7(),
            self.l8(),
            self.l9(),
            self.l10(),
            self.l11(),
            self.l12(),
            self.l13(),
            self.l14(),
            self.l16a(),
            self.l16b(),
            self.l17(),
            self.l18a(),
            self.l19(),
            self.l20(),
            self.l27(),
        ]
