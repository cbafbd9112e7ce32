"""Schedule A, Itemized Deductions."""

from decimal import Decimal
from typing import List, Optional

from calculator.decimal_math import ZERO, cap, max_decimal, min_decimal, money, sum_fields
from forms.fields import FieldValue, nonzero_or_absent
from forms.form import Attachment, cached_line, inclusion_check
from models.deductions import ItemizedDeductions


class ScheduleA(Attachment):
    """
    Itemized deductions, filed only when they beat the standard deduction.

    Form 1040 line 12 takes line 17 when this schedule is needed and the
    standard deduction otherwise, so the return always claims the larger.
    """
    tag = "f1040sa"
    sequence_index = 7

    @property
    def deductions(self) -> ItemizedDeductions:
        return self.info.itemized_deductions or ItemizedDeductions()

    @inclusion_check
    def is_needed(self) -> bool:
        if self.info.itemized_deductions is None:
            return False
        return self.l17() > self.parent.standard_deduction()

    # Medical and dental

    def l1(self) -> Optional[Decimal]:
        return nonzero_or_absent(self.deductions.medical_and_dental)

    def l2(self) -> Decimal:
        return self.parent.l11()

    def l3(self) -> Decimal:
        return money(self.l2() * self.parameters.federal.itemized_deductions.medical_floor_rate)

    def l4(self) -> Decimal:
        return cap(sum_fields([self.l1()]) - self.l3())

    # Taxes you paid

    def l5a(self) -> Optional[Decimal]:
        return nonzero_or_absent(self.deductions.state_and_local_taxes)

    def l5b(self) -> Optional[Decimal]:
        return nonzero_or_absent(self.deductions.real_estate_taxes)

    def l5c(self) -> Optional[Decimal]:
        return nonzero_or_absent(self.deductions.personal_property_taxes)

    def l5d(self) -> Decimal:
        return sum_fields([self.l5a(), self.l5b(), self.l5c()])

    def salt_limit(self) -> Decimal:
        """The line 5e cap after the high-income phase-down."""
        params = self.parameters.federal.itemized_deductions
        status = self.filing_status
        excess = cap(self.l2() - params.salt_phase_out_start.get(status))
        reduced = params.salt_cap.get(status) - money(excess * params.salt_phase_out_rate)
        return max_decimal(params.salt_floor.get(status), reduced)

    def l5e(self) -> Decimal:
        return min_decimal(self.l5d(), self.salt_limit())

    def l7(self) -> Decimal:
        return self.l5e()

    # Interest you paid

    def l8a(self) -> Optional[Decimal]:
        return nonzero_or_absent(self.deductions.mortgage_interest)

    def l8c(self) -> Optional[Decimal]:
        return nonzero_or_absent(self.deductions.mortgage_points)

    def l8e(self) -> Decimal:
        return sum_fields([self.l8a(), self.l8c()])

    def l9(self) -> Optional[Decimal]:
        """Investment interest, limited to net investment income (Form 4952)."""
        paid = self.deductions.investment_interest
        if paid == 0:
            return None
        return min_decimal(paid, self.parent.investment_income())

    def l10(self) -> Decimal:
        return sum_fields([self.l8e(), self.l9()])

    # Gifts to charity

    def l11(self) -> Optional[Decimal]:
        rate = self.parameters.federal.itemized_deductions.charity_cash_limit_rate
        return nonzero_or_absent(cap(self.deductions.charity_cash, ceiling=money(self.l2() * rate)))

    def l12(self) -> Optional[Decimal]:
        rate = self.parameters.federal.itemized_deductions.charity_other_limit_rate
        return nonzero_or_absent(cap(self.deductions.charity_other, ceiling=money(self.l2() * rate)))

    def l14(self) -> Decimal:
        return sum_fields([self.l11(), self.l12()])

    @cached_line
    def l17(self) -> Decimal:
        """Total itemized deductions."""
        if self.info.itemized_deductions is None:
            return ZERO
        return sum_fields([self.l4(), self.l7(), self.l10(), self.l14()])

    def fields(self) -> List[FieldValue]:
        header = self.parent.header
        return [
            f"{header.first_name} {header.last_name}",
            header.ssn,
            self.l1(),
            self.l2(),
            self.l3(),
            self.l4(),
            self.deductions.is_sales_tax,
            self.l5a(),
            self.l5b(),
            self.l5c(),
            self.l5d(),
            self.l5e(),
            self.l7(),
            self.l8a(),
            self.l8c(),
            self.l8e(),
            self.l9(),
            self.l10(),
            self.l11(),
            self.l12(),
            self.l14(),
            self.l17(),
        ]
