"""Schedule 1, Additional Income and Adjustments to Income."""

from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional

from calculator.decimal_math import ZERO, cap, min_decimal, money, sum_fields
from forms.fields import FieldValue, total_or_absent
from forms.form import Attachment, Form, inclusion_check
from models.income import Income1099Type
from models.taxpayer import FilingStatus

PHASE_OUT_RATIO_PLACES = Decimal("0.001")


class Schedule1(Attachment):
    tag = "f1040s1"
    sequence_index = 1

    @inclusion_check
    def is_needed(self) -> bool:
        # Decided from inputs only: F1040 line 9 reads this predicate,
        # and line 21 reads line 9.
        return (
            self.l3() is not None
            or self.l7() is not None
            or self.l15() is not None
            or self._claims_student_loan_interest()
        )

    def attachments(self) -> List[Form]:
        return [self.parent.schedule_c]

    # Part I: Additional income

    def l3(self) -> Optional[Decimal]:
        schedule_c = self.parent.schedule_c
        return schedule_c.l31() if schedule_c.is_needed() else None

    def l7(self) -> Optional[Decimal]:
        return total_or_absent(
            f.unemployment_compensation for f in self.info.f1099s_of(Income1099Type.G)
        )

    def l8z(self) -> Optional[Decimal]:
        return None

    def l9(self) -> Optional[Decimal]:
        return self.l8z()

    def l10(self) -> Decimal:
        return sum_fields([self.l3(), self.l7(), self.l9()])

    # Part II: Adjustments to income

    def l15(self) -> Optional[Decimal]:
        schedule_se = self.parent.schedule_se
        return schedule_se.l13() if schedule_se.is_needed() else None

    def _claims_student_loan_interest(self) -> bool:
        return (
            self.info.student_loan_interest > 0
            and self.filing_status != FilingStatus.MARRIED_SEPARATE
        )

    def l21(self) -> Optional[Decimal]:
        """Student loan interest deduction (worksheet in the instructions)."""
        if not self._claims_student_loan_interest():
            return None

        params = self.parameters.federal.student_loan_interest
        status = self.filing_status
        allowed = min_decimal(self.info.student_loan_interest, params.maximum)

        magi = self.parent.l9() - self.adjustments_before_student_loan()
        excess = cap(magi - params.phase_out_start.get(status))
        if excess == 0:
            return allowed
        ratio = (excess / params.phase_out_range.get(status)).quantize(
            PHASE_OUT_RATIO_PLACES, rounding=ROUND_HALF_UP
        )
        if ratio >= 1:
            return ZERO
        return money(allowed - allowed * ratio)

    def adjustments_before_student_loan(self) -> Decimal:
        """Adjustments the student loan and social security worksheets subtract."""
        return sum_fields([self.l15()])

    def l26(self) -> Decimal:
        return sum_fields([self.l15(), self.l21()])

    def fields(self) -> List[FieldValue]:
        header = self.parent.header
        return [
            f"{header.first_name} {header.last_name}",
            header.ssn,
            self.l3(),
            self.l7(),
            self.l8z(),
            self.l9(),
            self.l10(),
            self.l15(),
            self.l21(),
            self.l26(),
        ]
