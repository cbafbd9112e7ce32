"""Schedule 3, Additional Credits and Payments."""

from decimal import Decimal
from typing import List, Optional

from calculator.decimal_math import sum_fields
from forms.fields import FieldValue
from forms.form import Attachment, Form, inclusion_check


class Schedule3(Attachment):
    tag = "f1040s3"
    sequence_index = 3

    @inclusion_check
    def is_needed(self) -> bool:
        return any(line is not None for line in (self.l2(), self.l10()))

    def attachments(self) -> List[Form]:
        return [self.parent.f2441]

    # Part I: Nonrefundable credits

    def l2(self) -> Optional[Decimal]:
        f2441 = self.parent.f2441
        return f2441.credit() if f2441.is_needed() else None

    def l8(self) -> Decimal:
        return sum_fields([self.l2()])

    # Part II: Other payments and refundable credits

    def l10(self) -> Optional[Decimal]:
        """Amount paid with request for extension; not collected."""
        return None

    def l15(self) -> Decimal:
        return sum_fields([self.l10()])

    def fields(self) -> List[FieldValue]:
        header = self.parent.header
        return [
            f"{header.first_name} {header.last_name}",
            header.ssn,
            self.l2(),
            self.l8(),
            self.l10(),
            self.l15(),
        ]
