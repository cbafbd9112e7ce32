"""Schedule 2, Additional Taxes."""

from decimal import Decimal
from typing import List, Optional

from calculator.decimal_math import sum_fields
from forms.fields import FieldValue
from forms.form import Attachment, Form, inclusion_check


class Schedule2(Attachment):
    tag = "f1040s2"
    sequence_index = 2

    @inclusion_check
    def is_needed(self) -> bool:
        return self.l3() is not None or self.l21() > 0

    def attachments(self) -> List[Form]:
        return [self.parent.schedule_se]

    def l3(self) -> Optional[Decimal]:
        """Part I total (alternative minimum tax, excess advance PTC); not computed."""
        return None

    def l4(self) -> Optional[Decimal]:
        schedule_se = self.parent.schedule_se
        return schedule_se.l12() if schedule_se.is_needed() else None

    def l21(self) -> Decimal:
        return sum_fields([self.l4()])

    def fields(self) -> List[FieldValue]:
        header = self.parent.header
        return [
            f"{header.first_name} {header.last_name}",
            header.ssn,
            self.l3(),
            self.l4(),
            self.l21(),
        ]
