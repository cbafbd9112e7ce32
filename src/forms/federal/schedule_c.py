"""Schedule C, Profit or Loss From Business (Sole Proprietorship)."""

from decimal import Decimal
from typing import List, Optional

from calculator.decimal_math import sum_fields
from forms.fields import FieldValue, total_or_absent
from forms.form import Attachment, inclusion_check
from models.income import Income1099Type


class ScheduleC(Attachment):
    """
    One business for the primary filer, fed by 1099-NEC receipts.

    Reachable from both Schedule 1 (income) and Schedule SE (tax base);
    the assembler includes it once.
    """

    tag = "f1040sc"
    sequence_index = 9

    def _receipts(self):
        return self.info.f1099s_of(Income1099Type.NEC)

    @inclusion_check
    def is_needed(self) -> bool:
        return len(self._receipts()) > 0

    def l1(self) -> Optional[Decimal]:
        return total_or_absent(f.nonemployee_compensation for f in self._receipts())

    def l7(self) -> Decimal:
        return sum_fields([self.l1()])

    def l28(self) -> Decimal:
        return self.info.business_expenses

    def l31(self) -> Decimal:
        """Net profit or (loss)."""
        return self.l7() - self.l28()

    def fields(self) -> List[FieldValue]:
        header = self.parent.header
        return [
            f"{header.first_name} {header.last_name}",
            header.ssn,
            self.l1(),
            self.l7(),
            self.l28(),
            self.l31(),
        ]
