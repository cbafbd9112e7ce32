"""Schedule B, Interest and Ordinary Dividends."""

from decimal import Decimal
from typing import List

from calculator.decimal_math import sum_fields
from forms.fields import FieldValue
from forms.form import Attachment, inclusion_check
from models.income import Income1099Type

MAX_INTEREST_ROWS = 14
MAX_DIVIDEND_ROWS = 16


class ScheduleB(Attachment):
    tag = "f1040sb"
    sequence_index = 8

    @inclusion_check
    def is_needed(self) -> bool:
        threshold = self.parameters.federal.schedule_b_threshold
        return self.l4() > threshold or self.l6() > threshold

    def l2(self) -> Decimal:
        return sum_fields(f.interest for f in self.info.f1099s_of(Income1099Type.INT))

    def l4(self) -> Decimal:
        return self.l2()

    def l6(self) -> Decimal:
        return sum_fields(f.dividends for f in self.info.f1099s_of(Income1099Type.DIV))

    def _rows(self, kind: Income1099Type, amount_of, size: int) -> List[FieldValue]:
        documents = self.info.f1099s_of(kind)
        rows: List[FieldValue] = []
        for index in range(size):
            if index < len(documents):
                rows += [documents[index].payer, amount_of(documents[index])]
            else:
                rows += [None, None]
        return rows

    def fields(self) -> List[FieldValue]:
        header = self.parent.header
        return [
            f"{header.first_name} {header.last_name}",
            header.ssn,
            *self._rows(Income1099Type.INT, lambda f: f.interest, MAX_INTEREST_ROWS),
            self.l2(),
            self.l4(),
            *self._rows(Income1099Type.DIV, lambda f: f.dividends, MAX_DIVIDEND_ROWS),
            self.l6(),
        ]
