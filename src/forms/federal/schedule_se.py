"""Schedule SE, Self-Employment Tax."""

from decimal import Decimal
from typing import List, Optional

from calculator.decimal_math import ZERO, cap, min_decimal, money, sum_fields
from forms.fields import FieldValue
from forms.form import Attachment, Form, cached_line, inclusion_check
from models.taxpayer import PersonRole


class ScheduleSE(Attachment):
    tag = "f1040sse"
    sequence_index = 17

    @inclusion_check
    def is_needed(self) -> bool:
        params = self.parameters.federal.self_employment
        return self.parent.schedule_c.is_needed() and self.l4a() >= params.minimum_net_earnings

    def attachments(self) -> List[Form]:
        return [self.parent.schedule_c]

    def l2(self) -> Optional[Decimal]:
        schedule_c = self.parent.schedule_c
        return schedule_c.l31() if schedule_c.is_needed() else None

    def l3(self) -> Decimal:
        return sum_fields([self.l2()])

    def l4a(self) -> Decimal:
        l3 = self.l3()
        if l3 <= 0:
            return l3
        return money(l3 * self.parameters.federal.self_employment.net_earnings_factor)

    def l4c(self) -> Decimal:
        if self.l4a() < self.parameters.federal.self_employment.minimum_net_earnings:
            return ZERO
        return self.l4a()

    def l6(self) -> Decimal:
        return self.l4c()

    def l7(self) -> Decimal:
        return self.parameters.federal.self_employment.social_security_wage_base

    def l8a(self) -> Decimal:
        return sum_fields(
            w2.social_security_wages for w2 in self.info.w2s_for(PersonRole.PRIMARY)
        )

    def l9(self) -> Decimal:
        return cap(self.l7() - self.l8a())

    def l10(self) -> Decimal:
        rate = self.parameters.federal.self_employment.social_security_rate
        return money(min_decimal(self.l6(), self.l9()) * rate)

    def l11(self) -> Decimal:
        return money(self.l6() * self.parameters.federal.self_employment.medicare_rate)

    @cached_line
    def l12(self) -> Decimal:
        """Self-employment tax."""
        return self.l10() + self.l11()

    def l13(self) -> Decimal:
        """Deduction for one-half of self-employment tax."""
        return money(self.l12() / 2)

    def fields(self) -> List[FieldValue]:
        header = self.parent.header
        return [
            f"{header.first_name} {header.last_name}",
            header.ssn,
            self.l2(),
            self.l3(),
            self.l4a(),
            self.l4c(),
            self.l6(),
            self.l7(),
            self.l8a(),
            self.l9(),
            self.l10(),
            self.l11(),
            self.l12(),
            self.l13(),
        ]
