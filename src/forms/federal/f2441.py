"""Form 2441, Child and Dependent Care Expenses."""

from decimal import Decimal
from typing import List

from calculator.decimal_math import ZERO, ceil_to, max_decimal, min_decimal, money, sum_fields
from forms.fields import FieldValue
from forms.form import Attachment, inclusion_check
from models.taxpayer import Dependent, FilingStatus, PersonRole

MAX_PROVIDER_ROWS = 2
MAX_PERSON_ROWS = 3


class F2441(Attachment):
    tag = "f2441"
    sequence_index = 21

    @inclusion_check
    def is_needed(self) -> bool:
        return len(self.info.dependent_care_expenses) > 0

    def qualifying_persons(self) -> List[Dependent]:
        max_age = self.parameters.federal.dependent_care.max_age
        return [
            d for d in self.info.taxpayer.dependents
            if d.is_under(max_age, self.tax_year) or d.is_disabled
        ]

    def l2_total_expenses(self) -> Decimal:
        return sum_fields(e.amount for e in self.info.dependent_care_expenses)

    def l3(self) -> Decimal:
        params = self.parameters.federal.dependent_care
        persons = self.qualifying_persons()
        if not persons:
            self.missing("l3", "care expenses reported without a qualifying person")
            return ZERO
        limit = params.expense_limit_one if len(persons) == 1 else params.expense_limit_two_or_more
        return min_decimal(self.l2_total_expenses(), limit)

    def l4(self) -> Decimal:
        return self.parent.earned_income(PersonRole.PRIMARY)

    def l5(self) -> Decimal:
        if self.filing_status != FilingStatus.MARRIED_JOINT:
            return self.l4()
        if self.info.taxpayer.spouse is None:
            self.missing("l5", "joint return without spouse; spouse earned income is zero")
            return ZERO
        return self.parent.earned_income(PersonRole.SPOUSE)

    def l6(self) -> Decimal:
        return min_decimal(self.l3(), self.l4(), self.l5())

    def l7(self) -> Decimal:
        return self.parent.l11()

    def l8(self) -> Decimal:
        """Decimal rate from the AGI table in the instructions."""
        params = self.parameters.federal.dependent_care
        excess = self.l7() - params.agi_floor
        if excess <= 0:
            return params.max_rate
        steps = ceil_to(excess, params.agi_step) / params.agi_step
        return max_decimal(params.min_rate, params.max_rate - steps * params.rate_step)

    def l9(self) -> Decimal:
        return money(self.l6() * self.l8())

    def l10(self) -> Decimal:
        """Credit limit: tax on Form 1040 line 18."""
        return self.parent.l18()

    def l11(self) -> Decimal:
        return min_decimal(self.l9(), self.l10())

    def credit(self) -> Decimal:
        return self.l11()

    def fields(self) -> List[FieldValue]:
        header = self.parent.header
        providers: List[FieldValue] = []
        for index in range(MAX_PROVIDER_ROWS):
            expenses = self.info.dependent_care_expenses
            if index < len(expenses):
                providers += [expenses[index].provider_name, expenses[index].provider_tin, expenses[index].amount]
            else:
                providers += [None, None, None]

        persons: List[FieldValue] = []
        qualifying = self.qualifying_persons()
        for index in range(MAX_PERSON_ROWS):
            if index < len(qualifying):
                persons += [qualifying[index].full_name, qualifying[index].ssid]
            else:
                persons += [None, None]

        return [
            f"{header.first_name} {header.last_name}",
            header.ssn,
            *providers,
            *persons,
            self.l2_total_expenses(),
            self.l3(),
            self.l4(),
            self.l5(),
            self.l6(),
            self.l7(),
            self.l8(),
            self.l9(),
            self.l10(),
            self.l11(),
        ]
