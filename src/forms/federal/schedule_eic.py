"""
Schedule EIC, Earned Income Credit.

The credit itself flows to Form 1040 line 27 and, through the federal
return, to every state that grants a percentage of it. The schedule is
included whenever a credit is allowed.
"""

from decimal import Decimal
from typing import List

from calculator.decimal_math import ZERO, cap, max_decimal, min_decimal, round_dollar
from forms.fields import FieldValue
from forms.form import Attachment, cached_line, inclusion_check
from models.taxpayer import Dependent, FilingStatus, Person

MAX_CHILD_ROWS = 3


class ScheduleEIC(Attachment):
    tag = "f1040sei"
    sequence_index = 43

    def qualifying_children(self) -> List[Dependent]:
        params = self.parameters.federal.earned_income_credit
        year = self.tax_year
        children = [
            d for d in self.info.taxpayer.dependents
            if d.months_lived_with_taxpayer > 6 and (
                d.is_under(params.qualifying_child_max_age, year)
                or (d.is_student and d.is_under(params.student_max_age, year))
                or d.is_disabled
            )
        ]
        return children[:params.max_children]

    def _meets_age_test(self, person: Person) -> bool:
        params = self.parameters.federal.earned_income_credit
        age = person.age_at_year_end(self.tax_year)
        if age is None:
            self.missing("credit", f"no date of birth for {person.full_name}; age test fails")
            return False
        return params.min_age_without_children <= age < params.max_age_without_children

    def allowed(self) -> bool:
        params = self.parameters.federal.earned_income_credit
        if self.filing_status == FilingStatus.MARRIED_SEPARATE:
            return False
        if self.parent.investment_income() > params.investment_income_limit:
            return False
        if self.parent.earned_income() <= 0:
            return False
        if self.qualifying_children():
            return True

        people: List[Person] = [self.info.taxpayer.primary_person]
        spouse = self.info.taxpayer.spouse
        if self.filing_status == FilingStatus.MARRIED_JOINT and spouse is not None:
            people.append(spouse)
        return any(self._meets_age_test(p) for p in people)

    @cached_line
    def credit(self) -> Decimal:
        if not self.allowed():
            return ZERO

        params = self.parameters.federal.earned_income_credit
        schedule = params.schedule_for(len(self.qualifying_children()))
        earned = self.parent.earned_income()

        phase_in = min_decimal(earned * schedule.phase_in_rate, schedule.max_credit)
        phase_out_income = max_decimal(earned, self.parent.l11())
        start = schedule.phase_out_start.get(self.filing_status)
        reduction = cap(phase_out_income - start) * schedule.phase_out_rate
        return round_dollar(cap(phase_in - reduction))

    @inclusion_check
    def is_needed(self) -> bool:
        return self.credit() > 0

    def fields(self) -> List[FieldValue]:
        header = self.parent.header
        rows: List[FieldValue] = []
        children = self.qualifying_children()
        for index in range(MAX_CHILD_ROWS):
            if index < len(children):
                child = children[index]
                rows += [
                    child.full_name,
                    child.ssid,
                    child.date_of_birth,
                    child.is_student,
                    child.is_disabled,
                    child.relationship,
                    child.months_lived_with_taxpayer,
                ]
            else:
                rows += [None, None, None, False, False, None, None]
        return [f"{header.first_name} {header.last_name}", header.ssn, *rows]
