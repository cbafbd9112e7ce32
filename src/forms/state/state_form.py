"""
Base class for state income tax returns.

A state return is a top-level form built from the completed federal
return. The template below covers the shape most states share; each
line is a method a state class overrides where its rules differ:

- starting income taken from the federal return
- additions and subtractions
- standard deduction and exemptions
- bracket tax, credits, payments, refund or amount owed
"""

from __future__ import annotations

import re
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from calculator.brackets import compute_bracket_tax
from calculator.decimal_math import cap, round_dollar, sum_fields
from forms.fields import FieldValue, nonzero_or_absent, total_or_absent
from forms.form import Form, cached_line
from forms.local.local_registry import local_forms_for
from models.jurisdiction import State

if TYPE_CHECKING:
    from forms.federal.f1040 import F1040

STATE_RETURN_SEQUENCE = 100


def state_form_tag(state: State, form_name: str) -> str:
    """'IL', 'IL-1040' -> 'il1040'; 'WV', 'IT-140' -> 'wvit140'."""
    slug = re.sub(r"[^a-z0-9]", "", form_name.lower())
    prefix = state.value.lower()
    return slug if slug.startswith(prefix) else prefix + slug


class StateReturn(Form):
    """
    Parameter-driven state return.

    States whose rules fit the template register this class directly;
    others subclass it and override individual lines.
    """

    sequence_index = STATE_RETURN_SEQUENCE

    def __init__(self, f1040: "F1040", state: State):
        self.f1040 = f1040
        self.state = state
        self.info = f1040.info
        self.parameters = f1040.parameters
        self.diagnostics = f1040.diagnostics
        self.memoize = f1040.memoize
        self.header = f1040.header
        self.config = f1040.parameters.state(state)
        self.tag = state_form_tag(state, self.config.form_name)
        self.local_forms = local_forms_for(self)

    def attachments(self) -> List[Form]:
        return list(self.local_forms)

    # Income

    def starting_income(self) -> Decimal:
        """Federal amount the state return starts from."""
        if self.config.starts_from == "federal_taxable_income":
            return self.f1040.l15()
        if self.config.starts_from == "federal_wages":
            return self.f1040.l1z()
        return self.f1040.l11()

    def additions(self) -> Optional[Decimal]:
        return None

    def subtractions(self) -> Optional[Decimal]:
        """Taxable social security is subtracted where the state exempts it."""
        if self.config.social_security_exempt:
            return self.f1040.l6b()
        return None

    @cached_line
    def state_agi(self) -> Decimal:
        return cap(
            self.starting_income()
            + sum_fields([self.additions()])
            - sum_fields([self.subtractions()])
        )

    # Deductions and exemptions

    def standard_deduction(self) -> Optional[Decimal]:
        return nonzero_or_absent(self.config.standard_deduction.get(self.filing_status))

    def personal_exemptions(self) -> Optional[Decimal]:
        return nonzero_or_absent(self.config.personal_exemption.get(self.filing_status))

    def dependent_exemptions(self) -> Optional[Decimal]:
        count = len(self.info.taxpayer.dependents)
        return nonzero_or_absent(count * self.config.dependent_exemption)

    def senior_exemptions(self) -> Optional[Decimal]:
        return nonzero_or_absent(self.f1040.deduction_boxes() * self.config.senior_exemption)

    def exemptions(self) -> Decimal:
        return sum_fields([
            self.personal_exemptions(),
            self.dependent_exemptions(),
            self.senior_exemptions(),
        ])

    @cached_line
    def taxable_income(self) -> Decimal:
        return cap(
            self.state_agi()
            - sum_fields([self.standard_deduction()])
            - self.exemptions()
        )

    # Tax and credits

    @cached_line
    def tax(self) -> Decimal:
        table = self.config.brackets.table(self.filing_status)
        return compute_bracket_tax(self.taxable_income(), table)

    def nonrefundable_credits(self) -> Optional[Decimal]:
        return None

    def _reported_local_forms(self):
        return [
            form for form in self.local_forms
            if form.reported_on_state_return and form.is_needed()
        ]

    def local_tax(self) -> Optional[Decimal]:
        """City tax carried onto the state return; most cities are filed separately."""
        return total_or_absent(form.tax_due() for form in self._reported_local_forms())

    def local_payments(self) -> Optional[Decimal]:
        return total_or_absent(form.total_payments() for form in self._reported_local_forms())

    @cached_line
    def net_tax(self) -> Decimal:
        return sum_fields([
            cap(self.tax() - sum_fields([self.nonrefundable_credits()])),
            self.local_tax(),
        ])

    def earned_income_credit(self) -> Optional[Decimal]:
        """State percentage of the federal EIC; absent when no federal EIC is claimed."""
        if not self.config.eitc_rate:
            return None
        schedule_eic = self.f1040.schedule_eic
        if not schedule_eic.is_needed():
            return None
        return round_dollar(schedule_eic.credit() * self.config.eitc_rate)

    # Payments

    def withholding(self) -> Optional[Decimal]:
        amounts = [w2.state_withholding for w2 in self.info.state_w2s(self.state)]
        amounts += [f.state_withholding for f in self.info.f1099s if f.state == self.state]
        return total_or_absent(amounts)

    def estimated_payments(self) -> Optional[Decimal]:
        return None

    @cached_line
    def total_payments(self) -> Decimal:
        return sum_fields([
            self.withholding(),
            self.estimated_payments(),
            self.earned_income_credit(),
            self.local_payments(),
        ])

    def refund(self) -> Decimal:
        return cap(self.total_payments() - self.net_tax())

    def amount_owed(self) -> Decimal:
        return cap(self.net_tax() - self.total_payments())

    def fields(self) -> List[FieldValue]:
        return [
            *self.header.fields(),
            self.filing_status.value,
            self.starting_income(),
            self.additions(),
            self.subtractions(),
            self.state_agi(),
            self.standard_deduction(),
            self.personal_exemptions(),
            self.dependent_exemptions(),
            self.senior_exemptions(),
            self.exemptions(),
            self.taxable_income(),
            self.tax(),
            self.nonrefundable_credits(),
            self.local_tax(),
            self.net_tax(),
            self.withholding(),
            self.estimated_payments(),
            self.earned_income_credit(),
            self.local_payments(),
            self.total_payments(),
            self.refund(),
            self.amount_owed(),
        ]
