"""
Base class for city income tax returns.

A city return is an attachment of the state return for the same state.
It reads the state return (its parent) and, through it, the federal
return.
"""

from __future__ import annotations

from abc import abstractmethod
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from calculator.brackets import BracketTable, compute_bracket_tax
from calculator.decimal_math import cap, sum_fields
from forms.fields import FieldValue, nonzero_or_absent, total_or_absent
from forms.form import Attachment, inclusion_check
from forms.local.local_registry import normalize_city

if TYPE_CHECKING:
    from forms.federal.f1040 import F1040
    from forms.state.state_form import StateReturn

LOCAL_RETURN_SEQUENCE = 150


class LocalReturn(Attachment):
    sequence_index = LOCAL_RETURN_SEQUENCE

    # True when the city tax is computed and paid on the state return itself
    reported_on_state_return = False

    def __init__(self, state_return: "StateReturn", city_id: str, resident: bool = True):
        super().__init__(state_return)
        self.city_id = city_id
        self.resident = resident
        self.config = state_return.parameters.localities[city_id]

    @property
    def state_return(self) -> "StateReturn":
        return self.parent

    @property
    def f1040(self) -> "F1040":
        return self.parent.f1040

    @inclusion_check
    def is_needed(self) -> bool:
        return self.resident or self.tax_due() > 0

    @abstractmethod
    def taxable_income(self) -> Decimal:
        """Income the city taxes."""

    def rate_table(self) -> BracketTable:
        if self.resident:
            return self.config.resident_brackets.table(self.filing_status)
        return BracketTable.flat(self.config.nonresident_rate)

    def tax(self) -> Decimal:
        return compute_bracket_tax(self.taxable_income(), self.rate_table())

    def credits(self) -> Optional[Decimal]:
        return None

    def tax_due(self) -> Decimal:
        return cap(self.tax() - sum_fields([self.credits()]))

    def city_w2s(self):
        """W-2s whose box 20 locality names this city."""
        names = {normalize_city(n) for n in [self.city_id, self.config.name, *self.config.aliases]}
        return [
            w2 for w2 in self.info.w2s
            if w2.locality and normalize_city(w2.locality) in names
        ]

    def withholding(self) -> Optional[Decimal]:
        local = self.info.local_tax_info
        amounts = [w2.local_withholding for w2 in self.city_w2s()]
        if local is not None:
            extra = local.local_withholding if self.resident else local.work_city_withholding
            if extra:
                amounts.append(extra)
        return nonzero_or_absent(total_or_absent(amounts))

    def estimated_payments(self) -> Optional[Decimal]:
        local = self.info.local_tax_info
        if local is None or not self.resident:
            return None
        return nonzero_or_absent(local.estimated_payments)

    def total_payments(self) -> Decimal:
        return sum_fields([self.withholding(), self.estimated_payments()])

    def refund(self) -> Decimal:
        return cap(self.total_payments() - self.tax_due())

    def amount_owed(self) -> Decimal:
        return cap(self.tax_due() - self.total_payments())

    def fields(self) -> List[FieldValue]:
        header = self.parent.header
        return [
            header.display_name,
            header.ssn,
            self.config.name,
            self.resident,
            self.taxable_income(),
            self.tax(),
            self.credits(),
            self.tax_due(),
            self.withholding(),
            self.estimated_payments(),
            self.total_payments(),
            self.refund(),
            self.amount_owed(),
        ]

