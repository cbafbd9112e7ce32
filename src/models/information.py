"""
Validated taxpayer information consumed by the form graph.

The model is frozen: forms read it, never write it. Accessors here are
simple filters and totals over the input documents; anything that
depends on tax law lives on the forms.
"""

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from models.deductions import ItemizedDeductions
from models.income import (
    DependentCareExpense,
    EstimatedTaxPayment,
    Income1099,
    Income1099Type,
    IncomeW2,
)
from models.jurisdiction import LocalTaxInfo, State, StateResidency
from models.taxpayer import FilingStatus, PersonRole, TaxPayer


class TaxpayerInformation(BaseModel):
    """Complete input for one return build."""
    model_config = ConfigDict(frozen=True)

    taxpayer: TaxPayer
    w2s: List[IncomeW2] = Field(default_factory=list)
    f1099s: List[Income1099] = Field(default_factory=list)
    estimated_taxes: List[EstimatedTaxPayment] = Field(default_factory=list)
    dependent_care_expenses: List[DependentCareExpense] = Field(default_factory=list)
    business_expenses: Decimal = Field(default=Decimal("0"), ge=0)
    student_loan_interest: Decimal = Field(default=Decimal("0"), ge=0)
    itemized_deductions: Optional[ItemizedDeductions] = None
    short_term_loss_carryover: Decimal = Field(default=Decimal("0"), ge=0, description="Schedule D line 6")
    long_term_loss_carryover: Decimal = Field(default=Decimal("0"), ge=0, description="Schedule D line 14")
    state_residencies: List[StateResidency] = Field(default_factory=list)
    local_tax_info: Optional[LocalTaxInfo] = None

    @property
    def filing_status(self) -> FilingStatus:
        return self.taxpayer.filing_status

    def w2s_for(self, role: PersonRole) -> List[IncomeW2]:
        return [w2 for w2 in self.w2s if w2.person_role == role]

    def f1099s_of(self, kind: Income1099Type) -> List[Income1099]:
        return [f for f in self.f1099s if f.form == kind.value]

    def wages(self, role: Optional[PersonRole] = None) -> Decimal:
        w2s = self.w2s if role is None else self.w2s_for(role)
        return sum((w2.income for w2 in w2s), Decimal("0"))

    def state_w2s(self, state: State) -> List[IncomeW2]:
        return [w2 for w2 in self.w2s if w2.state == state]

    def jurisdiction_codes(self) -> List[State]:
        """
        State codes to file in, without repeats.

        Residency states come first, in filing order, then states named
        in W-2 box 15 that are not residency states.
        """
        seen = []
        states = [r.state for r in self.state_residencies]
        states += [w2.state for w2 in self.w2s if w2.state is not None]
        for state in states:
            if state not in seen:
                seen.append(state)
        return seen
