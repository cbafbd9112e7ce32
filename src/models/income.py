"""
Income document models.

Amounts are Decimal; pydantic accepts int, float or str input and
converts. Every document records whose income it is through
``person_role`` so joint returns can split earned income per spouse.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from models.jurisdiction import State
from models.taxpayer import PersonRole

ZERO = Decimal("0")


class Income1099Type(str, Enum):
    INT = "INT"
    DIV = "DIV"
    G = "G"
    NEC = "NEC"
    SSA = "SSA"
    B = "B"


class IncomeW2(BaseModel):
    """W-2 wage statement"""
    model_config = ConfigDict(frozen=True)

    employer: str
    employer_ein: Optional[str] = None
    person_role: PersonRole = PersonRole.PRIMARY
    income: Decimal = Field(ge=0, description="Box 1: Wages, tips, other compensation")
    fed_withholding: Decimal = Field(default=ZERO, ge=0, description="Box 2")
    ss_wages: Optional[Decimal] = Field(None, ge=0, description="Box 3")
    ss_withholding: Decimal = Field(default=ZERO, ge=0, description="Box 4")
    medicare_income: Optional[Decimal] = Field(None, ge=0, description="Box 5")
    medicare_withholding: Decimal = Field(default=ZERO, ge=0, description="Box 6")
    state: Optional[State] = Field(None, description="Box 15")
    state_wages: Optional[Decimal] = Field(None, ge=0, description="Box 16")
    state_withholding: Decimal = Field(default=ZERO, ge=0, description="Box 17")
    local_wages: Optional[Decimal] = Field(None, ge=0, description="Box 18")
    local_withholding: Decimal = Field(default=ZERO, ge=0, description="Box 19")
    locality: Optional[str] = Field(None, description="Box 20")

    @property
    def social_security_wages(self) -> Decimal:
        return self.income if self.ss_wages is None else self.ss_wages


class _Income1099(BaseModel):
    model_config = ConfigDict(frozen=True)

    payer: str
    payer_tin: Optional[str] = None
    person_role: PersonRole = PersonRole.PRIMARY
    fed_withholding: Decimal = Field(default=ZERO, ge=0)
    state: Optional[State] = None
    state_withholding: Decimal = Field(default=ZERO, ge=0)


class Income1099Int(_Income1099):
    form: Literal["INT"] = "INT"
    interest: Decimal = Field(ge=0, description="Box 1: Interest income")
    us_bond_interest: Decimal = Field(default=ZERO, ge=0, description="Box 3")
    tax_exempt_interest: Decimal = Field(default=ZERO, ge=0, description="Box 8")


class Income1099Div(_Income1099):
    form: Literal["DIV"] = "DIV"
    dividends: Decimal = Field(ge=0, description="Box 1a: Total ordinary dividends")
    qualified_dividends: Decimal = Field(default=ZERO, ge=0, description="Box 1b")
    total_capital_gains_distributions: Decimal = Field(default=ZERO, ge=0, description="Box 2a")


class Income1099G(_Income1099):
    form: Literal["G"] = "G"
    unemployment_compensation: Decimal = Field(ge=0, description="Box 1")


class Income1099Nec(_Income1099):
    form: Literal["NEC"] = "NEC"
    nonemployee_compensation: Decimal = Field(ge=0, description="Box 1")


class Income1099Ssa(_Income1099):
    form: Literal["SSA"] = "SSA"
    net_benefits: Decimal = Field(description="Box 5: Net benefits (may be negative)")


class Income1099B(_Income1099):
    """
    Broker proceeds, summarized by holding period.

    Totals are for sales with basis reported to the IRS and no
    adjustments, which go directly on Schedule D lines 1a and 8a.
    """
    form: Literal["B"] = "B"
    short_term_proceeds: Decimal = Field(default=ZERO, ge=0, description="Box 1d, box 2 short-term")
    short_term_cost_basis: Decimal = Field(default=ZERO, ge=0, description="Box 1e, box 2 short-term")
    long_term_proceeds: Decimal = Field(default=ZERO, ge=0, description="Box 1d, box 2 long-term")
    long_term_cost_basis: Decimal = Field(default=ZERO, ge=0, description="Box 1e, box 2 long-term")

    @property
    def short_term_gain(self) -> Decimal:
        return self.short_term_proceeds - self.short_term_cost_basis

    @property
    def long_term_gain(self) -> Decimal:
        return self.long_term_proceeds - self.long_term_cost_basis


Income1099 = Annotated[
    Union[Income1099Int, Income1099Div, Income1099G, Income1099Nec, Income1099Ssa, Income1099B],
    Field(discriminator="form"),
]


class EstimatedTaxPayment(BaseModel):
    """Federal estimated payment (Form 1040-ES voucher)."""
    model_config = ConfigDict(frozen=True)

    payment_date: date
    amount: Decimal = Field(ge=0)


class DependentCareExpense(BaseModel):
    """Amount paid to one care provider (Form 2441 Part I)."""
    model_config = ConfigDict(frozen=True)

    provider_name: str
    provider_tin: Optional[str] = None
    amount: Decimal = Field(ge=0)
