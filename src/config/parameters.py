"""
Typed tax parameters.

YAML files under ``tax_parameters/`` are validated into these models
by ``TaxConfigLoader``. Amounts keyed by filing status accept either a
mapping (``{S: 15750, MFJ: 31500, ...}``) or a single scalar that
applies to every status.
"""

from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from calculator.brackets import BracketTable
from forms.errors import ConfigurationError
from models.jurisdiction import State
from models.taxpayer import FilingStatus

_STATUS_KEYS = [status.value for status in FilingStatus]


def _expand_by_status(value):
    """Allow a scalar (or one bracket spec) to stand for every filing status."""
    if isinstance(value, dict) and set(value) & set(_STATUS_KEYS):
        return value
    return {key: value for key in _STATUS_KEYS}


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class ByStatus(_Frozen):
    """An amount that depends on filing status."""
    S: Decimal
    MFJ: Decimal
    MFS: Decimal
    HOH: Decimal
    W: Decimal

    @model_validator(mode="before")
    @classmethod
    def expand_scalar(cls, data):
        return _expand_by_status(data)

    def get(self, status: FilingStatus) -> Decimal:
        return getattr(self, status.value)


class BracketSpec(_Frozen):
    bounds: List[Decimal] = Field(default_factory=list)
    rates: List[Decimal]

    @model_validator(mode="after")
    def check_shape(self):
        # BracketTable enforces the shape; build once here so bad config fails at load
        BracketTable.of(self.bounds, self.rates)
        return self

    def table(self) -> BracketTable:
        return BracketTable.of(self.bounds, self.rates)


class StatusBrackets(_Frozen):
    """Bracket tables keyed by filing status."""
    S: BracketSpec
    MFJ: BracketSpec
    MFS: BracketSpec
    HOH: BracketSpec
    W: BracketSpec

    @model_validator(mode="before")
    @classmethod
    def expand_single(cls, data):
        return _expand_by_status(data)

    def table(self, status: FilingStatus) -> BracketTable:
        return getattr(self, status.value).table()


class AdditionalDeduction(_Frozen):
    unmarried: Decimal
    married: Decimal


class DependentStandardDeduction(_Frozen):
    minimum: Decimal
    earned_income_addition: Decimal


class SocialSecurityParameters(_Frozen):
    base_amount: ByStatus
    adjusted_base_amount: ByStatus
    first_tier_rate: Decimal = Decimal("0.5")
    second_tier_rate: Decimal = Decimal("0.85")


class SelfEmploymentParameters(_Frozen):
    net_earnings_factor: Decimal
    minimum_net_earnings: Decimal
    social_security_wage_base: Decimal
    social_security_rate: Decimal
    medicare_rate: Decimal


class StudentLoanParameters(_Frozen):
    maximum: Decimal
    phase_out_start: ByStatus
    phase_out_range: ByStatus


class ChildTaxCreditParameters(_Frozen):
    per_child: Decimal
    per_other_dependent: Decimal
    max_age: int
    refundable_per_child: Decimal
    earned_income_threshold: Decimal
    earned_income_rate: Decimal
    phase_out_threshold: ByStatus
    phase_out_rate: Decimal
    phase_out_step: Decimal = Decimal("1000")


class DependentCareParameters(_Frozen):
    max_age: int
    expense_limit_one: Decimal
    expense_limit_two_or_more: Decimal
    max_rate: Decimal
    min_rate: Decimal
    agi_floor: Decimal
    agi_step: Decimal
    rate_step: Decimal


class EarnedIncomeSchedule(_Frozen):
    """One column of the EIC table (0, 1, 2, or 3+ qualifying children)."""
    children: int
    phase_in_rate: Decimal
    max_credit: Decimal
    phase_out_rate: Decimal
    phase_out_start: ByStatus


class EarnedIncomeCreditParameters(_Frozen):
    investment_income_limit: Decimal
    qualifying_child_max_age: int
    student_max_age: int
    min_age_without_children: int
    max_age_without_children: int
    schedules: List[EarnedIncomeSchedule]

    @field_validator("schedules")
    @classmethod
    def sorted_by_children(cls, schedules: List[EarnedIncomeSchedule]):
        return sorted(schedules, key=lambda s: s.children)

    @property
    def max_children(self) -> int:
        return self.schedules[-1].children

    def schedule_for(self, children: int) -> EarnedIncomeSchedule:
        count = min(children, self.max_children)
        for schedule in self.schedules:
            if schedule.children == count:
                return schedule
        raise KeyError(children)


class CapitalGainsParameters(_Frozen):
    zero_rate_max: ByStatus
    fifteen_rate_max: ByStatus
    fifteen_rate: Decimal
    twenty_rate: Decimal
    loss_limit: ByStatus


class ItemizedDeductionParameters(_Frozen):
    medical_floor_rate: Decimal
    salt_cap: ByStatus
    salt_floor: ByStatus
    salt_phase_out_start: ByStatus
    salt_phase_out_rate: Decimal
    charity_cash_limit_rate: Decimal
    charity_other_limit_rate: Decimal


class FederalParameters(_Frozen):
    brackets: StatusBrackets
    standard_deduction: ByStatus
    additional_deduction: AdditionalDeduction
    dependent_standard_deduction: DependentStandardDeduction
    social_security: SocialSecurityParameters
    self_employment: SelfEmploymentParameters
    student_loan_interest: StudentLoanParameters
    schedule_b_threshold: Decimal
    child_tax_credit: ChildTaxCreditParameters
    dependent_care: DependentCareParameters
    earned_income_credit: EarnedIncomeCreditParameters
    capital_gains: CapitalGainsParameters
    itemized_deductions: ItemizedDeductionParameters


class StateParameters(_Frozen):
    """
    Inputs for a state return built on the common state template.

    ``options`` carries constants only one state uses (a low-income
    exclusion, a surcharge threshold); the state's form class reads them
    by name.
    """
    name: str
    form_name: str
    starts_from: str = "federal_agi"
    brackets: StatusBrackets
    standard_deduction: ByStatus = Field(default_factory=lambda: ByStatus.model_validate(0))
    personal_exemption: ByStatus = Field(default_factory=lambda: ByStatus.model_validate(0))
    dependent_exemption: Decimal = Decimal("0")
    senior_exemption: Decimal = Decimal("0")
    social_security_exempt: bool = True
    eitc_rate: Decimal = Decimal("0")
    options: Dict[str, Decimal] = Field(default_factory=dict)

    @field_validator("starts_from")
    @classmethod
    def known_start(cls, value: str) -> str:
        allowed = {"federal_agi", "federal_taxable_income", "federal_wages"}
        if value not in allowed:
            raise ValueError(f"starts_from must be one of {sorted(allowed)}")
        return value

    def option(self, name: str, default: Optional[Decimal] = None) -> Decimal:
        if name in self.options:
            return self.options[name]
        if default is None:
            raise KeyError(f"{self.name} parameters have no option '{name}'")
        return default


class LocalParameters(_Frozen):
    """A city income tax."""
    name: str
    state: State
    aliases: List[str] = Field(default_factory=list)
    resident_brackets: StatusBrackets
    nonresident_rate: Decimal = Decimal("0")
    exemption_amount: Decimal = Decimal("0")
    options: Dict[str, Decimal] = Field(default_factory=dict)

    def option(self, name: str, default: Optional[Decimal] = None) -> Decimal:
        if name in self.options:
            return self.options[name]
        if default is None:
            raise KeyError(f"{self.name} parameters have no option '{name}'")
        return default


class TaxParameters(_Frozen):
    """Everything the form graph reads for one tax year."""
    tax_year: int
    federal: FederalParameters
    states: Dict[State, StateParameters] = Field(default_factory=dict)
    localities: Dict[str, LocalParameters] = Field(default_factory=dict)

    def state(self, code: State) -> StateParameters:
        try:
            return self.states[code]
        except KeyError:
            raise ConfigurationError(
                f"No {self.tax_year} parameters for state {code.value}"
            ) from None
