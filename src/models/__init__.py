from .taxpayer import (
    Address,
    Dependent,
    FilingStatus,
    Person,
    PersonRole,
    PrimaryPerson,
    Spouse,
    TaxPayer,
)
from .jurisdiction import LocalTaxInfo, State, StateResidency
from .deductions import ItemizedDeductions
from .income import (
    DependentCareExpense,
    EstimatedTaxPayment,
    Income1099,
    Income1099B,
    Income1099Div,
    Income1099G,
    Income1099Int,
    Income1099Nec,
    Income1099Ssa,
    Income1099Type,
    IncomeW2,
)
from .information import TaxpayerInformation

__all__ = [
    'Address',
    'Dependent',
    'FilingStatus',
    'Person',
    'PersonRole',
    'PrimaryPerson',
    'Spouse',
    'TaxPayer',
    'LocalTaxInfo',
    'State',
    'StateResidency',
    'ItemizedDeductions',
    'DependentCareExpense',
    'EstimatedTaxPayment',
    'Income1099',
    'Income1099B',
    'Income1099Div',
    'Income1099G',
    'Income1099Int',
    'Income1099Nec',
    'Income1099Ssa',
    'Income1099Type',
    'IncomeW2',
    'TaxpayerInformation',
]
