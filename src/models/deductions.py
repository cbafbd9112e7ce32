"""Itemized deduction inputs (Schedule A)."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

ZERO = Decimal("0")


class ItemizedDeductions(BaseModel):
    """
    Amounts paid during the year that Schedule A may deduct.

    Limits (the medical floor, the SALT cap, the charitable percentage
    limits) are applied on the schedule, not here.
    """
    model_config = ConfigDict(frozen=True)

    medical_and_dental: Decimal = Field(default=ZERO, ge=0, description="Line 1")
    state_and_local_taxes: Decimal = Field(default=ZERO, ge=0, description="Line 5a")
    is_sales_tax: bool = Field(default=False, description="Line 5a box: general sales taxes elected")
    real_estate_taxes: Decimal = Field(default=ZERO, ge=0, description="Line 5b")
    personal_property_taxes: Decimal = Field(default=ZERO, ge=0, description="Line 5c")
    mortgage_interest: Decimal = Field(default=ZERO, ge=0, description="Line 8a (Form 1098)")
    mortgage_points: Decimal = Field(default=ZERO, ge=0, description="Line 8c")
    investment_interest: Decimal = Field(default=ZERO, ge=0, description="Line 9")
    charity_cash: Decimal = Field(default=ZERO, ge=0, description="Line 11")
    charity_other: Decimal = Field(default=ZERO, ge=0, description="Line 12")
