"""Jurisdiction codes and residency data."""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class State(str, Enum):
    """Two-letter codes of every state-level taxing authority."""
    AL = "AL"
    AK = "AK"
    AZ = "AZ"
    AR = "AR"
    CA = "CA"
    CO = "CO"
    CT = "CT"
    DC = "DC"
    DE = "DE"
    FL = "FL"
    GA = "GA"
    HI = "HI"
    ID = "ID"
    IL = "IL"
    IN = "IN"
    IA = "IA"
    KS = "KS"
    KY = "KY"
    LA = "LA"
    ME = "ME"
    MD = "MD"
    MA = "MA"
    MI = "MI"
    MN = "MN"
    MS = "MS"
    MO = "MO"
    MT = "MT"
    NE = "NE"
    NV = "NV"
    NH = "NH"
    NJ = "NJ"
    NM = "NM"
    NY = "NY"
    NC = "NC"
    ND = "ND"
    OH = "OH"
    OK = "OK"
    OR = "OR"
    PA = "PA"
    RI = "RI"
    SC = "SC"
    SD = "SD"
    TN = "TN"
    TX = "TX"
    UT = "UT"
    VT = "VT"
    VA = "VA"
    WA = "WA"
    WV = "WV"
    WI = "WI"
    WY = "WY"


class StateResidency(BaseModel):
    """A state the taxpayer lived in during the tax year."""
    model_config = ConfigDict(frozen=True)

    state: State


class LocalTaxInfo(BaseModel):
    """
    City residence and work location for local income taxes.

    Cities are free text; the local form registry normalises them
    (case, punctuation, known aliases such as "New York City" for NYC).
    """
    model_config = ConfigDict(frozen=True)

    residence_city: Optional[str] = None
    residence_state: Optional[State] = None
    is_resident: bool = True
    work_city: Optional[str] = None
    work_state: Optional[State] = None
    works_in_different_city: bool = False
    local_withholding: Decimal = Field(default=Decimal("0"), ge=0)
    work_city_withholding: Decimal = Field(default=Decimal("0"), ge=0)
    estimated_payments: Decimal = Field(default=Decimal("0"), ge=0)
    other_municipal_tax_paid: Decimal = Field(default=Decimal("0"), ge=0)
