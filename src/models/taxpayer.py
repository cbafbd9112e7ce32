from datetime import date
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class FilingStatus(str, Enum):
    """IRS filing status options"""
    SINGLE = "S"
    MARRIED_JOINT = "MFJ"
    MARRIED_SEPARATE = "MFS"
    HEAD_OF_HOUSEHOLD = "HOH"
    QUALIFYING_WIDOW = "W"


class PersonRole(str, Enum):
    """Whose income document this is."""
    PRIMARY = "PRIMARY"
    SPOUSE = "SPOUSE"
    DEPENDENT = "DEPENDENT"


class Address(BaseModel):
    """Mailing address of the primary filer."""
    model_config = ConfigDict(frozen=True)

    address: str
    apt: Optional[str] = None
    city: str
    state: Optional[str] = None
    zip: Optional[str] = None
    foreign_country: Optional[str] = None
    province: Optional[str] = None
    postal_code: Optional[str] = None


class Person(BaseModel):
    """Identity shared by every person on a return."""
    model_config = ConfigDict(frozen=True)

    first_name: str
    last_name: str
    ssid: Optional[str] = Field(None, description="Social Security Number")
    date_of_birth: Optional[date] = None
    is_blind: bool = False

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def age_at_year_end(self, tax_year: int) -> Optional[int]:
        """Age on December 31 of the tax year, or None when no birth date is known."""
        if self.date_of_birth is None:
            return None
        return tax_year - self.date_of_birth.year

    def is_65_or_older(self, tax_year: int) -> bool:
        # IRS treats a person born on January 1 as turning 65 the day before
        age = self.age_at_year_end(tax_year)
        if age is None:
            return False
        if age == 64 and (self.date_of_birth.month, self.date_of_birth.day) == (1, 1):
            return True
        return age >= 65


class PrimaryPerson(Person):
    address: Address
    is_taxpayer_dependent: bool = Field(
        default=False,
        description="Primary filer can be claimed as a dependent by someone else",
    )


class Spouse(Person):
    is_taxpayer_dependent: bool = False


class Dependent(Person):
    """
    Dependent claimed on the return.

    Age based tests (child tax credit, EIC, dependent care) read
    ``date_of_birth``; a dependent without one is treated as an adult.
    """
    relationship: str
    months_lived_with_taxpayer: int = Field(default=12, ge=0, le=12)
    is_student: bool = Field(default=False, description="Full-time student for 5+ months")
    is_disabled: bool = Field(default=False, description="Permanently and totally disabled")

    def is_under(self, age: int, tax_year: int) -> bool:
        years = self.age_at_year_end(tax_year)
        return years is not None and years < age


class TaxPayer(BaseModel):
    """Filing status and the people on the return."""
    model_config = ConfigDict(frozen=True)

    filing_status: FilingStatus
    primary_person: PrimaryPerson
    spouse: Optional[Spouse] = None
    dependents: List[Dependent] = Field(default_factory=list)
    contact_phone_number: Optional[str] = None
    contact_email: Optional[str] = None
