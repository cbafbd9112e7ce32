"""Pytest configuration and fixtures for test suite."""

import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from calculator.return_assembler import ReturnAssembler  # noqa: E402
from config.settings import EngineSettings  # noqa: E402
from config.tax_config_loader import TaxConfigLoader  # noqa: E402
from forms.federal.f1040 import F1040  # noqa: E402
from models import (  # noqa: E402
    Address,
    Dependent,
    FilingStatus,
    IncomeW2,
    PrimaryPerson,
    Spouse,
    StateResidency,
    TaxPayer,
    TaxpayerInformation,
)


def make_w2(
    income,
    state=None,
    state_withholding=0,
    fed_withholding=0,
    locality=None,
    local_withholding=0,
    **kwargs,
) -> IncomeW2:
    """Create a W-2 with the boxes most tests care about."""
    return IncomeW2(
        employer=kwargs.pop("employer", "Test Corp"),
        income=Decimal(str(income)),
        fed_withholding=Decimal(str(fed_withholding)),
        state=state,
        state_wages=Decimal(str(income)) if state else None,
        state_withholding=Decimal(str(state_withholding)),
        locality=locality,
        local_wages=Decimal(str(income)) if locality else None,
        local_withholding=Decimal(str(local_withholding)),
        **kwargs,
    )


def make_child(first_name="Kid", birth_year=2018, ssid="123-45-6789", **kwargs) -> Dependent:
    return Dependent(
        first_name=first_name,
        last_name="User",
        ssid=ssid,
        date_of_birth=date(birth_year, 6, 1),
        relationship=kwargs.pop("relationship", "son"),
        **kwargs,
    )


def make_info(
    filing_status: FilingStatus = FilingStatus.SINGLE,
    wages=None,
    withholding=0,
    states=(),
    w2s=None,
    f1099s=(),
    dependents=(),
    spouse=None,
    date_of_birth=date(1985, 3, 15),
    address_state=None,
    **kwargs,
) -> TaxpayerInformation:
    """
    Create taxpayer information for a test return.

    ``wages`` is a shortcut for one W-2 in the first residency state.
    """
    states = list(states)
    if w2s is None:
        w2s = []
        if wages is not None:
            w2s.append(make_w2(wages, state=states[0] if states else None, fed_withholding=withholding))

    if spouse is None and filing_status == FilingStatus.MARRIED_JOINT:
        spouse = Spouse(first_name="Pat", last_name="User", ssid="987-65-4321",
                        date_of_birth=date(1986, 8, 20))

    if address_state is None and states:
        address_state = states[0].value

    return TaxpayerInformation(
        taxpayer=TaxPayer(
            filing_status=filing_status,
            primary_person=PrimaryPerson(
                first_name="Test",
                last_name="User",
                ssid="111-22-3333",
                date_of_birth=date_of_birth,
                address=Address(address="1 Main St", city="Anytown", state=address_state, zip="00000"),
            ),
            spouse=spouse,
            dependents=list(dependents),
        ),
        w2s=w2s,
        f1099s=list(f1099s),
        state_residencies=[StateResidency(state=s) for s in states],
        **kwargs,
    )


@pytest.fixture(scope="session")
def parameters():
    """Packaged tax year 2025 parameters."""
    return TaxConfigLoader().load(2025)


@pytest.fixture
def settings():
    return EngineSettings(_env_file=None)


@pytest.fixture
def assembler(parameters, settings):
    return ReturnAssembler(parameters=parameters, settings=settings)


@pytest.fixture
def build_f1040(parameters):
    """Build a federal return from make_info() keyword arguments."""
    def _build(memoize: bool = False, **kwargs) -> F1040:
        return F1040(make_info(**kwargs), parameters, memoize=memoize)
    return _build


@pytest.fixture(name="make_info")
def make_info_fixture():
    return make_info


@pytest.fixture(name="make_w2")
def make_w2_fixture():
    return make_w2


@pytest.fixture(name="make_child")
def make_child_fixture():
    return make_child
