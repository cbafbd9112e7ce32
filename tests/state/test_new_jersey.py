"""Tests for the New Jersey NJ-1040."""

from decimal import Decimal

from models import Income1099Int, Income1099Ssa, State


def build_nj(build_f1040, **kwargs):
    from forms.state import StateFormRegistry

    kwargs.setdefault("states", [State.NJ])
    return StateFormRegistry.factory(State.NJ, 2025)(build_f1040(**kwargs))


class TestNewJerseyReturn:

    def test_gross_income(self, build_f1040, make_w2):
        nj = build_nj(
            build_f1040,
            w2s=[make_w2(60000, state=State.NJ)],
            f1099s=[
                Income1099Int(payer="Bank", interest=1000),
                Income1099Ssa(payer="SSA", net_benefits=15000),
            ],
        )

        assert nj.tag == "nj1040"
        assert nj.starting_income() == Decimal("61000")
        assert nj.subtractions() is None
        assert nj.taxable_income() == Decimal("60000")
        assert nj.tax() == Decimal("1823")

    def test_dependent_exemption(self, build_f1040, make_child):
        nj = build_nj(build_f1040, wages=60000, dependents=[make_child()])
        assert nj.exemptions() == Decimal("2500")
