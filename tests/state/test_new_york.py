"""Tests for the New York IT-201 and the NYC resident tax reported on it."""

from decimal import Decimal

from models import FilingStatus, LocalTaxInfo, State


def nyc_info(make_info, make_w2, wages=100000, city="New York City", **kwargs):
    return make_info(
        states=[State.NY],
        w2s=[make_w2(wages, state=State.NY, fed_withholding=25000, **kwargs)],
        local_tax_info=LocalTaxInfo(residence_city=city),
    )


class TestNewYorkReturn:

    def test_state_tax(self, assembler, make_info, make_w2):
        result = assembler.assemble(nyc_info(make_info, make_w2))
        ny = result.find("nyit201").form

        assert ny.standard_deduction() == Decimal("8000")
        assert ny.taxable_income() == Decimal("92000")
        assert ny.tax() == Decimal("4952")

    def test_city_tax_on_state_return(self, assembler, make_info, make_w2):
        result = assembler.assemble(nyc_info(make_info, make_w2))
        ny = result.find("nyit201").form
        nyc = result.find("nyc").form

        assert result.tags() == ["f1040", "nyit201", "nyc"]
        assert nyc.taxable_income() == Decimal("92000")
        assert nyc.tax() == Decimal("3441")
        assert nyc.credits() == Decimal("63")
        assert nyc.tax_due() == Decimal("3378")
        assert ny.local_tax() == Decimal("3378")
        assert ny.net_tax() == Decimal("8330")

    def test_city_withholding_counts_as_state_payment(self, assembler, make_info, make_w2):
        info = nyc_info(
            make_info, make_w2,
            state_withholding=5000, locality="NYC", local_withholding=3000,
        )
        ny = assembler.assemble(info).find("nyit201").form

        assert ny.withholding() == Decimal("5000")
        assert ny.local_payments() == Decimal("3000")
        assert ny.total_payments() == Decimal("8000")

    def test_alias(self, assembler, make_info, make_w2):
        result = assembler.assemble(nyc_info(make_info, make_w2, city="  Brooklyn "))
        assert "nyc" in result.tags()

    def test_school_credit_joint(self, assembler, make_info, make_w2):
        info = make_info(
            filing_status=FilingStatus.MARRIED_JOINT,
            states=[State.NY],
            w2s=[make_w2(120000, state=State.NY, fed_withholding=25000)],
            local_tax_info=LocalTaxInfo(residence_city="NYC"),
        )
        nyc = assembler.assemble(info).find("nyc").form
        assert nyc.credits() == Decimal("125")

    def test_no_school_credit_above_limit(self, assembler, make_info, make_w2):
        info = nyc_info(make_info, make_w2, wages=300000)
        nyc = assembler.assemble(info).find("nyc").form
        assert nyc.credits() is None

    def test_commuter_owes_no_city_tax(self, assembler, make_info, make_w2):
        info = make_info(
            states=[State.NY],
            w2s=[make_w2(100000, state=State.NY, fed_withholding=25000)],
            local_tax_info=LocalTaxInfo(
                work_city="New York City", work_state=State.NY, works_in_different_city=True,
            ),
        )
        result = assembler.assemble(info)

        assert "nyc" not in result.tags()
        assert result.find("nyit201").form.local_tax() is None

    def test_unknown_city(self, assembler, make_info, make_w2):
        result = assembler.assemble(nyc_info(make_info, make_w2, city="Buffalo"))

        assert result.tags() == ["f1040", "nyit201"]
        events = result.diagnostics.for_form("nyit201")
        assert [e.line for e in events] == ["local"]
        assert "Buffalo" in events[0].reason

    def test_no_local_info(self, assembler, make_info, make_w2):
        info = make_info(states=[State.NY], w2s=[make_w2(100000, state=State.NY, fed_withholding=25000)])
        result = assembler.assemble(info)
        assert result.tags() == ["f1040", "nyit201"]
        assert result.find("nyit201").form.local_tax() is None
