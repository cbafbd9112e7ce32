"""Tests for Schedule A (itemized deductions) and Schedule D (capital gains)."""

from decimal import Decimal

from models import FilingStatus, Income1099B, Income1099Div, Income1099Int, ItemizedDeductions


class TestScheduleA:

    def test_itemizing_beats_standard(self, build_f1040):
        f1040 = build_f1040(
            wages=100000,
            itemized_deductions=ItemizedDeductions(
                medical_and_dental=10000,
                state_and_local_taxes=6000,
                real_estate_taxes=8000,
                mortgage_interest=12000,
                charity_cash=3000,
            ),
        )
        schedule_a = f1040.schedule_a

        # 10,000 less 7.5% of 100,000 AGI
        assert schedule_a.l4() == Decimal("2500")
        assert schedule_a.l5e() == Decimal("14000")
        assert schedule_a.l10() == Decimal("12000")
        assert schedule_a.l17() == Decimal("31500")
        assert schedule_a.is_needed()
        assert schedule_a in f1040.attachments()
        assert f1040.l12() == Decimal("31500")
        assert f1040.l15() == Decimal("68500")
        assert f1040.l16() == Decimal("9984")

    def test_standard_deduction_when_larger(self, build_f1040):
        f1040 = build_f1040(
            wages=60000,
            itemized_deductions=ItemizedDeductions(state_and_local_taxes=3000, mortgage_interest=5000),
        )
        assert f1040.schedule_a.l17() == Decimal("8000")
        assert not f1040.schedule_a.is_needed()
        assert f1040.l12() == Decimal("15750")

    def test_no_itemized_input(self, build_f1040):
        f1040 = build_f1040(wages=60000)
        assert f1040.schedule_a.l17() == Decimal("0")
        assert not f1040.schedule_a.is_needed()

    def test_salt_cap_phases_down(self, build_f1040):
        f1040 = build_f1040(
            wages=550000,
            itemized_deductions=ItemizedDeductions(state_and_local_taxes=50000),
        )
        # 40,000 less 30% of the 50,000 over the threshold
        assert f1040.schedule_a.salt_limit() == Decimal("25000")
        assert f1040.schedule_a.l5e() == Decimal("25000")
        assert f1040.l12() == Decimal("25000")

    def test_salt_cap_floor(self, build_f1040):
        f1040 = build_f1040(
            wages=900000,
            itemized_deductions=ItemizedDeductions(state_and_local_taxes=50000),
        )
        assert f1040.schedule_a.salt_limit() == Decimal("10000")

    def test_married_separate_salt_cap(self, build_f1040):
        f1040 = build_f1040(
            filing_status=FilingStatus.MARRIED_SEPARATE,
            wages=100000,
            itemized_deductions=ItemizedDeductions(state_and_local_taxes=30000),
        )
        assert f1040.schedule_a.l5e() == Decimal("20000")

    def test_charity_limited_by_agi(self, build_f1040):
        f1040 = build_f1040(
            wages=20000,
            itemized_deductions=ItemizedDeductions(charity_cash=30000, charity_other=10000),
        )
        assert f1040.schedule_a.l11() == Decimal("12000.00")
        assert f1040.schedule_a.l12() == Decimal("6000.00")

    def test_investment_interest_limited(self, build_f1040):
        f1040 = build_f1040(
            wages=50000,
            f1099s=[Income1099Int(payer="Bank", interest=1000)],
            itemized_deductions=ItemizedDeductions(investment_interest=4000),
        )
        assert f1040.schedule_a.l9() == Decimal("1000")


class TestScheduleD:

    def test_gains_flow_to_line_7(self, build_f1040):
        f1040 = build_f1040(
            wages=50000,
            f1099s=[
                Income1099B(
                    payer="Broker",
                    short_term_proceeds=10000, short_term_cost_basis=8000,
                    long_term_proceeds=20000, long_term_cost_basis=15000,
                ),
                Income1099Div(payer="Fund", dividends=1000, total_capital_gains_distributions=1000),
            ],
        )
        schedule_d = f1040.schedule_d

        assert schedule_d.is_needed()
        assert schedule_d in f1040.attachments()
        assert schedule_d.l7() == Decimal("2000")
        assert schedule_d.l13() == Decimal("1000")
        assert schedule_d.l15() == Decimal("6000")
        assert schedule_d.l16() == Decimal("8000")
        assert schedule_d.l21() is None
        assert f1040.l7() == Decimal("8000")
        assert f1040.l11() == Decimal("59000")
        assert f1040.l15() == Decimal("43250")

    def test_long_term_gain_uses_rate_worksheet(self, build_f1040):
        f1040 = build_f1040(
            wages=50000,
            f1099s=[
                Income1099B(
                    payer="Broker",
                    short_term_proceeds=10000, short_term_cost_basis=8000,
                    long_term_proceeds=20000, long_term_cost_basis=15000,
                ),
                Income1099Div(payer="Fund", dividends=1000, total_capital_gains_distributions=1000),
            ],
        )
        assert f1040.schedule_d.worksheet_gain() == Decimal("6000")
        # The 6,000 net long-term gain falls in the 0% band; 37,250 at ordinary rates
        assert f1040.l16() == Decimal("4232")

    def test_loss_limited(self, build_f1040):
        f1040 = build_f1040(
            wages=50000,
            f1099s=[Income1099B(payer="Broker", long_term_proceeds=5000, long_term_cost_basis=15000)],
        )
        assert f1040.schedule_d.l16() == Decimal("-10000")
        assert f1040.schedule_d.l21() == Decimal("-3000")
        assert f1040.l7() == Decimal("-3000")
        assert f1040.l11() == Decimal("47000")
        assert f1040.schedule_d.worksheet_gain() == Decimal("0")

    def test_married_separate_loss_limit(self, build_f1040):
        f1040 = build_f1040(
            filing_status=FilingStatus.MARRIED_SEPARATE,
            wages=50000,
            f1099s=[Income1099B(payer="Broker", long_term_proceeds=5000, long_term_cost_basis=15000)],
        )
        assert f1040.l7() == Decimal("-1500")

    def test_carryover_alone(self, build_f1040):
        f1040 = build_f1040(wages=50000, short_term_loss_carryover=Decimal("2000"))
        assert f1040.schedule_d.is_needed()
        assert f1040.schedule_d.l6() == Decimal("-2000")
        assert f1040.l7() == Decimal("-2000")

    def test_short_term_gain_taxed_as_ordinary(self, build_f1040):
        f1040 = build_f1040(
            wages=50000,
            f1099s=[Income1099B(
                payer="Broker",
                short_term_proceeds=9000, short_term_cost_basis=5000,
                long_term_proceeds=4000, long_term_cost_basis=5000,
            )],
        )
        assert f1040.l7() == Decimal("3000")
        assert f1040.schedule_d.worksheet_gain() == Decimal("0")
        assert not f1040._capital_gain.applies()

    def test_distributions_alone_skip_schedule(self, build_f1040):
        f1040 = build_f1040(
            wages=50000,
            f1099s=[Income1099Div(payer="Fund", dividends=500, total_capital_gains_distributions=500)],
        )
        assert not f1040.schedule_d.is_needed()
        assert f1040.l7() == Decimal("500")
