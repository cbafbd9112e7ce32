"""Tests for return assembly: inclusion, ordering and jurisdiction isolation."""

from decimal import Decimal

import pytest

from calculator.return_assembler import ReturnAssembler, collect_forms, create_return
from forms.errors import ConfigurationError, UnsupportedJurisdictionError
from forms.state import StateFormRegistry
from models import DependentCareExpense, FilingStatus, Income1099Nec, LocalTaxInfo, State


class TestFederalAssembly:

    def test_wage_earner_files_only_1040(self, assembler, make_info):
        result = assembler.assemble(make_info(wages=60000, withholding=7000))
        assert result.tags() == ["f1040"]
        assert result.succeeded

    def test_shared_schedule_c_included_once(self, assembler, make_info):
        info = make_info(f1099s=[Income1099Nec(payer="Client", nonemployee_compensation=50000)])
        result = assembler.assemble(info)

        tags = result.tags()
        assert tags.count("f1040sc") == 1
        assert {"f1040s1", "f1040s2", "f1040sse", "f1040sc"} <= set(tags)

    def test_sorted_by_sequence(self, assembler, make_info):
        info = make_info(f1099s=[Income1099Nec(payer="Client", nonemployee_compensation=50000)])
        result = assembler.assemble(info)

        indexes = [f.sequence_index for f in result.forms]
        assert indexes == sorted(indexes)
        assert result.tags()[:5] == ["f1040", "f1040s1", "f1040s2", "f1040sc", "f1040sse"]

    def test_owed_balance_adds_voucher(self, assembler, make_info):
        info = make_info(f1099s=[Income1099Nec(payer="Client", nonemployee_compensation=50000)])
        result = assembler.assemble(info)
        assert result.tags()[-1] == "f1040v"

    def test_values_match_form(self, assembler, make_info):
        result = assembler.assemble(make_info(wages=60000, withholding=7000))
        assembled = result.find("f1040")
        assert assembled.jurisdiction == "federal"
        assert assembled.values == assembled.form.fields()

    def test_find_missing_tag(self, assembler, make_info):
        assert assembler.assemble(make_info(wages=1000)).find("f1040sc") is None


class TestDependentCareInclusion:
    """An empty expense list and a list with one zero entry read differently."""

    def test_no_expenses_excludes_form_2441(self, assembler, make_info, make_child):
        info = make_info(
            filing_status=FilingStatus.HEAD_OF_HOUSEHOLD,
            wages=40000,
            dependents=[make_child(birth_year=2020)],
        )
        result = assembler.assemble(info)

        assert "f2441" not in result.tags()
        assert "f1040s3" not in result.tags()
        assert result.find("f1040").form.l20() is None

    def test_zero_expense_includes_form_2441(self, assembler, make_info, make_child):
        info = make_info(
            filing_status=FilingStatus.HEAD_OF_HOUSEHOLD,
            wages=40000,
            dependents=[make_child(birth_year=2020)],
            dependent_care_expenses=[DependentCareExpense(provider_name="Grandma", amount=0)],
        )
        result = assembler.assemble(info)

        assert "f2441" in result.tags()
        assert "f1040s3" in result.tags()
        l20 = result.find("f1040").form.l20()
        assert l20 is not None
        assert l20 == Decimal("0")


class TestJurisdictions:

    def test_no_filing_state_emits_nothing(self, assembler, make_info):
        result = assembler.assemble(make_info(wages=60000, withholding=7000, states=[State.TX]))
        assert result.tags() == ["f1040"]
        assert result.succeeded

    def test_states_follow_federal_in_residency_order(self, assembler, make_info, make_w2):
        info = make_info(
            states=[State.WV, State.IL],
            w2s=[make_w2(30000, state=State.WV, fed_withholding=5000),
                 make_w2(30000, state=State.IL, fed_withholding=5000)],
        )
        result = assembler.assemble(info)

        assert result.tags() == ["f1040", "wvit140", "il1040"]
        assert [f.jurisdiction for f in result.forms] == ["federal", "WV", "IL"]
        assert [f.tag for f in result.for_jurisdiction("IL")] == ["il1040"]

    def test_duplicate_residency_builds_once(self, assembler, make_info):
        result = assembler.assemble(make_info(wages=60000, states=[State.IL, State.IL]))
        assert result.tags().count("il1040") == 1

    def test_work_state_from_w2(self, assembler, make_info, make_w2):
        info = make_info(
            states=[State.WV],
            w2s=[make_w2(30000, state=State.IL, fed_withholding=5000),
                 make_w2(30000, state=State.WV, fed_withholding=5000)],
        )
        assert info.jurisdiction_codes() == [State.WV, State.IL]
        assert assembler.assemble(info).tags() == ["f1040", "wvit140", "il1040"]

    def test_w2_in_no_filing_state(self, assembler, make_info, make_w2):
        info = make_info(w2s=[make_w2(50000, state=State.TX, fed_withholding=6000)])
        assert info.jurisdiction_codes() == [State.TX]
        assert assembler.assemble(info).tags() == ["f1040"]

    def test_unsupported_state_recorded(self, assembler, make_info, monkeypatch):
        monkeypatch.setitem(StateFormRegistry._forms, State.OH, {})
        result = assembler.assemble(make_info(wages=60000, withholding=7000, states=[State.OH, State.IL]))

        assert not result.succeeded
        assert [f.code for f in result.failures] == ["OH"]
        assert isinstance(result.failures[0].error, UnsupportedJurisdictionError)
        assert result.failures[0].unsupported
        assert result.tags() == ["f1040", "il1040"]

    def test_failing_state_is_isolated(self, assembler, make_info, make_w2, monkeypatch):
        from forms.state.configs.state_2025.west_virginia import WestVirginiaReturn

        def broken(self):
            raise RuntimeError("bad table")

        monkeypatch.setattr(WestVirginiaReturn, "tax", broken)
        info = make_info(
            states=[State.IL, State.WV],
            w2s=[make_w2(40000, state=State.IL, fed_withholding=7000), make_w2(20000, state=State.WV)],
        )
        result = assembler.assemble(info)

        assert [f.code for f in result.failures] == ["WV"]
        assert isinstance(result.failures[0].error, RuntimeError)
        assert result.tags() == ["f1040", "il1040"]

    def test_failing_city_keeps_state_return(self, assembler, make_info, make_w2, monkeypatch):
        from forms.local.philadelphia import PhiladelphiaWageTax

        def broken(self):
            raise RuntimeError("bad city table")

        monkeypatch.setattr(PhiladelphiaWageTax, "taxable_income", broken)
        info = make_info(
            states=[State.PA],
            w2s=[make_w2(50000, state=State.PA, fed_withholding=8000, locality="Philadelphia")],
            local_tax_info=LocalTaxInfo(residence_city="Philadelphia"),
        )
        result = assembler.assemble(info)

        assert result.tags() == ["f1040", "pa40"]
        assert [f.code for f in result.failures] == ["PHILADELPHIA"]
        assert isinstance(result.failures[0].error, RuntimeError)
        assert not result.failures[0].unsupported

    def test_failing_city_on_state_return_fails_state(self, assembler, make_info, make_w2, monkeypatch):
        from forms.local.nyc import NYCResidentTax

        def broken(self):
            raise RuntimeError("bad city table")

        monkeypatch.setattr(NYCResidentTax, "credits", broken)
        info = make_info(
            states=[State.NY],
            w2s=[make_w2(100000, state=State.NY, fed_withholding=25000)],
            local_tax_info=LocalTaxInfo(residence_city="New York"),
        )
        result = assembler.assemble(info)

        assert result.tags() == ["f1040"]
        assert [f.code for f in result.failures] == ["NY"]

    def test_federal_failure_propagates(self, assembler, make_info, monkeypatch):
        from forms.federal.f1040 import F1040

        def broken(self):
            raise RuntimeError("federal")

        monkeypatch.setattr(F1040, "l16", broken)
        with pytest.raises(RuntimeError):
            assembler.assemble(make_info(wages=60000, states=[State.IL]))


class TestAssembledReturn:

    def test_to_dict(self, assembler, make_info, monkeypatch):
        monkeypatch.setitem(StateFormRegistry._forms, State.OH, {})
        result = assembler.assemble(make_info(wages=60000, states=[State.OH]))
        data = result.to_dict()

        assert data["tax_year"] == 2025
        assert data["forms"][0]["tag"] == "f1040"
        assert "60000" in data["forms"][0]["fields"]
        assert data["failures"] == [{
            "code": "OH",
            "error": "UnsupportedJurisdictionError",
            "message": str(result.failures[0].error),
        }]

    def test_collect_forms_root_first(self, assembler, make_info):
        from forms.federal.f1040 import F1040

        f1040 = F1040(make_info(wages=60000, withholding=7000), assembler.parameters)
        assert collect_forms(f1040) == [f1040]

    def test_create_return(self, parameters, settings, make_info):
        result = create_return(make_info(wages=60000, withholding=7000), parameters=parameters, settings=settings)
        assert result.tags() == ["f1040"]

    def test_memoize_flag(self, parameters, settings, make_info):
        plain = ReturnAssembler(parameters=parameters, settings=settings, memoize=False)
        cached = ReturnAssembler(parameters=parameters, settings=settings, memoize=True)
        info = make_info(wages=75000, states=[State.IL])

        assert cached.memoize
        assert [f.values for f in plain.assemble(info).forms] == \
            [f.values for f in cached.assemble(info).forms]

    def test_registered_state_without_parameters(self, parameters, settings):
        states = {code: p for code, p in parameters.states.items() if code != State.IL}
        with pytest.raises(ConfigurationError):
            ReturnAssembler(parameters=parameters.model_copy(update={"states": states}), settings=settings)
