"""Tests for the missing-prerequisite diagnostic channel."""

from decimal import Decimal

from calculator.diagnostics import DiagnosticLog, MissingPrerequisite


class TestDiagnosticLog:

    def test_record_deduplicates(self):
        log = DiagnosticLog()
        log.record("f2441", "l3", "no qualifying person")
        log.record("f2441", "l3", "no qualifying person")
        assert len(log) == 1
        assert list(log) == [MissingPrerequisite("f2441", "l3", "no qualifying person")]

    def test_for_form(self):
        log = DiagnosticLog()
        log.record("f2441", "l3", "a")
        log.record("f1040", "l12", "b")
        assert [e.line for e in log.for_form("f1040")] == ["l12"]

    def test_to_dict(self):
        log = DiagnosticLog()
        log.record("il1040", "local", "no city income tax form for Springfield, IL")
        assert log.to_dict() == [{
            "form": "il1040",
            "line": "local",
            "reason": "no city income tax form for Springfield, IL",
        }]

    def test_debug_logged(self, caplog):
        import logging

        with caplog.at_level(logging.DEBUG, logger="calculator.diagnostics"):
            DiagnosticLog().record("f1040", "l12", "joint return without spouse")
        assert "f1040.l12" in caplog.text

    def test_recording_does_not_change_values(self, build_f1040):
        from models import DependentCareExpense

        f1040 = build_f1040(
            wages=40000,
            dependent_care_expenses=[DependentCareExpense(provider_name="Daycare", amount=5000)],
        )
        first = f1040.f2441.fields()
        assert len(f1040.diagnostics) == 1
        assert f1040.f2441.fields() == first
        assert f1040.f2441.credit() == Decimal("0")


class TestInclusionChecks:
    """Deciding whether a form is filed leaves the log untouched."""

    def test_eic_age_test_silent_in_is_needed(self, build_f1040):
        f1040 = build_f1040(wages=15000, date_of_birth=None)

        assert not f1040.schedule_eic.is_needed()
        assert len(f1040.diagnostics) == 0

        assert f1040.l27() is None
        assert [(e.form_tag, e.line) for e in f1040.diagnostics] == [("f1040sei", "credit")]

    def test_eic_age_test_memoized(self, build_f1040):
        f1040 = build_f1040(memoize=True, wages=15000, date_of_birth=None)

        assert not f1040.schedule_eic.is_needed()
        assert len(f1040.diagnostics) == 0
        # A value computed while suppressed is not served from the cache
        assert f1040.l27() is None
        assert len(f1040.diagnostics) == 1

    def test_voucher_check_silent(self, parameters, make_info):
        from forms.federal.f1040 import F1040
        from models import FilingStatus

        info = make_info(filing_status=FilingStatus.MARRIED_JOINT, wages=80000)
        info = info.model_copy(update={"taxpayer": info.taxpayer.model_copy(update={"spouse": None})})
        f1040 = F1040(info, parameters)

        f1040.f1040v.is_needed()
        assert len(f1040.diagnostics) == 0

        f1040.l12()
        assert [e.line for e in f1040.diagnostics] == ["l12"]

    def test_suppressed_nests(self):
        log = DiagnosticLog()
        with log.suppressed():
            with log.suppressed():
                log.record("f1040", "l12", "inner")
            assert log.muted
            log.record("f1040", "l12", "outer")
        assert not log.muted
        assert len(log) == 0
