"""
Form 1040, U.S. Individual Income Tax Return.

The federal return is the root of the form graph. It builds its
schedules in ``__init__`` (construction reads no values) and every
state return is built from a completed F1040.
"""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from calculator.brackets import compute_bracket_tax
from calculator.decimal_math import ZERO, cap, max_decimal, min_decimal, sum_fields
from calculator.diagnostics import DiagnosticLog
from config.parameters import TaxParameters
from forms.federal.f1040v import F1040V
from forms.federal.f2441 import F2441
from forms.federal.schedule_1 import Schedule1
from forms.federal.schedule_2 import Schedule2
from forms.federal.schedule_3 import Schedule3
from forms.federal.schedule_8812 import Schedule8812
from forms.federal.schedule_a import ScheduleA
from forms.federal.schedule_b import ScheduleB
from forms.federal.schedule_c import ScheduleC
from forms.federal.schedule_d import ScheduleD
from forms.federal.schedule_eic import ScheduleEIC
from forms.federal.schedule_se import ScheduleSE
from forms.federal.worksheets import (
    QualifiedDividendsCapitalGainWorksheet,
    SocialSecurityBenefitsWorksheet,
)
from forms.fields import FieldValue, nonzero_or_absent, total_or_absent
from forms.form import Form, ReturnHeader, cached_line
from models.income import Income1099Type
from models.information import TaxpayerInformation
from models.taxpayer import FilingStatus, PersonRole

MAX_DEPENDENT_ROWS = 4


class F1040(Form):
    tag = "f1040"
    sequence_index = 0

    def __init__(
        self,
        info: TaxpayerInformation,
        parameters: TaxParameters,
        diagnostics: Optional[DiagnosticLog] = None,
        memoize: bool = False,
    ):
        self.info = info
        self.parameters = parameters
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticLog()
        self.memoize = memoize
        self.header = ReturnHeader.from_information(info)

        self.schedule_c = ScheduleC(self)
        self.schedule_se = ScheduleSE(self)
        self.schedule_1 = Schedule1(self)
        self.schedule_2 = Schedule2(self)
        self.f2441 = F2441(self)
        self.schedule_3 = Schedule3(self)
        self.schedule_a = ScheduleA(self)
        self.schedule_b = ScheduleB(self)
        self.schedule_d = ScheduleD(self)
        self.schedule_eic = ScheduleEIC(self)
        self.schedule_8812 = Schedule8812(self)
        self.f1040v = F1040V(self)

        self._social_security = SocialSecurityBenefitsWorksheet(self)
        self._capital_gain = QualifiedDividendsCapitalGainWorksheet(self)

    def attachments(self) -> List[Form]:
        return [
            self.schedule_1,
            self.schedule_2,
            self.schedule_3,
            self.schedule_a,
            self.schedule_b,
            self.schedule_d,
            self.schedule_eic,
            self.schedule_8812,
            self.f1040v,
        ]

    # Shared amounts read by schedules and state returns

    def earned_income(self, role: Optional[PersonRole] = None) -> Decimal:
        """Wages plus net self-employment earnings (Schedule C belongs to the primary filer)."""
        earned = self.info.wages(role)
        if role in (None, PersonRole.PRIMARY):
            earned += self.net_self_employment_earnings()
        return earned

    def net_self_employment_earnings(self) -> Decimal:
        if not self.schedule_c.is_needed():
            return ZERO
        deduction = self.schedule_se.l13() if self.schedule_se.is_needed() else ZERO
        return self.schedule_c.l31() - deduction

    def investment_income(self) -> Decimal:
        return sum_fields([self.l2a(), self.l2b(), self.l3b(), cap(self.l7())])

    def deduction_boxes(self) -> int:
        """Count of 65-or-older and blind boxes checked under line 12."""
        year = self.tax_year
        primary = self.info.taxpayer.primary_person
        boxes = int(primary.is_65_or_older(year)) + int(primary.is_blind)
        if self.filing_status == FilingStatus.MARRIED_JOINT:
            spouse = self.info.taxpayer.spouse
            if spouse is None:
                self.missing("l12", "joint return without spouse; spouse boxes not counted")
            else:
                boxes += int(spouse.is_65_or_older(year)) + int(spouse.is_blind)
        return boxes

    # Income

    def l1a(self) -> Optional[Decimal]:
        return total_or_absent(w2.income for w2 in self.info.w2s)

    def l1z(self) -> Decimal:
        return sum_fields([self.l1a()])

    def l2a(self) -> Optional[Decimal]:
        return nonzero_or_absent(sum_fields(
            f.tax_exempt_interest for f in self.info.f1099s_of(Income1099Type.INT)
        ))

    def l2b(self) -> Optional[Decimal]:
        return total_or_absent(f.interest for f in self.info.f1099s_of(Income1099Type.INT))

    def l3a(self) -> Optional[Decimal]:
        return total_or_absent(
            f.qualified_dividends for f in self.info.f1099s_of(Income1099Type.DIV)
        )

    def l3b(self) -> Optional[Decimal]:
        return total_or_absent(f.dividends for f in self.info.f1099s_of(Income1099Type.DIV))

    def l4b(self) -> Optional[Decimal]:
        return None

    def l5b(self) -> Optional[Decimal]:
        return None

    def l6a(self) -> Optional[Decimal]:
        return total_or_absent(f.net_benefits for f in self.info.f1099s_of(Income1099Type.SSA))

    @cached_line
    def l6b(self) -> Optional[Decimal]:
        return self._social_security.taxable_benefits()

    def l7(self) -> Optional[Decimal]:
        """Capital gain or (loss); distributions alone skip Schedule D."""
        if self.schedule_d.is_needed():
            return nonzero_or_absent(self.schedule_d.to_1040())
        return nonzero_or_absent(sum_fields(
            f.total_capital_gains_distributions
            for f in self.info.f1099s_of(Income1099Type.DIV)
        ))

    def l8(self) -> Optional[Decimal]:
        return self.schedule_1.l10() if self.schedule_1.is_needed() else None

    @cached_line
    def l9(self) -> Decimal:
        return sum_fields([
            self.l1z(), self.l2b(), self.l3b(), self.l4b(),
            self.l5b(), self.l6b(), self.l7(), self.l8(),
        ])

    def l10(self) -> Optional[Decimal]:
        return self.schedule_1.l26() if self.schedule_1.is_needed() else None

    @cached_line
    def l11(self) -> Decimal:
        """Adjusted gross income."""
        return cap(self.l9() - sum_fields([self.l10()]))

    # Deductions and tax

    def standard_deduction(self) -> Decimal:
        federal = self.parameters.federal
        status = self.filing_status
        deduction = federal.standard_deduction.get(status)

        if self.info.taxpayer.primary_person.is_taxpayer_dependent:
            limits = federal.dependent_standard_deduction
            deduction = min_decimal(
                deduction,
                max_decimal(limits.minimum, self.earned_income() + limits.earned_income_addition),
            )

        if status in (FilingStatus.SINGLE, FilingStatus.HEAD_OF_HOUSEHOLD):
            per_box = federal.additional_deduction.unmarried
        else:
            per_box = federal.additional_deduction.married
        return deduction + per_box * self.deduction_boxes()

    def l12(self) -> Decimal:
        if self.schedule_a.is_needed():
            return self.schedule_a.l17()
        return self.standard_deduction()

    def l13(self) -> Optional[Decimal]:
        return None

    def l14(self) -> Decimal:
        return sum_fields([self.l12(), self.l13()])

    @cached_line
    def l15(self) -> Decimal:
        """Taxable income."""
        return cap(self.l11() - self.l14())

    @cached_line
    def l16(self) -> Decimal:
        if self._capital_gain.applies():
            return self._capital_gain.tax()
        return compute_bracket_tax(self.l15(), self.parameters.federal.brackets.table(self.filing_status))

    def l17(self) -> Optional[Decimal]:
        return self.schedule_2.l3() if self.schedule_2.is_needed() else None

    @cached_line
    def l18(self) -> Decimal:
        return sum_fields([self.l16(), self.l17()])

    def l19(self) -> Optional[Decimal]:
        return self.schedule_8812.l14() if self.schedule_8812.is_needed() else None

    def l20(self) -> Optional[Decimal]:
        return self.schedule_3.l8() if self.schedule_3.is_needed() else None

    def l21(self) -> Decimal:
        return sum_fields([self.l19(), self.l20()])

    def l22(self) -> Decimal:
        return cap(self.l18() - self.l21())

    def l23(self) -> Optional[Decimal]:
        return self.schedule_2.l21() if self.schedule_2.is_needed() else None

    @cached_line
    def l24(self) -> Decimal:
        """Total tax."""
        return sum_fields([self.l22(), self.l23()])

    # Payments

    def l25a(self) -> Optional[Decimal]:
        return total_or_absent(w2.fed_withholding for w2 in self.info.w2s)

    def l25b(self) -> Optional[Decimal]:
        return nonzero_or_absent(sum_fields(f.fed_withholding for f in self.info.f1099s))

    def l25c(self) -> Optional[Decimal]:
        return None

    def l25d(self) -> Decimal:
        return sum_fields([self.l25a(), self.l25b(), self.l25c()])

    def l26(self) -> Optional[Decimal]:
        return total_or_absent(p.amount for p in self.info.estimated_taxes)

    def l27(self) -> Optional[Decimal]:
        # credit() records a failed age test; is_needed() stays silent
        return nonzero_or_absent(self.schedule_eic.credit())

    def l28(self) -> Optional[Decimal]:
        return self.schedule_8812.l27() if self.schedule_8812.is_needed() else None

    def l29(self) -> Optional[Decimal]:
        return None

    def l31(self) -> Optional[Decimal]:
        return self.schedule_3.l15() if self.schedule_3.is_needed() else None

    def l32(self) -> Decimal:
        return sum_fields([self.l27(), self.l28(), self.l29(), self.l31()])

    @cached_line
    def l33(self) -> Decimal:
        """Total payments."""
        return sum_fields([self.l25d(), self.l26(), self.l32()])

    def l34(self) -> Decimal:
        return cap(self.l33() - self.l24())

    def l35a(self) -> Decimal:
        return self.l34()

    def l37(self) -> Decimal:
        """Amount you owe."""
        return cap(self.l24() - self.l33())

    def fields(self) -> List[FieldValue]:
        status = self.filing_status
        dependents = self.info.taxpayer.dependents
        ctc_children = self.schedule_8812.qualifying_children()

        dependent_rows: List[FieldValue] = []
        for index in range(MAX_DEPENDENT_ROWS):
            if index < len(dependents):
                dependent = dependents[index]
                dependent_rows += [
                    dependent.full_name,
                    dependent.ssid,
                    dependent.relationship,
                    dependent in ctc_children,
                    dependent not in ctc_children,
                ]
            else:
                dependent_rows += [None, None, None, False, False]

        return [
            *self.header.fields(),
            status == FilingStatus.SINGLE,
            status == FilingStatus.MARRIED_JOINT,
            status == FilingStatus.MARRIED_SEPARATE,
            status == FilingStatus.HEAD_OF_HOUSEHOLD,
            status == FilingStatus.QUALIFYING_WIDOW,
            *dependent_rows,
            self.l1a(),
            self.l1z(),
            self.l2a(),
            self.l2b(),
            self.l3a(),
            self.l3b(),
            self.l4b(),
            self.l5b(),
            self.l6a(),
            self.l6b(),
            self.l7(),
            self.l8(),
            self.l9(),
            self.l10(),
            self.l11(),
            self.l12(),
            self.l13(),
            self.l14(),
            self.l15(),
            self.l16(),
            self.l17(),
            self.l18(),
            self.l19(),
            self.l20(),
            self.l21(),
            self.l22(),
            self.l23(),
            self.l24(),
            self.l25a(),
            self.l25b(),
            self.l25c(),
            self.l25d(),
            self.l26(),
            self.l27(),
            self.l28(),
            self.l29(),
            self.l31(),
            self.l32(),
            self.l33(),
            self.l34(),
            self.l35a(),
            self.l37(),
        ]
