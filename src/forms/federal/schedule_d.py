"""Schedule D, Capital Gains and Losses."""

from decimal import Decimal
from typing import List, Optional

from calculator.decimal_math import ZERO, min_decimal, sum_fields
from forms.fields import FieldValue, nonzero_or_absent, total_or_absent
from forms.form import Attachment, cached_line, inclusion_check
from models.income import Income1099B, Income1099Type


class ScheduleD(Attachment):
    """
    Broker sales reported on 1099-B go straight to lines 1a and 8a
    (basis reported, no adjustments, so no Form 8949). Capital gain
    distributions move here from Form 1040 line 7 once the schedule is
    needed.
    """
    tag = "f1040sd"
    sequence_index = 12

    @inclusion_check
    def is_needed(self) -> bool:
        return bool(
            self._sales()
            or self.info.short_term_loss_carryover
            or self.info.long_term_loss_carryover
        )

    def _sales(self) -> List[Income1099B]:
        return self.info.f1099s_of(Income1099Type.B)

    # Part I, short-term

    def l1a_proceeds(self) -> Optional[Decimal]:
        return total_or_absent(f.short_term_proceeds for f in self._sales())

    def l1a_cost(self) -> Optional[Decimal]:
        return total_or_absent(f.short_term_cost_basis for f in self._sales())

    def l1a(self) -> Optional[Decimal]:
        return total_or_absent(f.short_term_gain for f in self._sales())

    def l6(self) -> Optional[Decimal]:
        carryover = self.info.short_term_loss_carryover
        return -carryover if carryover else None

    def l7(self) -> Decimal:
        """Net short-term capital gain or (loss)."""
        return sum_fields([self.l1a(), self.l6()])

    # Part II, long-term

    def l8a_proceeds(self) -> Optional[Decimal]:
        return total_or_absent(f.long_term_proceeds for f in self._sales())

    def l8a_cost(self) -> Optional[Decimal]:
        return total_or_absent(f.long_term_cost_basis for f in self._sales())

    def l8a(self) -> Optional[Decimal]:
        return total_or_absent(f.long_term_gain for f in self._sales())

    def l13(self) -> Optional[Decimal]:
        return nonzero_or_absent(sum_fields(
            f.total_capital_gains_distributions
            for f in self.info.f1099s_of(Income1099Type.DIV)
        ))

    def l14(self) -> Optional[Decimal]:
        carryover = self.info.long_term_loss_carryover
        return -carryover if carryover else None

    def l15(self) -> Decimal:
        """Net long-term capital gain or (loss)."""
        return sum_fields([self.l8a(), self.l13(), self.l14()])

    # Part III

    @cached_line
    def l16(self) -> Decimal:
        return self.l7() + self.l15()

    def l21(self) -> Optional[Decimal]:
        """Deductible loss, limited by filing status."""
        if self.l16() >= 0:
            return None
        limit = self.parameters.federal.capital_gains.loss_limit.get(self.filing_status)
        return -min_decimal(-self.l16(), limit)

    def to_1040(self) -> Decimal:
        """The amount Form 1040 line 7 reports."""
        if self.l16() > 0:
            return self.l16()
        return sum_fields([self.l21()])

    def worksheet_gain(self) -> Decimal:
        """Net capital gain the rate worksheet taxes at preferential rates (line 3)."""
        if self.l15() > 0 and self.l16() > 0:
            return min_decimal(self.l15(), self.l16())
        return ZERO

    def fields(self) -> List[FieldValue]:
        header = self.parent.header
        return [
            f"{header.first_name} {header.last_name}",
            header.ssn,
            self.l1a_proceeds(),
            self.l1a_cost(),
            self.l1a(),
            self.l6(),
            self.l7(),
            self.l8a_proceeds(),
            self.l8a_cost(),
            self.l8a(),
            self.l13(),
            self.l14(),
            self.l15(),
            self.l16(),
            self.l21(),
        ]
