"""Form 1040-V, Payment Voucher."""

from typing import List

from forms.fields import FieldValue
from forms.form import Attachment, inclusion_check


class F1040V(Attachment):
    tag = "f1040v"
    sequence_index = 99

    @inclusion_check
    def is_needed(self) -> bool:
        return self.parent.l37() > 0

    def fields(self) -> List[FieldValue]:
        header = self.parent.header
        return [
            header.ssn,
            header.spouse_ssn,
            self.parent.l37(),
            header.display_name,
            header.address,
            header.apt,
            header.city,
            header.state,
            header.zip,
        ]
