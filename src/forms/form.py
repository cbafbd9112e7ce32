"""
Form contract.

Every computation unit (federal return, schedule, state return, city
return) implements the same four members so the assembler can treat
them uniformly:

- tag: stable identifier of the form type
- sequence_index: filing order, ties broken by insertion order
- is_needed(): side-effect free inclusion predicate
- fields(): values in the order the form's PDF layout expects

Forms also expose named line methods (``l11()``, ``credit()``) that
other forms call. Values are computed on demand; nothing is stored on
a form after construction apart from the optional line cache.
"""

from __future__ import annotations

import functools
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, List, Optional, TypeVar

from forms.fields import FieldValue
from models.information import TaxpayerInformation
from models.taxpayer import FilingStatus

if TYPE_CHECKING:
    from calculator.diagnostics import DiagnosticLog
    from config.parameters import TaxParameters

T = TypeVar("T")


def cached_line(method: Callable[..., T]) -> Callable[..., T]:
    """
    Memoize a parameterless line method per form instance.

    Only active when the form was built with ``memoize=True``. Inputs are
    frozen, so a cached value is always the value a fresh call returns.
    """
    name = method.__name__

    @functools.wraps(method)
    def wrapper(self) -> T:
        if not self.memoize:
            return method(self)
        cache = self.__dict__.setdefault("_line_cache", {})
        if name in cache:
            return cache[name]
        value = method(self)
        # A value computed under a muted log must still record when read again
        if not self.diagnostics.muted:
            cache[name] = value
        return value

    return wrapper


def inclusion_check(method: Callable[..., bool]) -> Callable[..., bool]:
    """
    Run an ``is_needed()`` implementation with diagnostics suppressed.

    Deciding whether a form is filed must not leave events behind; the
    same lines record their diagnostics when they are evaluated for
    ``fields()``.
    """
    @functools.wraps(method)
    def wrapper(self) -> bool:
        with self.diagnostics.suppressed():
            return method(self)

    return wrapper


@dataclass(frozen=True)
class ReturnHeader:
    """Names, SSNs and address printed at the top of an individual return."""
    first_name: str
    last_name: str
    ssn: Optional[str]
    spouse_first_name: Optional[str]
    spouse_last_name: Optional[str]
    spouse_ssn: Optional[str]
    address: str
    apt: Optional[str]
    city: str
    state: Optional[str]
    zip: Optional[str]
    filing_status: FilingStatus

    @classmethod
    def from_information(cls, info: TaxpayerInformation) -> "ReturnHeader":
        primary = info.taxpayer.primary_person
        spouse = info.taxpayer.spouse
        return cls(
            first_name=primary.first_name,
            last_name=primary.last_name,
            ssn=primary.ssid,
            spouse_first_name=spouse.first_name if spouse else None,
            spouse_last_name=spouse.last_name if spouse else None,
            spouse_ssn=spouse.ssid if spouse else None,
            address=primary.address.address,
            apt=primary.address.apt,
            city=primary.address.city,
            state=primary.address.state,
            zip=primary.address.zip,
            filing_status=info.taxpayer.filing_status,
        )

    @property
    def display_name(self) -> str:
        if self.spouse_first_name and self.filing_status == FilingStatus.MARRIED_JOINT:
            return f"{self.first_name} & {self.spouse_first_name} {self.last_name}"
        return f"{self.first_name} {self.last_name}"

    def fields(self) -> List[FieldValue]:
        return [
            self.first_name,
            self.last_name,
            self.ssn,
            self.spouse_first_name,
            self.spouse_last_name,
            self.spouse_ssn,
            self.address,
            self.apt,
            self.city,
            self.state,
            self.zip,
        ]


class Form(ABC):
    """
    A computation unit for one tax form or schedule.

    Concrete forms set ``tag`` and ``sequence_index`` as class attributes
    and implement ``fields()``. Top-level forms provide ``info``,
    ``parameters``, ``diagnostics`` and ``memoize`` themselves;
    attachments read them from their parent.
    """

    tag: str = ""
    sequence_index: int = 0

    info: TaxpayerInformation
    parameters: "TaxParameters"
    diagnostics: "DiagnosticLog"
    memoize: bool

    def is_needed(self) -> bool:
        return True

    @abstractmethod
    def fields(self) -> List[FieldValue]:
        """Values in PDF field order."""

    def attachments(self) -> List["Form"]:
        """Direct subordinate forms; the assembler filters them by is_needed()."""
        return []

    @property
    def filing_status(self) -> FilingStatus:
        return self.info.taxpayer.filing_status

    @property
    def tax_year(self) -> int:
        return self.parameters.tax_year

    def missing(self, line: str, reason: str) -> None:
        """Report a line degraded to absent/zero because an input is missing."""
        self.diagnostics.record(self.tag, line, reason)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.tag}>"


class Attachment(Form):
    """
    A form subordinate to a parent return.

    The parent is shared with every other attachment and is only ever read.
    """

    def __init__(self, parent: Form):
        self._parent = parent

    @property
    def parent(self) -> Form:
        return self._parent

    @property
    def info(self) -> TaxpayerInformation:
        return self._parent.info

    @property
    def parameters(self) -> "TaxParameters":
        return self._parent.parameters

    @property
    def diagnostics(self) -> "DiagnosticLog":
        return self._parent.diagnostics

    @property
    def memoize(self) -> bool:
        return self._parent.memoize
