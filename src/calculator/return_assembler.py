"""
Return assembly.

Builds the federal return, then each state return in residency order,
walks every form's attachments and produces the flat, ordered list of
forms the taxpayer files. Example:

    assembler = ReturnAssembler()
    result = assembler.assemble(info)
    for form in result.forms:
        print(form.tag, form.values)

A failure inside one state is recorded on the result and does not affect
the federal return or other states. A city return filed on its own is a
jurisdiction of its own: its failure is recorded under the city id and
the state return is kept. A city tax carried on the state return fails
with that state. Federal failures propagate to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from calculator.diagnostics import DiagnosticLog
from config.parameters import TaxParameters
from config.settings import EngineSettings, get_settings
from config.tax_config_loader import get_tax_parameters
from forms.errors import UnsupportedJurisdictionError
from forms.federal.f1040 import F1040
from forms.fields import FieldValue, field_to_json
from forms.form import Form
from forms.local.local_form import LocalReturn
from forms.state import StateFormRegistry, verify_registry
from models.information import TaxpayerInformation

logger = logging.getLogger(__name__)

FEDERAL = "federal"


@dataclass
class AssembledForm:
    """One form of the assembled return with its computed field values."""
    tag: str
    sequence_index: int
    jurisdiction: str
    values: List[FieldValue]
    form: Form = field(repr=False, compare=False)


@dataclass
class JurisdictionFailure:
    """A jurisdiction whose forms could not be produced."""
    code: str
    error: Exception

    @property
    def unsupported(self) -> bool:
        return isinstance(self.error, UnsupportedJurisdictionError)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "error": type(self.error).__name__,
            "message": str(self.error),
        }


@dataclass
class AssembledReturn:
    """Ordered forms for one taxpayer plus per-jurisdiction failures."""
    tax_year: int
    forms: List[AssembledForm] = field(default_factory=list)
    failures: List[JurisdictionFailure] = field(default_factory=list)
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)

    @property
    def succeeded(self) -> bool:
        return not self.failures

    def tags(self) -> List[str]:
        return [f.tag for f in self.forms]

    def find(self, tag: str) -> Optional[AssembledForm]:
        for assembled in self.forms:
            if assembled.tag == tag:
                return assembled
        return None

    def for_jurisdiction(self, jurisdiction: str) -> List[AssembledForm]:
        return [f for f in self.forms if f.jurisdiction == jurisdiction]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tax_year": self.tax_year,
            "forms": [
                {
                    "tag": f.tag,
                    "sequence_index": f.sequence_index,
                    "jurisdiction": f.jurisdiction,
                    "fields": [field_to_json(v) for v in f.values],
                }
                for f in self.forms
            ],
            "failures": [f.to_dict() for f in self.failures],
            "diagnostics": self.diagnostics.to_dict(),
        }


def collect_forms(root: Form, seen: Optional[Set[int]] = None) -> List[Form]:
    """
    Flatten a form tree depth first.

    The root is always included; an attachment is included when it is
    needed, and its own attachments are only walked then. A form reached
    by several paths appears once.
    """
    seen = seen if seen is not None else set()
    collected: List[Form] = []

    def visit(form: Form) -> None:
        seen.add(id(form))
        collected.append(form)
        for attachment in form.attachments():
            if id(attachment) in seen:
                continue
            if attachment.is_needed():
                visit(attachment)

    if id(root) not in seen:
        visit(root)
    return collected


class ReturnAssembler:
    """
    Builds complete returns for a tax year.

    Args:
        parameters: Tax parameters; loaded for ``settings.tax_year`` when omitted
        settings: Engine settings; the cached environment settings when omitted
        memoize: Overrides ``settings.memoize_lines``
    """

    def __init__(
        self,
        parameters: Optional[TaxParameters] = None,
        settings: Optional[EngineSettings] = None,
        memoize: Optional[bool] = None,
    ):
        self.settings = settings or get_settings()
        if parameters is None:
            config_dir = self.settings.config_dir
            parameters = get_tax_parameters(
                self.settings.tax_year, str(config_dir) if config_dir else None
            )
        self.parameters = parameters
        self.memoize = self.settings.memoize_lines if memoize is None else memoize
        verify_registry(parameters.tax_year, parameters.states.keys())

    @property
    def tax_year(self) -> int:
        return self.parameters.tax_year

    def assemble(self, info: TaxpayerInformation) -> AssembledReturn:
        result = AssembledReturn(tax_year=self.tax_year)
        seen: Set[int] = set()

        f1040 = F1040(info, self.parameters, diagnostics=result.diagnostics, memoize=self.memoize)
        federal = collect_forms(f1040, seen)
        result.forms.extend(self._evaluate(federal, FEDERAL))

        for state in info.jurisdiction_codes():
            if not StateFormRegistry.requires_filing(state):
                logger.debug("%s requires no filing", state.value)
                continue
            try:
                build = StateFormRegistry.factory(state, self.tax_year)
                state_return = build(f1040)
                # City returns filed on their own are evaluated under their own guard
                separate = [f for f in state_return.local_forms if not f.reported_on_state_return]
                state_seen = set(seen) | {id(f) for f in separate}
                state_forms = collect_forms(state_return, state_seen)
                evaluated = self._evaluate(state_forms, state.value)
            except UnsupportedJurisdictionError as e:
                logger.warning("No %s return for %s", self.tax_year, e.code)
                result.failures.append(JurisdictionFailure(state.value, e))
                continue
            except Exception as e:
                logger.exception("Failed to build %s return", state.value)
                result.failures.append(JurisdictionFailure(state.value, e))
                continue
            seen = state_seen - {id(f) for f in separate}
            result.forms.extend(evaluated)

            for local in separate:
                seen = self._assemble_local(result, local, seen)

        # sorted() is stable: federal first, then states in residency order
        result.forms = sorted(result.forms, key=lambda f: f.sequence_index)

        logger.info(
            "Assembled %s return: %d forms, %d failed jurisdictions, %d diagnostics",
            self.tax_year, len(result.forms), len(result.failures), len(result.diagnostics),
        )
        return result

    def _assemble_local(self, result: AssembledReturn, local: LocalReturn, seen: Set[int]) -> Set[int]:
        """Add one separately filed city return; a failure is recorded against the city."""
        local_seen = set(seen)
        try:
            if not local.is_needed():
                return seen
            evaluated = self._evaluate(collect_forms(local, local_seen), local.city_id)
        except Exception as e:
            logger.exception("Failed to build %s city return", local.city_id)
            result.failures.append(JurisdictionFailure(local.city_id, e))
            return seen
        result.forms.extend(evaluated)
        return local_seen

    @staticmethod
    def _evaluate(forms: List[Form], jurisdiction: str) -> List[AssembledForm]:
        return [
            AssembledForm(
                tag=form.tag,
                sequence_index=form.sequence_index,
                jurisdiction=jurisdiction,
                values=form.fields(),
                form=form,
            )
            for form in forms
        ]


def create_return(info: TaxpayerInformation, **kwargs) -> AssembledReturn:
    """Assemble one return with a one-off ReturnAssembler."""
    return ReturnAssembler(**kwargs).assemble(info)
