"""
Missing-prerequisite diagnostics.

Forms degrade to an absent or zero line when something they need is
missing (no spouse on a joint-only line, an unknown city). That keeps
the output faithful to the paper form but can hide real input gaps, so
each degrade is also recorded here. Recording never changes a value.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, List

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MissingPrerequisite:
    """One line computed from a missing upstream value."""
    form_tag: str
    line: str
    reason: str

    def __str__(self) -> str:
        return f"{self.form_tag}.{self.line}: {self.reason}"


@dataclass
class DiagnosticLog:
    """Collected events for one return build."""
    events: List[MissingPrerequisite] = field(default_factory=list)
    _muted: int = field(default=0, repr=False, compare=False)

    @property
    def muted(self) -> bool:
        return self._muted > 0

    @contextmanager
    def suppressed(self) -> Iterator[None]:
        """Drop events recorded inside the block (inclusion checks)."""
        self._muted += 1
        try:
            yield
        finally:
            self._muted -= 1

    def record(self, form_tag: str, line: str, reason: str) -> None:
        if self.muted:
            return
        event = MissingPrerequisite(form_tag, line, reason)
        # Lines may be evaluated many times; keep one event per cause
        if event not in self.events:
            self.events.append(event)
            logger.debug("Missing prerequisite %s", event)

    def for_form(self, form_tag: str) -> List[MissingPrerequisite]:
        return [e for e in self.events if e.form_tag == form_tag]

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self):
        return iter(self.events)

    def to_dict(self) -> List[dict]:
        return [
            {"form": e.form_tag, "line": e.line, "reason": e.reason}
            for e in self.events
        ]
