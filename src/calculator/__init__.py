"""Shared arithmetic, bracket tax, diagnostics and return assembly."""

from .brackets import BracketTable, compute_bracket_tax
from .decimal_math import cap, round_dollar, sum_fields
from .diagnostics import DiagnosticLog, MissingPrerequisite

__all__ = [
    "BracketTable",
    "compute_bracket_tax",
    "cap",
    "round_dollar",
    "sum_fields",
    "DiagnosticLog",
    "MissingPrerequisite",
]
