"""
State returns.

Importing this package registers every state return with
StateFormRegistry.
"""

from forms.state.state_registry import (
    NO_FILING_REQUIRED_STATES,
    StateFormRegistry,
    register_state,
    verify_registry,
)
from forms.state.state_form import StateReturn
from forms.state import configs  # noqa: F401

__all__ = [
    "NO_FILING_REQUIRED_STATES",
    "StateFormRegistry",
    "StateReturn",
    "register_state",
    "verify_registry",
]
