"""State returns by year."""

# Import all state returns to register them
from forms.state.configs import state_2025

__all__ = ["state_2025"]
