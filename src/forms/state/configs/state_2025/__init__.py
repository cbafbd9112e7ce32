"""Tax year 2025 state returns."""

from forms.state.configs.state_2025 import (  # noqa: F401
    california,
    illinois,
    new_jersey,
    pennsylvania,
    template_states,
    west_virginia,
)
