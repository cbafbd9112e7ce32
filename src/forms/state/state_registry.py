"""State return registry for jurisdiction dispatch."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict, List, Type

from forms.errors import ConfigurationError, UnsupportedJurisdictionError
from models.jurisdiction import State

if TYPE_CHECKING:
    from forms.federal.f1040 import F1040
    from forms.state.state_form import StateReturn


# States where an individual resident files no income tax return
NO_FILING_REQUIRED_STATES = frozenset({
    State.AK,  # Alaska
    State.FL,  # Florida
    State.NV,  # Nevada
    State.NH,  # New Hampshire (interest and dividends tax repealed from 2025)
    State.SD,  # South Dakota
    State.TN,  # Tennessee
    State.TX,  # Texas
    State.WA,  # Washington (capital gains excise is not an income tax return)
    State.WY,  # Wyoming
})


StateReturnFactory = Callable[["F1040"], "StateReturn"]


class StateFormRegistry:
    """
    Registry of state return constructors.

    Every code in the State enumeration is either registered here, listed
    in NO_FILING_REQUIRED_STATES, or unsupported. Registering a
    no-filing state is an error.
    """

    # Storage: state_code -> tax_year -> return class
    _forms: Dict[State, Dict[int, Type["StateReturn"]]] = {}

    @classmethod
    def register(
        cls,
        state: State,
        tax_year: int,
        form_class: Type["StateReturn"],
    ) -> None:
        """
        Register a return class for a state and year.

        Args:
            state: State code
            tax_year: Tax year the class handles
            form_class: StateReturn subclass; called with the completed F1040
        """
        if state in NO_FILING_REQUIRED_STATES:
            raise ConfigurationError(f"{state.value} requires no filing and cannot register a form")
        cls._forms.setdefault(state, {})[tax_year] = form_class

    @classmethod
    def requires_filing(cls, state: State) -> bool:
        return state not in NO_FILING_REQUIRED_STATES

    @classmethod
    def factory(cls, state: State, tax_year: int) -> StateReturnFactory:
        """
        Constructor for a state's return.

        Raises:
            UnsupportedJurisdictionError: state is neither registered for
                the year nor a no-filing state
        """
        form_class = cls._forms.get(state, {}).get(tax_year)
        if form_class is None:
            raise UnsupportedJurisdictionError(state.value)
        return lambda f1040: form_class(f1040, state)

    @classmethod
    def get_registered_states(cls, tax_year: int) -> List[State]:
        """
        Get registered state codes for a tax year.

        Returns:
            Sorted list of states with a return class for the year
        """
        return sorted(
            (state for state, years in cls._forms.items() if tax_year in years),
            key=lambda s: s.value,
        )

    @classmethod
    def is_supported(cls, state: State, tax_year: int) -> bool:
        """True when the state is exempt from filing or has a registered return."""
        if state in NO_FILING_REQUIRED_STATES:
            return True
        return tax_year in cls._forms.get(state, {})

    @classmethod
    def supported_states(cls, tax_year: int) -> List[State]:
        return [s for s in State if cls.is_supported(s, tax_year)]

    @classmethod
    def unregister(cls, state: State, tax_year: int) -> None:
        """Remove one registration. Useful for testing."""
        cls._forms.get(state, {}).pop(tax_year, None)


def register_state(state: State, tax_year: int) -> Callable:
    """
    Decorator to register a state return.

    Usage:
        @register_state(State.IL, 2025)
        class IL1040(StateReturn):
            ...
    """
    def decorator(cls: Type["StateReturn"]) -> Type["StateReturn"]:
        StateFormRegistry.register(state, tax_year, cls)
        return cls
    return decorator


def verify_registry(tax_year: int, parameters_states=None) -> None:
    """
    Check the dispatch partition for a year.

    Raises ConfigurationError when a state is both registered and in the
    no-filing set, or when a registered state has no parameters.
    """
    registered = set(StateFormRegistry.get_registered_states(tax_year))
    overlap = registered & NO_FILING_REQUIRED_STATES
    if overlap:
        raise ConfigurationError(
            f"States both registered and no-filing: {sorted(s.value for s in overlap)}"
        )
    if parameters_states is not None:
        missing = registered - set(parameters_states)
        if missing:
            raise ConfigurationError(
                f"Registered states without {tax_year} parameters: "
                f"{sorted(s.value for s in missing)}"
            )
