"""City return registry: which local forms attach to a state return."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Type

from models.jurisdiction import State

if TYPE_CHECKING:
    from forms.local.local_form import LocalReturn
    from forms.state.state_form import StateReturn

logger = logging.getLogger(__name__)

# Storage: city id (key in local_{year}.yaml) -> return class
_LOCAL_FORMS: Dict[str, Type["LocalReturn"]] = {}


def register_local(city_id: str) -> Callable:
    """
    Decorator to register a city return.

    Usage:
        @register_local("DETROIT")
        class DetroitCityReturn(LocalReturn):
            ...
    """
    def decorator(cls: Type["LocalReturn"]) -> Type["LocalReturn"]:
        _LOCAL_FORMS[city_id] = cls
        return cls
    return decorator


def registered_cities() -> List[str]:
    return sorted(_LOCAL_FORMS)


def normalize_city(name: str) -> str:
    """'New York City' -> 'new york city'; 'St. Louis' -> 'st louis'."""
    return " ".join(re.sub(r"[^a-z0-9 ]", " ", name.lower()).split())


def resolve_city(state: State, city: str, localities) -> Optional[str]:
    """Registered city id for a city name in a state, or None."""
    wanted = normalize_city(city)
    for city_id, config in localities.items():
        if city_id not in _LOCAL_FORMS or config.state != state:
            continue
        names = [city_id, config.name, *config.aliases]
        if wanted in (normalize_city(n) for n in names):
            return city_id
    return None


def local_forms_for(state_return: "StateReturn") -> List["LocalReturn"]:
    """
    Build the city returns a state return carries.

    The residence city is taxed as a resident; a different work city in
    the same state is taxed as a non-resident.
    """
    local = state_return.info.local_tax_info
    if local is None:
        return []

    localities = state_return.parameters.localities
    residence_state = local.residence_state or _address_state(state_return)

    candidates = []
    if local.residence_city and residence_state == state_return.state:
        candidates.append((local.residence_city, local.is_resident))
    if local.works_in_different_city and local.work_city and local.work_state == state_return.state:
        candidates.append((local.work_city, False))

    forms: List["LocalReturn"] = []
    built = set()
    for city, resident in candidates:
        city_id = resolve_city(state_return.state, city, localities)
        if city_id is None:
            state_return.missing(
                "local", f"no city income tax form for {city}, {state_return.state.value}"
            )
            continue
        if city_id in built:
            continue
        built.add(city_id)
        forms.append(_LOCAL_FORMS[city_id](state_return, city_id, resident=resident))
        logger.debug("Attached %s city return to %s", city_id, state_return.tag)
    return forms


def _address_state(state_return: "StateReturn") -> Optional[State]:
    code = state_return.header.state
    if code and code.upper() in State.__members__:
        return State(code.upper())
    return None
