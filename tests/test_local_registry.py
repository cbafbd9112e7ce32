"""Tests for city name resolution and the city return base class."""

import pytest

from forms.local.local_registry import normalize_city, registered_cities, resolve_city
from models import State


class TestLocalRegistry:

    def test_registered(self):
        assert registered_cities() == ["DETROIT", "NYC", "PHILADELPHIA"]

    def test_normalize(self):
        assert normalize_city("  New York City ") == "new york city"
        assert normalize_city("St. Louis") == "st louis"

    def test_resolve_aliases(self, parameters):
        localities = parameters.localities
        assert resolve_city(State.NY, "new york", localities) == "NYC"
        assert resolve_city(State.NY, "Queens", localities) == "NYC"
        assert resolve_city(State.PA, "PHILA", localities) == "PHILADELPHIA"
        assert resolve_city(State.MI, "detroit", localities) == "DETROIT"

    def test_state_must_match(self, parameters):
        assert resolve_city(State.NJ, "Philadelphia", parameters.localities) is None

    def test_unknown_city(self, parameters):
        assert resolve_city(State.IL, "Springfield", parameters.localities) is None

    def test_unknown_city_in_assembled_return(self, assembler, make_info):
        from models import LocalTaxInfo

        info = make_info(
            wages=60000, withholding=7000, states=[State.IL],
            local_tax_info=LocalTaxInfo(residence_city="Springfield"),
        )
        result = assembler.assemble(info)

        assert result.tags() == ["f1040", "il1040"]
        assert result.diagnostics.to_dict() == [{
            "form": "il1040",
            "line": "local",
            "reason": "no city income tax form for Springfield, IL",
        }]


class TestLocalReturn:

    def test_base_class_is_abstract(self, build_f1040):
        from forms.local.local_form import LocalReturn
        from forms.state import StateFormRegistry

        ny = StateFormRegistry.factory(State.NY, 2025)(build_f1040(wages=50000, states=[State.NY]))
        with pytest.raises(TypeError):
            LocalReturn(ny, "NYC")
