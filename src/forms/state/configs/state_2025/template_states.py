"""States whose 2025 return is fully described by its parameters."""

from forms.state.state_form import StateReturn
from forms.state.state_registry import StateFormRegistry
from models.jurisdiction import State

TEMPLATE_STATES = (
    State.AL, State.AR, State.AZ, State.CO, State.CT, State.DC, State.DE,
    State.GA, State.HI, State.IA, State.ID, State.IN, State.KS, State.KY,
    State.LA, State.MA, State.MD, State.ME, State.MI, State.MN, State.MO,
    State.MS, State.MT, State.NC, State.ND, State.NE, State.NM, State.NY,
    State.OH, State.OK, State.OR, State.RI, State.SC, State.UT, State.VA,
    State.VT, State.WI,
)

for _state in TEMPLATE_STATES:
    StateFormRegistry.register(_state, 2025, StateReturn)
