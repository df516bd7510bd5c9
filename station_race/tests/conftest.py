"""
Pytest fixtures for Station Race tests.
"""

import pytest

from ..engine_core.state import Configuration, Begin, Setup, Turn, begin
from ..engine_core.action import Action
from ..engine_core.reducer import apply
from ..engine_core.secret_station import fixed_secret_station


@pytest.fixture
def short_track() -> Configuration:
    """Stations 1..4, 2-4 players, secret station always 3."""
    return Configuration(
        first_station=1,
        last_station=4,
        min_players=2,
        max_players=4,
        make_secret_station=fixed_secret_station(3),
    )


@pytest.fixture
def begin_state(short_track: Configuration) -> Begin:
    return begin(short_track)


@pytest.fixture
def setup_state(begin_state: Begin) -> Setup:
    """Setup screen with all slots empty."""
    return apply(begin_state, Action.setup_new_game())


@pytest.fixture
def registered_state(setup_state: Setup) -> Setup:
    """Setup screen with A in slot 0 and B in slot 1."""
    state = apply(setup_state, Action.register_player(0, "A"))
    return apply(state, Action.register_player(1, "B"))


@pytest.fixture
def turn_state(registered_state: Setup) -> Turn:
    """First turn of a round between A and B, secret station 3."""
    return apply(registered_state, Action.start())


def run(state, *actions):
    """Apply actions in order and return the final state."""
    for action in actions:
        state = apply(state, action)
    return state
