"""
Engine Core - Deterministic Station Race state machine.

The engine is a pure function:
1. Takes the current GameState
2. Takes one Action
3. Returns the next GameState (or the same one if the action does not apply)

Storing states, rendering them and turning gestures into actions is left
to callers (see station_race.session and station_race.api).
"""

from .state import (
    Configuration,
    Player,
    Game,
    GameState,
    StateTag,
    Begin,
    Setup,
    Turn,
    TurnResult,
    GameOver,
    begin,
)
from .action import Action, ActionType, PlayerRegistration, ActionResult
from .reducer import Reducer, apply_action, apply
from .secret_station import make_secret_station, seeded_secret_station, fixed_secret_station
from .errors import StationRaceError, ConfigurationError, UnknownInputError

__all__ = [
    "Configuration",
    "Player",
    "Game",
    "GameState",
    "StateTag",
    "Begin",
    "Setup",
    "Turn",
    "TurnResult",
    "GameOver",
    "begin",
    "Action",
    "ActionType",
    "PlayerRegistration",
    "ActionResult",
    "Reducer",
    "apply_action",
    "apply",
    "make_secret_station",
    "seeded_secret_station",
    "fixed_secret_station",
    "StationRaceError",
    "ConfigurationError",
    "UnknownInputError",
]
