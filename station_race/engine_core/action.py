"""
Action System - Inputs and results.

Inputs are the discrete gestures the presentation layer feeds to the
engine, one at a time. The set is closed: only ActionType members exist,
and only RegisterPlayer carries a payload.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionType(Enum):
    """Every input the engine understands."""
    # Setup
    SETUP_NEW_GAME = "SetupNewGame"
    REGISTER_PLAYER = "RegisterPlayer"
    START = "Start"

    # Turn
    GO_LEFT = "GoLeft"
    GO_RIGHT = "GoRight"
    GO_FIRST = "GoFirst"
    GO_LAST = "GoLast"
    GET_OFF_THE_TRAIN = "GetOffTheTrain"

    # Turn result
    NEXT_TURN = "NextTurn"

    # Game over
    PLAY_AGAIN = "PlayAgain"
    BEGIN_AGAIN = "BeginAgain"


@dataclass(frozen=True)
class PlayerRegistration:
    """Payload of RegisterPlayer: put name into registration slot."""
    slot: int
    name: str


@dataclass(frozen=True)
class Action:
    """
    A single input to apply to the game state.

    Build actions with the factory classmethods; RegisterPlayer is the
    only one that needs a payload.
    """
    action_type: ActionType
    payload: PlayerRegistration | None = None

    def __post_init__(self):
        if self.action_type is ActionType.REGISTER_PLAYER:
            if not isinstance(self.payload, PlayerRegistration):
                raise ValueError("RegisterPlayer requires a PlayerRegistration payload")
        elif self.payload is not None:
            raise ValueError(f"{self.action_type.value} takes no payload")

    @classmethod
    def setup_new_game(cls) -> Action:
        return cls(ActionType.SETUP_NEW_GAME)

    @classmethod
    def register_player(cls, slot: int, name: str) -> Action:
        """Factory for slot registration; a blank name clears the slot."""
        return cls(
            ActionType.REGISTER_PLAYER,
            payload=PlayerRegistration(slot=slot, name=name),
        )

    @classmethod
    def start(cls) -> Action:
        return cls(ActionType.START)

    @classmethod
    def go_left(cls) -> Action:
        return cls(ActionType.GO_LEFT)

    @classmethod
    def go_right(cls) -> Action:
        return cls(ActionType.GO_RIGHT)

    @classmethod
    def go_first(cls) -> Action:
        return cls(ActionType.GO_FIRST)

    @classmethod
    def go_last(cls) -> Action:
        return cls(ActionType.GO_LAST)

    @classmethod
    def get_off_the_train(cls) -> Action:
        return cls(ActionType.GET_OFF_THE_TRAIN)

    @classmethod
    def next_turn(cls) -> Action:
        return cls(ActionType.NEXT_TURN)

    @classmethod
    def play_again(cls) -> Action:
        return cls(ActionType.PLAY_AGAIN)

    @classmethod
    def begin_again(cls) -> Action:
        return cls(ActionType.BEGIN_AGAIN)

    @classmethod
    def parse(cls, text: str) -> Action:
        """
        Parse the compact text form used by the CLI and logs.

        "GoLeft" -> go_left, "RegisterPlayer:0:Ann" -> register_player(0, "Ann").
        """
        name, _, rest = text.partition(":")
        action_type = ActionType(name.strip())
        if action_type is ActionType.REGISTER_PLAYER:
            slot, _, player_name = rest.partition(":")
            return cls.register_player(int(slot), player_name)
        if rest:
            raise ValueError(f"{action_type.value} takes no payload")
        return cls(action_type)

    def __str__(self) -> str:
        if self.payload is not None:
            return f"{self.action_type.value}:{self.payload.slot}:{self.payload.name}"
        return self.action_type.value


@dataclass
class ActionResult:
    """
    Result of applying an action.

    new_state is always a valid state: on rejection it is the input state,
    unchanged. success tells the caller whether the transition fired.
    """
    success: bool
    new_state: Any  # GameState
    error: str | None = None
    error_code: str | None = None

    # Human-readable summary of what happened
    state_changes: list[str] = field(default_factory=list)

    @classmethod
    def rejected(cls, state: Any, error: str, error_code: str = "REJECTED_TRANSITION") -> ActionResult:
        """Create a result for an input that did not fire."""
        return cls(success=False, new_state=state, error=error, error_code=error_code)

    @classmethod
    def success_with_state(cls, state: Any, changes: list[str] | None = None) -> ActionResult:
        """Create a success result with new state."""
        return cls(success=True, new_state=state, state_changes=changes or [])
