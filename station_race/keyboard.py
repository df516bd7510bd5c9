"""
Keyboard bindings - which key does what on each screen.

Front ends translate key presses into actions with resolve_key() and show
key_help() as the small print under each screen.
"""

from __future__ import annotations
from typing import NamedTuple

from .engine_core.action import Action, ActionType
from .engine_core.state import GameState, StateTag


class KeyBinding(NamedTuple):
    key: str
    shift: bool
    action_type: ActionType
    help: str


BINDINGS: dict[StateTag, list[KeyBinding]] = {
    StateTag.BEGIN: [
        KeyBinding("Enter", False, ActionType.SETUP_NEW_GAME, "begin the game"),
    ],
    StateTag.SETUP: [
        KeyBinding("Enter", False, ActionType.START, "start game"),
    ],
    StateTag.TURN: [
        KeyBinding("ArrowLeft", False, ActionType.GO_LEFT, "go to previous station"),
        KeyBinding("ArrowRight", False, ActionType.GO_RIGHT, "go to next station"),
        KeyBinding("ArrowLeft", True, ActionType.GO_FIRST, "go to first station"),
        KeyBinding("ArrowRight", True, ActionType.GO_LAST, "go to last station"),
        KeyBinding("Enter", False, ActionType.GET_OFF_THE_TRAIN, "get off the train"),
    ],
    StateTag.TURN_RESULT: [
        KeyBinding("Enter", False, ActionType.NEXT_TURN, "next player"),
    ],
    StateTag.GAME_OVER: [
        KeyBinding("Enter", False, ActionType.PLAY_AGAIN, "play again"),
        KeyBinding("Enter", True, ActionType.BEGIN_AGAIN, "play a new game"),
    ],
}


def resolve_key(state: GameState, key: str, shift: bool = False) -> Action | None:
    """Map a key press on the current screen to an action, or None if unbound."""
    for binding in BINDINGS[state.tag]:
        if binding.key == key and binding.shift == shift:
            return Action(binding.action_type)
    return None


def key_help(state: GameState) -> list[str]:
    """Human-readable key help for the current screen."""
    return [
        f"{'Shift+' if b.shift else ''}{b.key}: {b.help}."
        for b in BINDINGS[state.tag]
    ]
