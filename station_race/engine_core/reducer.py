"""
Reducer - Applies actions to game state.

The reducer is the single point of state change.
All transitions go through apply_action().

Design principles:
- Pure function: (state, action) -> new_state, inputs never mutated
- Total: every (state, action) pair has an outcome
- Guarded: each action fires only from its own state; from any other
  state it is a silent no-op that returns the state unchanged
- The secret station generator is the only outside call, once per round
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable

import structlog

from .state import (
    Configuration, Game, GameState, Player,
    Begin, Setup, Turn, TurnResult, GameOver,
)
from .action import Action, ActionType, ActionResult
from .errors import ConfigurationError, UnknownInputError
from . import rules

LOGGER = structlog.get_logger(__name__)

Handler = Callable[[GameState, Action], ActionResult]


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all state is in the GameState value passed in.
    """

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult; on rejection new_state is the input state.
        Raises UnknownInputError for anything outside the closed input set.
        """
        if not isinstance(action, Action) or not isinstance(action.action_type, ActionType):
            raise UnknownInputError(action)

        valid_from, handler = self._get_handler(action.action_type)
        if not isinstance(state, valid_from):
            LOGGER.debug(
                "reducer.transition_rejected",
                action=str(action),
                state=state.tag.value,
            )
            return ActionResult.rejected(
                state,
                f"{action.action_type.value} is not valid in {state.tag.value}",
            )

        result = handler(state, action)
        if result.success:
            LOGGER.debug(
                "reducer.transition",
                action=str(action),
                from_state=state.tag.value,
                to_state=result.new_state.tag.value,
            )
        return result

    def _get_handler(self, action_type: ActionType) -> tuple[type, Handler]:
        """Get the guard state type and handler for an action type."""
        handlers: dict[ActionType, tuple[type, Handler]] = {
            ActionType.SETUP_NEW_GAME: (Begin, self._handle_setup_new_game),
            ActionType.REGISTER_PLAYER: (Setup, self._handle_register_player),
            ActionType.START: (Setup, self._handle_start),
            ActionType.GO_LEFT: (Turn, self._handle_go_left),
            ActionType.GO_RIGHT: (Turn, self._handle_go_right),
            ActionType.GO_FIRST: (Turn, self._handle_go_first),
            ActionType.GO_LAST: (Turn, self._handle_go_last),
            ActionType.GET_OFF_THE_TRAIN: (Turn, self._handle_get_off_the_train),
            ActionType.NEXT_TURN: (TurnResult, self._handle_next_turn),
            ActionType.PLAY_AGAIN: (GameOver, self._handle_play_again),
            ActionType.BEGIN_AGAIN: (GameOver, self._handle_begin_again),
        }
        if action_type not in handlers:
            raise UnknownInputError(action_type)
        return handlers[action_type]

    # =========================================================================
    # Setup
    # =========================================================================

    def _handle_setup_new_game(self, state: Begin, action: Action) -> ActionResult:
        new_state = Setup(config=state.config.empty_slots())
        return ActionResult.success_with_state(
            new_state,
            changes=[f"Opened {state.config.max_players} registration slots"],
        )

    def _handle_register_player(self, state: Setup, action: Action) -> ActionResult:
        """Handle slot registration; blank names clear the slot."""
        slot = action.payload.slot
        if not rules.is_valid_slot(state.config, slot):
            LOGGER.debug("reducer.invalid_slot", slot=slot, max_players=state.config.max_players)
            return ActionResult.rejected(
                state,
                f"Slot {slot} is outside 0..{state.config.max_players - 1}",
                error_code="INVALID_SLOT",
            )

        name = "" if rules.is_invalid_name(action.payload.name) else action.payload.name
        regs = state.config.registered_players
        slots = list(regs) + [""] * (state.config.max_players - len(regs))
        slots[slot] = name
        new_state = Setup(config=state.config.with_registrations(tuple(slots)))

        change = f"Registered {name} in slot {slot}" if name else f"Cleared slot {slot}"
        return ActionResult.success_with_state(new_state, changes=[change])

    def _handle_start(self, state: Setup, action: Action) -> ActionResult:
        if not rules.has_enough_players(state.config):
            return ActionResult.rejected(
                state,
                f"Need at least {state.config.min_players} players to start",
            )
        new_state = self._start_round(state.config)
        names = ", ".join(p.name for p in new_state.game.players)
        return ActionResult.success_with_state(new_state, changes=[f"Round started with {names}"])

    def _start_round(self, config: Configuration) -> Turn:
        """Build a fresh round from the registered names."""
        players = tuple(
            Player(name=name, station=config.first_station)
            for name in rules.registered_names(config)
        )
        secret_station = config.make_secret_station(config)
        if not config.first_station <= secret_station <= config.last_station:
            raise ConfigurationError([
                f"secret station {secret_station} outside "
                f"{config.first_station}..{config.last_station}"
            ])
        game = Game(players=players, current_player=0, secret_station=secret_station)
        return Turn(config=config, game=game)

    # =========================================================================
    # Turn
    # =========================================================================

    def _move(self, state: Turn, station: int) -> ActionResult:
        """Move the acting player, clamped to the track."""
        player = rules.current_player(state.game)
        target = rules.clamp_station(state.config, station)
        if target == player.station:
            return ActionResult.success_with_state(state, changes=[])
        new_state = Turn(config=state.config, game=state.game.with_current_player_at(target))
        return ActionResult.success_with_state(
            new_state,
            changes=[f"{player.name} moved from station {player.station} to {target}"],
        )

    def _handle_go_left(self, state: Turn, action: Action) -> ActionResult:
        return self._move(state, rules.current_player(state.game).station - 1)

    def _handle_go_right(self, state: Turn, action: Action) -> ActionResult:
        return self._move(state, rules.current_player(state.game).station + 1)

    def _handle_go_first(self, state: Turn, action: Action) -> ActionResult:
        return self._move(state, state.config.first_station)

    def _handle_go_last(self, state: Turn, action: Action) -> ActionResult:
        return self._move(state, state.config.last_station)

    def _handle_get_off_the_train(self, state: Turn, action: Action) -> ActionResult:
        """Win if the acting player stands on the secret station."""
        found = rules.winner(state.game)
        if found is not None:
            LOGGER.info("reducer.game_over", winner=found.name, station=found.station)
            return ActionResult.success_with_state(
                GameOver(config=state.config, winner=found),
                changes=[f"{found.name} got off at the secret station {found.station} and won"],
            )

        player = rules.current_player(state.game)
        return ActionResult.success_with_state(
            TurnResult(config=state.config, game=state.game),
            changes=[
                f"{player.name} got off the train too "
                f"{rules.miss_direction(state.game)} at station {player.station}"
            ],
        )

    # =========================================================================
    # Turn result / game over
    # =========================================================================

    def _handle_next_turn(self, state: TurnResult, action: Action) -> ActionResult:
        game = Game(
            players=state.game.players,
            current_player=rules.next_player(state.game),
            secret_station=state.game.secret_station,
        )
        new_state = Turn(config=state.config, game=game)
        return ActionResult.success_with_state(
            new_state,
            changes=[f"{rules.current_player(game).name}'s turn"],
        )

    def _handle_play_again(self, state: GameOver, action: Action) -> ActionResult:
        new_state = self._start_round(state.config)
        return ActionResult.success_with_state(new_state, changes=["Started a new round"])

    def _handle_begin_again(self, state: GameOver, action: Action) -> ActionResult:
        return ActionResult.success_with_state(
            Begin(config=state.config.cleared()),
            changes=["Back to the beginning"],
        )


def apply_action(state: GameState, action: Action) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    return Reducer().apply(state, action)


def apply(state: GameState, action: Action) -> GameState:
    """Apply an action and return only the resulting state."""
    return apply_action(state, action).new_state
