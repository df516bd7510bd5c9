"""
Game State - the closed set of Station Race states.

Design principles:
- Immutable: every record is a frozen dataclass, transitions build new values
- Closed: a state is exactly one of Begin, Setup, Turn, TurnResult, GameOver
- Each variant carries only its own fields, nothing left over from the
  previous state
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, ClassVar, Union

from .errors import ConfigurationError


DEFAULT_FIRST_STATION = 1
DEFAULT_LAST_STATION = 7
DEFAULT_MIN_PLAYERS = 2
DEFAULT_MAX_PLAYERS = 4


class StateTag(Enum):
    """Tags of the five state variants."""
    BEGIN = "Begin"
    SETUP = "Setup"
    TURN = "Turn"
    TURN_RESULT = "TurnResult"
    GAME_OVER = "GameOver"


SecretStationGenerator = Callable[["Configuration"], int]


def _default_generator(config: Configuration) -> int:
    from .secret_station import make_secret_station
    return make_secret_station(config)


@dataclass(frozen=True)
class Configuration:
    """
    Static game settings plus the registration slots.

    The station range, player bounds and generator never change for the
    lifetime of a game. registered_players is indexed by slot; an empty
    string means the slot is unregistered.
    """
    first_station: int = DEFAULT_FIRST_STATION
    last_station: int = DEFAULT_LAST_STATION
    min_players: int = DEFAULT_MIN_PLAYERS
    max_players: int = DEFAULT_MAX_PLAYERS
    make_secret_station: SecretStationGenerator = _default_generator
    registered_players: tuple[str, ...] = ()

    def __post_init__(self):
        errors: list[str] = []
        if self.first_station > self.last_station:
            errors.append("first_station must be <= last_station")
        if self.min_players < 2:
            errors.append("min_players must be >= 2")
        if self.max_players < self.min_players:
            errors.append("max_players must be >= min_players")
        if len(self.registered_players) > self.max_players:
            errors.append("registered_players cannot exceed max_players slots")
        if not callable(self.make_secret_station):
            errors.append("make_secret_station must be callable")
        if errors:
            raise ConfigurationError(errors)

    def with_registrations(self, registered_players: tuple[str, ...]) -> Configuration:
        """Return configuration with new registration slots."""
        return replace(self, registered_players=tuple(registered_players))

    def cleared(self) -> Configuration:
        """Return configuration with no registrations at all."""
        return self.with_registrations(())

    def empty_slots(self) -> Configuration:
        """Return configuration with max_players empty slots."""
        return self.with_registrations(("",) * self.max_players)


@dataclass(frozen=True)
class Player:
    """A player on the track."""
    name: str
    station: int

    def at(self, station: int) -> Player:
        """Return the same player standing on another station."""
        return replace(self, station=station)


@dataclass(frozen=True)
class Game:
    """
    An active round.

    players is fixed when the round starts. secret_station is a puzzle
    secret: hidden by views until the game is over, but plain data here.
    """
    players: tuple[Player, ...]
    current_player: int
    secret_station: int

    def __post_init__(self):
        if not 0 <= self.current_player < len(self.players):
            raise ConfigurationError([
                f"current_player {self.current_player} out of range for "
                f"{len(self.players)} players"
            ])

    def with_current_player_at(self, station: int) -> Game:
        """Return game with the acting player moved to station."""
        players = tuple(
            player.at(station) if i == self.current_player else player
            for i, player in enumerate(self.players)
        )
        return replace(self, players=players)


@dataclass(frozen=True)
class Begin:
    """Fresh configuration, nobody registered yet."""
    config: Configuration
    tag: ClassVar[StateTag] = StateTag.BEGIN


@dataclass(frozen=True)
class Setup:
    """Registration slots are being edited."""
    config: Configuration
    tag: ClassVar[StateTag] = StateTag.SETUP


@dataclass(frozen=True)
class Turn:
    """The acting player may move or get off the train."""
    config: Configuration
    game: Game
    tag: ClassVar[StateTag] = StateTag.TURN


@dataclass(frozen=True)
class TurnResult:
    """The acting player got off at the wrong station; awaiting NextTurn."""
    config: Configuration
    game: Game
    tag: ClassVar[StateTag] = StateTag.TURN_RESULT


@dataclass(frozen=True)
class GameOver:
    """
    Terminal state of a round.

    The active Game is gone; only the winner survives. The configuration
    keeps the registered names so the same roster can play again.
    """
    config: Configuration
    winner: Player
    tag: ClassVar[StateTag] = StateTag.GAME_OVER


GameState = Union[Begin, Setup, Turn, TurnResult, GameOver]


def begin(config: Configuration | None = None) -> Begin:
    """Entry point: a Begin state with registrations cleared."""
    return Begin(config=(config or Configuration()).cleared())
