"""
Rules - pure helpers over configurations and games.

Nothing here builds states; the reducer composes these into transitions
and views use them for display.
"""

from __future__ import annotations

from .state import Configuration, Game, Player


def is_invalid_name(name: str) -> bool:
    """Blank or whitespace-only names mean "unregistered"."""
    return not name or name.isspace()


def registered_names(config: Configuration) -> list[str]:
    """Non-empty registered names in slot order."""
    return [name for name in config.registered_players if name]


def has_enough_players(config: Configuration) -> bool:
    return len(registered_names(config)) >= config.min_players


def is_valid_slot(config: Configuration, slot: int) -> bool:
    return 0 <= slot < config.max_players


def stations(config: Configuration) -> list[int]:
    """All stations on the track, first to last inclusive."""
    return list(range(config.first_station, config.last_station + 1))


def clamp_station(config: Configuration, station: int) -> int:
    return max(config.first_station, min(config.last_station, station))


def current_player(game: Game) -> Player:
    return game.players[game.current_player]


def is_current_player(game: Game, index: int) -> bool:
    return game.current_player == index


def next_player(game: Game) -> int:
    """Index of the player who acts after the current one."""
    return (game.current_player + 1) % len(game.players)


def winner(game: Game) -> Player | None:
    """
    The acting player, if they stand on the secret station.

    Only the acting player can win: standing on the secret station means
    nothing until that player gets off the train.
    """
    player = current_player(game)
    if player.station == game.secret_station:
        return player
    return None


def has_winner(game: Game) -> bool:
    return winner(game) is not None


def miss_direction(game: Game) -> str | None:
    """
    "early" or "late" for a player who got off at the wrong station.

    None when the acting player is on the secret station.
    """
    station = current_player(game).station
    if station < game.secret_station:
        return "early"
    if station > game.secret_station:
        return "late"
    return None
