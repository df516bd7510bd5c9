"""
Tests for rule helpers and secret station generators.
"""

import pytest

from ..engine_core import rules
from ..engine_core.state import Configuration, Game, Player
from ..engine_core.errors import ConfigurationError
from ..engine_core.secret_station import (
    make_secret_station, seeded_secret_station, fixed_secret_station,
)


@pytest.fixture
def game() -> Game:
    return Game(
        players=(Player("A", 2), Player("B", 5), Player("C", 1)),
        current_player=1,
        secret_station=4,
    )


class TestNames:

    @pytest.mark.parametrize("name,invalid", [
        ("", True),
        ("   ", True),
        ("\t", True),
        ("Ann", False),
        (" Ann ", False),
    ])
    def test_is_invalid_name(self, name, invalid):
        assert rules.is_invalid_name(name) is invalid

    def test_registered_names_skip_empty_slots(self):
        config = Configuration(registered_players=("", "B", "", "D"))
        assert rules.registered_names(config) == ["B", "D"]

    def test_has_enough_players(self):
        assert not rules.has_enough_players(Configuration(registered_players=("A", "", "", "")))
        assert rules.has_enough_players(Configuration(registered_players=("A", "", "C", "")))

    def test_valid_slots(self):
        config = Configuration(max_players=3)
        assert [s for s in range(-1, 5) if rules.is_valid_slot(config, s)] == [0, 1, 2]


class TestTrack:

    def test_stations(self):
        assert rules.stations(Configuration(first_station=2, last_station=5)) == [2, 3, 4, 5]

    def test_single_station_track(self):
        assert rules.stations(Configuration(first_station=3, last_station=3)) == [3]

    @pytest.mark.parametrize("station,expected", [(0, 1), (1, 1), (4, 4), (7, 7), (8, 7)])
    def test_clamp_station(self, station, expected):
        assert rules.clamp_station(Configuration(), station) == expected


class TestTurns:

    def test_current_player(self, game):
        assert rules.current_player(game).name == "B"
        assert rules.is_current_player(game, 1)
        assert not rules.is_current_player(game, 0)

    def test_next_player_wraps(self, game):
        assert rules.next_player(game) == 2
        last = Game(players=game.players, current_player=2, secret_station=4)
        assert rules.next_player(last) == 0

    def test_winner_only_on_secret(self, game):
        assert rules.winner(game) is None
        assert not rules.has_winner(game)

        moved = game.with_current_player_at(4)
        assert rules.winner(moved) == Player("B", 4)
        assert rules.has_winner(moved)

    def test_miss_direction(self, game):
        assert rules.miss_direction(game) == "late"
        assert rules.miss_direction(game.with_current_player_at(3)) == "early"
        assert rules.miss_direction(game.with_current_player_at(4)) is None

    def test_current_player_out_of_range(self):
        with pytest.raises(ConfigurationError):
            Game(players=(Player("A", 1),), current_player=1, secret_station=1)


class TestConfiguration:

    def test_defaults(self):
        config = Configuration()
        assert (config.first_station, config.last_station) == (1, 7)
        assert (config.min_players, config.max_players) == (2, 4)

    @pytest.mark.parametrize("kwargs", [
        {"first_station": 5, "last_station": 4},
        {"min_players": 1},
        {"min_players": 5, "max_players": 4},
        {"registered_players": ("A", "B", "C", "D", "E")},
        {"make_secret_station": 3},
    ])
    def test_invalid_configuration(self, kwargs):
        with pytest.raises(ConfigurationError):
            Configuration(**kwargs)

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            Configuration(first_station=2, last_station=1)


class TestSecretStation:

    def test_default_generator_in_range(self):
        config = Configuration(first_station=3, last_station=6)
        draws = {make_secret_station(config) for _ in range(200)}
        assert draws <= {3, 4, 5, 6}

    def test_default_configuration_uses_random_generator(self):
        config = Configuration(first_station=2, last_station=2)
        assert config.make_secret_station(config) == 2

    def test_seeded_is_reproducible(self):
        config = Configuration()
        first = seeded_secret_station(42)
        second = seeded_secret_station(42)
        assert [first(config) for _ in range(5)] == [second(config) for _ in range(5)]

    def test_fixed(self):
        assert fixed_secret_station(3)(Configuration()) == 3
