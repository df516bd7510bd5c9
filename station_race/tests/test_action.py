"""
Tests for actions and their text form.
"""

import pytest

from ..engine_core.action import Action, ActionType, PlayerRegistration


class TestAction:

    def test_only_register_player_has_payload(self):
        assert Action.register_player(1, "A").payload == PlayerRegistration(slot=1, name="A")
        assert Action.go_left().payload is None

    def test_register_without_payload_rejected(self):
        with pytest.raises(ValueError):
            Action(ActionType.REGISTER_PLAYER)

    def test_payload_on_plain_action_rejected(self):
        with pytest.raises(ValueError):
            Action(ActionType.START, payload=PlayerRegistration(slot=0, name="A"))

    def test_actions_are_values(self):
        assert Action.next_turn() == Action(ActionType.NEXT_TURN)
        assert hash(Action.go_last()) == hash(Action.go_last())


class TestParse:

    @pytest.mark.parametrize("text,expected", [
        ("GoLeft", Action.go_left()),
        ("GetOffTheTrain", Action.get_off_the_train()),
        ("RegisterPlayer:2:Ann", Action.register_player(2, "Ann")),
        ("RegisterPlayer:0:", Action.register_player(0, "")),
        ("RegisterPlayer:1:A:B", Action.register_player(1, "A:B")),
    ])
    def test_parse(self, text, expected):
        assert Action.parse(text) == expected

    @pytest.mark.parametrize("text", ["Fly", "Start:1", "RegisterPlayer:x:A", ""])
    def test_parse_rejects(self, text):
        with pytest.raises(ValueError):
            Action.parse(text)

    def test_str_is_parseable(self):
        for action in (Action.begin_again(), Action.register_player(3, "Dee")):
            assert Action.parse(str(action)) == action
