"""
Tests for API Pydantic schemas.

Validates that:
- Input requests enforce the RegisterPlayer payload rule
- Enums serialize by value
- Overrides only carry what the client sent
"""

import pytest
from pydantic import ValidationError

from ..api.schemas import (
    CreateSessionRequest,
    ErrorCode,
    ErrorResponse,
    InputRequest,
    KeyRequest,
    StateView,
    TransitionResponse,
)
from ..engine_core.action import ActionType


class TestInputRequest:

    @pytest.mark.parametrize("type_", [t.value for t in ActionType if t is not ActionType.REGISTER_PLAYER])
    def test_plain_inputs(self, type_):
        request = InputRequest(type=type_)
        assert request.to_action().action_type.value == type_
        assert request.to_action().payload is None

    def test_register_player(self):
        action = InputRequest(type="RegisterPlayer", slot=0, name="   ").to_action()
        assert action.payload.slot == 0
        assert action.payload.name == "   "

    def test_register_requires_payload(self):
        with pytest.raises(ValidationError):
            InputRequest(type="RegisterPlayer", name="A")

    def test_plain_input_rejects_payload(self):
        with pytest.raises(ValidationError):
            InputRequest(type="Start", slot=1)

    def test_unknown_type(self):
        with pytest.raises(ValidationError):
            InputRequest(type="Teleport")


class TestResponses:

    def test_error_response_serializes_code(self):
        data = ErrorResponse(error="gone", error_code=ErrorCode.SESSION_NOT_FOUND).model_dump(mode="json")
        assert data == {"error": "gone", "error_code": "SESSION_NOT_FOUND", "details": None}

    def test_transition_response(self):
        view = StateView(tag="Begin", first_station=1, last_station=7, min_players=2, max_players=4)
        response = TransitionResponse(
            session_id="s-1",
            accepted=False,
            error_code=ErrorCode.REJECTED_TRANSITION,
            state=view,
        )
        data = response.model_dump(mode="json")

        assert data["error_code"] == "REJECTED_TRANSITION"
        assert data["state"]["players"] == []
        assert data["state"]["winner"] is None


class TestRequests:

    def test_overrides_skip_unset_fields(self):
        request = CreateSessionRequest(last_station=9, seed=4)
        assert request.overrides() == {"last_station": 9}

    def test_key_request_default_shift(self):
        assert KeyRequest(key="Enter").shift is False
