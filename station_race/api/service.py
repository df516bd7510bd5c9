"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine actions
2. Manages sessions
3. Builds screen views that never leak the secret station

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field

import structlog

from .schemas import (
    CreateSessionRequest,
    InputRequest,
    KeyRequest,
    SessionResponse,
    TransitionResponse,
    ErrorResponse,
    ErrorCode,
    StateView,
    PlayerInfo,
    WinnerInfo,
)
from ..config import Settings
from ..engine_core import rules
from ..engine_core.action import Action, ActionResult
from ..engine_core.state import GameState, Setup, Turn, TurnResult, GameOver
from ..keyboard import key_help, resolve_key
from ..session import SessionManager, Session

LOGGER = structlog.get_logger(__name__)


def state_to_view(state: GameState) -> StateView:
    """Build the public view of a state."""
    config = state.config
    view = StateView(
        tag=state.tag.value,
        first_station=config.first_station,
        last_station=config.last_station,
        min_players=config.min_players,
        max_players=config.max_players,
        stations=rules.stations(config),
        keys=key_help(state),
    )

    if isinstance(state, Setup):
        view.registered_players = list(state.config.registered_players)
        view.can_start = rules.has_enough_players(state.config)
    elif isinstance(state, (Turn, TurnResult)):
        game = state.game
        view.players = [
            PlayerInfo(name=p.name, station=p.station, is_current=rules.is_current_player(game, i))
            for i, p in enumerate(game.players)
        ]
        view.current_player = game.current_player
        if isinstance(state, TurnResult):
            view.miss = rules.miss_direction(game)
    elif isinstance(state, GameOver):
        view.winner = WinnerInfo(name=state.winner.name, station=state.winner.station)

    return view


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        session = service.create_session(CreateSessionRequest())
        service.send_input(session.session_id, InputRequest(type="SetupNewGame"))
        service.send_key(session.session_id, KeyRequest(key="Enter"))
    """
    session_manager: SessionManager = field(default_factory=SessionManager)
    settings: Settings = field(default_factory=Settings.from_env)

    def create_session(self, request: CreateSessionRequest) -> SessionResponse:
        """
        Create a new session on the Begin screen.

        Sessions older than settings.session_max_age are dropped first.

        Raises ValueError if the overrides break the game bounds.
        """
        stale = self.session_manager.cleanup_stale_sessions(self.settings.session_max_age)
        if stale:
            LOGGER.info("service.stale_sessions_dropped", count=len(stale))
        settings = self.settings
        overrides = request.overrides()
        if overrides:
            settings = Settings(**{**self.settings.model_dump(), **overrides})
        session = self.session_manager.create_session(settings.configuration(seed=request.seed))
        return self._session_to_response(session)

    def get_session(self, session_id: str) -> SessionResponse | ErrorResponse:
        """Get session status."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self._session_to_response(session)

    def send_input(self, session_id: str, request: InputRequest) -> TransitionResponse | ErrorResponse:
        """Apply one input to a session."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self._apply(session, request.to_action())

    def send_key(self, session_id: str, request: KeyRequest) -> TransitionResponse | ErrorResponse:
        """Resolve a key press against the current screen and apply it."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        action = resolve_key(session.state, request.key, shift=request.shift)
        if action is None:
            prefix = "Shift+" if request.shift else ""
            return self._transition_response(
                session,
                ActionResult.rejected(
                    session.state,
                    f"{prefix}{request.key} does nothing on {session.state.tag.value}",
                    error_code=ErrorCode.UNBOUND_KEY.value,
                ),
            )
        return self._apply(session, action)

    def undo(self, session_id: str) -> TransitionResponse | ErrorResponse:
        """Step a session back one successful input."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        if not session.undo():
            return self._transition_response(
                session,
                ActionResult.rejected(session.state, "Nothing to undo"),
            )
        return self._transition_response(
            session,
            ActionResult.success_with_state(session.state, changes=["Undid last input"]),
        )

    def end_session(self, session_id: str) -> bool:
        return self.session_manager.end_session(session_id)

    def list_sessions(self) -> list[str]:
        return self.session_manager.list_sessions()

    # =========================================================================
    # Helpers
    # =========================================================================

    def _apply(self, session: Session, action: Action) -> TransitionResponse:
        result = session.send(action)
        if not result.success:
            LOGGER.info(
                "service.input_rejected",
                session_id=session.session_id,
                action=str(action),
                error_code=result.error_code,
            )
        return self._transition_response(session, result)

    def _transition_response(self, session: Session, result: ActionResult) -> TransitionResponse:
        return TransitionResponse(
            session_id=session.session_id,
            accepted=result.success,
            error=result.error,
            error_code=ErrorCode(result.error_code) if result.error_code else None,
            changes=result.state_changes,
            state=state_to_view(session.state),
            can_undo=session.can_undo,
        )

    def _session_to_response(self, session: Session) -> SessionResponse:
        return SessionResponse(
            session_id=session.session_id,
            state=state_to_view(session.state),
            can_undo=session.can_undo,
        )

    def _not_found(self, session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Session {session_id} not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
        )
