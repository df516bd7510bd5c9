"""
Session Manager - Creates and manages game sessions.

The engine is a pure function and stores nothing. A session is the caller
side of that contract: it keeps the current state, feeds it one action at
a time and remembers earlier states so a move can be undone.

PERSISTENCE RULES:
- Sessions are in-memory only
- Ending a session drops its whole history
"""

from __future__ import annotations
from dataclasses import dataclass, field
import time
import uuid

import structlog

from ..engine_core.state import Configuration, GameState, GameOver, begin
from ..engine_core.action import Action, ActionResult
from ..engine_core.reducer import Reducer

LOGGER = structlog.get_logger(__name__)


@dataclass
class Session:
    """
    A single game table.

    Contains:
    - The current state
    - Every earlier state that a successful action replaced
    - Session metadata
    """
    session_id: str
    state: GameState
    created_at: float
    history: list[GameState] = field(default_factory=list)
    reducer: Reducer = field(default_factory=Reducer)
    last_result: ActionResult | None = None

    def send(self, action: Action) -> ActionResult:
        """
        Apply one action to the current state.

        Rejected actions, and accepted ones that return the same state
        (a move clamped at the end of the track), leave the history untouched.
        """
        result = self.reducer.apply(self.state, action)
        if result.success and result.new_state is not self.state:
            self.history.append(self.state)
            self.state = result.new_state
        self.last_result = result
        return result

    def undo(self) -> bool:
        """Step back to the state before the last successful action."""
        if not self.history:
            return False
        self.state = self.history.pop()
        self.last_result = None
        return True

    @property
    def can_undo(self) -> bool:
        return bool(self.history)

    @property
    def is_game_over(self) -> bool:
        return isinstance(self.state, GameOver)


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions from a configuration
    - Track active sessions
    - End sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self):
        self._sessions: dict[str, Session] = {}

    def create_session(self, config: Configuration | None = None) -> Session:
        """Create a new session sitting on the Begin screen."""
        session = Session(
            session_id=str(uuid.uuid4()),
            state=begin(config),
            created_at=time.time(),
        )
        self._sessions[session.session_id] = session
        LOGGER.info("session.created", session_id=session.session_id)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str) -> bool:
        """Remove a session; returns False if it did not exist."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.history.clear()
        LOGGER.info("session.ended", session_id=session_id)
        return True

    def list_sessions(self) -> list[str]:
        """List IDs of live sessions."""
        return list(self._sessions)

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> list[str]:
        """End sessions older than max_age_seconds; returns their IDs."""
        now = time.time()
        stale = [
            sid for sid, session in self._sessions.items()
            if now - session.created_at > max_age_seconds
        ]
        for session_id in stale:
            self.end_session(session_id)
        return stale
