"""
API Module - Browser front end interface.

Exposes game sessions via REST API. The front end:
1. Creates a session
2. Sends inputs (or raw key presses) one at a time
3. Redraws from the returned screen view

All state is session-scoped and in memory.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    InputRequest,
    KeyRequest,
    # Responses
    SessionResponse,
    TransitionResponse,
    ErrorResponse,
    SessionListResponse,
    EndSessionResponse,
    HealthResponse,
    # Shared
    ErrorCode,
    StateView,
    PlayerInfo,
    WinnerInfo,
)
from .service import APIService, state_to_view
from .app import create_app

__all__ = [
    # Requests
    "CreateSessionRequest",
    "InputRequest",
    "KeyRequest",
    # Responses
    "SessionResponse",
    "TransitionResponse",
    "ErrorResponse",
    "SessionListResponse",
    "EndSessionResponse",
    "HealthResponse",
    # Shared
    "ErrorCode",
    "StateView",
    "PlayerInfo",
    "WinnerInfo",
    # Service
    "APIService",
    "state_to_view",
    "create_app",
]
