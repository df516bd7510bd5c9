"""
Pydantic Schemas for API - request/response models for OpenAPI.

These models define the contract between a browser front end and the
engine. The secret station never appears in a view until the game is
over, and then only as the winner's station.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has ended
- INVALID_INPUT: Input is malformed (unknown type, missing payload)
- INVALID_CONFIGURATION: Configuration overrides break the game bounds
- REJECTED_TRANSITION: Input is not valid on the current screen (not an HTTP error)
- INVALID_SLOT: Registration slot out of range (not an HTTP error)
- UNBOUND_KEY: Key has no binding on the current screen (not an HTTP error)
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field, model_validator

from ..engine_core.action import Action, ActionType


# =============================================================================
# Enums
# =============================================================================

class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    INVALID_INPUT = "INVALID_INPUT"
    INVALID_CONFIGURATION = "INVALID_CONFIGURATION"
    REJECTED_TRANSITION = "REJECTED_TRANSITION"
    INVALID_SLOT = "INVALID_SLOT"
    UNBOUND_KEY = "UNBOUND_KEY"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class PlayerInfo(BaseModel):
    """A player on the track."""
    name: str
    station: int
    is_current: bool = False


class WinnerInfo(BaseModel):
    """The winner and the secret station they found."""
    name: str
    station: int


class StateView(BaseModel):
    """Everything a front end needs to draw the current screen."""
    tag: str = Field(description="Begin, Setup, Turn, TurnResult or GameOver")
    first_station: int
    last_station: int
    min_players: int
    max_players: int
    stations: list[int] = Field(default_factory=list)

    # Setup
    registered_players: list[str] = Field(default_factory=list)
    can_start: bool = False

    # Turn / TurnResult
    players: list[PlayerInfo] = Field(default_factory=list)
    current_player: Optional[int] = None
    miss: Optional[str] = Field(None, description="early or late, on TurnResult only")

    # GameOver
    winner: Optional[WinnerInfo] = None

    keys: list[str] = Field(default_factory=list, description="Key help for this screen")


# =============================================================================
# Requests
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Create a session; every field overrides the server default."""
    first_station: Optional[int] = None
    last_station: Optional[int] = None
    min_players: Optional[int] = None
    max_players: Optional[int] = None
    seed: Optional[int] = Field(None, description="Seed for reproducible secret stations")

    def overrides(self) -> dict[str, int]:
        return self.model_dump(exclude_none=True, exclude={"seed"})


class InputRequest(BaseModel):
    """A single input. slot and name are only used by RegisterPlayer."""
    type: ActionType
    slot: Optional[int] = None
    name: Optional[str] = None

    @model_validator(mode="after")
    def check_payload(self) -> "InputRequest":
        if self.type is ActionType.REGISTER_PLAYER:
            if self.slot is None or self.name is None:
                raise ValueError("RegisterPlayer requires slot and name")
        elif self.slot is not None or self.name is not None:
            raise ValueError(f"{self.type.value} takes no slot or name")
        return self

    def to_action(self) -> Action:
        if self.type is ActionType.REGISTER_PLAYER:
            return Action.register_player(self.slot, self.name)
        return Action(self.type)


class KeyRequest(BaseModel):
    """A key press, resolved against the current screen's bindings."""
    key: str = Field(description="Enter, ArrowLeft, ArrowRight")
    shift: bool = False


# =============================================================================
# Responses
# =============================================================================

class SessionResponse(BaseModel):
    """Session status with the current screen."""
    session_id: str
    state: StateView
    can_undo: bool = False


class TransitionResponse(BaseModel):
    """Outcome of an input: accepted or not, and the screen afterwards."""
    session_id: str
    accepted: bool
    error: Optional[str] = None
    error_code: Optional[ErrorCode] = None
    changes: list[str] = Field(default_factory=list)
    state: StateView
    can_undo: bool = False


class ErrorResponse(BaseModel):
    """Error payload for failed requests."""
    error: str
    error_code: ErrorCode
    details: Optional[dict[str, Any]] = None


class SessionListResponse(BaseModel):
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
    active_sessions: int = 0
