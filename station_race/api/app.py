"""
FastAPI Application - REST API for a browser front end.

Endpoints:
    GET    /api/v1/health                  Liveness and version
    POST   /api/v1/sessions                Create a session (Begin screen)
    GET    /api/v1/sessions                List sessions
    GET    /api/v1/sessions/{id}           Get the current screen
    DELETE /api/v1/sessions/{id}           End a session
    POST   /api/v1/sessions/{id}/inputs    Apply one input
    POST   /api/v1/sessions/{id}/keys      Apply the input bound to a key
    POST   /api/v1/sessions/{id}/undo      Undo the last accepted input

An input that does not apply to the current screen is NOT an HTTP error:
the response is 200 with accepted=false and the unchanged screen.

Run with: uvicorn station_race.api.app:create_app --factory
"""

from typing import Optional, Union

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from .service import APIService
from .schemas import (
    CreateSessionRequest,
    InputRequest,
    KeyRequest,
    SessionResponse,
    TransitionResponse,
    ErrorResponse,
    ErrorCode,
    SessionListResponse,
    EndSessionResponse,
    HealthResponse,
)


def create_app(service: Optional[APIService] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    api_service = service or APIService()

    app = FastAPI(
        title="Station Race API",
        description="""
Turn-based secret station guessing game.

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Session does not exist |
| `INVALID_INPUT` | Request body is malformed |
| `INVALID_CONFIGURATION` | Session overrides break the game bounds |
| `REJECTED_TRANSITION` | Input does nothing on this screen (200, accepted=false) |
| `INVALID_SLOT` | Registration slot out of range (200, accepted=false) |
| `UNBOUND_KEY` | Key does nothing on this screen (200, accepted=false) |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=api_service.settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    def error_or_result(response):
        if isinstance(response, ErrorResponse):
            return make_error_response(response.error_code, response.error, status_code=404)
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return make_error_response(
            ErrorCode.INVALID_INPUT,
            "Invalid request body",
            details={"errors": [str(e.get("msg")) for e in exc.errors()]},
        )

    # =========================================================================
    # Health
    # =========================================================================

    @app.get("/api/v1/health", response_model=HealthResponse, tags=["Health"])
    async def health() -> HealthResponse:
        return HealthResponse(
            version=__version__,
            active_sessions=len(api_service.list_sessions()),
        )

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        responses={400: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Create a new game session",
    )
    async def create_session(
        body: Optional[CreateSessionRequest] = None,
    ) -> Union[SessionResponse, JSONResponse]:
        """Create a session on the Begin screen, optionally overriding defaults."""
        try:
            return api_service.create_session(body or CreateSessionRequest())
        except ValueError as e:
            return make_error_response(ErrorCode.INVALID_CONFIGURATION, str(e))

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List sessions",
    )
    async def list_sessions() -> SessionListResponse:
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get session status",
    )
    async def get_session(session_id: str) -> Union[SessionResponse, JSONResponse]:
        return error_or_result(api_service.get_session(session_id))

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a game session",
    )
    async def end_session(session_id: str) -> EndSessionResponse:
        success = api_service.end_session(session_id)
        return EndSessionResponse(success=success, session_id=session_id)

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/inputs",
        response_model=TransitionResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Malformed input"},
            404: {"model": ErrorResponse, "description": "Session not found"},
        },
        tags=["Game"],
        summary="Apply one input",
    )
    async def send_input(
        session_id: str,
        body: InputRequest,
    ) -> Union[TransitionResponse, JSONResponse]:
        """
        Apply one input to the session.

        **Request Body:**
        ```json
        {"type": "RegisterPlayer", "slot": 0, "name": "Ann"}
        {"type": "GoRight"}
        ```
        """
        return error_or_result(api_service.send_input(session_id, body))

    @app.post(
        "/api/v1/sessions/{session_id}/keys",
        response_model=TransitionResponse,
        responses={404: {"model": ErrorResponse, "description": "Session not found"}},
        tags=["Game"],
        summary="Apply the input bound to a key",
    )
    async def send_key(
        session_id: str,
        body: KeyRequest,
    ) -> Union[TransitionResponse, JSONResponse]:
        return error_or_result(api_service.send_key(session_id, body))

    @app.post(
        "/api/v1/sessions/{session_id}/undo",
        response_model=TransitionResponse,
        responses={404: {"model": ErrorResponse, "description": "Session not found"}},
        tags=["Game"],
        summary="Undo the last accepted input",
    )
    async def undo(session_id: str) -> Union[TransitionResponse, JSONResponse]:
        return error_or_result(api_service.undo(session_id))

    return app
