"""
FastAPI Application - REST API over the rules engine.

Endpoints:
    GET    /api/v1/health                     Health check
    POST   /api/v1/sessions                   Open a table
    GET    /api/v1/sessions                   List active sessions
    GET    /api/v1/sessions/{id}              Get game state
    DELETE /api/v1/sessions/{id}              End session
    POST   /api/v1/sessions/{id}/players      Join a table
    POST   /api/v1/sessions/{id}/actions      Apply an action

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Annotated, Union
import logging
import os

from .. import __version__

# Environment configuration
ERIANTYS_ENV = os.getenv("ERIANTYS_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

logger = logging.getLogger(__name__)

# HTTP status per engine error code
STATUS_BY_ERROR = {
    "SESSION_NOT_FOUND": 404,
    "INVALID_ARGUMENT": 400,
    "INDEX_OUT_OF_RANGE": 400,
    "ILLEGAL_STATE": 409,
    "INVALID_ACTION": 409,
}


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, Query
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .service import APIService
    from .schemas import (
        CreateSessionRequest,
        JoinRequest,
        ActionRequest,
        ActionResponse,
        ErrorResponse,
        GameStateResponse,
        SessionListResponse,
        EndSessionResponse,
        HealthResponse,
    )

    app = FastAPI(
        title="Eriantys Engine API",
        description="Rules engine for 2 and 3 player Eriantys games.",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService()

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(error: ErrorResponse) -> JSONResponse:
        """Turn an ErrorResponse into a JSON response with a matching status."""
        status_code = STATUS_BY_ERROR.get(error.error_code.value, 500)
        return JSONResponse(
            status_code=status_code,
            content=error.model_dump(mode="json"),
        )

    # =========================================================================
    # Health
    # =========================================================================

    @app.get(
        "/api/v1/health",
        response_model=HealthResponse,
        tags=["Health"],
    )
    async def health() -> HealthResponse:
        return HealthResponse(version=__version__, environment=ERIANTYS_ENV)

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=GameStateResponse,
        responses={400: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Open a new table",
    )
    async def create_session(request: CreateSessionRequest) -> Union[GameStateResponse, JSONResponse]:
        response = api_service.create_session(request)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    async def list_sessions() -> SessionListResponse:
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get game state",
    )
    async def get_session(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        response = api_service.get_game_state(session_id)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a game session",
    )
    async def end_session(
        session_id: str,
        reason: Annotated[str, Query(description="Reason for ending")] = "user_ended",
    ) -> EndSessionResponse:
        success = api_service.end_session(session_id, reason)
        return EndSessionResponse(success=success, session_id=session_id)

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/players",
        response_model=ActionResponse,
        responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Join a table",
    )
    async def join(session_id: str, request: JoinRequest) -> Union[ActionResponse, JSONResponse]:
        response = api_service.join(session_id, request)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.post(
        "/api/v1/sessions/{session_id}/actions",
        response_model=ActionResponse,
        responses={
            400: {"model": ErrorResponse},
            404: {"model": ErrorResponse},
            409: {"model": ErrorResponse, "description": "Move not allowed now"},
        },
        tags=["Game"],
        summary="Apply an action",
    )
    async def apply_action(session_id: str, request: ActionRequest) -> Union[ActionResponse, JSONResponse]:
        response = api_service.apply_action(session_id, request)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    logger.info("Eriantys API created (%s)", ERIANTYS_ENV)
    return app
