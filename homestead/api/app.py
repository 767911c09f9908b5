"""
FastAPI Application - REST API for colony sessions.

Endpoints:
    POST   /api/v1/colonies             Create a colony session
    GET    /api/v1/colonies             List active sessions
    GET    /api/v1/colonies/{id}        Get colony status
    POST   /api/v1/colonies/{id}/step   Run the current phase
    DELETE /api/v1/colonies/{id}        End session
    GET    /health                      Health check

Stepping a session in its management phase applies the action in the
request body (continue when omitted). Other phases ignore the body.
"""

from typing import Annotated, Optional, Union
import logging
import os

from fastapi import Body, FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from .service import APIService
from .schemas import (
    ColonyResponse,
    CreateColonyRequest,
    EndSessionResponse,
    ErrorCode,
    ErrorResponse,
    HealthResponse,
    ManagementActionRequest,
    SessionListResponse,
    StepResponse,
)

logger = logging.getLogger(__name__)

# Environment configuration
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

_STATUS_CODES = {
    ErrorCode.SESSION_NOT_FOUND: 404,
    ErrorCode.GAME_OVER: 409,
}


def create_app(service: APIService | None = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)
    """
    app = FastAPI(
        title="Stellar Homestead API",
        description="Turn-based colony management sessions, one phase per step.",
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

    def make_error_response(error: ErrorResponse) -> JSONResponse:
        """Wrap a service error in a JSON response with a matching status."""
        return JSONResponse(
            status_code=_STATUS_CODES.get(error.error_code, 400),
            content=error.model_dump(mode="json"),
        )

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/colonies",
        response_model=ColonyResponse,
        tags=["Colonies"],
        summary="Create a new colony session",
    )
    async def create_colony(
        body: Annotated[Optional[CreateColonyRequest], Body()] = None,
    ) -> ColonyResponse:
        """Start a new colony in the setup phase."""
        return api_service.create_colony(body or CreateColonyRequest())

    @app.get(
        "/api/v1/colonies",
        response_model=SessionListResponse,
        tags=["Colonies"],
        summary="List active sessions",
    )
    async def list_colonies() -> SessionListResponse:
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/colonies/{session_id}",
        response_model=ColonyResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Colonies"],
        summary="Get colony status",
    )
    async def get_colony(session_id: str) -> Union[ColonyResponse, JSONResponse]:
        response = api_service.get_colony(session_id)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.delete(
        "/api/v1/colonies/{session_id}",
        response_model=EndSessionResponse,
        tags=["Colonies"],
        summary="End a colony session",
    )
    async def end_colony(
        session_id: str,
        reason: Annotated[str, Query(description="Reason for ending")] = "user_ended",
    ) -> EndSessionResponse:
        success = api_service.end_session(session_id, reason)
        return EndSessionResponse(success=success, session_id=session_id)

    # =========================================================================
    # Game Loop Endpoint
    # =========================================================================

    @app.post(
        "/api/v1/colonies/{session_id}/step",
        response_model=StepResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Invalid action"},
            404: {"model": ErrorResponse, "description": "Session not found"},
            409: {"model": ErrorResponse, "description": "Game is over"},
        },
        tags=["Game Loop"],
        summary="Run the current phase",
    )
    async def step_colony(
        session_id: str,
        body: Annotated[Optional[ManagementActionRequest], Body()] = None,
    ) -> Union[StepResponse, JSONResponse]:
        """
        Run one phase and advance.

        **Request Body (management phase):**
        ```json
        {"action": "build", "building": "greenhouse"}
        ```
        """
        response = api_service.step(session_id, body)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    # =========================================================================
    # System
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        return HealthResponse(
            status="healthy",
            service="homestead-engine",
            version=__version__,
        )

    return app


# For running directly: uvicorn homestead.api.app:app
app = create_app()
