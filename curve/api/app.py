"""
FastAPI Application - REST API for a game UI.

Endpoints:
    GET    /api/v1/archetypes                     List archetypes
    GET    /api/v1/archetypes/{key}/preview       Preview deck for an archetype
    POST   /api/v1/sessions                       Create game session
    GET    /api/v1/sessions                       List active sessions
    GET    /api/v1/sessions/{id}                  Get session status
    DELETE /api/v1/sessions/{id}                  End session
    GET    /api/v1/sessions/{id}/state            Get game state
    GET    /api/v1/sessions/{id}/legal-actions    Get legal actions
    POST   /api/v1/sessions/{id}/select           Select a card from hand
    POST   /api/v1/sessions/{id}/place            Place the selected card
    POST   /api/v1/sessions/{id}/battle           Run the battle phase only
    POST   /api/v1/sessions/{id}/end-turn         End the turn
    POST   /api/v1/sessions/{id}/ai-turn          Play the AI's turn

AI Execution Flow:
    1. POST /end-turn resolves battle, draw and advance
    2. In AI mode, if the turn passed to the AI:
       - The AI turn is played immediately
       - Response is the state after the AI has ended its turn
    3. POST /ai-turn plays a pending AI turn explicitly

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Annotated, Optional
import logging

from ..config import config

logger = logging.getLogger(__name__)


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, Query, Request
        from fastapi.exceptions import RequestValidationError
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .service import APIService
    from .schemas import (
        # Request models
        CreateSessionRequest,
        SelectCardRequest,
        PlaceCardRequest,
        # Response models
        SessionResponse,
        GameStateResponse,
        LegalActionsResponse,
        AITurnResponse,
        ArchetypeListResponse,
        PreviewDeckResponse,
        ErrorResponse,
        SessionListResponse,
        EndSessionResponse,
        HealthResponse,
        # Enums
        ErrorCode,
    )
    from .. import __version__
    from ..errors import CurveError, SessionNotFoundError

    app = FastAPI(
        title="Curve Engine API",
        description="""
Two-player lane battle engine with an AI opponent.

## Turn Flow

1. `POST /select` a card you can afford, then `POST /place` it on your spawn row
2. `POST /end-turn` runs battle, win check, draw and advance
3. In AI mode the AI answers before `/end-turn` returns

Rule violations (not enough mana, occupied cell...) are not HTTP errors:
they come back as the `message` of the returned state.

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Session does not exist |
| `UNKNOWN_ARCHETYPE` | Archetype key not recognised |
| `INVALID_ACTION` | Request refused by the host |
| `VALIDATION_ERROR` | Request body failed validation |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService()

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

    @app.exception_handler(CurveError)
    async def curve_error_handler(request: Request, exc: CurveError) -> JSONResponse:
        status_code = 404 if isinstance(exc, SessionNotFoundError) else 400
        logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.error_code, exc)
        return make_error_response(ErrorCode(exc.error_code), str(exc), status_code=status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return make_error_response(
            ErrorCode.VALIDATION_ERROR,
            "Request validation failed",
            status_code=422,
            details={"errors": [
                {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
                for err in exc.errors()
            ]},
        )

    # =========================================================================
    # Archetype Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/archetypes",
        response_model=ArchetypeListResponse,
        tags=["Archetypes"],
        summary="List archetypes",
    )
    async def list_archetypes() -> ArchetypeListResponse:
        """List the four archetypes and their stat coefficients."""
        return api_service.list_archetypes()

    @app.get(
        "/api/v1/archetypes/{key}/preview",
        response_model=PreviewDeckResponse,
        responses={400: {"model": ErrorResponse}},
        tags=["Archetypes"],
        summary="Preview an archetype's deck",
    )
    async def preview_deck(key: str) -> PreviewDeckResponse:
        """
        Deterministic showcase deck for the deck selection screen.

        Does not touch any game's random source.
        """
        return api_service.preview_deck(key)

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Unknown archetype or missing player 2"},
        },
        tags=["Sessions"],
        summary="Create a new game session",
    )
    async def create_session(request: CreateSessionRequest) -> SessionResponse:
        """
        Create a new game session.

        In AI mode `player2_archetype` may be omitted; one is picked at random.
        """
        return api_service.create_session(request)

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get session status",
    )
    async def get_session(session_id: str) -> SessionResponse:
        """Get the current status of a game session."""
        return api_service.get_session(session_id)

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
        """End a game session and release resources."""
        success = api_service.end_session(session_id, reason)
        return EndSessionResponse(success=success, session_id=session_id)

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    async def list_sessions() -> SessionListResponse:
        """List all active session IDs."""
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    # =========================================================================
    # Gameplay Endpoints
    # =========================================================================
    # Endpoints that dispatch through the game loop are plain functions:
    # AI pacing sleeps, so FastAPI must run them in its threadpool.

    @app.get(
        "/api/v1/sessions/{session_id}/state",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Get game state",
    )
    async def get_game_state(session_id: str) -> GameStateResponse:
        """Get the complete board, players, message and log."""
        return api_service.get_game_state(session_id)

    @app.get(
        "/api/v1/sessions/{session_id}/legal-actions",
        response_model=LegalActionsResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Get legal actions",
    )
    async def get_legal_actions(session_id: str) -> LegalActionsResponse:
        """Cards the current player can afford and free spawn cells for the selection."""
        return api_service.get_legal_actions(session_id)

    @app.post(
        "/api/v1/sessions/{session_id}/select",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}, 400: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Select a card",
    )
    def select_card(session_id: str, request: SelectCardRequest) -> GameStateResponse:
        """Select a card from the current player's hand for placement."""
        return api_service.select_card(session_id, request)

    @app.post(
        "/api/v1/sessions/{session_id}/place",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}, 400: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Place the selected card",
    )
    def place_card(session_id: str, request: PlaceCardRequest) -> GameStateResponse:
        """Place the selected card on the current player's spawn row."""
        return api_service.place_card(session_id, request)

    @app.post(
        "/api/v1/sessions/{session_id}/battle",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}, 400: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Run the battle phase",
    )
    def battle(session_id: str) -> GameStateResponse:
        """Run the battle phase and win check without ending the turn."""
        return api_service.battle(session_id)

    @app.post(
        "/api/v1/sessions/{session_id}/end-turn",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}, 400: {"model": ErrorResponse}},
        tags=["Game"],
        summary="End the turn",
    )
    def end_turn(session_id: str) -> GameStateResponse:
        """
        End the current turn.

        In AI mode the AI's turn is played before the response is sent.
        """
        return api_service.end_turn(session_id)

    @app.post(
        "/api/v1/sessions/{session_id}/ai-turn",
        response_model=AITurnResponse,
        responses={404: {"model": ErrorResponse}, 400: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Play the AI's turn",
    )
    def ai_turn(session_id: str) -> AITurnResponse:
        """Play one full AI turn. Fails if it is not the AI's turn."""
        return api_service.run_ai_turn(session_id)

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="curve-engine",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Curve Engine API",
            "version": __version__,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app


# For running directly: uvicorn curve.api.app:app
app = None
try:
    app = create_app()
except ImportError:
    # FastAPI not installed
    pass
