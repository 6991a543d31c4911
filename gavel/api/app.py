"""
FastAPI Application - REST API for auction clients.

Endpoints:
    POST   /api/v1/auctions                   Open an auction
    GET    /api/v1/auctions                   List live auctions
    GET    /api/v1/auctions/{id}              Get auction state, log and intents
    DELETE /api/v1/auctions/{id}              End an auction
    POST   /api/v1/auctions/{id}/actions      Submit a player tactic
    POST   /api/v1/auctions/{id}/rival-turn   Reveal the rival's pending turn
    GET    /api/v1/rivals                     List the rival roster

Rival Turn Flow:
    1. POST /actions applies the player's tactic
    2. With auto_rival=true (default) the rival's turn is included in the
       same response as a second transition
    3. With auto_rival=false the response carries rival_turn_delay_ms;
       the client waits that long, then calls POST /rival-turn

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Annotated, Optional, Union
import logging
import os

from fastapi import FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from .service import AuctionService
from .schemas import (
    # Request models
    BootstrapRequest,
    ActionRequest,
    # Response models
    AuctionResponse,
    AuctionStateResponse,
    AuctionListResponse,
    EndAuctionResponse,
    RivalListResponse,
    ErrorResponse,
    HealthResponse,
    # Enums
    ErrorCode,
)

logger = logging.getLogger(__name__)

# Environment configuration
GAVEL_ENV = os.getenv("GAVEL_ENV", "development")
GAVEL_SEED = os.getenv("GAVEL_SEED")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional AuctionService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="Gavel Auction API",
        description="""
Car Auction Negotiation Engine - Turn-based bidding against AI rivals.

## Tactics

| Action | Effect |
|--------|--------|
| `bid` | Raise by the bid increment (the first bid is the opening bid) |
| `power_bid` | Raise by the power increment; costs rival patience |
| `kick_tires` | Shrinks the rival budget (Inspection 2+) |
| `stall` | Burns rival patience, limited uses (Tactics 2+) |
| `quit` | Walk away |

Rejected tactics return `accepted=false` with a rejection code, not an HTTP error.

## Error Codes

| Code | Description |
|------|-------------|
| `VALIDATION_ERROR` | Request body failed validation |
| `SESSION_NOT_FOUND` | Auction does not exist or was ended |
| `UNKNOWN_RIVAL` | `rival_id` is not in the roster |
| `INVALID_BOOTSTRAP` | Neither a rival profile nor a rival id was given |
        """,
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

    default_seed = int(GAVEL_SEED) if GAVEL_SEED else None
    api_service = service or AuctionService(default_seed=default_seed)

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
            ).model_dump(),
        )

    def service_error(response: ErrorResponse) -> JSONResponse:
        status_code = 404 if response.error_code == ErrorCode.SESSION_NOT_FOUND else 400
        return make_error_response(
            response.error_code,
            response.error,
            status_code=status_code,
            details=response.details,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("validation_error: path=%s errors=%s", request.url.path, len(exc.errors()))
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
    # Auction Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/auctions",
        response_model=AuctionResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Unknown rival or incomplete bootstrap"},
            422: {"model": ErrorResponse, "description": "Validation error"},
        },
        tags=["Auctions"],
        summary="Open an auction",
    )
    async def create_auction(request: BootstrapRequest) -> Union[AuctionResponse, JSONResponse]:
        """
        Open an auction against a rival.

        The response includes the auctioneer's opening barks.
        """
        response = api_service.create_auction(request)
        if isinstance(response, ErrorResponse):
            return service_error(response)
        return response

    @app.get(
        "/api/v1/auctions",
        response_model=AuctionListResponse,
        tags=["Auctions"],
        summary="List live auctions",
    )
    async def list_auctions() -> AuctionListResponse:
        """List all live auction session IDs."""
        sessions = api_service.list_auctions()
        return AuctionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/auctions/{session_id}",
        response_model=AuctionStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Auctions"],
        summary="Get auction state",
    )
    async def get_auction(session_id: str) -> Union[AuctionStateResponse, JSONResponse]:
        """Get the current auction state, the full log and any intents."""
        response = api_service.get_auction(session_id)
        if isinstance(response, ErrorResponse):
            return service_error(response)
        return response

    @app.delete(
        "/api/v1/auctions/{session_id}",
        response_model=EndAuctionResponse,
        tags=["Auctions"],
        summary="End an auction",
    )
    async def end_auction(
        session_id: str,
        reason: Annotated[str, Query(description="Reason for ending")] = "user_ended",
    ) -> EndAuctionResponse:
        """End an auction and release it."""
        success = api_service.end_auction(session_id, reason)
        return EndAuctionResponse(success=success, session_id=session_id)

    # =========================================================================
    # Turn Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/auctions/{session_id}/actions",
        response_model=AuctionResponse,
        responses={
            404: {"model": ErrorResponse, "description": "Session not found"},
            422: {"model": ErrorResponse, "description": "Validation error"},
        },
        tags=["Turns"],
        summary="Submit a player tactic",
    )
    async def submit_action(
        session_id: str,
        request: ActionRequest,
    ) -> Union[AuctionResponse, JSONResponse]:
        """
        Apply a player tactic.

        Out-of-turn actions and actions on a finished auction are silent
        no-ops (`accepted=false`, no toast).
        """
        response = api_service.submit_action(session_id, request)
        if isinstance(response, ErrorResponse):
            return service_error(response)
        return response

    @app.post(
        "/api/v1/auctions/{session_id}/rival-turn",
        response_model=AuctionResponse,
        responses={404: {"model": ErrorResponse, "description": "Session not found"}},
        tags=["Turns"],
        summary="Reveal the rival's turn",
    )
    async def rival_turn(session_id: str) -> Union[AuctionResponse, JSONResponse]:
        """Run the rival's pending turn (for clients pacing the reveal)."""
        response = api_service.run_rival_turn(session_id)
        if isinstance(response, ErrorResponse):
            return service_error(response)
        return response

    # =========================================================================
    # Roster
    # =========================================================================

    @app.get(
        "/api/v1/rivals",
        response_model=RivalListResponse,
        tags=["Rivals"],
        summary="List the rival roster",
    )
    async def list_rivals() -> RivalListResponse:
        """List predefined rivals with tiers and wishlists."""
        return api_service.list_rivals()

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
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="gavel-engine",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "service": "Gavel Auction API",
            "version": __version__,
            "environment": GAVEL_ENV,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app


# For running directly: uvicorn gavel.api.app:app
app = create_app()
