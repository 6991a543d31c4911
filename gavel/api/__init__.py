"""
API Module - HTTP interface for auction clients.

Exposes the engine via REST API. A client:
1. Opens an auction against a roster or custom rival
2. Submits tactics turn by turn
3. Optionally paces the rival's reveal and requests it explicitly
4. Applies the returned intents to its own player state

All state is session-scoped and in-memory.
"""

from .schemas import (
    # Requests
    BootstrapRequest,
    ActionRequest,
    RivalProfileIn,
    PlayerSkillsIn,
    AuctionConfigIn,
    # Responses
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
from .service import AuctionService
from .app import create_app

__all__ = [
    # Requests
    "BootstrapRequest",
    "ActionRequest",
    "RivalProfileIn",
    "PlayerSkillsIn",
    "AuctionConfigIn",
    # Responses
    "AuctionResponse",
    "AuctionStateResponse",
    "AuctionListResponse",
    "EndAuctionResponse",
    "RivalListResponse",
    "ErrorResponse",
    "HealthResponse",
    # Enums
    "ErrorCode",
    # Service
    "AuctionService",
    "create_app",
]
