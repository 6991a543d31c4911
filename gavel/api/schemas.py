"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the exact contract between a game client and the
auction engine. All responses include explicit types for OpenAPI schema
generation.

Error Codes:
- VALIDATION_ERROR: Request body failed validation
- SESSION_NOT_FOUND: Auction session does not exist or has been ended
- UNKNOWN_RIVAL: rival_id is not in the roster
- INVALID_BOOTSTRAP: Bootstrap request is incomplete

Rejected tactics (not enough money, skill too low, ...) are NOT errors:
they come back as 200 responses with accepted=false and a rejection block.
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Auction session status values."""
    ACTIVE = "active"
    RESOLVED = "resolved"
    ABANDONED = "abandoned"


class StrategyName(str, Enum):
    """Rival bidding strategies."""
    AGGRESSIVE = "Aggressive"
    PASSIVE = "Passive"
    COLLECTOR = "Collector"


class MoodName(str, Enum):
    """Rival moods."""
    NORMAL = "Normal"
    CONFIDENT = "Confident"
    CAUTIOUS = "Cautious"
    DESPERATE = "Desperate"


class ActionName(str, Enum):
    """Player tactics."""
    BID = "bid"
    POWER_BID = "power_bid"
    KICK_TIRES = "kick_tires"
    STALL = "stall"
    QUIT = "quit"


class ErrorCode(str, Enum):
    """Structured error codes."""
    VALIDATION_ERROR = "VALIDATION_ERROR"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    UNKNOWN_RIVAL = "UNKNOWN_RIVAL"
    INVALID_BOOTSTRAP = "INVALID_BOOTSTRAP"


# =============================================================================
# Request Models
# =============================================================================

class RivalProfileIn(BaseModel):
    """An explicit rival, for callers that bring their own roster."""
    name: str = Field("Rival", description="Display name")
    strategy: StrategyName
    base_patience: int = Field(..., ge=0, le=100, description="Starting patience (0-100)")
    budget: int = Field(..., ge=0, description="Hard spending ceiling")
    mood: Optional[MoodName] = Field(None, description="Per-encounter mood swing")


class PlayerSkillsIn(BaseModel):
    """Player skill levels relevant to auction tactics."""
    inspection: int = Field(1, ge=0, description="Gates Kick Tires")
    tactics: int = Field(1, ge=0, description="Gates Stall and caps its uses")


class AuctionConfigIn(BaseModel):
    """Per-auction overrides; omitted fields keep the defaults."""
    bid_increment: Optional[int] = Field(None, gt=0)
    power_bid_increment: Optional[int] = Field(None, gt=0)
    stall_patience_penalty: Optional[int] = Field(None, ge=0)
    kick_tires_budget_reduction: Optional[int] = Field(None, ge=0)
    required_inspection_level: Optional[int] = Field(None, ge=0)
    required_tactics_level: Optional[int] = Field(None, ge=0)
    starting_bid_multiplier: Optional[float] = Field(None, gt=0)
    power_bid_patience_penalty: Optional[int] = Field(None, ge=0)
    auction_xp_gain: Optional[int] = Field(None, ge=0)


class BootstrapRequest(BaseModel):
    """
    Request to open an auction.

    Give either an explicit `rival_profile` (plus `interest`), or a roster
    `rival_id` (plus `car_tags`, which derive the interest).
    """
    car_valuation: int = Field(..., ge=0, description="Value the opening bid derives from")
    rival_profile: Optional[RivalProfileIn] = None
    interest: Optional[int] = Field(None, ge=0, le=100, description="Rival interest in the car")
    rival_id: Optional[str] = Field(None, description="Roster rival to bid against")
    car_tags: list[str] = Field(default_factory=list, description="Tags matched against the rival wishlist")
    player_skills: PlayerSkillsIn = Field(default_factory=PlayerSkillsIn)
    player_money: int = Field(..., ge=0)
    config: AuctionConfigIn = Field(default_factory=AuctionConfigIn)
    seed: Optional[int] = Field(None, description="Seed for reproducible rivals")
    auto_rival: bool = Field(True, description="Run the rival turn right after each accepted tactic")


class ActionRequest(BaseModel):
    """A player tactic."""
    action: ActionName
    amount: Optional[int] = Field(None, gt=0, description="Raise size for bid/power_bid")


# =============================================================================
# Shared Models
# =============================================================================

class RivalInfo(BaseModel):
    """Rival resources as the player can see them."""
    name: str
    strategy: StrategyName
    patience: int
    budget: int
    interest: int
    mood: Optional[MoodName] = None


class AuctionInfo(BaseModel):
    """Auction state snapshot."""
    car_valuation: int
    current_bid: int
    has_any_bids: bool
    last_bidder: str = Field(description="none, player, rival")
    is_player_turn: bool
    phase: str = Field(description="player_turn, rival_turn, resolved")
    turn_number: int
    stall_uses_this_auction: int
    stall_uses_remaining: int
    power_bid_streak: int
    rival: RivalInfo


class LogEntryInfo(BaseModel):
    text: str
    actor: str


class EffectInfo(BaseModel):
    """A bark or toast, with its reveal offset."""
    type: str = Field(description="bark, toast")
    speaker: Optional[str] = None
    trigger: Optional[str] = None
    text: Optional[str] = Field(None, description="Rendered line or toast message")
    level: str = "info"
    at_ms: int = Field(0, description="Reveal offset from the transition")


class IntentInfo(BaseModel):
    """A change the client applies to its own player state."""
    type: str = Field(description="debit_money, grant_xp")
    amount: int
    skill: Optional[str] = None


class RejectionInfo(BaseModel):
    code: str
    message: str


class ResolutionInfo(BaseModel):
    player_won: bool
    message: str
    bark_trigger: Optional[str] = None


class TransitionInfo(BaseModel):
    """One engine transition."""
    accepted: bool
    rejection: Optional[RejectionInfo] = None
    resolved: Optional[ResolutionInfo] = None
    rival_turn_pending: bool = False
    log_entries: list[LogEntryInfo] = Field(default_factory=list)
    effects: list[EffectInfo] = Field(default_factory=list)
    intents: list[IntentInfo] = Field(default_factory=list)


class RosterEntry(BaseModel):
    """A predefined rival."""
    rival_id: str
    name: str
    tier: int
    tier_name: str
    strategy: StrategyName
    budget: int
    patience: int
    wishlist: list[str] = Field(default_factory=list)


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class AuctionResponse(BaseModel):
    """Response to opening an auction or driving a turn."""
    session_id: str
    status: SessionStatus
    auction: AuctionInfo
    resolution: Optional[ResolutionInfo] = None
    transitions: list[TransitionInfo] = Field(default_factory=list)
    rival_turn_delay_ms: Optional[int] = Field(
        None, description="Wait this long before requesting the rival turn"
    )
    api_version: str = "v1"


class AuctionStateResponse(BaseModel):
    """Complete auction state for display."""
    session_id: str
    status: SessionStatus
    auction: AuctionInfo
    resolution: Optional[ResolutionInfo] = None
    log: list[LogEntryInfo] = Field(default_factory=list)
    intents: list[IntentInfo] = Field(default_factory=list)
    created_at: float = 0.0
    api_version: str = "v1"


class AuctionListResponse(BaseModel):
    """Response listing live auction sessions."""
    sessions: list[str]
    count: int


class EndAuctionResponse(BaseModel):
    """Response after ending an auction session."""
    success: bool
    session_id: str


class RivalListResponse(BaseModel):
    """The rival roster."""
    rivals: list[RosterEntry]
    count: int


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
