"""
Engine Core - Deterministic auction state and transitions.

The engine is the runtime that:
1. Opens an AuctionSession from a valuation, a rival and a player snapshot
2. Validates player tactics and rival turns
3. Applies them via the BiddingEngine
4. Returns log lines, presentation effects and intents for the caller
"""

from .state import (
    AuctionSession,
    AuctionPhase,
    Bidder,
    PlayerSnapshot,
    Resolution,
    RivalState,
    RivalStrategy,
)
from .action import (
    Action,
    ActionType,
    Actor,
    Effect,
    EffectType,
    Intent,
    IntentType,
    LogEntry,
    Rejection,
    RejectionCode,
    ToastLevel,
    TransitionResult,
)
from .reducer import BiddingEngine, apply_action

__all__ = [
    "AuctionSession",
    "AuctionPhase",
    "Bidder",
    "PlayerSnapshot",
    "Resolution",
    "RivalState",
    "RivalStrategy",
    "Action",
    "ActionType",
    "Actor",
    "Effect",
    "EffectType",
    "Intent",
    "IntentType",
    "LogEntry",
    "Rejection",
    "RejectionCode",
    "ToastLevel",
    "TransitionResult",
    "BiddingEngine",
    "apply_action",
]
