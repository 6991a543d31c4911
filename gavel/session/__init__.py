"""
Session Module - Manages ephemeral auction sessions.

A session represents one encounter with a rival:
- Created when the caller bootstraps an auction
- Holds the current AuctionSession and the engine driving it
- Collects the log and the intents the caller applies afterwards
- Dropped when the caller ends it

Pacing the reveal of the rival's turn is the caller's job; RevealPolicy
gives it the delays.
"""

from .manager import SessionManager, Session, SessionState
from .auction_loop import AuctionLoop, LoopState, TurnResult
from .reveal import RevealPolicy, RevealStep

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
    "AuctionLoop",
    "LoopState",
    "TurnResult",
    "RevealPolicy",
    "RevealStep",
]
