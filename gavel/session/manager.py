"""
Session Manager - Creates and manages auction sessions.

LIFECYCLE:
1. Caller bootstraps an encounter -> valuation, rival and player snapshot
   are turned into an AuctionSession (in-memory only)
2. During the auction:
   - Player submits tactics
   - Engine validates and returns a new session plus log/effects/intents
   - Caller reveals the rival's turn when its pacing allows
3. Auction resolves -> caller applies intents to its own player state
4. Session is ended and dropped; nothing carries over to the next encounter

PERSISTENCE RULES:
- NO database
- The engine never touches the caller's player money or skills
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable
import logging
import random
import time
import uuid

from ..config import AuctionConfig, RivalAIConfig, DEFAULT_AUCTION_CONFIG, DEFAULT_RIVAL_AI_CONFIG
from ..engine_core.state import AuctionSession, PlayerSnapshot, RivalState
from ..engine_core.action import Intent, LogEntry, TransitionResult
from ..engine_core.reducer import BiddingEngine
from ..bots.roster import RivalProfile

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of an auction session."""
    ACTIVE = "active"  # Auction in progress
    RESOLVED = "resolved"  # Someone won, intents available
    ABANDONED = "abandoned"  # Ended before resolution


@dataclass
class Session:
    """
    One auction encounter.

    Contains:
    - The current AuctionSession (replaced on every accepted transition)
    - The engine that owns tuning and the seeded random source
    - The rival profile, when the rival came from the roster
    - The accumulated log and the intents produced so far
    """
    session_id: str
    auction: AuctionSession
    engine: BiddingEngine
    created_at: float

    state: SessionState = SessionState.ACTIVE
    profile: RivalProfile | None = None
    seed: int | None = None

    log: list[LogEntry] = field(default_factory=list)
    intents: list[Intent] = field(default_factory=list)

    metadata: dict[str, Any] = field(default_factory=dict)

    def is_active(self) -> bool:
        return self.state == SessionState.ACTIVE

    def record(self, result: TransitionResult) -> TransitionResult:
        """Adopt an accepted transition; rejected ones leave the session as is."""
        if not result.accepted:
            return result

        self.auction = result.session
        self.log.extend(result.log_entries)
        self.intents.extend(result.intents)
        if result.resolved is not None:
            self.state = SessionState.RESOLVED
        return result


class SessionManager:
    """
    Manages auction sessions.

    Responsibilities:
    - Create sessions from bootstrap inputs
    - Track live sessions
    - Clean up ended and stale sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self):
        self._sessions: dict[str, Session] = {}

    def create_session(
        self,
        rival: RivalState,
        player: PlayerSnapshot,
        car_valuation: int | None = None,
        valuation_provider: Callable[[], int] | None = None,
        rival_name: str = "Rival",
        profile: RivalProfile | None = None,
        config: AuctionConfig = DEFAULT_AUCTION_CONFIG,
        rival_config: RivalAIConfig = DEFAULT_RIVAL_AI_CONFIG,
        seed: int | None = None,
    ) -> Session:
        """
        Create a new auction session.

        Args:
            rival: Starting rival resources
            player: Snapshot of the player's money and skills
            car_valuation: Car value the opening bid derives from
            valuation_provider: Called once when car_valuation is not given
            rival_name: Display name used in resolution messages
            profile: Roster entry the rival came from, if any
            config: Auction tuning
            rival_config: Rival decision tuning
            seed: Seed for the rival's random source

        Returns:
            New Session waiting on the player's first action
        """
        if car_valuation is None:
            if valuation_provider is None:
                raise ValueError("car_valuation or valuation_provider is required")
            car_valuation = valuation_provider()

        auction = AuctionSession.open(
            car_valuation=car_valuation,
            starting_bid_multiplier=config.starting_bid_multiplier,
            rival=rival,
            player=player,
            rival_name=rival_name,
        )
        engine = BiddingEngine(
            config=config,
            rival_config=rival_config,
            rng=random.Random(seed),
        )

        session = Session(
            session_id=str(uuid.uuid4()),
            auction=auction,
            engine=engine,
            created_at=time.time(),
            profile=profile,
            seed=seed,
        )
        self._sessions[session.session_id] = session

        logger.info(
            "session_created: id=%s rival=%s valuation=%s opening_bid=%s",
            session.session_id, rival_name, car_valuation, auction.current_bid,
        )
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """
        End a session and drop it.

        An unresolved session ends as abandoned. Returns False when the
        session does not exist.
        """
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False

        if session.is_active():
            session.state = SessionState.ABANDONED
        logger.info("session_ended: id=%s reason=%s state=%s", session_id, reason, session.state.value)
        return True

    def list_sessions(self) -> list[str]:
        """List IDs of all tracked sessions."""
        return list(self._sessions)

    def list_active_sessions(self) -> list[str]:
        """List IDs of sessions still being played."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        Drop sessions older than max_age.

        Called periodically to free memory. Returns the number removed.
        """
        current_time = time.time()
        to_remove = [
            session_id for session_id, session in self._sessions.items()
            if current_time - session.created_at > max_age_seconds
        ]

        for session_id in to_remove:
            self.end_session(session_id, reason="stale")
        return len(to_remove)
