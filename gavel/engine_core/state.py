"""
Auction State - Immutable-friendly containers for one negotiation encounter.

Design principles:
- Copy-on-write: every transition returns a new AuctionSession
- Self-contained: the rival's resources and a snapshot of the player
  travel with the session, so the engine never reaches for globals
- Discarded after resolution: nothing here is reused across encounters
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum


class Bidder(Enum):
    """Who currently holds the bid."""
    NONE = "none"
    PLAYER = "player"
    RIVAL = "rival"


class AuctionPhase(Enum):
    """High-level auction phases."""
    PLAYER_TURN = "player_turn"
    RIVAL_TURN = "rival_turn"
    RESOLVED = "resolved"


class RivalStrategy(Enum):
    """Static bidding personality of a rival."""
    AGGRESSIVE = "Aggressive"
    PASSIVE = "Passive"
    COLLECTOR = "Collector"


@dataclass(frozen=True)
class RivalState:
    """
    A rival's per-encounter resources.

    Patience only ever goes down and floors at 0. Budget is a hard
    ceiling that player tactics can shrink but never push below 0.
    """
    strategy: RivalStrategy
    patience: int
    budget: int
    interest: int
    pending_power_bids: int = 0

    def __post_init__(self):
        if not 0 <= self.interest <= 100:
            raise ValueError(f"interest must be within 0-100, got {self.interest}")
        if self.patience < 0 or self.budget < 0:
            raise ValueError("patience and budget cannot be negative")


@dataclass(frozen=True)
class PlayerSnapshot:
    """
    Read-only copy of the player's persisted state at session start.

    The engine validates against it but never mutates it; money and XP
    changes come back to the caller as intents.
    """
    money: int
    inspection: int = 1
    tactics: int = 1


@dataclass(frozen=True)
class Resolution:
    """Terminal outcome of an auction."""
    player_won: bool
    message: str
    bark_trigger: str | None = None


@dataclass(frozen=True)
class AuctionSession:
    """
    Complete auction state at a point in time.

    current_bid only changes via an accepted bid, and last_bidder always
    names whoever produced (or is holding) it.
    """
    car_valuation: int
    current_bid: int
    rival: RivalState
    player: PlayerSnapshot
    rival_name: str = "Rival"

    has_any_bids: bool = False
    last_bidder: Bidder = Bidder.NONE
    stall_uses_this_auction: int = 0
    power_bid_streak: int = 0
    is_player_turn: bool = True

    phase: AuctionPhase = AuctionPhase.PLAYER_TURN
    turn_number: int = 0
    outcome: Resolution | None = None

    @classmethod
    def open(
        cls,
        car_valuation: int,
        starting_bid_multiplier: float,
        rival: RivalState,
        player: PlayerSnapshot,
        rival_name: str = "Rival",
    ) -> AuctionSession:
        """Create a fresh session whose opening bid derives from the valuation."""
        if car_valuation < 0:
            raise ValueError(f"car_valuation cannot be negative, got {car_valuation}")
        opening_bid = int(car_valuation * starting_bid_multiplier)
        return cls(
            car_valuation=car_valuation,
            current_bid=opening_bid,
            rival=rival,
            player=player,
            rival_name=rival_name,
        )

    @property
    def is_resolved(self) -> bool:
        return self.phase == AuctionPhase.RESOLVED

    @property
    def player_is_high_bidder(self) -> bool:
        return self.last_bidder == Bidder.PLAYER

    @property
    def stall_uses_remaining(self) -> int:
        return max(0, self.player.tactics - self.stall_uses_this_auction)

    def with_rival(self, rival: RivalState) -> AuctionSession:
        """Return new session with updated rival resources."""
        return self._copy_with(rival=rival)

    def handing_turn_to_rival(self) -> AuctionSession:
        """Return new session waiting on the rival."""
        return self._copy_with(is_player_turn=False, phase=AuctionPhase.RIVAL_TURN)

    def handing_turn_to_player(self) -> AuctionSession:
        """Return new session waiting on the player."""
        return self._copy_with(
            is_player_turn=True,
            phase=AuctionPhase.PLAYER_TURN,
            turn_number=self.turn_number + 1,
        )

    def resolved_with(self, outcome: Resolution) -> AuctionSession:
        """Return new terminal session."""
        return self._copy_with(
            is_player_turn=False,
            phase=AuctionPhase.RESOLVED,
            outcome=outcome,
        )

    def _copy_with(self, **kwargs) -> AuctionSession:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)
