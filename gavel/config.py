"""
Tuning configuration for auctions and rival behavior.

All numbers that shape an auction live here so the engine, the rival AI and
the reveal policy never hard-code them. Defaults match the shipped game
balance; callers override individual fields per session.
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields, replace
from typing import Any


@dataclass(frozen=True)
class PatienceThresholds:
    """Patience bands used for flavor text and bar coloring."""
    critical: int = 20  # Rival about to quit
    low: int = 30  # Rival sweating
    medium: int = 50  # Rival getting annoyed


@dataclass(frozen=True)
class AuctionConfig:
    """
    Per-auction tuning.

    The first seven fields are the bootstrap config every caller can
    override; the rest are engine constants rarely changed outside tests.
    """
    bid_increment: int = 200
    power_bid_increment: int = 500
    stall_patience_penalty: int = 20
    kick_tires_budget_reduction: int = 300
    required_inspection_level: int = 2
    required_tactics_level: int = 2
    starting_bid_multiplier: float = 0.65

    power_bid_patience_penalty: int = 20
    auction_xp_gain: int = 15
    patience_thresholds: PatienceThresholds = field(default_factory=PatienceThresholds)

    def with_overrides(self, overrides: dict[str, Any] | None) -> AuctionConfig:
        """Return a copy with known fields replaced; unknown or None values are ignored."""
        if not overrides:
            return self
        known = {f.name for f in fields(self)}
        changes = {
            key: value for key, value in overrides.items()
            if key in known and value is not None
        }
        return replace(self, **changes)


@dataclass(frozen=True)
class RivalAIConfig:
    """Rival decision tuning."""
    # Patience lost at the start of every rival turn
    patience_loss_aggressive: int = 15
    patience_loss_passive: int = 5
    patience_loss_collector_high_interest: int = 5
    patience_loss_collector_low_interest: int = 10
    collector_high_interest_threshold: int = 70

    # Raise size per strategy
    bid_increment_aggressive: int = 500
    bid_increment_passive: int = 100
    bid_increment_collector_low_interest: int = 200
    bid_increment_collector_high_interest: int = 500

    # Below this patience the rival may get cold feet
    hesitation_patience: int = 20


@dataclass(frozen=True)
class RevealConfig:
    """Presentation pacing, in milliseconds."""
    rival_bid: int = 900
    rival_bark_after_auctioneer: int = 650
    auction_log_line: int = 650
    opening_prompt_after_start: int = 800
    next_turn_after_auctioneer: int = 650


DEFAULT_AUCTION_CONFIG = AuctionConfig()
DEFAULT_RIVAL_AI_CONFIG = RivalAIConfig()
DEFAULT_REVEAL_CONFIG = RevealConfig()
