"""
Bots module - Rival bidders.

Provides:
- decide_bid: Pure bid/fold decision table
- RivalAI: Per-encounter rival resources and reactions to tactics
- RivalProfile: Roster of predefined rivals with moods and wishlists
- Barks: Trigger catalogue for rival and auctioneer lines
"""

from .decision_table import BidDecision, BidReason, decide_bid, hesitation_chance, strategy_increment
from .rival_ai import RivalAI
from .roster import (
    RivalMood,
    RivalProfile,
    RIVALS,
    build_rival_state,
    calculate_rival_interest,
    get_random_rival,
    get_rival_by_id,
    get_rival_by_tier_progression,
)
from .barks import AuctioneerBark, RivalBark, render_auctioneer_bark, render_rival_bark

__all__ = [
    "BidDecision",
    "BidReason",
    "decide_bid",
    "hesitation_chance",
    "strategy_increment",
    "RivalAI",
    "RivalMood",
    "RivalProfile",
    "RIVALS",
    "build_rival_state",
    "calculate_rival_interest",
    "get_random_rival",
    "get_rival_by_id",
    "get_rival_by_tier_progression",
    "AuctioneerBark",
    "RivalBark",
    "render_auctioneer_bark",
    "render_rival_bark",
]
