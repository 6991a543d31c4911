"""
Rival Decision Table - Pure bid/fold decision for a rival.

Given a rival's patience, budget, interest and strategy plus the current
bid, decide whether to raise and by how much. The function holds no state;
RivalAI owns the resources and calls in once per rival turn.

Order of checks:
1. Out of patience           -> fold, "Lost patience"
2. Raise would bust budget   -> fold, "Not worth it"
3. Cold feet (random, only below the hesitation band)
                             -> fold, "Lost patience"
4. Otherwise raise by the strategy increment
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ..config import RivalAIConfig, DEFAULT_RIVAL_AI_CONFIG
from ..engine_core.state import RivalStrategy

if TYPE_CHECKING:
    import random


class BidReason(Enum):
    """Why the rival did (or did not) bid."""
    LOST_PATIENCE = "Lost patience"
    NOT_WORTH_IT = "Not worth it"
    AGGRESSIVE_STRATEGY = "Aggressive strategy"
    PASSIVE_STRATEGY = "Passive strategy"
    COLLECTOR_STRATEGY = "Collector strategy"


_STRATEGY_REASONS = {
    RivalStrategy.AGGRESSIVE: BidReason.AGGRESSIVE_STRATEGY,
    RivalStrategy.PASSIVE: BidReason.PASSIVE_STRATEGY,
    RivalStrategy.COLLECTOR: BidReason.COLLECTOR_STRATEGY,
}


@dataclass(frozen=True)
class BidDecision:
    """A rival's decision for one turn."""
    should_bid: bool
    bid_amount: int
    reason: BidReason

    @classmethod
    def fold(cls, reason: BidReason) -> BidDecision:
        return cls(should_bid=False, bid_amount=0, reason=reason)


def strategy_increment(
    strategy: RivalStrategy,
    interest: int,
    config: RivalAIConfig = DEFAULT_RIVAL_AI_CONFIG,
) -> int:
    """Raise size for a strategy; collectors raise harder on cars they want."""
    if strategy == RivalStrategy.AGGRESSIVE:
        return config.bid_increment_aggressive
    if strategy == RivalStrategy.PASSIVE:
        return config.bid_increment_passive
    if interest > config.collector_high_interest_threshold:
        return config.bid_increment_collector_high_interest
    return config.bid_increment_collector_low_interest


def hesitation_chance(
    patience: int,
    interest: int,
    config: RivalAIConfig = DEFAULT_RIVAL_AI_CONFIG,
) -> float:
    """
    Probability of folding early from low patience.

    Zero at or above the hesitation band, growing linearly as patience
    drains and scaled down by how much the rival wants the car.
    """
    band = config.hesitation_patience
    if band <= 0 or patience >= band:
        return 0.0
    pressure = (band - patience) / band
    indifference = 1.0 - interest / 100.0
    return max(0.0, min(1.0, pressure * indifference))


def decide_bid(
    patience: int,
    budget: int,
    interest: int,
    current_bid: int,
    strategy: RivalStrategy,
    rng: random.Random | None = None,
    config: RivalAIConfig = DEFAULT_RIVAL_AI_CONFIG,
) -> BidDecision:
    """
    Decide the rival's move.

    Args:
        patience: Rival patience after this turn's depletion
        budget: Rival's remaining budget
        interest: Static interest in the car (0-100)
        current_bid: Bid currently on the floor
        strategy: Rival strategy
        rng: Random source for cold feet; None disables the draw
        config: Rival tuning

    Returns:
        BidDecision with should_bid, bid_amount and reason
    """
    if patience <= 0:
        return BidDecision.fold(BidReason.LOST_PATIENCE)

    increment = strategy_increment(strategy, interest, config)
    if current_bid > budget or current_bid + increment > budget:
        return BidDecision.fold(BidReason.NOT_WORTH_IT)

    if rng is not None:
        chance = hesitation_chance(patience, interest, config)
        if chance > 0 and rng.random() < chance:
            return BidDecision.fold(BidReason.LOST_PATIENCE)

    return BidDecision(
        should_bid=True,
        bid_amount=increment,
        reason=_STRATEGY_REASONS[strategy],
    )
