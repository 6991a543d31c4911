"""
RivalAI - Per-encounter rival resource tracking and bid decisions.

RivalAI works on its own copy of a RivalState. The bidding engine builds
one per transition from the session, lets player tactics and the rival's
turn act on it, and stores the resulting state back into a fresh session.
"""

from __future__ import annotations
from dataclasses import replace
import random

from ..config import RivalAIConfig, AuctionConfig, DEFAULT_RIVAL_AI_CONFIG, DEFAULT_AUCTION_CONFIG
from ..engine_core.state import RivalState, RivalStrategy
from .decision_table import BidDecision, decide_bid


class RivalAI:
    """
    Manages one rival's behavior during an auction.

    Usage:
        ai = RivalAI(state, rng=random.Random(7))
        ai.on_player_stall()
        decision = ai.decide_bid(current_bid)
        new_state = ai.state
    """

    def __init__(
        self,
        state: RivalState,
        rng: random.Random | None = None,
        config: RivalAIConfig = DEFAULT_RIVAL_AI_CONFIG,
        auction_config: AuctionConfig = DEFAULT_AUCTION_CONFIG,
    ):
        self._state = state
        self.rng = rng
        self.config = config
        self.auction_config = auction_config

    @property
    def state(self) -> RivalState:
        """Current rival resources (immutable snapshot)."""
        return self._state

    def decide_bid(self, current_bid: int) -> BidDecision:
        """
        Spend this turn's patience, then decide.

        Pending power-bid pressure is charged here along with the
        strategy's per-turn loss.
        """
        loss = self._turn_patience_loss()
        loss += self._state.pending_power_bids * self.auction_config.power_bid_patience_penalty
        self._state = replace(
            self._state,
            patience=max(0, self._state.patience - loss),
            pending_power_bids=0,
        )

        return decide_bid(
            patience=self._state.patience,
            budget=self._state.budget,
            interest=self._state.interest,
            current_bid=current_bid,
            strategy=self._state.strategy,
            rng=self.rng,
            config=self.config,
        )

    def _turn_patience_loss(self) -> int:
        """Aggressive -15, Passive -5, Collector -5 (wanted car) or -10."""
        strategy = self._state.strategy
        if strategy == RivalStrategy.AGGRESSIVE:
            return self.config.patience_loss_aggressive
        if strategy == RivalStrategy.PASSIVE:
            return self.config.patience_loss_passive
        if self._state.interest > self.config.collector_high_interest_threshold:
            return self.config.patience_loss_collector_high_interest
        return self.config.patience_loss_collector_low_interest

    def on_player_stall(self) -> None:
        """Stalling burns rival patience immediately."""
        penalty = self.auction_config.stall_patience_penalty
        self._state = replace(self._state, patience=max(0, self._state.patience - penalty))

    def on_player_kick_tires(self, reduction: int) -> None:
        """Kicking the tires talks the rival's budget down."""
        self._state = replace(self._state, budget=max(0, self._state.budget - reduction))

    def on_player_power_bid(self) -> None:
        """Record a power bid; its patience cost lands on the next decide_bid."""
        self._state = replace(
            self._state,
            pending_power_bids=self._state.pending_power_bids + 1,
        )

    def get_patience(self) -> int:
        return self._state.patience

    def get_budget(self) -> int:
        return self._state.budget
