"""
Tests for the rival decision table.

Tests:
- Fold ordering (patience, budget, cold feet)
- Strategy increments
- Hesitation curve
"""

import pytest

from ..bots.decision_table import (
    BidDecision,
    BidReason,
    decide_bid,
    hesitation_chance,
    strategy_increment,
)
from ..config import RivalAIConfig
from ..engine_core.state import RivalStrategy
from .conftest import FixedRandom


class TestFoldRules:
    """Tests for the fold branches."""

    def test_no_patience_folds(self):
        """Zero patience folds before anything else is checked."""
        decision = decide_bid(
            patience=0, budget=100000, interest=100,
            current_bid=1000, strategy=RivalStrategy.AGGRESSIVE,
        )

        assert decision == BidDecision(should_bid=False, bid_amount=0, reason=BidReason.LOST_PATIENCE)

    def test_raise_over_budget_not_worth_it(self):
        """A raise that would bust the budget folds."""
        decision = decide_bid(
            patience=80, budget=10400, interest=50,
            current_bid=10000, strategy=RivalStrategy.AGGRESSIVE,
        )

        assert not decision.should_bid
        assert decision.reason == BidReason.NOT_WORTH_IT
        assert decision.reason.value == "Not worth it"

    def test_bid_already_over_budget(self):
        """Current bid above budget folds with the same reason."""
        decision = decide_bid(
            patience=80, budget=10000, interest=50,
            current_bid=11000, strategy=RivalStrategy.PASSIVE,
        )

        assert not decision.should_bid
        assert decision.bid_amount == 0
        assert decision.reason == BidReason.NOT_WORTH_IT

    def test_raise_exactly_to_budget_allowed(self):
        """Budget is inclusive."""
        decision = decide_bid(
            patience=80, budget=10500, interest=50,
            current_bid=10000, strategy=RivalStrategy.AGGRESSIVE,
        )

        assert decision.should_bid
        assert decision.bid_amount == 500
        assert decision.reason == BidReason.AGGRESSIVE_STRATEGY


class TestStrategyIncrements:
    """Tests for strategy raise sizes."""

    @pytest.mark.parametrize("strategy,interest,expected", [
        (RivalStrategy.AGGRESSIVE, 10, 500),
        (RivalStrategy.PASSIVE, 90, 100),
        (RivalStrategy.COLLECTOR, 71, 500),
        (RivalStrategy.COLLECTOR, 70, 200),
    ])
    def test_increment(self, strategy, interest, expected):
        assert strategy_increment(strategy, interest) == expected

    def test_increment_follows_config(self):
        config = RivalAIConfig(bid_increment_passive=250)
        assert strategy_increment(RivalStrategy.PASSIVE, 50, config) == 250

    def test_collector_reason(self):
        decision = decide_bid(
            patience=60, budget=50000, interest=90,
            current_bid=1000, strategy=RivalStrategy.COLLECTOR,
        )

        assert decision.should_bid
        assert decision.bid_amount == 500
        assert decision.reason == BidReason.COLLECTOR_STRATEGY


class TestHesitation:
    """Tests for the cold-feet curve."""

    def test_no_hesitation_above_band(self):
        assert hesitation_chance(patience=20, interest=0) == 0.0
        assert hesitation_chance(patience=85, interest=0) == 0.0

    def test_hesitation_grows_as_patience_drains(self):
        assert hesitation_chance(patience=10, interest=0) == pytest.approx(0.5)
        assert hesitation_chance(patience=5, interest=0) == pytest.approx(0.75)

    def test_interest_suppresses_hesitation(self):
        assert hesitation_chance(patience=10, interest=100) == 0.0
        assert hesitation_chance(patience=10, interest=50) == pytest.approx(0.25)

    def test_cold_feet_folds_with_lost_patience(self):
        decision = decide_bid(
            patience=10, budget=100000, interest=0,
            current_bid=1000, strategy=RivalStrategy.PASSIVE,
            rng=FixedRandom(0.0),
        )

        assert not decision.should_bid
        assert decision.reason == BidReason.LOST_PATIENCE

    def test_no_rng_means_no_cold_feet(self):
        decision = decide_bid(
            patience=10, budget=100000, interest=0,
            current_bid=1000, strategy=RivalStrategy.PASSIVE,
        )

        assert decision.should_bid

    def test_healthy_rival_never_draws(self):
        """Patience 85 with interest 80 always bids, whatever the draw."""
        decision = decide_bid(
            patience=85, budget=15000, interest=80,
            current_bid=10000, strategy=RivalStrategy.AGGRESSIVE,
            rng=FixedRandom(0.0),
        )

        assert decision.should_bid
        assert decision.bid_amount == 500
