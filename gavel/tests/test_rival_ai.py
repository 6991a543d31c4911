"""
Tests for RivalAI resource tracking.
"""

from ..bots.decision_table import BidReason
from ..bots.rival_ai import RivalAI
from ..engine_core.state import RivalState, RivalStrategy


def make_rival(strategy=RivalStrategy.AGGRESSIVE, patience=100, budget=15000, interest=80):
    return RivalState(strategy=strategy, patience=patience, budget=budget, interest=interest)


class TestPatienceDepletion:
    """Tests for per-turn patience loss."""

    def test_aggressive_loses_15(self):
        ai = RivalAI(make_rival())
        decision = ai.decide_bid(10000)

        assert ai.get_patience() == 85
        assert decision.should_bid
        assert decision.bid_amount == 500

    def test_passive_loses_5(self):
        ai = RivalAI(make_rival(strategy=RivalStrategy.PASSIVE))
        ai.decide_bid(10000)
        assert ai.get_patience() == 95

    def test_collector_loss_depends_on_interest(self):
        keen = RivalAI(make_rival(strategy=RivalStrategy.COLLECTOR, interest=80))
        bored = RivalAI(make_rival(strategy=RivalStrategy.COLLECTOR, interest=50))

        keen.decide_bid(10000)
        bored.decide_bid(10000)

        assert keen.get_patience() == 95
        assert bored.get_patience() == 90

    def test_depletion_floors_at_zero(self):
        ai = RivalAI(make_rival(patience=10))
        decision = ai.decide_bid(10000)

        assert ai.get_patience() == 0
        assert decision.reason == BidReason.LOST_PATIENCE


class TestPlayerTactics:
    """Tests for reactions to player tactics."""

    def test_stall_costs_20(self):
        ai = RivalAI(make_rival())
        ai.on_player_stall()
        assert ai.get_patience() == 80

    def test_stall_floors_at_zero(self):
        ai = RivalAI(make_rival(patience=10))
        ai.on_player_stall()
        assert ai.get_patience() == 0

    def test_kick_tires_reduces_budget(self):
        ai = RivalAI(make_rival())
        ai.on_player_kick_tires(300)
        assert ai.get_budget() == 14700

    def test_kick_tires_floors_at_zero(self):
        ai = RivalAI(make_rival(budget=200))
        ai.on_player_kick_tires(300)
        assert ai.get_budget() == 0

    def test_power_bid_cost_lands_on_next_decision(self):
        """Power bids leave patience alone until the rival's turn."""
        ai = RivalAI(make_rival())
        ai.on_player_power_bid()

        assert ai.get_patience() == 100
        assert ai.state.pending_power_bids == 1

        ai.decide_bid(10000)

        assert ai.get_patience() == 65
        assert ai.state.pending_power_bids == 0

    def test_original_state_untouched(self):
        rival = make_rival()
        ai = RivalAI(rival)
        ai.on_player_stall()
        ai.on_player_kick_tires(300)

        assert rival.patience == 100
        assert rival.budget == 15000
        assert ai.state is not rival
