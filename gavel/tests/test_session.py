"""
Tests for sessions, the auction loop and reveal pacing.
"""

import pytest

from ..bots.roster import STERLING_VANCE, build_rival_state
from ..config import RevealConfig
from ..engine_core.action import Action, Actor, LogEntry
from ..engine_core.state import PlayerSnapshot
from ..session import (
    AuctionLoop,
    LoopState,
    RevealPolicy,
    SessionManager,
    SessionState,
)


@pytest.fixture
def manager():
    return SessionManager()


@pytest.fixture
def live_session(manager, aggressive_rival, skilled_player):
    return manager.create_session(
        rival=aggressive_rival,
        player=skilled_player,
        car_valuation=20000,
        rival_name="Sterling",
        seed=3,
    )


class TestSessionManager:
    """Tests for session lifecycle."""

    def test_create_session(self, live_session, manager):
        assert live_session.session_id in manager.list_active_sessions()
        assert live_session.auction.current_bid == 13000
        assert live_session.state == SessionState.ACTIVE

    def test_valuation_provider_called_once(self, manager, aggressive_rival, skilled_player):
        calls = []

        def provider():
            calls.append(1)
            return 10000

        session = manager.create_session(
            rival=aggressive_rival,
            player=skilled_player,
            valuation_provider=provider,
        )

        assert calls == [1]
        assert session.auction.car_valuation == 10000
        assert session.auction.current_bid == 6500

    def test_valuation_required(self, manager, aggressive_rival, skilled_player):
        with pytest.raises(ValueError):
            manager.create_session(rival=aggressive_rival, player=skilled_player)

    def test_end_session(self, manager, live_session):
        assert manager.end_session(live_session.session_id)
        assert manager.get_session(live_session.session_id) is None
        assert live_session.state == SessionState.ABANDONED
        assert not manager.end_session(live_session.session_id)

    def test_cleanup_stale_sessions(self, manager, live_session):
        assert manager.cleanup_stale_sessions(max_age_seconds=3600) == 0
        assert manager.cleanup_stale_sessions(max_age_seconds=-1) == 1
        assert manager.list_sessions() == []

    def test_rejected_result_not_recorded(self, live_session):
        before = live_session.auction
        result = live_session.engine.player_stall(before)
        live_session.record(result)

        assert not result.accepted
        assert live_session.auction is before
        assert live_session.log == []


class TestAuctionLoop:
    """Tests for driving a session."""

    def test_auto_rival(self, live_session):
        loop = AuctionLoop(live_session)
        result = loop.submit(Action.bid())

        assert result.success
        assert len(result.transitions) == 2
        assert result.loop_state == LoopState.WAITING_PLAYER
        assert [e.actor for e in live_session.log] == [Actor.PLAYER, Actor.RIVAL]

    def test_manual_rival(self, live_session):
        loop = AuctionLoop(live_session, auto_rival=False)
        result = loop.submit(Action.bid())

        assert len(result.transitions) == 1
        assert result.loop_state == LoopState.WAITING_RIVAL
        assert result.last.rival_turn_pending

        result = loop.run_rival_turn()
        assert result.loop_state == LoopState.WAITING_PLAYER
        assert live_session.auction.last_bidder.value == "rival"

    def test_rejection_reported(self, live_session):
        loop = AuctionLoop(live_session)
        result = loop.submit(Action.kick_tires())

        assert not result.success
        assert result.errors == ["Place an opening bid before using tactics."]
        assert result.loop_state == LoopState.WAITING_PLAYER

    def test_quit_resolves_session(self, live_session):
        loop = AuctionLoop(live_session)
        result = loop.submit(Action.quit())

        assert result.loop_state == LoopState.RESOLVED
        assert live_session.state == SessionState.RESOLVED
        assert live_session.intents == []

    def test_win_leaves_intents(self, manager, skilled_player):
        rival = build_rival_state(STERLING_VANCE, interest=50)
        session = manager.create_session(
            rival=rival,
            player=skilled_player,
            car_valuation=20000,
            rival_name=STERLING_VANCE.name,
            seed=11,
        )
        loop = AuctionLoop(session)
        for _ in range(20):
            if session.auction.is_resolved:
                break
            loop.submit(Action.bid())

        assert session.state == SessionState.RESOLVED
        if session.auction.outcome.player_won:
            assert [i.intent_type.value for i in session.intents] == ["debit_money", "grant_xp"]
        else:
            assert session.intents == []

    def test_same_seed_same_auction(self, manager, skilled_player):
        def play(seed):
            session = manager.create_session(
                rival=build_rival_state(STERLING_VANCE, interest=50),
                player=skilled_player,
                car_valuation=20000,
                seed=seed,
            )
            loop = AuctionLoop(session)
            for _ in range(20):
                if session.auction.is_resolved:
                    break
                loop.submit(Action.bid())
            return [entry.text for entry in session.log]

        assert play(42) == play(42)

    def test_player_snapshot_untouched(self, live_session, skilled_player):
        """Money only changes through intents."""
        loop = AuctionLoop(live_session)
        loop.submit(Action.bid())

        assert live_session.auction.player == skilled_player
        assert skilled_player == PlayerSnapshot(money=50000, inspection=2, tactics=2)


class TestRevealPolicy:
    """Tests for reveal pacing."""

    def test_start_prompt_delay(self, live_session):
        result = live_session.engine.start(live_session.auction)
        steps = RevealPolicy().schedule(result)

        assert [s.at_ms for s in steps] == [0, 800]

    def test_rival_bark_after_auctioneer(self, live_session):
        from dataclasses import replace
        from ..engine_core.state import Bidder

        state = replace(live_session.auction, has_any_bids=True, last_bidder=Bidder.RIVAL)
        result = live_session.engine.player_bid(state)
        steps = RevealPolicy().schedule(result)

        barks = [(s.item.trigger, s.at_ms) for s in steps if not isinstance(s.item, LogEntry)]
        assert barks == [("player_bid", 0), ("outbid", 650)]

    def test_log_lines_spaced(self, live_session):
        result = live_session.engine.player_bid(live_session.auction, power=True)
        steps = RevealPolicy(RevealConfig(auction_log_line=100)).schedule(result)

        lines = [s.at_ms for s in steps if isinstance(s.item, LogEntry)]
        assert lines == [0, 100]

    def test_rival_turn_delay(self, live_session):
        policy = RevealPolicy()
        pending = live_session.engine.player_bid(live_session.auction)
        quit_result = live_session.engine.player_quit(live_session.auction)

        assert policy.rival_turn_delay(pending) == 1550
        assert policy.rival_turn_delay(quit_result) is None
