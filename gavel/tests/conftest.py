"""
Pytest fixtures for Gavel tests.
"""

import random

import pytest

from ..engine_core.state import AuctionSession, PlayerSnapshot, RivalState, RivalStrategy
from ..engine_core.reducer import BiddingEngine


class FixedRandom(random.Random):
    """Random source whose draws always return the same value."""

    def __init__(self, value: float = 0.99):
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture
def never_hesitates() -> FixedRandom:
    """Rival never gets cold feet."""
    return FixedRandom(0.99)


@pytest.fixture
def always_hesitates() -> FixedRandom:
    """Rival folds whenever cold feet are possible."""
    return FixedRandom(0.0)


@pytest.fixture
def aggressive_rival() -> RivalState:
    """Aggressive rival: patience 100, budget 15000, interest 80."""
    return RivalState(
        strategy=RivalStrategy.AGGRESSIVE,
        patience=100,
        budget=15000,
        interest=80,
    )


@pytest.fixture
def skilled_player() -> PlayerSnapshot:
    """Player with money to spare and level 2 skills."""
    return PlayerSnapshot(money=50000, inspection=2, tactics=2)


@pytest.fixture
def session(aggressive_rival, skilled_player) -> AuctionSession:
    """Fresh auction: valuation 20000 at 0.5 -> opening bid 10000."""
    return AuctionSession.open(
        car_valuation=20000,
        starting_bid_multiplier=0.5,
        rival=aggressive_rival,
        player=skilled_player,
        rival_name="Sterling",
    )


@pytest.fixture
def engine(never_hesitates) -> BiddingEngine:
    """Engine with a rival that never hesitates."""
    return BiddingEngine(rng=never_hesitates)
