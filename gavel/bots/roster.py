"""
Rival Roster - Predefined rivals, moods and interest scoring.

A rival profile defines who you are bidding against:
- Budget and base patience (the resources the auction burns down)
- Strategy (how fast patience drains and how hard they raise)
- Wishlist tags (how interested they are in a given car)
- Mood (a per-encounter swing applied to starting resources)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
import random

from ..engine_core.state import RivalState, RivalStrategy

logger = logging.getLogger(__name__)


class RivalMood(Enum):
    NORMAL = "Normal"
    CONFIDENT = "Confident"
    CAUTIOUS = "Cautious"
    DESPERATE = "Desperate"


@dataclass(frozen=True)
class MoodModifiers:
    """Multipliers applied to a rival's starting patience and budget."""
    patience_multiplier: float = 1.0
    budget_multiplier: float = 1.0


MOOD_MODIFIERS: dict[RivalMood, MoodModifiers] = {
    RivalMood.NORMAL: MoodModifiers(),
    RivalMood.CONFIDENT: MoodModifiers(patience_multiplier=1.1, budget_multiplier=1.1),
    RivalMood.CAUTIOUS: MoodModifiers(patience_multiplier=1.2, budget_multiplier=0.8),
    RivalMood.DESPERATE: MoodModifiers(patience_multiplier=0.7, budget_multiplier=1.25),
}


def get_mood_modifiers(mood: RivalMood | None) -> MoodModifiers:
    return MOOD_MODIFIERS.get(mood or RivalMood.NORMAL, MoodModifiers())


@dataclass(frozen=True)
class RivalProfile:
    """
    Static description of a rival.

    Tiers: 1 = Tycoon (late game), 2 = Enthusiast, 3 = Scrapper (early game).
    """
    rival_id: str
    name: str
    strategy: RivalStrategy
    budget: int
    patience: int  # 0-100
    tier: int = 2
    wishlist: tuple[str, ...] = field(default_factory=tuple)
    mood: RivalMood = RivalMood.NORMAL

    def with_mood(self, mood: RivalMood) -> RivalProfile:
        return RivalProfile(
            rival_id=self.rival_id,
            name=self.name,
            strategy=self.strategy,
            budget=self.budget,
            patience=self.patience,
            tier=self.tier,
            wishlist=self.wishlist,
            mood=mood,
        )


TIER_NAMES = {1: "Tycoon", 2: "Enthusiast", 3: "Scrapper"}


def get_tier_name(tier: int) -> str:
    return TIER_NAMES.get(tier, "Unknown")


# ============================================================================
# Predefined Rivals
# ============================================================================

STERLING_VANCE = RivalProfile(
    rival_id="sterling_vance",
    name="Sterling Vance",
    tier=1,
    budget=75000,
    patience=50,
    wishlist=("Muscle", "Classic", "American", "Iconic"),
    strategy=RivalStrategy.AGGRESSIVE,
)

SCRAPYARD_JOE = RivalProfile(
    rival_id="scrapyard_joe",
    name="Scrapyard Joe",
    tier=3,
    budget=8000,
    patience=30,
    wishlist=("Daily Driver", "Budget", "Rust"),
    strategy=RivalStrategy.PASSIVE,
)

MARCUS_THOMPSON = RivalProfile(
    rival_id="rival_001",
    name='Marcus "The Shark" Thompson',
    tier=1,
    budget=50000,
    patience=30,
    wishlist=("Muscle", "American", "Classic"),
    strategy=RivalStrategy.AGGRESSIVE,
)

YUKI_TANAKA = RivalProfile(
    rival_id="rival_002",
    name="Yuki Tanaka",
    tier=2,
    budget=60000,
    patience=70,
    wishlist=("JDM", "Sports", "Turbo"),
    strategy=RivalStrategy.COLLECTOR,
)

SARAH_MITCHELL = RivalProfile(
    rival_id="rival_003",
    name="Sarah Mitchell",
    tier=2,
    budget=40000,
    patience=50,
    wishlist=("Classic", "Rare", "Original"),
    strategy=RivalStrategy.PASSIVE,
)

VICTOR_RODRIGUEZ = RivalProfile(
    rival_id="rival_004",
    name='Victor "Fast Vic" Rodriguez',
    tier=1,
    budget=55000,
    patience=40,
    wishlist=("Sports", "Modified", "Track Car"),
    strategy=RivalStrategy.AGGRESSIVE,
)

ELEANOR_WRIGHT = RivalProfile(
    rival_id="rival_005",
    name="Eleanor Wright",
    tier=1,
    budget=45000,
    patience=60,
    wishlist=("Exotic", "Pristine", "Low Miles"),
    strategy=RivalStrategy.COLLECTOR,
)

TOMMY_CHEN = RivalProfile(
    rival_id="rival_006",
    name='Tommy "Rust Bucket" Chen',
    tier=3,
    budget=35000,
    patience=80,
    wishlist=("Project Car", "Barn Find", "Rust"),
    strategy=RivalStrategy.PASSIVE,
)


# All predefined rivals
RIVALS: dict[str, RivalProfile] = {
    profile.rival_id: profile
    for profile in (
        STERLING_VANCE,
        SCRAPYARD_JOE,
        MARCUS_THOMPSON,
        YUKI_TANAKA,
        SARAH_MITCHELL,
        VICTOR_RODRIGUEZ,
        ELEANOR_WRIGHT,
        TOMMY_CHEN,
    )
}

# Prestige gates for rival tiers
TIER3_MAX_PRESTIGE = 50
TIER1_MIN_PRESTIGE = 150


def calculate_rival_interest(profile: RivalProfile, car_tags: list[str] | tuple[str, ...]) -> int:
    """
    Interest in a car from wishlist overlap.

    Base interest is 50; each matching tag adds 15, capped at 100.
    """
    matches = [tag for tag in car_tags if tag in profile.wishlist]
    return min(50 + len(matches) * 15, 100)


def get_random_rival(rng: random.Random | None = None) -> RivalProfile:
    rng = rng or random.Random()
    return rng.choice(list(RIVALS.values()))


def get_rival_by_id(rival_id: str, rng: random.Random | None = None) -> RivalProfile:
    """Look up a rival; unknown ids fall back to a random rival."""
    profile = RIVALS.get(rival_id)
    if profile is None:
        logger.warning("unknown_rival_id: %s, falling back to random rival", rival_id)
        return get_random_rival(rng)
    return profile


def get_rival_by_tier_progression(
    player_prestige: int,
    rng: random.Random | None = None,
) -> RivalProfile:
    """
    Pick a rival appropriate for the player's prestige.

    Low prestige only meets Scrappers; mid prestige mostly Enthusiasts;
    high prestige mostly Tycoons.
    """
    rng = rng or random.Random()

    if player_prestige >= TIER1_MIN_PRESTIGE:
        available_tiers = [1, 1, 1, 2, 3]
    elif player_prestige >= TIER3_MAX_PRESTIGE:
        available_tiers = [2, 2, 2, 3]
    else:
        available_tiers = [3]

    selected_tier = rng.choice(available_tiers)
    tier_rivals = [p for p in RIVALS.values() if p.tier == selected_tier]
    if not tier_rivals:
        logger.warning("no_rivals_for_tier: %s, falling back to random rival", selected_tier)
        return get_random_rival(rng)
    return rng.choice(tier_rivals)


def build_rival_state(profile: RivalProfile, interest: int) -> RivalState:
    """Starting resources for one encounter, with the mood swing applied."""
    modifiers = get_mood_modifiers(profile.mood)
    return RivalState(
        strategy=profile.strategy,
        patience=min(100, int(profile.patience * modifiers.patience_multiplier)),
        budget=int(profile.budget * modifiers.budget_multiplier),
        interest=interest,
    )
