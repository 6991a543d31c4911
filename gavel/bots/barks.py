"""
Barks - Short reactive lines keyed to auction events.

The engine only emits trigger ids. This catalogue is what a presentation
layer (the API service, the CLI) uses to turn a trigger into text.
"""

from __future__ import annotations
from enum import Enum
import random

from ..format import format_currency
from .roster import RivalMood


class RivalBark(str, Enum):
    BID = "bid"
    OUTBID = "outbid"
    PATIENCE_LOW = "patience_low"


class AuctioneerBark(str, Enum):
    START = "start"
    OPENING_PROMPT = "opening_prompt"
    PLAYER_BID = "player_bid"
    PLAYER_POWER_BID = "player_power_bid"
    RIVAL_BID = "rival_bid"
    STALL = "stall"
    KICK_TIRES = "kick_tires"
    END_PLAYER_WIN = "end_player_win"
    END_PLAYER_LOSE = "end_player_lose"


RIVAL_LINES: dict[RivalMood, dict[RivalBark, tuple[str, ...]]] = {
    RivalMood.NORMAL: {
        RivalBark.BID: ("I'll go higher.", "Not so fast.", "Mine."),
        RivalBark.OUTBID: ("Hmph. Fine.", "You really want this one, huh?"),
        RivalBark.PATIENCE_LOW: ("This is dragging on...", "Let's wrap this up."),
    },
    RivalMood.CONFIDENT: {
        RivalBark.BID: ("Is that all you've got?", "Easy money."),
        RivalBark.OUTBID: ("Cute. Keep going.", "You're just delaying the inevitable."),
        RivalBark.PATIENCE_LOW: ("I have better things to do.", "Enough games."),
    },
    RivalMood.CAUTIOUS: {
        RivalBark.BID: ("A small raise. Just in case.", "I suppose I'll bid."),
        RivalBark.OUTBID: ("That's getting steep...", "Hmm. Careful now."),
        RivalBark.PATIENCE_LOW: ("I'm not sure this is worth it.", "Maybe I should walk."),
    },
    RivalMood.DESPERATE: {
        RivalBark.BID: ("I NEED this car!", "Don't you dare!"),
        RivalBark.OUTBID: ("No, no, no!", "You can't do this to me!"),
        RivalBark.PATIENCE_LOW: ("I can't keep this up...", "Please, just let me have it!"),
    },
}


def render_rival_bark(
    trigger: str,
    mood: RivalMood | None = None,
    rng: random.Random | None = None,
) -> str:
    """Pick a rival line for a trigger; unknown triggers render as an empty string."""
    rng = rng or random.Random()
    lines = RIVAL_LINES.get(mood or RivalMood.NORMAL, RIVAL_LINES[RivalMood.NORMAL])
    try:
        options = lines[RivalBark(trigger)]
    except ValueError:
        return ""
    return rng.choice(options)


def render_auctioneer_bark(
    trigger: str,
    current_bid: int,
    rival_name: str,
    bid_increment: int,
    rng: random.Random | None = None,
) -> str:
    """Pick an auctioneer line for a trigger; unknown triggers render as an empty string."""
    rng = rng or random.Random()
    bid = format_currency(current_bid)

    try:
        bark = AuctioneerBark(trigger)
    except ValueError:
        return ""

    if bark == AuctioneerBark.START:
        return "Alright folks, let's get this started."
    if bark == AuctioneerBark.OPENING_PROMPT:
        return rng.choice([
            f"Opening bid at {bid}. Who wants it?",
            f"We're starting at {bid}. Do I hear a bid?",
        ])
    if bark == AuctioneerBark.PLAYER_BID:
        return rng.choice([
            f"I have {bid}! Do I hear {format_currency(current_bid + bid_increment)}?",
            f"New bid at {bid}!",
        ])
    if bark == AuctioneerBark.PLAYER_POWER_BID:
        return rng.choice([
            f"Big jump! {bid} on the floor!",
            f"Power move, {bid}!",
        ])
    if bark == AuctioneerBark.RIVAL_BID:
        return rng.choice([
            f"We're at {bid}!",
            f"Bid is {bid}. Who's next?",
        ])
    if bark == AuctioneerBark.STALL:
        return rng.choice(["Going once...", "Going twice...", "Any other bidders?"])
    if bark == AuctioneerBark.KICK_TIRES:
        return rng.choice([
            "Hey, no touching the merchandise.",
            "Careful with that. This isn't a showroom.",
        ])
    if bark == AuctioneerBark.END_PLAYER_WIN:
        return f"Sold! To you for {bid}."
    return f"Sold! To {rival_name} for {bid}."
