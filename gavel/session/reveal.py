"""
Reveal Policy - Dramatic pacing for auction output.

The engine resolves every transition instantly. How fast a presentation
layer shows the result is its own business: this policy turns a
TransitionResult into a timeline of reveal steps, and tells the caller how
long to wait before asking the engine for the rival's turn.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Union

from ..config import RevealConfig, DEFAULT_REVEAL_CONFIG
from ..engine_core.action import Actor, Effect, EffectType, LogEntry, TransitionResult


@dataclass(frozen=True)
class RevealStep:
    """Show `item` at `at_ms` milliseconds after the transition."""
    at_ms: int
    item: Union[Effect, LogEntry]


class RevealPolicy:
    """
    Maps transition output to delays.

    Usage:
        policy = RevealPolicy()
        for step in policy.schedule(result):
            show(step.item, after=step.at_ms)
        delay = policy.rival_turn_delay(result)
        if delay is not None:
            schedule_rival_turn(after=delay)
    """

    def __init__(self, config: RevealConfig = DEFAULT_REVEAL_CONFIG):
        self.config = config

    def schedule(self, result: TransitionResult, start_ms: int = 0) -> list[RevealStep]:
        """Order effects and log lines on one timeline."""
        steps = self._effect_steps(result.effects, start_ms)

        at_ms = start_ms
        for index, entry in enumerate(result.log_entries):
            if index > 0:
                at_ms += self.config.auction_log_line
            steps.append(RevealStep(at_ms=at_ms, item=entry))

        return sorted(steps, key=lambda step: step.at_ms)

    def _effect_steps(self, effects: list[Effect], start_ms: int) -> list[RevealStep]:
        steps = []
        at_ms = start_ms
        previous = None

        for effect in effects:
            if previous is not None and effect.effect_type == EffectType.BARK:
                if effect.trigger == "opening_prompt":
                    at_ms += self.config.opening_prompt_after_start
                elif effect.speaker == Actor.RIVAL and previous.speaker == Actor.AUCTIONEER:
                    at_ms += self.config.rival_bark_after_auctioneer
            steps.append(RevealStep(at_ms=at_ms, item=effect))
            previous = effect

        return steps

    def rival_turn_delay(self, result: TransitionResult) -> int | None:
        """Milliseconds to wait before running the rival's turn, or None if none is due."""
        if not result.rival_turn_pending:
            return None
        return self.config.next_turn_after_auctioneer + self.config.rival_bid
