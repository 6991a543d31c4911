"""
Auction Loop - Drives one session turn by turn.

The loop:
1. Player submits a tactic
2. Engine validates and applies it
3. If the rival is due, the loop runs the rival turn (or leaves it to the
   caller when it wants to pace the reveal)
4. Resolution ends the loop; intents are left on the session
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from ..engine_core.action import Action, ActionType, TransitionResult

if TYPE_CHECKING:
    from .manager import Session


class LoopState(Enum):
    """State of the auction loop."""
    WAITING_PLAYER = "waiting_player"
    WAITING_RIVAL = "waiting_rival"
    RESOLVED = "resolved"


@dataclass
class TurnResult:
    """
    Result of driving one or more transitions.

    `transitions` holds every engine result in order: the player's, then
    the rival's if it ran.
    """
    success: bool
    loop_state: LoopState
    transitions: list[TransitionResult] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def last(self) -> TransitionResult | None:
        return self.transitions[-1] if self.transitions else None


class AuctionLoop:
    """
    The auction loop driver.

    Usage:
        loop = AuctionLoop(session)
        loop.start()

        result = loop.submit(Action.bid())
        if result.loop_state == LoopState.WAITING_RIVAL:
            # caller paced the reveal; run the rival when ready
            result = loop.run_rival_turn()
    """

    def __init__(self, session: Session, auto_rival: bool = True):
        self.session = session
        self.auto_rival = auto_rival

    @property
    def state(self) -> LoopState:
        auction = self.session.auction
        if auction.is_resolved:
            return LoopState.RESOLVED
        if auction.is_player_turn:
            return LoopState.WAITING_PLAYER
        return LoopState.WAITING_RIVAL

    def start(self) -> TransitionResult:
        """Announce the auction."""
        return self.session.record(self.session.engine.start(self.session.auction))

    def submit(self, action: Action, auto_rival: bool | None = None) -> TurnResult:
        """
        Apply a player action.

        With auto_rival the rival's turn runs right after an accepted action
        that hands the turn over.
        """
        if action.action_type == ActionType.RIVAL_TURN:
            return self.run_rival_turn()

        auto_rival = self.auto_rival if auto_rival is None else auto_rival
        result = self.session.record(self.session.engine.apply(self.session.auction, action))
        transitions = [result]

        if result.rival_turn_pending and auto_rival:
            transitions.append(self._rival_turn())

        return self._turn_result(transitions)

    def run_rival_turn(self) -> TurnResult:
        """Run the rival's pending turn."""
        return self._turn_result([self._rival_turn()])

    def _rival_turn(self) -> TransitionResult:
        engine = self.session.engine
        return self.session.record(engine.rival_turn_immediate(self.session.auction))

    def _turn_result(self, transitions: list[TransitionResult]) -> TurnResult:
        errors = [
            t.rejection.message for t in transitions
            if t.rejection is not None and not t.rejection.is_silent
        ]
        return TurnResult(
            success=all(t.accepted for t in transitions),
            loop_state=self.state,
            transitions=transitions,
            errors=errors,
        )
