"""
Bidding Engine - Applies auction actions to an AuctionSession.

The engine is the single point of state change for an auction.
All transitions go through BiddingEngine.apply() or its named helpers.

Design principles:
- Pure transitions: (session, action) -> TransitionResult with a new session
- Validates before applying; rejected actions return the input untouched
- Never blocks: pacing the rival's reveal is the caller's business
- Never touches player money or skills; returns intents instead
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING
import logging
import random

from ..config import AuctionConfig, RivalAIConfig, DEFAULT_AUCTION_CONFIG, DEFAULT_RIVAL_AI_CONFIG
from ..format import format_currency
from .state import AuctionSession, Bidder, Resolution
from .action import (
    Action, ActionType, Actor, Intent, IntentType,
    RejectionCode, ToastLevel, TransitionResult,
)

if TYPE_CHECKING:
    from ..bots.rival_ai import RivalAI

logger = logging.getLogger(__name__)


PLAYER_ACTIONS = {
    ActionType.BID,
    ActionType.POWER_BID,
    ActionType.KICK_TIRES,
    ActionType.STALL,
}


@dataclass
class BiddingEngine:
    """
    Applies actions to auction sessions.

    Stateless apart from tuning and the random source; all auction
    state lives in AuctionSession. Seed the rng for reproducible rivals.
    """
    config: AuctionConfig = DEFAULT_AUCTION_CONFIG
    rival_config: RivalAIConfig = DEFAULT_RIVAL_AI_CONFIG
    rng: random.Random = field(default_factory=random.Random)

    def start(self, session: AuctionSession) -> TransitionResult:
        """Announce a freshly opened session."""
        result = TransitionResult(session=session)
        result.bark(Actor.AUCTIONEER, "start")
        result.bark(Actor.AUCTIONEER, "opening_prompt")
        return result

    def apply(self, session: AuctionSession, action: Action) -> TransitionResult:
        """
        Apply an action to the session.

        Returns a TransitionResult; out-of-turn and post-resolution
        actions come back as silent rejections rather than errors.
        """
        rejection = self._validate_action(session, action)
        if rejection is not None:
            return rejection

        if action.action_type == ActionType.BID:
            return self._handle_bid(session, action.amount, power=False)
        if action.action_type == ActionType.POWER_BID:
            return self._handle_bid(session, action.amount, power=True)
        if action.action_type == ActionType.KICK_TIRES:
            return self._handle_kick_tires(session)
        if action.action_type == ActionType.STALL:
            return self._handle_stall(session)
        if action.action_type == ActionType.QUIT:
            return self._handle_quit(session)
        return self._handle_rival_turn(session)

    # Named transitions

    def player_bid(self, session: AuctionSession, amount: int | None = None, power: bool = False) -> TransitionResult:
        action = Action.power_bid(amount) if power else Action.bid(amount)
        return self.apply(session, action)

    def player_kick_tires(self, session: AuctionSession) -> TransitionResult:
        return self.apply(session, Action.kick_tires())

    def player_stall(self, session: AuctionSession) -> TransitionResult:
        return self.apply(session, Action.stall())

    def player_quit(self, session: AuctionSession) -> TransitionResult:
        return self.apply(session, Action.quit())

    def rival_turn_immediate(self, session: AuctionSession) -> TransitionResult:
        return self.apply(session, Action.rival_turn())

    def _validate_action(self, session: AuctionSession, action: Action) -> TransitionResult | None:
        """Turn and lifecycle guards. Returns a rejection, or None if the action may run."""
        if session.is_resolved:
            return TransitionResult.rejected(
                session, RejectionCode.ALREADY_RESOLVED, "The auction is already over."
            )

        if action.action_type in PLAYER_ACTIONS and not session.is_player_turn:
            return TransitionResult.rejected(
                session, RejectionCode.INVALID_TURN, "Wait for the rival to move."
            )

        if action.action_type == ActionType.RIVAL_TURN and session.is_player_turn:
            return TransitionResult.rejected(
                session, RejectionCode.INVALID_TURN, "It's the player's turn."
            )

        return None

    def _rival_ai(self, session: AuctionSession) -> RivalAI:
        from ..bots.rival_ai import RivalAI

        return RivalAI(
            session.rival,
            rng=self.rng,
            config=self.rival_config,
            auction_config=self.config,
        )

    def _handle_bid(self, session: AuctionSession, amount: int | None, power: bool) -> TransitionResult:
        """
        Handle a normal or power bid.

        The first bid of an encounter is the opening bid at the opening
        price. A power bid as the very first action places the opening bid
        and the power raise in one go, logged as two entries.
        """
        if amount is None:
            amount = self.config.power_bid_increment if power else self.config.bid_increment
        elif amount <= 0:
            return TransitionResult.rejected(
                session,
                RejectionCode.INVALID_AMOUNT,
                f"Bid amount must be positive (got {format_currency(amount)}).",
            )
        money = session.player.money
        is_first_bid = not session.has_any_bids
        opening_bid = session.current_bid

        if is_first_bid:
            if money < opening_bid:
                return TransitionResult.rejected(
                    session,
                    RejectionCode.INSUFFICIENT_FUNDS,
                    f"Not enough money to bid {format_currency(opening_bid)} "
                    f"(you have {format_currency(money)}).",
                )
            next_bid = opening_bid + amount if power else opening_bid
        else:
            next_bid = session.current_bid + amount

        if money < next_bid:
            return TransitionResult.rejected(
                session,
                RejectionCode.INSUFFICIENT_FUNDS,
                f"Not enough money to bid {format_currency(next_bid)} "
                f"(you have {format_currency(money)}).",
            )

        new_session = session._copy_with(
            has_any_bids=True,
            last_bidder=Bidder.PLAYER,
            current_bid=next_bid,
        )
        result = TransitionResult(session=new_session)

        if is_first_bid:
            result.log(f"Opening bid → {format_currency(opening_bid)}.", Actor.PLAYER)

        if power:
            result.log(f"Power bid +{format_currency(amount)} → {format_currency(next_bid)}.", Actor.PLAYER)
            result.bark(Actor.AUCTIONEER, "player_power_bid")
        elif not is_first_bid:
            result.log(f"Bid +{format_currency(amount)} → {format_currency(next_bid)}.", Actor.PLAYER)
            result.bark(Actor.AUCTIONEER, "player_bid")
            result.bark(Actor.RIVAL, "outbid")
        else:
            result.bark(Actor.AUCTIONEER, "player_bid")

        if not power:
            result.session = new_session._copy_with(power_bid_streak=0)
            return self._pass_turn_to_rival(result)

        ai = self._rival_ai(new_session)
        ai.on_player_power_bid()
        new_session = new_session._copy_with(
            power_bid_streak=new_session.power_bid_streak + 1,
            rival=ai.state,
        )
        result.session = new_session

        patience = ai.get_patience()
        if 0 < patience < self.config.patience_thresholds.low:
            result.bark(Actor.RIVAL, "patience_low")
        if patience <= 0:
            return self._resolve(result, True, f"{session.rival_name} lost patience and quit!")

        return self._pass_turn_to_rival(result)

    def _handle_kick_tires(self, session: AuctionSession) -> TransitionResult:
        """Handle kick tires: shrink the rival's budget."""
        if not session.has_any_bids:
            return TransitionResult.rejected(
                session,
                RejectionCode.NO_OPENING_BID,
                "Place an opening bid before using tactics.",
                level=ToastLevel.WARNING,
            )

        required = self.config.required_inspection_level
        if session.player.inspection < required:
            return TransitionResult.rejected(
                session,
                RejectionCode.SKILL_TOO_LOW,
                f"Requires Inspection {required}+ to Kick Tires "
                f"(you have Inspection {session.player.inspection}).",
            )

        ai = self._rival_ai(session)
        ai.on_player_kick_tires(self.config.kick_tires_budget_reduction)
        new_session = session._copy_with(power_bid_streak=0, rival=ai.state)

        result = TransitionResult(session=new_session)
        result.bark(Actor.AUCTIONEER, "kick_tires")
        result.log("Kick tires (pressure applied; they look less willing to spend).", Actor.PLAYER)

        if new_session.current_bid > ai.get_budget():
            if new_session.player_is_high_bidder:
                return self._resolve(result, True, f"{session.rival_name} is out of budget and quits!")
            return self._resolve_hold(result)

        return self._pass_turn_to_rival(result)

    def _handle_stall(self, session: AuctionSession) -> TransitionResult:
        """Handle stall: burn rival patience, limited uses per auction."""
        if not session.has_any_bids:
            return TransitionResult.rejected(
                session,
                RejectionCode.NO_OPENING_BID,
                "Place an opening bid before using tactics.",
                level=ToastLevel.WARNING,
            )

        tactics = session.player.tactics
        required = self.config.required_tactics_level
        if tactics < required:
            return TransitionResult.rejected(
                session,
                RejectionCode.SKILL_TOO_LOW,
                f"Requires Tactics {required}+ to Stall (you have Tactics {tactics}).",
            )

        if session.stall_uses_this_auction >= tactics:
            return TransitionResult.rejected(
                session,
                RejectionCode.NO_TACTIC_USES_REMAINING,
                f"No Stall uses left ({session.stall_uses_this_auction}/{tactics}).",
                level=ToastLevel.WARNING,
            )

        ai = self._rival_ai(session)
        ai.on_player_stall()
        new_session = session._copy_with(
            stall_uses_this_auction=session.stall_uses_this_auction + 1,
            power_bid_streak=0,
            rival=ai.state,
        )

        result = TransitionResult(session=new_session)
        result.bark(Actor.AUCTIONEER, "stall")
        result.log(f"Stall (-{self.config.stall_patience_penalty} rival patience).", Actor.PLAYER)

        patience = ai.get_patience()
        if 0 < patience < self.config.patience_thresholds.low:
            result.bark(Actor.RIVAL, "patience_low")

        if patience <= 0:
            if new_session.player_is_high_bidder:
                return self._resolve(result, True, f"{session.rival_name} lost patience and quit!")
            return self._resolve_hold(result)

        # Stalling pressures the rival but hands them the turn
        return self._pass_turn_to_rival(result)

    def _handle_quit(self, session: AuctionSession) -> TransitionResult:
        """Player walks away. Terminal, no rollback."""
        result = TransitionResult(session=session)
        result.log("Walked away from the auction.", Actor.PLAYER)
        return self._resolve(result, False, "You quit the auction.")

    def _handle_rival_turn(self, session: AuctionSession) -> TransitionResult:
        """
        Run the rival's decision and apply it.

        A rival that is already the high bidder and declines to raise is
        holding, not folding: the auction ends in their favor without
        fold narration.
        """
        ai = self._rival_ai(session)
        decision = ai.decide_bid(session.current_bid)
        new_session = session.with_rival(ai.state)
        result = TransitionResult(session=new_session)

        if not decision.should_bid:
            rival_is_high_bidder = session.has_any_bids and session.last_bidder == Bidder.RIVAL
            if rival_is_high_bidder:
                return self._resolve_hold(result)

            from ..bots.decision_table import BidReason

            reason = decision.reason.value
            trigger = "patience_low" if decision.reason == BidReason.LOST_PATIENCE else "outbid"
            result.log(f"{reason}.", Actor.RIVAL)
            result.bark(Actor.RIVAL, trigger)
            return self._resolve(
                result,
                session.player_is_high_bidder,
                f"{session.rival_name} folds: {reason}!",
                bark_trigger=trigger,
            )

        is_first_bid = not session.has_any_bids
        if is_first_bid:
            new_session = new_session._copy_with(has_any_bids=True, last_bidder=Bidder.RIVAL)
        else:
            new_session = new_session._copy_with(
                current_bid=session.current_bid + decision.bid_amount,
                last_bidder=Bidder.RIVAL,
            )

        flavor = self._patience_flavor(ai.get_patience())
        suffix = f" {flavor}" if flavor else ""
        if is_first_bid:
            result.log(f"Opening bid → {format_currency(new_session.current_bid)}.{suffix}", Actor.RIVAL)
        else:
            result.log(
                f"Bid +{format_currency(decision.bid_amount)} → "
                f"{format_currency(new_session.current_bid)}.{suffix}",
                Actor.RIVAL,
            )

        result.bark(Actor.AUCTIONEER, "rival_bid")
        result.bark(Actor.RIVAL, "bid")
        result.session = new_session.handing_turn_to_player()
        return result

    def _patience_flavor(self, patience: int) -> str:
        thresholds = self.config.patience_thresholds
        if patience < thresholds.critical:
            return "I'm near my limit."
        if patience < thresholds.low:
            return "Getting tired of this..."
        if patience < thresholds.medium:
            return "You're really pushing it."
        return ""

    def _pass_turn_to_rival(self, result: TransitionResult) -> TransitionResult:
        result.session = result.session.handing_turn_to_rival()
        return result

    def _resolve_hold(self, result: TransitionResult) -> TransitionResult:
        """Rival keeps the winning bid without raising."""
        session = result.session
        bid = format_currency(session.current_bid)
        result.log(f"Holding at {bid}.", Actor.RIVAL)
        return self._resolve(result, False, f"{session.rival_name} holds at {bid}.")

    def _resolve(
        self,
        result: TransitionResult,
        player_won: bool,
        message: str,
        bark_trigger: str | None = None,
    ) -> TransitionResult:
        """End the auction and attach the caller's intents."""
        session = result.session
        outcome = Resolution(player_won=player_won, message=message, bark_trigger=bark_trigger)
        result.session = session.resolved_with(outcome)
        result.bark(Actor.AUCTIONEER, "end_player_win" if player_won else "end_player_lose")

        if player_won:
            result.intents.append(Intent(IntentType.DEBIT_MONEY, amount=session.current_bid))
            result.intents.append(
                Intent(IntentType.GRANT_XP, amount=self.config.auction_xp_gain, skill="tactics")
            )

        logger.info(
            "auction_resolved: player_won=%s bid=%s message=%s",
            player_won, session.current_bid, message,
        )
        return result


def apply_action(
    session: AuctionSession,
    action: Action,
    config: AuctionConfig = DEFAULT_AUCTION_CONFIG,
    rng: random.Random | None = None,
) -> TransitionResult:
    """
    Convenience function to apply an action.

    Creates a BiddingEngine and applies the action.
    """
    engine = BiddingEngine(config=config, rng=rng or random.Random())
    return engine.apply(session, action)
