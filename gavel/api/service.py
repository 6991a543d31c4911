"""
API Service - Business logic layer between the HTTP app and the engine.

The service:
1. Translates API requests to engine calls
2. Manages auction sessions and their loops
3. Renders barks and reveal offsets for clients
4. Formats responses

This layer is framework-agnostic: it returns schema objects and never
raises for a missing session, so any web framework can sit on top.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional
import logging
import random

from .schemas import (
    # Requests
    BootstrapRequest,
    ActionRequest,
    # Responses
    AuctionResponse,
    AuctionStateResponse,
    ErrorResponse,
    RivalListResponse,
    # Shared
    AuctionInfo,
    EffectInfo,
    IntentInfo,
    LogEntryInfo,
    RejectionInfo,
    ResolutionInfo,
    RivalInfo,
    RosterEntry,
    TransitionInfo,
    # Enums
    ErrorCode,
    MoodName,
    SessionStatus,
    StrategyName,
)
from ..config import DEFAULT_AUCTION_CONFIG
from ..engine_core.state import PlayerSnapshot, Resolution, RivalStrategy
from ..engine_core.action import Action, Actor, EffectType, Intent, LogEntry, TransitionResult
from ..bots.roster import (
    RIVALS,
    RivalMood,
    RivalProfile,
    build_rival_state,
    calculate_rival_interest,
    get_tier_name,
)
from ..bots.barks import render_auctioneer_bark, render_rival_bark
from ..session import SessionManager, Session, AuctionLoop, RevealPolicy

logger = logging.getLogger(__name__)


_ACTION_FACTORIES = {
    "bid": Action.bid,
    "power_bid": Action.power_bid,
    "kick_tires": lambda amount=None: Action.kick_tires(),
    "stall": lambda amount=None: Action.stall(),
    "quit": lambda amount=None: Action.quit(),
}


@dataclass
class AuctionService:
    """
    Main API service for auction clients.

    Usage:
        service = AuctionService()

        # Open an auction
        response = service.create_auction(request)

        # Drive it
        response = service.submit_action(response.session_id, ActionRequest(action="bid"))
    """
    session_manager: SessionManager = field(default_factory=SessionManager)
    reveal_policy: RevealPolicy = field(default_factory=RevealPolicy)
    default_seed: Optional[int] = None

    # Auction loops per session
    _loops: dict[str, AuctionLoop] = field(default_factory=dict)

    def create_auction(self, request: BootstrapRequest) -> AuctionResponse | ErrorResponse:
        """
        Open a new auction session.

        The rival comes from `rival_profile` or from the roster via `rival_id`.
        """
        profile, error = self._resolve_profile(request)
        if error is not None:
            return error

        if request.interest is not None:
            interest = request.interest
        else:
            interest = calculate_rival_interest(profile, request.car_tags)

        config = DEFAULT_AUCTION_CONFIG.with_overrides(request.config.model_dump())
        seed = request.seed if request.seed is not None else self.default_seed

        session = self.session_manager.create_session(
            rival=build_rival_state(profile, interest),
            player=PlayerSnapshot(
                money=request.player_money,
                inspection=request.player_skills.inspection,
                tactics=request.player_skills.tactics,
            ),
            car_valuation=request.car_valuation,
            rival_name=profile.name,
            profile=profile,
            config=config,
            seed=seed,
        )
        session.metadata["bark_rng"] = random.Random(seed)

        loop = AuctionLoop(session, auto_rival=request.auto_rival)
        self._loops[session.session_id] = loop

        return self._auction_response(session, [loop.start()])

    def _resolve_profile(
        self, request: BootstrapRequest
    ) -> tuple[Optional[RivalProfile], Optional[ErrorResponse]]:
        if request.rival_profile is not None:
            if request.interest is None:
                return None, ErrorResponse(
                    error="interest is required with an explicit rival_profile",
                    error_code=ErrorCode.INVALID_BOOTSTRAP,
                )
            rival = request.rival_profile
            profile = RivalProfile(
                rival_id="custom",
                name=rival.name,
                strategy=RivalStrategy(rival.strategy.value),
                budget=rival.budget,
                patience=rival.base_patience,
                mood=RivalMood(rival.mood.value) if rival.mood else RivalMood.NORMAL,
            )
            return profile, None

        if request.rival_id is None:
            return None, ErrorResponse(
                error="Either rival_profile or rival_id is required",
                error_code=ErrorCode.INVALID_BOOTSTRAP,
            )

        profile = RIVALS.get(request.rival_id)
        if profile is None:
            return None, ErrorResponse(
                error=f"Unknown rival: {request.rival_id}",
                error_code=ErrorCode.UNKNOWN_RIVAL,
                details={"available": sorted(RIVALS)},
            )
        return profile, None

    def get_auction(self, session_id: str) -> AuctionStateResponse | ErrorResponse:
        """Get the full auction state, log and intents."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        return AuctionStateResponse(
            session_id=session.session_id,
            status=SessionStatus(session.state.value),
            auction=self._auction_info(session),
            resolution=self._resolution_info(session.auction.outcome),
            log=[self._log_entry_info(entry) for entry in session.log],
            intents=[self._intent_info(intent) for intent in session.intents],
            created_at=session.created_at,
        )

    def submit_action(self, session_id: str, request: ActionRequest) -> AuctionResponse | ErrorResponse:
        """
        Apply a player tactic.

        Rejected tactics are part of a normal response: accepted=false plus
        a rejection block on the transition.
        """
        loop = self._live_loop(session_id)
        if loop is None:
            return self._not_found(session_id)

        action = _ACTION_FACTORIES[request.action.value](request.amount)
        turn = loop.submit(action)
        return self._auction_response(loop.session, turn.transitions)

    def run_rival_turn(self, session_id: str) -> AuctionResponse | ErrorResponse:
        """Reveal the rival's pending turn."""
        loop = self._live_loop(session_id)
        if loop is None:
            return self._not_found(session_id)

        turn = loop.run_rival_turn()
        return self._auction_response(loop.session, turn.transitions)

    def end_auction(self, session_id: str, reason: str = "user_ended") -> bool:
        """End an auction session and release it."""
        self._loops.pop(session_id, None)
        return self.session_manager.end_session(session_id, reason)

    def list_auctions(self) -> list[str]:
        """List IDs of live auction sessions."""
        return self.session_manager.list_sessions()

    def list_rivals(self) -> RivalListResponse:
        """List the rival roster."""
        rivals = [
            RosterEntry(
                rival_id=profile.rival_id,
                name=profile.name,
                tier=profile.tier,
                tier_name=get_tier_name(profile.tier),
                strategy=StrategyName(profile.strategy.value),
                budget=profile.budget,
                patience=profile.patience,
                wishlist=list(profile.wishlist),
            )
            for profile in RIVALS.values()
        ]
        return RivalListResponse(rivals=rivals, count=len(rivals))

    # =========================================================================
    # Conversion helpers
    # =========================================================================

    def _live_loop(self, session_id: str) -> Optional[AuctionLoop]:
        """The loop for a session the manager still holds; stale loops are dropped."""
        if self.session_manager.get_session(session_id) is None:
            self._loops.pop(session_id, None)
            return None
        return self._loops.get(session_id)

    def _not_found(self, session_id: str) -> ErrorResponse:
        logger.warning("session_not_found: id=%s", session_id)
        return ErrorResponse(
            error="Session not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
            details={"session_id": session_id},
        )

    def _auction_response(self, session: Session, transitions: list[TransitionResult]) -> AuctionResponse:
        last = transitions[-1]
        return AuctionResponse(
            session_id=session.session_id,
            status=SessionStatus(session.state.value),
            auction=self._auction_info(session),
            resolution=self._resolution_info(session.auction.outcome),
            transitions=[self._transition_info(session, t) for t in transitions],
            rival_turn_delay_ms=self.reveal_policy.rival_turn_delay(last),
        )

    def _auction_info(self, session: Session) -> AuctionInfo:
        auction = session.auction
        mood = session.profile.mood if session.profile else None
        return AuctionInfo(
            car_valuation=auction.car_valuation,
            current_bid=auction.current_bid,
            has_any_bids=auction.has_any_bids,
            last_bidder=auction.last_bidder.value,
            is_player_turn=auction.is_player_turn,
            phase=auction.phase.value,
            turn_number=auction.turn_number,
            stall_uses_this_auction=auction.stall_uses_this_auction,
            stall_uses_remaining=auction.stall_uses_remaining,
            power_bid_streak=auction.power_bid_streak,
            rival=RivalInfo(
                name=auction.rival_name,
                strategy=StrategyName(auction.rival.strategy.value),
                patience=auction.rival.patience,
                budget=auction.rival.budget,
                interest=auction.rival.interest,
                mood=MoodName(mood.value) if mood else None,
            ),
        )

    def _transition_info(self, session: Session, result: TransitionResult) -> TransitionInfo:
        effects = []
        for step in self.reveal_policy.schedule(result):
            if isinstance(step.item, LogEntry):
                continue
            effect = step.item
            if effect.effect_type == EffectType.BARK:
                text = self._render_bark(session, result, effect.speaker, effect.trigger)
            else:
                text = effect.message
            effects.append(EffectInfo(
                type=effect.effect_type.value,
                speaker=effect.speaker.value if effect.speaker else None,
                trigger=effect.trigger,
                text=text,
                level=effect.level.value,
                at_ms=step.at_ms,
            ))

        rejection = None
        if result.rejection is not None:
            rejection = RejectionInfo(
                code=result.rejection.code.value,
                message=result.rejection.message,
            )

        return TransitionInfo(
            accepted=result.accepted,
            rejection=rejection,
            resolved=self._resolution_info(result.resolved),
            rival_turn_pending=result.rival_turn_pending,
            log_entries=[self._log_entry_info(entry) for entry in result.log_entries],
            effects=effects,
            intents=[self._intent_info(intent) for intent in result.intents],
        )

    def _render_bark(self, session: Session, result: TransitionResult, speaker: Actor, trigger: str) -> str:
        rng = session.metadata.get("bark_rng")
        if speaker == Actor.RIVAL:
            mood = session.profile.mood if session.profile else None
            return render_rival_bark(trigger, mood=mood, rng=rng)
        return render_auctioneer_bark(
            trigger,
            current_bid=result.session.current_bid,
            rival_name=result.session.rival_name,
            bid_increment=session.engine.config.bid_increment,
            rng=rng,
        )

    def _resolution_info(self, outcome: Optional[Resolution]) -> Optional[ResolutionInfo]:
        if outcome is None:
            return None
        return ResolutionInfo(
            player_won=outcome.player_won,
            message=outcome.message,
            bark_trigger=outcome.bark_trigger,
        )

    def _log_entry_info(self, entry: LogEntry) -> LogEntryInfo:
        return LogEntryInfo(text=entry.text, actor=entry.actor.value)

    def _intent_info(self, intent: Intent) -> IntentInfo:
        return IntentInfo(type=intent.intent_type.value, amount=intent.amount, skill=intent.skill)
