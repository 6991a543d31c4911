"""
Action System - Actions, transition results, and their side channels.

Actions represent:
1. Player tactics (bid, power bid, kick tires, stall, quit)
2. The rival's turn, requested by the caller when it is ready to reveal it

Every transition returns a TransitionResult. Besides the new session it
carries everything a presentation layer needs (log lines, barks, toasts)
and the intents the caller must apply to the player's persisted state.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .state import AuctionSession, Resolution


class ActionType(Enum):
    """Types of auction actions."""
    # Player tactics
    BID = "bid"
    POWER_BID = "power_bid"
    KICK_TIRES = "kick_tires"
    STALL = "stall"
    QUIT = "quit"

    # Rival
    RIVAL_TURN = "rival_turn"


class Actor(Enum):
    """Who a log line or bark belongs to."""
    PLAYER = "player"
    RIVAL = "rival"
    AUCTIONEER = "auctioneer"


class RejectionCode(Enum):
    """Why an action was refused. All are recoverable."""
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
    SKILL_TOO_LOW = "SKILL_TOO_LOW"
    NO_TACTIC_USES_REMAINING = "NO_TACTIC_USES_REMAINING"
    NO_OPENING_BID = "NO_OPENING_BID"
    INVALID_TURN = "INVALID_TURN"
    ALREADY_RESOLVED = "ALREADY_RESOLVED"
    INVALID_AMOUNT = "INVALID_AMOUNT"


# Caller-misuse codes: degrade to silent no-ops, never toasted
SILENT_REJECTIONS = frozenset({RejectionCode.INVALID_TURN, RejectionCode.ALREADY_RESOLVED})


class EffectType(Enum):
    BARK = "bark"
    TOAST = "toast"


class ToastLevel(Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class IntentType(Enum):
    """Changes the caller applies atomically to persisted player state."""
    DEBIT_MONEY = "debit_money"
    GRANT_XP = "grant_xp"


@dataclass(frozen=True)
class Action:
    """
    A complete action to be applied to an auction session.

    Use the factories rather than building payloads by hand.
    """
    action_type: ActionType
    amount: int | None = None

    @classmethod
    def bid(cls, amount: int | None = None) -> Action:
        """Factory for a normal bid (defaults to the configured increment)."""
        return cls(action_type=ActionType.BID, amount=amount)

    @classmethod
    def power_bid(cls, amount: int | None = None) -> Action:
        """Factory for a power bid (defaults to the configured power increment)."""
        return cls(action_type=ActionType.POWER_BID, amount=amount)

    @classmethod
    def kick_tires(cls) -> Action:
        return cls(action_type=ActionType.KICK_TIRES)

    @classmethod
    def stall(cls) -> Action:
        return cls(action_type=ActionType.STALL)

    @classmethod
    def quit(cls) -> Action:
        return cls(action_type=ActionType.QUIT)

    @classmethod
    def rival_turn(cls) -> Action:
        return cls(action_type=ActionType.RIVAL_TURN)


@dataclass(frozen=True)
class LogEntry:
    """One line of the auction log."""
    text: str
    actor: Actor


@dataclass(frozen=True)
class Effect:
    """
    A presentation cue.

    Barks carry a trigger id the presentation layer turns into a line;
    toasts carry a ready-to-display message.
    """
    effect_type: EffectType
    speaker: Actor | None = None
    trigger: str | None = None
    message: str | None = None
    level: ToastLevel = ToastLevel.INFO

    @classmethod
    def bark(cls, speaker: Actor, trigger: str) -> Effect:
        return cls(effect_type=EffectType.BARK, speaker=speaker, trigger=trigger)

    @classmethod
    def toast(cls, message: str, level: ToastLevel = ToastLevel.INFO) -> Effect:
        return cls(effect_type=EffectType.TOAST, message=message, level=level)


@dataclass(frozen=True)
class Intent:
    """A requested change to the player's persisted state."""
    intent_type: IntentType
    amount: int
    skill: str | None = None


@dataclass(frozen=True)
class Rejection:
    """Reason an action was not applied."""
    code: RejectionCode
    message: str

    @property
    def is_silent(self) -> bool:
        return self.code in SILENT_REJECTIONS


@dataclass
class TransitionResult:
    """
    Result of applying an action.

    Contains:
    - The session after the action (the untouched input when rejected)
    - The resolution, if the auction ended
    - Log lines, presentation effects and state intents
    """
    session: AuctionSession
    accepted: bool = True
    rejection: Rejection | None = None

    log_entries: list[LogEntry] = field(default_factory=list)
    effects: list[Effect] = field(default_factory=list)
    intents: list[Intent] = field(default_factory=list)

    @property
    def resolved(self) -> Resolution | None:
        return self.session.outcome if self.accepted else None

    @property
    def rival_turn_pending(self) -> bool:
        """True when the caller should run the rival's turn next."""
        return self.accepted and not self.session.is_resolved and not self.session.is_player_turn

    @property
    def bark_triggers(self) -> list[str]:
        return [e.trigger for e in self.effects if e.effect_type == EffectType.BARK and e.trigger]

    def log(self, text: str, actor: Actor) -> TransitionResult:
        self.log_entries.append(LogEntry(text=text, actor=actor))
        return self

    def bark(self, speaker: Actor, trigger: str) -> TransitionResult:
        self.effects.append(Effect.bark(speaker, trigger))
        return self

    @classmethod
    def rejected(
        cls,
        session: AuctionSession,
        code: RejectionCode,
        message: str,
        level: ToastLevel = ToastLevel.ERROR,
    ) -> TransitionResult:
        """Create a no-op result; silent codes carry no toast."""
        rejection = Rejection(code=code, message=message)
        effects = [] if rejection.is_silent else [Effect.toast(message, level)]
        return cls(session=session, accepted=False, rejection=rejection, effects=effects)

    def to_dict(self) -> dict[str, Any]:
        """Flatten to plain data for logging and JSON transport."""
        outcome = self.resolved
        return {
            "accepted": self.accepted,
            "rejection": (
                {"code": self.rejection.code.value, "message": self.rejection.message}
                if self.rejection else None
            ),
            "resolved": (
                {
                    "player_won": outcome.player_won,
                    "message": outcome.message,
                    "bark_trigger": outcome.bark_trigger,
                }
                if outcome else None
            ),
            "rival_turn_pending": self.rival_turn_pending,
            "log_entries": [{"text": e.text, "actor": e.actor.value} for e in self.log_entries],
            "effects": [
                {
                    "type": e.effect_type.value,
                    "speaker": e.speaker.value if e.speaker else None,
                    "trigger": e.trigger,
                    "message": e.message,
                    "level": e.level.value,
                }
                for e in self.effects
            ],
            "intents": [
                {"type": i.intent_type.value, "amount": i.amount, "skill": i.skill}
                for i in self.intents
            ],
        }
