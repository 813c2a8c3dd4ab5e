"""
Result Models

Parsers and the scheduling policy report outcomes as values instead of
raising. The console controller reads these to decide what to print.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

from src.models.meeting import Meeting


class ParseResult(BaseModel):
    """
    Tagged outcome of parsing one piece of user input.

    Exactly one of ``value`` (when ``ok``) or ``error`` is meaningful.
    """

    ok: bool = Field(
        ...,
        description="Did the input parse?"
    )
    field: str = Field(
        ...,
        description="Name of the input being parsed"
    )
    value: Any = None
    error: Optional[str] = Field(
        default=None,
        description="Why the input was refused"
    )

    @classmethod
    def success(cls, field: str, value: Any) -> "ParseResult":
        return cls(ok=True, field=field, value=value)

    @classmethod
    def failure(cls, field: str, error: str) -> "ParseResult":
        return cls(ok=False, field=field, error=error)


class RejectionReason(str, Enum):
    """Why the scheduling policy refused a meeting."""
    BASE_LIMIT = "base_limit"
    PREMIUM_LIMIT = "premium_limit"
    SLOT_CONFLICT = "slot_conflict"


REJECTION_MESSAGES = {
    RejectionReason.BASE_LIMIT: "Base-plan daily limit reached: BASE accounts can only book {limit} meetings.",
    RejectionReason.PREMIUM_LIMIT: "Premium-plan daily limit reached: PREMIUM accounts can only book {limit} meetings.",
    RejectionReason.SLOT_CONFLICT: "Conflicting date/time: another meeting is already booked at that slot.",
}


class ScheduleResult(BaseModel):
    """Outcome of trying to add a meeting to an account."""

    accepted: bool
    meeting: Meeting
    reason: Optional[RejectionReason] = None
    limit: Optional[int] = Field(
        default=None,
        description="Quota that was hit, for limit rejections"
    )

    @classmethod
    def accept(cls, meeting: Meeting) -> "ScheduleResult":
        return cls(accepted=True, meeting=meeting)

    @classmethod
    def reject(
        cls,
        meeting: Meeting,
        reason: RejectionReason,
        limit: Optional[int] = None,
    ) -> "ScheduleResult":
        return cls(accepted=False, meeting=meeting, reason=reason, limit=limit)

    @property
    def message(self) -> str:
        if self.accepted:
            return "Meeting scheduled successfully."
        return REJECTION_MESSAGES[self.reason].format(limit=self.limit)
