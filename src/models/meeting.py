"""
Meeting Model

A meeting is a scheduled slot on an organizer's account. Meetings only live
for the current session: they are never written to the accounts file.

DESIGN DECISION: The PIN is decorative. It is drawn at random with no check
against other meetings, so two meetings can share a PIN.
"""

import datetime as dt
import random
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


PIN_PREFIX = "PIN-"
PIN_UPPER_BOUND = 10000


class MeetingStatus(str, Enum):
    """
    Meeting availability.

    Every meeting starts AVAILABLE. Nothing moves it to OCCUPIED yet.
    """
    AVAILABLE = "AVAILABLE"
    OCCUPIED = "OCCUPIED"


def generate_pin(upper_bound: int = PIN_UPPER_BOUND) -> str:
    """Draw a ``PIN-<n>`` code with ``n`` in ``0..upper_bound`` inclusive."""
    return f"{PIN_PREFIX}{random.randint(0, upper_bound)}"


def _format_time(value: dt.time) -> str:
    if value.second == 0 and value.microsecond == 0:
        return value.isoformat(timespec="minutes")
    return value.isoformat()


class Meeting(BaseModel):
    """
    A meeting scheduled by one organizer.

    The organizer's username is always the first invitee. There is no
    way to add further invitees.
    """

    date: dt.date = Field(
        ...,
        description="Calendar date of the meeting"
    )
    time: dt.time = Field(
        ...,
        description="Start time of the meeting"
    )
    title: str = Field(
        ...,
        description="Free-text meeting title"
    )
    pin: str = Field(
        default_factory=generate_pin,
        description="Access code, not guaranteed unique"
    )
    duration_minutes: int = Field(
        ...,
        description="Duration in minutes as entered by the user"
    )
    notes: Optional[str] = Field(
        default=None,
        description="Optional notes"
    )
    invitees: list[str] = Field(
        default_factory=list,
        description="Invitee usernames, organizer first"
    )
    status: MeetingStatus = Field(
        default=MeetingStatus.AVAILABLE,
        description="Meeting status"
    )

    @classmethod
    def organized_by(
        cls,
        organizer: str,
        date: dt.date,
        time: dt.time,
        title: str,
        duration_minutes: int,
        notes: Optional[str] = None,
        pin_upper_bound: int = PIN_UPPER_BOUND,
    ) -> "Meeting":
        """Create a meeting with the organizer seeded as first invitee."""
        return cls(
            date=date,
            time=time,
            title=title,
            pin=generate_pin(pin_upper_bound),
            duration_minutes=duration_minutes,
            notes=notes,
            invitees=[organizer],
        )

    def same_slot(self, other: "Meeting") -> bool:
        """True when both meetings start on the same date at the same time."""
        return self.date == other.date and self.time == other.time

    def __str__(self) -> str:
        return (
            f"Meeting(date={self.date.isoformat()}, "
            f"time={_format_time(self.time)}, "
            f"title='{self.title}', "
            f"pin='{self.pin}', "
            f"notes='{self.notes}', "
            f"duration={self.duration_minutes}, "
            f"invitees={self.invitees}, "
            f"status={self.status.value})"
        )
