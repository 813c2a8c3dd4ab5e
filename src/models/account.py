"""
Account Model

An account is a registered user: credentials, a plan tier and the meetings
scheduled during the current session.

DESIGN DECISION: This module is pure domain logic. Changing a plan or a
password only mutates the object; writing the accounts file is the job of
the storage layer, called by the flows in ``src.orchestrator``.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.auth import hash_password, verify_password
from src.models.meeting import Meeting


FORBIDDEN_USERNAME_CHARS = (",", "\r", "\n")


class PlanTier(str, Enum):
    """
    Subscription plan.

    The value is exactly what is written in the third column of the
    accounts file.
    """
    BASE = "BASE"
    PREMIUM = "PREMIUM"


class Account(BaseModel):
    """
    A registered user.

    Only ``username``, ``password_digest`` and ``plan_tier`` survive a
    restart. ``meetings`` is session state and is excluded from dumps.
    """
    model_config = ConfigDict(validate_assignment=True)

    username: str = Field(
        ...,
        description="Unique account name"
    )
    password_digest: str = Field(
        ...,
        description="Hex digest of the current password"
    )
    plan_tier: PlanTier = Field(
        default=PlanTier.BASE,
        description="Plan governing the meeting quota"
    )
    meetings: list[Meeting] = Field(
        default_factory=list,
        exclude=True,
        description="Meetings scheduled in this session, in order"
    )

    @field_validator('username')
    @classmethod
    def validate_username(cls, v: str) -> str:
        """The accounts file has no escaping, so separators are refused."""
        if any(ch in v for ch in FORBIDDEN_USERNAME_CHARS):
            raise ValueError("Username cannot contain commas or line breaks")
        return v

    @classmethod
    def create(cls, username: str, password: str, plan_tier: PlanTier) -> "Account":
        """Build a new account from a plaintext password."""
        return cls(
            username=username,
            password_digest=hash_password(password),
            plan_tier=plan_tier,
        )

    def change_plan(self, plan_tier: PlanTier) -> None:
        self.plan_tier = plan_tier

    def change_password(self, new_password: str) -> None:
        self.password_digest = hash_password(new_password)

    def check_password(self, password: str) -> bool:
        return verify_password(password, self.password_digest)

    def list_meetings(self) -> list[Meeting]:
        """Meetings in the order they were scheduled."""
        return list(self.meetings)

    def list_contacts(self) -> list[str]:
        """
        Distinct invitee usernames across all meetings.

        First-seen order is kept. The account itself is included
        because it is the first invitee of every meeting it organizes.
        """
        seen = dict.fromkeys(
            invitee
            for meeting in self.meetings
            for invitee in meeting.invitees
        )
        return list(seen)

    def to_record(self) -> list[str]:
        """Fields of the accounts file line, in column order."""
        return [self.username, self.password_digest, self.plan_tier.value]
