"""
Audit Models for Meeting Scheduler

Every significant action in a session produces an audit event:
logins, account creation, scheduling decisions, settings changes and
persistence failures. Events are written to the diagnostic log only.

DESIGN DECISION: Events describe what happened, never secrets. Password
digests and plaintexts never appear in ``details``.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Session
    LOGIN_SUCCEEDED = "login_succeeded"
    LOGIN_FAILED = "login_failed"
    SESSION_ENDED = "session_ended"

    # Accounts
    ACCOUNT_CREATED = "account_created"
    ACCOUNT_CREATION_FAILED = "account_creation_failed"
    PLAN_CHANGED = "plan_changed"
    PASSWORD_CHANGED = "password_changed"

    # Meetings
    MEETING_SCHEDULED = "meeting_scheduled"
    MEETING_REJECTED = "meeting_rejected"

    # Input
    INPUT_REJECTED = "input_rejected"

    # Persistence
    STORE_SAVE_FAILED = "store_save_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Which account is this about?
    username: Optional[str] = Field(
        default=None,
        description="Account the event relates to"
    )

    # Correlation - all events of one console session share it
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="Session identifier"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "username": self.username,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.login_succeeded("alice", correlation_id)
        event = AuditEventBuilder.meeting_rejected("alice", "slot_conflict", ...)
    """

    @staticmethod
    def login_succeeded(username: str, correlation_id: Optional[UUID]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOGIN_SUCCEEDED,
            username=username,
            correlation_id=correlation_id,
            description=f"User logged in: {username}",
            is_user_action=True,
        )

    @staticmethod
    def login_failed(
        username: str,
        matches: int,
        correlation_id: Optional[UUID],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOGIN_FAILED,
            severity=AuditSeverity.WARNING,
            username=username,
            correlation_id=correlation_id,
            description=f"Login refused for: {username}",
            details={"matching_accounts": matches},
            is_user_action=True,
        )

    @staticmethod
    def session_ended(username: str, correlation_id: Optional[UUID]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SESSION_ENDED,
            username=username,
            correlation_id=correlation_id,
            description=f"Session ended for: {username}",
        )

    @staticmethod
    def account_created(
        username: str,
        plan_tier: str,
        replaced_existing: bool,
        correlation_id: Optional[UUID],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ACCOUNT_CREATED,
            severity=AuditSeverity.WARNING if replaced_existing else AuditSeverity.INFO,
            username=username,
            correlation_id=correlation_id,
            description=f"Account created: {username}",
            details={
                "plan_tier": plan_tier,
                "replaced_existing": replaced_existing,
            },
            is_user_action=True,
        )

    @staticmethod
    def account_creation_failed(
        field: str,
        error: str,
        correlation_id: Optional[UUID],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ACCOUNT_CREATION_FAILED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"Account creation refused: invalid {field}",
            details={"field": field, "error": error},
            is_user_action=True,
        )

    @staticmethod
    def plan_changed(
        username: str,
        old_plan: str,
        new_plan: str,
        correlation_id: Optional[UUID],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PLAN_CHANGED,
            username=username,
            correlation_id=correlation_id,
            description=f"Plan changed from {old_plan} to {new_plan}",
            details={"old_plan": old_plan, "new_plan": new_plan},
            is_user_action=True,
        )

    @staticmethod
    def password_changed(username: str, correlation_id: Optional[UUID]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PASSWORD_CHANGED,
            username=username,
            correlation_id=correlation_id,
            description="Password changed",
            is_user_action=True,
        )

    @staticmethod
    def meeting_scheduled(
        username: str,
        date: str,
        time: str,
        pin: str,
        meeting_count: int,
        correlation_id: Optional[UUID],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.MEETING_SCHEDULED,
            username=username,
            correlation_id=correlation_id,
            description=f"Meeting scheduled on {date} at {time}",
            details={
                "date": date,
                "time": time,
                "pin": pin,
                "meeting_count": meeting_count,
            },
            is_user_action=True,
        )

    @staticmethod
    def meeting_rejected(
        username: str,
        reason: str,
        date: str,
        time: str,
        correlation_id: Optional[UUID],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.MEETING_REJECTED,
            severity=AuditSeverity.WARNING,
            username=username,
            correlation_id=correlation_id,
            description=f"Meeting rejected: {reason}",
            details={"reason": reason, "date": date, "time": time},
            is_user_action=True,
        )

    @staticmethod
    def input_rejected(
        username: Optional[str],
        operation: str,
        field: str,
        error: str,
        correlation_id: Optional[UUID],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INPUT_REJECTED,
            severity=AuditSeverity.WARNING,
            username=username,
            correlation_id=correlation_id,
            description=f"Invalid {field} during {operation}",
            details={"operation": operation, "field": field, "error": error},
            is_user_action=True,
        )

    @staticmethod
    def store_save_failed(
        username: Optional[str],
        operation: str,
        correlation_id: Optional[UUID],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            username=username,
            correlation_id=correlation_id,
            description=f"Accounts file was not updated after {operation}",
            details={"operation": operation},
        )
