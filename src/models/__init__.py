"""
Data Models Package

This package contains all Pydantic models used in the Meeting Scheduler.
Account, Meeting and the result models form the pure domain layer:
nothing in here reads or writes files.
"""

from src.models.account import Account, PlanTier
from src.models.meeting import Meeting, MeetingStatus, generate_pin
from src.models.results import (
    ParseResult,
    REJECTION_MESSAGES,
    RejectionReason,
    ScheduleResult,
)
from src.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Domain models
    "Account",
    "Meeting",
    "MeetingStatus",
    "PlanTier",
    "generate_pin",
    # Results
    "ParseResult",
    "REJECTION_MESSAGES",
    "RejectionReason",
    "ScheduleResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
