"""
Audit Logger

DESIGN DECISION: Every significant action in a session is logged.
This provides:
1. Traceability of logins and account changes
2. Debugging capability when the accounts file misbehaves
3. A record of why meetings were refused

The audit logger:
- Writes structured JSON lines to stderr, away from the menu on stdout
- Never persists events (the accounts file is the only stored state)
- Supports a correlation ID so one console session can be traced
"""

import logging
import sys
from collections import deque
from typing import Optional
from uuid import UUID, uuid4

import structlog

from src.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

# How many recent events an AuditLogger keeps in memory
RECENT_EVENTS_LIMIT = 100


def configure_logging(level: str = "WARNING") -> None:
    """Route stdlib logging (and therefore structlog) to stderr at ``level``."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.WARNING),
        force=True,
    )


class AuditLogger:
    """
    Central audit logging service.

    One instance per console session; every event it emits carries the
    session's correlation ID.
    """

    def __init__(self, correlation_id: Optional[UUID] = None):
        self._logger = structlog.get_logger("audit")
        self._correlation_id = correlation_id or create_correlation_id()
        self._recent: deque[AuditEvent] = deque(maxlen=RECENT_EVENTS_LIMIT)

    @property
    def correlation_id(self) -> UUID:
        return self._correlation_id

    @property
    def recent_events(self) -> list[AuditEvent]:
        """The last ``RECENT_EVENTS_LIMIT`` events logged, oldest first."""
        return list(self._recent)

    def log(self, event: AuditEvent) -> None:
        """Log an audit event at a level matching its severity."""
        self._recent.append(event)
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def log_login_succeeded(self, username: str) -> None:
        self.log(AuditEventBuilder.login_succeeded(username, self._correlation_id))

    def log_login_failed(self, username: str, matches: int) -> None:
        self.log(AuditEventBuilder.login_failed(username, matches, self._correlation_id))

    def log_session_ended(self, username: str) -> None:
        self.log(AuditEventBuilder.session_ended(username, self._correlation_id))

    def log_account_created(
        self,
        username: str,
        plan_tier: str,
        replaced_existing: bool,
    ) -> None:
        self.log(AuditEventBuilder.account_created(
            username=username,
            plan_tier=plan_tier,
            replaced_existing=replaced_existing,
            correlation_id=self._correlation_id,
        ))

    def log_account_creation_failed(self, field: str, error: str) -> None:
        self.log(AuditEventBuilder.account_creation_failed(field, error, self._correlation_id))

    def log_plan_changed(self, username: str, old_plan: str, new_plan: str) -> None:
        self.log(AuditEventBuilder.plan_changed(
            username=username,
            old_plan=old_plan,
            new_plan=new_plan,
            correlation_id=self._correlation_id,
        ))

    def log_password_changed(self, username: str) -> None:
        self.log(AuditEventBuilder.password_changed(username, self._correlation_id))

    def log_meeting_scheduled(
        self,
        username: str,
        date: str,
        time: str,
        pin: str,
        meeting_count: int,
    ) -> None:
        self.log(AuditEventBuilder.meeting_scheduled(
            username=username,
            date=date,
            time=time,
            pin=pin,
            meeting_count=meeting_count,
            correlation_id=self._correlation_id,
        ))

    def log_meeting_rejected(self, username: str, reason: str, date: str, time: str) -> None:
        self.log(AuditEventBuilder.meeting_rejected(
            username=username,
            reason=reason,
            date=date,
            time=time,
            correlation_id=self._correlation_id,
        ))

    def log_input_rejected(
        self,
        username: Optional[str],
        operation: str,
        field: str,
        error: str,
    ) -> None:
        self.log(AuditEventBuilder.input_rejected(
            username=username,
            operation=operation,
            field=field,
            error=error,
            correlation_id=self._correlation_id,
        ))

    def log_store_save_failed(self, username: Optional[str], operation: str) -> None:
        self.log(AuditEventBuilder.store_save_failed(username, operation, self._correlation_id))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    One is created per console session.
    """
    return uuid4()
