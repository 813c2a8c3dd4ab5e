"""
Scheduling Policy

Decides whether a meeting can be added to an account.

Rules, checked in order, first match wins:
1. BASE account already holding ``base_meeting_limit`` meetings -> rejected
2. PREMIUM account already holding ``premium_meeting_limit`` meetings -> rejected
3. A meeting already booked at the same date and time -> rejected
4. Otherwise the meeting is appended to the account

DESIGN DECISION: The quotas are called "daily" in user messages, but they
count every meeting held in the session, not meetings per calendar day.
That is how the scheduler has always behaved and it is kept as is.

The policy is pure. Persisting the organizer after an accepted meeting is
the caller's job (see ``MeetingFlow``).
"""

from typing import Optional

from src.config import PlanSettings, get_settings
from src.models.account import Account, PlanTier
from src.models.meeting import Meeting
from src.models.results import RejectionReason, ScheduleResult


class SchedulingPolicy:
    """Applies plan quotas and slot conflicts to new meetings."""

    def __init__(self, plan_settings: Optional[PlanSettings] = None):
        self._settings = plan_settings or get_settings().plans

    def meeting_limit_for(self, plan_tier: PlanTier) -> int:
        if plan_tier == PlanTier.PREMIUM:
            return self._settings.premium_meeting_limit
        return self._settings.base_meeting_limit

    def check(self, account: Account, meeting: Meeting) -> ScheduleResult:
        """Evaluate the rules without touching the account."""
        held = len(account.meetings)

        if account.plan_tier == PlanTier.BASE and held >= self._settings.base_meeting_limit:
            return ScheduleResult.reject(
                meeting,
                RejectionReason.BASE_LIMIT,
                limit=self._settings.base_meeting_limit,
            )

        if account.plan_tier == PlanTier.PREMIUM and held >= self._settings.premium_meeting_limit:
            return ScheduleResult.reject(
                meeting,
                RejectionReason.PREMIUM_LIMIT,
                limit=self._settings.premium_meeting_limit,
            )

        if any(existing.same_slot(meeting) for existing in account.meetings):
            return ScheduleResult.reject(meeting, RejectionReason.SLOT_CONFLICT)

        return ScheduleResult.accept(meeting)

    def try_schedule(self, account: Account, meeting: Meeting) -> ScheduleResult:
        """Evaluate the rules and append the meeting when accepted."""
        result = self.check(account, meeting)
        if result.accepted:
            account.meetings.append(meeting)
        return result
