"""Tests for the scheduling policy."""

from datetime import date, time

import pytest

from src.config import PlanSettings
from src.models import Account, Meeting, PlanTier, RejectionReason
from src.scheduling import SchedulingPolicy


def meeting_at(day: int, hour: int, title: str = "Sync") -> Meeting:
    return Meeting.organized_by(
        organizer="alice",
        date=date(2024, 5, day),
        time=time(hour, 0),
        title=title,
        duration_minutes=30,
    )


@pytest.fixture
def base_account():
    return Account.create("alice", "pw123", PlanTier.BASE)


@pytest.fixture
def premium_account():
    return Account.create("alice", "pw123", PlanTier.PREMIUM)


class TestQuotas:
    """Tests for the per-plan meeting limits."""

    def test_base_accepts_two(self, policy, base_account):
        assert policy.try_schedule(base_account, meeting_at(1, 9)).accepted
        assert policy.try_schedule(base_account, meeting_at(1, 10)).accepted
        assert len(base_account.meetings) == 2

    def test_base_rejects_third(self, policy, base_account):
        """Test that every attempt past the cap is rejected."""
        policy.try_schedule(base_account, meeting_at(1, 9))
        policy.try_schedule(base_account, meeting_at(1, 10))

        for hour in (11, 12, 13):
            result = policy.try_schedule(base_account, meeting_at(1, hour))
            assert result.accepted is False
            assert result.reason == RejectionReason.BASE_LIMIT
            assert result.limit == 2
        assert len(base_account.meetings) == 2

    def test_premium_accepts_five_rejects_sixth(self, policy, premium_account):
        for hour in range(9, 14):
            assert policy.try_schedule(premium_account, meeting_at(1, hour)).accepted

        result = policy.try_schedule(premium_account, meeting_at(1, 15))
        assert result.reason == RejectionReason.PREMIUM_LIMIT
        assert len(premium_account.meetings) == 5

    def test_quota_is_not_per_day(self, policy, base_account):
        """Test that meetings on different days still count against the cap."""
        policy.try_schedule(base_account, meeting_at(1, 9))
        policy.try_schedule(base_account, meeting_at(2, 9))
        result = policy.try_schedule(base_account, meeting_at(3, 9))
        assert result.reason == RejectionReason.BASE_LIMIT

    def test_plan_upgrade_lifts_cap(self, policy, base_account):
        policy.try_schedule(base_account, meeting_at(1, 9))
        policy.try_schedule(base_account, meeting_at(1, 10))
        assert not policy.try_schedule(base_account, meeting_at(1, 11)).accepted

        base_account.change_plan(PlanTier.PREMIUM)
        for hour in (11, 12, 13):
            assert policy.try_schedule(base_account, meeting_at(1, hour)).accepted
        assert not policy.try_schedule(base_account, meeting_at(1, 14)).accepted
        assert len(base_account.meetings) == 5

    def test_custom_limits(self, base_account):
        policy = SchedulingPolicy(PlanSettings(base_meeting_limit=1, premium_meeting_limit=5))
        assert policy.try_schedule(base_account, meeting_at(1, 9)).accepted
        result = policy.try_schedule(base_account, meeting_at(1, 10))
        assert result.reason == RejectionReason.BASE_LIMIT
        assert result.limit == 1

    def test_meeting_limit_for(self, policy):
        assert policy.meeting_limit_for(PlanTier.BASE) == 2
        assert policy.meeting_limit_for(PlanTier.PREMIUM) == 5


class TestConflicts:
    """Tests for same date/time conflicts."""

    def test_same_slot_rejected(self, policy, premium_account):
        policy.try_schedule(premium_account, meeting_at(1, 10, "Standup"))
        result = policy.try_schedule(premium_account, meeting_at(1, 10, "Other"))
        assert result.accepted is False
        assert result.reason == RejectionReason.SLOT_CONFLICT
        assert len(premium_account.meetings) == 1

    def test_same_time_other_day_accepted(self, policy, premium_account):
        policy.try_schedule(premium_account, meeting_at(1, 10))
        assert policy.try_schedule(premium_account, meeting_at(2, 10)).accepted

    def test_quota_checked_before_conflict(self, policy, base_account):
        """Test that a full BASE account reports the limit, not the conflict."""
        policy.try_schedule(base_account, meeting_at(1, 9))
        policy.try_schedule(base_account, meeting_at(1, 10))
        result = policy.try_schedule(base_account, meeting_at(1, 10))
        assert result.reason == RejectionReason.BASE_LIMIT

    def test_check_does_not_mutate(self, policy, base_account):
        result = policy.check(base_account, meeting_at(1, 9))
        assert result.accepted is True
        assert base_account.meetings == []

    def test_accepted_meeting_is_the_same_object(self, policy, base_account):
        meeting = meeting_at(1, 9)
        result = policy.try_schedule(base_account, meeting)
        assert result.meeting is meeting
        assert base_account.meetings[-1] is meeting
