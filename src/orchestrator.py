"""
Main Orchestrator for Meeting Scheduler

This module ties together all the components and defines the flows the
console menu drives:
1. Accounts (login, create, change plan, change password)
2. Meetings (schedule, list meetings, list contacts)

DESIGN DECISION: The orchestrator is the adapter layer. It:
- Turns raw console text into domain values through the parsers
- Calls the pure domain layer (Account, SchedulingPolicy)
- Triggers persistence AFTER the in-memory change is complete
- Audits every step

Flows never print. They return outcomes and the console decides how to
show them. Every mutation is all-or-nothing in memory: a failed file write
is logged but does not undo the change.
"""

from datetime import date, time
from typing import Optional

from src.audit import AuditLogger
from src.config import Settings, get_settings
from src.models.account import Account
from src.models.meeting import Meeting, PIN_UPPER_BOUND
from src.models.results import ParseResult, ScheduleResult
from src.scheduling import SchedulingPolicy
from src.services.storage import AccountStore, CsvAccountStorage
from src.validation import parse_plan, parse_username


ACCOUNT_CREATION_ERROR = "Error creating the account. Make sure the data entered is valid."
PLAN_CHANGE_ERROR = "Error changing the plan. Make sure you entered a valid plan."


class AccountFlow:
    """
    Orchestrates account operations.

    Plan changes rewrite the whole accounts file; password changes go
    through the single-account upsert path.
    """

    def __init__(
        self,
        store: AccountStore,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._store = store
        self._audit_logger = audit_logger or AuditLogger()

    @property
    def store(self) -> AccountStore:
        return self._store

    def login(self, username: str, password: str) -> Optional[Account]:
        """
        Authenticate against the loaded accounts.

        Exactly one account must match both username and password digest.
        """
        matches = self._store.matching_accounts(username, password)
        if len(matches) != 1:
            self._audit_logger.log_login_failed(username, len(matches))
            return None

        self._audit_logger.log_login_succeeded(username)
        return matches[0]

    def end_session(self, account: Account) -> None:
        self._audit_logger.log_session_ended(account.username)

    def create_account(
        self,
        username: str,
        password: str,
        plan_text: str,
    ) -> tuple[bool, str]:
        """
        Create an account and write the accounts file.

        The new account is NOT logged in.

        Returns:
            (success, message)
        """
        username_result = parse_username(username)
        plan_result = parse_plan(plan_text)
        for result in (username_result, plan_result):
            if not result.ok:
                self._audit_logger.log_account_creation_failed(result.field, result.error)
                return False, ACCOUNT_CREATION_ERROR

        account = Account.create(
            username=username_result.value,
            password=password,
            plan_tier=plan_result.value,
        )
        saved, replaced = self._store.add(account)

        self._audit_logger.log_account_created(
            username=account.username,
            plan_tier=account.plan_tier.value,
            replaced_existing=replaced,
        )
        if not saved:
            self._audit_logger.log_store_save_failed(account.username, "account creation")

        return True, "New account created successfully."

    def change_plan(self, account: Account, plan_text: str) -> tuple[bool, str]:
        """
        Switch the account to another plan and rewrite the accounts file.

        Returns:
            (success, message)
        """
        result = parse_plan(plan_text)
        if not result.ok:
            self._audit_logger.log_input_rejected(
                account.username, "change plan", result.field, result.error
            )
            return False, PLAN_CHANGE_ERROR

        old_plan = account.plan_tier
        account.change_plan(result.value)
        self._audit_logger.log_plan_changed(
            account.username, old_plan.value, account.plan_tier.value
        )

        if not self._store.flush():
            self._audit_logger.log_store_save_failed(account.username, "plan change")

        return True, "Plan changed successfully."

    def change_password(self, account: Account, new_password: str) -> tuple[bool, str]:
        """
        Rehash the password and upsert the account.

        Returns:
            (success, message)
        """
        account.change_password(new_password)
        self._audit_logger.log_password_changed(account.username)

        if not self._store.persist(account):
            self._audit_logger.log_store_save_failed(account.username, "password change")

        return True, "Password changed successfully."


class MeetingFlow:
    """
    Orchestrates meeting operations.

    Flow for scheduling:
    1. Build the meeting with the organizer as first invitee
    2. Ask the scheduling policy (quota, then slot conflict)
    3. On acceptance, upsert the organizer's account record

    The meeting itself is never written anywhere.
    """

    def __init__(
        self,
        store: AccountStore,
        policy: Optional[SchedulingPolicy] = None,
        audit_logger: Optional[AuditLogger] = None,
        pin_upper_bound: int = PIN_UPPER_BOUND,
    ):
        self._store = store
        self._policy = policy or SchedulingPolicy()
        self._audit_logger = audit_logger or AuditLogger()
        self._pin_upper_bound = pin_upper_bound

    def schedule_meeting(
        self,
        account: Account,
        date: date,
        time: time,
        title: str,
        duration_minutes: int,
        notes: Optional[str] = None,
    ) -> ScheduleResult:
        """Build a meeting and try to add it to the account."""
        meeting = Meeting.organized_by(
            organizer=account.username,
            date=date,
            time=time,
            title=title,
            duration_minutes=duration_minutes,
            notes=notes,
            pin_upper_bound=self._pin_upper_bound,
        )

        result = self._policy.try_schedule(account, meeting)

        if not result.accepted:
            self._audit_logger.log_meeting_rejected(
                username=account.username,
                reason=result.reason.value,
                date=meeting.date.isoformat(),
                time=meeting.time.isoformat(),
            )
            return result

        self._audit_logger.log_meeting_scheduled(
            username=account.username,
            date=meeting.date.isoformat(),
            time=meeting.time.isoformat(),
            pin=meeting.pin,
            meeting_count=len(account.meetings),
        )
        if not self._store.persist(account):
            self._audit_logger.log_store_save_failed(account.username, "meeting scheduling")

        return result

    def report_invalid_input(self, account: Account, result: ParseResult) -> None:
        """Audit a scheduling attempt abandoned because of bad input."""
        self._audit_logger.log_input_rejected(
            account.username, "schedule meeting", result.field, result.error
        )

    def list_meetings(self, account: Account) -> list[Meeting]:
        return account.list_meetings()

    def list_contacts(self, account: Account) -> list[str]:
        return account.list_contacts()


def create_app_components(
    settings: Optional[Settings] = None,
    audit_logger: Optional[AuditLogger] = None,
) -> tuple[AccountFlow, MeetingFlow, AccountStore]:
    """
    Factory function to create all application components.

    The store is returned unloaded; call ``store.load()`` before use.

    Returns:
        (account_flow, meeting_flow, store)
    """
    settings = settings or get_settings()
    audit_logger = audit_logger or AuditLogger()

    storage_settings = settings.storage
    storage = CsvAccountStorage(
        path=storage_settings.accounts_file,
        retry_attempts=storage_settings.write_retry_attempts,
    )
    store = AccountStore(storage)

    account_flow = AccountFlow(store=store, audit_logger=audit_logger)
    meeting_flow = MeetingFlow(
        store=store,
        policy=SchedulingPolicy(settings.plans),
        audit_logger=audit_logger,
        pin_upper_bound=settings.app.pin_upper_bound,
    )

    return account_flow, meeting_flow, store
