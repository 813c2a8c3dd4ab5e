"""
Console Frontend for Meeting Scheduler

This is the interactive menu the user works with.

Run it with ``python -m app.main`` (or the ``meeting-scheduler`` script).

Session states:
    LoggedOut -> (log in | create account) -> LoggedIn -> menu loop -> Exit

DESIGN PRINCIPLES:
1. The console only prompts and prints; all decisions live in the flows
2. Bad input abandons the current operation with a clear message, no retry
3. Creating an account does not log it in; the program exits afterwards
4. Diagnostics go to stderr, the conversation stays on stdout
"""

import sys
from typing import Callable, Optional

import structlog

from src.auth import HashUnavailableError, ensure_hash_available
from src.audit import AuditLogger, configure_logging
from src.config import get_settings, validate_all_settings
from src.models.account import Account
from src.orchestrator import AccountFlow, MeetingFlow, create_app_components
from src.services.storage import CorruptStoreError
from src.validation import (
    parse_date,
    parse_duration,
    parse_menu_option,
    parse_time,
    parse_yes_no,
)


WELCOME = "Welcome to the online meetings application!"
FAREWELL = "Thanks for using the application. Goodbye!"
SCHEDULE_ERROR = "Error scheduling the meeting. Make sure you entered valid data."

EXIT_OPTION = 6

MENU = """
--- Menu ---
1. Schedule meeting
2. List meetings
3. List contacts
4. Change plan
5. Change password
6. Exit"""


class ConsoleApp:
    """
    Interactive console session.

    ``input_fn`` and ``output_fn`` default to ``input`` and ``print`` and
    can be replaced to drive a session from a script.
    """

    def __init__(
        self,
        account_flow: AccountFlow,
        meeting_flow: MeetingFlow,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ):
        self._accounts = account_flow
        self._meetings = meeting_flow
        self._input = input_fn
        self._output = output_fn

    def _ask(self, prompt: str) -> str:
        return self._input(prompt)

    def _say(self, text: str = "") -> None:
        self._output(text)

    # =========================================================================
    # SESSION
    # =========================================================================

    def run(self) -> int:
        """Run one session. Returns the process exit code."""
        try:
            account = self.start_session()
        except EOFError:
            self._say()
            return 0

        if account is None:
            return 0

        try:
            self.menu_loop(account)
        except EOFError:
            self._say()
            self._say("Exiting the program.")

        self._accounts.end_session(account)
        self._say(FAREWELL)
        return 0

    def start_session(self) -> Optional[Account]:
        """
        Top-level prompt: log in or create an account.

        Returns the logged-in account, or None when the program should exit.
        """
        self._say(WELCOME)
        self._say("Select an option:")
        self._say("1. Log in")
        self._say("2. Create new account")

        choice = parse_menu_option(self._ask("Option: "))

        if choice == 1:
            account = self.login()
            if account is None:
                self._say("Login failed. Exiting the program.")
            return account

        if choice == 2:
            self.create_account()
            return None

        self._say("Invalid option. Exiting the program.")
        return None

    def login(self) -> Optional[Account]:
        username = self._ask("Enter your username: ")
        password = self._ask("Enter your password: ")

        account = self._accounts.login(username, password)
        if account is None:
            self._say("Incorrect username or password.")
            return None

        self._say(f"Login successful. Hello, {account.username}!")
        return account

    def create_account(self) -> bool:
        username = self._ask("Enter the new username: ")
        password = self._ask("Enter the password: ")
        plan_text = self._ask("Select the plan type (BASE/PREMIUM): ")

        ok, message = self._accounts.create_account(username, password, plan_text)
        self._say(message)
        if ok:
            self._say("Start the application again to log in.")
        return ok

    # =========================================================================
    # MENU
    # =========================================================================

    def menu_loop(self, account: Account) -> None:
        """Show the menu until the user picks Exit."""
        actions = {
            1: self.schedule_meeting,
            2: self.list_meetings,
            3: self.list_contacts,
            4: self.change_plan,
            5: self.change_password,
        }

        while True:
            self._say(MENU)
            option = parse_menu_option(self._ask("Enter your option: "))

            if option == EXIT_OPTION:
                self._say("Exiting the program.")
                return

            action = actions.get(option)
            if action is None:
                self._say("Invalid option. Try again.")
                continue

            action(account)

    def schedule_meeting(self, account: Account) -> bool:
        """Prompt for a meeting. The first invalid field abandons it."""
        date_result = parse_date(self._ask("Enter the meeting date (YYYY-MM-DD): "))
        if not date_result.ok:
            return self._abandon_schedule(account, date_result)

        time_result = parse_time(self._ask("Enter the meeting time (HH:MM): "))
        if not time_result.ok:
            return self._abandon_schedule(account, time_result)

        title = self._ask("Enter the meeting title: ")

        duration_result = parse_duration(self._ask("Enter the meeting duration (minutes): "))
        if not duration_result.ok:
            return self._abandon_schedule(account, duration_result)

        notes = None
        if parse_yes_no(self._ask("Add notes to the meeting? (Y/N): ")):
            notes = self._ask("Enter the meeting notes: ")

        result = self._meetings.schedule_meeting(
            account,
            date=date_result.value,
            time=time_result.value,
            title=title,
            duration_minutes=duration_result.value,
            notes=notes,
        )
        self._say(result.message)
        return result.accepted

    def _abandon_schedule(self, account: Account, result) -> bool:
        self._meetings.report_invalid_input(account, result)
        self._say(SCHEDULE_ERROR)
        return False

    def list_meetings(self, account: Account) -> None:
        self._say("Meetings:")
        for meeting in self._meetings.list_meetings(account):
            self._say(str(meeting))

    def list_contacts(self, account: Account) -> None:
        self._say("Contacts:")
        for contact in self._meetings.list_contacts(account):
            self._say(contact)

    def change_plan(self, account: Account) -> bool:
        self._say(f"Current plan: {account.plan_tier.value}")
        plan_text = self._ask("Enter the new plan (BASE/PREMIUM): ")

        ok, message = self._accounts.change_plan(account, plan_text)
        self._say(message)
        return ok

    def change_password(self, account: Account) -> bool:
        new_password = self._ask("Enter the new password: ")

        ok, message = self._accounts.change_password(account, new_password)
        self._say(message)
        return ok


def main() -> int:
    """Application entry point."""
    checks = validate_all_settings()
    invalid = sorted(name for name, ok in checks.items() if ok is False)
    if invalid:
        configure_logging()
        structlog.get_logger(__name__).critical(
            "invalid_configuration",
            sections=invalid,
            errors={name: checks[f"{name}_error"] for name in invalid},
        )
        print("Invalid configuration. Exiting the program.")
        return 1

    settings = get_settings()
    configure_logging(settings.app.effective_log_level)
    logger = structlog.get_logger(__name__)

    try:
        ensure_hash_available()
    except HashUnavailableError:
        logger.critical("hash_unavailable", exc_info=True)
        return 1

    account_flow, meeting_flow, store = create_app_components(
        settings=settings,
        audit_logger=AuditLogger(),
    )

    try:
        store.load()
    except CorruptStoreError:
        logger.critical("accounts_file_corrupt", exc_info=True)
        print("The accounts file is corrupt. Exiting the program.")
        return 1

    return ConsoleApp(account_flow, meeting_flow).run()


if __name__ == "__main__":
    sys.exit(main())
