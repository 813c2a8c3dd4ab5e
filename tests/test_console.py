"""Tests for the console menu, driven by scripted input."""

import pytest

import app.main as console
from app.main import FAREWELL, SCHEDULE_ERROR, ConsoleApp
from src.auth import HashUnavailableError, hash_password
from src.models import PlanTier
from tests.conftest import ScriptedConsole


MEETING_STANDUP = ["1", "2024-05-01", "10:00", "Standup", "15", "n"]


def run_session(account_flow, meeting_flow, *answers):
    script = ScriptedConsole(*answers)
    app = ConsoleApp(
        account_flow,
        meeting_flow,
        input_fn=script.input,
        output_fn=script.print,
    )
    return app.run(), script


@pytest.fixture
def with_alice(account_flow):
    account_flow.create_account("alice", "pw123", "BASE")


def meeting_lines(script):
    return [line for line in script.lines if line.startswith("Meeting(")]


class TestTopLevel:
    """Tests for the log in / create account prompt."""

    def test_create_account_then_exit(self, account_flow, meeting_flow, accounts_path):
        """Test that a new account is saved but not logged in."""
        code, script = run_session(
            account_flow, meeting_flow, "2", "alice", "pw123", "base"
        )
        assert code == 0
        assert "New account created successfully." in script.lines
        assert "--- Menu ---" not in script.text
        assert accounts_path.read_text(encoding="utf-8") == (
            f"alice,{hash_password('pw123')},BASE\n"
        )

    def test_create_account_invalid_plan(self, account_flow, meeting_flow, store):
        code, script = run_session(
            account_flow, meeting_flow, "2", "alice", "pw123", "GOLD"
        )
        assert code == 0
        assert "Error creating the account. Make sure the data entered is valid." in script.lines
        assert len(store) == 0

    def test_login_failure_exits(self, account_flow, meeting_flow, with_alice):
        code, script = run_session(account_flow, meeting_flow, "1", "alice", "wrong")
        assert code == 0
        assert "Incorrect username or password." in script.lines
        assert "Login failed. Exiting the program." in script.lines
        assert "--- Menu ---" not in script.text

    def test_invalid_top_level_option_exits(self, account_flow, meeting_flow):
        code, script = run_session(account_flow, meeting_flow, "7")
        assert code == 0
        assert "Invalid option. Exiting the program." in script.lines
        assert len(script.prompts) == 1

    def test_non_numeric_top_level_option_exits(self, account_flow, meeting_flow):
        code, script = run_session(account_flow, meeting_flow, "abc")
        assert "Invalid option. Exiting the program." in script.lines

    def test_end_of_input_at_start(self, account_flow, meeting_flow):
        code, _ = run_session(account_flow, meeting_flow)
        assert code == 0


class TestMenu:
    """Tests for the logged-in menu."""

    def test_login_and_exit(self, account_flow, meeting_flow, with_alice):
        code, script = run_session(account_flow, meeting_flow, "1", "alice", "pw123", "6")
        assert code == 0
        assert "Login successful. Hello, alice!" in script.lines
        assert script.lines[-2:] == ["Exiting the program.", FAREWELL]

    def test_invalid_option_repeats_menu(self, account_flow, meeting_flow, with_alice):
        _, script = run_session(
            account_flow, meeting_flow, "1", "alice", "pw123", "x", "9", "6"
        )
        assert script.lines.count("Invalid option. Try again.") == 2
        assert script.text.count("--- Menu ---") == 3

    def test_oversized_number_is_invalid_option(self, account_flow, meeting_flow, with_alice):
        code, script = run_session(
            account_flow, meeting_flow, "1", "alice", "pw123", "9" * 5000, "6"
        )
        assert code == 0
        assert "Invalid option. Try again." in script.lines
        assert script.lines[-1] == FAREWELL

    def test_oversized_duration_abandons(self, account_flow, meeting_flow, store, with_alice):
        _, script = run_session(
            account_flow, meeting_flow,
            "1", "alice", "pw123",
            "1", "2024-05-01", "10:00", "Standup", "9" * 5000,
            "6",
        )
        assert SCHEDULE_ERROR in script.lines
        assert store.find("alice").meetings == []

    def test_end_of_input_in_menu_exits(self, account_flow, meeting_flow, with_alice):
        code, script = run_session(account_flow, meeting_flow, "1", "alice", "pw123")
        assert code == 0
        assert script.lines[-1] == FAREWELL

    def test_schedule_with_notes(self, account_flow, meeting_flow, store, with_alice):
        _, script = run_session(
            account_flow, meeting_flow,
            "1", "alice", "pw123",
            "1", "2024-05-01", "10:00", "Standup", "15", "y", "Bring coffee",
            "2",
            "6",
        )
        assert "Meeting scheduled successfully." in script.lines
        lines = meeting_lines(script)
        assert len(lines) == 1
        assert "notes='Bring coffee'" in lines[0]
        assert store.find("alice").meetings[0].notes == "Bring coffee"

    @pytest.mark.parametrize("answers,prompt_count", [
        (["1", "01/05/2024"], 1),
        (["1", "2024-05-01", "10am"], 2),
        (["1", "2024-05-01", "10:00", "Standup", "quarter"], 4),
    ])
    def test_invalid_meeting_input_abandons(
        self, account_flow, meeting_flow, store, with_alice, answers, prompt_count
    ):
        """Test that the first bad field ends the operation without retrying."""
        _, script = run_session(
            account_flow, meeting_flow, "1", "alice", "pw123", *answers, "6"
        )
        assert SCHEDULE_ERROR in script.lines
        assert store.find("alice").meetings == []
        menu_prompts = [p for p in script.prompts if p.startswith("Enter the meeting")]
        assert len(menu_prompts) == prompt_count

    def test_change_plan(self, account_flow, meeting_flow, store, with_alice):
        _, script = run_session(
            account_flow, meeting_flow, "1", "alice", "pw123", "4", "premium", "6"
        )
        assert "Current plan: BASE" in script.lines
        assert "Plan changed successfully." in script.lines
        assert store.find("alice").plan_tier == PlanTier.PREMIUM

    def test_change_plan_invalid(self, account_flow, meeting_flow, store, with_alice):
        _, script = run_session(
            account_flow, meeting_flow, "1", "alice", "pw123", "4", "gold", "6"
        )
        assert "Error changing the plan. Make sure you entered a valid plan." in script.lines
        assert store.find("alice").plan_tier == PlanTier.BASE

    def test_change_password(self, account_flow, meeting_flow, accounts_path, with_alice):
        _, script = run_session(
            account_flow, meeting_flow, "1", "alice", "pw123", "5", "s3cret", "6"
        )
        assert "Password changed successfully." in script.lines
        assert accounts_path.read_text(encoding="utf-8") == (
            f"alice,{hash_password('s3cret')},BASE\n"
        )


class TestScenario:
    """The alice BASE-plan walkthrough."""

    def test_base_plan_walkthrough(self, account_flow, meeting_flow, with_alice):
        _, script = run_session(
            account_flow, meeting_flow,
            "1", "alice", "pw123",
            *MEETING_STANDUP,
            "2",
            "1", "2024-05-01", "10:00", "Clash", "30", "n",
            "2",
            "1", "2024-05-01", "11:00", "Retro", "15", "n",
            "1", "2024-05-02", "09:00", "Demo", "15", "n",
            "2",
            "3",
            "6",
        )

        assert script.lines.count("Meeting scheduled successfully.") == 2
        assert any(line.startswith("Conflicting date/time") for line in script.lines)
        assert any(line.startswith("Base-plan daily limit reached") for line in script.lines)

        lines = meeting_lines(script)
        # first listing: 1 meeting, second: still 1, third: 2
        assert len(lines) == 1 + 1 + 2
        assert "date=2024-05-01, time=10:00, title='Standup'" in lines[0]
        assert "title='Retro'" in lines[-1]

        contacts_index = script.lines.index("Contacts:")
        assert script.lines[contacts_index + 1] == "alice"
        assert script.lines[contacts_index + 2].startswith("\n--- Menu ---")


class TestMain:
    """Tests for the process entry point."""

    def test_corrupt_store_exits_with_error(self, accounts_path, monkeypatch, capsys):
        accounts_path.write_text(f"alice,{hash_password('pw')},GOLD\n", encoding="utf-8")
        monkeypatch.setenv("SCHEDULER_STORAGE_ACCOUNTS_FILE", str(accounts_path))

        assert console.main() == 1
        assert "The accounts file is corrupt." in capsys.readouterr().out

    def test_invalid_configuration_exits_with_error(self, monkeypatch, capsys):
        monkeypatch.setenv("SCHEDULER_LOG_LEVEL", "LOUD")

        assert console.main() == 1
        assert "Invalid configuration." in capsys.readouterr().out

    def test_missing_hash_exits_with_error(self, monkeypatch):
        def unavailable():
            raise HashUnavailableError("sha256 missing")

        monkeypatch.setattr(console, "ensure_hash_available", unavailable)
        assert console.main() == 1
