"""Shared fixtures for the Meeting Scheduler tests."""

import pytest

from src.audit import AuditLogger
from src.config import PlanSettings, get_settings
from src.orchestrator import AccountFlow, MeetingFlow
from src.scheduling import SchedulingPolicy
from src.services.storage import AccountStore, CsvAccountStorage


class ScriptedConsole:
    """Feeds canned answers to ConsoleApp and records what it prints."""

    def __init__(self, *answers: str):
        self._answers = list(answers)
        self.prompts: list[str] = []
        self.lines: list[str] = []

    def input(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self._answers:
            raise EOFError
        return self._answers.pop(0)

    def print(self, text: str = "") -> None:
        self.lines.append(text)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def accounts_path(tmp_path):
    return tmp_path / "usuarios.csv"


@pytest.fixture
def storage(accounts_path):
    return CsvAccountStorage(accounts_path, retry_attempts=1)


@pytest.fixture
def store(storage):
    store = AccountStore(storage)
    store.load()
    return store


@pytest.fixture
def plan_settings():
    return PlanSettings(base_meeting_limit=2, premium_meeting_limit=5)


@pytest.fixture
def policy(plan_settings):
    return SchedulingPolicy(plan_settings)


@pytest.fixture
def audit_logger():
    return AuditLogger()


@pytest.fixture
def account_flow(store, audit_logger):
    return AccountFlow(store=store, audit_logger=audit_logger)


@pytest.fixture
def meeting_flow(store, policy, audit_logger):
    return MeetingFlow(store=store, policy=policy, audit_logger=audit_logger)
