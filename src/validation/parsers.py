"""
Input Parsers

Every piece of console input goes through one of these parsers before it
reaches the domain layer.

DESIGN DECISION: Parsers NEVER raise for bad input. They return a
``ParseResult`` that is either a success carrying the parsed value or a
failure carrying a reason. The caller decides what to tell the user.

IMPORTANT: Parsers never silently fix input beyond trimming surrounding
whitespace, and usernames are not even trimmed. A date like ``2024-5-1``
is refused, not padded.
"""

import re
from datetime import date, time
from typing import Optional

from src.models.account import FORBIDDEN_USERNAME_CHARS, PlanTier
from src.models.results import ParseResult


RE_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")            # YYYY-MM-DD
RE_TIME = re.compile(r"^\d{2}:\d{2}(?::\d{2})?$")      # HH:MM or HH:MM:SS
RE_INTEGER = re.compile(r"^[+-]?\d+$")

# Whole numbers are read as signed 32-bit values
INT_MIN = -(2 ** 31)
INT_MAX = 2 ** 31 - 1

YES_ANSWERS = {"y", "yes"}


def _to_int(value: str) -> Optional[int]:
    """Read a 32-bit signed integer, or None if ``value`` is not one."""
    if not RE_INTEGER.match(value):
        return None
    # Digits alone don't guarantee int() works: huge strings hit the
    # interpreter's digit limit.
    try:
        number = int(value)
    except ValueError:
        return None
    if not INT_MIN <= number <= INT_MAX:
        return None
    return number


def parse_date(text: str) -> ParseResult:
    """Parse a strict ISO calendar date (``YYYY-MM-DD``)."""
    value = text.strip()
    if not RE_DATE.match(value):
        return ParseResult.failure("date", f"Expected YYYY-MM-DD, got '{text}'")
    try:
        return ParseResult.success("date", date.fromisoformat(value))
    except ValueError as e:
        return ParseResult.failure("date", f"Not a calendar date: {e}")


def parse_time(text: str) -> ParseResult:
    """Parse a 24-hour time of day (``HH:MM``, seconds optional)."""
    value = text.strip()
    if not RE_TIME.match(value):
        return ParseResult.failure("time", f"Expected HH:MM, got '{text}'")
    try:
        return ParseResult.success("time", time.fromisoformat(value))
    except ValueError as e:
        return ParseResult.failure("time", f"Not a time of day: {e}")


def parse_duration(text: str) -> ParseResult:
    """
    Parse a duration in minutes.

    Any 32-bit integer is accepted, including zero and negatives.
    """
    number = _to_int(text.strip())
    if number is None:
        return ParseResult.failure("duration", f"Expected a whole number of minutes, got '{text}'")
    return ParseResult.success("duration", number)


def parse_plan(text: str) -> ParseResult:
    """Match a plan name case-insensitively (``base``, ``Premium``...)."""
    value = text.strip().upper()
    try:
        return ParseResult.success("plan", PlanTier(value))
    except ValueError:
        allowed = "/".join(tier.value for tier in PlanTier)
        return ParseResult.failure("plan", f"Unknown plan '{text}'. Expected {allowed}")


def parse_username(text: str) -> ParseResult:
    """
    Check a username without altering it.

    Login compares the raw text, so nothing is trimmed here either. The
    name must fit in one record of the accounts file: no separators and
    nothing that UTF-8 cannot encode.
    """
    if any(ch in text for ch in FORBIDDEN_USERNAME_CHARS):
        return ParseResult.failure("username", "Username cannot contain commas or line breaks")
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return ParseResult.failure("username", "Username is not valid UTF-8 text")
    return ParseResult.success("username", text)


def parse_menu_option(text: str) -> int:
    """Menu choice as an integer. Anything that is not a number is 0."""
    number = _to_int(text.strip())
    return 0 if number is None else number


def parse_yes_no(text: str) -> bool:
    return text.strip().lower() in YES_ANSWERS
