"""Input parsing package."""

from src.validation.parsers import (
    parse_date,
    parse_duration,
    parse_menu_option,
    parse_plan,
    parse_time,
    parse_username,
    parse_yes_no,
)

__all__ = [
    "parse_date",
    "parse_duration",
    "parse_menu_option",
    "parse_plan",
    "parse_time",
    "parse_username",
    "parse_yes_no",
]
