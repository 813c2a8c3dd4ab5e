"""Scheduling rules package."""

from src.scheduling.policy import SchedulingPolicy

__all__ = ["SchedulingPolicy"]
