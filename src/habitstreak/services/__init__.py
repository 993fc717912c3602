"""Service module exports."""

from . import dates, habits, streaks

__all__ = ["dates", "habits", "streaks"]
