"""Exception types raised by the streak engine and completion store."""

from __future__ import annotations


class HabitStreakError(Exception):
    """Base class for application errors."""


class PreconditionViolation(HabitStreakError, ValueError):
    """A caller passed a malformed or empty calendar date."""


class HabitNotFound(HabitStreakError, LookupError):
    """No habit exists with the requested id."""

    def __init__(self, habit_id: int):
        super().__init__(f"Habit {habit_id} does not exist")
        self.habit_id = habit_id


class DuplicateCompletion(HabitStreakError):
    """The habit is already marked complete for that day."""

    def __init__(self, habit_id: int, day: str):
        super().__init__(f"Habit {habit_id} already completed on {day}")
        self.habit_id = habit_id
        self.date = day


__all__ = ["DuplicateCompletion", "HabitNotFound", "HabitStreakError", "PreconditionViolation"]
