"""Habit completion store protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.habit import Habit, HabitEntry


class HabitRepository(Protocol):
    """Storage for habits and their one-per-day completion records."""

    def get_by_id(self, habit_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        ...

    def list_all(self) -> list[Habit]:
        """List habits, newest first."""
        ...

    def create(self, habit: Habit) -> Habit:
        """Create a new habit."""
        ...

    def seed_defaults(self) -> list[Habit]:
        """Insert the default habit set when the store is empty."""
        ...

    def get_entry(self, habit_id: int, day: str) -> Optional[HabitEntry]:
        """Get the completion record for one day."""
        ...

    def list_entries(self, habit_id: int) -> list[HabitEntry]:
        """Completion records for a habit, newest first."""
        ...

    def list_entries_on(self, day: str) -> list[HabitEntry]:
        """Completion records across habits for one day."""
        ...

    def list_entries_between(self, start: str, end: str) -> list[HabitEntry]:
        """Completion records across habits for an inclusive date range."""
        ...

    def get_completion_dates(self, habit_id: int) -> list[str]:
        """Completed days for a habit as canonical date strings."""
        ...

    def mark_complete(self, habit_id: int, day: str, notes: Optional[str] = None) -> HabitEntry:
        """Insert a completion; raise DuplicateCompletion if one exists."""
        ...

    def mark_incomplete(self, habit_id: int, day: str) -> bool:
        """Delete a completion if present; return whether one was removed."""
        ...
