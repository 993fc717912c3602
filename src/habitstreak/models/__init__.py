"""SQLModel table exports."""

from .habit import Habit, HabitEntry

__all__ = ["Habit", "HabitEntry"]
