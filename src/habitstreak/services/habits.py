"""Habit completion toggling and on-demand streak summaries."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from typing import Optional

from ..domain.repositories.habit import HabitRepository
from ..errors import DuplicateCompletion, HabitNotFound, PreconditionViolation
from ..logging_config import get_logger
from ..models.habit import Habit
from .dates import (
    DateLike,
    check_span,
    format_local_date,
    iter_days,
    normalize_date,
    parse_local_date,
)
from .streaks import StreakResult, compute_streaks

logger = get_logger(__name__)

# Longest window a single history request may cover.
MAX_HISTORY_DAYS = 366


@dataclass(frozen=True)
class ToggleOutcome:
    """Result of a completion toggle plus the recomputed streaks."""

    habit_id: int
    date: str
    applied: bool
    streaks: StreakResult
    rejected_reason: Optional[str] = None

    def as_dict(self) -> dict:
        return {
            "habitId": self.habit_id,
            "date": self.date,
            "applied": self.applied,
            "rejectedReason": self.rejected_reason,
            "streaks": self.streaks.as_dict(),
        }


@dataclass(frozen=True)
class DailySummary:
    """How many habits were completed on one day."""

    date: str
    completed: int
    total_habits: int

    @property
    def completion_rate(self) -> float:
        """Percentage of habits completed, 0.0 when there are no habits."""
        if self.total_habits == 0:
            return 0.0
        return self.completed / self.total_habits * 100

    @property
    def perfect_day(self) -> bool:
        return self.total_habits > 0 and self.completed == self.total_habits

    def as_dict(self) -> dict:
        return {
            "date": self.date,
            "completedToday": self.completed,
            "totalHabits": self.total_habits,
            "completionRate": self.completion_rate,
            "perfectDay": self.perfect_day,
        }


class HabitService:
    """Boundary between callers holding a ``today`` and the completion store."""

    def __init__(self, repository: HabitRepository):
        self.repository = repository

    def require_habit(self, habit_id: int) -> Habit:
        habit = self.repository.get_by_id(habit_id)
        if habit is None:
            raise HabitNotFound(habit_id)
        return habit

    def streaks_for(self, habit_id: int, today: DateLike) -> StreakResult:
        """Recompute streaks for a habit from its full history."""

        self.require_habit(habit_id)
        dates = self.repository.get_completion_dates(habit_id)
        return compute_streaks(dates, today)

    def mark_complete(
        self, habit_id: int, day: DateLike, *, today: DateLike, notes: Optional[str] = None
    ) -> ToggleOutcome:
        """Mark ``day`` complete; an existing completion yields a rejected outcome."""

        canonical = normalize_date(day)
        today = normalize_date(today)
        try:
            self.repository.mark_complete(habit_id, canonical, notes=notes)
        except DuplicateCompletion as exc:
            logger.warning(
                "Completion rejected",
                extra={"habit_id": habit_id, "date": canonical, "reason": "already_complete"},
            )
            return ToggleOutcome(
                habit_id=habit_id,
                date=canonical,
                applied=False,
                streaks=self.streaks_for(habit_id, today),
                rejected_reason=str(exc),
            )

        logger.info("Habit marked complete", extra={"habit_id": habit_id, "date": canonical})
        return ToggleOutcome(
            habit_id=habit_id,
            date=canonical,
            applied=True,
            streaks=self.streaks_for(habit_id, today),
        )

    def mark_incomplete(self, habit_id: int, day: DateLike, *, today: DateLike) -> ToggleOutcome:
        """Remove the completion for ``day``; removing nothing is not an error."""

        canonical = normalize_date(day)
        today = normalize_date(today)
        self.require_habit(habit_id)
        removed = self.repository.mark_incomplete(habit_id, canonical)
        if removed:
            logger.info("Habit marked incomplete", extra={"habit_id": habit_id, "date": canonical})
        else:
            logger.debug("No completion to remove", extra={"habit_id": habit_id, "date": canonical})
        return ToggleOutcome(
            habit_id=habit_id,
            date=canonical,
            applied=removed,
            streaks=self.streaks_for(habit_id, today),
        )

    def toggle_completion(
        self,
        habit_id: int,
        day: DateLike,
        *,
        today: DateLike,
        complete: bool = True,
        notes: Optional[str] = None,
    ) -> ToggleOutcome:
        if complete:
            return self.mark_complete(habit_id, day, today=today, notes=notes)
        return self.mark_incomplete(habit_id, day, today=today)

    def history(self, habit_id: int, start: DateLike, end: DateLike) -> list[dict]:
        """Per-day completion flags between ``start`` and ``end`` inclusive.

        Ranges that run backwards or cover more than ``MAX_HISTORY_DAYS`` days
        raise ``PreconditionViolation``.
        """

        first, last = parse_local_date(start), parse_local_date(end)
        check_span(first, last, MAX_HISTORY_DAYS)
        self.require_habit(habit_id)
        completed = set(self.repository.get_completion_dates(habit_id))
        history = []
        for day in iter_days(first, last):
            key = format_local_date(day)
            history.append({"date": key, "completed": key in completed})
        return history

    def daily_summary(self, day: DateLike) -> DailySummary:
        """Completed-vs-total habit counts for one day."""

        canonical = normalize_date(day)
        habit_ids = {habit.id for habit in self.repository.list_all()}
        done = {entry.habit_id for entry in self.repository.list_entries_on(canonical)}
        return DailySummary(
            date=canonical, completed=len(done & habit_ids), total_habits=len(habit_ids)
        )

    def month_calendar(self, year: int, month: int) -> list[dict]:
        """For each day of a month, which habits were completed.

        Returns one ``{"date", "completedCount", "habits"}`` item per day, where
        ``habits`` lists every habit with its colour and completed flag.
        """
        if not 1 <= month <= 12 or not 1 <= year <= 9999:
            raise PreconditionViolation(f"Invalid month {year}-{month}")

        days_in_month = calendar.monthrange(year, month)[1]
        first = parse_local_date(f"{year:04d}-{month:02d}-01")
        last = first.replace(day=days_in_month)
        habits = self.repository.list_all()
        done = {
            (entry.habit_id, entry.date)
            for entry in self.repository.list_entries_between(
                format_local_date(first), format_local_date(last)
            )
        }

        grid = []
        for day in iter_days(first, last):
            key = format_local_date(day)
            cells = [
                {"habitId": habit.id, "color": habit.color, "completed": (habit.id, key) in done}
                for habit in habits
            ]
            grid.append(
                {
                    "date": key,
                    "completedCount": sum(1 for cell in cells if cell["completed"]),
                    "habits": cells,
                }
            )
        return grid


__all__ = ["MAX_HISTORY_DAYS", "DailySummary", "HabitService", "ToggleOutcome"]
