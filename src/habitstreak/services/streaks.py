"""Streak computation over a habit's completion dates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .dates import DateLike, is_next_day, iter_days_backward, parse_local_date


@dataclass(frozen=True)
class StreakResult:
    """Derived streak metrics for one habit."""

    current_streak: int = 0
    longest_streak: int = 0
    total_completions: int = 0

    def as_dict(self) -> dict[str, int]:
        return {
            "currentStreak": self.current_streak,
            "longestStreak": self.longest_streak,
            "totalCompletions": self.total_completions,
        }


def compute_streaks(completed_dates: Iterable[DateLike], today: DateLike) -> StreakResult:
    """Return current, longest and total completion counts.

    ``completed_dates`` may contain duplicates and be in any order. ``today``
    anchors the current streak and is never read from the system clock here.
    Malformed dates raise ``PreconditionViolation``.
    """

    anchor = parse_local_date(today)
    days = {parse_local_date(value) for value in completed_dates}
    if not days:
        return StreakResult()

    # Current streak: walk backwards from today until a gap. The run can never
    # be longer than the number of completed days, so that bounds the walk;
    # iter_days_backward also stops at date.min.
    current = 0
    for day in iter_days_backward(anchor, len(days)):
        if day not in days:
            break
        current += 1

    # Longest streak: sweep through sorted days, counting consecutive runs.
    ordered = sorted(days)
    longest = 1
    run = 1
    for previous, day in zip(ordered, ordered[1:]):
        if is_next_day(previous, day):
            run += 1
        else:
            longest = max(longest, run)
            run = 1
    longest = max(longest, run)

    return StreakResult(
        current_streak=current,
        longest_streak=longest,
        total_completions=len(days),
    )


__all__ = ["StreakResult", "compute_streaks"]
