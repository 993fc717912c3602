"""Tests for the streak computation engine.

Covers current and longest streaks, including:
- Consecutive days and gaps
- Month, year and leap-day boundaries
- Daylight-saving transitions
- Duplicates, ordering and malformed input
"""

from __future__ import annotations

import random
from datetime import date, timedelta

import pytest

from habitstreak.errors import PreconditionViolation
from habitstreak.services.streaks import StreakResult, compute_streaks


def _run(start: date, length: int) -> list[str]:
    return [(start + timedelta(days=i)).isoformat() for i in range(length)]


class TestBasics:
    def test_empty_set_returns_zeros(self):
        assert compute_streaks(set(), "2025-01-15") == StreakResult(0, 0, 0)

    def test_single_day_today(self):
        result = compute_streaks({"2025-01-15"}, "2025-01-15")
        assert result == StreakResult(current_streak=1, longest_streak=1, total_completions=1)

    def test_as_dict_uses_camel_case_keys(self):
        result = compute_streaks({"2025-01-15"}, "2025-01-15")
        assert result.as_dict() == {"currentStreak": 1, "longestStreak": 1, "totalCompletions": 1}

    def test_duplicates_collapse(self):
        result = compute_streaks(["2025-01-15", "2025-01-15", "2025-01-14"], "2025-01-15")
        assert result.total_completions == 2
        assert result.current_streak == 2

    def test_order_is_irrelevant(self):
        dates = ["2025-01-03", "2025-01-01", "2025-01-02"]
        assert compute_streaks(dates, "2025-01-03") == compute_streaks(reversed(dates), "2025-01-03")

    def test_accepts_date_objects(self):
        result = compute_streaks({date(2025, 1, 14), date(2025, 1, 15)}, date(2025, 1, 15))
        assert result.current_streak == 2

    def test_same_inputs_give_same_result(self):
        dates = {"2025-01-10", "2025-01-11", "2025-01-15"}
        assert compute_streaks(dates, "2025-01-15") == compute_streaks(dates, "2025-01-15")


class TestCurrentStreak:
    def test_missing_today_returns_zero(self):
        result = compute_streaks({"2025-01-13", "2025-01-14"}, "2025-01-15")
        assert result.current_streak == 0
        assert result.longest_streak == 2

    def test_gap_stops_backward_walk(self):
        dates = {"2025-01-15", "2025-01-14", "2025-01-12", "2025-01-11"}
        assert compute_streaks(dates, "2025-01-15").current_streak == 2

    def test_crosses_month_boundary(self):
        result = compute_streaks({"2025-01-30", "2025-01-31", "2025-02-01"}, "2025-02-01")
        assert result.current_streak == 3
        assert result.longest_streak == 3

    def test_crosses_year_boundary(self):
        result = compute_streaks({"2024-12-30", "2024-12-31", "2025-01-01"}, "2025-01-01")
        assert result.current_streak == 3

    def test_crosses_leap_day(self):
        result = compute_streaks({"2024-02-28", "2024-02-29", "2024-03-01"}, "2024-03-01")
        assert result.current_streak == 3
        assert result.longest_streak == 3

    def test_completions_after_today_are_ignored_for_current(self):
        result = compute_streaks({"2025-01-15", "2025-01-16"}, "2025-01-15")
        assert result.current_streak == 1
        assert result.longest_streak == 2

    def test_today_far_after_history(self):
        result = compute_streaks({"2025-01-01"}, "2025-06-01")
        assert result == StreakResult(0, 1, 1)

    def test_streak_longer_than_a_year(self):
        dates = _run(date(2023, 1, 1), 800)
        today = dates[-1]
        result = compute_streaks(dates, today)
        assert result.current_streak == 800
        assert result.longest_streak == 800

    def test_history_at_earliest_representable_day(self):
        result = compute_streaks({"0001-01-01", "0001-01-02", "0001-01-03"}, "0001-01-02")
        assert result == StreakResult(2, 3, 3)

    def test_first_day_of_calendar_as_today(self):
        result = compute_streaks({"0001-01-01"}, "0001-01-01")
        assert result == StreakResult(1, 1, 1)


class TestLongestStreak:
    def test_longest_not_at_end(self):
        dates = {"2025-01-01", "2025-01-02", "2025-01-03", "2025-01-10"}
        result = compute_streaks(dates, "2025-01-10")
        assert result.current_streak == 1
        assert result.longest_streak == 3
        assert result.total_completions == 4

    def test_multiple_runs_returns_longest(self):
        dates = _run(date(2024, 1, 1), 3) + _run(date(2024, 1, 10), 7) + _run(date(2024, 1, 20), 4)
        assert compute_streaks(dates, "2024-02-01").longest_streak == 7

    def test_ongoing_run_is_longest(self):
        dates = _run(date(2024, 1, 1), 2) + _run(date(2024, 3, 1), 14)
        result = compute_streaks(dates, "2024-03-14")
        assert result.current_streak == 14
        assert result.longest_streak == 14

    def test_two_day_gap_breaks_run(self):
        result = compute_streaks({"2025-01-01", "2025-01-03"}, "2025-01-03")
        assert result.longest_streak == 1

    @pytest.mark.parametrize(
        "dates",
        [
            # US spring-forward and fall-back transitions
            ["2025-03-08", "2025-03-09", "2025-03-10"],
            ["2025-11-01", "2025-11-02", "2025-11-03"],
            # EU transitions
            ["2025-03-29", "2025-03-30", "2025-03-31"],
            ["2025-10-25", "2025-10-26", "2025-10-27"],
        ],
    )
    def test_dst_transitions_stay_consecutive(self, dates):
        result = compute_streaks(dates, dates[-1])
        assert result.current_streak == 3
        assert result.longest_streak == 3


class TestPreconditions:
    @pytest.mark.parametrize(
        "bad",
        ["", "2025-1-5", "2025/01/05", "2025-02-30", "not-a-date", "2025-01-15T00:00:00"],
    )
    def test_malformed_completion_date_raises(self, bad):
        with pytest.raises(PreconditionViolation):
            compute_streaks({"2025-01-15", bad}, "2025-01-15")

    def test_malformed_today_raises(self):
        with pytest.raises(PreconditionViolation):
            compute_streaks(set(), "15/01/2025")

    def test_precondition_violation_is_value_error(self):
        with pytest.raises(ValueError):
            compute_streaks({None}, "2025-01-15")  # type: ignore[arg-type]


def test_bounds_hold_for_random_histories():
    rng = random.Random(20250115)
    origin = date(2024, 1, 1)
    for _ in range(200):
        dates = {
            (origin + timedelta(days=rng.randrange(0, 120))).isoformat()
            for _ in range(rng.randrange(0, 60))
        }
        today = (origin + timedelta(days=rng.randrange(0, 130))).isoformat()
        result = compute_streaks(dates, today)

        assert result.total_completions == len(dates)
        assert 0 <= result.current_streak <= result.longest_streak <= len(dates)
        assert (result.current_streak > 0) == (today in dates)
