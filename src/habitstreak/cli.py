"""Flask CLI commands for HabitStreak."""

from __future__ import annotations

import click

from .errors import HabitNotFound, PreconditionViolation


def _context():
    from . import get_app_context

    return get_app_context()


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("habitstreak-seed")
    def habitstreak_seed() -> None:
        """Insert the default habits if the database has none."""

        for habit in _context().habit_repo.seed_defaults():
            click.echo(f"{habit.id}: {habit.icon} {habit.name}")

    @app.cli.command("habitstreak-complete")
    @click.argument("habit_id", type=int)
    @click.option("--date", "day", default=None, help="Day to mark (YYYY-MM-DD); defaults to today")
    @click.option("--notes", default=None, help="Optional note stored with the completion")
    def habitstreak_complete(habit_id: int, day: str | None, notes: str | None) -> None:
        """Mark a habit complete for a day."""

        ctx = _context()
        today = ctx.today()
        try:
            outcome = ctx.habit_service.mark_complete(
                habit_id, day or today, today=today, notes=notes
            )
        except (HabitNotFound, PreconditionViolation) as exc:
            raise click.ClickException(str(exc)) from exc

        if outcome.applied:
            click.echo(f"Marked habit {habit_id} complete for {outcome.date}.")
        else:
            click.echo(f"Already complete: {outcome.rejected_reason}")
        _echo_streaks(outcome.streaks)

    @app.cli.command("habitstreak-uncomplete")
    @click.argument("habit_id", type=int)
    @click.option("--date", "day", default=None, help="Day to clear (YYYY-MM-DD); defaults to today")
    def habitstreak_uncomplete(habit_id: int, day: str | None) -> None:
        """Remove a habit's completion for a day."""

        ctx = _context()
        today = ctx.today()
        try:
            outcome = ctx.habit_service.mark_incomplete(habit_id, day or today, today=today)
        except (HabitNotFound, PreconditionViolation) as exc:
            raise click.ClickException(str(exc)) from exc

        if outcome.applied:
            click.echo(f"Reopened habit {habit_id} for {outcome.date}.")
        else:
            click.echo(f"Habit {habit_id} was not complete on {outcome.date}.")
        _echo_streaks(outcome.streaks)

    @app.cli.command("habitstreak-streaks")
    @click.argument("habit_id", type=int)
    @click.option("--today", default=None, help="Anchor day (YYYY-MM-DD); defaults to local today")
    def habitstreak_streaks(habit_id: int, today: str | None) -> None:
        """Print current and longest streaks for a habit."""

        ctx = _context()
        try:
            result = ctx.habit_service.streaks_for(habit_id, today or ctx.today())
        except (HabitNotFound, PreconditionViolation) as exc:
            raise click.ClickException(str(exc)) from exc
        _echo_streaks(result)


def _echo_streaks(result) -> None:
    click.echo(
        f"Current streak: {result.current_streak} · "
        f"Longest streak: {result.longest_streak} · "
        f"Total completions: {result.total_completions}"
    )
