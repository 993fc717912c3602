"""SQLModel implementation of the habit completion store."""

from __future__ import annotations

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import col, select

from ...constants.habits import DEFAULT_HABITS
from ...errors import DuplicateCompletion, HabitNotFound
from ...models.habit import Habit, HabitEntry
from ..database import SessionFactory


class SQLModelHabitRepository:
    """SQLModel-based habit repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, habit_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        with self.session_factory() as session:
            obj = session.get(Habit, habit_id)
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self) -> list[Habit]:
        """List habits, newest first."""
        with self.session_factory() as session:
            statement = select(Habit).order_by(
                col(Habit.created_at).desc(), col(Habit.id).desc()
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, habit: Habit) -> Habit:
        """Create a new habit."""
        with self.session_factory() as session:
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    def seed_defaults(self) -> list[Habit]:
        """Insert the default habits unless the store already has some.

        Returns the existing habits untouched when any are present.
        """
        with self.session_factory() as session:
            existing = list(session.exec(select(Habit)).all())
            if existing:
                session.expunge_all()
                return existing

            created = [Habit(**fields) for fields in DEFAULT_HABITS]
            session.add_all(created)
            session.commit()
            for habit in created:
                session.refresh(habit)
            session.expunge_all()
            return created

    # Completion records
    def get_entry(self, habit_id: int, day: str) -> Optional[HabitEntry]:
        """Get the completion record for one day."""
        with self.session_factory() as session:
            obj = session.exec(
                select(HabitEntry)
                .where(HabitEntry.habit_id == habit_id)
                .where(HabitEntry.date == day)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_entries(self, habit_id: int) -> list[HabitEntry]:
        """Completion records for a habit, newest first."""
        with self.session_factory() as session:
            statement = (
                select(HabitEntry)
                .where(HabitEntry.habit_id == habit_id)
                .order_by(col(HabitEntry.date).desc())
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_entries_on(self, day: str) -> list[HabitEntry]:
        """Completion records across all habits for one day."""
        with self.session_factory() as session:
            statement = (
                select(HabitEntry)
                .where(HabitEntry.date == day)
                .order_by(col(HabitEntry.habit_id))
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_entries_between(self, start: str, end: str) -> list[HabitEntry]:
        """Completion records across all habits with ``start <= date <= end``."""
        with self.session_factory() as session:
            statement = (
                select(HabitEntry)
                .where(HabitEntry.date >= start)
                .where(HabitEntry.date <= end)
                .order_by(col(HabitEntry.date), col(HabitEntry.habit_id))
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def get_completion_dates(self, habit_id: int) -> list[str]:
        """Completed days for a habit as canonical date strings."""
        with self.session_factory() as session:
            statement = select(HabitEntry.date).where(HabitEntry.habit_id == habit_id)
            return list(session.exec(statement).all())

    def mark_complete(self, habit_id: int, day: str, notes: Optional[str] = None) -> HabitEntry:
        """Record a completion for ``day``.

        Raises ``DuplicateCompletion`` when a record already exists, including
        when a concurrent writer inserts it first and the unique constraint
        rejects this one.
        """
        with self.session_factory() as session:
            if session.get(Habit, habit_id) is None:
                raise HabitNotFound(habit_id)

            existing = session.exec(
                select(HabitEntry.id)
                .where(HabitEntry.habit_id == habit_id)
                .where(HabitEntry.date == day)
            ).first()
            if existing is not None:
                raise DuplicateCompletion(habit_id, day)

            entry = HabitEntry(habit_id=habit_id, date=day, notes=notes)
            session.add(entry)
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                raise DuplicateCompletion(habit_id, day) from exc
            session.refresh(entry)
            session.expunge(entry)
            return entry

    def mark_incomplete(self, habit_id: int, day: str) -> bool:
        """Delete the completion for ``day``; a missing record is a no-op."""
        with self.session_factory() as session:
            entry = session.exec(
                select(HabitEntry)
                .where(HabitEntry.habit_id == habit_id)
                .where(HabitEntry.date == day)
            ).first()

            if entry is None:
                return False
            session.delete(entry)
            session.commit()
            return True
