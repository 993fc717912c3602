"""Habits tracking data structures."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar, Optional

from sqlalchemy import UniqueConstraint
from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Habit(SQLModel, table=True):
    """A user-defined habit the app tracks daily."""

    __tablename__: ClassVar[str] = "habit"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, max_length=80, index=True)
    icon: str = Field(default="", max_length=16)
    color: str = Field(default="#6366F1", max_length=16)
    description: str = Field(default="", max_length=255)
    target_frequency: str = Field(default="daily", max_length=32)
    created_at: datetime = Field(default_factory=_utcnow, nullable=False)

    entries: list["HabitEntry"] = Relationship(
        back_populates="habit",
        sa_relationship=relationship(
            "HabitEntry", back_populates="habit", cascade="all, delete-orphan"
        ),
    )


class HabitEntry(SQLModel, table=True):
    """Completion record for a habit on one local calendar day."""

    __tablename__: ClassVar[str] = "habit_entry"
    __table_args__ = (UniqueConstraint("habit_id", "date", name="uq_habit_entry_habit_date"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    habit_id: int = Field(foreign_key="habit.id", nullable=False, index=True)
    # Canonical YYYY-MM-DD in the user's local zone.
    date: str = Field(nullable=False, max_length=10, index=True)
    completed_at: datetime = Field(default_factory=_utcnow, nullable=False)
    notes: Optional[str] = Field(default=None, max_length=500)

    habit: "Habit" = Relationship(
        back_populates="entries",
        sa_relationship=relationship("Habit", back_populates="entries"),
    )
