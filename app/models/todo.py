"""
Todo model.

Represents a single todo item. This is the only table in the system.
"""

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.utils.time import utc_now

PRIORITY_VALUES = ("low", "medium", "high")


class Todo(Base):
    """
    Todo table - one row per task.

    ``id`` uses SQLite AUTOINCREMENT so ids are never reused, even after
    the newest row has been deleted.
    """

    __tablename__ = "todos"
    __table_args__ = (
        CheckConstraint(
            "priority IN ('low', 'medium', 'high')",
            name="ck_todos_priority",
        ),
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    title: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
    )

    completed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )

    priority: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        default="medium",
    )

    # Timestamps are assigned by the application, not the database, so they
    # keep sub-second precision for ordering.
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    def __repr__(self) -> str:
        return f"<Todo id={self.id} title={self.title!r} completed={self.completed}>"
