"""
ClimaTask Backend — Task SQLAlchemy Model
===========================================

What:  ORM model for the `tasks` table: a to-do item owned by a user.

Query Patterns:
    - All tasks, newest first:   ORDER BY created_at DESC, id DESC
    - A user's tasks, newest first: WHERE user_id = :id ORDER BY created_at DESC, id DESC
      → idx_tasks_user_created (user_id, created_at) serves the filter and,
        scanned backwards, the sort
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    false,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from climatask.database import Base
from climatask.models.user import User


class Task(Base):
    """
    A to-do item.

    is_completed and created_at are owned by the schema defaults: clients never
    send created_at, and a task starts out incomplete.
    """

    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    is_completed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    # Python-side default keeps microsecond precision on every backend,
    # which the newest-first ordering relies on.
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
    )

    user: Mapped[User] = relationship(lazy="raise")

    __table_args__ = (
        Index("idx_tasks_user_created", "user_id", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<Task(id={self.id}, user_id={self.user_id}, "
            f"is_completed={self.is_completed}, created_at='{self.created_at}')>"
        )
