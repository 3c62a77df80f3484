"""
ClimaTask Backend — Location SQLAlchemy Model
===============================================

What:  ORM model for the `locations` table: a named geographic point owned by
       a user.

Integrity:
    user_id is a real foreign key. Creating or moving a location to a user id
    that does not exist fails inside the database, and the repository reports
    it as a DatabaseError (HTTP 500).
"""

from typing import Optional

from sqlalchemy import Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from climatask.database import Base
from climatask.models.user import User


class Location(Base):
    """
    A saved place (coordinates + metadata) belonging to one user.

    The `user` relationship is lazy="raise": async sessions cannot lazy-load,
    so every query that needs the owner asks for it with selectinload().
    """

    __tablename__ = "locations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    elevation: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    # IANA zone name, e.g. "Europe/Madrid"
    timezone: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    user: Mapped[User] = relationship(lazy="raise")

    def __repr__(self) -> str:
        return f"<Location(id={self.id}, user_id={self.user_id}, name='{self.name}')>"
