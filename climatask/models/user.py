"""
ClimaTask Backend — User SQLAlchemy Model
===========================================

What:  ORM model for the `users` table (identity + credential record).
Who:   Used by UserRepository and, through relationships, by Location/Task.

Table Design:
    - Integer primary key generated by the database
    - email: UNIQUE; checked by the service before insert/update as well
    - password: bcrypt hash (60 chars); the plaintext is never stored
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from climatask.database import Base


class User(Base):
    """
    A registered user.

    Lifecycle:
        1. Created on signup (POST /users) with a freshly hashed password
        2. Partially updated (PUT /users/{id}); a new password is rehashed
        3. Hard-deleted (DELETE /users/{id}); locations and tasks go with it
           through ON DELETE CASCADE on their foreign keys
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="Login identifier, unique across users",
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    # bcrypt output, e.g. "$2b$10$..." (60 chars)
    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="bcrypt hash of the user's password",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
