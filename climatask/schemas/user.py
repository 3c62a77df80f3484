"""
ClimaTask Backend — User Schemas
==================================

What:  Request bodies for signup/update/login and the public user projection.

The stored bcrypt hash has no field in any response model here. UserPublic is
the only user shape the API ever serializes, including when a user is embedded
in a location or task.
"""

from typing import Annotated, Optional

from pydantic import AfterValidator, Field

from climatask.schemas.common import CamelModel

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_PASSWORD_BYTES = 72


def _check_password_length(value: str) -> str:
    if len(value.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
        raise ValueError(f"password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes")
    return value


Password = Annotated[str, Field(min_length=1), AfterValidator(_check_password_length)]


# ── Requests ──────────────────────────────────────────────────────────────

class UserCreate(CamelModel):
    email: str = Field(min_length=3, max_length=255)
    name: str = Field(min_length=1, max_length=255)
    password: Password


class UserUpdate(CamelModel):
    """
    Partial update. A field that is omitted or null keeps its stored value.
    """
    email: Optional[str] = Field(default=None, min_length=3, max_length=255)
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    password: Optional[Password] = None


class LoginRequest(CamelModel):
    email: str
    password: str


# ── Responses ─────────────────────────────────────────────────────────────

class UserPublic(CamelModel):
    """{id, email, name}: what clients see of a user."""
    id: int
    email: str
    name: str


class UserDeleted(CamelModel):
    """Confirmation body for DELETE /users/{id}."""
    message: str = "deleted user."
    id: int
    email: str
    name: str
