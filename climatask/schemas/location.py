"""ClimaTask Backend — Location Schemas."""

from typing import Optional

from pydantic import Field, field_validator

from climatask.schemas.common import CamelModel
from climatask.schemas.user import UserPublic


class LocationCreate(CamelModel):
    user_id: int
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    elevation: Optional[float] = None
    timezone: Optional[str] = Field(default=None, max_length=64)


class LocationUpdate(CamelModel):
    """
    Partial update limited to the location's own attributes.

    Keys that are not attributes of a location are ignored. Keys that are
    present are applied as given; required columns may not be set to null.
    """
    user_id: Optional[int] = None
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    elevation: Optional[float] = None
    timezone: Optional[str] = Field(default=None, max_length=64)

    @field_validator("user_id", "latitude", "longitude", "name")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("may be omitted but not set to null")
        return v


class LocationResponse(CamelModel):
    id: int
    user_id: int
    latitude: float
    longitude: float
    name: str
    description: Optional[str] = None
    elevation: Optional[float] = None
    timezone: Optional[str] = None


class LocationWithUser(LocationResponse):
    """Location with its owner embedded (public projection)."""
    user: UserPublic


class LocationDeleted(LocationResponse):
    message: str = "Location deleted"
