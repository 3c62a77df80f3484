"""ORM models. Importing this package registers every table on Base.metadata."""

from climatask.models.user import User
from climatask.models.location import Location
from climatask.models.task import Task

__all__ = ["User", "Location", "Task"]
