"""
ClimaTask Backend — Location Service
======================================

What:  CRUD for user-owned locations.
How:   Thin orchestration over LocationRepository. Referential integrity
       (userId must exist) is left to the database; a dangling userId comes
       back from the repository as DatabaseError (→ 500).
"""

import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from climatask.exceptions import NotFoundError
from climatask.repositories.locations import LocationRepository
from climatask.schemas.location import (
    LocationCreate,
    LocationDeleted,
    LocationResponse,
    LocationUpdate,
    LocationWithUser,
)

logger = logging.getLogger(__name__)


class LocationService:

    async def create_location(self, db: AsyncSession, payload: LocationCreate) -> LocationResponse:
        locations = LocationRepository(db)
        location = await locations.create(**payload.model_dump())
        await locations.commit()
        logger.info("Location created: id=%s user_id=%s", location.id, location.user_id)
        return LocationResponse.model_validate(location)

    async def list_locations(self, db: AsyncSession) -> List[LocationWithUser]:
        locations = await LocationRepository(db).list_with_user()
        return [LocationWithUser.model_validate(location) for location in locations]

    async def get_location(self, db: AsyncSession, location_id: int) -> LocationWithUser:
        location = await LocationRepository(db).find_with_user(location_id)
        if location is None:
            raise NotFoundError(resource="location", resource_id=location_id)
        return LocationWithUser.model_validate(location)

    async def update_location(
        self, db: AsyncSession, location_id: int, payload: LocationUpdate
    ) -> LocationResponse:
        """Apply only the fields present in the request body."""
        changes = payload.model_dump(exclude_unset=True)
        locations = LocationRepository(db)
        location = await locations.update(location_id, changes)
        await locations.commit()
        logger.info("Location updated: id=%s fields=%s", location_id, sorted(changes))
        return LocationResponse.model_validate(location)

    async def delete_location(self, db: AsyncSession, location_id: int) -> LocationDeleted:
        locations = LocationRepository(db)
        location = await locations.delete(location_id)
        await locations.commit()
        logger.info("Location deleted: id=%s", location_id)
        return LocationDeleted.model_validate(location)

    async def list_user_locations(self, db: AsyncSession, user_id: int) -> List[LocationResponse]:
        locations = await LocationRepository(db).list_by_user(user_id)
        return [LocationResponse.model_validate(location) for location in locations]
