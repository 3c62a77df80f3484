"""Location persistence. Owner joins use selectinload (relationship is lazy="raise")."""

from typing import List, Optional

from sqlalchemy.orm import selectinload

from climatask.models.location import Location
from climatask.repositories.base import Repository


class LocationRepository(Repository[Location]):
    model = Location
    resource = "location"

    async def find_with_user(self, location_id: int) -> Optional[Location]:
        return await self.find_by_id(location_id, options=[selectinload(Location.user)])

    async def list_with_user(self) -> List[Location]:
        return await self.find_many(
            order_by=[Location.id],
            options=[selectinload(Location.user)],
        )

    async def list_by_user(self, user_id: int) -> List[Location]:
        return await self.find_many(
            where=[Location.user_id == user_id],
            order_by=[Location.id],
        )
