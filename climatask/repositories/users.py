"""User persistence."""

from typing import List, Optional

from climatask.models.user import User
from climatask.repositories.base import Repository


class UserRepository(Repository[User]):
    model = User
    resource = "user"

    async def find_by_email(self, email: str) -> Optional[User]:
        return await self.find_unique(email=email)

    async def list_all(self) -> List[User]:
        return await self.find_many(order_by=[User.id])
