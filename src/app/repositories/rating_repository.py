from abc import ABC, abstractmethod
from uuid import UUID


class IRatingRepository(ABC):
    """Rating repository interface - application layer"""

    @abstractmethod
    async def upsert(self, resource_id: UUID, user_id: UUID, value: int) -> None:
        """Insert the (resource, user) rating or overwrite its value, atomically"""
        pass

    @abstractmethod
    async def delete_by_user_id(self, user_id: UUID) -> int:
        """Delete every rating a user has given; returns the number deleted"""
        pass
