from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Resource


class IResourceRepository(ABC):
    """Resource repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, resource_id: UUID) -> Optional[Resource]:
        """Get resource by ID (category, uploader and ratings loaded)"""
        pass

    @abstractmethod
    async def list_page(
        self, category_id: Optional[UUID], offset: int, limit: int
    ) -> List[Resource]:
        """List resources newest first, optionally filtered by category"""
        pass

    @abstractmethod
    async def count(self, category_id: Optional[UUID] = None) -> int:
        """Count resources, optionally only those in a category"""
        pass

    @abstractmethod
    async def list_by_uploader(self, user_id: UUID) -> List[Resource]:
        """List a user's uploads newest first"""
        pass

    @abstractmethod
    async def list_all(self) -> List[Resource]:
        """List every resource newest first"""
        pass

    @abstractmethod
    async def search(self, term: str) -> List[Resource]:
        """Case-insensitive substring search over title and description"""
        pass

    @abstractmethod
    async def create(self, resource: Resource) -> Resource:
        """Create a new resource"""
        pass

    @abstractmethod
    async def refresh_ratings(self, resource: Resource) -> Resource:
        """Reload the ratings collection of a resource"""
        pass

    @abstractmethod
    async def delete(self, resource: Resource) -> None:
        """Delete a resource record and its ratings"""
        pass
