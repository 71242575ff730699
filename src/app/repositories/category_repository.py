from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Category


class ICategoryRepository(ABC):
    """Category repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, category_id: UUID) -> Optional[Category]:
        """Get category by ID"""
        pass

    @abstractmethod
    async def get_by_name(self, name: str) -> Optional[Category]:
        """Get category by exact name"""
        pass

    @abstractmethod
    async def list_all(self) -> List[Category]:
        """List categories sorted by name"""
        pass

    @abstractmethod
    async def create(self, category: Category) -> Category:
        """Create a new category"""
        pass

    @abstractmethod
    async def delete_if_unreferenced(self, category_id: UUID) -> bool:
        """Delete the category only if no resource references it; True if deleted"""
        pass
