from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, exists
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.category_repository import ICategoryRepository
from src.domain.entities import Category, Resource


class CategoryRepository(ICategoryRepository):
    """Category repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, category_id: UUID) -> Optional[Category]:
        """Get category by ID"""
        stmt = select(Category).where(Category.id == category_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_name(self, name: str) -> Optional[Category]:
        """Get category by exact name"""
        stmt = select(Category).where(Category.name == name)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_all(self) -> List[Category]:
        """List categories sorted by name"""
        stmt = select(Category).order_by(Category.name)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, category: Category) -> Category:
        """Create a new category"""
        self.session.add(category)
        await self.session.flush()
        await self.session.refresh(category)
        return category

    async def delete_if_unreferenced(self, category_id: UUID) -> bool:
        """
        Delete the category only if no resource references it.

        The reference check and the delete run as one statement, so a resource
        inserted between an earlier count and this call still blocks deletion.
        """
        stmt = (
            delete(Category)
            .where(
                Category.id == category_id,
                ~exists().where(Resource.category_id == category_id),
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0
