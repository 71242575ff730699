from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.resource_repository import IResourceRepository
from src.domain.entities import Resource


def _select_resources():
    # Always overwrite identity-mapped rows so rating collections are never stale
    return select(Resource).execution_options(populate_existing=True)


class ResourceRepository(IResourceRepository):
    """Resource repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, resource_id: UUID) -> Optional[Resource]:
        """Get resource by ID (category, uploader and ratings loaded)"""
        stmt = _select_resources().where(Resource.id == resource_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_page(
        self, category_id: Optional[UUID], offset: int, limit: int
    ) -> List[Resource]:
        """List resources newest first, optionally filtered by category"""
        stmt = _select_resources()
        if category_id is not None:
            stmt = stmt.where(Resource.category_id == category_id)
        stmt = stmt.order_by(Resource.created_at.desc()).offset(offset).limit(limit)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count(self, category_id: Optional[UUID] = None) -> int:
        """Count resources, optionally only those in a category"""
        stmt = select(func.count()).select_from(Resource)
        if category_id is not None:
            stmt = stmt.where(Resource.category_id == category_id)
        result = await self.session.exec(stmt)
        return result.one()

    async def list_by_uploader(self, user_id: UUID) -> List[Resource]:
        """List a user's uploads newest first"""
        stmt = (
            _select_resources()
            .where(Resource.uploaded_by == user_id)
            .order_by(Resource.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_all(self) -> List[Resource]:
        """List every resource newest first"""
        stmt = _select_resources().order_by(Resource.created_at.desc())
        result = await self.session.exec(stmt)
        return list(result.all())

    async def search(self, term: str) -> List[Resource]:
        """Case-insensitive substring search over title and description"""
        needle = term.lower()
        stmt = (
            _select_resources()
            .where(
                or_(
                    func.lower(Resource.title).contains(needle, autoescape=True),
                    func.lower(Resource.description).contains(needle, autoescape=True),
                )
            )
            .order_by(Resource.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, resource: Resource) -> Resource:
        """Create a new resource"""
        self.session.add(resource)
        await self.session.flush()
        await self.session.refresh(resource)
        return resource

    async def refresh_ratings(self, resource: Resource) -> Resource:
        """Reload the ratings collection of a resource"""
        # Upserts bypass the identity map; stale rows must reload their values
        for rating in resource.ratings:
            self.session.expire(rating)
        await self.session.refresh(resource, attribute_names=["ratings"])
        return resource

    async def delete(self, resource: Resource) -> None:
        """Delete a resource record and its ratings"""
        await self.session.delete(resource)
        await self.session.flush()
