from uuid import UUID, uuid4

from sqlalchemy import delete
from sqlalchemy.dialects import postgresql, sqlite
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.rating_repository import IRatingRepository
from src.domain.base import utc_now
from src.domain.entities import Rating


class RatingRepository(IRatingRepository):
    """Rating repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _insert(self):
        if self.session.bind.dialect.name == "postgresql":
            return postgresql.insert(Rating)
        return sqlite.insert(Rating)

    async def upsert(self, resource_id: UUID, user_id: UUID, value: int) -> None:
        """
        Insert the (resource, user) rating or overwrite its value.

        A single INSERT ... ON CONFLICT statement keyed by the unique
        (resource_id, user_id) constraint: concurrent first ratings from
        different users both land, repeated ratings from one user update in place.
        """
        stmt = self._insert().values(
            id=uuid4(),
            resource_id=resource_id,
            user_id=user_id,
            rating=value,
            created_at=utc_now(),
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["resource_id", "user_id"],
            set_={"rating": stmt.excluded.rating},
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def delete_by_user_id(self, user_id: UUID) -> int:
        """Delete every rating a user has given; returns the number deleted"""
        stmt = (
            delete(Rating)
            .where(Rating.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
