from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.category_repository import CategoryRepository
from src.adapter.repositories.rating_repository import RatingRepository
from src.adapter.repositories.resource_repository import ResourceRepository
from src.adapter.repositories.user_repository import UserRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.categories = CategoryRepository(self.session)
        self.resources = ResourceRepository(self.session)
        self.ratings = RatingRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
