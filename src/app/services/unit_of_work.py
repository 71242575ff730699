from abc import ABC, abstractmethod

from src.app.repositories.category_repository import ICategoryRepository
from src.app.repositories.rating_repository import IRatingRepository
from src.app.repositories.resource_repository import IResourceRepository
from src.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    categories: ICategoryRepository
    resources: IResourceRepository
    ratings: IRatingRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
