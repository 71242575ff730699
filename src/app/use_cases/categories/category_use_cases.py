from typing import List
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from .dtos import CategoryInfo, to_category_info


class ListCategoriesUseCase:
    """All categories sorted by name"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[List[CategoryInfo]]:
        async with self.uow:
            categories = await self.uow.categories.list_all()
            return Return.ok([to_category_info(c) for c in categories])


class GetCategoryUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, category_id: UUID) -> Result[CategoryInfo]:
        async with self.uow:
            category = await self.uow.categories.get_by_id(category_id)
            if category is None:
                return Return.err(Error("CATEGORY_NOT_FOUND", "Category not found"))
            return Return.ok(to_category_info(category))
