from typing import Optional

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.categories.dtos import CategoryInfo, to_category_info
from src.domain.entities import Category


class CreateCategoryResponse(BaseModel):
    """Response DTO for CreateCategoryUseCase"""

    message: str
    category: CategoryInfo


class CreateCategoryUseCase:
    """
    Business Rules:
    - Category names are unique (CATEGORY_ALREADY_EXISTS), also under a
      concurrent create caught by the unique index
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, name: str, image: Optional[str] = None
    ) -> Result[CreateCategoryResponse]:
        name = name.strip()
        duplicate = Error("CATEGORY_ALREADY_EXISTS", "Category already exists")

        async with self.uow:
            if await self.uow.categories.get_by_name(name):
                return Return.err(duplicate)

            try:
                category = await self.uow.categories.create(Category(name=name, image=image))
                await self.uow.commit()
            except IntegrityError:
                return Return.err(duplicate)

            return Return.ok(
                CreateCategoryResponse(
                    message="Category created successfully",
                    category=to_category_info(category),
                )
            )
