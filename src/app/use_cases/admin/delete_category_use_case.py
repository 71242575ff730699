from uuid import UUID

from pydantic import BaseModel

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork


class DeleteCategoryResponse(BaseModel):
    """Response DTO for DeleteCategoryUseCase"""

    message: str


def _in_use(count: int) -> Error:
    return Error(
        "CATEGORY_IN_USE",
        f"Cannot delete category. It is currently associated with {count} resource(s).",
        reason=str(count),
    )


class DeleteCategoryUseCase:
    """
    Delete a category nobody uses.

    Business Rules:
    - CATEGORY_NOT_FOUND when absent
    - CATEGORY_IN_USE with the reference count while any resource points at it
    - The final delete re-checks references in the same statement, so an
      upload racing the count still blocks deletion
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, category_id: UUID) -> Result[DeleteCategoryResponse]:
        async with self.uow:
            category = await self.uow.categories.get_by_id(category_id)
            if category is None:
                return Return.err(Error("CATEGORY_NOT_FOUND", "Category not found"))

            count = await self.uow.resources.count(category_id)
            if count > 0:
                return Return.err(_in_use(count))

            if not await self.uow.categories.delete_if_unreferenced(category_id):
                count = await self.uow.resources.count(category_id)
                return Return.err(_in_use(count))

            await self.uow.commit()
            return Return.ok(DeleteCategoryResponse(message="Category deleted successfully"))
