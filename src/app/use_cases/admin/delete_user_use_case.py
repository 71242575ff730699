"""
Use Case: Delete User (admin)

Removes a user together with everything they uploaded.
"""

from typing import List
from uuid import UUID

from pydantic import BaseModel

from libs.result import Error, Result, Return
from src.app.services.cascade import CascadeManager
from src.app.services.file_storage import IFileStorage
from src.app.services.unit_of_work import UnitOfWork


class DeleteUserResponse(BaseModel):
    """Response DTO for DeleteUserUseCase"""

    message: str
    resources_deleted: int
    ratings_deleted: int
    warnings: List[str]


class DeleteUserUseCase:
    """
    Delete a user and cascade to their resources.

    Business Logic:
    1. Validate the user exists (USER_NOT_FOUND)
    2. Remove every backing file of the user's resources (best-effort)
    3. Delete the user's ratings, their resources and those resources' ratings
    4. Delete the user record
    5. Return counts plus a warning per file that may be left behind

    A session token held by the deleted user stops working at once: the
    access gate re-reads the user on every request.
    """

    def __init__(self, uow: UnitOfWork, storage: IFileStorage):
        self.uow = uow
        self.storage = storage

    async def execute(self, user_id: UUID) -> Result[DeleteUserResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            report = await CascadeManager(self.uow, self.storage).delete_user(user)
            await self.uow.commit()

            return Return.ok(
                DeleteUserResponse(
                    message="User and their resources deleted successfully",
                    resources_deleted=report.resources_deleted,
                    ratings_deleted=report.ratings_deleted,
                    warnings=report.warnings,
                )
            )
