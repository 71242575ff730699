from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.cascade import CascadeManager
from src.app.services.file_storage import IFileStorage
from src.app.services.unit_of_work import UnitOfWork
from src.domain.identity import Caller, can_delete_resource
from .dtos import DeleteResourceResponse


class DeleteResourceUseCase:
    """
    Use case for deleting a single resource.

    Business Rules:
    - Only the uploader or an admin may delete (FORBIDDEN otherwise)
    - Backing file removal is best-effort; failures come back as warnings
    - Ratings go with the resource; category and uploader are untouched
    """

    def __init__(self, uow: UnitOfWork, storage: IFileStorage):
        self.uow = uow
        self.storage = storage

    async def execute(self, caller: Caller, resource_id: UUID) -> Result[DeleteResourceResponse]:
        async with self.uow:
            resource = await self.uow.resources.get_by_id(resource_id)
            if resource is None:
                return Return.err(Error("RESOURCE_NOT_FOUND", "Resource not found"))

            if not can_delete_resource(caller, resource.uploaded_by):
                return Return.err(
                    Error("FORBIDDEN", "You are not authorized to delete this resource")
                )

            report = await CascadeManager(self.uow, self.storage).delete_resource(resource)
            await self.uow.commit()

            return Return.ok(
                DeleteResourceResponse(
                    message="Resource deleted successfully", warnings=report.warnings
                )
            )
