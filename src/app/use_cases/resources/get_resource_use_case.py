from typing import List
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.file_storage import IFileStorage
from src.app.services.unit_of_work import UnitOfWork
from .dtos import ResourceFile, ResourceInfo, to_resource_info


class GetResourceUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, resource_id: UUID) -> Result[ResourceInfo]:
        async with self.uow:
            resource = await self.uow.resources.get_by_id(resource_id)
            if resource is None:
                return Return.err(Error("RESOURCE_NOT_FOUND", "Resource not found"))
            return Return.ok(to_resource_info(resource))


class ListMyResourcesUseCase:
    """The caller's own uploads, newest first"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[List[ResourceInfo]]:
        async with self.uow:
            resources = await self.uow.resources.list_by_uploader(user_id)
            return Return.ok([to_resource_info(r) for r in resources])


class GetResourceFileUseCase:
    """
    Locate the backing file of a resource for download.

    Business Rules:
    - RESOURCE_NOT_FOUND when the record is gone
    - FILE_NOT_FOUND when the record exists but its file was lost
    """

    def __init__(self, uow: UnitOfWork, storage: IFileStorage):
        self.uow = uow
        self.storage = storage

    async def execute(self, resource_id: UUID) -> Result[ResourceFile]:
        async with self.uow:
            resource = await self.uow.resources.get_by_id(resource_id)
            if resource is None:
                return Return.err(Error("RESOURCE_NOT_FOUND", "Resource not found"))

            if not await self.storage.exists(resource.file_path):
                return Return.err(Error("FILE_NOT_FOUND", "File not found"))

            return Return.ok(
                ResourceFile(
                    path=resource.file_path,
                    file_name=resource.file_name,
                    content_type=resource.file_type,
                )
            )
