from typing import List

from libs.result import Result, Return
from src.app.services.credentials import CredentialService, UserInfo
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.resources.dtos import ResourceInfo, to_resource_info


class ListUsersUseCase:
    """Every user, newest first, without password or reset fields"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[List[UserInfo]]:
        async with self.uow:
            users = await self.uow.users.list_all()
            return Return.ok([CredentialService.serialize_safe(u) for u in users])


class ListAllResourcesUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[List[ResourceInfo]]:
        async with self.uow:
            resources = await self.uow.resources.list_all()
            return Return.ok([to_resource_info(r) for r in resources])
