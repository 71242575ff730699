from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.cascade import CascadeManager
from src.app.services.credentials import CredentialService
from src.app.services.file_storage import IFileStorage
from src.app.services.unit_of_work import UnitOfWork
from .dtos import DeleteAccountResponse


class DeleteAccountUseCase:
    """
    Use case for a user deleting their own account.

    Business Rules:
    - Password confirmation required (INCORRECT_PASSWORD otherwise)
    - Runs the same cascade as an admin user deletion, so no resource is
      left pointing at the removed account
    """

    def __init__(
        self,
        uow: UnitOfWork,
        credentials: CredentialService,
        storage: IFileStorage,
    ):
        self.uow = uow
        self.credentials = credentials
        self.storage = storage

    async def execute(self, user_id: UUID, password: str) -> Result[DeleteAccountResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if not self.credentials.verify_password(user, password):
                return Return.err(Error("INCORRECT_PASSWORD", "Password is incorrect"))

            report = await CascadeManager(self.uow, self.storage).delete_user(user)
            await self.uow.commit()

            return Return.ok(
                DeleteAccountResponse(
                    message="Account deleted successfully",
                    resources_deleted=report.resources_deleted,
                    warnings=report.warnings,
                )
            )
