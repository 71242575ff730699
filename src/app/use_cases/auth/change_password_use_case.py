from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.credentials import CredentialService
from src.app.services.unit_of_work import UnitOfWork
from .dtos import ChangePasswordResponse


class ChangePasswordUseCase:
    """
    Use case for changing the signed-in user's password.

    Business Rules:
    - Current password must verify (INCORRECT_PASSWORD otherwise)
    - New password is hashed through CredentialService.set_password
    - Already issued session tokens stay valid until they expire
    """

    def __init__(self, uow: UnitOfWork, credentials: CredentialService):
        self.uow = uow
        self.credentials = credentials

    async def execute(
        self, user_id: UUID, current_password: str, new_password: str
    ) -> Result[ChangePasswordResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if not self.credentials.verify_password(user, current_password):
                return Return.err(
                    Error("INCORRECT_PASSWORD", "Current password is incorrect")
                )

            self.credentials.set_password(user, new_password)
            await self.uow.users.update(user)
            await self.uow.commit()

            return Return.ok(ChangePasswordResponse(message="Password changed successfully"))
