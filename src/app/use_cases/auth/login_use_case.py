"""
Login Use Case

Handles credential verification and session token issuance.
"""

from libs.result import Error, Result, Return
from src.app.services.credentials import CredentialService
from src.app.services.session_tokens import SessionTokenService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import normalize_email, utc_now
from .dtos import AuthResponse


class LoginUseCase:
    """
    Use case for user login and JWT issuance.

    Business Rules:
    - Unknown email and wrong password return the same INVALID_CREDENTIALS error
    - A bcrypt check runs even when the user does not exist (no timing oracle)
    - Updates user.last_login_at
    """

    def __init__(
        self,
        uow: UnitOfWork,
        credentials: CredentialService,
        tokens: SessionTokenService,
    ):
        self.uow = uow
        self.credentials = credentials
        self.tokens = tokens

    async def execute(self, email: str, password: str) -> Result[AuthResponse]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password

        Returns:
            Result with AuthResponse containing the session token, or Error
        """
        invalid = Error("INVALID_CREDENTIALS", "Invalid credentials")

        async with self.uow:
            user = await self.uow.users.get_by_email(normalize_email(email))

            if user is None:
                self.credentials.burn_verification(password)
                return Return.err(invalid)

            if not self.credentials.verify_password(user, password):
                return Return.err(invalid)

            user.last_login_at = utc_now()
            user = await self.uow.users.update(user)
            await self.uow.commit()

            issued = self.tokens.issue(user.id, user.role)

            return Return.ok(
                AuthResponse(
                    message="Success",
                    token=issued.token,
                    expires_at=issued.expires_at,
                    user=self.credentials.serialize_safe(user),
                )
            )
