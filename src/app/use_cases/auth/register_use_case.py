import logging

from sqlalchemy.exc import IntegrityError

from libs.result import Error, Result, Return
from src.app.services.credentials import CredentialService
from src.app.services.session_tokens import SessionTokenService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import normalize_email
from src.domain.entities import User, UserRole
from .dtos import AuthResponse, RegisterCommand

logger = logging.getLogger(__name__)


class RegisterUseCase:
    """
    Register Use Case

    Command/Response Pattern:
    - Input: RegisterCommand (validated business intent)
    - Output: Result[AuthResponse] (safe user + session token)

    Business Logic:
    1. Normalize email (trim, lower-case)
    2. Reject duplicates with EMAIL_ALREADY_EXISTS, including a concurrent
       insert caught by the unique index
    3. Hash password through CredentialService.set_password
    4. Create User with role=user
    5. Commit, then issue a session token (registration signs the user in)
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

    async def execute(self, command: RegisterCommand) -> Result[AuthResponse]:
        email = normalize_email(command.email)
        duplicate = Error("EMAIL_ALREADY_EXISTS", "User already exists")

        async with self.uow:
            existing_user = await self.uow.users.get_by_email(email)
            if existing_user:
                return Return.err(duplicate)

            user = User(name=command.name.strip(), email=email, role=UserRole.user)
            self.credentials.set_password(user, command.password)

            try:
                user = await self.uow.users.create(user)
                await self.uow.commit()
            except IntegrityError:
                logger.info("Concurrent registration for the same email rejected")
                return Return.err(duplicate)

            issued = self.tokens.issue(user.id, user.role)

            return Return.ok(
                AuthResponse(
                    message="User registered successfully",
                    token=issued.token,
                    expires_at=issued.expires_at,
                    user=self.credentials.serialize_safe(user),
                )
            )
