"""
Confirm Password Reset Use Case

Handles password reset confirmation with secure token validation.
"""

import logging
from datetime import datetime
from typing import Callable

from libs.result import Error, Result, Return
from src.app.services.credentials import CredentialService
from src.app.services.session_tokens import SessionTokenService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from .dtos import AuthResponse
from .request_password_reset_use_case import hash_reset_token

logger = logging.getLogger(__name__)


class ConfirmPasswordResetUseCase:
    """
    Use case for confirming password reset.

    Business Rules:
    - Token is validated by hashing and comparing with the stored digest
    - Expiry must be strictly after now
    - Unknown, replaced, expired and already-used tokens all give the same
      INVALID_OR_EXPIRED_TOKEN error
    - New password goes through CredentialService.set_password
    - Reset fields are cleared in the same commit, so a token works once
    - Success signs the user in with a fresh session token
    """

    def __init__(
        self,
        uow: UnitOfWork,
        credentials: CredentialService,
        tokens: SessionTokenService,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.uow = uow
        self.credentials = credentials
        self.tokens = tokens
        self.clock = clock

    async def execute(self, raw_token: str, new_password: str) -> Result[AuthResponse]:
        """
        Execute confirm password reset use case.

        Args:
            raw_token: Token from the reset link (never stored)
            new_password: New plain text password

        Returns:
            Result with AuthResponse, or Error(INVALID_OR_EXPIRED_TOKEN)
        """
        async with self.uow:
            user = await self.uow.users.get_by_valid_reset_token_hash(
                hash_reset_token(raw_token), self.clock()
            )

            if user is None:
                return Return.err(
                    Error("INVALID_OR_EXPIRED_TOKEN", "Invalid or expired token")
                )

            self.credentials.set_password(user, new_password)
            user.password_reset_token_hash = None
            user.password_reset_expires_at = None
            user = await self.uow.users.update(user)
            await self.uow.commit()

            logger.info("Password reset completed for user %s", user.id)
            issued = self.tokens.issue(user.id, user.role)

            return Return.ok(
                AuthResponse(
                    message="Password reset successful",
                    token=issued.token,
                    expires_at=issued.expires_at,
                    user=self.credentials.serialize_safe(user),
                )
            )
