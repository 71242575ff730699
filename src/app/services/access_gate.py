"""
Access Gate

Resolves the caller behind a session token and enforces the admin role.
Authentication always re-reads the user from the store so that deleted
accounts lose access immediately, even with an unexpired token.
"""

import logging
from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.session_tokens import SessionTokenService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.identity import (
    AdminUser,
    AnonymousCaller,
    Caller,
    caller_for,
)

logger = logging.getLogger(__name__)


class AccessGate:
    def __init__(self, uow: UnitOfWork, tokens: SessionTokenService):
        self.uow = uow
        self.tokens = tokens

    async def authenticate(self, token: Optional[str]) -> Result[Caller]:
        """
        Resolve the caller for a session token.

        Returns:
            AnonymousCaller when no token is presented, AuthenticatedUser or
            AdminUser when the token verifies and its user still exists, or
            Error(INVALID_TOKEN / USER_NOT_FOUND)
        """
        if not token:
            return Return.ok(AnonymousCaller())

        verified = self.tokens.verify(token)
        if verified.is_err():
            return Return.err(verified.error)
        claims = verified.value

        async with self.uow:
            user = await self.uow.users.get_by_id(claims.user_id)
            if user is None:
                logger.info("Session token presented for missing user %s", claims.user_id)
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

        # Role comes from the token; changes apply from the next login
        return Return.ok(caller_for(claims.user_id, claims.role))

    @staticmethod
    def authorize_admin(caller: Caller) -> Result[AdminUser]:
        if isinstance(caller, AdminUser):
            return Return.ok(caller)
        if isinstance(caller, AnonymousCaller):
            return Return.err(Error("NOT_AUTHENTICATED", "No token provided"))
        return Return.err(Error("ADMIN_REQUIRED", "Admin access required"))
