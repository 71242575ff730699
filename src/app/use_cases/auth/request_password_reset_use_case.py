"""
Request Password Reset Use Case

Handles generating and emailing single-use password reset tokens.
"""

import hashlib
import logging
import secrets
from datetime import datetime, timedelta
from typing import Callable

from libs.result import Result, Return
from src.app.services.email_sender import EmailDeliveryError, IEmailSender, OutboundEmail
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import normalize_email, utc_now
from .dtos import RequestPasswordResetResponse

logger = logging.getLogger(__name__)

RESET_TOKEN_TTL = timedelta(minutes=10)
RESET_EMAIL_SUBJECT = "Password Reset Token"
RESET_ACK_MESSAGE = "If an account with that email exists, a reset link will be sent."


def hash_reset_token(raw_token: str) -> str:
    """SHA-256 hex digest; only the digest is ever stored"""
    return hashlib.sha256(raw_token.encode("utf-8")).hexdigest()


class RequestPasswordResetUseCase:
    """
    Use case for requesting password reset.

    Business Rules:
    - Token is 32 random bytes, URL-safe; only its SHA-256 digest is stored
    - Token expires 10 minutes after issue
    - A new request replaces any earlier outstanding token
    - No email enumeration: the same acknowledgement for known and unknown emails
    - If the email cannot be sent, the stored token is cleared again (unless a
      newer request has already replaced it); the caller still gets the
      acknowledgement so dispatch failures leak nothing either
    """

    def __init__(
        self,
        uow: UnitOfWork,
        email_sender: IEmailSender,
        reset_url: str,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.uow = uow
        self.email_sender = email_sender
        self.reset_url = reset_url
        self.clock = clock

    def _build_email(self, recipient: str, raw_token: str) -> OutboundEmail:
        link = f"{self.reset_url}?token={raw_token}"
        body = (
            "You are receiving this email because you (or someone else) has requested "
            f"the reset of a password. Please open the following link to continue: \n\n{link}\n\n"
            "The link expires in 10 minutes. If you did not request this, ignore this email."
        )
        return OutboundEmail(recipient=recipient, subject=RESET_EMAIL_SUBJECT, body=body)

    async def execute(self, email: str) -> Result[RequestPasswordResetResponse]:
        acknowledged = RequestPasswordResetResponse(status="sent", message=RESET_ACK_MESSAGE)

        async with self.uow:
            user = await self.uow.users.get_by_email(normalize_email(email))

            if user is None:
                return Return.ok(acknowledged)

            raw_token = secrets.token_urlsafe(32)
            token_hash = hash_reset_token(raw_token)

            user.password_reset_token_hash = token_hash
            user.password_reset_expires_at = self.clock() + RESET_TOKEN_TTL
            await self.uow.users.update(user)
            await self.uow.commit()

            user_id = user.id
            recipient = user.email

            try:
                await self.email_sender.send(self._build_email(recipient, raw_token))
            except EmailDeliveryError as exc:
                logger.error("Password reset email for user %s failed: %s", user_id, exc)
                await self.uow.users.clear_reset_token(user_id, token_hash)
                await self.uow.commit()
                return Return.ok(acknowledged)

            logger.info("Password reset email sent for user %s", user_id)
            return Return.ok(acknowledged)
