"""
Session Token Issuer/Verifier

Stateless HS256 JWTs carrying the caller's id and role. There is no
server-side session table and no revocation list: a token stays valid until
its expiry even if the user's role changes in the meantime.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Callable
from uuid import UUID

from jose import JWTError, jwt

from libs.result import Error, Result, Return
from src.domain.entities import UserRole

SESSION_TOKEN_TTL = timedelta(hours=1)
SESSION_COOKIE_NAME = "token"


@dataclass(frozen=True)
class AuthSettings:
    """
    Signing secret and cookie profile handed to the token service and gate.

    cross_origin_cookies marks the cross-origin production deployment, where
    the session cookie must carry Secure and SameSite=None.
    """

    jwt_secret: str
    cross_origin_cookies: bool = False
    algorithm: str = "HS256"
    session_ttl: timedelta = SESSION_TOKEN_TTL

    @classmethod
    def from_config(cls, config) -> "AuthSettings":
        return cls(
            jwt_secret=config.JWT_SECRET,
            cross_origin_cookies=config.DEPLOYMENT_PROFILE == "production",
        )


@dataclass(frozen=True)
class IssuedToken:
    token: str
    expires_at: datetime  # aware UTC


@dataclass(frozen=True)
class SessionClaims:
    user_id: UUID
    role: UserRole


def _now() -> datetime:
    return datetime.now(UTC)


class SessionTokenService:
    def __init__(self, settings: AuthSettings, clock: Callable[[], datetime] = _now):
        self.settings = settings
        self.clock = clock

    def issue(self, user_id: UUID, role: UserRole) -> IssuedToken:
        """
        Generate a signed session token

        Args:
            user_id: User UUID
            role: User role (user, admin)

        Returns:
            IssuedToken with the JWT string and its absolute expiry
        """
        now = self.clock()
        expires_at = now + self.settings.session_ttl
        payload = {
            "user_id": str(user_id),
            "role": UserRole(role).value,
            "exp": expires_at,
            "iat": now,
        }
        token = jwt.encode(payload, self.settings.jwt_secret, algorithm=self.settings.algorithm)
        return IssuedToken(token=token, expires_at=expires_at)

    def verify(self, token: str) -> Result[SessionClaims]:
        """
        Verify signature and expiry, then decode the identity claims

        Returns:
            Result with SessionClaims, or Error(INVALID_TOKEN)
        """
        invalid = Error("INVALID_TOKEN", "Invalid or expired token")
        try:
            payload = jwt.decode(
                token,
                self.settings.jwt_secret,
                algorithms=[self.settings.algorithm],
                options={"require_exp": True},
            )
        except JWTError:
            return Return.err(invalid)

        try:
            claims = SessionClaims(
                user_id=UUID(payload["user_id"]), role=UserRole(payload["role"])
            )
        except (KeyError, TypeError, ValueError):
            return Return.err(invalid)

        return Return.ok(claims)
