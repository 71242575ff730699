"""
Credential Store

Password hashing and verification for User records.

set_password() is the only code path that writes User.password_hash:
registration, password change and password reset all go through it, so every
stored hash is a freshly salted bcrypt digest. Nothing else may assign the
field directly.
"""

from datetime import datetime
from typing import Optional

import bcrypt
from pydantic import BaseModel

from src.domain.entities import User, UserRole


# bcrypt only uses the first 72 bytes of a password; newer releases reject longer input
BCRYPT_MAX_BYTES = 72


def _password_bytes(raw_password: str) -> bytes:
    return raw_password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class PasswordHashingError(Exception):
    """bcrypt could not hash or check a password (e.g. corrupt stored hash)"""


class UserInfo(BaseModel):
    """Client-safe user representation - no hash, no reset fields"""

    id: str
    name: str
    email: str
    role: str
    created_at: datetime
    last_login_at: Optional[datetime] = None


class CredentialService:
    """
    Business Rules:
    - bcrypt with a per-hash random salt; cost factor from config (default 12)
    - Verification never raises on mismatch, only on hashing failure
    - Unknown users still cost one bcrypt check (no timing oracle)
    """

    def __init__(self, rounds: int = 12):
        self.rounds = rounds
        self._dummy_hash: Optional[bytes] = None

    def _hash(self, raw_password: str) -> str:
        try:
            hashed = bcrypt.hashpw(_password_bytes(raw_password), bcrypt.gensalt(self.rounds))
        except ValueError as exc:
            raise PasswordHashingError("Password hashing failed") from exc
        return hashed.decode("utf-8")

    def set_password(self, user: User, raw_password: str) -> None:
        """Hash raw_password and store it on the user"""
        user.password_hash = self._hash(raw_password)

    def verify_password(self, user: User, raw_password: str) -> bool:
        """Check raw_password against the user's stored hash"""
        try:
            return bcrypt.checkpw(
                _password_bytes(raw_password), user.password_hash.encode("utf-8")
            )
        except ValueError as exc:
            raise PasswordHashingError("Password verification failed") from exc

    def burn_verification(self, raw_password: str) -> None:
        """Spend one bcrypt check when there is no user to verify against"""
        if self._dummy_hash is None:
            self._dummy_hash = bcrypt.hashpw(b"resource-hub-timing-dummy", bcrypt.gensalt(self.rounds))
        bcrypt.checkpw(_password_bytes(raw_password), self._dummy_hash)

    @staticmethod
    def serialize_safe(user: User) -> UserInfo:
        return UserInfo(
            id=str(user.id),
            name=user.name,
            email=user.email,
            role=UserRole(user.role).value,
            created_at=user.created_at,
            last_login_at=user.last_login_at,
        )
