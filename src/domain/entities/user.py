"""
User Entity

Represents a registered account that uploads and rates resources.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now
from .enums import UserRole


class User(SQLModel, table=True):
    """
    User entity - an account holder.

    Business Rules:
    - Email is unique and stored lower-cased
    - Password stored as bcrypt hash, written only through CredentialService.set_password
    - Reset token stored as SHA-256 digest with an absolute expiry (10 minutes)
    - password_hash and reset fields are never serialized to clients
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=50)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    role: UserRole = Field(default=UserRole.user)

    # Password reset (digest only, raw token is never stored)
    password_reset_token_hash: Optional[str] = Field(default=None, max_length=64)
    password_reset_expires_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_reset_token_hash", "password_reset_token_hash"),)
