"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime

from pydantic import BaseModel

from src.app.services.credentials import UserInfo


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """Validated registration intent"""

    name: str
    email: str
    password: str


# ============================================================================
# Response DTOs
# ============================================================================


class AuthResponse(BaseModel):
    """Response for use cases that sign the user in (register, login, reset)"""

    message: str
    token: str
    expires_at: datetime
    user: UserInfo


class ChangePasswordResponse(BaseModel):
    """Response for change password use case"""

    message: str


class DeleteAccountResponse(BaseModel):
    """Response for delete account use case"""

    message: str
    resources_deleted: int
    warnings: list[str]


class RequestPasswordResetResponse(BaseModel):
    """Response for request password reset use case"""

    status: str
    message: str
