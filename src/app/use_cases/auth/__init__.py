"""
Authentication Use Cases

Registration, login, password management and account deletion.
"""

from .register_use_case import RegisterUseCase
from .login_use_case import LoginUseCase
from .change_password_use_case import ChangePasswordUseCase
from .delete_account_use_case import DeleteAccountUseCase
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .confirm_password_reset_use_case import ConfirmPasswordResetUseCase
from .dtos import (
    RegisterCommand,
    AuthResponse,
    ChangePasswordResponse,
    DeleteAccountResponse,
    RequestPasswordResetResponse,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "ChangePasswordUseCase",
    "DeleteAccountUseCase",
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
    # DTOs - Commands
    "RegisterCommand",
    # DTOs - Responses
    "AuthResponse",
    "ChangePasswordResponse",
    "DeleteAccountResponse",
    "RequestPasswordResetResponse",
]
