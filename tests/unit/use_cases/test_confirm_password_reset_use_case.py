"""
Unit tests for ConfirmPasswordResetUseCase
"""
from datetime import datetime, timedelta

import pytest

from src.app.use_cases.auth.confirm_password_reset_use_case import ConfirmPasswordResetUseCase
from src.app.use_cases.auth.request_password_reset_use_case import hash_reset_token
from tests.utils.builders import build_user

NOW = datetime(2024, 3, 1, 12, 0, 0)


@pytest.mark.asyncio
async def test_successful_password_reset(mock_uow, credentials, tokens):
    # Arrange
    user = build_user(credentials, password="OldPassword1")
    user.password_reset_token_hash = hash_reset_token("raw-token")
    user.password_reset_expires_at = NOW + timedelta(minutes=5)
    mock_uow.users.get_by_valid_reset_token_hash.return_value = user
    use_case = ConfirmPasswordResetUseCase(mock_uow, credentials, tokens, clock=lambda: NOW)

    # Act
    result = await use_case.execute("raw-token", "NewPassword2")

    # Assert
    assert result.is_ok()
    assert result.value.message == "Password reset successful"
    assert tokens.verify(result.value.token).value.user_id == user.id

    mock_uow.users.get_by_valid_reset_token_hash.assert_called_once_with(
        hash_reset_token("raw-token"), NOW
    )
    assert credentials.verify_password(user, "NewPassword2")
    assert user.password_reset_token_hash is None
    assert user.password_reset_expires_at is None
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_invalid_or_expired_token(mock_uow, credentials, tokens):
    """Lookup already filters on expiry; no match is the only failure shape"""
    result = await ConfirmPasswordResetUseCase(
        mock_uow, credentials, tokens, clock=lambda: NOW
    ).execute("unknown", "NewPassword2")

    assert result.is_err()
    assert result.error.code == "INVALID_OR_EXPIRED_TOKEN"
    assert result.error.message == "Invalid or expired token"
    mock_uow.commit.assert_not_called()
