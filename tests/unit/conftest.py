import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.services.credentials import CredentialService
from src.app.services.session_tokens import AuthSettings, SessionTokenService


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_valid_reset_token_hash = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)
    uow.users.clear_reset_token = AsyncMock(return_value=True)
    uow.users.delete = AsyncMock()

    uow.categories = MagicMock()
    uow.categories.get_by_id = AsyncMock(return_value=None)
    uow.categories.get_by_name = AsyncMock(return_value=None)
    uow.categories.delete_if_unreferenced = AsyncMock(return_value=True)

    uow.resources = MagicMock()
    uow.resources.get_by_id = AsyncMock(return_value=None)
    uow.resources.count = AsyncMock(return_value=0)
    uow.resources.list_by_uploader = AsyncMock(return_value=[])
    uow.resources.create = AsyncMock(side_effect=lambda resource: resource)
    uow.resources.refresh_ratings = AsyncMock(side_effect=lambda resource: resource)
    uow.resources.delete = AsyncMock()

    uow.ratings = MagicMock()
    uow.ratings.upsert = AsyncMock()
    uow.ratings.delete_by_user_id = AsyncMock(return_value=0)

    return uow


@pytest.fixture
def mock_storage():
    storage = MagicMock()
    storage.save = AsyncMock()
    storage.remove = AsyncMock()
    storage.exists = AsyncMock(return_value=True)
    return storage


@pytest.fixture
def credentials():
    return CredentialService(rounds=4)


@pytest.fixture
def tokens():
    return SessionTokenService(AuthSettings(jwt_secret="unit-test-secret"))
