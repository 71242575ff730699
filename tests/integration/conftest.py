from typing import List

import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.file_storage import LocalFileStorage
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.credentials import CredentialService
from src.app.services.email_sender import EmailDeliveryError, IEmailSender, OutboundEmail
from src.app.services.session_tokens import AuthSettings
from src.depends import (
    enable_sqlite_foreign_keys,
    get_auth_settings,
    get_credentials,
    get_email_sender,
    get_file_storage,
    get_max_upload_bytes,
    get_unit_of_work,
)
from tests.fixtures.json_loader import TestDataLoader

TEST_JWT_SECRET = "test-secret"
TEST_MAX_UPLOAD_BYTES = 1024


class IntegrationConfig(ApplicationConfig):
    RATE_LIMIT_ENABLED = False
    ENABLE_LOGGING_MIDDLEWARE = False


class RecordingEmailSender(IEmailSender):
    """Keeps outgoing mail in memory; set fail=True to simulate a provider outage"""

    def __init__(self):
        self.sent: List[OutboundEmail] = []
        self.fail = False

    async def send(self, message: OutboundEmail) -> None:
        if self.fail:
            raise EmailDeliveryError("provider unavailable")
        self.sent.append(message)


@pytest_asyncio.fixture
def test_data():
    return TestDataLoader()


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
def credentials():
    # Low cost factor keeps the suite fast; production uses BCRYPT_ROUNDS
    return CredentialService(rounds=4)


@pytest_asyncio.fixture
def auth_settings():
    return AuthSettings(jwt_secret=TEST_JWT_SECRET)


@pytest_asyncio.fixture
def email_sender():
    return RecordingEmailSender()


@pytest_asyncio.fixture
def storage(tmp_path):
    return LocalFileStorage(str(tmp_path / "uploads"))


@pytest_asyncio.fixture
async def client(db_session, credentials, auth_settings, email_sender, storage):
    from httpx import ASGITransport
    from src.api.app import create_app

    app = create_app(IntegrationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_auth_settings] = lambda: auth_settings
    app.dependency_overrides[get_credentials] = lambda: credentials
    app.dependency_overrides[get_email_sender] = lambda: email_sender
    app.dependency_overrides[get_file_storage] = lambda: storage
    app.dependency_overrides[get_max_upload_bytes] = lambda: TEST_MAX_UPLOAD_BYTES

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
