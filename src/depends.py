from functools import lru_cache

from fastapi import Depends
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.email_sender import HttpEmailSender
from src.adapter.services.file_storage import LocalFileStorage
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.credentials import CredentialService
from src.app.services.email_sender import IEmailSender
from src.app.services.file_storage import IFileStorage
from src.app.services.session_tokens import AuthSettings, SessionTokenService


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """SQLite leaves foreign keys off unless every connection asks for them"""
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)
enable_sqlite_foreign_keys(engine)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def init_models() -> None:
    """Create missing tables; existing tables are left untouched"""
    # Register every table on the metadata
    import src.domain.entities  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_auth_settings() -> AuthSettings:
    return AuthSettings.from_config(ApplicationConfig)


def get_session_tokens(
    settings: AuthSettings = Depends(get_auth_settings),
) -> SessionTokenService:
    return SessionTokenService(settings)


@lru_cache
def get_credentials() -> CredentialService:
    # One instance per process so the timing dummy hash is built once
    return CredentialService(rounds=ApplicationConfig.BCRYPT_ROUNDS)


def get_email_sender() -> IEmailSender:
    return HttpEmailSender(
        api_url=ApplicationConfig.EMAIL_API_URL,
        api_key=ApplicationConfig.EMAIL_API_KEY,
        sender=ApplicationConfig.EMAIL_FROM,
    )


def get_file_storage() -> IFileStorage:
    return LocalFileStorage(ApplicationConfig.UPLOAD_DIR)


def get_max_upload_bytes() -> int:
    return ApplicationConfig.MAX_UPLOAD_BYTES
