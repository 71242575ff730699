from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.user_repository import IUserRepository
from src.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by (normalized) email address"""
        stmt = select(User).where(User.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_valid_reset_token_hash(
        self, token_hash: str, now: datetime
    ) -> Optional[User]:
        """Get user whose reset digest matches and whose reset expiry is after now"""
        stmt = select(User).where(
            User.password_reset_token_hash == token_hash,
            User.password_reset_expires_at > now,
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def clear_reset_token(self, user_id: UUID, token_hash: str) -> bool:
        """Clear the reset fields only while they still hold token_hash; True if cleared"""
        stmt = (
            update(User)
            .where(User.id == user_id, User.password_reset_token_hash == token_hash)
            .values(password_reset_token_hash=None, password_reset_expires_at=None)
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def list_all(self) -> List[User]:
        """List all users, newest first"""
        stmt = select(User).order_by(User.created_at.desc())
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update(self, user: User) -> User:
        """Update existing user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def delete(self, user: User) -> None:
        """Delete a user record"""
        await self.session.delete(user)
        await self.session.flush()
