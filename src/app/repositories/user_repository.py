from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by (normalized) email address"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def get_by_valid_reset_token_hash(
        self, token_hash: str, now: datetime
    ) -> Optional[User]:
        """Get user whose reset digest matches and whose reset expiry is after now"""
        pass

    @abstractmethod
    async def clear_reset_token(self, user_id: UUID, token_hash: str) -> bool:
        """Clear the reset fields only while they still hold token_hash; True if cleared"""
        pass

    @abstractmethod
    async def list_all(self) -> List[User]:
        """List all users, newest first"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass

    @abstractmethod
    async def delete(self, user: User) -> None:
        """Delete a user record"""
        pass
