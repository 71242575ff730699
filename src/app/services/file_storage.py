from abc import ABC, abstractmethod
from dataclasses import dataclass


class FileStorageError(Exception):
    """Raised when a stored file cannot be written or removed"""


@dataclass(frozen=True)
class StoredFile:
    path: str
    name: str
    content_type: str
    size: int


class IFileStorage(ABC):
    """Backing storage for uploaded resource files"""

    @abstractmethod
    async def save(self, original_name: str, content_type: str, content: bytes) -> StoredFile:
        """Persist an upload under a unique name"""
        pass

    @abstractmethod
    async def remove(self, path: str) -> None:
        """
        Remove a stored file.

        A file that is already gone counts as removed. Any other failure
        raises FileStorageError.
        """
        pass

    @abstractmethod
    async def exists(self, path: str) -> bool:
        """True if a stored file is still present"""
        pass
