import asyncio
import logging
import os
import uuid
from pathlib import Path

from src.app.services.file_storage import FileStorageError, IFileStorage, StoredFile

logger = logging.getLogger(__name__)


class LocalFileStorage(IFileStorage):
    """Stores uploads as files under a single directory"""

    def __init__(self, upload_dir: str):
        self.upload_dir = Path(upload_dir)

    def _write(self, path: Path, content: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)

    async def save(self, original_name: str, content_type: str, content: bytes) -> StoredFile:
        ext = Path(original_name).suffix.lower()
        file_name = f"file-{uuid.uuid4().hex}{ext}"
        path = self.upload_dir / file_name
        try:
            await asyncio.to_thread(self._write, path, content)
        except OSError as exc:
            raise FileStorageError(f"Could not store {original_name}") from exc
        return StoredFile(
            path=str(path), name=file_name, content_type=content_type, size=len(content)
        )

    async def remove(self, path: str) -> None:
        try:
            await asyncio.to_thread(os.remove, path)
        except FileNotFoundError:
            logger.info("File %s already removed", path)
        except OSError as exc:
            raise FileStorageError(str(exc)) from exc

    async def exists(self, path: str) -> bool:
        return await asyncio.to_thread(os.path.isfile, path)
