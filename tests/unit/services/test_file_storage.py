import os
from pathlib import Path

import pytest

from src.adapter.services.file_storage import LocalFileStorage
from src.app.services.file_storage import FileStorageError


@pytest.fixture
def storage(tmp_path):
    return LocalFileStorage(str(tmp_path / "uploads"))


@pytest.mark.asyncio
async def test_save_uses_unique_names(storage):
    first = await storage.save("Notes.PDF", "application/pdf", b"one")
    second = await storage.save("Notes.PDF", "application/pdf", b"two")

    assert first.path != second.path
    assert first.name.endswith(".pdf")
    assert Path(first.path).read_bytes() == b"one"
    assert first.size == 3


@pytest.mark.asyncio
async def test_remove_and_exists(storage):
    stored = await storage.save("a.png", "image/png", b"png")

    assert await storage.exists(stored.path)
    await storage.remove(stored.path)
    assert not await storage.exists(stored.path)


@pytest.mark.asyncio
async def test_removing_missing_file_is_not_an_error(storage):
    await storage.remove(str(storage.upload_dir / "never-existed.pdf"))


@pytest.mark.asyncio
async def test_remove_failure_raises(storage):
    stored = await storage.save("a.pdf", "application/pdf", b"pdf")
    os.remove(stored.path)
    os.mkdir(stored.path)

    with pytest.raises(FileStorageError):
        await storage.remove(stored.path)
