from unittest.mock import MagicMock

import pytest

from src.app.services.cascade import CascadeManager
from src.app.services.file_storage import FileStorageError
from tests.utils.builders import build_resource, build_user


@pytest.mark.asyncio
async def test_user_cascade_order(mock_uow, mock_storage):
    """Files first, then resource records, then the user"""
    user = build_user()
    resources = [
        build_resource(user.id, file_path="/uploads/a.pdf"),
        build_resource(user.id, file_path="/uploads/b.pdf"),
    ]
    mock_uow.resources.list_by_uploader.return_value = resources

    calls = MagicMock()
    calls.attach_mock(mock_storage.remove, "remove_file")
    calls.attach_mock(mock_uow.resources.delete, "delete_resource")
    calls.attach_mock(mock_uow.users.delete, "delete_user")

    report = await CascadeManager(mock_uow, mock_storage).delete_user(user)

    assert [c[0] for c in calls.mock_calls] == [
        "remove_file",
        "remove_file",
        "delete_resource",
        "delete_resource",
        "delete_user",
    ]
    assert report.resources_deleted == 2
    assert report.files_removed == 2
    assert report.fully_consistent


@pytest.mark.asyncio
async def test_file_failures_do_not_abort_cascade(mock_uow, mock_storage):
    user = build_user()
    broken = build_resource(user.id, file_path="/uploads/broken.pdf")
    fine = build_resource(user.id, file_path="/uploads/fine.pdf")
    mock_uow.resources.list_by_uploader.return_value = [broken, fine]

    async def remove(path):
        if path == broken.file_path:
            raise FileStorageError("permission denied")

    mock_storage.remove.side_effect = remove

    report = await CascadeManager(mock_uow, mock_storage).delete_user(user)

    assert report.resources_deleted == 2
    assert report.files_removed == 1
    assert not report.fully_consistent
    assert len(report.warnings) == 1
    assert broken.file_path in report.warnings[0]
    mock_uow.users.delete.assert_called_once_with(user)


@pytest.mark.asyncio
async def test_user_without_uploads(mock_uow, mock_storage):
    user = build_user()
    mock_uow.ratings.delete_by_user_id.return_value = 3

    report = await CascadeManager(mock_uow, mock_storage).delete_user(user)

    assert report.resources_deleted == 0
    assert report.ratings_deleted == 3
    mock_storage.remove.assert_not_called()
    mock_uow.users.delete.assert_called_once_with(user)


@pytest.mark.asyncio
async def test_resource_cascade_counts_ratings(mock_uow, mock_storage):
    resource = build_resource(build_user().id, ratings=[1, 2, 3])

    report = await CascadeManager(mock_uow, mock_storage).delete_resource(resource)

    assert report.resources_deleted == 1
    assert report.ratings_deleted == 3
    mock_storage.remove.assert_called_once_with(resource.file_path)
    mock_uow.resources.delete.assert_called_once_with(resource)
