from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from src.app.use_cases.admin import (
    CreateCategoryUseCase,
    DeleteCategoryUseCase,
    DeleteUserUseCase,
)
from tests.utils.builders import build_category, build_resource, build_user


@pytest.mark.asyncio
async def test_create_category(mock_uow):
    mock_uow.categories.create = AsyncMock(side_effect=lambda category: category)

    result = await CreateCategoryUseCase(mock_uow).execute(" Law ", "juris.jpg")

    assert result.is_ok()
    assert result.value.category.name == "Law"
    mock_uow.categories.get_by_name.assert_called_once_with("Law")
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_create_duplicate_category(mock_uow):
    mock_uow.categories.get_by_name.return_value = build_category("Law")

    result = await CreateCategoryUseCase(mock_uow).execute("Law")

    assert result.is_err()
    assert result.error.code == "CATEGORY_ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_create_category_race_on_unique_name(mock_uow):
    mock_uow.categories.create = AsyncMock(side_effect=lambda category: category)
    mock_uow.commit = AsyncMock(side_effect=IntegrityError("INSERT", {}, Exception("unique")))

    result = await CreateCategoryUseCase(mock_uow).execute("Law")

    assert result.is_err()
    assert result.error.code == "CATEGORY_ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_delete_unused_category(mock_uow):
    category = build_category()
    mock_uow.categories.get_by_id.return_value = category

    result = await DeleteCategoryUseCase(mock_uow).execute(category.id)

    assert result.is_ok()
    mock_uow.categories.delete_if_unreferenced.assert_called_once_with(category.id)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_delete_category_in_use(mock_uow):
    category = build_category()
    mock_uow.categories.get_by_id.return_value = category
    mock_uow.resources.count.return_value = 3

    result = await DeleteCategoryUseCase(mock_uow).execute(category.id)

    assert result.is_err()
    assert result.error.code == "CATEGORY_IN_USE"
    assert result.error.message == (
        "Cannot delete category. It is currently associated with 3 resource(s)."
    )
    assert result.error.reason == "3"
    mock_uow.categories.delete_if_unreferenced.assert_not_called()


@pytest.mark.asyncio
async def test_delete_category_loses_race_to_upload(mock_uow):
    """An upload between the count and the delete still blocks deletion"""
    category = build_category()
    mock_uow.categories.get_by_id.return_value = category
    mock_uow.resources.count.side_effect = [0, 1]
    mock_uow.categories.delete_if_unreferenced.return_value = False

    result = await DeleteCategoryUseCase(mock_uow).execute(category.id)

    assert result.is_err()
    assert result.error.code == "CATEGORY_IN_USE"
    assert result.error.reason == "1"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_delete_missing_category(mock_uow):
    result = await DeleteCategoryUseCase(mock_uow).execute(uuid4())

    assert result.is_err()
    assert result.error.code == "CATEGORY_NOT_FOUND"


@pytest.mark.asyncio
async def test_delete_user(mock_uow, mock_storage):
    user = build_user()
    mock_uow.users.get_by_id.return_value = user
    mock_uow.resources.list_by_uploader.return_value = [
        build_resource(user.id, ratings=[5], file_path="/uploads/a.pdf"),
        build_resource(user.id, ratings=[2, 3], file_path="/uploads/b.pdf"),
    ]
    mock_uow.ratings.delete_by_user_id.return_value = 4

    result = await DeleteUserUseCase(mock_uow, mock_storage).execute(user.id)

    assert result.is_ok()
    assert result.value.resources_deleted == 2
    assert result.value.ratings_deleted == 7
    assert result.value.warnings == []
    mock_uow.users.delete.assert_called_once_with(user)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_delete_missing_user(mock_uow, mock_storage):
    result = await DeleteUserUseCase(mock_uow, mock_storage).execute(uuid4())

    assert result.is_err()
    assert result.error.code == "USER_NOT_FOUND"
    mock_storage.remove.assert_not_called()
