"""
Admin API Routes - Catalog and Account Administration

Every endpoint requires a signed-in caller with the admin role
(401 without a session, 403 for non-admins).
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import ClientError, ServerError
from src.api.utils.caller_auth import require_admin
from src.app.services.credentials import UserInfo
from src.app.services.file_storage import IFileStorage
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.admin import (
    CreateCategoryResponse,
    CreateCategoryUseCase,
    DeleteCategoryResponse,
    DeleteCategoryUseCase,
    DeleteUserResponse,
    DeleteUserUseCase,
    ListAllResourcesUseCase,
    ListUsersUseCase,
)
from src.app.use_cases.resources import (
    DeleteResourceResponse,
    DeleteResourceUseCase,
    ResourceInfo,
)
from src.depends import get_file_storage, get_unit_of_work
from src.domain.identity import AdminUser

router = APIRouter(prefix="/admin", tags=["Admin"])


class CreateCategoryRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Unique category name")
    image: Optional[str] = Field(None, max_length=255, description="Image file name")


@router.get("/users", status_code=status.HTTP_200_OK, response_model=List[UserInfo])
async def list_users(
    admin: AdminUser = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListUsersUseCase(uow).execute()

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.get("/resources", status_code=status.HTTP_200_OK, response_model=List[ResourceInfo])
async def list_resources(
    admin: AdminUser = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListAllResourcesUseCase(uow).execute()

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.post(
    "/categories", status_code=status.HTTP_201_CREATED, response_model=CreateCategoryResponse
)
async def create_category(
    request: CreateCategoryRequest,
    admin: AdminUser = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Category

    Raises:
        - 409 Conflict: CATEGORY_ALREADY_EXISTS
    """
    result = await CreateCategoryUseCase(uow).execute(request.name, request.image)

    if result.is_err():
        error = result.error
        if error.code == "CATEGORY_ALREADY_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.delete(
    "/users/{user_id}", status_code=status.HTTP_200_OK, response_model=DeleteUserResponse
)
async def delete_user(
    user_id: UUID,
    admin: AdminUser = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    storage: IFileStorage = Depends(get_file_storage),
):
    """
    Delete User

    Cascades to every resource the user uploaded and every rating they gave.
    Files that could not be removed are listed in warnings.

    Raises:
        - 404 Not Found: USER_NOT_FOUND
    """
    result = await DeleteUserUseCase(uow, storage).execute(user_id)

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.delete(
    "/resources/{resource_id}",
    status_code=status.HTTP_200_OK,
    response_model=DeleteResourceResponse,
)
async def delete_resource(
    resource_id: UUID,
    admin: AdminUser = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    storage: IFileStorage = Depends(get_file_storage),
):
    result = await DeleteResourceUseCase(uow, storage).execute(admin, resource_id)

    if result.is_err():
        error = result.error
        if error.code == "RESOURCE_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.delete(
    "/categories/{category_id}",
    status_code=status.HTTP_200_OK,
    response_model=DeleteCategoryResponse,
)
async def delete_category(
    category_id: UUID,
    admin: AdminUser = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Delete Category

    Raises:
        - 404 Not Found: CATEGORY_NOT_FOUND
        - 409 Conflict: CATEGORY_IN_USE while resources reference it
    """
    result = await DeleteCategoryUseCase(uow).execute(category_id)

    if result.is_err():
        error = result.error
        if error.code == "CATEGORY_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "CATEGORY_IN_USE":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value
