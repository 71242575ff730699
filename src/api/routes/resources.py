from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from fastapi.responses import FileResponse
from pydantic import BaseModel, Field

from src.api.error import ClientError, ServerError
from src.api.utils.caller_auth import get_current_caller
from src.app.services.file_storage import IFileStorage
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.resources import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    DeleteResourceResponse,
    DeleteResourceUseCase,
    GetResourceFileUseCase,
    GetResourceUseCase,
    ListMyResourcesUseCase,
    ListResourcesUseCase,
    RateResourceResponse,
    RateResourceUseCase,
    ResourceInfo,
    ResourceListResponse,
    SearchResourcesUseCase,
    UploadResourceCommand,
    UploadResourceResponse,
    UploadResourceUseCase,
)
from src.depends import get_file_storage, get_max_upload_bytes, get_unit_of_work
from src.domain.identity import SignedInCaller

router = APIRouter(prefix="/resources", tags=["Resources"])


class RateResourceRequest(BaseModel):
    # strict: "5" and true are rejected rather than coerced
    rating: int = Field(..., strict=True, description="Score from 1 to 5")


@router.get("", status_code=status.HTTP_200_OK, response_model=ResourceListResponse)
async def list_resources(
    category: Optional[UUID] = Query(None, description="Only resources in this category"),
    page: int = Query(DEFAULT_PAGE, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=100),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListResourcesUseCase(uow).execute(category, page=page, limit=limit)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.get("/search", status_code=status.HTTP_200_OK, response_model=List[ResourceInfo])
async def search_resources(
    q: str = Query("", description="Text to look for in title or description"),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await SearchResourcesUseCase(uow).execute(q)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_SEARCH_TERM":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


@router.get("/my-resources", status_code=status.HTTP_200_OK, response_model=List[ResourceInfo])
async def my_resources(
    caller: SignedInCaller = Depends(get_current_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListMyResourcesUseCase(uow).execute(caller.id)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.post("", status_code=status.HTTP_201_CREATED, response_model=UploadResourceResponse)
async def upload_resource(
    title: str = Form(..., min_length=1, max_length=255),
    category: str = Form(...),
    description: str = Form(""),
    file: UploadFile = File(...),
    caller: SignedInCaller = Depends(get_current_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
    storage: IFileStorage = Depends(get_file_storage),
    max_bytes: int = Depends(get_max_upload_bytes),
):
    """
    Upload Resource

    Multipart form: title, description, category (id) and file.

    Raises:
        - 400 Bad Request: Unknown category, or file type/size not allowed
        - 401 Unauthorized: Not signed in
    """
    # One byte over the limit is enough to reject it
    content = await file.read(max_bytes + 1)

    command = UploadResourceCommand(
        title=title,
        description=description,
        category_id=category,
        file_name=file.filename or "upload",
        content_type=file.content_type or "",
        content=content,
    )

    result = await UploadResourceUseCase(uow, storage, max_bytes).execute(caller, command)

    if result.is_err():
        error = result.error
        if error.code in ("CATEGORY_NOT_FOUND", "INVALID_FILE"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


@router.get("/{resource_id}", status_code=status.HTTP_200_OK, response_model=ResourceInfo)
async def get_resource(resource_id: UUID, uow: UnitOfWork = Depends(get_unit_of_work)):
    result = await GetResourceUseCase(uow).execute(resource_id)

    if result.is_err():
        error = result.error
        if error.code == "RESOURCE_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.get("/{resource_id}/download", status_code=status.HTTP_200_OK)
async def download_resource(
    resource_id: UUID,
    caller: SignedInCaller = Depends(get_current_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
    storage: IFileStorage = Depends(get_file_storage),
):
    result = await GetResourceFileUseCase(uow, storage).execute(resource_id)

    if result.is_err():
        error = result.error
        if error.code in ("RESOURCE_NOT_FOUND", "FILE_NOT_FOUND"):
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    stored = result.value
    return FileResponse(stored.path, filename=stored.file_name, media_type=stored.content_type)


@router.post(
    "/{resource_id}/rate", status_code=status.HTTP_200_OK, response_model=RateResourceResponse
)
async def rate_resource(
    resource_id: UUID,
    request: RateResourceRequest,
    caller: SignedInCaller = Depends(get_current_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Rate Resource

    Rating again replaces the caller's earlier score.

    Raises:
        - 400 Bad Request: Rating out of range, or rating one's own resource
        - 404 Not Found: Resource does not exist
    """
    result = await RateResourceUseCase(uow).execute(caller, resource_id, request.rating)

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_RATING", "SELF_RATING_NOT_ALLOWED"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "RESOURCE_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.delete(
    "/{resource_id}", status_code=status.HTTP_200_OK, response_model=DeleteResourceResponse
)
async def delete_resource(
    resource_id: UUID,
    caller: SignedInCaller = Depends(get_current_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
    storage: IFileStorage = Depends(get_file_storage),
):
    """
    Delete Resource

    Allowed for the uploader and for admins.

    Raises:
        - 403 Forbidden: Caller is neither uploader nor admin
        - 404 Not Found: Resource does not exist
    """
    result = await DeleteResourceUseCase(uow, storage).execute(caller, resource_id)

    if result.is_err():
        error = result.error
        if error.code == "FORBIDDEN":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "RESOURCE_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
