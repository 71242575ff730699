from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.api.error import ClientError, ServerError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.categories import CategoryInfo, GetCategoryUseCase, ListCategoriesUseCase
from src.depends import get_unit_of_work

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get("", status_code=status.HTTP_200_OK, response_model=List[CategoryInfo])
async def list_categories(uow: UnitOfWork = Depends(get_unit_of_work)):
    result = await ListCategoriesUseCase(uow).execute()

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.get("/{category_id}", status_code=status.HTTP_200_OK, response_model=CategoryInfo)
async def get_category(category_id: UUID, uow: UnitOfWork = Depends(get_unit_of_work)):
    result = await GetCategoryUseCase(uow).execute(category_id)

    if result.is_err():
        error = result.error
        if error.code == "CATEGORY_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
