import math
from typing import Optional
from uuid import UUID

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from .dtos import Pagination, ResourceListResponse, to_resource_info

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 6


class ListResourcesUseCase:
    """Newest-first page of resources, optionally within one category"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        category_id: Optional[UUID] = None,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT,
    ) -> Result[ResourceListResponse]:
        page = max(page, 1)
        limit = max(limit, 1)

        async with self.uow:
            total = await self.uow.resources.count(category_id)
            resources = await self.uow.resources.list_page(
                category_id, offset=(page - 1) * limit, limit=limit
            )

            return Return.ok(
                ResourceListResponse(
                    resources=[to_resource_info(r) for r in resources],
                    pagination=Pagination(
                        current_page=page,
                        total_pages=math.ceil(total / limit),
                        total_documents=total,
                    ),
                )
            )
