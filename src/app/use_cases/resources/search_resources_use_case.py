from typing import List

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from .dtos import ResourceInfo, to_resource_info


class SearchResourcesUseCase:
    """
    Case-insensitive substring search over title and description.

    The term is matched literally; wildcard characters have no special meaning.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, term: str) -> Result[List[ResourceInfo]]:
        term = (term or "").strip()
        if not term:
            return Return.err(Error("INVALID_SEARCH_TERM", "Invalid search term"))

        async with self.uow:
            resources = await self.uow.resources.search(term)
            return Return.ok([to_resource_info(r) for r in resources])
