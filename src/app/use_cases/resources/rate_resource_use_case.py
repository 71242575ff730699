"""
Rate Resource Use Case

Records one user's score for a resource and returns the refreshed aggregate.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import is_valid_rating
from src.domain.identity import SignedInCaller
from .dtos import RateResourceResponse, to_resource_info


class RateResourceUseCase:
    """
    Business Rules:
    - Rating must be an integer from 1 to 5 (INVALID_RATING)
    - The uploader cannot rate their own resource (SELF_RATING_NOT_ALLOWED)
    - At most one rating per (resource, user); rating again overwrites
    - average_rating is recomputed from the stored ratings on every read
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, caller: SignedInCaller, resource_id: UUID, value
    ) -> Result[RateResourceResponse]:
        if not is_valid_rating(value):
            return Return.err(Error("INVALID_RATING", "Rating must be between 1 and 5"))

        async with self.uow:
            resource = await self.uow.resources.get_by_id(resource_id)
            if resource is None:
                return Return.err(Error("RESOURCE_NOT_FOUND", "Resource not found"))

            if resource.uploaded_by == caller.id:
                return Return.err(
                    Error("SELF_RATING_NOT_ALLOWED", "You cannot rate your own resource.")
                )

            await self.uow.ratings.upsert(resource.id, caller.id, value)
            await self.uow.commit()

            resource = await self.uow.resources.refresh_ratings(resource)

            return Return.ok(
                RateResourceResponse(
                    message="Resource rated successfully",
                    resource=to_resource_info(resource),
                )
            )
