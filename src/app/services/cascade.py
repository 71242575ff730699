"""
Ownership & Cascade Manager

Deletes users and resources together with everything that depends on them.

Ordering for a user cascade is fixed: backing files first (best-effort),
then resource records, then the user record. A crash part-way can leave
orphaned files but never resource rows pointing at a missing user.
File failures never abort a cascade; they are reported as warnings because
the catalog, not the filesystem, is authoritative.

Callers run these inside ``async with uow`` and commit afterwards.
"""

import logging
from dataclasses import dataclass, field
from typing import List

from src.app.services.file_storage import FileStorageError, IFileStorage
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Resource, User

logger = logging.getLogger(__name__)


@dataclass
class CascadeReport:
    resources_deleted: int = 0
    files_removed: int = 0
    ratings_deleted: int = 0
    warnings: List[str] = field(default_factory=list)

    @property
    def fully_consistent(self) -> bool:
        """False when some backing file may have been left behind"""
        return not self.warnings


class CascadeManager:
    def __init__(self, uow: UnitOfWork, storage: IFileStorage):
        self.uow = uow
        self.storage = storage

    async def _remove_file(self, resource: Resource, report: CascadeReport) -> None:
        try:
            await self.storage.remove(resource.file_path)
        except FileStorageError as exc:
            logger.warning(
                "Could not delete file for resource %s: %s", resource.id, exc
            )
            report.warnings.append(
                f"File for resource {resource.id} could not be removed: {resource.file_path}"
            )
            return
        report.files_removed += 1

    async def delete_resource(self, resource: Resource) -> CascadeReport:
        """Remove the backing file (best-effort), then the record and its ratings"""
        report = CascadeReport()
        await self._remove_file(resource, report)
        report.ratings_deleted = len(resource.ratings)
        await self.uow.resources.delete(resource)
        report.resources_deleted = 1
        return report

    async def delete_user(self, user: User) -> CascadeReport:
        """Remove a user's files, resources and ratings, then the user"""
        report = CascadeReport()
        resources = await self.uow.resources.list_by_uploader(user.id)

        for resource in resources:
            await self._remove_file(resource, report)

        # Ratings this user gave on other people's resources
        report.ratings_deleted = await self.uow.ratings.delete_by_user_id(user.id)

        for resource in resources:
            report.ratings_deleted += len(resource.ratings)
            await self.uow.resources.delete(resource)
            report.resources_deleted += 1

        await self.uow.users.delete(user)

        logger.info(
            "Deleted user %s with %d resource(s), %d file warning(s)",
            user.id,
            report.resources_deleted,
            len(report.warnings),
        )
        return report
