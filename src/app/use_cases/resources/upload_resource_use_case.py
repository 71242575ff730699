import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from libs.result import Error, Result, Return
from src.app.services.file_storage import FileStorageError, IFileStorage
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Resource
from src.domain.identity import SignedInCaller
from .dtos import UploadResourceCommand, UploadResourceResponse, to_resource_info

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = frozenset(
    {
        "application/pdf",
        "image/jpeg",
        "image/png",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    }
)


class UploadResourceUseCase:
    """
    Use case for publishing a file under a category.

    Business Rules:
    - PDF, JPEG, PNG, DOC and DOCX only, at most max_bytes (INVALID_FILE)
    - Category must exist (CATEGORY_NOT_FOUND)
    - uploaded_by is the caller and is never reassigned
    - If the record cannot be stored the file is removed again
    """

    def __init__(self, uow: UnitOfWork, storage: IFileStorage, max_bytes: int):
        self.uow = uow
        self.storage = storage
        self.max_bytes = max_bytes

    def _validate_file(self, command: UploadResourceCommand) -> Result[None]:
        if command.content_type not in ALLOWED_CONTENT_TYPES:
            return Return.err(
                Error(
                    "INVALID_FILE",
                    "Invalid file type. Only PDF, JPEG, PNG, DOC, and DOCX are allowed.",
                )
            )
        if not command.content:
            return Return.err(Error("INVALID_FILE", "File is empty"))
        if len(command.content) > self.max_bytes:
            return Return.err(Error("INVALID_FILE", "File is too large"))
        return Return.ok(None)

    async def execute(
        self, caller: SignedInCaller, command: UploadResourceCommand
    ) -> Result[UploadResourceResponse]:
        checked = self._validate_file(command)
        if checked.is_err():
            return Return.err(checked.error)

        category_missing = Error("CATEGORY_NOT_FOUND", "Category not found")
        try:
            category_id = UUID(command.category_id)
        except ValueError:
            return Return.err(category_missing)

        async with self.uow:
            category = await self.uow.categories.get_by_id(category_id)
            if category is None:
                return Return.err(category_missing)

            try:
                stored = await self.storage.save(
                    command.file_name, command.content_type, command.content
                )
            except FileStorageError as exc:
                logger.error("Upload could not be stored: %s", exc)
                return Return.err(Error("FILE_STORAGE_FAILED", "File could not be stored"))

            resource = Resource(
                title=command.title.strip(),
                description=command.description.strip(),
                category_id=category_id,
                uploaded_by=caller.id,
                file_path=stored.path,
                file_name=command.file_name,
                file_type=stored.content_type,
                file_size=stored.size,
            )

            try:
                resource = await self.uow.resources.create(resource)
                await self.uow.commit()
            except IntegrityError:
                # Category deleted between the lookup and the insert
                await self.uow.rollback()
                try:
                    await self.storage.remove(stored.path)
                except FileStorageError as exc:
                    logger.warning("Could not remove orphaned upload %s: %s", stored.path, exc)
                return Return.err(category_missing)

            resource = await self.uow.resources.get_by_id(resource.id)
            logger.info("Resource %s uploaded by %s", resource.id, caller.id)

            return Return.ok(
                UploadResourceResponse(
                    message="Resource uploaded successfully",
                    resource=to_resource_info(resource),
                )
            )
