"""
Resource Use Case DTOs

Client-facing shapes for resources, their ratings and listing pages.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from src.domain.entities import Resource, average_rating


class CategoryRef(BaseModel):
    id: str
    name: str
    image: Optional[str] = None


class UploaderRef(BaseModel):
    id: str
    name: str
    email: str


class RatingInfo(BaseModel):
    user_id: str
    rating: int
    created_at: datetime


class ResourceInfo(BaseModel):
    """Resource as returned to clients; the stored file path is never exposed"""

    id: str
    title: str
    description: str
    category: Optional[CategoryRef] = None
    uploaded_by: Optional[UploaderRef] = None
    file_name: str
    file_type: str
    file_size: int
    ratings: List[RatingInfo]
    average_rating: float
    created_at: datetime


class Pagination(BaseModel):
    current_page: int
    total_pages: int
    total_documents: int


class ResourceListResponse(BaseModel):
    resources: List[ResourceInfo]
    pagination: Pagination


class UploadResourceCommand(BaseModel):
    """Validated upload intent; content is the whole file body"""

    title: str
    description: str = ""
    category_id: str
    file_name: str
    content_type: str
    content: bytes


class UploadResourceResponse(BaseModel):
    message: str
    resource: ResourceInfo


class RateResourceResponse(BaseModel):
    message: str
    resource: ResourceInfo


class DeleteResourceResponse(BaseModel):
    message: str
    warnings: List[str]


class ResourceFile(BaseModel):
    """Where the backing file lives and how to name it on download"""

    path: str
    file_name: str
    content_type: str


def to_resource_info(resource: Resource) -> ResourceInfo:
    category = None
    if resource.category is not None:
        category = CategoryRef(
            id=str(resource.category.id),
            name=resource.category.name,
            image=resource.category.image,
        )

    uploader = None
    if resource.uploader is not None:
        uploader = UploaderRef(
            id=str(resource.uploader.id),
            name=resource.uploader.name,
            email=resource.uploader.email,
        )

    ratings = [
        RatingInfo(user_id=str(r.user_id), rating=r.rating, created_at=r.created_at)
        for r in resource.ratings
    ]

    return ResourceInfo(
        id=str(resource.id),
        title=resource.title,
        description=resource.description,
        category=category,
        uploaded_by=uploader,
        file_name=resource.file_name,
        file_type=resource.file_type,
        file_size=resource.file_size,
        ratings=ratings,
        average_rating=average_rating(r.rating for r in resource.ratings),
        created_at=resource.created_at,
    )
