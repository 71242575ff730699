"""
Resource Use Cases

Upload, browse, download, rate and delete shared resources.
"""

from .upload_resource_use_case import UploadResourceUseCase, ALLOWED_CONTENT_TYPES
from .list_resources_use_case import ListResourcesUseCase, DEFAULT_LIMIT, DEFAULT_PAGE
from .search_resources_use_case import SearchResourcesUseCase
from .get_resource_use_case import (
    GetResourceUseCase,
    GetResourceFileUseCase,
    ListMyResourcesUseCase,
)
from .delete_resource_use_case import DeleteResourceUseCase
from .rate_resource_use_case import RateResourceUseCase
from .dtos import (
    DeleteResourceResponse,
    Pagination,
    RateResourceResponse,
    ResourceFile,
    ResourceInfo,
    ResourceListResponse,
    UploadResourceCommand,
    UploadResourceResponse,
    to_resource_info,
)

__all__ = [
    # Use Cases
    "UploadResourceUseCase",
    "ListResourcesUseCase",
    "SearchResourcesUseCase",
    "GetResourceUseCase",
    "GetResourceFileUseCase",
    "ListMyResourcesUseCase",
    "DeleteResourceUseCase",
    "RateResourceUseCase",
    # Constants
    "ALLOWED_CONTENT_TYPES",
    "DEFAULT_LIMIT",
    "DEFAULT_PAGE",
    # DTOs
    "DeleteResourceResponse",
    "Pagination",
    "RateResourceResponse",
    "ResourceFile",
    "ResourceInfo",
    "ResourceListResponse",
    "UploadResourceCommand",
    "UploadResourceResponse",
    "to_resource_info",
]
