"""Admin use cases for catalog and account administration."""

from .list_use_cases import ListAllResourcesUseCase, ListUsersUseCase
from .create_category_use_case import CreateCategoryUseCase, CreateCategoryResponse
from .delete_user_use_case import DeleteUserUseCase, DeleteUserResponse
from .delete_category_use_case import DeleteCategoryUseCase, DeleteCategoryResponse

__all__ = [
    "ListUsersUseCase",
    "ListAllResourcesUseCase",
    "CreateCategoryUseCase",
    "CreateCategoryResponse",
    "DeleteUserUseCase",
    "DeleteUserResponse",
    "DeleteCategoryUseCase",
    "DeleteCategoryResponse",
]
