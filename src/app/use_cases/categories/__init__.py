"""
Category Use Cases

Public category browsing; admin create/delete live in use_cases.admin.
"""

from .dtos import CategoryInfo, to_category_info
from .category_use_cases import GetCategoryUseCase, ListCategoriesUseCase

__all__ = [
    "GetCategoryUseCase",
    "ListCategoriesUseCase",
    "CategoryInfo",
    "to_category_info",
]
