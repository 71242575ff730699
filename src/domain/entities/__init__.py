"""
Resource Hub Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import UserRole

# Export all entities
from .user import User
from .category import Category
from .resource import Resource
from .rating import Rating, average_rating, is_valid_rating

__all__ = [
    # Enums
    "UserRole",
    # Entities
    "User",
    "Category",
    "Resource",
    "Rating",
    # Rating helpers
    "average_rating",
    "is_valid_rating",
]
