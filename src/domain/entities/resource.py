"""
Resource Entity

An uploaded file published under a category.
"""

from datetime import datetime
from typing import List, Optional, TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, Relationship, SQLModel

from src.domain.base import utc_now

if TYPE_CHECKING:
    from .category import Category
    from .rating import Rating
    from .user import User


class Resource(SQLModel, table=True):
    """
    Resource entity - a file uploaded by a user.

    Business Rules:
    - category_id must reference an existing category (foreign key)
    - uploaded_by is set at creation and never reassigned
    - Only the uploader or an admin may delete it
    - Deleting it removes its ratings and (best-effort) its backing file
    - averageRating is derived from ratings on every read, never stored
    """

    __tablename__ = "resources"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    title: str = Field(max_length=255)
    description: str = Field(default="")

    category_id: UUID = Field(foreign_key="categories.id", nullable=False)
    uploaded_by: UUID = Field(foreign_key="users.id", nullable=False)

    file_path: str = Field(max_length=1024)
    file_name: str = Field(max_length=255)
    file_type: str = Field(max_length=255)
    file_size: int

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    # Relationships (eager, async sessions cannot lazy load)
    category: Optional["Category"] = Relationship(
        sa_relationship_kwargs={"lazy": "selectin"}
    )
    uploader: Optional["User"] = Relationship(
        sa_relationship_kwargs={"lazy": "selectin"}
    )
    ratings: List["Rating"] = Relationship(
        back_populates="resource",
        sa_relationship_kwargs={
            "lazy": "selectin",
            "cascade": "all, delete-orphan",
            "order_by": "Rating.created_at",
        },
    )

    __table_args__ = (
        Index("idx_resource_category", "category_id"),
        Index("idx_resource_uploaded_by", "uploaded_by"),
        Index("idx_resource_created_at", "created_at"),
    )
