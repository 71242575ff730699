"""
Rating Entity

One user's 1-5 score for a resource.
"""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Column, DateTime, Field, Relationship, SQLModel

from src.domain.base import utc_now

if TYPE_CHECKING:
    from .resource import Resource

MIN_RATING = 1
MAX_RATING = 5


class Rating(SQLModel, table=True):
    """
    Rating entity.

    Business Rules:
    - At most one rating per (resource, user); resubmitting overwrites the value
    - The uploader cannot rate their own resource
    """

    __tablename__ = "ratings"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    resource_id: UUID = Field(foreign_key="resources.id", nullable=False, index=True)
    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    rating: int

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    resource: Optional["Resource"] = Relationship(back_populates="ratings")

    __table_args__ = (
        UniqueConstraint("resource_id", "user_id", name="uq_rating_resource_user"),
    )


def is_valid_rating(value) -> bool:
    # bool is an int subclass; True must not count as a 1
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and MIN_RATING <= value <= MAX_RATING
    )


def average_rating(values: Iterable[int]) -> float:
    """Mean of the given ratings rounded half-up to one decimal, 0 when empty."""
    values = list(values)
    if not values:
        return 0
    mean = Decimal(sum(values)) / Decimal(len(values))
    return float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))
