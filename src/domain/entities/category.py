"""
Category Entity

Groups resources. Cannot be removed while resources reference it.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utc_now


class Category(SQLModel, table=True):
    __tablename__ = "categories"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(unique=True, index=True, max_length=100)
    image: Optional[str] = Field(default=None, max_length=255)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
