from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.domain.entities import Category


class CategoryInfo(BaseModel):
    id: str
    name: str
    image: Optional[str] = None
    created_at: datetime


def to_category_info(category: Category) -> CategoryInfo:
    return CategoryInfo(
        id=str(category.id),
        name=category.name,
        image=category.image,
        created_at=category.created_at,
    )
