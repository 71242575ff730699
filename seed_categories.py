"""
Reset the category table to the default catalog.

Categories that resources still reference are kept (deleting them would
orphan those resources); every other category is removed and the defaults
are created if missing.

    python seed_categories.py
"""

import asyncio
import logging
from typing import List

from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.unit_of_work import UnitOfWork
from src.depends import AsyncSessionLocal, engine, init_models
from src.domain.entities import Category

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = [
    ("Business & Economics", "bizzz.jpg"),
    ("ICT", "comps.jpg"),
    ("Law", "juris.jpg"),
    ("Education", "educ.jpg"),
    ("Music", "musik.jpg"),
    ("Health Sciences", "smhs.jpg"),
    ("Mathematics", "mathz.jpg"),
    ("Physics & Engineering", "Gears.jpg"),
    ("Hospitality", "hospi.jpg"),
]


async def seed_categories(uow: UnitOfWork) -> List[Category]:
    async with uow:
        kept = set()
        for category in await uow.categories.list_all():
            if not await uow.categories.delete_if_unreferenced(category.id):
                logger.warning("Category %r still has resources, keeping it", category.name)
                kept.add(category.name)

        created = []
        for name, image in DEFAULT_CATEGORIES:
            if name in kept:
                continue
            created.append(await uow.categories.create(Category(name=name, image=image)))

        await uow.commit()
        return created


async def main() -> None:
    await init_models()
    try:
        async with AsyncSessionLocal() as session:
            created = await seed_categories(SqlAlchemyUnitOfWork(session))
        logger.info("Categories seeded successfully: %s", [c.name for c in created])
    finally:
        await engine.dispose()


if __name__ == "__main__":
    logging.basicConfig(level=ApplicationConfig.LOG_LEVEL.upper())
    asyncio.run(main())
