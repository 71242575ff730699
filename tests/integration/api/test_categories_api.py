from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlmodel.ext.asyncio.session import AsyncSession

from tests.utils.factories import create_category


@pytest.mark.asyncio
async def test_list_categories_sorted_by_name(client: AsyncClient, db_session: AsyncSession):
    await create_category(db_session, name="Physics", image="physics.jpg")
    await create_category(db_session, name="Biology", image="bio.jpg")
    await create_category(db_session, name="Mathematics", image="mathz.jpg")

    response = await client.get("/api/categories")

    assert response.status_code == 200
    assert [c["name"] for c in response.json()] == ["Biology", "Mathematics", "Physics"]


@pytest.mark.asyncio
async def test_get_category(client: AsyncClient, db_session: AsyncSession):
    category_id = await create_category(db_session)

    response = await client.get(f"/api/categories/{category_id}")

    assert response.status_code == 200
    assert response.json()["name"] == "Mathematics"
    assert response.json()["image"] == "mathz.jpg"


@pytest.mark.asyncio
async def test_get_missing_category(client: AsyncClient):
    response = await client.get(f"/api/categories/{uuid4()}")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "CATEGORY_NOT_FOUND"
