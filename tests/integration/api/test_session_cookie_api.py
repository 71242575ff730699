"""
Cookie attributes under the cross-origin production profile.
"""
import pytest
import pytest_asyncio
from httpx import AsyncClient

from src.app.services.session_tokens import AuthSettings
from tests.integration.conftest import TEST_JWT_SECRET


@pytest_asyncio.fixture
def auth_settings():
    return AuthSettings(jwt_secret=TEST_JWT_SECRET, cross_origin_cookies=True)


@pytest.mark.asyncio
async def test_cross_origin_cookie_is_secure(client: AsyncClient, test_data):
    response = await client.post("/api/auth/register", json=test_data.payload("register"))

    assert response.status_code == 201
    set_cookie = response.headers["set-cookie"].lower()
    assert "httponly" in set_cookie
    assert "secure" in set_cookie
    assert "samesite=none" in set_cookie


@pytest.mark.asyncio
async def test_cross_origin_logout_keeps_attributes(client: AsyncClient, test_data):
    registered = await client.post("/api/auth/register", json=test_data.payload("register"))
    token = registered.cookies.get("token")

    response = await client.post("/api/auth/logout", headers={"Cookie": f"token={token}"})

    set_cookie = response.headers["set-cookie"].lower()
    assert "max-age=0" in set_cookie
    assert "secure" in set_cookie
    assert "samesite=none" in set_cookie
