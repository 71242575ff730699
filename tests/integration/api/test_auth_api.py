"""
Integration tests for registration, login, logout, password change and
account deletion, including session-token handling at the access gate.
"""
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from httpx import AsyncClient
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.services.session_tokens import AuthSettings, SessionTokenService
from src.domain.entities import Rating, Resource, User, UserRole
from tests.utils.factories import (
    add_rating,
    create_category,
    create_resource,
    create_user,
    session_headers,
)
from tests.utils.json_compare import assert_no_secrets, exclude_keys


@pytest.mark.asyncio
async def test_register_signs_user_in(client: AsyncClient, db_session: AsyncSession, test_data):
    """Registration creates a role=user account and sets an HTTP-only session cookie"""
    response = await client.post("/api/auth/register", json=test_data.payload("register"))

    assert response.status_code == 201
    data = response.json()
    assert exclude_keys(data["user"]) == {
        "name": "Ada Reader",
        "email": "ada@example.com",
        "role": "user",
    }
    assert_no_secrets(data["user"])
    assert "token" not in data

    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith("token=")
    assert "HttpOnly" in set_cookie
    assert "expires=" in set_cookie.lower()
    assert "secure" not in set_cookie.lower()

    result = await db_session.exec(select(User).where(User.email == "ada@example.com"))
    user = result.one()
    assert user.password_hash != "CorrectHorse1"
    assert user.password_hash.startswith("$2")


@pytest.mark.asyncio
async def test_register_duplicate_email_is_case_insensitive(client: AsyncClient, test_data):
    first = await client.post("/api/auth/register", json=test_data.payload("register"))
    assert first.status_code == 201

    response = await client.post(
        "/api/auth/register",
        json=test_data.payload("register", email="ADA@Example.com"),
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "EMAIL_ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_register_validation_error(client: AsyncClient, test_data):
    response = await client.post(
        "/api/auth/register", json=test_data.payload("register", password="short")
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_login_success_updates_last_login(
    client: AsyncClient, db_session: AsyncSession, credentials, auth_settings
):
    user = await create_user(db_session, credentials, auth_settings, email="login@example.com")

    response = await client.post(
        "/api/auth/login", json={"email": "Login@Example.com", "password": user.password}
    )

    assert response.status_code == 200
    assert response.json()["user"]["id"] == str(user.id)
    assert response.json()["user"]["last_login_at"] is not None
    assert response.cookies.get("token")

    token = response.cookies.get("token")
    claims = SessionTokenService(auth_settings).verify(token)
    assert claims.is_ok()
    assert claims.value.user_id == user.id
    assert claims.value.role == UserRole.user


@pytest.mark.asyncio
async def test_wrong_password_and_unknown_email_look_identical(
    client: AsyncClient, db_session: AsyncSession, credentials, auth_settings
):
    user = await create_user(db_session, credentials, auth_settings, email="known@example.com")

    wrong_password = await client.post(
        "/api/auth/login", json={"email": user.email, "password": "NotThePassword1"}
    )
    unknown_email = await client.post(
        "/api/auth/login", json={"email": "nobody@example.com", "password": "NotThePassword1"}
    )

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()
    assert wrong_password.json()["error"] == {
        "code": "INVALID_CREDENTIALS",
        "message": "Invalid credentials",
    }


@pytest.mark.asyncio
async def test_logout_clears_cookie(
    client: AsyncClient, db_session: AsyncSession, credentials, auth_settings
):
    user = await create_user(db_session, credentials, auth_settings)

    response = await client.post("/api/auth/logout", headers=user.headers)

    assert response.status_code == 200
    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith("token=")
    assert "Max-Age=0" in set_cookie


@pytest.mark.asyncio
async def test_protected_route_requires_token(client: AsyncClient):
    client.cookies.clear()

    response = await client.get("/api/resources/my-resources")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "NOT_AUTHENTICATED"


@pytest.mark.asyncio
async def test_tampered_and_foreign_tokens_rejected(
    client: AsyncClient, db_session: AsyncSession, credentials, auth_settings
):
    user = await create_user(db_session, credentials, auth_settings)
    foreign = session_headers(AuthSettings(jwt_secret="someone-else"), user.id, UserRole.admin)

    for headers in ({"Cookie": "token=not-a-jwt"}, foreign):
        response = await client.get("/api/resources/my-resources", headers=headers)
        assert response.status_code == 401
        assert response.json()["error"]["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_expired_token_rejected(
    client: AsyncClient, db_session: AsyncSession, credentials, auth_settings
):
    user = await create_user(db_session, credentials, auth_settings)
    two_hours_ago = datetime.now(UTC) - timedelta(hours=2)
    issued = SessionTokenService(auth_settings, clock=lambda: two_hours_ago).issue(
        user.id, user.role
    )

    response = await client.get(
        "/api/resources/my-resources", headers={"Cookie": f"token={issued.token}"}
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_change_password(
    client: AsyncClient, db_session: AsyncSession, credentials, auth_settings
):
    user = await create_user(db_session, credentials, auth_settings)

    response = await client.post(
        "/api/auth/changepassword",
        json={"current_password": user.password, "new_password": "BrandNewPass9"},
        headers=user.headers,
    )
    assert response.status_code == 200

    old_login = await client.post(
        "/api/auth/login", json={"email": user.email, "password": user.password}
    )
    new_login = await client.post(
        "/api/auth/login", json={"email": user.email, "password": "BrandNewPass9"}
    )
    assert old_login.status_code == 401
    assert new_login.status_code == 200


@pytest.mark.asyncio
async def test_change_password_wrong_current(
    client: AsyncClient, db_session: AsyncSession, credentials, auth_settings
):
    user = await create_user(db_session, credentials, auth_settings)

    response = await client.post(
        "/api/auth/changepassword",
        json={"current_password": "NotMyPassword1", "new_password": "BrandNewPass9"},
        headers=user.headers,
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INCORRECT_PASSWORD"


@pytest.mark.asyncio
async def test_delete_account_cascades(
    client: AsyncClient, db_session: AsyncSession, credentials, auth_settings, storage
):
    """Deleting one's own account removes uploads, their files and every related rating"""
    owner = await create_user(db_session, credentials, auth_settings, email="owner@example.com")
    other = await create_user(db_session, credentials, auth_settings, email="other@example.com")
    category_id = await create_category(db_session)
    own = await create_resource(db_session, storage, category_id, owner.id)
    others = await create_resource(db_session, storage, category_id, other.id, title="Other")
    await add_rating(db_session, own.id, other.id, 5)
    await add_rating(db_session, others.id, owner.id, 3)

    response = await client.request(
        "DELETE",
        "/api/auth/deleteaccount",
        json={"password": owner.password},
        headers=owner.headers,
    )

    assert response.status_code == 200
    assert response.json()["resources_deleted"] == 1
    assert response.json()["warnings"] == []
    assert "Max-Age=0" in response.headers["set-cookie"]
    assert not Path(own.file_path).exists()
    assert Path(others.file_path).exists()

    users = await db_session.exec(select(User).where(User.id == owner.id))
    assert users.first() is None
    resources = await db_session.exec(select(Resource).where(Resource.uploaded_by == owner.id))
    assert resources.all() == []
    ratings = await db_session.exec(select(Rating))
    assert ratings.all() == []

    # The unexpired token stops working once the account is gone
    response = await client.get("/api/resources/my-resources", headers=owner.headers)
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "USER_NOT_FOUND"


@pytest.mark.asyncio
async def test_delete_account_requires_password(
    client: AsyncClient, db_session: AsyncSession, credentials, auth_settings
):
    user = await create_user(db_session, credentials, auth_settings)

    response = await client.request(
        "DELETE",
        "/api/auth/deleteaccount",
        json={"password": "NotMyPassword1"},
        headers=user.headers,
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INCORRECT_PASSWORD"
    result = await db_session.exec(select(User).where(User.id == user.id))
    assert result.first() is not None


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
