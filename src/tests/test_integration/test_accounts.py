import pytest
from sqlalchemy import update

from database.models.accounts import UserModel


@pytest.mark.integration
@pytest.mark.asyncio
async def test_login_success(client, customer_user, jwt_manager):
    """Test successful login returns a token for the user."""
    response = await client.post(
        "/api/v1/accounts/login/",
        json={
            "email": customer_user["email"],
            "password": customer_user["password"]
        },
        headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"
    payload = jwt_manager.decode_access_token(data["access_token"])
    assert payload["user_id"] == customer_user["user_id"]


@pytest.mark.integration
@pytest.mark.asyncio
async def test_login_sets_session_cookie(client, customer_user, jwt_manager):
    """Test that login stores the token in the session cookie for browser pages."""
    response = await client.post(
        "/api/v1/accounts/login/",
        json={
            "email": customer_user["email"],
            "password": customer_user["password"]
        }
    )
    assert response.status_code == 200
    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith("access_token=")
    assert "HttpOnly" in set_cookie
    assert "samesite=lax" in set_cookie.lower()
    assert response.cookies["access_token"] == response.json()["access_token"]
    payload = jwt_manager.decode_access_token(response.cookies["access_token"])
    assert payload["user_id"] == customer_user["user_id"]


@pytest.mark.integration
@pytest.mark.asyncio
async def test_failed_login_sets_no_cookie(client, customer_user):
    response = await client.post(
        "/api/v1/accounts/login/",
        json={
            "email": customer_user["email"],
            "password": "WrongPassword123!"
        }
    )
    assert response.status_code == 401
    assert "set-cookie" not in response.headers
    assert "access_token" not in client.cookies


@pytest.mark.integration
@pytest.mark.asyncio
async def test_login_email_is_case_insensitive(client, customer_user):
    response = await client.post(
        "/api/v1/accounts/login/",
        json={
            "email": customer_user["email"].upper(),
            "password": customer_user["password"]
        }
    )
    assert response.status_code == 200


@pytest.mark.integration
@pytest.mark.asyncio
async def test_login_wrong_password(client, customer_user):
    """Test login with wrong password."""
    response = await client.post(
        "/api/v1/accounts/login/",
        json={
            "email": customer_user["email"],
            "password": "WrongPassword123!"
        }
    )
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid email or password"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_login_unknown_user(client, seed_user_groups):
    response = await client.post(
        "/api/v1/accounts/login/",
        json={
            "email": "nobody@example.com",
            "password": "StrongPass123!"
        }
    )
    assert response.status_code == 401


@pytest.mark.integration
@pytest.mark.asyncio
async def test_login_inactive_user(client, db_session, customer_user):
    await db_session.execute(
        update(UserModel)
        .where(UserModel.id == customer_user["user_id"])
        .values(is_active=False)
    )
    await db_session.commit()

    response = await client.post(
        "/api/v1/accounts/login/",
        json={
            "email": customer_user["email"],
            "password": customer_user["password"]
        }
    )
    assert response.status_code == 403
    assert response.json()["detail"] == "User account is not activated."
