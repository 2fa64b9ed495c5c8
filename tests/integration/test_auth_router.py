import pytest
from httpx import AsyncClient
from app.models.user import Role
from tests.conftest import TEST_PASSWORD, auth_headers


@pytest.mark.asyncio
async def test_register_login_logout_flow(client: AsyncClient):
    register = await client.post(
        "/api/v1/auth/register",
        json={
            "email": "new@example.com",
            "password": "secret123",
            "first_name": "New",
            "last_name": "User",
        },
    )
    assert register.status_code == 200
    assert register.json()["user"]["role"] == "USER"

    login = await client.post(
        "/api/v1/auth/authenticate", json={"email": "new@example.com", "password": "secret123"}
    )
    assert login.status_code == 200
    token = login.json()["access_token"]
    headers = {"Authorization": f"Bearer {token}"}

    me = await client.get("/api/v1/auth/me", headers=headers)
    assert me.status_code == 200
    assert me.json()["email"] == "new@example.com"

    logout = await client.post("/api/v1/auth/logout", headers=headers)
    assert logout.status_code == 200

    after = await client.get("/api/v1/auth/me", headers=headers)
    assert after.status_code == 401


@pytest.mark.asyncio
async def test_duplicate_registration_conflict(client: AsyncClient, make_user):
    make_user("taken@example.com")

    response = await client.post(
        "/api/v1/auth/register",
        json={"email": "taken@example.com", "password": "secret123", "first_name": "A", "last_name": "B"},
    )

    assert response.status_code == 409
    assert response.json()["error"] == "ConflictException"


@pytest.mark.asyncio
async def test_wrong_password_rejected(client: AsyncClient, make_user):
    make_user("user@example.com")

    bad = await client.post(
        "/api/v1/auth/authenticate", json={"email": "user@example.com", "password": "nope"}
    )
    good = await client.post(
        "/api/v1/auth/authenticate", json={"email": "user@example.com", "password": TEST_PASSWORD}
    )

    assert bad.status_code == 401
    assert good.status_code == 200


@pytest.mark.asyncio
async def test_missing_or_malformed_token(client: AsyncClient):
    missing = await client.get("/api/v1/auth/me")
    malformed = await client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not-a-jwt"})

    assert missing.status_code == 401
    assert malformed.status_code == 401


@pytest.mark.asyncio
async def test_admin_routes_require_admin(client: AsyncClient, make_user):
    user = make_user("user@example.com")
    admin = make_user("admin@example.com", role=Role.ADMIN)

    anonymous = await client.get("/api/v1/movies/admin/stats")
    forbidden = await client.get("/api/v1/movies/admin/stats", headers=auth_headers(user))
    allowed = await client.get("/api/v1/movies/admin/stats", headers=auth_headers(admin))

    assert anonymous.status_code == 401
    assert forbidden.status_code == 403
    assert allowed.status_code == 200
    assert allowed.json()["total_movies"] == 0


@pytest.mark.asyncio
async def test_health_and_request_id(client: AsyncClient):
    response = await client.get("/api/v1/system/health", headers={"X-Request-ID": "abc-123"})

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.headers["X-Request-ID"] == "abc-123"
