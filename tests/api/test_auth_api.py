"""Auth, user management and health endpoints."""

from httpx import AsyncClient

from trackplan.domain.enums import UserRole

PASSWORD = "correct-horse-battery"


async def test_health_ok(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["database"] == "ok"


async def test_request_id_header_is_echoed(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


async def test_login_and_me(client: AsyncClient, make_user) -> None:
    await make_user("analyst", UserRole.ANALYST, name="Ana Lyst")

    login = await client.post(
        "/api/v1/auth/login", json={"username": "analyst", "password": PASSWORD}
    )
    assert login.status_code == 200
    token = login.json()["access_token"]
    assert login.json()["token_type"] == "bearer"

    me = await client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    body = me.json()
    assert body["username"] == "analyst"
    assert body["role"] == "analyst"
    assert "can_edit_events" in body["permissions"]
    assert "can_delete_events" not in body["permissions"]


async def test_login_wrong_password(client: AsyncClient, make_user) -> None:
    await make_user("analyst", UserRole.ANALYST)
    response = await client.post(
        "/api/v1/auth/login", json={"username": "analyst", "password": "nope-nope"}
    )
    assert response.status_code == 401
    assert response.json()["error"] == "AUTHENTICATION_ERROR"
    assert response.headers["WWW-Authenticate"] == "Bearer"


async def test_login_missing_body_returns_422(client: AsyncClient) -> None:
    response = await client.post("/api/v1/auth/login", json={})
    assert response.status_code == 422
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_me_requires_token(client: AsyncClient) -> None:
    assert (await client.get("/api/v1/auth/me")).status_code == 401
    garbage = await client.get(
        "/api/v1/auth/me", headers={"Authorization": "Bearer not-a-jwt"}
    )
    assert garbage.status_code == 401


async def test_admin_creates_user(client: AsyncClient, admin_headers) -> None:
    payload = {"username": "newdev", "password": "long-enough-pw", "role": "developer"}

    created = await client.post("/api/v1/users", json=payload, headers=admin_headers)
    assert created.status_code == 201
    assert created.json()["permissions"] == [
        "can_view_events",
        "can_change_statuses",
        "can_comment",
    ]

    duplicate = await client.post("/api/v1/users", json=payload, headers=admin_headers)
    assert duplicate.status_code == 409
    assert duplicate.json()["error"] == "USER_ALREADY_EXISTS"

    listed = await client.get("/api/v1/users", headers=admin_headers)
    assert {u["username"] for u in listed.json()} == {"admin", "newdev"}


async def test_non_admin_cannot_manage_users(client: AsyncClient, viewer_headers) -> None:
    response = await client.get("/api/v1/users", headers=viewer_headers)
    assert response.status_code == 403
    body = response.json()
    assert body["error"] == "PERMISSION_DENIED"
    assert body["details"] == {"capability": "can_administer", "role": "viewer"}
