"""Session HTTP surface: loading gate, callback, logout, theme, health."""

from __future__ import annotations

from tests.conftest import create_identity_token


class TestLoadingGate:

    async def test_pages_answer_loading_before_first_callback(self, client):
        response = await client.get("/api/v1/dashboard")

        assert response.status_code == 503
        assert response.json() == {"status": "loading"}
        assert response.headers["Retry-After"] == "1"

    async def test_session_reports_uninitialized(self, client):
        response = await client.get("/api/v1/session")

        assert response.status_code == 200
        body = response.json()
        assert body["initialized"] is False
        assert body["is_authenticated"] is False

    async def test_health_is_open(self, client):
        response = await client.get("/api/v1/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestCallback:

    async def test_signed_out_callback_then_pages_need_auth(self, client):
        response = await client.post("/api/v1/session/callback", json={"location": "/dashboard"})

        assert response.status_code == 200
        body = response.json()
        assert body["redirect_to"] == "/login"
        assert body["initialized"] is True
        assert body["is_authenticated"] is False

        response = await client.get("/api/v1/employees")
        assert response.status_code == 401
        assert response.headers["content-type"].startswith("application/problem+json")
        assert response.json()["type"].endswith("/unauthenticated")

    async def test_signed_in_callback_follows_redirect(self, client):
        response = await client.post(
            "/api/v1/session/callback",
            json={
                "location": "/login?redirect=/employees",
                "token": create_identity_token("u-3", name="Priya"),
            },
        )

        body = response.json()
        assert body["redirect_to"] == "/employees"
        assert body["is_authenticated"] is True
        assert body["user"]["user_id"] == "u-3"
        assert body["user"]["name"] == "Priya"

        response = await client.get("/api/v1/employees")
        assert response.status_code == 200

    async def test_failed_callback_still_initializes(self, client):
        response = await client.post(
            "/api/v1/session/callback",
            json={"location": "/", "token": create_identity_token(expired=True)},
        )

        body = response.json()
        assert body["redirect_to"] is None
        assert body["initialized"] is True

        toasts = (await client.get("/api/v1/notifications")).json()["data"]
        assert [t["level"] for t in toasts] == ["error"]

    async def test_expired_token_after_sign_in_drops_session(self, client, signed_in):
        response = await client.post(
            "/api/v1/session/callback",
            json={"location": "/employees", "token": create_identity_token(expired=True)},
        )

        body = response.json()
        assert body["redirect_to"] is None
        assert body["is_authenticated"] is False
        assert (await client.get("/api/v1/employees")).status_code == 401

    async def test_malformed_claims_are_not_a_server_error(self, client):
        from jose import jwt

        from staffsphere.config import settings

        token = jwt.encode({"sub": "u-1", "name": 42}, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
        response = await client.post("/api/v1/session/callback", json={"location": "/", "token": token})

        assert response.status_code == 200
        assert response.json()["initialized"] is True
        assert response.json()["is_authenticated"] is False

    async def test_logout(self, client, signed_in):
        response = await client.post("/api/v1/session/logout")

        assert response.json()["redirect_to"] == "/login"
        assert response.json()["is_authenticated"] is False
        assert (await client.get("/api/v1/employees")).status_code == 401


class TestTheme:

    async def test_theme_defaults_to_light(self, client):
        response = await client.get("/api/v1/session/theme")
        assert response.json() == {"dark_mode": False}

    async def test_toggle_is_visible_to_session(self, client):
        response = await client.post("/api/v1/session/theme/toggle")
        assert response.json() == {"dark_mode": True}

        assert (await client.get("/api/v1/session/theme")).json() == {"dark_mode": True}
        assert (await client.get("/api/v1/session")).json()["dark_mode"] is True


class TestNotifications:

    async def test_drain_and_peek(self, app, client):
        app.state.app_store.toasts.info("Welcome back")

        peeked = await client.get("/api/v1/notifications", params={"peek": True})
        assert [t["message"] for t in peeked.json()["data"]] == ["Welcome back"]

        drained = await client.get("/api/v1/notifications")
        assert [t["message"] for t in drained.json()["data"]] == ["Welcome back"]

        assert (await client.get("/api/v1/notifications")).json()["data"] == []
