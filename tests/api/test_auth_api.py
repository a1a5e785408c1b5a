"""
Tests for /api/login, /api/logout and /api/whoami.
"""

import pytest
from fastapi.testclient import TestClient

from storage_gateway.context import build_context
from storage_gateway.infra.config.settings import Settings
from storage_gateway.main import create_app
from tests._helpers.auth import ALICE_TOKEN, BOB_TOKEN, cookie


class TestLogin:
    def test_login_success(self, client):
        res = client.post("/api/login", json={"username": "alice", "token": ALICE_TOKEN})

        assert res.status_code == 200
        assert res.json() == {"name": "Alice A."}
        set_cookie = res.headers["set-cookie"]
        assert set_cookie.startswith("session_id=")
        assert "HttpOnly" in set_cookie
        assert "SameSite=Lax" in set_cookie
        assert "Max-Age=2592000" in set_cookie
        assert "Secure" not in set_cookie
        assert "Domain=" not in set_cookie

    @pytest.mark.parametrize(
        "payload",
        [
            {"username": "alice", "token": "wrong"},
            {"username": "nobody", "token": ALICE_TOKEN},
            {"username": "alice", "token": BOB_TOKEN},
            {"username": "", "token": ""},
        ],
    )
    def test_login_failure_is_generic(self, client, payload):
        res = client.post("/api/login", json=payload)

        assert res.status_code == 401
        assert res.json() == {"error": "Invalid username or token"}
        assert "set-cookie" not in res.headers

    def test_login_requires_body(self, client):
        res = client.post("/api/login", json={"username": "alice"})
        assert res.status_code == 422
        assert "error" in res.json()

    def test_production_cookie(self, credentials, sessions, storage):
        settings = Settings(
            _env_file=None,
            PRODUCTION=True,
            COOKIE_DOMAIN="files.example.org",
            STATIC_DIR="/nonexistent",
        )
        app = create_app(
            build_context(settings, credentials=credentials, sessions=sessions, storage=storage)
        )
        with TestClient(app, base_url="https://files.example.org") as client:
            res = client.post("/api/login", json={"username": "alice", "token": ALICE_TOKEN})

        set_cookie = res.headers["set-cookie"]
        assert "Secure" in set_cookie
        assert "Domain=files.example.org" in set_cookie

    def test_multiple_sessions_per_user(self, client, login):
        first = login()
        second = login()

        assert first != second
        assert client.get("/api/whoami", headers=cookie(first)).status_code == 200
        assert client.get("/api/whoami", headers=cookie(second)).status_code == 200


class TestWhoAmI:
    def test_whoami(self, client, login):
        session_id = login()

        res = client.get("/api/whoami", headers=cookie(session_id))

        assert res.status_code == 200
        assert res.json() == {"username": "alice", "name": "Alice A."}

    def test_cookie_jar_from_login_is_accepted(self, client):
        client.post("/api/login", json={"username": "bob", "token": BOB_TOKEN})

        res = client.get("/api/whoami")

        assert res.json() == {"username": "bob", "name": "Bob B."}

    def test_missing_session(self, client):
        res = client.get("/api/whoami")

        assert res.status_code == 401
        assert res.json() == {"error": "Missing session"}

    @pytest.mark.parametrize(
        "header",
        ["session_id=does-not-exist", "session_id=", "theme=dark", "garbage;;;="],
    )
    def test_bad_cookie_headers(self, client, header):
        res = client.get("/api/whoami", headers={"Cookie": header})
        expected = 403 if header.startswith("session_id=") else 401
        assert res.status_code == expected

    def test_invalid_session(self, client):
        res = client.get("/api/whoami", headers=cookie("forged"))

        assert res.status_code == 403
        assert res.json() == {"error": "Invalid session"}


class TestLogout:
    def test_login_whoami_logout_scenario(self, client):
        res = client.post(
            "/api/login", json={"username": "alice", "token": "correct-token"}
        )
        assert res.status_code == 200
        assert res.json() == {"name": "Alice A."}
        assert "set-cookie" in res.headers
        session_id = res.cookies["session_id"]
        client.cookies.clear()

        res = client.get("/api/whoami", headers=cookie(session_id))
        assert res.json() == {"username": "alice", "name": "Alice A."}

        res = client.post("/api/logout", headers=cookie(session_id))
        assert res.status_code == 200
        assert res.headers["set-cookie"] == "session_id=; HttpOnly; Path=/; Max-Age=0"

        res = client.get("/api/whoami", headers=cookie(session_id))
        assert res.status_code == 403

    def test_logout_ends_every_session_of_the_user(self, client, login):
        laptop = login()
        phone = login()
        bobs = login("bob", BOB_TOKEN)

        assert client.post("/api/logout", headers=cookie(laptop)).status_code == 200

        assert client.get("/api/whoami", headers=cookie(laptop)).status_code == 403
        assert client.get("/api/whoami", headers=cookie(phone)).status_code == 403
        assert client.get("/api/whoami", headers=cookie(bobs)).status_code == 200

    def test_logout_requires_session(self, client):
        assert client.post("/api/logout").status_code == 401


class TestMisc:
    def test_health(self, client):
        assert client.get("/health").json()["status"] == "healthy"

    def test_request_id_is_echoed(self, client):
        res = client.get("/api/whoami", headers={"X-Request-ID": "req-1"})
        assert res.headers["x-request-id"] == "req-1"

    def test_unknown_route_uses_error_envelope(self, client):
        res = client.get("/api/nope")
        assert res.status_code == 404
        assert res.json() == {"error": "Not Found"}
