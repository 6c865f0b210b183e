"""Login / registration / bearer auth over HTTP."""

import json
from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient

from movie_catalog.api.server import create_app
from movie_catalog.auth.security import create_access_token
from movie_catalog.config import Config

from conftest import TEST_SECRET, bearer, login


def _register(client, username="alice", password="Secret123!", email="alice@example.com", **extra):
    body = {"username": username, "password": password, "email": email}
    body.update(extra)
    return client.post("/users", json=body)


class TestScenario:
    """register alice -> login -> wrong login -> protected lookup."""

    def test_full_flow(self, client):
        r = _register(client)
        assert r.status_code == 201
        assert r.json()["user"]["username"] == "alice"

        r = login(client, "alice", "Secret123!")
        assert r.status_code == 200
        body = r.json()
        assert body["token_type"] == "bearer"
        assert body["user"]["username"] == "alice"
        token = body["token"]

        bad = login(client, "alice", "wrong")
        assert bad.status_code == 401
        assert bad.json() == {"detail": "invalid_credentials"}
        assert bad.headers["www-authenticate"] == "Bearer"

        me = client.get("/user", headers=bearer(token))
        assert me.status_code == 200
        assert me.json()["user"]["username"] == "alice"

    def test_password_hash_never_in_responses(self, client):
        responses = [
            _register(client),
            login(client, "alice", "Secret123!"),
        ]
        token = responses[1].json()["token"]
        responses.append(client.get("/user", headers=bearer(token)))
        responses.append(client.put("/user", json={"username": "alice", "first_name": "Alice"}, headers=bearer(token)))

        for r in responses:
            text = json.dumps(r.json())
            assert "password" not in text
            assert "pbkdf2" not in text


class TestLogin:
    def test_unknown_user_same_response_as_wrong_password(self, client, alice):
        unknown = login(client, "nobody", "Secret123!")
        wrong = login(client, "alice", "nope")

        assert unknown.status_code == wrong.status_code == 401
        assert unknown.json() == wrong.json()

    def test_username_case_sensitive(self, client, alice):
        assert login(client, "ALICE", "Secret123!").status_code == 401

    def test_missing_fields(self, client):
        assert client.post("/login", json={"username": "alice"}).status_code == 422

    def test_blank_secret_is_server_error(self, cfg, alice):
        broken = Config(DB_DSN=cfg.DB_DSN, AUTH_JWT_SECRET="", REQUEST_LOG=False)
        with TestClient(create_app(broken)) as c:
            r = login(c, "alice", "Secret123!")
        assert r.status_code == 500
        assert r.json()["detail"] == "token_generation_failed"


class TestRegistration:
    def test_validation_errors(self, client):
        r = _register(client, username="al!", password="", email="not-an-email")

        assert r.status_code == 422
        fields = {e["field"] for e in r.json()["errors"]}
        assert fields == {"username", "password", "email"}

    def test_short_username(self, client):
        r = _register(client, username="abcd")
        assert r.status_code == 422

    def test_duplicate_username(self, client, alice):
        r = _register(client, email="other@example.com")
        assert r.status_code == 409
        assert r.json()["detail"] == "username_exists"

    def test_duplicate_email(self, client, alice):
        r = _register(client, username="alice2")
        assert r.status_code == 409
        assert r.json()["detail"] == "email_exists"

    def test_optional_profile_fields(self, client):
        r = _register(client, birthday="1990-04-18", first_name="Alice", last_name="Liddell")
        u = r.json()["user"]
        assert u["birthday"] == "1990-04-18"
        assert u["first_name"] == "Alice"
        assert u["favorite_movies"] == []


class TestBearer:
    def test_missing_token(self, client):
        r = client.get("/user")
        assert r.status_code == 401
        assert r.json()["detail"] == "missing_token"

    def test_garbage_expired_and_tampered_all_unauthorized(self, client, alice):
        issued = datetime.now(timezone.utc) - timedelta(days=8)
        expired = create_access_token(
            secret=TEST_SECRET, user_id=alice["user_id"], username="alice", expires_minutes=10080, now=issued
        )
        good = login(client, "alice", "Secret123!").json()["token"]
        h, p, s = good.split(".")
        i = len(s) // 2
        tampered = ".".join([h, p, s[:i] + ("A" if s[i] != "A" else "B") + s[i + 1 :]])

        for token in ("garbage", expired, tampered):
            r = client.get("/user", headers=bearer(token))
            assert r.status_code == 401
            assert r.json() == {"detail": "unauthorized"}

    def test_non_bearer_scheme_ignored(self, client, alice):
        token = login(client, "alice", "Secret123!").json()["token"]
        r = client.get("/user", headers={"Authorization": f"Token {token}"})
        assert r.status_code == 401


class TestStoreUnavailable:
    def test_login_reports_503_not_401(self, tmp_path):
        # A directory cannot be opened as a SQLite database.
        cfg = Config(DB_DSN=str(tmp_path), AUTH_JWT_SECRET=TEST_SECRET, REQUEST_LOG=False)
        c = TestClient(create_app(cfg))

        r = login(c, "alice", "Secret123!")
        assert r.status_code == 503
        assert r.json()["detail"] == "store_unavailable"

    def test_protected_route_reports_503(self, tmp_path):
        cfg = Config(DB_DSN=str(tmp_path), AUTH_JWT_SECRET=TEST_SECRET, REQUEST_LOG=False)
        c = TestClient(create_app(cfg))
        token = create_access_token(secret=TEST_SECRET, user_id=1, username="alice", expires_minutes=60)

        r = c.get("/user", headers=bearer(token))
        assert r.status_code == 503


def test_health_and_root(client):
    assert client.get("/health").json() == {"status": "ok"}
    r = client.get("/")
    assert r.status_code == 200
    assert "Welcome" in r.text


def test_static_files_served_from_public_dir(cfg, tmp_path):
    public = tmp_path / "public"
    public.mkdir()
    (public / "documentation.html").write_text("<h1>Movie API docs</h1>")

    with TestClient(create_app(cfg)) as c:
        r = c.get("/documentation.html")
        assert r.status_code == 200
        assert "Movie API docs" in r.text
        # API routes still win over the static mount.
        assert c.get("/health").json() == {"status": "ok"}
        assert "Welcome" in c.get("/").text
        assert c.get("/movies").status_code == 401


def test_request_log_line(cfg, capsys):
    logged = Config(DB_DSN=cfg.DB_DSN, AUTH_JWT_SECRET=TEST_SECRET, REQUEST_LOG=True)
    with TestClient(create_app(logged)) as c:
        c.get("/health")

    out = capsys.readouterr().out
    assert '[api] testclient "GET /health" 200' in out
