"""Account maintenance + favorites."""

import pytest

from conftest import bearer, login


@pytest.fixture
def token(client, alice):
    return login(client, "alice", "Secret123!").json()["token"]


def _movie_id(client, token, title):
    return client.get(f"/movies/{title}", headers=bearer(token)).json()["movie_id"]


class TestUpdate:
    def test_update_profile(self, client, token):
        r = client.put(
            "/user",
            json={"username": "alice", "email": "alice@new.example.com", "birthday": "1991-02-03"},
            headers=bearer(token),
        )
        assert r.status_code == 200
        u = r.json()["user"]
        assert u["email"] == "alice@new.example.com"
        assert u["birthday"] == "1991-02-03"

    def test_cannot_update_someone_else(self, client, token):
        r = client.put("/user", json={"username": "bobby", "email": "x@example.com"}, headers=bearer(token))
        assert r.status_code == 403
        assert r.json()["detail"] == "permission_denied"

    def test_password_change(self, client, token):
        r = client.put("/user", json={"username": "alice", "password": "N3wPassword!"}, headers=bearer(token))
        assert r.status_code == 200

        assert login(client, "alice", "Secret123!").status_code == 401
        assert login(client, "alice", "N3wPassword!").status_code == 200
        # Stateless tokens stay valid after a password change.
        assert client.get("/user", headers=bearer(token)).status_code == 200

    def test_email_clash(self, client, token):
        client.post("/users", json={"username": "bobby", "password": "pw", "email": "bob@example.com"})
        r = client.put("/user", json={"username": "alice", "email": "bob@example.com"}, headers=bearer(token))
        assert r.status_code == 409

    def test_invalid_email(self, client, token):
        r = client.put("/user", json={"username": "alice", "email": "nope"}, headers=bearer(token))
        assert r.status_code == 400
        assert r.json()["detail"] == "invalid_email"


class TestDelete:
    def test_delete_account(self, client, token):
        r = client.delete("/user", headers=bearer(token))
        assert r.status_code == 200
        assert r.json()["message"] == "alice was deleted."

        # Token outlives the account but no longer resolves.
        assert client.get("/user", headers=bearer(token)).status_code == 401
        assert login(client, "alice", "Secret123!").status_code == 401


class TestFavorites:
    def test_add_is_idempotent_set(self, client, token, seeded):
        mid = _movie_id(client, token, "Inception")

        first = client.post(f"/user/favorites/{mid}", headers=bearer(token))
        second = client.post(f"/user/favorites/{mid}", headers=bearer(token))

        assert first.status_code == second.status_code == 200
        assert second.json()["user"]["favorite_movies"] == [mid]

    def test_add_and_remove(self, client, token, seeded):
        a = _movie_id(client, token, "Inception")
        b = _movie_id(client, token, "Parasite")
        client.post(f"/user/favorites/{a}", headers=bearer(token))
        client.post(f"/user/favorites/{b}", headers=bearer(token))

        r = client.delete(f"/user/favorites/{a}", headers=bearer(token))
        assert r.json()["user"]["favorite_movies"] == [b]

        # Removing a non-favorite is a no-op.
        r = client.delete(f"/user/favorites/{a}", headers=bearer(token))
        assert r.status_code == 200
        assert r.json()["user"]["favorite_movies"] == [b]

        me = client.get("/user", headers=bearer(token)).json()["user"]
        assert me["favorite_movies"] == [b]

    def test_unknown_movie(self, client, token, seeded):
        r = client.post("/user/favorites/999999", headers=bearer(token))
        assert r.status_code == 404
        assert r.json()["detail"] == "movie_not_found"

    def test_requires_token(self, client, seeded):
        assert client.post("/user/favorites/1").status_code == 401

    @pytest.mark.parametrize("mid", ["99999999999999999999", "0", "-1"])
    def test_out_of_range_movie_id(self, client, token, seeded, mid):
        r = client.post(f"/user/favorites/{mid}", headers=bearer(token))
        assert r.status_code == 404
        assert r.json()["detail"] == "movie_not_found"

        r = client.delete(f"/user/favorites/{mid}", headers=bearer(token))
        assert r.status_code == 200
        assert r.json()["user"]["favorite_movies"] == []
