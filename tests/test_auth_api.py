import logging

import config
import models


def test_register_returns_user_without_credentials(client):
    resp = client.post("/api/auth/register", json={"username": "marco", "password": "my123"})

    assert resp.status_code == 200
    data = resp.json()
    assert data["username"] == "marco"
    assert set(data) == {"id", "username"}
    assert "access_token" in resp.cookies


def test_register_validation_error_is_400(client):
    resp = client.post("/api/auth/register", json={"username": "x!", "password": "my123"})

    assert resp.status_code == 400
    assert isinstance(resp.json()["detail"], list)


def test_register_missing_password_is_400(client):
    resp = client.post("/api/auth/register", json={"username": "marco"})
    assert resp.status_code == 400


def test_register_same_username_twice_is_conflict(client, db):
    first = client.post("/api/auth/register", json={"username": "marco", "password": "a"})
    second = client.post("/api/auth/register", json={"username": "marco", "password": "b"})

    assert first.status_code == 200
    assert second.status_code == 409
    assert db.query(models.User).filter(models.User.username == "marco").count() == 1


def test_check_after_register(client, register):
    user = register(client)

    resp = client.get("/api/auth/check")

    assert resp.status_code == 200
    assert resp.json() == user


def test_check_without_session_is_401(client):
    assert client.get("/api/auth/check").status_code == 401


def test_check_with_forged_cookie_is_401(client):
    client.cookies.set("access_token", "forged.token.value")
    assert client.get("/api/auth/check").status_code == 401


def test_login_with_correct_password(client, make_client, register):
    register(client)
    other = make_client()

    resp = other.post("/api/auth/login", json={"username": "marco", "password": "my123"})

    assert resp.status_code == 200
    assert resp.json()["username"] == "marco"
    assert other.get("/api/auth/check").json()["username"] == "marco"


def test_login_with_wrong_password_or_unknown_user(client, make_client, register):
    register(client)
    other = make_client()

    wrong = other.post("/api/auth/login", json={"username": "marco", "password": "nope"})
    unknown = other.post("/api/auth/login", json={"username": "ghost", "password": "my123"})

    assert wrong.status_code == 401
    assert unknown.status_code == 401
    assert wrong.json() == unknown.json()
    assert other.get("/api/auth/check").status_code == 401


def test_logout_clears_session(client, register):
    register(client)

    resp = client.post("/api/auth/logout")

    assert resp.status_code == 204
    assert resp.content == b""
    assert client.get("/api/auth/check").status_code == 401


def test_logout_without_session(client):
    assert client.post("/api/auth/logout").status_code == 204


def test_logout_is_logged(client, register, caplog):
    register(client)

    with caplog.at_level(logging.INFO, logger="blog_api.auth"):
        client.post("/api/auth/logout")

    assert "User marco logged out" in caplog.text


def test_token_close_to_expiry_is_refreshed(client, register, monkeypatch):
    register(client)
    monkeypatch.setattr(config, "ACCESS_TOKEN_REFRESH_MINUTES", config.ACCESS_TOKEN_EXPIRE_MINUTES + 1)

    resp = client.get("/api/auth/check")

    assert resp.status_code == 200
    assert "access_token=" in resp.headers.get("set-cookie", "")


def test_fresh_token_is_not_refreshed(client, register):
    register(client)

    resp = client.get("/api/auth/check")

    assert "set-cookie" not in resp.headers
