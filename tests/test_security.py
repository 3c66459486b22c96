from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

import config
import security
from database import commit
from errors import PersistenceError


def test_hash_and_verify_password():
    hashed = security.hash_password("my123")
    assert hashed != "my123"
    assert security.verify_password("my123", hashed)
    assert not security.verify_password("nope", hashed)


def test_token_round_trip():
    token = security.create_access_token({"sub": "marco", "id": 1})
    payload = security.decode_access_token(token)
    assert payload["sub"] == "marco"
    assert payload["id"] == 1


def test_expired_token_is_rejected():
    token = security.create_access_token({"sub": "marco", "id": 1}, expires_delta=timedelta(minutes=-5))
    assert security.decode_access_token(token) is None


def test_garbage_token_is_rejected():
    assert security.decode_access_token("not.a.token") is None


def test_token_without_identity_is_rejected():
    token = security.create_access_token({"sub": "marco"})
    assert security.decode_access_token(token) is None


def test_needs_refresh(monkeypatch):
    fresh = security.decode_access_token(security.create_access_token({"sub": "m", "id": 1}))
    short = security.decode_access_token(
        security.create_access_token({"sub": "m", "id": 1}, expires_delta=timedelta(minutes=5)))

    monkeypatch.setattr(config, "ACCESS_TOKEN_REFRESH_MINUTES", 15)
    assert not security.needs_refresh(fresh)
    assert security.needs_refresh(short)


def test_commit_wraps_store_failures():
    session = MagicMock()
    session.commit.side_effect = OperationalError("INSERT", {}, Exception("disk I/O error"))

    with pytest.raises(PersistenceError) as exc_info:
        commit(session)

    session.rollback.assert_called_once()
    assert exc_info.value.status_code == 500
    assert "disk" not in exc_info.value.detail


def test_commit_reraises_integrity_errors():
    session = MagicMock()
    session.commit.side_effect = IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))

    with pytest.raises(IntegrityError):
        commit(session)

    session.rollback.assert_called_once()
