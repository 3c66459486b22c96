import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ALGORITHM"] = "HS256"
os.environ["COOKIE_SECURE"] = "false"
os.environ["LOG_FILE"] = ""
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient

import models
from database import Base, SessionLocal, engine
from main import app


@pytest.fixture(autouse=True)
def reset_db():
    """Start every test from empty tables"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_client():
    """Factory for extra clients, each with its own cookie jar"""
    clients = []

    def _make():
        c = TestClient(app)
        clients.append(c)
        return c

    yield _make
    for c in clients:
        c.close()


@pytest.fixture
def register():
    """Register (and thereby log in) ``username`` on the given client"""
    def _register(client, username="marco", password="my123"):
        resp = client.post("/api/auth/register", json={"username": username, "password": password})
        assert resp.status_code == 200, resp.text
        return resp.json()
    return _register


@pytest.fixture
def author(db):
    """A user row created without going through password hashing"""
    user = models.User(username="author", password_hash="not-a-real-hash")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user
