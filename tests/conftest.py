import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient

from salonbook.database import Base, SessionLocal, engine
from salonbook.main import app


@pytest.fixture(autouse=True)
def fresh_db():
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
    return TestClient(app)


def register(client, email, role="client", **extra):
    body = {"name": email.split("@")[0].title(), "email": email, "phone": "555-0100", "password": "Password123!", "role": role}
    body.update(extra)
    res = client.post("/auth/register", json=body)
    assert res.status_code == 201, res.text
    return res.json()


def auth_header(client, email, password="Password123!"):
    res = client.post("/auth/login", json={"email": email, "password": password})
    assert res.status_code == 200, res.text
    return {"Authorization": f"Bearer {res.json()['access_token']}"}


@pytest.fixture
def stylist(client):
    """Stylist X offering a single Haircut at 1000; returns (profile id, auth header)."""
    register(client, "x@example.com", role="stylist", services=[{"name": "Haircut", "price": 1000}])
    profile = client.get("/stylists/").json()[0]
    return profile["id"], auth_header(client, "x@example.com")


@pytest.fixture
def customer(client):
    register(client, "alice@example.com")
    return auth_header(client, "alice@example.com")
