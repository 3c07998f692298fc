"""
Name: API Test Fixtures

Responsibilities:
  - Provide a TestClient wired to fresh in-memory services per test
  - Provide an ADMIN account and helpers to obtain Bearer headers

Notes:
  - Overrides are cleared after each test so other modules see a clean app.
"""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sweetshop.api.main import app
from sweetshop.container import (
    get_identity_service,
    get_inventory_service,
    get_token_service,
    reset_container,
)
from sweetshop.domain.entities import utcnow
from sweetshop.identity.users import User, UserRole

ADMIN_PASSWORD = "admin123"


@pytest.fixture
def client(identity_service, inventory_service, token_service):
    reset_container()
    app.dependency_overrides[get_identity_service] = lambda: identity_service
    app.dependency_overrides[get_inventory_service] = lambda: inventory_service
    app.dependency_overrides[get_token_service] = lambda: token_service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def admin_user(user_repo, password_hasher) -> User:
    return user_repo.save_user(
        User(
            id=uuid4(),
            username="admin",
            email="admin@sweetshop.local",
            password_hash=password_hasher.hash(ADMIN_PASSWORD),
            role=UserRole.ADMIN,
            created_at=utcnow(),
        )
    )


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(client, admin_user) -> dict[str, str]:
    res = client.post(
        "/api/auth/login",
        json={"username": admin_user.username, "password": ADMIN_PASSWORD},
    )
    assert res.status_code == 200
    return bearer(res.json()["token"])


@pytest.fixture
def user_headers(client) -> dict[str, str]:
    res = client.post(
        "/api/auth/register",
        json={"username": "alice", "email": "alice@example.com", "password": "secret1"},
    )
    assert res.status_code == 201
    return bearer(res.json()["token"])
