"""
Shared fixtures.

Configuration is pushed into the environment before the app is imported:
in-memory SQLite, a throwaway upload directory and cheap bcrypt rounds.
Every test gets a freshly built app, so the database starts empty.
"""
import os
import tempfile

UPLOAD_DIR = tempfile.mkdtemp(prefix="storefront-uploads-")

os.environ.update(
    {
        "DATABASE_URL": "sqlite://",
        "JWT_SECRET": "test-secret",
        "ADMIN_EMAIL": "admin@example.com",
        "ADMIN_PASSWORD": "admin-pass",
        "BCRYPT_ROUNDS": "4",
        "UPLOAD_DIR": UPLOAD_DIR,
        "LOG_LEVEL": "WARNING",
    }
)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.core.config import get_settings  # noqa: E402

get_settings.cache_clear()

from app.database import Database  # noqa: E402
from app.main import create_app  # noqa: E402
from app.models.product import Product  # noqa: E402
from app.models.user import User  # noqa: E402

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


# ----- HTTP level -----


@pytest.fixture
def test_client():
    """TestClient over a fresh app; the context manager runs the lifespan."""
    with TestClient(create_app()) as client:
        yield client


@pytest.fixture
def admin_token(test_client: TestClient) -> str:
    response = test_client.post(
        "/api/login",
        json={"email": "admin@example.com", "password": "admin-pass"},
    )
    assert response.status_code == 200
    return response.json()["token"]


@pytest.fixture
def signup_and_login(test_client: TestClient):
    """Factory: create a customer and return (token, user dict)."""

    def _signup_and_login(email: str = "alice@example.com", name: str = "Alice"):
        response = test_client.post(
            "/api/signup",
            json={"name": name, "email": email, "password": "secret123"},
        )
        assert response.status_code == 200
        response = test_client.post(
            "/api/user/login",
            json={"email": email, "password": "secret123"},
        )
        assert response.status_code == 200
        data = response.json()
        return data["token"], data["user"]

    return _signup_and_login


@pytest.fixture
def user_token(signup_and_login) -> str:
    token, _ = signup_and_login()
    return token


@pytest.fixture
def create_product(test_client: TestClient, admin_token: str):
    """Factory: create a product through the admin endpoint, return its JSON."""

    def _create_product(name: str = "Mug", price: str = "9.99", description: str = "Ceramic"):
        response = test_client.post(
            "/api/products",
            data={"name": name, "price": price, "description": description},
            files={"image": (f"{name.lower()}.png", PNG_BYTES, "image/png")},
            headers=auth(admin_token),
        )
        assert response.status_code == 200, response.text
        return response.json()

    return _create_product


# ----- Service level -----


@pytest.fixture
def db():
    database = Database("sqlite://")
    database.open()
    yield database
    database.close()


@pytest.fixture
def session(db: Database):
    with db.session() as session:
        yield session


@pytest.fixture
def user(session) -> User:
    row = User(name="Bob", email="bob@example.com", password_hash="x")
    session.add(row)
    session.commit()
    session.refresh(row)
    return row


@pytest.fixture
def product(session) -> Product:
    row = Product(name="Mug", price=9.99, description="Ceramic", image_url="/uploads/1-mug.png")
    session.add(row)
    session.commit()
    session.refresh(row)
    return row
