"""
Component tests for signup, login and token checks.
"""
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlmodel import select

from app.core.auth import Principal, create_access_token, require_role, verify_token
from app.core.errors import (
    DuplicateEmailError,
    ForbiddenError,
    TokenInvalidError,
    TokenMissingError,
)
from app.core.security import verify_password
from app.models.user import User
from app.repositories.user_repo import UserRepository
from app.schemas.user import SignupRequest
from app.services.auth_service import AuthService
from tests.conftest import auth


class TestSignup:

    def test_signup_success(self, test_client: TestClient):
        response = test_client.post(
            "/api/signup",
            json={"name": "Alice", "email": "alice@example.com", "password": "secret123"},
        )

        assert response.status_code == 200
        assert response.json() == {"message": "Signup successful"}

    def test_signup_missing_field(self, test_client: TestClient):
        response = test_client.post(
            "/api/signup",
            json={"name": "Alice", "email": "alice@example.com"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "All fields are required"}

    def test_signup_duplicate_email(self, test_client: TestClient):
        body = {"name": "Alice", "email": "alice@example.com", "password": "secret123"}
        assert test_client.post("/api/signup", json=body).status_code == 200

        response = test_client.post("/api/signup", json={**body, "name": "Other"})

        assert response.status_code == 400
        assert response.json() == {"error": "Email already exists"}

    def test_duplicate_email_never_creates_second_row(self, session):
        """
        Validates:
        - ConflictError subclass is raised
        - exactly one row remains, with the first name
        """
        service = AuthService(UserRepository(), "admin@example.com", "admin-pass")
        service.signup(session, SignupRequest(name="A", email="dup@example.com", password="pw"))

        with pytest.raises(DuplicateEmailError):
            service.signup(session, SignupRequest(name="B", email="dup@example.com", password="pw"))

        rows = session.exec(select(User).where(User.email == "dup@example.com")).all()
        assert len(rows) == 1
        assert rows[0].name == "A"

    def test_password_is_hashed(self, session):
        service = AuthService(UserRepository(), "admin@example.com", "admin-pass")
        user = service.signup(
            session, SignupRequest(name="A", email="a@example.com", password="plaintext")
        )

        assert user.password_hash != "plaintext"
        assert verify_password("plaintext", user.password_hash)


class TestLogin:

    def test_user_login_returns_token_and_profile(self, test_client: TestClient):
        test_client.post(
            "/api/signup",
            json={"name": "Alice", "email": "alice@example.com", "password": "secret123"},
        )

        response = test_client.post(
            "/api/user/login",
            json={"email": "alice@example.com", "password": "secret123"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["user"]["name"] == "Alice"
        assert data["user"]["email"] == "alice@example.com"
        assert "password" not in str(data["user"]).lower()

        principal = verify_token(data["token"])
        assert principal.role == "user"
        assert principal.id == data["user"]["id"]

    def test_unknown_email_and_wrong_password_look_the_same(self, test_client: TestClient):
        test_client.post(
            "/api/signup",
            json={"name": "Alice", "email": "alice@example.com", "password": "secret123"},
        )

        wrong_password = test_client.post(
            "/api/user/login",
            json={"email": "alice@example.com", "password": "nope"},
        )
        unknown_email = test_client.post(
            "/api/user/login",
            json={"email": "ghost@example.com", "password": "secret123"},
        )

        assert wrong_password.status_code == unknown_email.status_code == 401
        assert wrong_password.json() == unknown_email.json() == {
            "error": "Invalid email or password"
        }

    def test_login_with_mixed_case_domain(self, test_client: TestClient):
        """
        Validates:
        - signup stores the address with a lowercased domain
        - login with the exact address typed at signup still succeeds
        """
        signup = test_client.post(
            "/api/signup",
            json={"name": "Alice", "email": "Alice@Example.COM", "password": "secret123"},
        )
        assert signup.status_code == 200

        response = test_client.post(
            "/api/user/login",
            json={"email": "Alice@Example.COM", "password": "secret123"},
        )

        assert response.status_code == 200
        assert response.json()["user"]["email"] == "Alice@example.com"

    def test_login_with_malformed_email(self, test_client: TestClient):
        response = test_client.post(
            "/api/user/login",
            json={"email": "not-an-address", "password": "secret123"},
        )

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid email or password"}

    def test_admin_login(self, test_client: TestClient):
        response = test_client.post(
            "/api/login",
            json={"email": "admin@example.com", "password": "admin-pass"},
        )

        assert response.status_code == 200
        assert verify_token(response.json()["token"]).is_admin

    @pytest.mark.parametrize(
        "body",
        [
            {"email": "admin@example.com", "password": "wrong"},
            {"email": "someone@example.com", "password": "admin-pass"},
            {},
        ],
    )
    def test_admin_login_rejected(self, test_client: TestClient, body):
        response = test_client.post("/api/login", json=body)

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid credentials"}

    def test_customer_cannot_log_in_as_admin(self, test_client: TestClient, signup_and_login):
        signup_and_login()

        response = test_client.post(
            "/api/login",
            json={"email": "alice@example.com", "password": "secret123"},
        )

        assert response.status_code == 401


class TestTokens:

    def test_missing_token(self, test_client: TestClient):
        response = test_client.get("/api/cart")

        assert response.status_code == 401
        assert response.json() == {"error": "Token missing"}

    def test_garbage_token(self, test_client: TestClient):
        response = test_client.get("/api/cart", headers=auth("not-a-jwt"))

        assert response.status_code == 403
        assert response.json() == {"error": "Token invalid or expired"}

    def test_token_signed_with_other_secret(self):
        token = jwt.encode({"role": "admin"}, "other-secret", algorithm="HS256")

        with pytest.raises(TokenInvalidError):
            verify_token(token)

    def test_token_older_than_two_hours_is_rejected(self):
        issued = datetime.now(timezone.utc) - timedelta(hours=2, minutes=1)
        token = jwt.encode(
            {
                "sub": "1",
                "id": 1,
                "role": "user",
                "iat": issued,
                "exp": issued + timedelta(hours=2),
            },
            "test-secret",
            algorithm="HS256",
        )

        with pytest.raises(TokenInvalidError):
            verify_token(token)

    def test_expired_token_over_http(self, test_client: TestClient):
        token = create_access_token(
            {"sub": "1", "id": 1, "role": "user"},
            expires_delta=timedelta(seconds=-1),
        )

        response = test_client.get("/api/cart", headers=auth(token))

        assert response.status_code == 403
        assert response.json() == {"error": "Token invalid or expired"}

    def test_fresh_token_is_valid(self):
        token = create_access_token({"sub": "7", "id": 7, "name": "N", "email": "n@x", "role": "user"})

        principal = verify_token(token)

        assert principal == Principal(id=7, name="N", email="n@x", role="user")

    def test_empty_token_is_missing(self):
        with pytest.raises(TokenMissingError):
            verify_token(None)

    def test_unknown_role_is_invalid(self):
        with pytest.raises(TokenInvalidError):
            verify_token(create_access_token({"role": "superuser"}))

    def test_require_role(self):
        admin = Principal(role="admin")
        customer = Principal(id=1, role="user")

        assert require_role(admin, "admin") is admin
        with pytest.raises(ForbiddenError):
            require_role(customer, "admin")
        with pytest.raises(ForbiddenError):
            require_role(admin, "user")

    def test_user_token_on_admin_route(self, test_client: TestClient, user_token: str):
        response = test_client.delete("/api/products/1", headers=auth(user_token))

        assert response.status_code == 403
        assert response.json() == {"error": "Admin only"}

    def test_admin_token_on_cart_route(self, test_client: TestClient, admin_token: str):
        response = test_client.get("/api/cart", headers=auth(admin_token))

        assert response.status_code == 403
