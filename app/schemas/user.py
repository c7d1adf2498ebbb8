# app/schemas/user.py
from typing import Literal

from pydantic import EmailStr, field_validator

from app.schemas.base import CamelModel

# App-level roles. The admin is a configured principal, users are rows.
Role = Literal["user", "admin"]


class SignupRequest(CamelModel):
    """
    Payload for account creation.

    Fields are optional at the schema level so that a missing field is
    reported as "All fields are required" by the service, not as a
    per-field validation error.
    """

    name: str | None = None
    email: EmailStr | None = None
    password: str | None = None

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return v.strip() or None


class LoginRequest(CamelModel):
    """Credentials for both user and admin login."""

    email: str | None = None
    password: str | None = None


class UserRead(CamelModel):
    """Public view of a user; never includes the password hash."""

    id: int
    name: str
    email: str


class UserLoginResponse(CamelModel):
    token: str
    user: UserRead


class AdminLoginResponse(CamelModel):
    token: str
