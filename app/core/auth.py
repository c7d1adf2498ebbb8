# app/core/auth.py
"""
Session tokens and role checks.

Tokens are self-contained HS256 JWTs carrying id / name / email / role and
an `exp` claim ACCESS_TOKEN_EXPIRE_MINUTES (2h) after issuance. There is no
server-side session store, so there is also no logout or revocation: a
token stays valid until it expires. A deleted user's token keeps
verifying; cart writes made with it are refused with 404 by the cart service.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from pydantic import BaseModel

from app.core.config import get_settings
from app.core.errors import ForbiddenError, TokenInvalidError, TokenMissingError
from app.schemas.user import Role

# HTTP Bearer scheme:
# - auto_error=False => missing Authorization header will NOT raise the
#   framework's own 403, so we can answer with our "Token missing" 401.
bearer_scheme = HTTPBearer(auto_error=False)


class Principal(BaseModel):
    """
    Authenticated identity attached to a request.

    `id` is None for the admin, which has no users row.
    """

    id: int | None = None
    name: str | None = None
    email: str | None = None
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


def create_access_token(
    claims: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """
    Sign a token for the given claims.

    Args:
        claims: payload; must contain "role".
        expires_delta: lifetime, defaults to ACCESS_TOKEN_EXPIRE_MINUTES.
    """
    settings = get_settings()
    to_encode = claims.copy()
    now = datetime.now(timezone.utc)
    expire = now + (
        expires_delta
        if expires_delta is not None
        else timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"iat": now, "exp": expire})
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALG)


def token_for_principal(principal: Principal) -> str:
    claims: dict[str, Any] = {"role": principal.role}
    if principal.id is not None:
        claims["sub"] = str(principal.id)
        claims["id"] = principal.id
    if principal.name is not None:
        claims["name"] = principal.name
    if principal.email is not None:
        claims["email"] = principal.email
    return create_access_token(claims)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and verify a token (signature + exp).

    Raises:
        TokenInvalidError: if token is invalid/expired.
    """
    settings = get_settings()
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALG],
        )
    except JWTError:
        raise TokenInvalidError()


def verify_token(token: str | None) -> Principal:
    """
    Turn a raw bearer token into a Principal.

    Raises:
        TokenMissingError: no token supplied.
        TokenInvalidError: bad signature, expired, or malformed claims.
    """
    if not token:
        raise TokenMissingError()

    payload = decode_access_token(token)
    role = payload.get("role")

    if role == "admin":
        return Principal(role="admin", email=payload.get("email"))

    if role == "user":
        user_id = payload.get("id")
        if not isinstance(user_id, int):
            raise TokenInvalidError()
        return Principal(
            id=user_id,
            name=payload.get("name"),
            email=payload.get("email"),
            role="user",
        )

    raise TokenInvalidError()


def require_role(principal: Principal, role: Role) -> Principal:
    """Capability check composed in front of role-gated operations."""
    if principal.role != role:
        raise ForbiddenError("Admin only" if role == "admin" else "User only")
    return principal


# ----- FastAPI dependencies -----


def get_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Principal:
    """
    Resolve the Principal for the request's bearer token.

    Raises:
        TokenMissingError (401) / TokenInvalidError (403).
    """
    token = credentials.credentials if credentials is not None else None
    return verify_token(token)


def require_admin(principal: Principal = Depends(get_principal)) -> Principal:
    """
    Enforce admin role.

    Raises:
        ForbiddenError(403): if the token belongs to a user.
    """
    return require_role(principal, "admin")


def require_user(principal: Principal = Depends(get_principal)) -> Principal:
    """
    Enforce that only customers (role='user') can access a route.

    Use this for cart endpoints. Admins will be rejected with 403.
    """
    return require_role(principal, "user")
