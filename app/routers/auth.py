# app/routers/auth.py
from functools import lru_cache

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.config import get_settings
from app.database import get_session
from app.repositories.user_repo import UserRepository
from app.schemas.base import MessageResponse
from app.schemas.user import (
    AdminLoginResponse,
    LoginRequest,
    SignupRequest,
    UserLoginResponse,
    UserRead,
)
from app.services.auth_service import AuthService

router = APIRouter(tags=["Auth"])


@lru_cache
def get_auth_service() -> AuthService:
    """Built once; hashes the configured admin password on first use."""
    settings = get_settings()
    return AuthService(
        UserRepository(),
        admin_email=settings.ADMIN_EMAIL,
        admin_password=settings.ADMIN_PASSWORD,
    )


@router.post("/signup", response_model=MessageResponse)
def signup(
    payload: SignupRequest,
    session: Session = Depends(get_session),
    service: AuthService = Depends(get_auth_service),
):
    """
    Register a customer account.

    - 400 if a field is missing or the email is taken.
    """
    service.signup(session, payload)
    return MessageResponse(message="Signup successful")


@router.post("/user/login", response_model=UserLoginResponse)
def login_user(
    payload: LoginRequest,
    session: Session = Depends(get_session),
    service: AuthService = Depends(get_auth_service),
):
    """
    Customer login.

    Returns a 2h token plus the public user profile.
    """
    token, user = service.login_user(session, payload)
    return UserLoginResponse(token=token, user=UserRead.model_validate(user))


@router.post("/login", response_model=AdminLoginResponse)
def login_admin(
    payload: LoginRequest,
    service: AuthService = Depends(get_auth_service),
):
    """
    Admin login against the configured ADMIN_EMAIL / ADMIN_PASSWORD.
    """
    return AdminLoginResponse(token=service.login_admin(payload))
