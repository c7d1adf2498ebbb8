# app/services/auth_service.py
import logging

from email_validator import EmailNotValidError, validate_email
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from app.core.auth import Principal, token_for_principal
from app.core.errors import (
    DuplicateEmailError,
    InvalidCredentialsError,
    ValidationError,
)
from app.core.security import hash_password, verify_password
from app.models.user import User
from app.repositories.user_repo import UserRepository
from app.schemas.user import LoginRequest, SignupRequest

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes and newer releases refuse more.
MAX_PASSWORD_BYTES = 72


def normalize_email(email: str) -> str | None:
    """
    Normalize an address the way `EmailStr` does at signup
    (lowercased domain, IDNA handling). None if it is not an address.
    """
    try:
        return validate_email(email, check_deliverability=False).normalized
    except EmailNotValidError:
        return None


class AuthService:
    """
    Signup and login for customers, login for the static admin.

    Responsibilities:
      - hash passwords before they reach the store
      - keep "unknown email" and "wrong password" indistinguishable
      - issue session tokens
    """

    def __init__(self, repo: UserRepository, admin_email: str, admin_password: str):
        self.repo = repo
        self.admin_email = admin_email
        # Only the hash of the configured admin password is kept around.
        self._admin_password_hash = hash_password(admin_password)

    # ----- Customers -----

    def signup(self, session: Session, payload: SignupRequest) -> User:
        """
        Create a customer account.

        Raises:
            ValidationError: a field is missing or the password is too long.
            DuplicateEmailError: the email is already registered.
        """
        if not payload.name or not payload.email or not payload.password:
            raise ValidationError("All fields are required")

        if len(payload.password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")

        if self.repo.get_by_email(session, payload.email) is not None:
            raise DuplicateEmailError()

        user = User(
            name=payload.name,
            email=payload.email,
            password_hash=hash_password(payload.password),
        )
        try:
            user = self.repo.create(session, user)
        except IntegrityError:
            # Lost a race with a concurrent signup for the same email
            session.rollback()
            raise DuplicateEmailError()

        logger.info("Signed up user id=%s", user.id)
        return user

    def login_user(self, session: Session, payload: LoginRequest) -> tuple[str, User]:
        """
        Check customer credentials and issue a token.

        Returns:
            (token, user)

        Raises:
            InvalidCredentialsError: same error for unknown email and bad password.
        """
        error = InvalidCredentialsError("Invalid email or password")
        if not payload.email or not payload.password:
            raise error

        email = normalize_email(payload.email)
        user = self.repo.get_by_email(session, email) if email else None
        if user is None or not verify_password(payload.password, user.password_hash):
            logger.info("Failed user login")
            raise error

        principal = Principal(id=user.id, name=user.name, email=user.email, role="user")
        return token_for_principal(principal), user

    # ----- Admin -----

    def login_admin(self, payload: LoginRequest) -> str:
        """
        Check the admin credentials against configuration and issue a token.

        Raises:
            InvalidCredentialsError
        """
        if (
            not payload.email
            or not payload.password
            or payload.email != self.admin_email
            or not verify_password(payload.password, self._admin_password_hash)
        ):
            logger.info("Failed admin login")
            raise InvalidCredentialsError()

        return token_for_principal(Principal(email=self.admin_email, role="admin"))
