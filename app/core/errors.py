# app/core/errors.py
"""
Domain errors raised by services and mapped to JSON responses in app.main.

Every error carries the HTTP status it maps to and a client-facing message.
The response body is always `{"error": <message>}`.
"""

from fastapi import status


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


# ----- 400 -----


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid data"


class MissingFieldsError(ValidationError):
    message = "Missing fields"


class InvalidQuantityError(ValidationError):
    message = "Quantity must be at least 1"


class ConflictError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Conflict"


class DuplicateEmailError(ConflictError):
    message = "Email already exists"


# ----- 401 / 403 -----


class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Authentication required"


class InvalidCredentialsError(AuthError):
    message = "Invalid credentials"


class TokenMissingError(AuthError):
    message = "Token missing"


class TokenInvalidError(AuthError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Token invalid or expired"


class ForbiddenError(AuthError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Forbidden"


# ----- 404 -----


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class ProductNotFoundError(NotFoundError):
    message = "Product not found"


# ----- 500 -----


class InternalError(AppError):
    pass
