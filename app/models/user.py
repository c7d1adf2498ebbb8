# app/models/user.py
from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """
    Registered customer account.

    The admin is NOT a row here: it is a single principal configured
    through ADMIN_EMAIL / ADMIN_PASSWORD.

    Only the bcrypt hash of the password is stored.
    """

    __tablename__ = "users"

    id: int | None = Field(
        default=None,
        primary_key=True,
    )

    name: str = Field(
        description="Customer display name",
    )

    email: str = Field(
        unique=True,
        index=True,
        description="Login email (unique)",
    )

    password_hash: str = Field(
        description="bcrypt hash of the password",
    )
