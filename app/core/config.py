# app/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - JWT_SECRET (token signing secret)
      - ADMIN_EMAIL
      - ADMIN_PASSWORD

    Optional:
      - DATABASE_URL (defaults to a local SQLite file)
      - UPLOAD_DIR (where product images are written)
    """

    PROJECT_NAME: str = "Storefront API"
    API_PREFIX: str = "/api"

    # DB config
    DATABASE_URL: str = "sqlite:///./ecommerce.db"
    DATABASE_ECHO: bool = False

    # JWT signing / verification
    JWT_SECRET: str
    JWT_ALG: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 120

    # Static admin principal (not stored in the users table)
    ADMIN_EMAIL: str
    ADMIN_PASSWORD: str

    BCRYPT_ROUNDS: int = 10

    # Product image uploads, served back as static files
    UPLOAD_DIR: str = "uploads"
    UPLOAD_URL_PREFIX: str = "/uploads"
    MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024

    CORS_ORIGINS: list[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
