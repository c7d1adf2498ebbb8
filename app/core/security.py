# app/core/security.py
import bcrypt

from app.core.config import get_settings


def hash_password(password: str, rounds: int | None = None) -> str:
    """
    One-way hash a plaintext password with bcrypt.

    The returned string embeds salt and cost factor, so it is all
    `verify_password` needs later.
    """
    if rounds is None:
        rounds = get_settings().BCRYPT_ROUNDS
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Compare a plaintext password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed hash or a password bcrypt refuses (> 72 bytes)
        return False
