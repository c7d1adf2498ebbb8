import logging
import re
import time
from pathlib import Path

from app.core.config import get_settings
from app.core.errors import ValidationError

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_CONTENT_TYPES: set[str] = {
    "image/jpeg",
    "image/png",
    "image/webp",
    "image/gif",
}


def upload_dir() -> Path:
    """Directory that holds uploaded files; created on first use."""
    path = Path(get_settings().UPLOAD_DIR)
    path.mkdir(parents=True, exist_ok=True)
    return path


def validate_image(content_type: str | None, file_bytes: bytes) -> None:
    """
    Reject uploads that are not images or exceed MAX_UPLOAD_BYTES.

    Raises:
        ValidationError(400)
    """
    if content_type not in ALLOWED_IMAGE_CONTENT_TYPES:
        raise ValidationError("Unsupported image type. Allowed: JPEG, PNG, WEBP, GIF.")

    max_bytes = get_settings().MAX_UPLOAD_BYTES
    if len(file_bytes) > max_bytes:
        raise ValidationError(f"Image too large (max {max_bytes} bytes).")


def generate_filename(original_name: str | None) -> str:
    """
    Build a stored filename: "<epoch millis>-<sanitized original name>".

    Example:
        "My Mug.png" -> "1700000000000-My_Mug.png"
    """
    base = Path(original_name or "upload").name
    base = re.sub(r"[^A-Za-z0-9._-]+", "_", base).strip("._") or "upload"
    return f"{int(time.time() * 1000)}-{base}"


def upload_to_storage(original_name: str | None, file_bytes: bytes) -> str:
    """
    Write an uploaded file into UPLOAD_DIR and return its public URL path.

    Returns:
        URL path under UPLOAD_URL_PREFIX, e.g. "/uploads/1700000000000-mug.png"
    """
    filename = generate_filename(original_name)
    (upload_dir() / filename).write_bytes(file_bytes)
    return f"{get_settings().UPLOAD_URL_PREFIX}/{filename}"


def extract_path_from_public_url(url: str) -> Path | None:
    """
    Given a public URL path, return the file it points to inside UPLOAD_DIR.

    Example:
        "/uploads/1700000000000-mug.png" -> UPLOAD_DIR/1700000000000-mug.png
    """
    prefix = get_settings().UPLOAD_URL_PREFIX.rstrip("/") + "/"
    if not url.startswith(prefix):
        return None
    name = Path(url[len(prefix):]).name
    if not name:
        return None
    return upload_dir() / name


def delete_public_url(url: str) -> None:
    """
    Delete a file by its public URL.
    No-op if the URL does not belong to the upload dir or the file is gone.
    """
    path = extract_path_from_public_url(url)
    if path is None:
        return
    try:
        path.unlink()
    except FileNotFoundError:
        logger.warning("Upload %s already removed", path)
