"""Quote photo storage in a local bucket directory served under the media URL."""

import logging
import re
import uuid
from pathlib import Path

from backend.app.core.settings import get_settings

logger = logging.getLogger(__name__)


class PhotoStorageError(Exception):
    pass


def sanitize_filename(filename: str | None) -> str:
    return re.sub(r"[^\w.-]", "_", filename or "", flags=re.ASCII) or "upload"


def unique_filename(filename: str | None) -> str:
    return f"{uuid.uuid4()}-{sanitize_filename(filename)}"


class PhotoStorage:
    def __init__(self, root: str, bucket: str, base_url: str):
        self.root = Path(root)
        self.bucket = bucket
        self.base_url = base_url.rstrip("/")

    @property
    def bucket_dir(self) -> Path:
        return self.root / self.bucket

    def upload(self, filename: str | None, contents: bytes) -> str:
        """Store the bytes under a fresh unique name and return the stored path."""
        path = unique_filename(filename)
        dest = self.bucket_dir / path
        try:
            self.bucket_dir.mkdir(parents=True, exist_ok=True)
            # "x" refuses to overwrite an existing object
            with open(dest, "xb") as fh:
                fh.write(contents)
        except OSError as exc:
            raise PhotoStorageError(f"Could not store {path}") from exc
        logger.info("Stored quote photo %s (%d bytes)", path, len(contents))
        return path

    def public_url(self, path: str) -> str:
        return f"{self.base_url}/{self.bucket}/{path}"

    def resolve_photo_url(self, value: str | None) -> str | None:
        if not value:
            return value
        if re.match(r"^https?://", value, flags=re.IGNORECASE):
            return value
        return self.public_url(value)


def get_photo_storage() -> PhotoStorage:
    settings = get_settings()
    return PhotoStorage(settings.media_root, settings.photo_bucket, settings.media_base_url)
