"""Avatar file storage on the local uploads directory."""

import logging
import random
import time
from pathlib import Path

from fastapi import UploadFile

from src.config import get_settings
from src.exceptions import BadRequest

logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPES = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
}


class AvatarStorage:
    """Stores avatar images under a single directory, keyed by generated filename."""

    def __init__(self, root: str | Path | None = None):
        self.root = Path(root or get_settings().uploads_dir)

    def path_for(self, filename: str) -> Path:
        return self.root / filename

    @staticmethod
    def random_filename(original: str | None, content_type: str) -> str:
        """``<millis>-<random><ext>``, extension taken from the upload when present."""
        suffix = Path(original or "").suffix.lower() or ALLOWED_MIME_TYPES[content_type]
        return f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}{suffix}"

    async def save(self, upload: UploadFile) -> str:
        """Write an uploaded image and return its stored filename."""
        if upload.content_type not in ALLOWED_MIME_TYPES:
            logger.error(f"incorrect mimetype: {upload.content_type}")
            raise BadRequest("Avatar must be a png or jpeg image")

        filename = self.random_filename(upload.filename, upload.content_type)
        content = await upload.read()

        self.root.mkdir(parents=True, exist_ok=True)
        self.path_for(filename).write_bytes(content)
        logger.info(f"Stored avatar {filename} ({len(content)} bytes)")
        return filename

    def remove(self, filename: str | None) -> None:
        """Delete a stored avatar. Failures are logged and swallowed."""
        if not filename:
            logger.debug("No avatar to delete")
            return

        target = self.path_for(filename)
        try:
            target.unlink()
            logger.info(f"Deleted avatar: {target}")
        except OSError as e:
            logger.error(f"Failed to delete avatar {target}: {e}")
