"""
Media storage for lesson content and thumbnails.

Uploaded files are written to ``MEDIA_ROOT`` and served back from
``MEDIA_URL``. The rest of the application only ever sees the returned URL.
"""

from pathlib import Path
from typing import Dict, Optional
import logging
import uuid

from fastapi import UploadFile

from .config import settings
from .exceptions import ValidationFailedError


logger = logging.getLogger(__name__)


# Destination categories
VIDEOS = "videos"
DOCUMENTS = "documents"
THUMBNAILS = "thumbnails"

# Content type accepted per category (prefix match when ending with "/")
ALLOWED_CONTENT_TYPES: Dict[str, str] = {
    VIDEOS: "video/",
    DOCUMENTS: "application/pdf",
    THUMBNAILS: "image/",
}

DEFAULT_EXTENSIONS: Dict[str, str] = {
    VIDEOS: ".mp4",
    DOCUMENTS: ".pdf",
    THUMBNAILS: ".jpg",
}


class MediaStorage:
    """
    Write-once local media store.

    Each stored object gets a fresh name, so replacing a lesson's video
    never overwrites the previous file.
    """

    def __init__(self, root: str | Path, base_url: str, max_size: int):
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")
        self.max_size = max_size

    def check_content_type(self, category: str, content_type: Optional[str]) -> None:
        if category not in ALLOWED_CONTENT_TYPES:
            raise ValueError(f"Unknown media category: {category}")

        expected = ALLOWED_CONTENT_TYPES[category]
        content_type = (content_type or "").lower()
        allowed = (
            content_type.startswith(expected)
            if expected.endswith("/")
            else content_type == expected
        )
        if not allowed:
            raise ValidationFailedError(
                f"Invalid file type '{content_type or 'unknown'}' for {category}"
            )

    def check_size(self, size: int) -> None:
        if size > self.max_size:
            raise ValidationFailedError(
                f"File size ({size / 1024 / 1024:.2f} MB) exceeds "
                f"maximum allowed ({self.max_size / 1024 / 1024:.2f} MB)"
            )

    def store(
        self,
        data: bytes,
        category: str,
        filename: Optional[str] = None,
        content_type: Optional[str] = None,
    ) -> str:
        """
        Persist raw bytes and return their public URL.

        Args:
            data: File content
            category: One of ``videos``, ``documents`` or ``thumbnails``
            filename: Original client filename, used for the extension only
            content_type: Declared MIME type of the upload

        Returns:
            str: URL the stored object is served from
        """
        self.check_content_type(category, content_type)

        if not data:
            raise ValidationFailedError("Uploaded file is empty")
        self.check_size(len(data))

        extension = Path(filename).suffix.lower() if filename else ""
        name = f"{uuid.uuid4().hex}{extension or DEFAULT_EXTENSIONS[category]}"

        directory = self.root / category
        directory.mkdir(parents=True, exist_ok=True)
        (directory / name).write_bytes(data)

        logger.info(f"Stored {len(data)} bytes in {category}/{name}")
        return f"{self.base_url}/{category}/{name}"

    async def save_upload(self, upload: UploadFile, category: str) -> str:
        """Read an incoming multipart file and store it."""
        # Reject by declared type and size before reading the body into memory
        self.check_content_type(category, upload.content_type)
        if upload.size is not None:
            self.check_size(upload.size)
        data = await upload.read()
        return self.store(data, category, upload.filename, upload.content_type)


def get_media_storage() -> MediaStorage:
    """Dependency returning the configured media store."""
    return MediaStorage(
        root=settings.MEDIA_ROOT,
        base_url=settings.MEDIA_URL,
        max_size=settings.MAX_UPLOAD_SIZE,
    )
