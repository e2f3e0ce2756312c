"""
==============================================================================
Image Upload Service Module
==============================================================================

Stores product images uploaded from the admin panel.

Rules:
------
- Only PNG, JPEG, GIF and WebP content types are accepted
- Files larger than the configured limit are rejected, reading no further
  than one byte past it
- Stored names are <epoch millis>-<random 9 digits><extension>, the
  extension chosen from the content type, never from the client filename
- The returned URL is served by the /uploads static mount

==============================================================================
"""

from __future__ import annotations

import logging
import random
import time
from pathlib import Path
from typing import Optional

from storefront.core import exceptions


# Module logger
logger = logging.getLogger(__name__)


UPLOADS_URL_PREFIX = "/uploads"

READ_CHUNK_SIZE = 64 * 1024

# Served back from the static mount, so only types browsers render as images.
IMAGE_EXTENSIONS = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/pjpeg": ".jpg",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


class StoredImage:
    """Result of a successful upload."""

    __slots__ = ("filename", "path", "url", "size")

    def __init__(self, filename: str, path: Path, url: str, size: int) -> None:
        self.filename = filename
        self.path = path
        self.url = url
        self.size = size


class UploadService:
    """
    Writes uploaded images to the uploads directory.

    Attributes:
        _directory: Destination directory
        _max_bytes: Size limit per file

    Example:
        >>> service = UploadService(Path("uploads"), max_bytes=5 * 1024 * 1024)
        >>> stored = service.store(data, "blender.png", "image/png")
        >>> stored.url
        '/uploads/1717171717171-123456789.png'
    """

    def __init__(self, directory: Path, max_bytes: int) -> None:
        self._directory = Path(directory)
        self._max_bytes = max_bytes

    def store(self, data: bytes, original_name: Optional[str], content_type: Optional[str]) -> StoredImage:
        """
        Validate and persist one image.

        Raises:
            ValidationError: Empty, oversized or non-image upload
            PersistenceError: File could not be written
        """
        if not data:
            raise exceptions.invalid_image("No image file uploaded")

        extension = self.extension_for(content_type)

        if len(data) > self._max_bytes:
            raise self._too_large()

        filename = self._unique_name(extension)
        path = self._directory / filename

        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            logger.error(f"❌ Failed to store upload {filename}: {e}")
            raise exceptions.PersistenceError(
                f"Failed to store image: {e}",
                {"filename": filename}
            ) from e

        logger.info(f"🖼️ Stored image {filename} from {original_name!r} ({len(data)} bytes)")
        return StoredImage(
            filename=filename,
            path=path,
            url=f"{UPLOADS_URL_PREFIX}/{filename}",
            size=len(data),
        )

    async def read(self, upload) -> bytes:
        """
        Read an uploaded file in chunks, stopping once it passes the size limit.

        Args:
            upload: Object with an async ``read(size)`` (e.g. FastAPI UploadFile)

        Raises:
            ValidationError: Upload is larger than the limit
        """
        chunks = []
        size = 0

        while True:
            chunk = await upload.read(READ_CHUNK_SIZE)
            if not chunk:
                break
            size += len(chunk)
            if size > self._max_bytes:
                raise self._too_large()
            chunks.append(chunk)

        return b"".join(chunks)

    @staticmethod
    def extension_for(content_type: Optional[str]) -> str:
        """File extension for an accepted image content type."""
        media_type = (content_type or "").split(";")[0].strip().lower()
        extension = IMAGE_EXTENSIONS.get(media_type)
        if extension is None:
            raise exceptions.invalid_image("Only PNG, JPEG, GIF or WebP images are allowed!")
        return extension

    def _too_large(self) -> exceptions.ValidationError:
        return exceptions.invalid_image(
            f"Image exceeds the {self._max_bytes // (1024 * 1024)}MB limit"
        )

    @staticmethod
    def _unique_name(extension: str) -> str:
        unique = f"{int(time.time() * 1000)}-{random.randint(0, 999_999_999)}"
        return unique + extension
