"""
Travel API Backend — Upload Storage Service
=============================================

What:  Validates, stores, and cleans up uploaded place/agency images.
Why:   Place and agency rows only hold a relative path; the upload must be
       fully written and its path known before any insert references it.
How:   Checks extension and size, writes with aiofiles into date-organized
       directories under a UUID filename, returns the stored reference.
Who:   Called by PlaceService and AgencyService.

Stored reference format:
    "<upload_url_prefix>/YYYY/MM/DD/<uuid>.<ext>", e.g.
    "uploads/2024/01/15/a1b2c3d4-....jpg". The same string, requested under
    GET /uploads/..., serves the file back.

Security:
    - UUID filename: no user input reaches the file system path
    - Extension allow-list and size limit checked before anything is written
"""

import logging
import os
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Tuple

import aiofiles

from travel_api.config import settings
from travel_api.exceptions import FileStorageError, ValidationError

logger = logging.getLogger(__name__)

# Image formats the mobile client produces
ALLOWED_EXTENSIONS = {".png", ".jpg", ".jpeg", ".webp"}


class FileService:
    """
    Manages image upload, validation, and storage lifecycle.

    Directory Structure:
        uploads/
        └── 2024/
            └── 01/
                └── 15/
                    ├── a1b2c3d4-5678.jpg
                    └── e5f6g7h8-9012.png
    """

    def __init__(self, upload_root: Optional[str] = None):
        """
        Args:
            upload_root: Override the default upload directory (used in tests).
                         If None, uses settings.upload_root.
        """
        self.upload_root = Path(upload_root or settings.upload_root).resolve()
        self.upload_root.mkdir(parents=True, exist_ok=True)
        logger.info("FileService initialized with upload_root=%s", self.upload_root)

    def validate_extension(self, filename: str) -> str:
        """
        Check the extension against the allow-list.

        Returns: Normalized extension (lowercase with dot).
        Raises:  ValidationError if the extension is not allowed.
        """
        ext = Path(filename).suffix.lower()
        if ext not in ALLOWED_EXTENSIONS:
            raise ValidationError(
                message=(
                    f"File type '{ext}' is not supported. "
                    f"Allowed types: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
                ),
                field="image",
                details={"extension": ext, "allowed": sorted(ALLOWED_EXTENSIONS)},
            )
        return ext

    def validate_size(self, content: bytes) -> None:
        """Reject empty uploads and uploads over settings.max_file_size."""
        if not content:
            raise ValidationError(message="Uploaded image is empty", field="image")

        if len(content) > settings.max_file_size:
            max_mb = settings.max_file_size / (1024 * 1024)
            raise ValidationError(
                message=(
                    f"Image is too large ({len(content) / (1024 * 1024):.1f}MB). "
                    f"Maximum is {max_mb:.0f}MB."
                ),
                field="image",
                details={"max_size_mb": max_mb, "actual_size": len(content)},
            )

    def _generate_storage_path(self, extension: str) -> Tuple[Path, str]:
        """
        Create a unique YYYY/MM/DD/<uuid><ext> location.

        Returns: Tuple of (absolute_path, stored_reference).
        """
        now = datetime.now(timezone.utc)
        relative_path = f"{now.strftime('%Y/%m/%d')}/{uuid.uuid4()}{extension}"
        absolute_path = self.upload_root / relative_path
        stored_reference = f"{settings.upload_url_prefix}/{relative_path}"
        return absolute_path, stored_reference

    def resolve_reference(self, stored_reference: str) -> Path:
        """
        Map a stored reference (or the path after /uploads/) back to disk.

        Raises ValidationError when the result would escape upload_root.
        """
        prefix = f"{settings.upload_url_prefix}/"
        relative = stored_reference[len(prefix):] if stored_reference.startswith(prefix) else stored_reference
        full_path = (self.upload_root / relative).resolve()
        if not full_path.is_relative_to(self.upload_root):
            raise ValidationError(message="Invalid file path")
        return full_path

    async def store_file(self, content: bytes, extension: str) -> Tuple[str, str]:
        """
        Write validated content to disk with async I/O.

        Returns: Tuple of (absolute_path, stored_reference).
        Raises:  FileStorageError if directory creation or the write fails.
        """
        absolute_path, stored_reference = self._generate_storage_path(extension)

        try:
            absolute_path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(absolute_path, "wb") as f:
                await f.write(content)

            logger.info("Image stored: %s (%d bytes)", stored_reference, len(content))
            return str(absolute_path), stored_reference

        except OSError as e:
            logger.error("Failed to store image at %s: %s", absolute_path, str(e))
            raise FileStorageError(
                message="Failed to save uploaded image. Please try again.",
            )

    async def cleanup_file(self, file_path: str) -> None:
        """
        Remove a stored file after the insert that referenced it failed.

        Best-effort: a missing file is fine and other errors are logged, not
        raised, so the original database error reaches the client.
        """
        try:
            path = Path(file_path)
            if path.exists():
                os.remove(path)
                logger.info("Cleaned up file: %s", path.name)
            else:
                logger.debug("Cleanup: file already gone: %s", path.name)
        except OSError as e:
            logger.warning("Failed to clean up file %s: %s", file_path, str(e))

    async def validate_and_store(self, filename: str, content: bytes) -> Tuple[str, str]:
        """
        Complete validation and storage pipeline.

        Validation order (cheapest first):
            1. Extension check
            2. Size check
            3. Store file

        Returns: Tuple of (absolute_path, stored_reference_for_db).
        """
        ext = self.validate_extension(filename)
        self.validate_size(content)
        return await self.store_file(content, ext)


# ── Singleton Instance ────────────────────────────────────────────────────
file_service = FileService()
