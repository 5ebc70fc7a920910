"""
Travel API Backend — File Service Unit Tests
===============================================

What:  Tests for FileService validation, storage layout, and path resolution.
How:   Each test gets a FileService rooted in a temporary directory.

Test Strategy:
    ✅ Allowed extensions (.png, .jpg, .jpeg, .webp), case-insensitive
    ✅ Rejected extensions (.gif, .pdf, .exe, none)
    ✅ Size limits (empty, over MAX_FILE_SIZE)
    ✅ Stored reference format uploads/YYYY/MM/DD/<uuid><ext>
    ✅ Path traversal rejected by resolve_reference
"""

import re
from pathlib import Path

import pytest

from travel_api.config import settings
from travel_api.exceptions import ValidationError
from travel_api.services.file_service import FileService


class TestFileValidation:
    """Tests for file validation logic in FileService."""

    @pytest.fixture(autouse=True)
    def _service(self, temp_storage):
        self.service = FileService(upload_root=temp_storage)

    # ── Extension Validation ──────────────────────────────────────────────

    @pytest.mark.parametrize("filename", ["photo.jpg", "photo.jpeg", "photo.png", "photo.webp"])
    def test_validate_extension_allowed(self, filename):
        assert self.service.validate_extension(filename) == Path(filename).suffix

    def test_validate_extension_uppercase(self):
        """Extension check should be case-insensitive."""
        assert self.service.validate_extension("photo.JPG") == ".jpg"
        assert self.service.validate_extension("photo.Jpeg") == ".jpeg"

    @pytest.mark.parametrize("filename", ["animation.gif", "document.pdf", "malware.exe", "noextension"])
    def test_validate_extension_rejected(self, filename):
        with pytest.raises(ValidationError, match="not supported"):
            self.service.validate_extension(filename)

    # ── Size Validation ───────────────────────────────────────────────────

    def test_validate_size_within_limit(self):
        self.service.validate_size(b"x" * 1000)

    def test_validate_size_at_limit(self):
        self.service.validate_size(b"x" * settings.max_file_size)

    def test_validate_size_over_limit(self):
        content = b"x" * (settings.max_file_size + 1)
        with pytest.raises(ValidationError, match="too large"):
            self.service.validate_size(content)

    def test_validate_size_empty_file(self):
        with pytest.raises(ValidationError, match="empty"):
            self.service.validate_size(b"")


class TestFileStorage:
    """Tests for writing, resolving, and removing stored images."""

    @pytest.fixture(autouse=True)
    def _service(self, temp_storage):
        self.root = Path(temp_storage).resolve()
        self.service = FileService(upload_root=temp_storage)

    @pytest.mark.asyncio
    async def test_validate_and_store_creates_date_directory(self, sample_image_bytes):
        abs_path, reference = await self.service.validate_and_store(
            filename="lake.JPG",
            content=sample_image_bytes,
        )

        assert re.fullmatch(
            rf"{settings.upload_url_prefix}/\d{{4}}/\d{{2}}/\d{{2}}/[0-9a-f-]{{36}}\.jpg",
            reference,
        )
        assert Path(abs_path).read_bytes() == sample_image_bytes
        assert Path(abs_path).is_relative_to(self.root)

    @pytest.mark.asyncio
    async def test_original_filename_not_used(self, sample_image_bytes):
        _, reference = await self.service.validate_and_store(
            filename="../../evil name.png",
            content=sample_image_bytes,
        )
        assert "evil" not in reference
        assert ".." not in reference

    @pytest.mark.asyncio
    async def test_rejected_upload_writes_nothing(self):
        with pytest.raises(ValidationError):
            await self.service.validate_and_store(filename="clip.gif", content=b"GIF89a")
        assert list(self.root.rglob("*.*")) == []

    @pytest.mark.asyncio
    async def test_resolve_reference_round_trip(self, sample_image_bytes):
        abs_path, reference = await self.service.validate_and_store(
            filename="a.png",
            content=sample_image_bytes,
        )
        assert self.service.resolve_reference(reference) == Path(abs_path)

    def test_resolve_reference_without_prefix(self):
        assert self.service.resolve_reference("2024/01/15/x.jpg") == self.root / "2024/01/15/x.jpg"

    def test_resolve_reference_traversal_rejected(self):
        with pytest.raises(ValidationError, match="Invalid file path"):
            self.service.resolve_reference("../../etc/passwd")

    # ── Cleanup ───────────────────────────────────────────────────────────

    @pytest.mark.asyncio
    async def test_cleanup_file_removes_file(self, tmp_path):
        test_file = tmp_path / "test.jpg"
        test_file.write_bytes(b"test content")

        await self.service.cleanup_file(str(test_file))
        assert not test_file.exists()

    @pytest.mark.asyncio
    async def test_cleanup_file_nonexistent(self, tmp_path):
        """cleanup_file should not raise for non-existent files."""
        await self.service.cleanup_file(str(tmp_path / "nonexistent.jpg"))
