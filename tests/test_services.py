"""
==============================================================================
Service and Configuration Tests
==============================================================================
"""

import asyncio
from pathlib import Path

import pytest

from storefront.catalog.models import Product
from storefront.config import Settings
from storefront.core.exceptions import AuthorizationError, ValidationError
from storefront.core.security import AdminGate
from storefront.services.order_service import OrderLinkBuilder
from storefront.services.upload_service import UploadService


class ChunkedUpload:
    """Minimal async file that records how much was read."""

    def __init__(self, data: bytes):
        self._data = data
        self.consumed = 0

    async def read(self, size: int = -1) -> bytes:
        end = len(self._data) if size < 0 else self.consumed + size
        chunk = self._data[self.consumed:end]
        self.consumed += len(chunk)
        return chunk


class TestAdminGate:
    """Tests for shared admin code checks."""

    def test_valid_code(self):
        gate = AdminGate("1234")
        assert gate.is_valid("1234")
        gate.verify("1234")

    @pytest.mark.parametrize("code", [None, "", "12345", "0000", 1234])
    def test_invalid_code(self, code):
        gate = AdminGate("1234")
        assert not gate.is_valid(code)
        with pytest.raises(AuthorizationError):
            gate.verify(code)


class TestOrderLinkBuilder:
    """Tests for the WhatsApp hand-off link."""

    def test_message_and_url(self):
        builder = OrderLinkBuilder("+961 71 294 697")
        product = Product(name="Built-in Dishwasher", id="5001")

        assert builder.phone_digits == "96171294697"
        assert builder.message(product) == "I want the Built-in Dishwasher 5001."
        assert builder.build(product) == (
            "https://wa.me/96171294697?text=I%20want%20the%20Built-in%20Dishwasher%205001."
        )

    def test_special_characters_are_encoded(self):
        builder = OrderLinkBuilder("+96171294697")
        product = Product(name="Fridge & Freezer 50/50", id="1002")

        url = builder.build(product)

        assert "%26" in url
        assert "%2F" in url
        assert " " not in url


class TestUploadService:
    """Tests for image storage."""

    def test_store(self, tmp_path: Path):
        service = UploadService(tmp_path / "uploads", max_bytes=1024)

        stored = service.store(b"image-bytes", "photo.JPG", "image/jpeg")

        assert stored.path.read_bytes() == b"image-bytes"
        assert stored.filename.endswith(".jpg")
        assert stored.url == f"/uploads/{stored.filename}"
        assert stored.size == len(b"image-bytes")

    def test_unique_names(self, tmp_path: Path):
        service = UploadService(tmp_path, max_bytes=1024)

        names = {service.store(b"x", "a.png", "image/png").filename for _ in range(5)}

        assert len(names) == 5

    @pytest.mark.parametrize("data,content_type", [
        (b"", "image/png"),
        (b"x", "text/plain"),
        (b"x", None),
        (b"x" * 2048, "image/png"),
    ])
    def test_rejected(self, tmp_path: Path, data, content_type):
        service = UploadService(tmp_path, max_bytes=1024)

        with pytest.raises(ValidationError):
            service.store(data, "a.png", content_type)

        assert list(tmp_path.iterdir()) == []

    def test_extension_follows_content_type(self, tmp_path: Path):
        service = UploadService(tmp_path, max_bytes=1024)

        stored = service.store(b"<script>alert(1)</script>", "evil.html", "image/png")

        assert stored.filename.endswith(".png")
        assert [p.suffix for p in tmp_path.iterdir()] == [".png"]

    @pytest.mark.parametrize("content_type", ["image/svg+xml", "image/x-icon", "text/html"])
    def test_rejects_types_outside_allowlist(self, tmp_path: Path, content_type):
        service = UploadService(tmp_path, max_bytes=1024)

        with pytest.raises(ValidationError) as exc_info:
            service.store(b"<svg/>", "logo.svg", content_type)

        assert exc_info.value.code == "INVALID_IMAGE"
        assert list(tmp_path.iterdir()) == []

    def test_content_type_parameters_ignored(self):
        assert UploadService.extension_for("Image/JPEG; charset=binary") == ".jpg"

    def test_read_stops_past_limit(self, tmp_path: Path):
        service = UploadService(tmp_path, max_bytes=100 * 1024)
        upload = ChunkedUpload(b"x" * (1024 * 1024))

        with pytest.raises(ValidationError):
            asyncio.run(service.read(upload))

        assert upload.consumed < 1024 * 1024

    def test_read_within_limit(self, tmp_path: Path):
        service = UploadService(tmp_path, max_bytes=1024)

        assert asyncio.run(service.read(ChunkedUpload(b"abc"))) == b"abc"


class TestSettings:
    """Tests for configuration parsing."""

    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.admin_code == "1234"
        assert settings.search_threshold == 0.6
        assert settings.search_display_limit == 5
        assert settings.searchable_categories_list == ["other"]
        assert "fridges" in settings.categories_list

    def test_json_list_settings(self):
        settings = Settings(_env_file=None, categories='["fans", "acs"]', searchable_categories='["fans"]')

        assert settings.categories_list == ["fans", "acs"]
        assert settings.searchable_categories_list == ["fans"]

    def test_malformed_json_list_falls_back(self):
        settings = Settings(_env_file=None, searchable_categories="other")
        assert settings.searchable_categories_list == ["other"]

    def test_unknown_environment(self):
        assert Settings(_env_file=None, app_env="qa").app_env == "development"

    def test_repr_hides_admin_code(self):
        settings = Settings(_env_file=None, admin_code="s3cret-code")
        assert "s3cret-code" not in repr(settings)
