"""
Unit tests for FileService.

Tests generated image storage including:
- Image validation
- Downscaling of oversized images
- URL mapping and deletion
"""
import pytest
import tempfile
import os
from io import BytesIO
from pathlib import Path

from PIL import Image

from fridgemate.services.file_service import FileService


def create_image_bytes(width=100, height=100, format="PNG"):
    """Create image bytes in memory."""
    img = Image.new("RGB", (width, height), color="green")
    buffer = BytesIO()
    img.save(buffer, format=format)
    return buffer.getvalue()


@pytest.fixture
def service(tmp_path):
    return FileService(upload_dir=str(tmp_path / "recipes"))


class TestFileServiceInit:
    """Tests for FileService initialization."""

    def test_creates_upload_directory(self):
        """Test that upload directory is created on init."""
        with tempfile.TemporaryDirectory() as tmpdir:
            upload_dir = os.path.join(tmpdir, "uploads", "recipes")
            FileService(upload_dir=upload_dir)

            assert os.path.isdir(upload_dir)


class TestSaveRecipeImage:
    """Tests for saving generated images."""

    def test_saves_png(self, service):
        path = service.save_recipe_image(create_image_bytes())

        assert Path(path).exists()
        assert path.endswith(".png")
        assert Path(path).parent == service.upload_dir

    def test_jpeg_gets_jpg_extension(self, service):
        path = service.save_recipe_image(create_image_bytes(format="JPEG"))

        assert path.endswith(".jpg")

    def test_filenames_are_unique(self, service):
        data = create_image_bytes()

        first = service.save_recipe_image(data)
        second = service.save_recipe_image(data)

        assert first != second

    def test_empty_bytes_rejected(self, service):
        with pytest.raises(ValueError, match="Empty"):
            service.save_recipe_image(b"")

    def test_non_image_bytes_rejected(self, service):
        with pytest.raises(ValueError, match="Invalid image"):
            service.save_recipe_image(b"definitely not an image")

        assert list(service.upload_dir.iterdir()) == []


class TestImageOptimization:
    """Tests for downscaling."""

    def test_large_image_is_downscaled(self, service):
        path = service.save_recipe_image(create_image_bytes(width=2048, height=1024))

        with Image.open(path) as img:
            assert img.width == 1024
            assert img.height == 512

    def test_small_image_is_untouched(self, service):
        data = create_image_bytes(width=300, height=200)

        path = service.save_recipe_image(data)

        assert Path(path).read_bytes() == data


class TestFileUrls:
    def test_url_uses_prefix_and_file_name(self, tmp_path):
        service = FileService(upload_dir=str(tmp_path), url_prefix="/uploads/recipes/")

        url = service.get_file_url(str(tmp_path / "20300101_120000_abcd1234.png"))

        assert url == "/uploads/recipes/20300101_120000_abcd1234.png"

    def test_no_path_gives_no_url(self, service):
        assert service.get_file_url(None) is None
        assert service.get_file_url("") is None


class TestDeleteFile:
    def test_deletes_existing_file(self, service):
        path = service.save_recipe_image(create_image_bytes())

        assert service.delete_file(path) is True
        assert not Path(path).exists()

    def test_missing_file_returns_false(self, service):
        assert service.delete_file(str(service.upload_dir / "nope.png")) is False

    def test_delete_by_url(self, service):
        path = service.save_recipe_image(create_image_bytes())

        assert service.delete_file_for_url(service.get_file_url(path)) is True
        assert not Path(path).exists()

    def test_foreign_url_is_left_alone(self, service):
        path = service.save_recipe_image(create_image_bytes())

        assert service.delete_file_for_url(f"https://example.com/{Path(path).name}") is False
        assert service.delete_file_for_url(None) is False
        assert Path(path).exists()
