"""File handling service for generated recipe images."""
import io
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from PIL import Image, UnidentifiedImageError


logger = logging.getLogger(__name__)


class FileService:
    """Service for storing generated images on disk."""

    def __init__(
        self, upload_dir: str = "uploads/recipes", url_prefix: str = "/uploads/recipes"
    ):
        self.upload_dir = Path(upload_dir)
        self.url_prefix = url_prefix.rstrip("/")
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    def save_recipe_image(self, image_bytes: bytes) -> str:
        """
        Save generated recipe image to disk under a unique filename.

        Args:
            image_bytes: Raw image bytes from the image provider

        Returns:
            Relative path to saved file

        Raises:
            ValueError: If the bytes are empty or not a readable image
        """
        if not image_bytes:
            raise ValueError("Empty image data")

        try:
            with Image.open(io.BytesIO(image_bytes)) as img:
                img.verify()
                image_format = (img.format or "PNG").lower()
        except (UnidentifiedImageError, OSError) as e:
            raise ValueError(f"Invalid image data: {e}") from e

        extension = ".jpg" if image_format == "jpeg" else f".{image_format}"
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
        unique_id = str(uuid.uuid4())[:8]
        filename = f"{timestamp}_{unique_id}{extension}"

        file_path = self.upload_dir / filename
        with open(file_path, "wb") as f:
            f.write(image_bytes)

        self._optimize_image(file_path)

        return str(file_path)

    def _optimize_image(self, file_path: Path, max_width: int = 1024):
        """
        Downscale oversized images in place.

        Args:
            file_path: Path to image file
            max_width: Maximum width in pixels
        """
        try:
            with Image.open(file_path) as img:
                if img.width <= max_width:
                    return
                ratio = max_width / img.width
                new_height = int(img.height * ratio)
                resized = img.resize((max_width, new_height), Image.Resampling.LANCZOS)
                resized.save(file_path, optimize=True)
        except OSError as e:
            # If optimization fails, keep original
            logger.warning("Could not optimize image %s: %s", file_path, e)

    def delete_file(self, file_path: str) -> bool:
        """
        Delete a file from disk.

        Returns:
            True if deleted, False if file not found
        """
        path = Path(file_path)
        if path.exists():
            path.unlink()
            return True
        return False

    def get_file_url(self, file_path: Optional[str]) -> Optional[str]:
        """Convert a stored file path to the URL it is served from."""
        if not file_path:
            return None

        return f"{self.url_prefix}/{Path(file_path).name}"

    def delete_file_for_url(self, url: Optional[str]) -> bool:
        """
        Delete the stored file behind a URL produced by get_file_url.

        URLs outside url_prefix are left alone and return False.
        """
        if not url or not url.startswith(f"{self.url_prefix}/"):
            return False

        return self.delete_file(str(self.upload_dir / Path(url).name))
