from pathlib import Path

from vision_extract.exceptions import (
    CorruptImageError,
    ImageNotFoundError,
    UnsupportedImageFormatError,
)
from vision_extract.image.models import MIME_TYPES, ImageAsset

ALLOWED_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".gif", ".webp"})


class ImageInspector:
    """Reads an image's format and pixel dimensions."""

    def inspect(self, path: Path) -> ImageAsset:
        """Validate the file at ``path`` and return its metadata.

        Raises:
            ImageNotFoundError: if the path is missing or not a regular file.
            UnsupportedImageFormatError: if the extension or decoded format
                is not allow-listed.
            CorruptImageError: if the file cannot be decoded.
        """
        if not path.is_file():
            raise ImageNotFoundError(f"Image not found: {path}")
        suffix = path.suffix.lower()
        if suffix not in ALLOWED_EXTENSIONS:
            raise UnsupportedImageFormatError(
                f"Unsupported image format '{path.suffix or '(none)'}'. "
                f"Choose from: {sorted(ALLOWED_EXTENSIONS)}"
            )
        image_format, width, height = self._decode(path)
        if image_format not in MIME_TYPES:
            raise UnsupportedImageFormatError(
                f"File {path} decodes as {image_format}, which is not supported"
            )
        return ImageAsset(path=path, format=image_format, width=width, height=height)

    @staticmethod
    def _decode(path: Path) -> tuple[str, int, int]:
        from PIL import Image

        try:
            with Image.open(path) as img:
                image_format = img.format or ""
                width, height = img.size
                img.verify()
            # verify() skips pixel data for JPEG; a full decode catches truncation.
            with Image.open(path) as img:
                img.load()
        except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as exc:
            raise CorruptImageError(f"Cannot decode image {path}: {exc}") from exc
        return image_format, width, height
