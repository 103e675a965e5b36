from dataclasses import dataclass
from pathlib import Path

MIME_TYPES: dict[str, str] = {
    "JPEG": "image/jpeg",
    "PNG": "image/png",
    "GIF": "image/gif",
    "WEBP": "image/webp",
}


@dataclass(frozen=True)
class ImageAsset:
    """An inspected raster image on disk."""

    path: Path
    format: str
    width: int
    height: int

    @property
    def mime_type(self) -> str:
        return MIME_TYPES[self.format]

    @property
    def max_dimension(self) -> int:
        return max(self.width, self.height)


@dataclass(frozen=True)
class NormalizedImage(ImageAsset):
    """An image guaranteed to fit within the configured bound.

    When ``is_temporary`` is False the path aliases the source image.
    """

    is_temporary: bool = False
    source: ImageAsset | None = None
