import os
import tempfile
from contextlib import ExitStack
from pathlib import Path

from vision_extract.exceptions import ImageNormalizationError
from vision_extract.image.models import ImageAsset, NormalizedImage
from vision_extract.logging.logger import Log

DEFAULT_MAX_DIMENSION = 1024

_SUFFIXES: dict[str, str] = {
    "JPEG": ".jpg",
    "PNG": ".png",
    "GIF": ".gif",
    "WEBP": ".webp",
}


def _remove_file(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
        Log.debug(f"Removed temporary image {path}")
    except OSError as exc:
        Log.warning(f"Could not remove temporary image {path}: {exc}")


class ImageNormalizer:
    """Bounds image dimensions, scaling oversized images into a temporary copy."""

    def __init__(
        self,
        max_dimension: int = DEFAULT_MAX_DIMENSION,
        temp_dir: Path | None = None,
    ) -> None:
        self._max_dimension = max_dimension
        self._temp_dir = temp_dir

    def normalize(self, asset: ImageAsset, resources: ExitStack) -> NormalizedImage:
        """Return ``asset`` unchanged if it fits, otherwise a scaled temporary copy.

        The copy's removal is registered on ``resources`` before anything is
        written, so it is deleted however the invocation ends.

        Raises:
            ImageNormalizationError: if scaling fails.
        """
        if asset.max_dimension <= self._max_dimension:
            return NormalizedImage(
                path=asset.path,
                format=asset.format,
                width=asset.width,
                height=asset.height,
                is_temporary=False,
                source=asset,
            )

        target = self._create_temp_file(asset, resources)
        width, height = self._scale_into(asset, target)
        Log.info(
            f"Resized {asset.path.name} from {asset.width}x{asset.height} "
            f"to {width}x{height}"
        )
        return NormalizedImage(
            path=target,
            format=asset.format,
            width=width,
            height=height,
            is_temporary=True,
            source=asset,
        )

    def _create_temp_file(self, asset: ImageAsset, resources: ExitStack) -> Path:
        try:
            fd, name = tempfile.mkstemp(
                prefix="vision-extract-",
                suffix=_SUFFIXES[asset.format],
                dir=self._temp_dir,
            )
        except OSError as exc:
            raise ImageNormalizationError(
                f"Cannot create temporary image: {exc}"
            ) from exc
        path = Path(name)
        resources.callback(_remove_file, path)
        os.close(fd)
        return path

    def _scale_into(self, asset: ImageAsset, target: Path) -> tuple[int, int]:
        from PIL import Image

        bound = (self._max_dimension, self._max_dimension)
        try:
            with Image.open(asset.path) as img:
                img.load()
                resized = img.copy()
            resized.thumbnail(bound, Image.Resampling.LANCZOS)
            if asset.format == "JPEG" and resized.mode not in ("RGB", "L"):
                resized = resized.convert("RGB")
            resized.save(target, format=asset.format)
        except (OSError, ValueError, Image.DecompressionBombError) as exc:
            raise ImageNormalizationError(
                f"Failed to resize {asset.path}: {exc}"
            ) from exc
        return resized.size
