from collections.abc import Callable
from pathlib import Path

import pytest
from PIL import Image

from vision_extract.exceptions import (
    CorruptImageError,
    ImageNotFoundError,
    ImageValidationError,
    UnsupportedImageFormatError,
)
from vision_extract.image.inspector import ImageInspector

MakeImage = Callable[..., Path]


class TestInspectValidImages:
    def test_reads_png_dimensions(self, make_image: MakeImage) -> None:
        asset = ImageInspector().inspect(make_image(320, 200, "PNG"))
        assert asset.format == "PNG"
        assert (asset.width, asset.height) == (320, 200)
        assert asset.mime_type == "image/png"

    def test_reads_jpeg(self, make_image: MakeImage) -> None:
        asset = ImageInspector().inspect(make_image(512, 512, "JPEG"))
        assert asset.format == "JPEG"
        assert asset.mime_type == "image/jpeg"

    @pytest.mark.parametrize("image_format", ["GIF", "WEBP"])
    def test_reads_other_allowed_formats(self, make_image: MakeImage, image_format: str) -> None:
        asset = ImageInspector().inspect(make_image(10, 20, image_format))
        assert asset.format == image_format
        assert asset.max_dimension == 20

    def test_extension_is_case_insensitive(self, make_image: MakeImage) -> None:
        path = make_image(16, 16, "JPEG", name="PHOTO.JPG")
        asset = ImageInspector().inspect(path)
        assert asset.path == path


class TestInspectErrors:
    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ImageNotFoundError, match="not found"):
            ImageInspector().inspect(tmp_path / "missing.png")

    def test_directory_is_not_a_file(self, tmp_path: Path) -> None:
        folder = tmp_path / "folder.png"
        folder.mkdir()
        with pytest.raises(ImageNotFoundError):
            ImageInspector().inspect(folder)

    def test_unsupported_extension(self, tmp_path: Path) -> None:
        path = tmp_path / "scan.bmp"
        Image.new("RGB", (8, 8)).save(path, format="BMP")
        with pytest.raises(UnsupportedImageFormatError, match="bmp"):
            ImageInspector().inspect(path)

    def test_allowed_extension_with_disallowed_content(self, tmp_path: Path) -> None:
        path = tmp_path / "disguised.png"
        Image.new("RGB", (8, 8)).save(path, format="BMP")
        with pytest.raises(UnsupportedImageFormatError, match="BMP"):
            ImageInspector().inspect(path)

    def test_corrupt_file(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.jpg"
        path.write_bytes(b"this is not an image")
        with pytest.raises(CorruptImageError, match="Cannot decode"):
            ImageInspector().inspect(path)

    @pytest.mark.parametrize(("image_format", "suffix"), [("JPEG", ".jpg"), ("PNG", ".png")])
    def test_truncated_file(self, tmp_path: Path, image_format: str, suffix: str) -> None:
        path = tmp_path / f"cut{suffix}"
        Image.effect_noise((512, 512), 64).convert("RGB").save(path, format=image_format)
        data = path.read_bytes()
        path.write_bytes(data[: len(data) // 3])
        with pytest.raises(CorruptImageError, match="Cannot decode"):
            ImageInspector().inspect(path)

    def test_all_errors_share_usage_exit_code(self, tmp_path: Path) -> None:
        with pytest.raises(ImageValidationError) as exc_info:
            ImageInspector().inspect(tmp_path / "nothing.gif")
        assert exc_info.value.exit_code == 2
