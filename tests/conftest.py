from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from PIL import Image

from vision_extract.logging.logger import Log

_ENV_VARS = (
    "OPENAI_API_KEY",
    "OPENAI_BASE_URL",
    "OPENAI_MODEL_NAME",
    "OPENAI_TIMEOUT_SECONDS",
    "OPENAI_MAX_RETRIES",
    "OPENAI_MAX_TOKENS",
    "EXTRACTION_PROMPT_PATH",
    "MAX_IMAGE_DIMENSION",
    "INFERENCE_PROVIDER",
    "LOG_LEVEL",
    "AUDIT_LOG_DIR",
    "TEMP_DIR",
    "VERIFY_MODEL",
    "REQUIRED_EXECUTABLES",
    "REQUIRED_MODULES",
)

MakeImage = Callable[..., Path]


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Keep host credentials and .env files out of every test."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    for handler in list(Log._logger.handlers):
        Log._logger.removeHandler(handler)


@pytest.fixture()
def make_image(tmp_path: Path) -> MakeImage:
    """Write a solid-color image of the given size and format and return its path."""

    def _make(
        width: int = 64,
        height: int = 64,
        image_format: str = "PNG",
        name: str | None = None,
    ) -> Path:
        suffix = {"JPEG": ".jpg", "PNG": ".png", "GIF": ".gif", "WEBP": ".webp"}[image_format]
        path = tmp_path / "images" / (name or f"sample_{width}x{height}{suffix}")
        path.parent.mkdir(parents=True, exist_ok=True)
        if image_format == "PNG":
            img = Image.new("RGBA", (width, height), color=(200, 30, 30, 255))
        else:
            img = Image.new("RGB", (width, height), color=(200, 30, 30))
        img.save(path, format=image_format)
        return path

    return _make


@pytest.fixture()
def temp_dir(tmp_path: Path) -> Path:
    path = tmp_path / "scratch"
    path.mkdir()
    return path
