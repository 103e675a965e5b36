from typing import ClassVar

EXIT_AUDIT = 1
EXIT_USAGE = 2
EXIT_ENVIRONMENT = 3
EXIT_NORMALIZATION = 4
EXIT_SERIALIZATION = 5
EXIT_NETWORK = 6
EXIT_API = 7
EXIT_RESPONSE = 8
EXIT_INTERRUPTED = 130


class VisionExtractError(Exception):
    """Base exception for every pipeline failure."""

    exit_code: ClassVar[int] = 1


class EnvironmentValidationError(VisionExtractError):
    """Raised when credentials or required capabilities are missing."""

    exit_code: ClassVar[int] = EXIT_ENVIRONMENT

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__("Missing requirements: " + "; ".join(self.missing))


class ImageValidationError(VisionExtractError):
    """Raised when the input image cannot be used."""

    exit_code: ClassVar[int] = EXIT_USAGE


class ImageNotFoundError(ImageValidationError):
    """Raised when the image path does not exist or is not a regular file."""


class UnsupportedImageFormatError(ImageValidationError):
    """Raised when the image is not one of the allow-listed raster formats."""


class CorruptImageError(ImageValidationError):
    """Raised when the image cannot be decoded."""


class ImageNormalizationError(VisionExtractError):
    """Raised when an oversized image cannot be scaled down."""

    exit_code: ClassVar[int] = EXIT_NORMALIZATION


class RequestSerializationError(VisionExtractError):
    """Raised when the request builder produces an invalid body (internal error)."""

    exit_code: ClassVar[int] = EXIT_SERIALIZATION


class InferenceNetworkError(VisionExtractError):
    """Raised when the inference service cannot be reached."""

    exit_code: ClassVar[int] = EXIT_NETWORK


class InferenceAPIError(VisionExtractError):
    """Raised when the inference service answers with a failure."""

    exit_code: ClassVar[int] = EXIT_API

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: str = "",
        available_models: list[str] | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.available_models = available_models or []


class InferenceResponseError(VisionExtractError):
    """Raised when a successful response carries no usable content."""

    exit_code: ClassVar[int] = EXIT_RESPONSE

    def __init__(self, message: str, *, body: str = "") -> None:
        super().__init__(message)
        self.body = body
