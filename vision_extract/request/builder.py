import base64
import json
from pathlib import Path

from pydantic import ValidationError

from vision_extract.exceptions import RequestSerializationError
from vision_extract.image.models import NormalizedImage
from vision_extract.logging.logger import Log
from vision_extract.request.models import (
    ExtractionRequest,
    ImagePart,
    ImageUrl,
    Message,
    SerializedRequest,
    TextPart,
)
from vision_extract.request.prompt_loader import load_prompt


class RequestBuilder:
    """Assembles the extraction request for a normalized image."""

    def __init__(
        self,
        *,
        model: str,
        temperature: float | None = 0.0,
        max_tokens: int | None = None,
        prompt: str | None = None,
        prompt_path: Path | None = None,
    ) -> None:
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._prompt = prompt
        self._prompt_path = prompt_path

    def build(self, image: NormalizedImage) -> SerializedRequest:
        """Build and serialize the request, then re-validate the body.

        Raises:
            RequestSerializationError: if the image cannot be read or the body
                is not well-formed JSON.
        """
        prompt = self._prompt if self._prompt is not None else load_prompt(self._prompt_path)
        data_url = self._encode_image(image)
        try:
            request = ExtractionRequest(
                model=self._model,
                messages=[
                    Message(
                        role="user",
                        content=[
                            TextPart(text=prompt),
                            ImagePart(image_url=ImageUrl(url=data_url)),
                        ],
                    )
                ],
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            )
            body = request.to_json()
        except ValidationError as exc:
            raise RequestSerializationError(f"Invalid extraction request: {exc}") from exc

        self._check_body(body)
        Log.info(f"Built extraction request for model {self._model} ({len(body)} bytes)")
        return SerializedRequest(request=request, body=body)

    @staticmethod
    def _encode_image(image: NormalizedImage) -> str:
        try:
            raw = image.path.read_bytes()
        except OSError as exc:
            raise RequestSerializationError(
                f"Cannot read normalized image {image.path}: {exc}"
            ) from exc
        encoded = base64.b64encode(raw).decode("ascii")
        return f"data:{image.mime_type};base64,{encoded}"

    @staticmethod
    def _check_body(body: str) -> None:
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError as exc:
            Log.error(f"Internal error: request body is not valid JSON: {exc}")
            raise RequestSerializationError(
                f"Internal error: request body is not valid JSON: {exc}"
            ) from exc
        if not isinstance(parsed, dict) or "messages" not in parsed:
            Log.error("Internal error: request body lost its messages field")
            raise RequestSerializationError(
                "Internal error: request body lost its messages field"
            )
