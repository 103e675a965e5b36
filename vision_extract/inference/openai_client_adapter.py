import json
import time
from typing import Any

import httpx
import openai

from vision_extract.exceptions import (
    InferenceAPIError,
    InferenceNetworkError,
    InferenceResponseError,
)
from vision_extract.inference.client_base import BaseInferenceClient
from vision_extract.inference.models import InferenceResult
from vision_extract.logging.logger import Log


class OpenAIClientAdapter(BaseInferenceClient):
    """Inference client built on the OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
        max_retries: int = 0,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=max_retries,
            http_client=http_client,
        )

    def list_models(self) -> list[str]:
        try:
            page = self._client.models.list()
            return [model.id for model in page]
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise InferenceNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIStatusError as exc:
            raise InferenceAPIError(
                f"Model listing failed with status {exc.status_code}",
                status_code=exc.status_code,
                body=exc.response.text,
            ) from exc
        except openai.APIError as exc:
            raise InferenceAPIError(f"AI provider API error: {exc}") from exc

    def extract(self, body: str) -> InferenceResult:
        payload = json.loads(body)
        started = time.monotonic()
        try:
            raw = self._client.chat.completions.with_raw_response.create(**payload)
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise InferenceNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIStatusError as exc:
            raise InferenceAPIError(
                f"AI provider returned status {exc.status_code}",
                status_code=exc.status_code,
                body=exc.response.text,
            ) from exc
        except openai.APIError as exc:
            raise InferenceAPIError(f"AI provider API error: {exc}") from exc
        finally:
            elapsed_ms = (time.monotonic() - started) * 1000
            Log.info(f"Extraction call finished in {elapsed_ms:.0f} ms")

        raw_body = raw.http_response.text
        content = self._parse_content(raw_body)
        return InferenceResult(
            content=content,
            raw_body=raw_body,
            model=payload.get("model", ""),
            status_code=raw.http_response.status_code,
            elapsed_ms=round(elapsed_ms, 2),
        )

    @staticmethod
    def _parse_content(raw_body: str) -> str:
        try:
            data: Any = json.loads(raw_body)
        except json.JSONDecodeError as exc:
            raise InferenceResponseError(
                f"AI returned invalid JSON: {exc}", body=raw_body
            ) from exc
        if not isinstance(data, dict):
            raise InferenceResponseError("AI response must be an object", body=raw_body)
        choices = data.get("choices")
        if not isinstance(choices, list) or not choices:
            raise InferenceResponseError("AI returned no choices", body=raw_body)
        first = choices[0] if isinstance(choices[0], dict) else {}
        message = first.get("message")
        content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, str) or not content.strip():
            raise InferenceResponseError("AI returned empty content", body=raw_body)
        return content
