"""Example inference client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseInferenceClient and register the provider in InferenceClientFactory.
"""

import json
from typing import ClassVar

from vision_extract.inference.client_base import BaseInferenceClient
from vision_extract.inference.models import InferenceResult


class ExampleClientAdapter(BaseInferenceClient):
    """Offline adapter that answers every request with a fixed text.

    No network calls. Useful for dry runs of the pipeline and in tests.
    """

    DEFAULT_CONTENT: ClassVar[str] = "Example extracted text"

    def __init__(self, model: str = "example", content: str | None = None) -> None:
        self._model = model
        self._content = content if content is not None else self.DEFAULT_CONTENT

    def list_models(self) -> list[str]:
        return [self._model]

    def extract(self, body: str) -> InferenceResult:
        _ = body
        raw_body = json.dumps(
            {
                "object": "chat.completion",
                "model": self._model,
                "choices": [
                    {
                        "index": 0,
                        "message": {"role": "assistant", "content": self._content},
                        "finish_reason": "stop",
                    }
                ],
            }
        )
        return InferenceResult(content=self._content, raw_body=raw_body, model=self._model)
