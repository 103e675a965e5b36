from abc import ABC, abstractmethod

from vision_extract.inference.models import InferenceResult


class BaseInferenceClient(ABC):
    """Contract for provider-specific inference clients."""

    @abstractmethod
    def list_models(self) -> list[str]:
        """Return the identifiers of the models the service currently serves.

        Raises:
            InferenceNetworkError: on transport failure.
            InferenceAPIError: on a non-success status.
        """

    @abstractmethod
    def extract(self, body: str) -> InferenceResult:
        """Send a serialized chat-completions body and return the extracted text.

        Raises:
            InferenceNetworkError: on transport failure.
            InferenceAPIError: on a non-success status.
            InferenceResponseError: if the response carries no content.
        """
