from typing import TYPE_CHECKING, ClassVar

from vision_extract.config.settings import Settings
from vision_extract.inference.client_base import BaseInferenceClient
from vision_extract.inference.example_client_adapter import ExampleClientAdapter

if TYPE_CHECKING:
    import httpx


class InferenceClientFactory:
    """Creates the configured inference client."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(
        cls,
        settings: Settings,
        http_client: "httpx.Client | None" = None,
    ) -> BaseInferenceClient:
        """Create a configured inference client from application settings."""
        provider = settings.inference_provider.lower()
        if provider == "example":
            return ExampleClientAdapter(model=settings.openai_model_name)
        from vision_extract.inference.openai_client_adapter import OpenAIClientAdapter

        return OpenAIClientAdapter(
            api_key=settings.openai_api_key,
            timeout_seconds=settings.openai_timeout_seconds,
            base_url=cls._resolve_base_url(provider, settings),
            max_retries=settings.openai_max_retries,
            http_client=http_client,
        )

    @classmethod
    def requires_credential(cls, settings: Settings) -> bool:
        return settings.inference_provider.lower() != "example"

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        override = settings.openai_base_url.strip()
        if provider == "openai":
            return override or None
        if provider == "openai_compatible":
            if not override:
                raise ValueError(
                    "openai_base_url is required for inference_provider=openai_compatible"
                )
            return override
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return override or default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(
            f"Unknown inference provider '{provider}'. Choose from: {supported}"
        )
