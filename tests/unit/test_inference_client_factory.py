"""Tests for InferenceClientFactory."""

from unittest.mock import patch

import pytest

from vision_extract.config.settings import Settings
from vision_extract.inference.example_client_adapter import ExampleClientAdapter
from vision_extract.inference.factory import InferenceClientFactory

ADAPTER = "vision_extract.inference.openai_client_adapter.OpenAIClientAdapter"


class TestInferenceClientFactory:
    def test_creates_example_adapter_for_example_provider(self) -> None:
        settings = Settings(inference_provider="example", openai_model_name="gpt-4o")
        client = InferenceClientFactory.create(settings)
        assert isinstance(client, ExampleClientAdapter)
        assert client.list_models() == ["gpt-4o"]

    def test_example_provider_needs_no_credential(self) -> None:
        assert not InferenceClientFactory.requires_credential(
            Settings(inference_provider="example")
        )
        assert InferenceClientFactory.requires_credential(Settings(inference_provider="openai"))

    def test_uses_openai_settings(self) -> None:
        settings = Settings(
            inference_provider="openai",
            openai_api_key="openai-key",
            openai_timeout_seconds=42,
            openai_max_retries=3,
        )
        with patch(ADAPTER) as mock_adapter:
            InferenceClientFactory.create(settings)
        mock_adapter.assert_called_once_with(
            api_key="openai-key",
            timeout_seconds=42,
            base_url=None,
            max_retries=3,
            http_client=None,
        )

    def test_openai_base_url_override(self) -> None:
        settings = Settings(openai_api_key="k", openai_base_url="https://proxy.local/v1")
        with patch(ADAPTER) as mock_adapter:
            InferenceClientFactory.create(settings)
        assert mock_adapter.call_args.kwargs["base_url"] == "https://proxy.local/v1"

    def test_uses_provider_default_base_url_for_openrouter(self) -> None:
        settings = Settings(inference_provider="openrouter", openai_api_key="k")
        with patch(ADAPTER) as mock_adapter:
            InferenceClientFactory.create(settings)
        assert mock_adapter.call_args.kwargs["base_url"] == "https://openrouter.ai/api/v1"

    def test_provider_name_is_case_insensitive(self) -> None:
        settings = Settings(inference_provider="Ollama", openai_api_key="k")
        with patch(ADAPTER) as mock_adapter:
            InferenceClientFactory.create(settings)
        assert mock_adapter.call_args.kwargs["base_url"] == "http://localhost:11434/v1"

    def test_uses_custom_base_url_for_openai_compatible(self) -> None:
        settings = Settings(
            inference_provider="openai_compatible",
            openai_api_key="k",
            openai_base_url="https://example.com/v1",
        )
        with patch(ADAPTER) as mock_adapter:
            InferenceClientFactory.create(settings)
        assert mock_adapter.call_args.kwargs["base_url"] == "https://example.com/v1"

    def test_openai_compatible_requires_base_url(self) -> None:
        settings = Settings(inference_provider="openai_compatible", openai_api_key="k")
        with pytest.raises(ValueError, match="openai_base_url"):
            InferenceClientFactory.create(settings)

    def test_unknown_provider_raises_value_error(self) -> None:
        settings = Settings(inference_provider="unknown", openai_api_key="k")
        with pytest.raises(ValueError, match="Unknown inference provider"):
            InferenceClientFactory.create(settings)
