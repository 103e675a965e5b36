from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    inference_provider: str = "openai"
    openai_api_key: str = ""
    openai_base_url: str = ""
    openai_model_name: str = "gpt-4o"
    openai_timeout_seconds: int = Field(default=30, gt=0)
    openai_max_retries: int = Field(default=0, ge=0)
    openai_temperature: float = 0.0
    openai_max_tokens: int | None = None
    verify_model: bool = True
    extraction_prompt_path: Path | None = None

    max_image_dimension: int = Field(default=1024, gt=0)
    audit_log_dir: Path = Path("logs")
    temp_dir: Path | None = None

    required_executables: list[str] = Field(default_factory=list)
    required_modules: list[str] = Field(
        default_factory=lambda: ["PIL", "openai", "httpx"]
    )
