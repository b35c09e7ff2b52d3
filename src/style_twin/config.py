"""Configuration management for Style Twin."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, loaded from environment and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="STYLE_TWIN_",
    )

    # OpenAI-compatible provider
    openai_base_url: str = Field(default="https://ai.hackclub.com/proxy/v1")
    openai_api_key: str = Field(default="")
    embedding_model: str = Field(default="qwen/qwen3-embedding-8b")
    generation_model: str = Field(default="qwen/qwen3-32b")
    chat_model: str = Field(default="qwen/qwen3-32b")
    request_timeout: float = Field(default=60.0, description="Provider request timeout in seconds")

    # Paths
    data_dir: Path = Field(default=Path("data"))

    # Processing settings
    chunk_max_length: int = Field(default=512, description="Max characters per embedded chunk")
    sample_context_limit: int = Field(default=10, description="Recent samples fed into persona prompts")

    # Logging
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=False, description="Render logs as JSON lines")

    @property
    def profiles_dir(self) -> Path:
        return self.data_dir / "profiles"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
