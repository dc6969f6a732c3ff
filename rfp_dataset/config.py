"""Application configuration loaded from environment variables."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Global application settings."""

    ollama_url: str = Field(
        default="http://127.0.0.1:11434/api/generate",
        description="Ollama generate endpoint.",
    )
    ollama_model: str = "gpt-oss:20b"
    temperature: float = 0.2
    num_ctx: int = 4096
    request_timeout: float = 300.0

    page_chunk_size: int = Field(default=10_000, gt=0)
    output_path: str = "finetune_dataset.jsonl"

    log_level: str = "INFO"
    warn_on_context_overflow: bool = True
    allow_tiktoken_fallback: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def output_path_obj(self) -> Path:
        return Path(self.output_path)


settings = Settings()
