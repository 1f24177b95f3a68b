"""Configuration management for the document QA service."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _sanitize_secret(value: str) -> str:
    """Remove BOM characters and whitespace from secrets.

    Secrets injected by container platforms may carry a BOM that breaks
    HTTP headers when the value is used as an API key.
    """
    if not value:
        return value
    return value.lstrip("\ufeff").strip()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Google AI API
    google_api_key: str = ""

    # Qdrant settings
    qdrant_url: str = ""
    qdrant_api_key: str = ""
    qdrant_collection: str = "document_chunks"
    vector_store_backend: Literal["qdrant", "memory"] = "qdrant"

    @field_validator("google_api_key", "qdrant_api_key", "qdrant_url", mode="after")
    @classmethod
    def sanitize_secrets(cls, value: str) -> str:
        """Remove BOM and whitespace from secret values."""
        return _sanitize_secret(value)

    # Model settings
    llm_model: str = "gemini-2.0-flash"
    rewrite_model: str = "gemini-2.0-flash"
    embedding_model: str = "text-embedding-004"
    embedding_dimension: int = 768

    # RAG settings
    chunk_size: int = 800
    chunk_overlap: int = 200
    top_k_results: int = 5
    max_context_chars: int = 12000
    query_rewrite_enabled: bool = False

    # Indexing
    embedding_batch_size: int = 20
    embedding_max_concurrency: int = 5
    index_settle_delay: float = 3.0
    index_settle_timeout: float = 10.0
    cleanup_namespace: bool = True

    # Request handling
    request_timeout_seconds: float | None = 60.0
    batch_failure_policy: Literal["fail_fast", "isolate"] = "fail_fast"
    temp_dir: Path | None = None

    # Logging
    log_level: str = "INFO"
    log_json: bool = False
    debug: bool = False

    @model_validator(mode="after")
    def check_chunking(self) -> "Settings":
        """Reject chunk parameters that cannot make forward progress."""
        if self.chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        if not 0 <= self.chunk_overlap < self.chunk_size:
            raise ValueError("chunk_overlap must be >= 0 and less than chunk_size")
        if self.max_context_chars <= 0:
            raise ValueError("max_context_chars must be positive")
        if self.top_k_results <= 0:
            raise ValueError("top_k_results must be positive")
        return self

    def ensure_directories(self) -> None:
        """Create the temporary download directory if one is configured."""
        if self.temp_dir:
            self.temp_dir.mkdir(parents=True, exist_ok=True)


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
