"""Application configuration and settings."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Application
    app_name: str = "Better Qdrant API"
    app_version: str = "0.1.1"
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False

    # API
    api_v1_prefix: str = "/api/v1"

    # CORS
    cors_origins: list[str] = ["*"]
    cors_credentials: bool = True
    cors_methods: list[str] = ["*"]
    cors_headers: list[str] = ["*"]

    # Logging
    log_level: str = "INFO"

    # Qdrant Configuration
    qdrant_url: str = "http://localhost:6333"
    qdrant_api_key: str | None = None
    qdrant_prefer_grpc: bool = False
    qdrant_timeout: int = 30  # Timeout in seconds

    # Chunking defaults (characters)
    chunk_size: int = 1000
    chunk_overlap: int = 200

    # Search
    search_limit: int = 10

    # Embedding calls
    embedding_timeout: float = 60.0  # Timeout in seconds per embedding batch
    embedding_batch_size: int = 100

    # OpenAI
    openai_api_key: str | None = None
    openai_endpoint: str | None = None
    openai_model: str | None = None
    openai_vector_size: int | None = None

    # OpenRouter (OpenAI-compatible gateway)
    openrouter_api_key: str | None = None
    openrouter_endpoint: str | None = None
    openrouter_model: str | None = None
    openrouter_vector_size: int | None = None

    # Ollama
    ollama_endpoint: str | None = None
    ollama_model: str | None = None
    ollama_vector_size: int | None = None

    # FastEmbed (local ONNX inference)
    fastembed_model: str | None = None
    fastembed_vector_size: int | None = None
    fastembed_cache_dir: str | None = None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: Application settings instance.
    """
    return Settings()
