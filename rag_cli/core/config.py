"""
config.py — Centralized application settings
Uses pydantic-settings to read from .env, validate types, and provide defaults.

Usage:
    from rag_cli.core.config import settings
    print(settings.OLLAMA_BASE_URL)
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from pathlib import Path
from typing import Literal, Optional


class Settings(BaseSettings):
    """
    BaseSettings automatically reads from environment variables and .env files.
    Every field has a default so the CLI runs against a stock local setup
    (Ollama on :11434, Chroma on :8000) without any configuration.
    """

    # Ollama (embeddings + generation)
    OLLAMA_BASE_URL: str = Field(
        default="http://127.0.0.1:11434",
        description="Base URL of the Ollama server"
    )
    EMBEDDING_MODEL: str = Field(
        default="nomic-embed-text",
        description="Ollama model used for embeddings"
    )
    LLM_MODEL: str = Field(
        default="llama3.1",
        description="Ollama model used for answer generation"
    )
    EMBEDDING_BATCH_SIZE: int = Field(
        default=32,
        ge=1,
        description="Number of texts sent per embedding request"
    )
    REQUEST_TIMEOUT: Optional[float] = Field(
        default=300.0,
        description="Seconds to wait for a model server response (None disables)"
    )

    # Vector store
    CHROMA_HOST: str = Field(
        default="127.0.0.1",
        description="Host of the Chroma server"
    )
    CHROMA_PORT: int = Field(
        default=8000,
        description="Port of the Chroma server"
    )
    COLLECTION_NAME: str = Field(
        default="rag-documents",
        description="Chroma collection holding every ingested chunk"
    )

    # Retrieval
    RETRIEVAL_TOP_K: int = Field(
        default=4,
        ge=1,
        description="Number of chunks retrieved per query"
    )

    # Data / logging
    DATA_DIR: str = Field(
        default="./data",
        description="Root directory for all generated data"
    )
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    LOG_TO_FILE: bool = Field(default=True)

    # Pydantic settings config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value

    @property
    def logs_dir(self) -> Path:
        return Path(self.DATA_DIR) / "logs"

    @property
    def chroma_url(self) -> str:
        return f"http://{self.CHROMA_HOST}:{self.CHROMA_PORT}"

    def ensure_directories(self):
        """Create all necessary directories"""
        if self.LOG_TO_FILE:
            self.logs_dir.mkdir(parents=True, exist_ok=True)


# Singleton instance
settings = Settings()
settings.ensure_directories()
