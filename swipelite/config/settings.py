"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMSettings(BaseSettings):
    """LLM provider configuration for smart bill parsing."""

    model_config = SettingsConfigDict(env_prefix="LLM_")

    host: str = "http://localhost:11434"
    model_name: str = "llama3.1:8b"
    timeout: int = 60
    max_tokens: int = 1024
    temperature: float = 0.1

    # Retry settings (1 attempt = no retry)
    max_retries: int = 1
    retry_delay: float = 1.0
    retry_multiplier: float = 2.0


class StorageSettings(BaseSettings):
    """Key-value persistence configuration."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    backend: Literal["sqlite", "memory"] = "sqlite"
    data_dir: Path = Path("data")
    db_name: str = "swipelite.db"
    busy_timeout: int = 30000  # ms

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class PdfSettings(BaseSettings):
    """PDF rendering configuration."""

    model_config = SettingsConfigDict(env_prefix="PDF_")

    footer_text: str = "This is a computer generated invoice."
    font_family: str = "Helvetica"
    body_font_size: int = 9


class BillingSettings(BaseSettings):
    """Invoice numbering and display configuration."""

    model_config = SettingsConfigDict(env_prefix="BILLING_")

    invoice_prefix: str = "INV-"
    currency_symbol: str = "Rs."


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "SwipeLite"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Sub-settings
    llm: LLMSettings = Field(default_factory=LLMSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    pdf: PdfSettings = Field(default_factory=PdfSettings)
    billing: BillingSettings = Field(default_factory=BillingSettings)


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
