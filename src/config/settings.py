# src/config/settings.py — v1
"""Typed configuration loaded from the environment / .env via pydantic-settings.

Single source of truth for all deployment-specific settings. Every field
maps to the upper-cased environment variable of the same name
(e.g. ``documents_folder`` <- ``DOCUMENTS_FOLDER``).
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === COMPLETION PROVIDER ===
    openai_api_key: str = ""
    openai_base_url: str = "https://api.openai.com/v1"
    llm_default_model: str = "gpt-4.1-mini"
    llm_temperature: float = 0.2
    llm_max_output_tokens: int = 800
    llm_timeout_seconds: float = 60.0
    llm_reasoning_models: str = "gpt-5"

    # === Document context cache ===
    documents_folder: Path = Path("./documents")
    document_cache_ttl_seconds: int = 2 * 60 * 60
    documents_ignore_prefixes: str = "~$"

    # === HTTP server ===
    host: str = "0.0.0.0"
    port: int = 3000

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("document_cache_ttl_seconds")
    @classmethod
    def validate_ttl(cls, v: int) -> int:  # noqa: N805
        if v <= 0:
            raise ValueError("document_cache_ttl_seconds must be > 0")
        return v

    @field_validator("llm_max_output_tokens")
    @classmethod
    def validate_max_output_tokens(cls, v: int) -> int:  # noqa: N805
        if v <= 0:
            raise ValueError("llm_max_output_tokens must be > 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if not 0.0 <= self.llm_temperature <= 2.0:
            errors.append("LLM_TEMPERATURE must be within [0, 2]")

        if self.llm_timeout_seconds <= 0:
            errors.append("LLM_TIMEOUT_SECONDS must be > 0")

        if not self.openai_base_url.startswith(("http://", "https://")):
            errors.append("OPENAI_BASE_URL must be an http(s) URL")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def llm_reasoning_models_list(self) -> list[str]:
        """Parse comma-separated reasoning model ids."""
        return [m.strip() for m in self.llm_reasoning_models.split(",") if m.strip()]

    @property
    def documents_ignore_prefixes_list(self) -> list[str]:
        """Parse comma-separated temp-file prefixes."""
        return [
            p.strip() for p in self.documents_ignore_prefixes.split(",") if p.strip()
        ]


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or the CLI).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
