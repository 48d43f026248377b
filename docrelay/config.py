"""Relay and UI configuration with environment variable loading.

Pydantic-based configuration shared by the relay server and the web UI.
Values are read from the environment as strings and coerced by field
validation, so bad values surface as ValidationError.
"""

import os
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Load environment variables from .env file
load_dotenv()


class RelayConfig(BaseModel):
    """Configuration for the relay server and the UI that calls it.

    Attributes:
        backend_url: Base URL of the question-answering backend.
        host: Interface the relay listens on.
        port: Port the relay listens on.
        backend_timeout: Outbound timeout in seconds (None for no timeout).
        relay_url: Base URL the UI uses to reach the relay.
        ui_port: UI port when running relay and UI separately.
        run_mode: "integrated" (UI mounted on the relay) or "separate".
        log_level: Root log level name.
    """

    model_config = ConfigDict(validate_default=True)

    backend_url: str = Field(
        default_factory=lambda: os.getenv("BACKEND_URL", "http://localhost:5001"),
        description="Question-answering backend base URL",
    )
    host: str = Field(
        default_factory=lambda: os.getenv("HOST", "0.0.0.0"),
        description="Relay listen host",
    )
    port: int = Field(
        default_factory=lambda: os.getenv("PORT", "3001"),
        ge=1,
        le=65535,
        description="Relay listen port",
    )
    backend_timeout: float | None = Field(
        default_factory=lambda: os.getenv("BACKEND_TIMEOUT"),
        gt=0,
        description="Outbound timeout in seconds; unset means no timeout",
    )
    relay_url: str = Field(
        default_factory=lambda: os.getenv("RELAY_BASE_URL", "http://localhost:3001"),
        description="Relay base URL used by the UI",
    )
    ui_port: int = Field(
        default_factory=lambda: os.getenv("UI_PORT", "8080"),
        ge=1,
        le=65535,
        description="UI port in separate run mode",
    )
    run_mode: Literal["integrated", "separate"] = Field(
        default_factory=lambda: os.getenv("RUN_MODE", "integrated"),
        description="Serve the UI on the relay or on its own port",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"),
        description="Root log level",
    )

    @field_validator("backend_url", "relay_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an http(s) URL and drop any trailing slash."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("Base URL must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("backend_timeout", mode="before")
    @classmethod
    def blank_timeout_is_unset(cls, v: object) -> object:
        """Treat an empty BACKEND_TIMEOUT as no timeout."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("run_mode", mode="before")
    @classmethod
    def normalize_run_mode(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().upper()
        return v


def get_config() -> RelayConfig:
    """Create relay configuration from environment.

    Returns:
        Configured RelayConfig instance.

    Raises:
        ValidationError: If a configured value is invalid.
    """
    return RelayConfig()
