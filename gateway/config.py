"""Centralised settings for the worklog gateway.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).

The backend base URL is the single source of truth for where every forwarded
request goes; no route builds its own host.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

DEFAULT_API_BASE_URL = "http://localhost:4000/api/v1"


def _env_flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: str) -> list[str]:
    raw = os.environ.get(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Backend
    # ------------------------------------------------------------------
    api_base_url: str = field(
        default_factory=lambda: (
            os.environ.get("API_BASE_URL")
            or os.environ.get("NEXT_PUBLIC_API_BASE_URL")
            or DEFAULT_API_BASE_URL
        )
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "5.0"))
    )

    # ------------------------------------------------------------------
    # Error bodies
    # ------------------------------------------------------------------
    legacy_error_bodies: bool = field(
        default_factory=lambda: _env_flag("GATEWAY_LEGACY_ERRORS")
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO")
    )
    log_format: str = field(
        default_factory=lambda: os.environ.get("LOG_FORMAT", "console")
    )

    # ------------------------------------------------------------------
    # HTTP server
    # ------------------------------------------------------------------
    host: str = field(
        default_factory=lambda: os.environ.get("GATEWAY_HOST", "127.0.0.1")
    )
    port: int = field(
        default_factory=lambda: int(os.environ.get("GATEWAY_PORT", "3000"))
    )
    cors_origins: list[str] = field(
        default_factory=lambda: _env_list("CORS_ORIGINS", "*")
    )

    def __post_init__(self) -> None:
        self.api_base_url = self.api_base_url.rstrip("/")

    def backend_url(self, path: str) -> str:
        """Join *path* (which starts with ``/``) onto the backend base URL."""
        return f"{self.api_base_url}{path}"


# Module-level singleton, import this everywhere:
#   from gateway.config import settings
settings = Settings()
