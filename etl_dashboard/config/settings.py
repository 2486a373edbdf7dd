"""Pydantic Settings for the dashboard client.

All environment variables use the DASHBOARD_ prefix.
Example: DASHBOARD_API_URL=https://etl.internal:8000, DASHBOARD_LOG_LEVEL=DEBUG

Settings are read once at startup and frozen afterwards.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class DashboardSettings(BaseSettings):
    """Dashboard client configuration validated from environment variables."""

    # Backend
    api_url: str = "http://localhost:8000"

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Refresh policies (optional YAML override of the built-in table)
    refresh_policies_path: str | None = None

    # Stub backend
    stub_port: int = Field(default=8000, ge=1, le=65535)

    model_config = {"env_prefix": "DASHBOARD_", "frozen": True}
