"""
Configuration for the SQLegend gateway.

Uses pydantic-settings for environment variable loading. Every setting
can be overridden with a SQLEGEND_-prefixed variable, e.g.
SQLEGEND_DATA_DIR=/app/data.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Gateway configuration loaded from environment."""

    # Storage
    data_dir: str = Field(default="data", description="Storage root for tenant databases")
    busy_timeout_ms: int = Field(default=5000, ge=0, description="SQLite busy timeout (ms)")
    wal_mode: bool = Field(default=False, description="Put tenant databases in WAL mode")

    # Server
    host: str = Field(default="0.0.0.0", description="Bind host")
    port: int = Field(default=3000, description="Bind port")

    # Public links
    public_url: str = Field(
        default="https://sqlegend.zeabur.app",
        description="Base URL shown in the documentation page",
    )
    fallback_url: str = Field(
        default="https://sqlegend.nethacker.cloud",
        description="Redirect target for unknown paths",
    )

    # CORS
    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")

    # Logging
    log_level: str = Field(default="INFO", description="Root log level")
    log_format: str = Field(default="text", description="'text' or 'json'")

    model_config = {"env_prefix": "SQLEGEND_"}

    @property
    def api_url(self) -> str:
        """Statement endpoint as advertised to clients."""
        return f"{self.public_url.rstrip('/')}/api"
