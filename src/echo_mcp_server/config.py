"""Configuration and environment loading for the echo MCP server."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

Transport = Literal["stdio", "http", "sse", "streamable-http"]


class ServerSettings(BaseSettings):
    """Transport and logging settings loaded from ``ECHO_MCP_*`` variables."""

    model_config = SettingsConfigDict(
        env_prefix="ECHO_MCP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    transport: Transport = "stdio"
    host: str = "127.0.0.1"
    port: int = 8000
    path: str = "/mcp"

    # stderr only; stdout carries the stdio transport
    log_level: str = "WARNING"


@lru_cache
def get_settings() -> ServerSettings:
    """Get cached settings instance."""
    return ServerSettings()
