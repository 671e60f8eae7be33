"""Environment-driven settings."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

@dataclass(frozen=True)
class Settings:
    """Runtime settings for local/stdin and HTTP-hosted modes."""

    app_name: str = "portfolio-rebalancer"
    app_version: str = "1.0.0"
    transport_mode: str = "auto"
    http_transport: str = "sse"
    host: str = "0.0.0.0"
    port: int = 8000
    mcp_path: str = "/mcp"
    health_path: str = "/health"
    price_catalog_path: str | None = None
    log_level: str = "INFO"
    default_requests_per_minute: int = 100
    request_queue_limit: int = 200


def _as_int(value: str | None, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _as_log_level(value: str | None, default: str) -> str:
    if value is None or value.strip() == "":
        return default
    level = value.strip().upper()
    if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        return default
    return level


def get_settings() -> Settings:
    """Load runtime settings from environment variables."""
    load_dotenv()

    return Settings(
        app_name=os.getenv("APP_NAME", "portfolio-rebalancer"),
        transport_mode=os.getenv("TRANSPORT_MODE", "auto").strip().lower(),
        http_transport=os.getenv("HTTP_TRANSPORT", "sse").strip().lower(),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_as_int(os.getenv("PORT"), 8000),
        mcp_path=os.getenv("MCP_PATH", "/mcp"),
        health_path=os.getenv("HEALTH_PATH", "/health"),
        price_catalog_path=os.getenv("PRICE_CATALOG_PATH") or None,
        log_level=_as_log_level(os.getenv("LOG_LEVEL"), "INFO"),
        default_requests_per_minute=_as_int(os.getenv("DEFAULT_REQUESTS_PER_MINUTE"), 100),
        request_queue_limit=_as_int(os.getenv("REQUEST_QUEUE_LIMIT"), 200),
    )
