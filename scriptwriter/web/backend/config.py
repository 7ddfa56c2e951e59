"""Configuration for the web backend."""

from pathlib import Path

from pydantic import BaseModel


class WebConfig(BaseModel):
    """Web server configuration."""

    host: str = "127.0.0.1"
    port: int = 8000
    config_path: Path | None = None  # pipeline config.yaml
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]
    request_timeout_seconds: float = 30.0
