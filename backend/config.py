"""
Lexicon Stream configuration — all environment variables in one place.

Read from environment when Settings() is constructed. Entry points build the
services from a Settings instance; nothing in the kernel reads it.
"""

from __future__ import annotations

import os
from pathlib import Path


class Settings:
    """Application settings from environment variables."""

    def __init__(self) -> None:
        # Upstream simulation (serves GET /api/state)
        self.LEXICON_URL: str = os.environ.get("LEXICON_URL", "http://localhost:7890").rstrip("/")
        self.FETCH_TIMEOUT_SECONDS: float = float(os.environ.get("FETCH_TIMEOUT_SECONDS", "10"))

        # HTTP server
        self.HOST: str = os.environ.get("HOST", "0.0.0.0")
        self.PORT: int = int(os.environ.get("PORT", "3500"))

        # Storage
        self.STREAM_FILE: Path = Path(os.environ.get("STREAM_FILE", "stream.json"))
        self.SNAPSHOT_DIR: Path = Path(os.environ.get("SNAPSHOT_DIR", "snapshots"))
        self.STATIC_DIR: Path = Path(os.environ.get("STATIC_DIR", "public"))

        # Logging
        self.LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()


# Singleton instance
settings = Settings()
