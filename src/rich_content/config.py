# -*- coding: utf-8 -*-
"""
Rich content service configuration using Pydantic BaseSettings.
"""
from pathlib import Path
from typing import List, Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Central service configuration loaded from environment variables.
    Pydantic's BaseSettings provides validation, type casting,
    and reading from .env files.
    """

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8002

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # API Documentation (disable in production)
    DOCS_ENABLED: bool = True

    # CORS
    CORS_ORIGINS: List[str] = ["*"]
    CORS_ALLOW_CREDENTIALS: bool = False

    # Request tracking
    REQUEST_ID_HEADER: str = "X-Request-ID"

    # Compression
    GZIP_MIN_SIZE: int = 1000

    # Maximum number of documents accepted by /render/batch
    MAX_BATCH_SIZE: int = 200

    # ==========================================================================
    # Renderer options (mirror the editor configuration)
    # ==========================================================================

    # YouTube embeds: privacy-enhanced domain and hidden player controls
    YOUTUBE_NOCOOKIE: bool = True
    YOUTUBE_CONTROLS: bool = False
    YOUTUBE_WIDTH: int = 640
    YOUTUBE_HEIGHT: int = 480

    # Accept data:image/... sources on image nodes
    IMAGE_ALLOW_BASE64: bool = True

    # Schemes allowed in link hrefs (relative URLs are always allowed)
    LINK_ALLOWED_PROTOCOLS: List[str] = ["http", "https", "mailto", "tel"]

    # ==========================================================================
    # Paths (computed, not from env vars)
    # ==========================================================================
    BASE_DIR: Path = Path(__file__).resolve().parent
    TEMPLATES_DIR: Path = BASE_DIR / "templates"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


# Global configuration instance
settings = Settings()
