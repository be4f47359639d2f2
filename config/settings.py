"""Configuration management using pydantic-settings."""
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings

MAX_PAGE_SIZE = 500


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Upstream catalog
    openlibrary_base_url: str = "https://openlibrary.org"
    covers_base_url: str = "https://covers.openlibrary.org"
    upstream_timeout_seconds: Optional[float] = None

    # Cache settings
    enable_cache: bool = True
    cache_ttl_ms: int = 600_000  # 10 minutes
    cache_max: int = 500

    # Pagination
    ol_page_size: int = 200
    editions_limit: int = 50

    # HTTP surface
    log_level: str = "info"
    cors_origin: str = "*"
    base_path: str = ""

    @field_validator("ol_page_size")
    @classmethod
    def _clamp_page_size(cls, value: int) -> int:
        return min(max(value, 1), MAX_PAGE_SIZE)

    @field_validator("cache_max")
    @classmethod
    def _clamp_cache_max(cls, value: int) -> int:
        return max(value, 1)

    @field_validator("cache_ttl_ms")
    @classmethod
    def _clamp_cache_ttl(cls, value: int) -> int:
        # 0 stores entries that are already stale
        return max(value, 0)

    @field_validator("log_level")
    @classmethod
    def _lower_log_level(cls, value: str) -> str:
        return value.lower()

    @field_validator("base_path")
    @classmethod
    def _strip_base_path(cls, value: str) -> str:
        # "books", "/books/" and "/books" mount the same router
        value = value.strip().rstrip("/")
        if value and not value.startswith("/"):
            value = f"/{value}"
        return value

    @field_validator("openlibrary_base_url", "covers_base_url")
    @classmethod
    def _strip_base_url(cls, value: str) -> str:
        return value.rstrip("/")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
