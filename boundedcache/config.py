from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CacheSettings(BaseSettings):
    """Cache configuration loaded from environment variables and .env file.

    Every field maps to a ``BOUNDED_CACHE_``-prefixed variable, e.g.
    ``BOUNDED_CACHE_CAPACITY=512``.
    """

    model_config = SettingsConfigDict(
        env_prefix="BOUNDED_CACHE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    capacity: int = Field(default=128, ge=1)
    default_ttl_seconds: float = Field(default=300.0, ge=0)

    # Shows up in log lines and stats snapshots
    name: str = "cache"
    log_level: str = "WARNING"


_settings: CacheSettings | None = None


def get_settings() -> CacheSettings:
    """Return the cached CacheSettings singleton. Created on first call."""
    global _settings  # noqa: PLW0603
    if _settings is None:
        _settings = CacheSettings()
    return _settings


def reset_settings() -> None:
    """Clear the cached settings. Used in tests."""
    global _settings  # noqa: PLW0603
    _settings = None
