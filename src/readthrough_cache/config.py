import os
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

import redis
from dotenv import load_dotenv

load_dotenv()


class Backend(str, Enum):
    """Where cached entries live."""

    MEMORY = "memory"
    REDIS = "redis"


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Cache
    cache_backend: str = os.getenv("CACHE_BACKEND", Backend.MEMORY.value)
    cache_key_prefix: str = os.getenv("CACHE_KEY_PREFIX", "cache:")

    # Loader
    source_root: str = os.getenv("CACHE_SOURCE_ROOT", ".")
    source_encoding: str = os.getenv("CACHE_SOURCE_ENCODING", "utf-8")

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_format: str = os.getenv("LOG_FORMAT", "console")

    @property
    def backend(self) -> Backend:
        """Return the configured backend as an enum member."""
        return Backend(self.cache_backend.lower())

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        allowed = [b.value for b in Backend]
        if self.cache_backend.lower() not in allowed:
            raise ValueError(
                f"CACHE_BACKEND must be one of {allowed}, got {self.cache_backend!r}"
            )

        if not self.cache_key_prefix:
            raise ValueError("CACHE_KEY_PREFIX must not be empty")

        if self.log_format not in ["console", "json"]:
            raise ValueError(f"LOG_FORMAT must be 'console' or 'json', got {self.log_format!r}")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client(url: str | None = None, password: str | None = None) -> redis.Redis:
    """Create a Redis client instance.

    Values are decoded to ``str`` so cached text round-trips unchanged.
    """
    return redis.from_url(
        url or settings.redis_url,
        password=password or settings.redis_password,
        decode_responses=True,
    )
