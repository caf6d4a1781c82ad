import os
from dataclasses import dataclass, field
from functools import lru_cache

import redis.asyncio as redis
from dotenv import load_dotenv

load_dotenv()


def _collect_api_keys() -> tuple[str, ...]:
    """Collect model provider keys in priority order, dropping empty values."""
    keys = [
        os.getenv("GROQ_API_KEY"),
        os.getenv("GROQ_API_KEY2"),
        *os.getenv("GROQ_API_KEYS", "").split(","),
    ]
    seen: list[str] = []
    for key in keys:
        key = (key or "").strip()
        if key and key not in seen:
            seen.append(key)
    return tuple(seen)


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")

    # Cache
    cache_key_prefix: str = os.getenv("CACHE_KEY_PREFIX", "evaluation_cache")
    evaluation_cache_ttl: int = int(os.getenv("EVALUATION_CACHE_TTL", "3600"))  # 1 hour
    aggregate_cache_ttl: int = int(os.getenv("AGGREGATE_CACHE_TTL", "86400"))  # 24 hours
    memory_cache_maxsize: int = int(os.getenv("MEMORY_CACHE_MAXSIZE", "10000"))

    # Model provider (OpenAI-compatible chat completions)
    groq_api_keys: tuple[str, ...] = field(default_factory=_collect_api_keys)
    groq_base_url: str = os.getenv("GROQ_BASE_URL", "https://api.groq.com/openai/v1")
    groq_model: str = os.getenv("GROQ_MODEL", "llama-3.3-70b-versatile")

    # Metadata provider
    youtube_api_key: str | None = os.getenv("YOUTUBE_API_KEY")
    youtube_base_url: str = os.getenv("YOUTUBE_BASE_URL", "https://www.googleapis.com/youtube/v3")

    # Outbound HTTP
    http_timeout: float = float(os.getenv("HTTP_TIMEOUT", "60"))
    retry_attempts: int = int(os.getenv("RETRY_ATTEMPTS", "3"))
    retry_base_delay: float = float(os.getenv("RETRY_BASE_DELAY", "1.0"))
    retry_max_delay: float = float(os.getenv("RETRY_MAX_DELAY", "8.0"))

    # Evaluation pipeline
    collection_sample_size: int = int(os.getenv("COLLECTION_SAMPLE_SIZE", "5"))
    collection_fetch_limit: int = int(os.getenv("COLLECTION_FETCH_LIMIT", "15"))
    comment_fetch_limit: int = int(os.getenv("COMMENT_FETCH_LIMIT", "30"))

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_json: bool = os.getenv("LOG_JSON", "false").lower() == "true"

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.evaluation_cache_ttl <= 0 or self.aggregate_cache_ttl <= 0:
            raise ValueError("EVALUATION_CACHE_TTL and AGGREGATE_CACHE_TTL must be positive")

        if self.memory_cache_maxsize < 1:
            raise ValueError(f"MEMORY_CACHE_MAXSIZE must be at least 1, got {self.memory_cache_maxsize}")

        if self.retry_attempts < 1:
            raise ValueError(f"RETRY_ATTEMPTS must be at least 1, got {self.retry_attempts}")

        if self.collection_sample_size < 1:
            raise ValueError(
                f"COLLECTION_SAMPLE_SIZE must be at least 1, got {self.collection_sample_size}"
            )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client(app_settings: Settings | None = None) -> redis.Redis:
    """Create an asyncio Redis client instance."""
    app_settings = app_settings or settings
    return redis.from_url(
        app_settings.redis_url,
        password=app_settings.redis_password,
        decode_responses=True,
    )
