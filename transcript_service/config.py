from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings validated via Pydantic.

    Values are loaded from environment variables and/or a .env file.
    """

    # App config
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    log_level: str = "INFO"
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:4200",
    ]

    # Caption sources
    caption_language: str = "en"  # The single target language for every source
    request_timeout: float = 15.0  # Per-source and title lookup timeout, seconds
    resolve_titles: bool = False  # Best-effort oEmbed title lookup

    # Retrieval policy
    skip_malformed_segments: bool = True
    fail_on_total_source_error: bool = False

    # Persistence
    transcripts_dir: str = "transcripts"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance.

    Gracefully handles missing .env files (e.g. in CI/testing) by falling
    back to environment variables and defaults.
    """
    try:
        return Settings()
    except Exception:
        # If .env is missing or unreadable, build settings from env vars only.
        return Settings(_env_file=None)  # type: ignore[call-arg]


settings = get_settings()
