"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here.
"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        environment: Deployment mode. ``production`` redacts unexpected
            error messages in API responses.
        debug: Enable debug mode (OpenAPI docs). Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        database_url: SQLAlchemy URL of the artist/follow store.
        jwt_secret: Shared secret used to verify bearer tokens.
        jwt_algorithm: Signing algorithm of bearer tokens.
        cors_origins: Allowed browser origins (comma-separated).
        rate_limit_enabled: Turn the per-client rate limiter on or off.
        rate_limit_default: Default per-client rate limit for all endpoints.
        artist_cache_ttl: Seconds a stored artist stays fresh before it is
            refreshed from MusicBrainz.
        musicbrainz_base_url: Root of the MusicBrainz web service.
        musicbrainz_user_agent: User-Agent MusicBrainz requires on every call.
        musicbrainz_timeout: Per-request timeout in seconds.
        musicbrainz_min_interval: Minimum seconds between two requests.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    project_name: str = "BandPulse"
    version: str = "1.0.0"
    environment: Literal["development", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    database_url: str = "sqlite:///./bandpulse.db"

    jwt_secret: str = "dev-secret-change-me-dev-secret-change-me"
    jwt_algorithm: str = "HS256"

    cors_origins: str = "http://localhost:3000"
    rate_limit_enabled: bool = True
    rate_limit_default: str = "60/minute"

    artist_cache_ttl: int = 7 * 24 * 60 * 60
    musicbrainz_base_url: str = "https://musicbrainz.org/ws/2"
    musicbrainz_user_agent: str = "BandPulse/1.0.0 (https://bandpulse.com)"
    musicbrainz_timeout: float = 10.0
    musicbrainz_min_interval: float = 1.1

    @property
    def is_production(self) -> bool:
        """True when running with ``ENVIRONMENT=production``."""
        return self.environment == "production"

    @property
    def cors_origins_list(self) -> list[str]:
        """Split ``cors_origins`` into a clean list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


settings = Settings()
