"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # College Scorecard (api.data.gov)
    datagov_api_key: str | None = None
    scorecard_api_base: str = "https://api.data.gov/ed/collegescorecard/v1/schools"

    # Service
    service_name: str = "scorecard-gateway"
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 5174

    # HTTP Client
    http_timeout_seconds: float = 10.0
    disconnect_poll_seconds: float = 0.25

    # Search cache
    cache_ttl_seconds: float = 60.0
    cache_coalesce_misses: bool = False
    default_per_page: int = 12
    max_per_page: int = 100  # Scorecard rejects larger pages


settings = Settings()
