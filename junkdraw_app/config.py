from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    """

    # Environment
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # Application
    app_name: str = "DigitalJunkDraw"
    app_version: str = "1.0.0"

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Storage backend
    storage_backend: str = "supabase"  # Options: "supabase", "sqlalchemy"
    supabase_url: Optional[str] = None
    supabase_anon_key: Optional[str] = None

    # Local database (sqlalchemy backend)
    database_url: str = "sqlite:///./junkdraw.db"

    # Listing cache
    cache_backend: str = "memory"  # Options: "redis", "memory", "null"
    redis_url: str = "redis://localhost:6379/0"
    listing_cache_ttl: int = 60  # seconds

    # URL metadata lookup
    metadata_timeout: int = 5
    metadata_user_agent: str = "Mozilla/5.0 (compatible; DigitalJunkDraw/1.0)"

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @model_validator(mode="after")
    def require_supabase_credentials(self) -> "Settings":
        """The hosted backend cannot be reached without both values."""
        if self.storage_backend == "supabase":
            if not self.supabase_url or not self.supabase_anon_key:
                raise ValueError("Supabase URL and anon key must be provided")
        return self


# Create settings instance
settings = Settings()
