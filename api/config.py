"""FastAPI application settings."""

from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
import os


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(env_prefix="QA_FORUM_")

    # App info
    app_name: str = "Q&A Forum API"
    version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    database_path: Path = Path(
        os.getenv("QA_FORUM_DB_PATH", str(Path(__file__).parent.parent / "data" / "forum.duckdb"))
    )
    memory_limit: str = "1GB"
    threads: int = 4

    # CORS - comma-separated list of origins
    cors_origins: str = "http://localhost:8501,http://localhost:3000"

    # Cache
    tag_cache_ttl_seconds: int = 300

    @property
    def cors_origin_list(self) -> list[str]:
        """CORS origins split into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
