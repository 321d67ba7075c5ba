"""Application settings and configuration."""

from pathlib import Path
from dataclasses import dataclass, field
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent


@dataclass
class DatabaseConfig:
    """Database configuration settings."""

    path: Path = field(
        default_factory=lambda: Path(
            os.getenv("QA_FORUM_DB_PATH", str(PROJECT_ROOT / "data" / "forum.duckdb"))
        )
    )
    read_only: bool = False
    memory_limit: str = "1GB"
    threads: int = -1  # Use all available threads


@dataclass
class APIConfig:
    """Settings the UI uses to reach the forum API."""

    base_url: str = field(
        default_factory=lambda: os.getenv("QA_FORUM_API_URL", "http://localhost:8000")
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.getenv("QA_FORUM_REQUEST_TIMEOUT", "10"))
    )


@dataclass
class AppConfig:
    """Application configuration settings."""

    name: str = field(default_factory=lambda: os.getenv("APP_NAME", "相談広場"))
    version: str = field(default_factory=lambda: os.getenv("APP_VERSION", "1.0.0"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_file: str = field(default_factory=lambda: os.getenv("LOG_FILE", ""))
    home_question_limit: int = field(
        default_factory=lambda: int(os.getenv("HOME_QUESTION_LIMIT", "20"))
    )


@dataclass
class Config:
    """Main configuration container."""

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    api: APIConfig = field(default_factory=APIConfig)
    app: AppConfig = field(default_factory=AppConfig)

    def ensure_directories(self) -> None:
        """Create necessary directories if they don't exist."""
        self.database.path.parent.mkdir(parents=True, exist_ok=True)


# Global config instance
config = Config()
