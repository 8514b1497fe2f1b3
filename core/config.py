"""
Application settings - read once from environment variables (.env supported)
"""
import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


def _env_list(name: str, default: str) -> List[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


@dataclass
class Settings:
    """Runtime configuration for the recipe service."""

    mongodb_uri: str = field(default_factory=lambda: os.getenv("MONGODB_URI", "mongodb://localhost:27017"))
    database_name: str = field(default_factory=lambda: os.getenv("DATABASE_NAME", "recipeApp"))
    mongodb_tls: bool = field(default_factory=lambda: _env_bool("MONGODB_TLS"))
    mongodb_timeout_ms: int = field(default_factory=lambda: int(os.getenv("MONGODB_TIMEOUT_MS", "30000")))

    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "3000")))
    cors_origins: List[str] = field(default_factory=lambda: _env_list("CORS_ORIGINS", "*"))

    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    debug: bool = field(default_factory=lambda: _env_bool("DEBUG"))


# Environment variables must be set before this module is imported
settings = Settings()
