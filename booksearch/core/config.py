"""
Booksearch - Application Configuration

Patterns Applied:
- Pydantic Settings with SettingsConfigDict
- Environment variable prefix BS_ for the booksearch service

Anti-Patterns Avoided:
- Module-level mutable settings singleton (get_settings() builds a fresh instance)
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from booksearch.search.folding import CaseFolding


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be overridden via environment variables with BS_ prefix.
    Example: BS_PORT=8090, BS_CASE_FOLDING=casefold
    """

    # Server configuration
    host: str = "0.0.0.0"
    port: int = 8090

    # Application metadata
    service_name: str = "booksearch-service"
    version: str = "0.1.0"
    environment: str = "development"

    # Logging configuration
    log_level: str = "INFO"
    log_json: bool = True

    # Tracing configuration
    tracing_enabled: bool = True
    tracing_console_export: bool = False

    # Search configuration
    default_context_length: int = Field(default=5, ge=0)
    max_context_length: int = Field(default=100, ge=0)
    case_folding: CaseFolding = CaseFolding.LOWER

    model_config = SettingsConfigDict(
        env_prefix="BS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


def get_settings() -> Settings:
    """Get application settings instance.

    Returns:
        Settings instance with values from environment
    """
    return Settings()
