"""Application configuration."""
from decimal import Decimal
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite+aiosqlite:///./dinedesk.db"

    # Restaurants read model (YAML). Falls back to the bundled demo tenant.
    restaurants_file: Optional[str] = None

    # Used when a tenant's settings omit tax_rate
    default_tax_rate: Decimal = Decimal("0")

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


settings = Settings()
