"""
Configuration Management

Centralized configuration using Pydantic Settings.
"""

from functools import lru_cache
from typing import Any, Dict, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Connection settings for the PostgreSQL store client."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Connection
    database_url: Optional[str] = Field(default=None, validation_alias="DATABASE_URL")
    # Unset: the sslmode in database_url applies. Set to "require" for Neon.
    ssl: Optional[str] = Field(default=None, validation_alias="PGCOMPAT_SSL")

    # Pool
    pool_min_size: int = Field(default=1, validation_alias="PGCOMPAT_POOL_MIN_SIZE")
    pool_max_size: int = Field(default=10, validation_alias="PGCOMPAT_POOL_MAX_SIZE")
    connect_timeout: float = Field(default=10.0, validation_alias="PGCOMPAT_CONNECT_TIMEOUT")
    command_timeout: Optional[float] = Field(default=None, validation_alias="PGCOMPAT_COMMAND_TIMEOUT")
    idle_timeout: float = Field(default=300.0, validation_alias="PGCOMPAT_IDLE_TIMEOUT")

    # Compatibility
    id_column: str = Field(default="id", validation_alias="PGCOMPAT_ID_COLUMN")

    def to_adapter_config(self) -> Dict[str, Any]:
        """Config dict accepted by PostgresAdapter."""
        return {
            "dsn": self.database_url,
            "ssl": self.ssl,
            "min_size": self.pool_min_size,
            "max_size": self.pool_max_size,
            "connect_timeout": self.connect_timeout,
            "command_timeout": self.command_timeout,
            "idle_timeout": self.idle_timeout,
        }


@lru_cache()
def get_settings() -> Settings:
    return Settings()
