"""
Configuration Settings.

This module defines the application configuration using Pydantic's BaseSettings.
It automatically loads all configuration from environment variables and .env file
without explicit dotenv loading.
"""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# =====================================================================
# Grouped Configuration Models
# =====================================================================


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(
        default="INFO",
        alias="TAPAS_LOG_LEVEL",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    format: str = Field(default="detailed", alias="TAPAS_LOG_FORMAT", description="Log format (simple, detailed, json)")
    file_dir: str = Field(default="logs", alias="TAPAS_LOG_FILE_DIR", description="Directory for the log file")
    enable_file: bool = Field(
        default=False, alias="TAPAS_ENABLE_FILE_LOGGING", description="Also write the log to a file"
    )

    model_config = {"populate_by_name": True}


# =====================================================================
# Main Settings Class
# =====================================================================


class Settings(BaseSettings):
    """
    Application settings model.

    All properties are automatically bound from environment variables and .env file.
    Pydantic's BaseSettings handles dotenv loading automatically via model_config.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
        populate_by_name=True,
    )

    # =====================================================================
    # Embedded Database Configuration
    # =====================================================================
    db_dir: str = Field(
        default="db",
        description="Directory holding the embedded database file",
        alias="TAPAS_DB_DIR",
    )
    db_name: str = Field(
        default="tapas.db",
        description="File name of the embedded database",
        alias="TAPAS_DB_NAME",
    )
    explicit_database_url: Optional[str] = Field(
        default=None,
        description="Full database URL; overrides TAPAS_DB_DIR and TAPAS_DB_NAME when set",
        alias="TAPAS_DATABASE_URL",
    )

    # =====================================================================
    # Logging Configuration
    # =====================================================================
    log_level: str = Field(default="INFO", alias="TAPAS_LOG_LEVEL")
    log_format: str = Field(default="detailed", alias="TAPAS_LOG_FORMAT")
    log_file_dir: str = Field(default="logs", alias="TAPAS_LOG_FILE_DIR")
    enable_file_logging: bool = Field(default=False, alias="TAPAS_ENABLE_FILE_LOGGING")

    # =====================================================================
    # Computed Properties
    # =====================================================================

    @property
    def db_path(self) -> Path:
        """Absolute path of the embedded database file."""
        return Path(self.db_dir).resolve() / self.db_name

    @property
    def database_url(self) -> str:
        """Async SQLAlchemy URL of the embedded database."""
        if self.explicit_database_url:
            return self.explicit_database_url
        return f"sqlite+aiosqlite:///{self.db_path.as_posix()}"

    @property
    def logging(self) -> LoggingConfig:
        """Get logging configuration from environment variables."""
        return LoggingConfig.model_validate(self.model_dump(by_alias=True))


settings = Settings()
