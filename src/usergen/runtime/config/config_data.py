"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, computed_field, model_validator


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    url: str = Field(
        default="sqlite:///./users.db",
        description="Database connection URL",
    )
    echo: bool = Field(default=False, description="Echo SQL statements")
    sqlite_timeout: int = Field(
        default=20, description="SQLite lock timeout in seconds"
    )

    @computed_field
    @property
    def is_sqlite(self) -> bool:
        """Whether the configured backend is SQLite."""
        from sqlalchemy.engine import make_url

        return make_url(self.url).get_backend_name() == "sqlite"

    @computed_field
    @property
    def connection_string(self) -> str:
        """Normalized connection string passed to the engine."""
        from sqlalchemy.engine import make_url

        return make_url(self.url).render_as_string(hide_password=False)


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="plain", description="Log format")
    file: str | None = Field(default=None, description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class GeneratorConfig(BaseModel):
    """Synthetic user generation settings."""

    count: int = Field(default=10, ge=0, description="Users generated per run")
    min_age: int = Field(default=14, ge=0, description="Minimum accepted age")
    max_age: int = Field(
        default=80, description="Upper bound (exclusive) for the sampled age"
    )
    attempts_factor: int = Field(
        default=3, ge=1, description="Attempts allowed per requested user"
    )
    seed: int | None = Field(default=None, description="Random seed, None for entropy")

    @model_validator(mode="after")
    def _check_age_bounds(self) -> GeneratorConfig:
        if self.max_age <= self.min_age:
            raise ValueError("max_age must be greater than min_age")
        return self


class CliConfig(BaseModel):
    """Console behaviour."""

    wait_for_key: bool = Field(
        default=True, description="Wait for a keypress before exiting"
    )


class ConfigData(BaseModel):
    """Root configuration model."""

    app: AppConfig = Field(default_factory=AppConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    generator: GeneratorConfig = Field(default_factory=GeneratorConfig)
    cli: CliConfig = Field(default_factory=CliConfig)
