#!/usr/bin/env python3
"""
config.py
--------------------
Configuration loading for bannerdb.

Settings live in a YAML file; the database password is read from the
DB_PASSWORD environment variable only. The file is located by, in order:
    1. an explicit path (``--config`` on the command line)
    2. the BANNERDB_CONFIG environment variable
    3. built-in defaults (no file)

Values absent from the file may also come from ``BANNERDB_*`` variables
(``BANNERDB_ENV``, ``BANNERDB_LOG_DIR``) and ``BANNERDB_DB_*`` variables
for the database section (``BANNERDB_DB_HOST``, ``BANNERDB_DB_PORT``...).

Example file:

    env: local
    log_dir: logs
    database:
      host: localhost
      port: 5432
      username: postgres
      db_name: banners
      ssl_mode: disable
      max_open_conns: 100
      max_idle_conns: 2
      max_lifetime: 1h
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import os
import re
from pathlib import Path
from typing import Literal, Optional, Union

# --- Third party imports ---
import yaml
from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

# --- Local imports ---
from .exceptions import ConfigError
from .paths import CONFIG_ENV_VAR, DEFAULT_DB_URL, PASSWORD_ENV_VAR


Environment = Literal["local", "dev", "prod"]

_DURATION_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(ms|s|m|h)?\s*$")
_DURATION_UNITS = {"ms": 0.001, "s": 1.0, "m": 60.0, "h": 3600.0, None: 1.0}


def parse_duration(value: Union[str, int, float]) -> float:
    """
    Convert a duration such as ``"1h"``, ``"30m"``, ``"5s"`` or ``90`` to seconds.

    Raises:
        ValueError: If the value cannot be parsed
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid duration: {value!r}")
    if isinstance(value, (int, float)):
        if value < 0:
            raise ValueError(f"Invalid duration: {value!r}")
        return float(value)

    match = _DURATION_RE.match(str(value))
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")
    amount, unit = match.groups()
    return float(amount) * _DURATION_UNITS[unit]


def _check_pool_bounds(max_open_conns: int, max_idle_conns: int) -> None:
    if max_open_conns < 1:
        raise ValueError("max_open_conns must be at least 1")
    if max_idle_conns < 0:
        raise ValueError("max_idle_conns must not be negative")
    if max_idle_conns > max_open_conns:
        raise ValueError("max_idle_conns must not exceed max_open_conns")


class PoolSettings(BaseModel):
    """Connection pool bounds shared by every operation."""

    max_open_conns: int = 100
    max_idle_conns: int = 2
    max_lifetime: float = 3600.0

    @field_validator("max_lifetime", mode="before")
    @classmethod
    def _lifetime_seconds(cls, value):
        return parse_duration(value)

    @model_validator(mode="after")
    def _bounds(self) -> "PoolSettings":
        _check_pool_bounds(self.max_open_conns, self.max_idle_conns)
        return self

    @property
    def pool_size(self) -> int:
        return self.max_idle_conns

    @property
    def max_overflow(self) -> int:
        return self.max_open_conns - self.max_idle_conns


class DatabaseConfig(BaseSettings):
    """
    Connection settings for the relational store.

    Attributes:
        database_url: Complete SQLAlchemy URL; overrides the discrete fields
        host, port, username, db_name, ssl_mode: PostgreSQL connection fields
        driver_name: SQLAlchemy dialect+driver
        password: Taken from the DB_PASSWORD environment variable
    """

    model_config = SettingsConfigDict(env_prefix="BANNERDB_DB_", extra="forbid")

    database_url: Optional[str] = None
    host: str = "localhost"
    port: int = 5432
    username: str = "postgres"
    db_name: str = "postgres"
    ssl_mode: str = "disable"
    driver_name: str = "postgresql+psycopg"
    max_open_conns: int = 100
    max_idle_conns: int = 2
    max_lifetime: float = 3600.0
    password: Optional[str] = Field(
        default=None, validation_alias=PASSWORD_ENV_VAR, repr=False
    )

    @field_validator("max_lifetime", mode="before")
    @classmethod
    def _lifetime_seconds(cls, value):
        return parse_duration(value)

    @model_validator(mode="after")
    def _bounds(self) -> "DatabaseConfig":
        _check_pool_bounds(self.max_open_conns, self.max_idle_conns)
        return self

    @property
    def pool(self) -> PoolSettings:
        return PoolSettings(
            max_open_conns=self.max_open_conns,
            max_idle_conns=self.max_idle_conns,
            max_lifetime=self.max_lifetime,
        )

    def url(self) -> Union[str, URL]:
        """
        Build the SQLAlchemy connection URL.

        Returns:
            ``database_url`` verbatim when set, else a PostgreSQL URL
            carrying host, credentials, database name and sslmode
        """
        if self.database_url:
            return self.database_url
        return URL.create(
            drivername=self.driver_name,
            username=self.username,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.db_name,
            query={"sslmode": self.ssl_mode},
        )


class AppConfig(BaseSettings):
    """Top-level configuration. File logging stays off unless log_dir is set."""

    model_config = SettingsConfigDict(env_prefix="BANNERDB_", extra="forbid")

    env: Environment = "local"
    log_dir: Optional[Path] = None
    database: DatabaseConfig = Field(
        default_factory=lambda: DatabaseConfig(database_url=DEFAULT_DB_URL)
    )

    @field_validator("log_dir")
    @classmethod
    def _expand_log_dir(cls, value: Optional[Path]) -> Optional[Path]:
        return value.expanduser() if value is not None else None


def load_config(path: Optional[Union[str, Path]] = None) -> AppConfig:
    """
    Load configuration from YAML.

    Args:
        path: Config file path; falls back to $BANNERDB_CONFIG, then defaults

    Returns:
        Populated AppConfig

    Raises:
        ConfigError: If the file is missing, unreadable or invalid
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR) or None
    if path is None:
        try:
            return AppConfig()
        except PydanticValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

    config_path = Path(path).expanduser()
    if not config_path.is_file():
        raise ConfigError(f"Config file does not exist: {config_path}")

    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read config {config_path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"Config root must be a mapping: {config_path}")

    database_raw = raw.pop("database", None) or {}
    if not isinstance(database_raw, dict):
        raise ConfigError("'database' section must be a mapping")
    if any(str(key).lower() == PASSWORD_ENV_VAR.lower() for key in database_raw):
        raise ConfigError(f"{PASSWORD_ENV_VAR} must come from the environment")

    try:
        config = AppConfig(**{str(k): v for k, v in raw.items()})
        config.database = DatabaseConfig(**{str(k): v for k, v in database_raw.items()})
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid config {config_path}: {e}") from e
    return config
