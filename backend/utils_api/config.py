"""
Application configuration loader and validation.

Settings come from an optional ``config.yaml`` file and are overlaid with a
small set of environment variables so deployments can inject secrets and the
release version without editing files.  Validation happens once at startup;
any failure raises :class:`ConfigError` and aborts the boot.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .core.exceptions import ConfigError

# Environment variable -> (section, key)
ENV_OVERRIDES: Dict[str, tuple[str, str]] = {
    "APP_VERSION": ("app", "version"),
    "APP_ENV": ("app", "environment"),
    "DATABASE_URL": ("database", "url"),
    "ALLOWED_CORS": ("security", "allowed_cors"),
    "REQUEST_LIMIT": ("security", "request_limit"),
    "SWAGGER_ENVS": ("swagger", "environments"),
    "SWAGGER_USER": ("swagger", "user"),
    "SWAGGER_PASSWORD": ("swagger", "password"),
    "LOG_LEVEL": ("server", "log_level"),
}

_LIST_KEYS = {"ALLOWED_CORS", "SWAGGER_ENVS"}
_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}


class ApplicationConfig(BaseModel):
    name: str = "Utils API"
    description: str = "Generic CRUD backend scaffold"
    version: str
    environment: str = "development"

    @field_validator("version")
    @classmethod
    def validate_version(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("APP_VERSION must be a non-empty string")
        return value


class DatabaseConfig(BaseModel):
    url: str = "sqlite+aiosqlite:///./data/app.db"
    echo: bool = False
    synchronize: bool = True
    sqlite_pragmas: Dict[str, Any] = Field(
        default_factory=lambda: {"journal_mode": "WAL", "synchronous": "NORMAL", "foreign_keys": "ON"}
    )


class SecurityConfig(BaseModel):
    allowed_cors: List[str] = Field(default_factory=list)
    request_limit: int = Field(default=1000, gt=0)
    rate_limit_window_seconds: int = Field(default=60, gt=0)


class SwaggerConfig(BaseModel):
    environments: List[str] = Field(default_factory=list)
    user: Optional[str] = None
    password: Optional[str] = Field(default=None, repr=False)

    @model_validator(mode="after")
    def validate_credentials(self) -> "SwaggerConfig":
        if self.environments and not (self.user and self.password):
            raise ValueError("swagger user and password must be set when swagger environments are protected")
        return self

    def protects(self, environment: str) -> bool:
        return environment in self.environments


class ServerConfig(BaseModel):
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value}")
        return level


class AppConfig(BaseModel):
    app: ApplicationConfig
    database: DatabaseConfig = DatabaseConfig()
    security: SecurityConfig = SecurityConfig()
    swagger: SwaggerConfig = SwaggerConfig()
    server: ServerConfig = ServerConfig()


def _split_list(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def apply_env_overrides(raw: Dict[str, Any], environ: Mapping[str, str]) -> Dict[str, Any]:
    merged: Dict[str, Any] = {}
    for section, values in raw.items():
        if values is None:
            values = {}
        merged[section] = dict(values) if isinstance(values, Mapping) else values
    for env_name, (section, key) in ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if value is None:
            continue
        merged.setdefault(section, {})[key] = _split_list(value) if env_name in _LIST_KEYS else value
    return merged


def load_config(
    path: Path | str | None = None,
    environ: Mapping[str, str] | None = None,
) -> AppConfig:
    """
    Load and validate the application configuration.

    Parameters
    ----------
    path:
        Optional YAML file.  When given it must exist.
    environ:
        Mapping used for overrides, ``os.environ`` by default.
    """

    raw_config: Dict[str, Any] = {}
    if path is not None:
        path_obj = Path(path)
        if not path_obj.exists():
            raise ConfigError(f"Configuration file not found: {path_obj}")
        with path_obj.open("r", encoding="utf-8") as file:
            loaded = yaml.safe_load(file) or {}
        if not isinstance(loaded, dict):
            raise ConfigError(f"Configuration file must contain a mapping: {path_obj}")
        raw_config = loaded

    merged = apply_env_overrides(raw_config, os.environ if environ is None else environ)
    try:
        return AppConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
