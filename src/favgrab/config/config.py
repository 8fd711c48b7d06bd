"""
Configuration management for favgrab using Pydantic.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from favgrab.i18n import MESSAGES

# --- Setup Logging ---
log = logging.getLogger(__name__)

DEFAULT_RELAY_ENDPOINT = "https://api.allorigins.win/get"

# --- Nested Configuration Models ---


class RelayConfig(BaseModel):
    """CORS relay used to fetch target pages."""

    endpoint: str = Field(default=DEFAULT_RELAY_ENDPOINT, description="Relay URL taking a ?url= parameter.")
    timeout: float | None = Field(
        default=None,
        gt=0,
        description="Total request timeout in seconds. None keeps the HTTP client default.",
    )
    user_agent: str = Field(
        default="favgrab/0.1 (+https://github.com/favgrab/favgrab)",
        description="User-Agent string sent to the relay.",
    )

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        if not v.lower().startswith(("http://", "https://")):
            raise ValueError("relay endpoint must be an http(s) URL")
        return v


class LocaleConfig(BaseModel):
    """Language used for fallback and error messages."""

    default: str = Field(default="en", description="Locale used when none is requested.")
    fallback: str = Field(default="en", description="Locale consulted for missing keys.")

    @field_validator("default", "fallback")
    @classmethod
    def validate_locale(cls, v: str) -> str:
        if v not in MESSAGES:
            raise ValueError(f"unknown locale {v!r}, expected one of {sorted(MESSAGES)}")
        return v


class WebConfig(BaseModel):
    """Configuration for the JSON web service."""

    host: str = Field(default="127.0.0.1", description="Host for the web server.")
    port: int = Field(default=8000, ge=1, le=65535, description="Port for the web server.")


class MonitoringConfig(BaseModel):
    """Logging configuration."""

    log_level: str = Field(default="INFO", description="Logging level (e.g., DEBUG, INFO, WARNING).")
    log_file: str | None = Field(default=None, description="Path to log file. If None, logs to console.")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"invalid log level {v!r}")
        return level

    @field_validator("log_file", mode="before")
    @classmethod
    def create_parent_dir(cls, v: str | Path | None) -> str | None:
        if v is None:
            return None
        path = Path(v)
        path.parent.mkdir(parents=True, exist_ok=True)
        return str(path)


# --- Main Configuration Class ---


class Config(BaseSettings):
    project_name: str = "favgrab"
    relay: RelayConfig = Field(default_factory=RelayConfig)
    locale: LocaleConfig = Field(default_factory=LocaleConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)
    web: WebConfig = Field(default_factory=WebConfig)

    model_config = SettingsConfigDict(env_prefix="FAVGRAB_", env_nested_delimiter="__", case_sensitive=False)

    @classmethod
    def from_yaml(cls, path: Path) -> Config:
        log.debug("Loading configuration from YAML file: %s", path)
        if not path.is_file():
            raise FileNotFoundError(f"Configuration file not found or is not a file: {path}")
        with open(path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
        if not yaml_data:
            log.warning("Configuration file is empty: %s. Using default settings.", path)
            return cls.model_validate({})
        return cls.model_validate(yaml_data)


def find_config_file() -> Path | None:
    current_dir = Path.cwd()
    for name in ("favgrab.yaml", "favgrab.yml"):
        path = current_dir / name
        if path.exists():
            return path
    return None


def load_config(path: Path | None = None) -> Config:
    """Load configuration from ``path``, a discovered file, or defaults."""
    if path is None:
        path = find_config_file()
    if path is None:
        return Config()
    return Config.from_yaml(path)

