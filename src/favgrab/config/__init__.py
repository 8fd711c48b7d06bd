"""Configuration models and loaders."""

from .config import (
    DEFAULT_RELAY_ENDPOINT,
    Config,
    LocaleConfig,
    MonitoringConfig,
    RelayConfig,
    WebConfig,
    find_config_file,
    load_config,
)

__all__ = [
    "DEFAULT_RELAY_ENDPOINT",
    "Config",
    "LocaleConfig",
    "MonitoringConfig",
    "RelayConfig",
    "WebConfig",
    "find_config_file",
    "load_config",
]
