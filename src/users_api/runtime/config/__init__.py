"""Configuration models and loaders."""

from .config_data import (
    AppConfig,
    ConfigData,
    CORSConfig,
    DatabaseConfig,
    LoggingConfig,
    PaginationConfig,
)

__all__ = [
    "AppConfig",
    "ConfigData",
    "CORSConfig",
    "DatabaseConfig",
    "LoggingConfig",
    "PaginationConfig",
]
