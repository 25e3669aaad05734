"""
Configuration module for page-digest.

Provides Pydantic-based settings management with YAML file support
and environment variable overrides.
"""

from page_digest.config.settings import (
    Settings,
    ExtractionSettings,
    FetchSettings,
    LoggingSettings,
)
from page_digest.config.loader import (
    load_config,
    get_settings,
    reset_settings,
    get_default_config_path,
)

__all__ = [
    "Settings",
    "ExtractionSettings",
    "FetchSettings",
    "LoggingSettings",
    "load_config",
    "get_settings",
    "reset_settings",
    "get_default_config_path",
]
