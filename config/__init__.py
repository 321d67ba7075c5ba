"""Configuration module for the Q&A forum."""

from .settings import config, DatabaseConfig, APIConfig, AppConfig, Config
from .constants import (
    PARAM_TAG,
    PARAM_KEYWORD,
    PARAM_IS_RESOLVED,
    LIST_SEPARATOR,
    RESOLVED_OPTIONS,
    DATE_DISPLAY_FORMAT,
    parse_resolved,
    format_resolved,
)

__all__ = [
    # Settings
    "config",
    "DatabaseConfig",
    "APIConfig",
    "AppConfig",
    "Config",
    # Constants
    "PARAM_TAG",
    "PARAM_KEYWORD",
    "PARAM_IS_RESOLVED",
    "LIST_SEPARATOR",
    "RESOLVED_OPTIONS",
    "DATE_DISPLAY_FORMAT",
    "parse_resolved",
    "format_resolved",
]
