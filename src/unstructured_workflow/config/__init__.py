"""Configuration module for the Unstructured workflow client."""

from .logging import JSONFormatter, SanitizingFilter, TextFormatter, configure_logging
from .settings import DEFAULT_API_URL, Settings, get_settings

__all__ = [
    "DEFAULT_API_URL",
    "Settings",
    "get_settings",
    "configure_logging",
    "JSONFormatter",
    "TextFormatter",
    "SanitizingFilter",
]
