"""Configuration error classes.

All config-related exceptions for fast-fail behavior.
"""

from __future__ import annotations


class ConfigError(Exception):
    """Base exception for configuration errors."""

    pass


class ValidationError(ConfigError):
    """Raised when a config value fails validation."""

    pass


class UnknownKeyError(ConfigError):
    """Raised when an unknown config key is requested or overridden."""

    pass


class ConfigFileError(ConfigError):
    """Raised when an overrides file cannot be read or parsed."""

    pass
