"""
Unified configuration management for the matchmaking system.

This module provides a fast-fail configuration system: every key is declared
in the schema with a type, a default and validation rules, and overrides are
validated as soon as they are supplied.

Usage:
    from matchmaking.config import ConfigLoader, ConfigError

    # Initialize at application startup
    ConfigLoader.initialize(overrides_file="matching.json")

    # Get singleton instance
    config = ConfigLoader.get_instance()

    # Typed accessors
    floor = config.get_float("overflow.min_score")
    tolerance = config.get_int("matching.relaxed_size_tolerance")
"""

from __future__ import annotations

from .errors import (
    ConfigError,
    ConfigFileError,
    UnknownKeyError,
    ValidationError,
)
from .loader import ConfigLoader
from .schema import CONFIG_SCHEMA, get_all_keys, get_defaults, get_schema_key, validate_key
from .types import ConfigKey, ConfigType

__all__ = [
    # Main loader
    "ConfigLoader",
    # Error classes
    "ConfigError",
    "ConfigFileError",
    "UnknownKeyError",
    "ValidationError",
    # Schema
    "CONFIG_SCHEMA",
    "get_all_keys",
    "get_defaults",
    "get_schema_key",
    "validate_key",
    # Types
    "ConfigKey",
    "ConfigType",
]
