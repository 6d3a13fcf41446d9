"""
ConfigLoader - Unified fast-fail configuration management.

Resolves configuration from (highest priority first):
    1. Environment variables (CONFIG_SCORING_STRICT_UNIQUE_SKILL=12)
    2. Explicit overrides passed to ``initialize()`` / the constructor
    3. A JSON overrides file ({"scoring.strict.unique_skill": 12})
    4. Schema defaults

Unknown keys and invalid values fail immediately; there are no silent fallbacks.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path
from typing import Any, cast

from .errors import ConfigFileError, UnknownKeyError, ValidationError
from .schema import CONFIG_SCHEMA

logger = logging.getLogger(__name__)


class ConfigLoader:
    """
    Unified configuration loader with fast-fail behavior.

    Usage:
        # Initialize at application startup (validates all overrides)
        ConfigLoader.initialize(overrides_file="matching.json")

        # Get singleton instance
        loader = ConfigLoader.get_instance()

        # Typed accessors
        tolerance = loader.get_int("matching.relaxed_size_tolerance")

        # Test substitution
        with ConfigLoader.use(ConfigLoader(overrides={"overflow.min_score": 50})):
            ...
    """

    _instance: ConfigLoader | None = None
    _initialized: bool = False

    def __init__(
        self,
        overrides: Mapping[str, Any] | None = None,
        overrides_file: str | Path | None = None,
        read_environment: bool = True,
    ):
        """
        Initialize the config loader.

        Args:
            overrides: Explicit key -> value overrides.
            overrides_file: Path to a JSON object of key -> value overrides.
            read_environment: If False, CONFIG_* environment variables are ignored.

        Raises:
            UnknownKeyError: If an override names a key missing from the schema
            ValidationError: If an override value has the wrong type or range
            ConfigFileError: If the overrides file cannot be read or parsed
        """
        self._read_environment = read_environment
        self._values: dict[str, Any] = {}

        layered: dict[str, Any] = {}
        if overrides_file is not None:
            layered.update(self._load_file(Path(overrides_file)))
        if overrides:
            layered.update(overrides)

        for key, raw_value in layered.items():
            self._values[key] = self._coerce(key, raw_value, source="override")

    @classmethod
    def initialize(
        cls,
        overrides: Mapping[str, Any] | None = None,
        overrides_file: str | Path | None = None,
    ) -> ConfigLoader:
        """
        Initialize the singleton ConfigLoader.

        Validates every override and every CONFIG_* environment variable up front.

        Returns:
            The initialized ConfigLoader instance
        """
        if cls._initialized:
            logger.debug("ConfigLoader already initialized, returning existing instance")
            return cls._instance  # type: ignore[return-value]

        instance = cls(overrides=overrides, overrides_file=overrides_file)
        instance.validate_all()

        cls._instance = instance
        cls._initialized = True
        logger.info("ConfigLoader initialized successfully")
        return instance

    @classmethod
    def get_instance(cls) -> ConfigLoader:
        """
        Get the singleton instance, initializing with defaults if needed.

        Returns:
            The ConfigLoader instance
        """
        if not cls._initialized or cls._instance is None:
            logger.debug("ConfigLoader auto-initializing (no explicit initialize() call)")
            return cls.initialize()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset singleton state. For testing only."""
        cls._instance = None
        cls._initialized = False

    @classmethod
    @contextmanager
    def use(cls, loader: ConfigLoader) -> Iterator[None]:
        """
        Temporarily replace the singleton with a custom loader.

        Args:
            loader: The loader to use temporarily.
        """
        original = cls._instance
        original_initialized = cls._initialized
        cls._instance = loader
        cls._initialized = True
        try:
            yield
        finally:
            cls._instance = original
            cls._initialized = original_initialized

    def _load_file(self, path: Path) -> dict[str, Any]:
        """Read a JSON object of overrides from disk."""
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise ConfigFileError(f"Cannot read config overrides file {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigFileError(f"Config overrides file {path} is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise ConfigFileError(f"Config overrides file {path} must contain a JSON object")

        logger.info(f"Loaded {len(data)} config overrides from {path}")
        return data

    def _coerce(self, key: str, raw_value: Any, source: str) -> Any:
        """Convert and validate a raw value for ``key``."""
        schema = CONFIG_SCHEMA.get(key)
        if schema is None:
            raise UnknownKeyError(f"Unknown config key: '{key}' (from {source})")

        try:
            typed_value = schema.convert(raw_value)
        except (ValueError, TypeError) as e:
            raise ValidationError(f"Config key '{key}' from {source} has invalid type: {e}") from e

        error = schema.validate(typed_value)
        if error:
            raise ValidationError(f"Config key '{key}' from {source}: {error}")
        return typed_value

    def _get_env_key(self, key: str) -> str:
        """Convert dot notation to environment variable name."""
        # scoring.strict.unique_skill -> CONFIG_SCORING_STRICT_UNIQUE_SKILL
        return "CONFIG_" + key.upper().replace(".", "_")

    def validate_all(self) -> None:
        """
        Validate every key as currently resolved, environment included.

        Raises:
            ValidationError: If any resolved value is invalid
        """
        for key in CONFIG_SCHEMA:
            self.get(key)

        floor, ceiling = self.get_float("overflow.min_score"), self.get_float("overflow.max_score")
        if floor > ceiling:
            raise ValidationError(f"overflow.min_score ({floor}) must not exceed overflow.max_score ({ceiling})")
        logger.debug(f"Validated {len(CONFIG_SCHEMA)} config keys")

    def get(self, key: str) -> Any:
        """
        Get a configuration value.

        Args:
            key: Configuration key (e.g., "scoring.strict.unique_skill")

        Returns:
            The typed configuration value

        Raises:
            UnknownKeyError: If key is not in schema
            ValidationError: If an environment override fails validation
        """
        if key not in CONFIG_SCHEMA:
            raise UnknownKeyError(f"Unknown config key: '{key}'")

        if self._read_environment:
            env_key = self._get_env_key(key)
            env_value = os.environ.get(env_key)
            if env_value is not None:
                return self._coerce(key, env_value, source=f"environment variable {env_key}")

        if key in self._values:
            return self._values[key]

        return CONFIG_SCHEMA[key].default

    def get_int(self, key: str) -> int:
        """Get an integer config value."""
        return cast(int, self.get(key))

    def get_float(self, key: str) -> float:
        """Get a float config value."""
        return float(self.get(key))

    def get_str(self, key: str) -> str:
        """Get a string config value."""
        return cast(str, self.get(key))

    def get_section(self, prefix: str) -> dict[str, Any]:
        """Get every key under a dotted prefix, keyed by the remaining suffix.

        Example:
            get_section("scoring.strict") -> {"unique_skill": 10.0, ...}
        """
        section_prefix = prefix.rstrip(".") + "."
        return {
            key[len(section_prefix) :]: self.get(key) for key in CONFIG_SCHEMA if key.startswith(section_prefix)
        }
