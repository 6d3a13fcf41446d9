"""Configuration schema registry.

Defines all valid configuration keys with their types, defaults and validation
rules. This is the single source of truth for the scorer weights and the
aggregation constants; nothing else in the package hardcodes them.
"""

from __future__ import annotations

from typing import Any

from .types import ConfigKey, ConfigType


def _weight(key: str, default: int, description: str) -> ConfigKey:
    return ConfigKey(
        key=key,
        config_type=ConfigType.FLOAT,
        default=float(default),
        description=description,
        min_value=0,
    )


# =============================================================================
# CONFIGURATION SCHEMA REGISTRY
#
# All configuration keys must be defined here. Unknown keys are rejected.
# =============================================================================

CONFIG_SCHEMA: dict[str, ConfigKey] = {
    # =========================================================================
    # SCORING - strict phase (exact size buckets, ALL availability)
    # =========================================================================
    "scoring.strict.experience_novelty": _weight(
        "scoring.strict.experience_novelty", 25, "Bonus when the candidate's experience level is new to the team"
    ),
    "scoring.strict.shared_case_type": _weight(
        "scoring.strict.shared_case_type", 15, "Bonus per case type shared with the team"
    ),
    "scoring.strict.unique_skill": _weight(
        "scoring.strict.unique_skill", 10, "Bonus per core strength the team does not have yet"
    ),
    "scoring.strict.availability_match": _weight(
        "scoring.strict.availability_match", 20, "Bonus when any member accepts the candidate's availability"
    ),
    "scoring.strict.unique_role": _weight(
        "scoring.strict.unique_role", 8, "Bonus per preferred role the team does not have yet"
    ),
    "scoring.strict.size_proximity": _weight(
        "scoring.strict.size_proximity", 0, "Bonus when size preference is within 1 of the team mean"
    ),
    # =========================================================================
    # SCORING - relaxed phase (flexible size, ANY availability)
    # =========================================================================
    "scoring.relaxed.experience_novelty": _weight(
        "scoring.relaxed.experience_novelty", 20, "Bonus when the candidate's experience level is new to the team"
    ),
    "scoring.relaxed.shared_case_type": _weight(
        "scoring.relaxed.shared_case_type", 12, "Bonus per case type shared with the team"
    ),
    "scoring.relaxed.unique_skill": _weight(
        "scoring.relaxed.unique_skill", 8, "Bonus per core strength the team does not have yet"
    ),
    "scoring.relaxed.availability_match": _weight(
        "scoring.relaxed.availability_match", 15, "Bonus when any member accepts the candidate's availability"
    ),
    "scoring.relaxed.unique_role": _weight(
        "scoring.relaxed.unique_role", 6, "Bonus per preferred role the team does not have yet"
    ),
    "scoring.relaxed.size_proximity": _weight(
        "scoring.relaxed.size_proximity", 10, "Bonus when size preference is within 1 of the team mean"
    ),
    # =========================================================================
    # MATCHING
    # =========================================================================
    "matching.relaxed_size_tolerance": ConfigKey(
        key="matching.relaxed_size_tolerance",
        config_type=ConfigType.INT,
        default=1,
        description="Maximum distance between preferred and target size in relaxed mode",
        min_value=0,
        max_value=2,
    ),
    "matching.max_common_case_types": ConfigKey(
        key="matching.max_common_case_types",
        config_type=ConfigType.INT,
        default=3,
        description="Maximum number of common case types reported per team",
        min_value=1,
        max_value=10,
    ),
    # =========================================================================
    # OVERFLOW PACKING
    # =========================================================================
    "overflow.min_score": ConfigKey(
        key="overflow.min_score",
        config_type=ConfigType.FLOAT,
        default=40.0,
        description="Compatibility floor for overflow-packed teams",
        min_value=0,
        max_value=100,
    ),
    "overflow.max_score": ConfigKey(
        key="overflow.max_score",
        config_type=ConfigType.FLOAT,
        default=100.0,
        description="Compatibility ceiling for overflow-packed teams",
        min_value=0,
        max_value=100,
    ),
    "overflow.default_score": ConfigKey(
        key="overflow.default_score",
        config_type=ConfigType.FLOAT,
        default=70.0,
        description="Compatibility reported when an overflow team has no member pairs",
        min_value=0,
        max_value=100,
    ),
    "overflow.size_mismatch_penalty": ConfigKey(
        key="overflow.size_mismatch_penalty",
        config_type=ConfigType.FLOAT,
        default=25.0,
        description="Preferred-size-match points lost per member of size mismatch",
        min_value=0,
        max_value=100,
    ),
    "overflow.fallback_case_type": ConfigKey(
        key="overflow.fallback_case_type",
        config_type=ConfigType.STRING,
        default="Consulting",
        description="Case type reported for overflow teams whose members listed none",
        validator=lambda value: bool(value.strip()),
    ),
}


def get_schema_key(key: str) -> ConfigKey | None:
    """
    Get the schema definition for a config key.

    Args:
        key: The dot-notation config key

    Returns:
        ConfigKey if found, None if unknown
    """
    return CONFIG_SCHEMA.get(key)


def get_all_keys() -> list[str]:
    """Get every known configuration key."""
    return list(CONFIG_SCHEMA)


def get_defaults() -> dict[str, Any]:
    """Get the default value of every known configuration key."""
    return {key: schema.default for key, schema in CONFIG_SCHEMA.items()}


def validate_key(key: str, value: Any) -> str | None:
    """
    Validate a value against its schema.

    Args:
        key: The config key
        value: The value to validate

    Returns:
        None if valid, error message if invalid
    """
    schema = CONFIG_SCHEMA.get(key)
    if schema is None:
        return f"Unknown config key: {key}"
    return schema.validate(value)
