"""
Base types and context for the matching pipeline.

Provides the MatchContext dataclass that holds the per-run settings every
stage (filters, builder, orchestrator, packer, aggregator) needs.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from .logging import MatchTrace
from .scoring import ScoringWeights

if TYPE_CHECKING:
    from matchmaking.config import ConfigLoader

IdFactory = Callable[[], str]


def default_id_factory() -> str:
    """Generate a random team id."""
    return str(uuid.uuid4())


class MatchMode(str, Enum):
    """Constraint tier for a whole run."""

    STRICT = "strict"
    RELAXED = "relaxed"


@dataclass
class MatchContext:
    """
    Shared context passed through one matching run.

    Holds only read-only settings plus the trace; the candidate pool is owned
    by the stage currently draining it and is never stored here.
    """

    mode: MatchMode
    strict_weights: ScoringWeights
    relaxed_weights: ScoringWeights
    size_tolerance: int = 1
    max_common_case_types: int = 3
    overflow_min_score: float = 40.0
    overflow_max_score: float = 100.0
    overflow_default_score: float = 70.0
    overflow_size_penalty: float = 25.0
    overflow_fallback_case_type: str = "Consulting"
    id_factory: IdFactory = default_id_factory
    trace: MatchTrace = field(default_factory=MatchTrace)

    @property
    def relaxed(self) -> bool:
        return self.mode is MatchMode.RELAXED

    @classmethod
    def from_config(
        cls,
        config: ConfigLoader,
        mode: MatchMode,
        id_factory: IdFactory | None = None,
        trace: MatchTrace | None = None,
    ) -> MatchContext:
        """Build a context from the configuration service."""
        return cls(
            mode=mode,
            strict_weights=ScoringWeights.from_config(config, "strict"),
            relaxed_weights=ScoringWeights.from_config(config, "relaxed"),
            size_tolerance=config.get_int("matching.relaxed_size_tolerance"),
            max_common_case_types=config.get_int("matching.max_common_case_types"),
            overflow_min_score=config.get_float("overflow.min_score"),
            overflow_max_score=config.get_float("overflow.max_score"),
            overflow_default_score=config.get_float("overflow.default_score"),
            overflow_size_penalty=config.get_float("overflow.size_mismatch_penalty"),
            overflow_fallback_case_type=config.get_str("overflow.fallback_case_type"),
            id_factory=id_factory or default_id_factory,
            trace=trace or MatchTrace(),
        )

    def size_eligible(self, preferred_size: int, target_size: int) -> bool:
        """Check a size preference against a bucket's target size for this run's mode."""
        if self.relaxed:
            return abs(preferred_size - target_size) <= self.size_tolerance
        return preferred_size == target_size
