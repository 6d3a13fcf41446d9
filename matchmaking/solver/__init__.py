"""
Matching Solver - greedy anchor-and-fill team formation.

This package contains:
- TeamMatchingSolver: Main solver class (cohort split, size buckets, overflow)
- MatchTrace: Structured record of filter and build decisions
- Scoring: Anti-bias candidate scoring with configurable weights
- Filters: Strict and relaxed candidate filter chains
- Solution analysis: Team summaries and run statistics
"""

from .base import MatchContext, MatchMode, default_id_factory
from .logging import MatchTrace
from .matcher import TeamMatchingSolver, match_participants_to_teams
from .scoring import RELAXED_WEIGHTS, STRICT_WEIGHTS, ScoringWeights, calculate_score
from .solution import calculate_statistics, create_overflow_team, create_team

__all__ = [
    "MatchContext",
    "MatchMode",
    "MatchTrace",
    "TeamMatchingSolver",
    "default_id_factory",
    "match_participants_to_teams",
    # Scoring
    "RELAXED_WEIGHTS",
    "STRICT_WEIGHTS",
    "ScoringWeights",
    "calculate_score",
    # Solution analysis functions
    "calculate_statistics",
    "create_overflow_team",
    "create_team",
]
