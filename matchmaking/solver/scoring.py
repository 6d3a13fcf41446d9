"""Anti-bias scoring - how desirable is adding one candidate to a partial team.

The score rewards what the candidate adds to the team rather than how similar
they are to it:

1. A new experience level (experience diversity)
2. Case types the candidate shares with the team (something to compete on together)
3. Core strengths the team does not have yet (skill diversity)
4. An availability some member accepts (schedules can overlap)
5. Preferred roles the team does not have yet (role diversity)
6. A size preference close to the team's (relaxed phase only)

Two weight sets exist: the strict phase and the relaxed phase. Both are read
from configuration so there is exactly one place where weights live.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, fields
from typing import TYPE_CHECKING, Any, Literal

from matchmaking.config.schema import get_defaults
from matchmaking.logging_config import TRACE

from .availability import accepted_by_any

if TYPE_CHECKING:
    from matchmaking.config import ConfigLoader
    from matchmaking.models import Participant

logger = logging.getLogger(__name__)

ScoringPhase = Literal["strict", "relaxed"]
Scorer = Callable[[Sequence["Participant"], "Participant"], float]


@dataclass(frozen=True)
class ScoringWeights:
    """Weights for one scoring phase."""

    experience_novelty: float
    shared_case_type: float
    unique_skill: float
    availability_match: float
    unique_role: float
    size_proximity: float = 0.0

    @classmethod
    def from_mapping(cls, section: Mapping[str, Any]) -> ScoringWeights:
        """Build weights from a ``{"unique_skill": 10, ...}`` mapping."""
        return cls(**{f.name: float(section[f.name]) for f in fields(cls)})

    @classmethod
    def from_config(cls, config: ConfigLoader, phase: ScoringPhase) -> ScoringWeights:
        """Build the weights for ``phase`` from the ``scoring.<phase>.*`` keys."""
        return cls.from_mapping(config.get_section(f"scoring.{phase}"))

    @classmethod
    def defaults(cls, phase: ScoringPhase) -> ScoringWeights:
        """Build the schema-default weights for ``phase``."""
        prefix = f"scoring.{phase}."
        return cls.from_mapping(
            {key[len(prefix) :]: value for key, value in get_defaults().items() if key.startswith(prefix)}
        )


STRICT_WEIGHTS = ScoringWeights.defaults("strict")
RELAXED_WEIGHTS = ScoringWeights.defaults("relaxed")


def calculate_score(team: Sequence[Participant], candidate: Participant, weights: ScoringWeights) -> float:
    """Score adding ``candidate`` to ``team``. Higher is better, never negative.

    Args:
        team: Current (partial) team members
        candidate: The participant being considered
        weights: Phase weights

    Returns:
        Non-negative score
    """
    score = 0.0

    if candidate.experience not in {member.experience for member in team}:
        score += weights.experience_novelty

    team_case_types = {case for member in team for case in member.case_preferences}
    shared_cases = sum(1 for case in candidate.case_preferences if case in team_case_types)
    score += shared_cases * weights.shared_case_type

    team_skills = {skill for member in team for skill in member.core_strengths}
    unique_skills = sum(1 for skill in candidate.core_strengths if skill not in team_skills)
    score += unique_skills * weights.unique_skill

    if accepted_by_any(team, candidate):
        score += weights.availability_match

    team_roles = {role for member in team for role in member.preferred_roles}
    unique_roles = sum(1 for role in candidate.preferred_roles if role not in team_roles)
    score += unique_roles * weights.unique_role

    if weights.size_proximity and team:
        mean_size = sum(member.preferred_team_size for member in team) / len(team)
        if abs(candidate.preferred_team_size - mean_size) <= 1:
            score += weights.size_proximity

    return score


def strict_score(team: Sequence[Participant], candidate: Participant) -> float:
    """Score with the default strict-phase weights."""
    return calculate_score(team, candidate, STRICT_WEIGHTS)


def relaxed_score(team: Sequence[Participant], candidate: Participant) -> float:
    """Score with the default relaxed-phase weights."""
    return calculate_score(team, candidate, RELAXED_WEIGHTS)


def make_scorer(weights: ScoringWeights) -> Scorer:
    """Bind a weight set into a two-argument scorer."""

    def scorer(team: Sequence[Participant], candidate: Participant) -> float:
        return calculate_score(team, candidate, weights)

    return scorer


def select_best_candidate(
    team: Sequence[Participant],
    candidates: Sequence[Participant],
    scorer: Scorer,
) -> Participant | None:
    """Pick the highest-scoring candidate.

    Ties go to the candidate seen first, so the result depends only on the
    order of ``candidates``.

    Returns:
        The winning candidate, or None if there are no candidates
    """
    best: Participant | None = None
    best_score = -1.0

    for candidate in candidates:
        score = scorer(team, candidate)
        if logger.isEnabledFor(TRACE):
            logger.log(TRACE, f"  candidate {candidate.id} scored {score}")
        if score > best_score:
            best_score = score
            best = candidate

    return best
