"""
Candidate filters - narrow the candidates for the next seat on a team.

Strict chain (each stage must leave someone, or the step fails):
1. Size preference equals the target size
2. Availability accepted by ALL current members
3. Case-type novelty, falling back to the relaxed case filter when nobody
   brings a new case type

Relaxed chain:
1. Size preference within the tolerance of the target size
2. Availability accepted by ANY current member - skipped, not failed, when
   it would leave nobody
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from .availability import accepted_by_all, accepted_by_any

if TYPE_CHECKING:
    from matchmaking.models import Participant

    from .base import MatchContext

logger = logging.getLogger(__name__)

# Below this size the relaxed case filter keeps every candidate
RELAXED_CASE_MIN_TEAM = 3


def _team_case_types(team: Sequence[Participant]) -> set[str]:
    return {case for member in team for case in member.case_preferences}


def filter_by_exact_size(candidates: Sequence[Participant], target_size: int) -> list[Participant]:
    """Keep candidates whose preferred team size is exactly ``target_size``."""
    return [c for c in candidates if c.preferred_team_size == target_size]


def filter_by_flexible_size(
    candidates: Sequence[Participant], target_size: int, tolerance: int = 1
) -> list[Participant]:
    """Keep candidates whose preferred team size is within ``tolerance`` of ``target_size``."""
    return [c for c in candidates if abs(c.preferred_team_size - target_size) <= tolerance]


def filter_by_strict_availability(team: Sequence[Participant], candidates: Sequence[Participant]) -> list[Participant]:
    """Keep candidates every current member accepts."""
    if not team:
        return list(candidates)
    return [c for c in candidates if accepted_by_all(team, c)]


def filter_by_flexible_availability(
    team: Sequence[Participant], candidates: Sequence[Participant]
) -> list[Participant]:
    """Keep candidates at least one current member accepts."""
    if not team:
        return list(candidates)
    return [c for c in candidates if accepted_by_any(team, c)]


def filter_by_case_diversity(team: Sequence[Participant], candidates: Sequence[Participant]) -> list[Participant]:
    """Keep candidates bringing at least one case type the team does not have.

    A no-op for an empty team or a team with no case types at all.
    """
    team_cases = _team_case_types(team)
    if not team or not team_cases:
        return list(candidates)
    return [c for c in candidates if any(case not in team_cases for case in c.case_preferences)]


def filter_by_case_relaxed(team: Sequence[Participant], candidates: Sequence[Participant]) -> list[Participant]:
    """Keep candidates sharing a case type with the team.

    Everyone passes while the team has fewer than three members, and for a
    team with no case types at all.
    """
    team_cases = _team_case_types(team)
    if not team or not team_cases or len(team) < RELAXED_CASE_MIN_TEAM:
        return list(candidates)
    return [c for c in candidates if any(case in team_cases for case in c.case_preferences)]


def strict_candidates(
    team: Sequence[Participant],
    candidates: Sequence[Participant],
    target_size: int,
    ctx: MatchContext,
) -> list[Participant]:
    """Run the strict filter chain.

    Returns:
        Surviving candidates in input order; empty when the step fails
    """
    trace = ctx.trace

    sized = filter_by_exact_size(candidates, target_size)
    trace.log_filter_stage("exact_size", target_size, len(candidates), len(sized))
    if not sized:
        logger.debug(f"No candidates prefer team size {target_size}")
        return []

    available = filter_by_strict_availability(team, sized)
    trace.log_filter_stage("strict_availability", target_size, len(sized), len(available))
    if not available:
        logger.debug("No candidates with availability compatible with every member")
        return []

    diverse = filter_by_case_diversity(team, available)
    trace.log_filter_stage("case_diversity", target_size, len(available), len(diverse))
    if diverse:
        return diverse

    logger.debug("No candidates add a new case type, trying relaxed case filter")
    shared = filter_by_case_relaxed(team, available)
    trace.log_filter_stage("case_relaxed", target_size, len(available), len(shared))
    if not shared:
        logger.debug("No candidates even with relaxed case filter")
    return shared


def relaxed_candidates(
    team: Sequence[Participant],
    candidates: Sequence[Participant],
    target_size: int,
    ctx: MatchContext,
) -> list[Participant]:
    """Run the relaxed filter chain.

    Returns:
        Surviving candidates in input order; empty only when no size preference fits
    """
    trace = ctx.trace

    sized = filter_by_flexible_size(candidates, target_size, ctx.size_tolerance)
    trace.log_filter_stage("flexible_size", target_size, len(candidates), len(sized))
    if not sized:
        logger.debug(f"No candidates within {ctx.size_tolerance} of team size {target_size}")
        return []

    available = filter_by_flexible_availability(team, sized)
    trace.log_filter_stage("flexible_availability", target_size, len(sized), len(available))
    if not available:
        logger.debug("No candidates with flexible availability, using all size-compatible candidates")
        return sized
    return available
