"""Solution Analysis - Team summaries and run statistics.

All functions are pure apart from drawing a team id from the context's id
factory. They take explicit parameters so they can be tested without running
the matcher.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from itertools import combinations
from typing import TYPE_CHECKING

from matchmaking.models import MatchingStatistics, Participant, Team, TeamFormation

from .scoring import ScoringWeights, calculate_score

if TYPE_CHECKING:
    from .base import MatchContext

ANTI_BIAS_LABEL = "Anti-bias optimized"
OVERFLOW_LABEL = "Relaxed constraints optimized"
OVERFLOW_ID_PREFIX = "relaxed-"


def mean_pairwise_score(members: Sequence[Participant], weights: ScoringWeights) -> float | None:
    """Average score over every member pair, each scored as a two-person team.

    Returns:
        The mean, or None when there are fewer than two members
    """
    scores = [calculate_score([first], second, weights) for first, second in combinations(members, 2)]
    if not scores:
        return None
    return sum(scores) / len(scores)


def common_case_types(members: Sequence[Participant], min_members: int, limit: int) -> tuple[str, ...]:
    """Case types listed by at least ``min_members`` members, first-seen order, at most ``limit``."""
    counts = Counter(case for member in members for case in member.case_preferences)
    return tuple(case for case, count in counts.items() if count >= min_members)[:limit]


def average_experience(members: Sequence[Participant]) -> float:
    """Mean experience rank (0 = none, 3 = finalist/winner)."""
    if not members:
        return 0.0
    return sum(member.experience.rank for member in members) / len(members)


def create_team(members: Sequence[Participant], ctx: MatchContext, formation: TeamFormation) -> Team:
    """Summarize a team built by the anchor-and-fill builder.

    Compatibility is the mean pairwise strict score clamped to [0, 100].
    """
    size = len(members)
    pairwise = mean_pairwise_score(members, ctx.strict_weights)
    compatibility = min(100.0, max(0.0, pairwise if pairwise is not None else 0.0))

    size_matches = sum(1 for member in members if member.preferred_team_size == size)

    return Team(
        id=ctx.id_factory(),
        members=tuple(members),
        team_size=size,
        compatibility_score=compatibility,
        average_experience=average_experience(members),
        common_case_types=common_case_types(members, min_members=2, limit=ctx.max_common_case_types),
        work_style_compatibility=ANTI_BIAS_LABEL,
        formation=formation,
        preferred_team_size_match=size_matches / size * 100,
    )


def create_overflow_team(members: Sequence[Participant], ctx: MatchContext) -> Team:
    """Summarize a team packed by the overflow pass.

    Compatibility is the mean pairwise relaxed score clamped to the overflow
    range; the size match decays with the distance between the members'
    mean preference and the actual size.
    """
    size = len(members)
    pairwise = mean_pairwise_score(members, ctx.relaxed_weights)
    if pairwise is None:
        compatibility = ctx.overflow_default_score
    else:
        compatibility = min(ctx.overflow_max_score, max(ctx.overflow_min_score, pairwise))

    case_types = common_case_types(members, min_members=1, limit=ctx.max_common_case_types)
    mean_preference = sum(member.preferred_team_size for member in members) / size

    return Team(
        id=f"{OVERFLOW_ID_PREFIX}{ctx.id_factory()}",
        members=tuple(members),
        team_size=size,
        compatibility_score=compatibility,
        average_experience=average_experience(members),
        common_case_types=case_types or (ctx.overflow_fallback_case_type,),
        work_style_compatibility=OVERFLOW_LABEL,
        formation=TeamFormation.OVERFLOW,
        preferred_team_size_match=max(0.0, 100 - abs(mean_preference - size) * ctx.overflow_size_penalty),
    )


def calculate_team_size_distribution(teams: Sequence[Team]) -> dict[int, int]:
    """Count teams per team size."""
    return dict(Counter(team.team_size for team in teams))


def calculate_case_type_distribution(teams: Sequence[Team]) -> dict[str, int]:
    """Count teams listing each case type as common."""
    return dict(Counter(case for team in teams for case in team.common_case_types))


def calculate_statistics(
    total_participants: int,
    teams: Sequence[Team],
    unmatched: Sequence[Participant],
) -> MatchingStatistics:
    """Build the run statistics. Every figure is 0 for an empty run."""
    teams_formed = len(teams)
    average_team_size = sum(team.team_size for team in teams) / teams_formed if teams_formed else 0.0
    efficiency = (
        (total_participants - len(unmatched)) / total_participants * 100 if total_participants else 0.0
    )

    return MatchingStatistics(
        total_participants=total_participants,
        teams_formed=teams_formed,
        average_team_size=average_team_size,
        matching_efficiency=efficiency,
        team_size_distribution=calculate_team_size_distribution(teams),
        case_type_distribution=calculate_case_type_distribution(teams),
    )
