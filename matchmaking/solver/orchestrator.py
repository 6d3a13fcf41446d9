"""
Size-bucket orchestration for one cohort.

Participants are sorted by experience (most experienced first) and split by
their preferred team size. Each bucket (2, then 3, then 4) is drained by the
team builder until the first failed build. Whatever is left in the three
buckets becomes the cohort's leftover set, which the overflow packer may
still group in relaxed mode.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from matchmaking.models import TEAM_SIZES, Participant, Team

from .overflow import pack_overflow
from .pool import CandidatePool
from .team_builder import build_team

if TYPE_CHECKING:
    from .base import MatchContext

logger = logging.getLogger(__name__)


@dataclass
class FormationResult:
    """Teams formed by one stage and the participants it could not place."""

    teams: list[Team] = field(default_factory=list)
    unmatched: list[Participant] = field(default_factory=list)

    def extend(self, other: FormationResult) -> None:
        self.teams.extend(other.teams)
        self.unmatched.extend(other.unmatched)


def sort_by_experience(participants: Sequence[Participant]) -> list[Participant]:
    """Most experienced first; equal experience keeps input order."""
    return sorted(participants, key=lambda p: p.experience.rank, reverse=True)


def form_teams_by_size(
    participants: Sequence[Participant],
    target_size: int,
    ctx: MatchContext,
    cohort: str = "",
) -> FormationResult:
    """Repeatedly build ``target_size`` teams until a build fails.

    Every success removes exactly ``target_size`` members from the pool.

    Args:
        participants: The bucket's participants, best anchor first
        target_size: Team size for this bucket
        ctx: Run context
        cohort: Cohort label for logging

    Returns:
        Teams formed and the bucket's remaining participants
    """
    pool = CandidatePool(participants)
    teams: list[Team] = []

    while len(pool) >= target_size:
        team = build_team(pool.snapshot(), target_size, ctx)
        if team is None:
            logger.debug(f"Cannot form more {target_size}-member teams with {ctx.mode.value} constraints")
            break

        removed = pool.remove(team.members)
        if removed != target_size:
            raise RuntimeError(f"Team {team.id} drained {removed} participants from the pool, expected {target_size}")
        teams.append(team)
        logger.debug(f"Formed {ctx.mode.value.upper()} {target_size}-member team {team.id}")

    ctx.trace.log_bucket_exhausted(cohort, target_size, teams=len(teams), unmatched=len(pool))
    return FormationResult(teams=teams, unmatched=pool.snapshot())


def form_cohort_teams(participants: Sequence[Participant], ctx: MatchContext, cohort: str = "") -> FormationResult:
    """Form every team for one cohort.

    Args:
        participants: The cohort's participants in input order
        ctx: Run context
        cohort: Cohort label for logging

    Returns:
        Bucket teams (size 2, then 3, then 4), overflow teams, and leftovers
    """
    result = FormationResult()
    if not participants:
        return result

    ordered = sort_by_experience(participants)
    buckets = {size: [p for p in ordered if p.preferred_team_size == size] for size in TEAM_SIZES}
    logger.info(
        f"[{cohort or 'cohort'}] Forming teams from {len(ordered)} participants; size preferences: "
        + ", ".join(f"{size}={len(members)}" for size, members in buckets.items())
    )

    for size, members in buckets.items():
        result.extend(form_teams_by_size(members, size, ctx, cohort))

    if ctx.relaxed and len(result.unmatched) >= 2:
        logger.info(f"[{cohort or 'cohort'}] Packing {len(result.unmatched)} leftover participants")
        overflow_teams, leftovers = pack_overflow(result.unmatched, ctx)
        result.teams.extend(overflow_teams)
        result.unmatched = leftovers
    elif result.unmatched:
        logger.info(f"[{cohort or 'cohort'}] {len(result.unmatched)} participants remain unmatched")

    return result
