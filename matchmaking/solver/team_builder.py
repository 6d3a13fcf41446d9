"""
Team Builder - grow one team to an exact size by anchor-and-fill.

1. Keep the candidates eligible for the target size (exact preference in
   strict mode, within tolerance in relaxed mode)
2. The first eligible candidate anchors the team
3. Fill each remaining seat with the best-scoring survivor of the filter chain
4. If any seat cannot be filled, give up - no partial teams

A failed attempt is final for the caller; there is no retry with another anchor.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from matchmaking.models import Participant, Team, TeamFormation

from .filters import relaxed_candidates, strict_candidates
from .scoring import make_scorer, select_best_candidate
from .solution import create_team

if TYPE_CHECKING:
    from .base import MatchContext

logger = logging.getLogger(__name__)


def select_team_members(
    candidates: Sequence[Participant],
    target_size: int,
    ctx: MatchContext,
) -> list[Participant] | None:
    """Pick exactly ``target_size`` members from ``candidates``.

    Args:
        candidates: Available participants, best anchor first
        target_size: Exact size of the team to build
        ctx: Run context (mode, weights, trace)

    Returns:
        The members in the order they were picked, or None if the team cannot be completed
    """
    mode = ctx.mode.value.upper()
    eligible = [c for c in candidates if ctx.size_eligible(c.preferred_team_size, target_size)]
    if len(eligible) < target_size:
        logger.debug(
            f"Not enough participants for {mode} team size {target_size}: "
            f"{len(eligible)} available, {target_size} needed"
        )
        ctx.trace.log_build_failed(target_size, reason="too_few_eligible")
        return None

    if ctx.relaxed:
        filter_chain = relaxed_candidates
        scorer = make_scorer(ctx.relaxed_weights)
    else:
        filter_chain = strict_candidates
        scorer = make_scorer(ctx.strict_weights)

    anchor, remaining = eligible[0], eligible[1:]
    team = [anchor]
    logger.debug(
        f"Starting {mode} {target_size}-member team with anchor {anchor.full_name} "
        f"(prefers size {anchor.preferred_team_size})"
    )

    while len(team) < target_size:
        survivors = filter_chain(team, remaining, target_size, ctx)
        winner = select_best_candidate(team, survivors, scorer)
        if winner is None:
            logger.debug(f"No suitable member found for {mode} team of size {len(team)}")
            ctx.trace.log_build_failed(target_size, reason="no_candidate", team_size=len(team))
            return None

        team.append(winner)
        remaining = [c for c in remaining if c.id != winner.id]
        logger.debug(f"Added member {winner.full_name} (prefers size {winner.preferred_team_size})")

    return team


def build_team(
    candidates: Sequence[Participant],
    target_size: int,
    ctx: MatchContext,
) -> Team | None:
    """Build and summarize one team of exactly ``target_size`` members.

    Returns:
        The new Team, or None if no full team could be built
    """
    members = select_team_members(candidates, target_size, ctx)
    if members is None:
        return None

    formation = TeamFormation.RELAXED if ctx.relaxed else TeamFormation.STRICT
    team = create_team(members, ctx, formation)
    ctx.trace.log_team_formed(team.id, formation.value, team.member_ids)
    return team
