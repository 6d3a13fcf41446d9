"""
Overflow packing - group whatever the size buckets could not place.

Runs only in relaxed mode. Leftovers are ordered by experience, then by
availability (both descending), and cut into consecutive groups of 4, then 3,
then 2 members. No compatibility filtering happens here; at most one
participant per cohort stays unmatched.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from matchmaking.models import Participant, Team

from .pool import CandidatePool
from .solution import create_overflow_team

if TYPE_CHECKING:
    from .base import MatchContext

logger = logging.getLogger(__name__)

# Largest first; the last size doubles as the minimum group
OVERFLOW_SIZES: tuple[int, ...] = (4, 3, 2)


def overflow_order(participants: Sequence[Participant]) -> list[Participant]:
    """Sort leftovers by experience, then availability, both descending (stable)."""
    return sorted(participants, key=lambda p: (-p.experience.rank, -p.availability.rank))


def pack_overflow(
    participants: Sequence[Participant],
    ctx: MatchContext,
) -> tuple[list[Team], list[Participant]]:
    """Pack leftovers into teams of 4, 3 and 2.

    Args:
        participants: Leftovers from every size bucket of one cohort
        ctx: Run context

    Returns:
        Tuple of (overflow teams, participants still unmatched)
    """
    pool = CandidatePool(overflow_order(participants))
    teams: list[Team] = []
    min_size = OVERFLOW_SIZES[-1]

    while len(pool) >= min_size:
        size = next(s for s in OVERFLOW_SIZES if len(pool) >= s)
        members = pool.take(size)
        team = create_overflow_team(members, ctx)
        teams.append(team)
        ctx.trace.log_team_formed(team.id, team.formation.value, team.member_ids)
        logger.debug(f"Packed overflow team {team.id} with {size} members")

    unmatched = pool.snapshot()
    if teams:
        logger.info(f"Overflow packing formed {len(teams)} teams, {len(unmatched)} participants left over")
    return teams, unmatched
