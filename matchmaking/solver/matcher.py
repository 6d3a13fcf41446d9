"""
Team Matching Solver - entry point of the matching pipeline.

One run:
1. Copy the input and split it into undergraduate and postgraduate cohorts
2. Match each cohort on its own (undergraduates first)
3. Aggregate teams, leftovers and statistics into a MatchingResult
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from matchmaking.config import ConfigLoader
from matchmaking.models import MatchingResult, Participant, duplicate_ids

from .base import IdFactory, MatchContext, MatchMode
from .cohorts import Cohort, split_by_cohort
from .logging import MatchTrace
from .orchestrator import FormationResult, form_cohort_teams
from .solution import calculate_statistics

logger = logging.getLogger(__name__)


class TeamMatchingSolver:
    """Greedy anti-bias team matcher.

    The solver is reusable; each ``solve()`` call starts from a fresh pool and
    a fresh trace, so runs share no mutable state.
    """

    def __init__(
        self,
        config: ConfigLoader | None = None,
        relaxed_mode: bool = False,
        id_factory: IdFactory | None = None,
        debug_mode: bool = False,
    ):
        self.config = config or ConfigLoader.get_instance()
        self.mode = MatchMode.RELAXED if relaxed_mode else MatchMode.STRICT
        self.id_factory = id_factory
        self.debug_mode = debug_mode
        self.trace = MatchTrace(debug_mode=debug_mode)

    def _build_context(self) -> MatchContext:
        return MatchContext.from_config(
            self.config,
            self.mode,
            id_factory=self.id_factory,
            trace=self.trace,
        )

    def solve(self, participants: Iterable[Participant]) -> MatchingResult:
        """Match participants into teams.

        Args:
            participants: Validated participant records; never mutated

        Returns:
            Teams (undergraduate cohort first), unmatched participants and statistics

        Raises:
            ValueError: If two participants share an id
        """
        pool = list(participants)
        repeated = duplicate_ids(pool)
        if repeated:
            raise ValueError(f"Participant ids must be unique; repeated: {', '.join(repeated)}")

        self.trace = MatchTrace(debug_mode=self.debug_mode)
        ctx = self._build_context()

        logger.info(f"Matching {len(pool)} participants in {self.mode.value.upper()} mode")

        undergraduate, postgraduate = split_by_cohort(pool)
        logger.info(f"Cohorts: {len(undergraduate)} undergraduate, {len(postgraduate)} postgraduate")

        result = FormationResult()
        result.extend(form_cohort_teams(undergraduate, ctx, Cohort.UNDERGRADUATE.value))
        result.extend(form_cohort_teams(postgraduate, ctx, Cohort.POSTGRADUATE.value))

        statistics = calculate_statistics(len(pool), result.teams, result.unmatched)
        logger.info(
            f"Formed {statistics.teams_formed} teams, {len(result.unmatched)} participants unmatched "
            f"({statistics.matching_efficiency:.1f}% matched)"
        )

        return MatchingResult(teams=result.teams, unmatched=result.unmatched, statistics=statistics)


def match_participants_to_teams(
    participants: Iterable[Participant],
    relaxed_mode: bool = False,
    *,
    config: ConfigLoader | None = None,
    id_factory: IdFactory | None = None,
    debug_mode: bool = False,
) -> MatchingResult:
    """Match participants into teams of 2-4 in one call.

    Args:
        participants: Validated participant records
        relaxed_mode: Use the relaxed constraint tier plus overflow packing
        config: Configuration to read weights from (defaults to the singleton)
        id_factory: Team id provider, called once per team (defaults to uuid4)
        debug_mode: Mirror trace events to the debug log

    Returns:
        The MatchingResult for this run
    """
    solver = TeamMatchingSolver(
        config=config,
        relaxed_mode=relaxed_mode,
        id_factory=id_factory,
        debug_mode=debug_mode,
    )
    return solver.solve(participants)
