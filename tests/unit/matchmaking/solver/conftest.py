"""
Shared fixtures for matcher unit tests.

Provides participant factories and a MatchContext built from schema defaults,
with a deterministic id factory so team ids are predictable.
"""

from __future__ import annotations

from collections.abc import Callable
from itertools import count

from matchmaking.config import ConfigLoader
from matchmaking.models import AvailabilityLabel, ExperienceLevel, Participant
from matchmaking.solver.base import MatchContext, MatchMode
from matchmaking.solver.logging import MatchTrace

FULLY = AvailabilityLabel.FULLY
MODERATELY = AvailabilityLabel.MODERATELY
LIGHTLY = AvailabilityLabel.LIGHTLY
NOT_NOW = AvailabilityLabel.NOT_NOW

NONE = ExperienceLevel.NONE
SOME = ExperienceLevel.PARTICIPATED_1_2
MANY = ExperienceLevel.PARTICIPATED_3_PLUS
FINALIST = ExperienceLevel.FINALIST_WINNER


def create_participant(
    participant_id: str,
    preferred_team_size: int = 2,
    experience: ExperienceLevel = NONE,
    availability: AvailabilityLabel | str = MODERATELY,
    current_year: str = "2nd Year",
    case_preferences: tuple[str, ...] = (),
    core_strengths: tuple[str, ...] = (),
    preferred_roles: tuple[str, ...] = (),
    full_name: str | None = None,
) -> Participant:
    """Create a test participant with sensible defaults."""
    return Participant(
        id=participant_id,
        full_name=full_name or f"Participant {participant_id}",
        current_year=current_year,
        preferred_team_size=preferred_team_size,
        experience=experience,
        availability=availability,
        case_preferences=case_preferences,
        core_strengths=core_strengths,
        preferred_roles=preferred_roles,
    )


def sequential_ids(prefix: str = "team") -> Callable[[], str]:
    """Id factory returning team-1, team-2, ..."""
    counter = count(1)
    return lambda: f"{prefix}-{next(counter)}"


def build_match_context(
    relaxed: bool = False,
    config_overrides: dict[str, object] | None = None,
    id_factory: Callable[[], str] | None = None,
) -> MatchContext:
    """Build a MatchContext from schema defaults plus overrides."""
    config = ConfigLoader(overrides=config_overrides, read_environment=False)
    return MatchContext.from_config(
        config,
        MatchMode.RELAXED if relaxed else MatchMode.STRICT,
        id_factory=id_factory or sequential_ids(),
        trace=MatchTrace(),
    )
