"""
Domain models for the team matcher.

Participants come in as immutable records; teams and results go out as
immutable records. JSON uses camelCase field names (``fullName``,
``preferredTeamSize``...), Python code uses snake_case; both are accepted on input.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

# Team sizes the matcher can form, in bucket processing order
TEAM_SIZES: tuple[int, ...] = (2, 3, 4)


class _RankedLabel(str, Enum):
    """A closed set of labels with a total order given by ``rank``."""

    @property
    def rank(self) -> int:
        """Position in the total order; defined by each label set."""

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self.rank >= other.rank


class ExperienceLevel(_RankedLabel):
    """Prior case-competition experience, ordered from none to finalist."""

    NONE = "None"
    PARTICIPATED_1_2 = "Participated in 1–2"
    PARTICIPATED_3_PLUS = "Participated in 3+"
    FINALIST_WINNER = "Finalist/Winner in at least one"

    @property
    def rank(self) -> int:
        return _EXPERIENCE_RANKS[self]


_EXPERIENCE_RANKS: dict[ExperienceLevel, int] = {
    ExperienceLevel.NONE: 0,
    ExperienceLevel.PARTICIPATED_1_2: 1,
    ExperienceLevel.PARTICIPATED_3_PLUS: 2,
    ExperienceLevel.FINALIST_WINNER: 3,
}


class AvailabilityLabel(_RankedLabel):
    """Weekly time commitment as answered on the registration form.

    UNSPECIFIED stands in for any answer outside the form's choices. The raw
    answer is only kept in the warning logged on parse; it serializes back as
    "Unspecified".
    """

    FULLY = "Fully Available (10–15 hrs/week)"
    MODERATELY = "Moderately Available (5–10 hrs/week)"
    LIGHTLY = "Lightly Available (1–4 hrs/week)"
    NOT_NOW = "Not available now, but interested later"
    UNSPECIFIED = "Unspecified"

    @property
    def rank(self) -> int:
        return _AVAILABILITY_RANKS[self]

    @classmethod
    def parse(cls, value: Any) -> AvailabilityLabel:
        """Map a raw answer to a label, degrading unknown answers to UNSPECIFIED."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            logger.warning(f"Unrecognized availability {value!r}, treating as {cls.UNSPECIFIED.value}")
            return cls.UNSPECIFIED


_AVAILABILITY_RANKS: dict[AvailabilityLabel, int] = {
    AvailabilityLabel.FULLY: 3,
    AvailabilityLabel.MODERATELY: 2,
    AvailabilityLabel.LIGHTLY: 1,
    AvailabilityLabel.NOT_NOW: 0,
    # Sorts with the answer whose bucket it shares
    AvailabilityLabel.UNSPECIFIED: 2,
}


class TeamFormation(str, Enum):
    """Which path of the matcher produced a team."""

    STRICT = "strict"
    RELAXED = "relaxed"
    OVERFLOW = "overflow"


class _MatchingModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class Participant(_MatchingModel):
    """A registered participant - immutable for the whole matching run."""

    id: str
    full_name: str
    current_year: str  # e.g. "3rd Year", "PG 1st Year", "MBA"
    preferred_team_size: int = Field(ge=2, le=4)
    experience: ExperienceLevel
    availability: AvailabilityLabel
    case_preferences: tuple[str, ...] = ()
    core_strengths: tuple[str, ...] = ()
    preferred_roles: tuple[str, ...] = ()

    @field_validator("availability", mode="before")
    @classmethod
    def parse_availability(cls, v: Any) -> AvailabilityLabel:
        return AvailabilityLabel.parse(v)

    @field_validator("case_preferences", "core_strengths", "preferred_roles", mode="after")
    @classmethod
    def dedupe(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Drop repeated entries, keeping first-seen order."""
        return tuple(dict.fromkeys(v))


def duplicate_ids(participants: Iterable[Participant]) -> list[str]:
    """Get the ids that appear more than once, in first-repeat order."""
    seen: set[str] = set()
    repeated: dict[str, None] = {}
    for participant in participants:
        if participant.id in seen:
            repeated[participant.id] = None
        seen.add(participant.id)
    return list(repeated)


class Team(_MatchingModel):
    """A formed team. Created once and never mutated."""

    id: str
    members: tuple[Participant, ...]
    team_size: int
    compatibility_score: float = Field(ge=0, le=100)
    average_experience: float
    common_case_types: tuple[str, ...] = ()
    work_style_compatibility: str
    formation: TeamFormation
    preferred_team_size_match: float = Field(ge=0, le=100)

    @model_validator(mode="after")
    def check_members(self) -> Team:
        """Members must be distinct and match the declared team size."""
        if self.team_size not in TEAM_SIZES:
            raise ValueError(f"Team size {self.team_size} not in {TEAM_SIZES}")
        if len(self.members) != self.team_size:
            raise ValueError(f"Team declares size {self.team_size} but has {len(self.members)} members")
        if len(set(self.member_ids)) != len(self.member_ids):
            raise ValueError(f"Team {self.id} lists a participant more than once")
        return self

    @property
    def member_ids(self) -> list[str]:
        return [m.id for m in self.members]


class MatchingStatistics(_MatchingModel):
    """Aggregate statistics over every team formed in one run."""

    total_participants: int = 0
    teams_formed: int = 0
    average_team_size: float = 0.0
    matching_efficiency: float = 0.0
    team_size_distribution: dict[int, int] = Field(default_factory=dict)
    case_type_distribution: dict[str, int] = Field(default_factory=dict)


class MatchingResult(_MatchingModel):
    """Matcher output: teams, leftovers and statistics for one request."""

    teams: list[Team] = Field(default_factory=list)
    unmatched: list[Participant] = Field(default_factory=list)
    statistics: MatchingStatistics = Field(default_factory=MatchingStatistics)

    @property
    def matched_ids(self) -> list[str]:
        """IDs of every participant placed on a team, in team order."""
        return [pid for team in self.teams for pid in team.member_ids]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase JSON shape."""
        return self.model_dump(mode="json", by_alias=True)
