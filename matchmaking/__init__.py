"""
Matchmaking - Team formation for case-competition participants.

This package contains:
- models: Domain models (Participant, Team, MatchingResult)
- solver: Greedy anti-bias team matcher
- config: Schema-validated matching configuration
- utils: Role and archetype reference tables
"""

from matchmaking.models import (
    AvailabilityLabel,
    ExperienceLevel,
    MatchingResult,
    MatchingStatistics,
    Participant,
    Team,
    TeamFormation,
)
from matchmaking.solver.matcher import TeamMatchingSolver, match_participants_to_teams

__all__ = [
    "AvailabilityLabel",
    "ExperienceLevel",
    "MatchingResult",
    "MatchingStatistics",
    "Participant",
    "Team",
    "TeamFormation",
    "TeamMatchingSolver",
    "match_participants_to_teams",
]
