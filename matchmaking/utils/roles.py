"""Team role and skill archetype reference tables.

Registration forms ask for preferred roles as free-text labels and core
strengths as skill labels. This module is the single source of truth for:
- which role label maps to which canonical role
- which skills cover which team archetype (strategist, analyst, ...)

These tables describe team composition for reports; the matcher's scoring
does not read them.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from matchmaking.models import Participant

ROLE_LABELS: dict[str, str] = {
    "Team Lead": "lead",
    "Researcher": "researcher",
    "Data Analyst": "analyst",
    "Designer": "designer",
    "Presenter": "presenter",
    "Coordinator": "coordinator",
    "Flexible with any role": "flexible",
}

# Archetype -> skills that cover it; a skill may cover several archetypes
ARCHETYPE_SKILLS: dict[str, tuple[str, ...]] = {
    "strategist": ("Strategy & Structuring", "Innovation & Ideation"),
    "analyst": ("Data Analysis & Research", "Financial Modeling", "Market Research"),
    "communicator": ("Public Speaking & Pitching", "Storytelling", "Presentation Design (PPT/Canva)"),
    "designer": ("UI/UX or Product Thinking", "Storytelling", "Presentation Design (PPT/Canva)"),
}


def normalize_role(label: str) -> str | None:
    """Map a role label to its canonical role, or None for an unknown label.

    Matching ignores surrounding whitespace and case.
    """
    wanted = label.strip().casefold()
    for known, role in ROLE_LABELS.items():
        if known.casefold() == wanted:
            return role
    return None


def covered_archetypes(skills: Iterable[str]) -> tuple[str, ...]:
    """Archetypes covered by at least one of ``skills``, in table order."""
    skill_set = set(skills)
    return tuple(
        archetype for archetype, archetype_skills in ARCHETYPE_SKILLS.items() if skill_set.intersection(archetype_skills)
    )


def missing_archetypes(members: Sequence[Participant]) -> tuple[str, ...]:
    """Archetypes no member's core strengths cover, in table order."""
    covered = set(covered_archetypes(skill for member in members for skill in member.core_strengths))
    return tuple(archetype for archetype in ARCHETYPE_SKILLS if archetype not in covered)
