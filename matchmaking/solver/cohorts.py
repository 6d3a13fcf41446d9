"""Education cohort split.

Undergraduates and postgraduates (including MBA students) are matched
completely separately; no team ever mixes the two.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from matchmaking.models import Participant

# Substrings of the year-of-study answer that mark a postgraduate
POSTGRADUATE_MARKERS: tuple[str, ...] = ("PG", "MBA")


class Cohort(str, Enum):
    UNDERGRADUATE = "UG"
    POSTGRADUATE = "PG"


def classify_cohort(participant: Participant) -> Cohort:
    """Get the cohort a participant is matched within."""
    if any(marker in participant.current_year for marker in POSTGRADUATE_MARKERS):
        return Cohort.POSTGRADUATE
    return Cohort.UNDERGRADUATE


def split_by_cohort(participants: Iterable[Participant]) -> tuple[list[Participant], list[Participant]]:
    """Partition participants into (undergraduate, postgraduate), preserving input order."""
    undergraduate: list[Participant] = []
    postgraduate: list[Participant] = []
    for participant in participants:
        if classify_cohort(participant) is Cohort.POSTGRADUATE:
            postgraduate.append(participant)
        else:
            undergraduate.append(participant)
    return undergraduate, postgraduate
