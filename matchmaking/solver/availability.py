"""Availability compatibility between teammates.

Raw availability answers collapse into three buckets (High, Medium, Low). A
member's bucket *accepts* a set of candidate buckets:

- High accepts High and Medium
- Medium accepts everything
- Low accepts Medium and Low

High and Low never accept each other. Callers ask the question two ways and
the difference matters:

- ``accepted_by_all``: every current member accepts the candidate (strict filter)
- ``accepted_by_any``: at least one member accepts the candidate (relaxed filter, scoring bonus)
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

from matchmaking.models import AvailabilityLabel, Participant


class AvailabilityBucket(str, Enum):
    """Coarse availability level used for compatibility checks."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


BUCKET_BY_LABEL: dict[AvailabilityLabel, AvailabilityBucket] = {
    AvailabilityLabel.FULLY: AvailabilityBucket.HIGH,
    AvailabilityLabel.MODERATELY: AvailabilityBucket.MEDIUM,
    AvailabilityLabel.LIGHTLY: AvailabilityBucket.LOW,
    AvailabilityLabel.NOT_NOW: AvailabilityBucket.LOW,
    AvailabilityLabel.UNSPECIFIED: AvailabilityBucket.MEDIUM,
}

ACCEPTED_BUCKETS: dict[AvailabilityBucket, frozenset[AvailabilityBucket]] = {
    AvailabilityBucket.HIGH: frozenset({AvailabilityBucket.HIGH, AvailabilityBucket.MEDIUM}),
    AvailabilityBucket.MEDIUM: frozenset(AvailabilityBucket),
    AvailabilityBucket.LOW: frozenset({AvailabilityBucket.MEDIUM, AvailabilityBucket.LOW}),
}


def bucket_for(label: AvailabilityLabel) -> AvailabilityBucket:
    """Get the availability bucket for a raw availability label."""
    return BUCKET_BY_LABEL.get(label, AvailabilityBucket.MEDIUM)


def accepts(member_bucket: AvailabilityBucket, candidate_bucket: AvailabilityBucket) -> bool:
    """Check whether a member with ``member_bucket`` accepts ``candidate_bucket``."""
    return candidate_bucket in ACCEPTED_BUCKETS[member_bucket]


def accepted_by_all(team: Sequence[Participant], candidate: Participant) -> bool:
    """True if every member accepts the candidate. Vacuously true for an empty team."""
    candidate_bucket = bucket_for(candidate.availability)
    return all(accepts(bucket_for(member.availability), candidate_bucket) for member in team)


def accepted_by_any(team: Sequence[Participant], candidate: Participant) -> bool:
    """True if at least one member accepts the candidate. False for an empty team."""
    candidate_bucket = bucket_for(candidate.availability)
    return any(accepts(bucket_for(member.availability), candidate_bucket) for member in team)
