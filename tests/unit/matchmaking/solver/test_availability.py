"""Tests for availability buckets and the accept relation."""

from __future__ import annotations

import pytest

from matchmaking.models import AvailabilityLabel
from matchmaking.solver.availability import (
    AvailabilityBucket,
    accepted_by_all,
    accepted_by_any,
    accepts,
    bucket_for,
)

from .conftest import FULLY, LIGHTLY, MODERATELY, NOT_NOW, create_participant

HIGH = AvailabilityBucket.HIGH
MEDIUM = AvailabilityBucket.MEDIUM
LOW = AvailabilityBucket.LOW


class TestBucketFor:
    """Raw labels collapse into three buckets."""

    @pytest.mark.parametrize(
        "label,bucket",
        [
            (AvailabilityLabel.FULLY, HIGH),
            (AvailabilityLabel.MODERATELY, MEDIUM),
            (AvailabilityLabel.LIGHTLY, LOW),
            (AvailabilityLabel.NOT_NOW, LOW),
            (AvailabilityLabel.UNSPECIFIED, MEDIUM),
        ],
    )
    def test_label_buckets(self, label, bucket):
        assert bucket_for(label) is bucket


class TestAccepts:
    """The accept relation between member and candidate buckets."""

    def test_medium_accepts_everything(self):
        assert accepts(MEDIUM, HIGH)
        assert accepts(MEDIUM, MEDIUM)
        assert accepts(MEDIUM, LOW)

    def test_high_and_low_reject_each_other(self):
        """High and Low are the only incompatible pair."""
        assert not accepts(HIGH, LOW)
        assert not accepts(LOW, HIGH)

    def test_high_accepts_high_and_medium(self):
        assert accepts(HIGH, HIGH)
        assert accepts(HIGH, MEDIUM)

    def test_low_accepts_medium_and_low(self):
        assert accepts(LOW, MEDIUM)
        assert accepts(LOW, LOW)


class TestTeamAcceptance:
    """ALL vs ANY acceptance over a partial team."""

    def test_all_requires_every_member(self):
        team = [create_participant("a", availability=FULLY), create_participant("b", availability=MODERATELY)]
        candidate = create_participant("c", availability=NOT_NOW)

        assert not accepted_by_all(team, candidate)
        assert accepted_by_any(team, candidate)

    def test_empty_team(self):
        """ALL is vacuously true, ANY is false for an empty team."""
        candidate = create_participant("c", availability=LIGHTLY)

        assert accepted_by_all([], candidate)
        assert not accepted_by_any([], candidate)

    def test_unknown_availability_behaves_as_medium(self):
        """An unrecognized answer is accepted by High and Low members alike."""
        candidate = create_participant("c", availability="Weekends only")
        high = create_participant("h", availability=FULLY)
        low = create_participant("l", availability=NOT_NOW)

        assert accepted_by_all([high, low], candidate)
