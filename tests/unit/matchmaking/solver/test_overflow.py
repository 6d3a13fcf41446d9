"""Tests for overflow packing of leftover participants."""

from __future__ import annotations

import pytest

from matchmaking.models import TeamFormation
from matchmaking.solver.overflow import overflow_order, pack_overflow

from .conftest import FINALIST, FULLY, LIGHTLY, MODERATELY, NONE, SOME, build_match_context, create_participant


class TestOverflowOrder:
    def test_experience_then_availability(self):
        participants = [
            create_participant("none-light", experience=NONE, availability=LIGHTLY),
            create_participant("some-moderate", experience=SOME, availability=MODERATELY),
            create_participant("none-full", experience=NONE, availability=FULLY),
            create_participant("some-full", experience=SOME, availability=FULLY),
            create_participant("finalist", experience=FINALIST, availability=LIGHTLY),
        ]

        ordered = overflow_order(participants)

        assert [p.id for p in ordered] == ["finalist", "some-full", "some-moderate", "none-full", "none-light"]


class TestPackOverflow:
    @pytest.mark.parametrize(
        "count,sizes,leftover",
        [
            (1, [], 1),
            (2, [2], 0),
            (3, [3], 0),
            (4, [4], 0),
            (5, [4], 1),
            (6, [4, 2], 0),
            (7, [4, 3], 0),
            (9, [4, 4], 1),
        ],
    )
    def test_largest_sizes_first(self, count, sizes, leftover):
        ctx = build_match_context(relaxed=True)
        participants = [create_participant(str(i)) for i in range(count)]

        teams, unmatched = pack_overflow(participants, ctx)

        assert [team.team_size for team in teams] == sizes
        assert len(unmatched) == leftover

    def test_overflow_team_summary(self):
        ctx = build_match_context(relaxed=True)
        participants = [create_participant(str(i), preferred_team_size=2) for i in range(4)]

        teams, _ = pack_overflow(participants, ctx)
        team = teams[0]

        assert team.id == "relaxed-team-1"
        assert team.formation is TeamFormation.OVERFLOW
        # Pairwise relaxed score is 25, clamped up to the floor
        assert team.compatibility_score == 40.0
        assert team.common_case_types == ("Consulting",)
        # Everyone wanted 2, team has 4
        assert team.preferred_team_size_match == 50.0

    def test_no_compatibility_filtering(self):
        """High and Low availability members end up together."""
        ctx = build_match_context(relaxed=True)
        participants = [
            create_participant("high", availability=FULLY),
            create_participant("low", availability=LIGHTLY),
        ]

        teams, unmatched = pack_overflow(participants, ctx)

        assert teams[0].member_ids == ["high", "low"]
        assert unmatched == []

    def test_fallback_case_type_from_config(self):
        ctx = build_match_context(relaxed=True, config_overrides={"overflow.fallback_case_type": "General"})

        teams, _ = pack_overflow([create_participant("a"), create_participant("b")], ctx)

        assert teams[0].common_case_types == ("General",)
