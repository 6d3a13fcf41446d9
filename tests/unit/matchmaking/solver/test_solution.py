"""Tests for team summaries and run statistics."""

from __future__ import annotations

import pytest

from matchmaking.models import TeamFormation
from matchmaking.solver.scoring import STRICT_WEIGHTS
from matchmaking.solver.solution import (
    ANTI_BIAS_LABEL,
    OVERFLOW_LABEL,
    average_experience,
    calculate_case_type_distribution,
    calculate_statistics,
    calculate_team_size_distribution,
    common_case_types,
    create_overflow_team,
    create_team,
    mean_pairwise_score,
)

from .conftest import FINALIST, FULLY, NONE, SOME, build_match_context, create_participant


class TestCommonCaseTypes:
    def test_requires_minimum_members_first_seen_order(self):
        members = [
            create_participant("a", case_preferences=("Marketing", "Consulting")),
            create_participant("b", case_preferences=("Consulting", "Marketing", "Finance")),
            create_participant("c", case_preferences=("Finance",)),
        ]

        assert common_case_types(members, min_members=2, limit=3) == ("Marketing", "Consulting", "Finance")
        assert common_case_types(members, min_members=3, limit=3) == ()

    def test_limit(self):
        members = [create_participant("a", case_preferences=("A", "B", "C", "D"))]

        assert common_case_types(members, min_members=1, limit=3) == ("A", "B", "C")


class TestPairwiseScore:
    def test_mean_over_all_pairs(self):
        members = [
            create_participant("a", experience=NONE, availability=FULLY),
            create_participant("b", experience=SOME, availability=FULLY),
            create_participant("c", experience=NONE, availability=FULLY),
        ]

        # (a,b) = 25 + 20, (a,c) = 20, (b,c) = 25 + 20
        assert mean_pairwise_score(members, STRICT_WEIGHTS) == pytest.approx((45 + 20 + 45) / 3)

    def test_single_member_has_no_pairs(self):
        assert mean_pairwise_score([create_participant("a")], STRICT_WEIGHTS) is None


class TestCreateTeam:
    def test_builder_team_summary(self):
        ctx = build_match_context()
        members = [
            create_participant("a", experience=FINALIST, case_preferences=("Consulting",)),
            create_participant("b", experience=NONE, case_preferences=("Consulting", "Finance")),
        ]

        team = create_team(members, ctx, TeamFormation.STRICT)

        assert team.id == "team-1"
        assert team.team_size == 2
        assert team.average_experience == 1.5
        assert team.common_case_types == ("Consulting",)
        assert team.work_style_compatibility == ANTI_BIAS_LABEL
        # 25 novelty + 15 shared case + 20 availability
        assert team.compatibility_score == 60.0

    def test_compatibility_clamped_to_100(self):
        ctx = build_match_context(config_overrides={"scoring.strict.unique_skill": 500})
        members = [create_participant("a"), create_participant("b", core_strengths=("Storytelling",))]

        team = create_team(members, ctx, TeamFormation.STRICT)

        assert team.compatibility_score == 100.0

    def test_size_match_share(self):
        ctx = build_match_context()
        members = [
            create_participant("a", preferred_team_size=3),
            create_participant("b", preferred_team_size=3),
            create_participant("c", preferred_team_size=2),
        ]

        team = create_team(members, ctx, TeamFormation.RELAXED)

        assert team.preferred_team_size_match == pytest.approx(200 / 3)

    def test_id_factory_errors_propagate(self):
        def broken() -> str:
            raise RuntimeError("id service down")

        ctx = build_match_context(id_factory=broken)

        with pytest.raises(RuntimeError, match="id service down"):
            create_team([create_participant("a"), create_participant("b")], ctx, TeamFormation.STRICT)


class TestCreateOverflowTeam:
    def test_common_case_types_need_one_member(self):
        ctx = build_match_context(relaxed=True)
        members = [
            create_participant("a", case_preferences=("Finance",)),
            create_participant("b", case_preferences=("Marketing",)),
        ]

        team = create_overflow_team(members, ctx)

        assert team.common_case_types == ("Finance", "Marketing")
        assert team.work_style_compatibility == OVERFLOW_LABEL

    def test_size_match_uses_mean_preference(self):
        ctx = build_match_context(relaxed=True)
        members = [create_participant("a", preferred_team_size=4), create_participant("b", preferred_team_size=3)]

        team = create_overflow_team(members, ctx)

        # mean preference 3.5, size 2
        assert team.preferred_team_size_match == 62.5


class TestStatistics:
    def test_empty_run_is_all_zero(self):
        stats = calculate_statistics(0, [], [])

        assert stats.total_participants == 0
        assert stats.teams_formed == 0
        assert stats.average_team_size == 0
        assert stats.matching_efficiency == 0
        assert stats.team_size_distribution == {}
        assert stats.case_type_distribution == {}

    def test_distributions_and_efficiency(self):
        ctx = build_match_context()
        pair = create_team(
            [
                create_participant("a", case_preferences=("Consulting",)),
                create_participant("b", case_preferences=("Consulting",)),
            ],
            ctx,
            TeamFormation.STRICT,
        )
        trio = create_team(
            [create_participant("c"), create_participant("d"), create_participant("e")],
            ctx,
            TeamFormation.STRICT,
        )
        unmatched = [create_participant("f")]

        stats = calculate_statistics(6, [pair, trio], unmatched)

        assert stats.teams_formed == 2
        assert stats.average_team_size == 2.5
        assert stats.matching_efficiency == pytest.approx(500 / 6)
        assert calculate_team_size_distribution([pair, trio]) == {2: 1, 3: 1}
        assert stats.team_size_distribution == {2: 1, 3: 1}
        assert calculate_case_type_distribution([pair, trio]) == {"Consulting": 1}


class TestAverageExperience:
    def test_mean_rank(self):
        members = [create_participant("a", experience=FINALIST), create_participant("b", experience=SOME)]

        assert average_experience(members) == 2.0

    def test_empty(self):
        assert average_experience([]) == 0.0
