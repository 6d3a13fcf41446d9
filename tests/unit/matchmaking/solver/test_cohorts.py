"""Tests for the undergraduate / postgraduate cohort split."""

from __future__ import annotations

import pytest

from matchmaking.solver.cohorts import Cohort, classify_cohort, split_by_cohort

from .conftest import create_participant


class TestClassifyCohort:
    @pytest.mark.parametrize("year", ["PG 1st Year", "PG 2nd Year", "MBA", "MBA 1st Year", "Executive MBA"])
    def test_postgraduate_markers(self, year):
        assert classify_cohort(create_participant("p", current_year=year)) is Cohort.POSTGRADUATE

    @pytest.mark.parametrize("year", ["1st Year", "2nd Year", "3rd Year", "4th Year", "5th Year", ""])
    def test_everything_else_is_undergraduate(self, year):
        assert classify_cohort(create_participant("p", current_year=year)) is Cohort.UNDERGRADUATE

    def test_markers_are_case_sensitive(self):
        """Only the uppercase markers count."""
        assert classify_cohort(create_participant("p", current_year="mba")) is Cohort.UNDERGRADUATE


class TestSplitByCohort:
    def test_split_preserves_input_order(self):
        participants = [
            create_participant("u1", current_year="1st Year"),
            create_participant("g1", current_year="MBA"),
            create_participant("u2", current_year="3rd Year"),
            create_participant("g2", current_year="PG 2nd Year"),
        ]

        undergraduate, postgraduate = split_by_cohort(participants)

        assert [p.id for p in undergraduate] == ["u1", "u2"]
        assert [p.id for p in postgraduate] == ["g1", "g2"]

    def test_empty_input(self):
        assert split_by_cohort([]) == ([], [])
