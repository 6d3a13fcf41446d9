"""
Root test configuration and fixtures for the matchmaking project.

This conftest.py provides common fixtures for all test categories:
- unit/: Fast, isolated unit tests

Note: sys.path manipulation is handled here to ensure imports work correctly.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

# Add project root to path to allow imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from matchmaking.config import ConfigLoader  # noqa: E402
from matchmaking.settings import get_settings  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_configuration(monkeypatch):
    """Give every test a fresh config singleton and no CONFIG_*/MATCHMAKING_* environment."""
    for name in list(os.environ):
        if name.startswith(("CONFIG_", "MATCHMAKING_")) or name == "LOG_LEVEL":
            monkeypatch.delenv(name, raising=False)

    ConfigLoader.reset()
    get_settings.cache_clear()
    yield
    ConfigLoader.reset()
    get_settings.cache_clear()


@pytest.fixture
def sample_participant_data():
    """Sample participant record as it arrives from the registration form."""
    return {
        "id": "p-1",
        "fullName": "Asha Rao",
        "currentYear": "3rd Year",
        "preferredTeamSize": 3,
        "experience": "Participated in 1–2",
        "availability": "Fully Available (10–15 hrs/week)",
        "casePreferences": ["Consulting", "Marketing"],
        "coreStrengths": ["Financial Modeling", "Storytelling"],
        "preferredRoles": ["Data Analyst"],
    }
