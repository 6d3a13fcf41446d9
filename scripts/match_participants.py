#!/usr/bin/env python3
"""
Match case-competition participants into teams from a JSON file.

Input is a JSON array of participant records (camelCase or snake_case keys),
or an object with a "participants" array. Output is the matching result as
JSON, or a human-readable report.

Usage:
    python scripts/match_participants.py participants.json
    python scripts/match_participants.py participants.json --relaxed --format text
    cat participants.json | python scripts/match_participants.py - --output teams.json

Exit codes:
    0: Success (including runs where some participants stay unmatched)
    2: Invalid input or configuration
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from pydantic import TypeAdapter
from pydantic import ValidationError as InputValidationError

from matchmaking.config import ConfigError, ConfigLoader
from matchmaking.logging_config import configure_logging, resolve_level
from matchmaking.models import MatchingResult, Participant, duplicate_ids
from matchmaking.settings import get_settings
from matchmaking.solver import match_participants_to_teams
from matchmaking.utils.roles import covered_archetypes, missing_archetypes, normalize_role

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 2

_PARTICIPANTS = TypeAdapter(list[Participant])


class InputFormatError(Exception):
    """Raised when the input JSON has an unexpected shape."""


def load_participants(source: str) -> list[Participant]:
    """Load and validate participants from a JSON file or stdin."""
    if source == "-":
        data = json.load(sys.stdin)
    else:
        with open(source, encoding="utf-8") as f:
            data = json.load(f)

    # Accept both a bare list and {"participants": [...]}
    if isinstance(data, dict) and "participants" in data:
        data = data["participants"]
    if not isinstance(data, list):
        raise InputFormatError(f"Expected a JSON array of participants, got {type(data).__name__}")

    participants = _PARTICIPANTS.validate_python(data)
    repeated = duplicate_ids(participants)
    if repeated:
        raise InputFormatError(f"Duplicate participant ids: {', '.join(repeated)}")
    return participants


def format_report(result: MatchingResult) -> str:
    """Render a matching result as a plain-text report."""
    lines: list[str] = []
    stats = result.statistics

    lines.append("=" * 60)
    lines.append(f"TEAMS FORMED: {stats.teams_formed}")
    lines.append("=" * 60)

    for number, team in enumerate(result.teams, start=1):
        lines.append("")
        lines.append(
            f"Team {number} [{team.formation.value}] {team.id} - "
            f"{team.team_size} members, compatibility {team.compatibility_score:.1f}"
        )
        for member in team.members:
            roles = [normalize_role(role) or role for role in member.preferred_roles]
            role_text = f" ({', '.join(roles)})" if roles else ""
            lines.append(f"  - {member.full_name}{role_text}: {member.experience.value}")
        cases = ", ".join(team.common_case_types) or "none"
        lines.append(f"  Common case types: {cases}")
        covered = covered_archetypes(skill for member in team.members for skill in member.core_strengths)
        lines.append(f"  Archetypes covered: {', '.join(covered) or 'none'}")
        missing = missing_archetypes(team.members)
        if missing:
            lines.append(f"  Archetypes missing: {', '.join(missing)}")

    if result.unmatched:
        lines.append("")
        lines.append(f"UNMATCHED: {len(result.unmatched)}")
        for participant in result.unmatched:
            lines.append(f"  - {participant.full_name} (prefers {participant.preferred_team_size})")

    lines.append("")
    lines.append("=" * 60)
    lines.append("STATISTICS")
    lines.append("=" * 60)
    lines.append(f"  {'Participants':24} {stats.total_participants:>6}")
    lines.append(f"  {'Teams':24} {stats.teams_formed:>6}")
    lines.append(f"  {'Average team size':24} {stats.average_team_size:>6.2f}")
    lines.append(f"  {'Matching efficiency':24} {stats.matching_efficiency:>5.1f}%")
    for size, count in sorted(stats.team_size_distribution.items()):
        lines.append(f"  {f'Teams of {size}':24} {count:>6}")

    return "\n".join(lines) + "\n"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Match case-competition participants into teams of 2-4")
    parser.add_argument("input", help="Participants JSON file, or - for stdin")
    parser.add_argument("--relaxed", action="store_true", help="Use relaxed constraints and overflow packing")
    parser.add_argument("--config", type=Path, help="JSON file of matching config overrides")
    parser.add_argument("--output", type=Path, help="Write the result here instead of stdout")
    parser.add_argument("--format", choices=("json", "text"), default="json", help="Output format")
    parser.add_argument("--debug", action="store_true", help="Log every matching decision")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Command-line entry point."""
    args = build_parser().parse_args(argv)
    settings = get_settings()

    debug = args.debug or settings.debug_trace
    configure_logging(source="matcher", level=resolve_level(settings.log_level, debug))

    try:
        config = ConfigLoader.initialize(overrides_file=args.config or settings.config_file)
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        return EXIT_INVALID

    try:
        participants = load_participants(args.input)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, InputFormatError, InputValidationError) as e:
        logger.error(f"Invalid participants input: {e}")
        return EXIT_INVALID

    result = match_participants_to_teams(
        participants,
        relaxed_mode=args.relaxed or settings.relaxed_mode,
        config=config,
        debug_mode=debug,
    )

    if args.format == "text":
        output = format_report(result)
    else:
        output = json.dumps(result.to_dict(), indent=2) + "\n"

    if args.output:
        args.output.write_text(output, encoding="utf-8")
        logger.info(f"Wrote {result.statistics.teams_formed} teams to {args.output}")
    else:
        sys.stdout.write(output)

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
