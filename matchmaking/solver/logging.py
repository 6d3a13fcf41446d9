"""
Match Trace - Structured record of the decisions made during one matching run.

Events are observational only; nothing in the matcher reads them back.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any

logger = logging.getLogger(__name__)


class MatchTrace:
    """Collects filter, build and packing events for one matching run."""

    def __init__(self, debug_mode: bool = False) -> None:
        self.debug_mode = debug_mode
        self.events: list[dict[str, Any]] = []
        self.event_counts: Counter[str] = Counter()

    def record(self, event: str, **fields: Any) -> None:
        """Record a structured event."""
        self.events.append({"event": event, **fields})
        self.event_counts[event] += 1
        if self.debug_mode:
            details = " ".join(f"{k}={v}" for k, v in fields.items())
            logger.debug(f"[MATCH] {event} {details}".rstrip())

    def log_filter_stage(self, stage: str, team_size: int, before: int, after: int) -> None:
        """Log how many candidates survived one filter stage."""
        self.record("filter_stage", stage=stage, team_size=team_size, before=before, after=after)

    def log_team_formed(self, team_id: str, formation: str, member_ids: list[str]) -> None:
        """Log a successfully formed team."""
        self.record("team_formed", team_id=team_id, formation=formation, size=len(member_ids), members=member_ids)

    def log_build_failed(self, target_size: int, reason: str, team_size: int = 0) -> None:
        """Log a team-building attempt that produced no team."""
        self.record("build_failed", target_size=target_size, reason=reason, partial_size=team_size)

    def log_bucket_exhausted(self, cohort: str, target_size: int, teams: int, unmatched: int) -> None:
        """Log the end of one size bucket."""
        self.record("bucket_exhausted", cohort=cohort, target_size=target_size, teams=teams, unmatched=unmatched)

    def get_summary(self) -> dict[str, Any]:
        """Get summary of all recorded events."""
        return {
            "event_counts": dict(self.event_counts),
            "teams_formed": self.event_counts["team_formed"],
            "failed_builds": self.event_counts["build_failed"],
            "events": list(self.events),
        }
