"""Candidate pool owned by a single matching stage.

The pool keeps candidates in their original order and only ever shrinks:
``remove`` takes members out after a team is formed. A pool is created from a
copy of its input and is never shared between runs.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from matchmaking.models import Participant


class CandidatePool:
    """Ordered, shrink-only collection of participants still available."""

    def __init__(self, participants: Iterable[Participant]) -> None:
        self._members: list[Participant] = list(participants)

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self) -> Iterator[Participant]:
        return iter(list(self._members))

    def remove(self, participants: Iterable[Participant]) -> int:
        """Remove participants (by id) and return how many were removed."""
        removed_ids = {p.id for p in participants}
        before = len(self._members)
        self._members = [member for member in self._members if member.id not in removed_ids]
        return before - len(self._members)

    def take(self, count: int) -> list[Participant]:
        """Remove and return the first ``count`` members."""
        taken, self._members = self._members[:count], self._members[count:]
        return taken

    def snapshot(self) -> list[Participant]:
        """Get a copy of the remaining members."""
        return list(self._members)
