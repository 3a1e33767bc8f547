"""
Dependency index: which events read which places.

After a firing only the events whose enablement or rate could have
changed need a fresh waiting time. The index records, for every place,
the events that read it. Writes are not recorded, so an event that only
writes a place is not rescheduled when that place changes.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, Sequence, Set

from .events import Event
from .types import Place

_EMPTY: FrozenSet[int] = frozenset()


class DependencyIndex:
    """Read-only mapping from place to the indices of events that read it."""

    def __init__(self, events: Sequence[Event]):
        readers: Dict[Place, Set[int]] = {}
        for event_idx, event in enumerate(events):
            reads = set(event.enablement_inputs())
            reads.update(event.rate_inputs())
            for place in reads:
                readers.setdefault(place, set()).add(event_idx)
        self._readers: Dict[Place, FrozenSet[int]] = {
            place: frozenset(idxs) for place, idxs in readers.items()
        }

    def dependents(self, place: Place) -> FrozenSet[int]:
        """Return the events that read ``place`` (empty if none do)."""
        return self._readers.get(place, _EMPTY)

    def affected_by(self, places: Iterable[Place]) -> Set[int]:
        """Return the union of dependents over ``places``."""
        affected: Set[int] = set()
        for place in places:
            affected.update(self.dependents(place))
        return affected

    def __contains__(self, place: Place) -> bool:
        return place in self._readers

    def __len__(self) -> int:
        return len(self._readers)

    def __repr__(self) -> str:
        entries = {p: sorted(idxs) for p, idxs in self._readers.items()}
        return f"DependencyIndex({entries!r})"
