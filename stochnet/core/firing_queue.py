"""
Time-ordered queue of tentative firings with lazy invalidation.

Every scheduling of an event bumps that event's generation counter and
stamps the new queue entry with it. Entries are never searched for or
removed when an event is rescheduled; instead ``pop_valid`` discards any
popped entry whose stamp no longer matches the event's current
generation. Superseded entries therefore linger in the heap until they
reach the top, and each costs one extra pop.

Entries are ordered by firing time, then event index, then generation.
Equal firing times have probability zero under continuous sampling, so
the secondary keys only make the order total.
"""

from __future__ import annotations

import heapq
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .types import Time

logger = logging.getLogger(__name__)


@dataclass(frozen=True, order=True)
class ScheduledFiring:
    """A tentative firing of one event.

    Attributes:
        time: Absolute simulated time at which the event would fire.
        event_index: Position of the owning event in the engine's event list.
        generation: The event's generation counter when this entry was pushed.
    """
    time: Time
    event_index: int
    generation: int

    def is_current(self, generations: Sequence[int]) -> bool:
        return generations[self.event_index] == self.generation


class FiringQueue:
    """Min-heap of ``ScheduledFiring`` entries."""

    def __init__(self):
        self._heap: List[ScheduledFiring] = []
        # Diagnostics
        self.discarded = 0

    def push(self, firing: ScheduledFiring) -> None:
        heapq.heappush(self._heap, firing)

    def pop_valid(self, generations: Sequence[int]) -> Optional[ScheduledFiring]:
        """Pop the earliest entry that is still its event's pending firing.

        Stale entries encountered on the way are dropped. Returns ``None``
        when the queue runs out.
        """
        while self._heap:
            firing = heapq.heappop(self._heap)
            if firing.is_current(generations):
                return firing
            self.discarded += 1
            logger.debug(
                "discarded stale firing of event %d (generation %d, current %d)",
                firing.event_index, firing.generation, generations[firing.event_index],
            )
        return None

    def count_valid(self, generations: Sequence[int]) -> int:
        """Return how many entries are still current, without popping."""
        return sum(1 for firing in self._heap if firing.is_current(generations))

    def clear(self) -> None:
        self._heap.clear()

    def __len__(self) -> int:
        # Includes stale entries
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __repr__(self) -> str:
        return f"FiringQueue(entries={len(self._heap)}, discarded={self.discarded})"
