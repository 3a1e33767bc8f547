"""
Simulation engine: scheduling and time advance.

The engine holds the token state, the event list, the dependency index,
the firing queue and the simulated clock. It advances time by popping
the earliest still-valid tentative firing, applying the fired event's
deltas and rescheduling only the events that read a changed place (plus
the fired event itself).

Every (re)scheduling draws a fresh exponential waiting time rooted at the
current time. Because the exponential distribution is memoryless this
yields exact continuous-time Markov chain trajectories.

Typical use::

    sim = Simulation(events)
    sim.place_state(0).tokens += 10
    sim.setup_initial_firings()
    sim.run_until(float("inf"))
"""

from __future__ import annotations

import logging
import math
from typing import Dict, Iterable, List, Optional, Sequence

import numpy as np

from .config import EngineConfig
from .dependencies import DependencyIndex
from .errors import InvalidRate, UnknownPlace
from .events import Event
from .firing_queue import FiringQueue, ScheduledFiring
from .ledger import FiringRecord, Ledger
from .types import Place, PlaceState, State, Time

logger = logging.getLogger(__name__)


class Simulation:
    """Discrete-event simulator over integer places.

    Events are identified by their position in ``events`` for the whole
    lifetime of the simulation.
    """

    def __init__(self, events: Sequence[Event], config: Optional[EngineConfig] = None):
        self.cfg = config or EngineConfig()
        self.events: List[Event] = list(events)
        self.state: State = {}
        for event in self.events:
            for place in (*event.enablement_inputs(), *event.rate_inputs(), *event.outputs()):
                if place not in self.state:
                    self.state[place] = PlaceState(tokens=0)
        self.dependencies = DependencyIndex(self.events)
        self.generations: List[int] = [0] * len(self.events)
        self.queue = FiringQueue()
        self.ledger = Ledger(self.cfg)
        self.current_time: Time = float(self.cfg.start_time)
        if not self.events:
            logger.warning("simulation built with no events; it will never advance")

    @classmethod
    def from_events(cls, events: Sequence[Event], config: Optional[EngineConfig] = None) -> "Simulation":
        return cls(events, config)

    # ------------------------------------------------------------------
    # State access

    def place_state(self, place: Place) -> PlaceState:
        """Return the mutable state record of ``place``.

        Raises:
            UnknownPlace: if no event references ``place``.
        """
        try:
            return self.state[place]
        except KeyError:
            raise UnknownPlace(place) from None

    def tokens(self, place: Place) -> int:
        return self.place_state(place).tokens

    def set_tokens(self, place: Place, tokens: int) -> None:
        self.place_state(place).tokens = int(tokens)

    def snapshot(self) -> Dict[Place, int]:
        """Return a plain copy of the token counts."""
        return {place: ps.tokens for place, ps in self.state.items()}

    def marking(self, places: Optional[Iterable[Place]] = None) -> np.ndarray:
        """Return token counts of ``places`` as an integer vector.

        Without ``places`` the vector follows sorted place order.
        """
        if places is None:
            places = sorted(self.state)
        return np.array([self.tokens(p) for p in places], dtype=np.int64)

    def _read(self, places: Iterable[Place]) -> List[PlaceState]:
        return [self.place_state(p) for p in places]

    # ------------------------------------------------------------------
    # Scheduling

    def schedule_event(self, event_idx: int) -> Optional[ScheduledFiring]:
        """Draw a new tentative firing for one event.

        The generation bump invalidates any entry already queued for the
        event. Disabled events end up with no pending firing.

        Raises:
            InvalidRate: if the event is enabled but its rate is not positive.
        """
        event = self.events[event_idx]
        enablement_state = self._read(event.enablement_inputs())
        self.generations[event_idx] += 1
        generation = self.generations[event_idx]
        if not event.enabled(enablement_state):
            return None

        rate = event.hazard_rate(self._read(event.rate_inputs()))
        if math.isnan(rate) or rate <= 0.0:
            raise InvalidRate(event_idx, rate)
        wait = self.ledger.entropy.sample_waiting_time(event_idx, generation, rate)
        firing = ScheduledFiring(self.current_time + wait, event_idx, generation)
        self.queue.push(firing)
        return firing

    def setup_initial_firings(self) -> None:
        """Schedule every event once. Call after seeding the initial marking."""
        for event_idx in range(len(self.events)):
            self.schedule_event(event_idx)
        logger.info(
            "initial firings scheduled: %d of %d events enabled at t=%g",
            self.pending_firings, len(self.events), self.current_time,
        )

    @property
    def pending_firings(self) -> int:
        """Number of events that currently have a valid queued firing."""
        return self.queue.count_valid(self.generations)

    def next_firing_time(self) -> Optional[Time]:
        """Return the time of the next valid firing without consuming it."""
        firing = self.queue.pop_valid(self.generations)
        if firing is None:
            return None
        self.queue.push(firing)
        return firing.time

    # ------------------------------------------------------------------
    # Time advance

    def _fire(self, firing: ScheduledFiring) -> None:
        self.current_time = firing.time
        event_idx = firing.event_index
        to_reschedule = {event_idx}
        for change in self.events[event_idx].fire():
            place_state = self.place_state(change.place)
            to_reschedule.update(self.dependencies.dependents(change.place))
            place_state.tokens += change.value
        self.ledger.record_firing(firing.time, event_idx, firing.generation)
        logger.debug("t=%g fired event %d, rescheduling %s", firing.time, event_idx, sorted(to_reschedule))
        for idx in sorted(to_reschedule):
            self.schedule_event(idx)

    def run_until(self, horizon: Time) -> int:
        """Fire every event due at or before ``horizon``.

        The first firing past the horizon is left queued, so a later call
        with a larger horizon continues exactly where this one stopped.
        Returns the number of firings performed.
        """
        if horizon < self.current_time:
            logger.warning("horizon %g is before current time %g; nothing to do", horizon, self.current_time)
            return 0
        fired = 0
        firing = self.queue.pop_valid(self.generations)
        while firing is not None:
            if firing.time > horizon:
                self.queue.push(firing)
                break
            self._fire(firing)
            fired += 1
            firing = self.queue.pop_valid(self.generations)
        logger.debug("run_until(%g) fired %d events, now t=%g", horizon, fired, self.current_time)
        return fired

    # ------------------------------------------------------------------
    # Inspection

    @property
    def history(self) -> List[FiringRecord]:
        return self.ledger.history

    def total_tokens(self, places: Optional[Iterable[Place]] = None) -> int:
        if places is not None:
            places = list(places)
            for p in places:
                self.place_state(p)
        return self.ledger.total_tokens(self.state, places)

    def __repr__(self) -> str:
        return (
            f"Simulation(t={self.current_time!r}, events={len(self.events)}, "
            f"state={self.snapshot()!r}, queue={self.queue!r})"
        )
