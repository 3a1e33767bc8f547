"""
Event capability consumed by the engine.

An event declares three place lists: the places that gate whether it may
fire, the places its hazard rate is computed from, and the places it
writes when it fires. The lists may overlap. The engine reads the
declarations once at construction to build its dependency index, then
calls them again on every scheduling to gather current token counts.

Concrete events live outside the core (see ``stochnet.domains``).
Implementations must behave as pure functions of their arguments and
must not change their declarations during a simulation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Sequence

from .types import Place, PlaceState, StateChange


class Event(ABC):
    """A randomly timed transition over integer places."""

    @abstractmethod
    def enablement_inputs(self) -> List[Place]: ...

    @abstractmethod
    def rate_inputs(self) -> List[Place]: ...

    @abstractmethod
    def outputs(self) -> List[Place]: ...

    def enabled(self, inputs: Sequence[PlaceState]) -> bool:
        """Return whether the event may fire.

        ``inputs`` holds the state of each place from
        ``enablement_inputs()``, in the same order. Events without a
        precondition are always enabled.
        """
        return True

    @abstractmethod
    def hazard_rate(self, inputs: Sequence[PlaceState]) -> float:
        """Return the exponential rate given the state of ``rate_inputs()``.

        Only called while the event is enabled. Must be positive; ``inf``
        means the event fires immediately.
        """

    @abstractmethod
    def fire(self) -> List[StateChange]:
        """Return the token deltas to apply, in application order."""
