"""Exceptions raised by the simulation engine."""

from __future__ import annotations


class SimulationError(Exception):
    """Base class for all engine errors."""


class UnknownPlace(SimulationError, KeyError):
    """A place was referenced that no event declared at construction."""

    def __init__(self, place):
        super().__init__(place)
        self.place = place

    def __str__(self) -> str:
        return f"place {self.place!r} is not referenced by any event"


class InvalidRate(SimulationError, ValueError):
    """An enabled event reported a hazard rate that cannot parameterise an exponential."""

    def __init__(self, event_index: int, rate: float):
        super().__init__(event_index, rate)
        self.event_index = event_index
        self.rate = rate

    def __str__(self) -> str:
        return f"event {self.event_index} is enabled but reported hazard rate {self.rate!r}"
