"""
Common value types shared across the engine.

Places are plain hashable keys (integers in practice); the engine never
wraps them in objects. Token counts live in ``PlaceState`` records so that
callers can be handed a mutable reference for seeding the initial marking.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Hashable

Place = Hashable
Time = float


@dataclass
class PlaceState:
    """Current token count of one place.

    Counts are signed; the engine applies any integer delta without
    checking that the result stays meaningful for the model.
    """
    tokens: int = 0


@dataclass(frozen=True)
class StateChange:
    """A signed token delta for one place, produced when an event fires."""
    place: Place
    value: int


State = Dict[Place, PlaceState]
