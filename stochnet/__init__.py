"""
stochnet: discrete-event simulation of continuous-time stochastic systems.

The engine simulates models whose state is a set of integer counters
("places") changed by randomly timed events, such as stochastic Petri
nets, chemical reaction networks and simple queueing models. Each
enabled event waits an exponentially distributed time governed by its
hazard rate; the earliest one fires, applies its token deltas, and the
events that read a changed place draw new waiting times.

The major subpackages are:

``stochnet.core``       Engine components: configuration, value types,
                        the event capability, the dependency index, the
                        firing queue, the ledger and the simulation loop.
``stochnet.domains``    Ready-made event types (simple transitions,
                        mass-action reactions).
``stochnet.scenarios``  Runnable example models.

Please see the individual modules for further documentation.
"""

from .core.config import EngineConfig
from .core.engine import Simulation
from .core.errors import InvalidRate, SimulationError, UnknownPlace
from .core.events import Event
from .core.types import PlaceState, StateChange

__all__ = [
    "EngineConfig",
    "Event",
    "InvalidRate",
    "PlaceState",
    "Simulation",
    "SimulationError",
    "StateChange",
    "UnknownPlace",
    "core",
    "domains",
    "scenarios",
]
