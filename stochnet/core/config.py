"""
Simulation configuration definitions.

This module defines the configuration dataclass used to parameterise a
simulation run. Every field has an explicit default so that tests and
small scenarios can construct an engine without supplying values for
every option. See ``EngineConfig`` for the configuration consumed by
``stochnet.core.engine.Simulation``.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class EngineConfig:
    """Top level configuration for a stochnet simulation.

    Two runs built from the same events, the same initial marking and the
    same ``base_seed`` produce identical trajectories unless
    ``entropy_mode`` is switched on.
    """

    # Random seeds and entropy
    base_seed: int = 42
    entropy_mode: bool = False  # if True, inject run salt so runs differ
    replay_mode: bool = False   # if True, record waiting-time draws for exact replay

    # Simulated clock origin
    start_time: float = 0.0

    # Keep a per-firing trace in the ledger
    record_history: bool = True

    # Free-form values for scenario code; the engine ignores them
    extras: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Return a dict representation of the configuration.

        Useful for logging a run's parameters next to its results.
        """
        data = self.__dict__.copy()
        data["extras"] = dict(self.extras)
        return data
