"""
Ledger subsystem responsible for randomness, the firing trace and token
bookkeeping.

All waiting-time draws made by the engine are channelled through the
``EntropySource`` class so that runs are reproducible and auditable. A
draw is keyed by the event index and the generation stamp of the
scheduling it belongs to, not by its position in a global random
stream. Two runs that schedule the same event for the same generation
therefore see the same sample, however the runs were split into
``run_until`` calls.

The entropy source uses blake2s for stable seed derivation, ensuring
deterministic behaviour across Python interpreter sessions and versions.
"""

from __future__ import annotations

import hashlib
import math
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional

import numpy as np

from .config import EngineConfig
from .types import Place, PlaceState, Time


@dataclass
class EntropyRecord:
    """Record of a single entropy sample for replay support.

    Attributes:
        checkpoint_id: Identifier for the sampling checkpoint (e.g. "wait").
        event_index: Event the sample was drawn for.
        generation: Generation stamp of the scheduling that drew it.
        value: The sampled value in [0, 1).
    """
    checkpoint_id: str
    event_index: int
    generation: int
    value: float


@dataclass(frozen=True)
class FiringRecord:
    """One entry of the firing trace."""
    time: Time
    event_index: int
    generation: int


class EntropySource:
    """Centralised source of pseudorandomness with replay support.

    Attributes:
        base_seed: The base seed for deterministic generation.
        entropy_mode: If True, adds run-specific salt for variation.
        replay_mode: If True, records samples for later replay.
        run_salt: Random salt added when entropy_mode is True.
        replay_log: List of recorded samples when replay_mode is True.
        replay_cursor: Current position in replay_log during replay.
    """

    def __init__(self, base_seed: int, entropy_mode: bool = False, replay_mode: bool = False):
        self.base_seed = base_seed
        self.entropy_mode = entropy_mode
        self.replay_mode = replay_mode
        self.run_salt: int = int(np.random.randint(0, 2**31 - 1)) if entropy_mode else 0
        self.replay_log: list[EntropyRecord] = []
        self.replay_cursor: int = 0
        self.draws: int = 0

    def _derive_seed(self, checkpoint_id: str, event_index: int, generation: int) -> int:
        """Derive a deterministic 64-bit seed using blake2s.

        Python's built-in ``hash()`` is salted per process, so it cannot
        be used here.
        """
        h = hashlib.blake2s(digest_size=8)
        h.update(int(self.base_seed).to_bytes(8, byteorder='big', signed=True))
        h.update(int(self.run_salt).to_bytes(8, byteorder='big', signed=False))
        h.update(int(event_index).to_bytes(8, byteorder='big', signed=True))
        h.update(int(generation).to_bytes(8, byteorder='big', signed=True))
        h.update(checkpoint_id.encode('utf-8'))
        return int.from_bytes(h.digest(), byteorder='big', signed=False)

    def load_replay(self, records: Iterable[EntropyRecord]) -> None:
        """Queue previously recorded samples to be returned in order."""
        self.replay_log = list(records)
        self.replay_cursor = 0

    def sample_uniform(self, checkpoint_id: str, event_index: int, generation: int) -> float:
        """Return a uniform random sample in [0, 1).

        The sample is deterministic given the base seed, run salt,
        checkpoint id, event index and generation. When ``replay_mode``
        is enabled, previously recorded samples are returned first.
        """
        self.draws += 1
        if self.replay_mode and self.replay_cursor < len(self.replay_log):
            rec = self.replay_log[self.replay_cursor]
            self.replay_cursor += 1
            return rec.value

        seed = self._derive_seed(checkpoint_id, event_index, generation)
        rng = np.random.default_rng(seed)
        u = float(rng.random())

        if self.replay_mode:
            self.replay_log.append(EntropyRecord(checkpoint_id, event_index, generation, u))
            self.replay_cursor = len(self.replay_log)
        return u

    def sample_waiting_time(self, event_index: int, generation: int, rate: float) -> float:
        """Return an exponential waiting time with the given rate.

        Uses inversion of the exponential CDF on a uniform sample. An
        infinite rate yields zero.
        """
        u = self.sample_uniform("wait", event_index, generation)
        if math.isinf(rate):
            return 0.0
        return -math.log1p(-u) / rate


class Ledger:
    """Own the entropy source and the firing trace of one simulation."""

    def __init__(self, config: EngineConfig):
        self.cfg = config
        self.entropy = EntropySource(config.base_seed, config.entropy_mode, config.replay_mode)
        self.history: List[FiringRecord] = []
        self.firings = 0

    def record_firing(self, time: Time, event_index: int, generation: int) -> None:
        self.firings += 1
        if self.cfg.record_history:
            self.history.append(FiringRecord(time, event_index, generation))

    def fired_events(self) -> List[int]:
        """Return the event indices of the recorded trace, in firing order."""
        return [rec.event_index for rec in self.history]

    def firing_counts(self, n_events: int) -> np.ndarray:
        """Return how many recorded firings each event has, as an int array."""
        counts = np.zeros(n_events, dtype=np.int64)
        for rec in self.history:
            counts[rec.event_index] += 1
        return counts

    @staticmethod
    def total_tokens(state: Mapping[Place, PlaceState], places: Optional[Iterable[Place]] = None) -> int:
        """Sum token counts over ``places`` (all places when omitted).

        Over a closed set of places that only exchange tokens this total
        is invariant across firings.
        """
        if places is None:
            places = state.keys()
        return int(sum(state[p].tokens for p in places))
