"""
Ready-made event types for common stochastic models.

``SimpleTransition`` moves one token from an input place to an output
place at a constant rate, which is enough for basic Petri nets and
competing-decay models. ``MassActionReaction`` models one reaction
channel of a chemical reaction network under stochastic mass-action
kinetics: its hazard is the rate constant times the number of distinct
reactant combinations available.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from math import comb
from typing import Dict, List, Sequence

from ..core.events import Event
from ..core.types import Place, PlaceState, StateChange


@dataclass(frozen=True)
class SimpleTransition(Event):
    """Move one token from ``input_place`` to ``output_place`` at ``rate``."""
    input_place: Place
    output_place: Place
    rate: float

    def enablement_inputs(self) -> List[Place]:
        return [self.input_place]

    def rate_inputs(self) -> List[Place]:
        return []

    def outputs(self) -> List[Place]:
        return [self.output_place, self.input_place]

    def enabled(self, inputs: Sequence[PlaceState]) -> bool:
        return inputs[0].tokens > 0

    def hazard_rate(self, inputs: Sequence[PlaceState]) -> float:
        return self.rate

    def fire(self) -> List[StateChange]:
        return [
            StateChange(self.input_place, -1),
            StateChange(self.output_place, 1),
        ]


@dataclass(frozen=True)
class MassActionReaction(Event):
    """A reaction channel ``sum(s_i X_i) -> sum(p_j Y_j)``.

    ``reactants`` and ``products`` map places to stoichiometric
    coefficients. The hazard is ``rate_constant * prod(C(n_i, s_i))``
    where ``n_i`` is the current count of reactant ``i``. A reaction
    with no reactants is a constant-rate source.
    """
    reactants: Dict[Place, int]
    products: Dict[Place, int]
    rate_constant: float
    _net: Dict[Place, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        net: Dict[Place, int] = {}
        for place, coeff in self.reactants.items():
            if coeff <= 0:
                raise ValueError(f"reactant coefficient for {place!r} must be positive, got {coeff}")
            net[place] = net.get(place, 0) - coeff
        for place, coeff in self.products.items():
            if coeff <= 0:
                raise ValueError(f"product coefficient for {place!r} must be positive, got {coeff}")
            net[place] = net.get(place, 0) + coeff
        # catalysts cancel out and produce no delta
        object.__setattr__(self, "_net", {p: d for p, d in net.items() if d != 0})

    def enablement_inputs(self) -> List[Place]:
        return list(self.reactants)

    def rate_inputs(self) -> List[Place]:
        return list(self.reactants)

    def outputs(self) -> List[Place]:
        return list(self._net)

    def enabled(self, inputs: Sequence[PlaceState]) -> bool:
        return all(ps.tokens >= coeff for ps, coeff in zip(inputs, self.reactants.values()))

    def hazard_rate(self, inputs: Sequence[PlaceState]) -> float:
        combos = 1
        for ps, coeff in zip(inputs, self.reactants.values()):
            combos *= comb(ps.tokens, coeff)
        return self.rate_constant * combos

    def fire(self) -> List[StateChange]:
        return [StateChange(place, delta) for place, delta in self._net.items()]
