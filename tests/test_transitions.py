"""
Tests for the domains.transitions module.

Checks the declared place lists, enablement, hazard and deltas of the
ready-made event types, and runs them inside a simulation.
"""

import os
import sys
import unittest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from stochnet.core.config import EngineConfig
from stochnet.core.engine import Simulation
from stochnet.core.events import Event
from stochnet.core.types import PlaceState, StateChange
from stochnet.domains.transitions import MassActionReaction, SimpleTransition


class TestSimpleTransition(unittest.TestCase):
    """Tests for the SimpleTransition event."""

    def setUp(self):
        self.event = SimpleTransition(input_place=0, output_place=1, rate=0.5)

    def test_is_event(self):
        self.assertIsInstance(self.event, Event)

    def test_place_lists(self):
        self.assertEqual(self.event.enablement_inputs(), [0])
        self.assertEqual(self.event.rate_inputs(), [])
        self.assertEqual(self.event.outputs(), [1, 0])

    def test_enabled_needs_a_token(self):
        self.assertFalse(self.event.enabled([PlaceState(0)]))
        self.assertTrue(self.event.enabled([PlaceState(1)]))

    def test_constant_rate(self):
        self.assertEqual(self.event.hazard_rate([]), 0.5)

    def test_fire_moves_one_token(self):
        self.assertEqual(self.event.fire(), [StateChange(0, -1), StateChange(1, 1)])


class TestMassActionReaction(unittest.TestCase):
    """Tests for the MassActionReaction event."""

    def test_dimerisation_hazard(self):
        """2A -> B has hazard k * C(n, 2)."""
        rxn = MassActionReaction({0: 2}, {1: 1}, 0.1)
        self.assertAlmostEqual(rxn.hazard_rate([PlaceState(5)]), 0.1 * 10)
        self.assertFalse(rxn.enabled([PlaceState(1)]))
        self.assertTrue(rxn.enabled([PlaceState(2)]))
        self.assertEqual(rxn.fire(), [StateChange(0, -2), StateChange(1, 1)])

    def test_bimolecular_hazard(self):
        rxn = MassActionReaction({0: 1, 1: 1}, {2: 1}, 2.0)
        self.assertEqual(rxn.hazard_rate([PlaceState(3), PlaceState(4)]), 24.0)
        self.assertFalse(rxn.enabled([PlaceState(3), PlaceState(0)]))

    def test_catalyst_cancels(self):
        """E + S -> E + P leaves E unchanged."""
        rxn = MassActionReaction({0: 1, 1: 1}, {0: 1, 2: 1}, 1.0)
        self.assertEqual(rxn.fire(), [StateChange(1, -1), StateChange(2, 1)])
        self.assertEqual(rxn.outputs(), [1, 2])
        self.assertEqual(rxn.enablement_inputs(), [0, 1])

    def test_source_reaction_always_enabled(self):
        rxn = MassActionReaction({}, {0: 1}, 3.0)
        self.assertTrue(rxn.enabled([]))
        self.assertEqual(rxn.hazard_rate([]), 3.0)

    def test_non_positive_coefficients_rejected(self):
        with self.assertRaises(ValueError):
            MassActionReaction({0: 0}, {1: 1}, 1.0)
        with self.assertRaises(ValueError):
            MassActionReaction({0: 1}, {1: -1}, 1.0)

    def test_reversible_isomerisation_conserves_mass(self):
        """A <-> B keeps A + B constant through a long run."""
        events = [
            MassActionReaction({0: 1}, {1: 1}, 1.0),
            MassActionReaction({1: 1}, {0: 1}, 0.5),
        ]
        sim = Simulation(events, EngineConfig(base_seed=3))
        sim.set_tokens(0, 40)
        sim.setup_initial_firings()
        sim.run_until(20.0)
        self.assertEqual(sim.total_tokens([0, 1]), 40)
        self.assertGreater(len(sim.history), 40)

    def test_annihilation_runs_to_completion(self):
        """2A -> 0 stops once fewer than two A remain."""
        sim = Simulation([MassActionReaction({0: 2}, {}, 1.0)])
        sim.set_tokens(0, 7)
        sim.setup_initial_firings()
        self.assertEqual(sim.run_until(float("inf")), 3)
        self.assertEqual(sim.tokens(0), 1)
        self.assertEqual(sim.pending_firings, 0)


if __name__ == "__main__":
    unittest.main()
