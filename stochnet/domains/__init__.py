"""Event definitions for common model families."""

from .transitions import MassActionReaction, SimpleTransition

__all__ = ["MassActionReaction", "SimpleTransition"]
