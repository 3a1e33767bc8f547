"""Core engine components for stochnet."""
