"""Tool-driven environments. Importing this package registers them."""

from ringpuzzle.environment.ring_env import RingPuzzleEnvironment

__all__ = ["RingPuzzleEnvironment"]
