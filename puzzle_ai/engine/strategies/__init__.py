"""
Strategies Package - Concrete strategy implementations.

Import this module to register all built-in strategies.
"""

from .astar import AStarStrategy
from .cycle import CycleStrategy

__all__ = [
    "AStarStrategy",
    "CycleStrategy",
]
