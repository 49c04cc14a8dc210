"""
Move Module - A swap of the pieces in two slots.
"""

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class Move:
    """
    Swap the pieces at slots a and b.

    Moves are position swaps, never value swaps: applying (a, b) exchanges
    whatever pieces currently sit in those slots.

    Attributes:
        a: First slot index
        b: Second slot index
    """
    a: int
    b: int

    def __post_init__(self):
        if self.a == self.b:
            raise ValueError(f"Move must swap two different slots, got ({self.a}, {self.b})")
        if self.a < 0 or self.b < 0:
            raise ValueError(f"Slot indices must be non-negative, got ({self.a}, {self.b})")

    @property
    def slots(self) -> Tuple[int, int]:
        """Both slots touched by the move."""
        return (self.a, self.b)

    def to_dict(self) -> Dict[str, int]:
        return {"from": self.a, "to": self.b}

    def __str__(self) -> str:
        return f"swap({self.a}, {self.b})"
