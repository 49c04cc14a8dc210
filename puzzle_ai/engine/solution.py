"""
Solution Module - Result of a search strategy.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .move import Move
from .state import PermutationState


@dataclass
class SearchMetrics:
    """
    Performance metrics for a search.

    Attributes:
        computation_time_ms: Time taken in milliseconds
        states_explored: Number of nodes expanded
        pruned_branches: Neighbors skipped by lower-bound pruning
        strategy_name: Name of strategy that computed this result
        lower_bound: Minimum swap count from cycle decomposition
    """
    computation_time_ms: float = 0.0
    states_explored: int = 0
    pruned_branches: int = 0
    strategy_name: str = ""
    lower_bound: int = 0


@dataclass
class SearchResult:
    """
    Result of a strategy computation.

    An incomplete result is not an error: its moves (possibly none) lead
    to a state strictly closer to the target than the start.

    Attributes:
        moves: Ordered swaps to apply to the start state
        is_complete: True if the moves reach the target
        was_cancelled: True if the caller set the cancel flag
        timed_out: True if the wall-clock timeout stopped the search
        budget_exhausted: True if the expansion budget ran out
        metrics: Performance statistics
        states: State after each move (first is the start)
    """
    moves: List[Move] = field(default_factory=list)
    is_complete: bool = False
    was_cancelled: bool = False
    timed_out: bool = False
    budget_exhausted: bool = False
    metrics: SearchMetrics = field(default_factory=SearchMetrics)
    states: List[PermutationState] = field(default_factory=list)

    @property
    def move_count(self) -> int:
        """Number of moves in result."""
        return len(self.moves)

    @property
    def has_moves(self) -> bool:
        """Check if result has any moves."""
        return len(self.moves) > 0

    @property
    def next_move(self) -> Optional[Move]:
        """First move of a complete result, None otherwise."""
        if self.is_complete and self.moves:
            return self.moves[0]
        return None

    @property
    def final_state(self) -> Optional[PermutationState]:
        """State reached after all moves."""
        return self.states[-1] if self.states else None
