"""
Base Strategy Module - Abstract base class for search strategies.
"""

import time
from abc import ABC, abstractmethod
from typing import Iterator, List, Optional, Sequence

from .context import SearchContext
from .heuristic import minimum_swaps
from .move import Move
from .solution import SearchMetrics, SearchResult
from .state import PermutationState


class SearchStrategy(ABC):
    """
    Abstract base class for all search strategies.

    Subclasses must implement the solve() method and define
    name and description class attributes.

    Attributes:
        name: Short identifier for the strategy
        description: Human-readable description for UI
        timeout_sec: Default timeout for this strategy
    """
    name: str = "base"
    description: str = "Base strategy"
    timeout_sec: float = 2.0

    @abstractmethod
    def solve(self, context: SearchContext) -> SearchResult:
        """
        Compute a swap sequence from context.start to context.target.

        Must periodically check context.is_cancelled() and return
        partial result if True.

        Args:
            context: Search context with states, budget, cancellation

        Returns:
            SearchResult with moves and metrics
        """
        pass

    def neighbors(self, state: PermutationState) -> Iterator[Move]:
        """
        Generate every swap move for a state.

        Any two slots may be exchanged, so a state of N pieces has
        N*(N-1)/2 neighbors, generated in (a, b) lexicographic order.
        """
        n = len(state)
        for a in range(n):
            for b in range(a + 1, n):
                yield Move(a, b)

    def _check_cancelled(self, context: SearchContext) -> bool:
        """
        Convenience method to check cancellation.

        Args:
            context: Search context

        Returns:
            True if strategy should stop
        """
        return context.is_cancelled()

    def _build_result(
        self,
        context: SearchContext,
        moves: Sequence[Move],
        start_time: float,
        is_complete: bool,
        states_explored: int = 0,
        pruned_branches: int = 0,
        was_cancelled: bool = False,
        timed_out: bool = False,
        budget_exhausted: bool = False,
        lower_bound: Optional[int] = None
    ) -> SearchResult:
        """Build SearchResult, replaying moves to record intermediate states."""
        states: List[PermutationState] = [context.start]
        for move in moves:
            states.append(states[-1].apply_move(move))

        if lower_bound is None:
            lower_bound = minimum_swaps(context.start, context.target)

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        return SearchResult(
            moves=list(moves),
            is_complete=is_complete,
            was_cancelled=was_cancelled,
            timed_out=timed_out,
            budget_exhausted=budget_exhausted,
            states=states,
            metrics=SearchMetrics(
                computation_time_ms=elapsed_ms,
                states_explored=states_explored,
                pruned_branches=pruned_branches,
                strategy_name=self.name,
                lower_bound=lower_bound,
            )
        )
