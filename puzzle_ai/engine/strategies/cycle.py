"""
Cycle Strategy - Closed-form minimum swap sequence.
"""

import time
from typing import List

from ..base import SearchStrategy
from ..context import SearchContext
from ..factory import register_strategy
from ..heuristic import cycle_decomposition, target_index
from ..move import Move
from ..solution import SearchResult


@register_strategy
class CycleStrategy(SearchStrategy):
    """
    Sorts each permutation cycle directly.

    Repeatedly swaps the first slot of a cycle with the target slot of the
    piece it holds, placing one piece per swap. A cycle of length L takes
    L - 1 swaps, which is the minimum, so the result is always optimal and
    runs in O(N) regardless of puzzle size.
    """
    name = "cycle"
    description = "Cycle decomposition (instant) - Exact minimum swaps"
    timeout_sec = 1.0

    def solve(self, context: SearchContext) -> SearchResult:
        """
        Compute the swap sequence cycle by cycle.

        Args:
            context: Search context with start and target

        Returns:
            Complete SearchResult unless cancelled
        """
        start_time = time.perf_counter()

        goals = target_index(context.target)
        state = context.start
        moves: List[Move] = []
        cycles = cycle_decomposition(context.start, context.target)
        lower_bound = sum(len(c) - 1 for c in cycles)

        for cycle in cycles:
            if self._check_cancelled(context):
                cancelled = context.cancel_requested()
                return self._build_result(
                    context, moves, start_time, is_complete=False,
                    states_explored=len(moves),
                    was_cancelled=cancelled, timed_out=not cancelled,
                    lower_bound=lower_bound
                )

            anchor = cycle[0]
            while True:
                goal = goals[state.slots[anchor]]
                if goal == anchor:
                    break
                move = Move(anchor, goal)
                moves.append(move)
                state = state.apply_move(move)

        return self._build_result(
            context, moves, start_time, is_complete=True,
            states_explored=len(moves), lower_bound=lower_bound
        )
