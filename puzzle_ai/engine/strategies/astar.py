"""
A* Strategy - Best-first search over the swap graph.

Explores states in order of f = g + weight * h, where g is the number of
swaps taken and h the structural-distance heuristic. Any two slots may be
swapped, so every expansion considers all N*(N-1)/2 swaps; lower-bound
pruning narrows that to swaps inside one permutation cycle, the only swaps
that keep a path at the minimum swap count.
"""

import heapq
import itertools
import logging
import time
from dataclasses import dataclass
from typing import Dict, List, Set, Tuple

from ..base import SearchStrategy
from ..context import SearchContext
from ..factory import register_strategy
from ..heuristic import cycle_labels, heuristic, minimum_swaps, swap_delta, target_index
from ..move import Move
from ..solution import SearchResult
from ..state import PermutationState

logger = logging.getLogger(__name__)


@dataclass
class SearchNode:
    """
    Open-set entry of one search invocation.

    Attributes:
        state: State reached
        g_score: Swaps taken to reach it
        h_score: Heuristic estimate to the target
        f_score: g_score + weight * h_score
        seq: Insertion counter
    """
    state: PermutationState
    g_score: int
    h_score: int
    f_score: float
    seq: int

    def __lt__(self, other: "SearchNode") -> bool:
        """Lowest f first; among equal f the most recently inserted (LIFO)."""
        if self.f_score != other.f_score:
            return self.f_score < other.f_score
        return self.seq > other.seq


@register_strategy
class AStarStrategy(SearchStrategy):
    """
    Best-first search returning the fewest swaps found within budget.

    Algorithm:
        1. Push the start state with f = weight * h
        2. Pop the lowest-f node (LIFO among ties); stop if it is the target
        3. Generate its swap neighbors, skipping closed states and states
           already reached with fewer swaps
        4. On budget exhaustion or cancellation return the path to the
           lowest-h state seen, if it beats the start

    Parameters:
        heuristic_weight: Weight applied to h (1.0 = plain A*)
        prune_with_lower_bound: Only expand swaps that lower the
            cycle-decomposition bound (default True)
    """
    name = "astar"
    description = "A* (best-first) - Fewest swaps under an expansion budget"
    timeout_sec = 2.0

    def __init__(self, heuristic_weight: float = 1.0,
                 prune_with_lower_bound: bool = True):
        """
        Initialize A* strategy.

        Args:
            heuristic_weight: Weight for the heuristic term (>= 1.0 trades
                optimality for speed)
            prune_with_lower_bound: Restrict swaps to same-cycle pairs
        """
        self.heuristic_weight = heuristic_weight
        self.prune_with_lower_bound = prune_with_lower_bound

    def solve(self, context: SearchContext) -> SearchResult:
        """
        Search for a swap sequence from context.start to context.target.

        Args:
            context: Search context with states, budget and cancellation

        Returns:
            SearchResult; complete when the target was reached
        """
        start_time = time.perf_counter()

        start, target, grid = context.start, context.target, context.grid
        lower_bound = minimum_swaps(start, target)

        if start == target:
            return self._build_result(context, [], start_time, is_complete=True,
                                      lower_bound=0)

        goals = target_index(target)
        seq = itertools.count()
        h_start = heuristic(start, target, grid)
        open_heap: List[SearchNode] = [SearchNode(
            state=start, g_score=0, h_score=h_start,
            f_score=self.heuristic_weight * h_start, seq=next(seq)
        )]
        g_scores: Dict[PermutationState, int] = {start: 0}
        came_from: Dict[PermutationState, Tuple[PermutationState, Move]] = {}
        closed: Set[PermutationState] = set()

        best_state, best_h = start, h_start
        expanded = 0
        pruned = 0
        was_cancelled = False
        timed_out = False
        budget_exhausted = False

        while open_heap:
            if self._check_cancelled(context):
                was_cancelled = context.cancel_requested()
                timed_out = not was_cancelled
                break
            if context.iterations_exhausted(expanded):
                budget_exhausted = True
                break

            node = heapq.heappop(open_heap)
            current = node.state
            if current in closed:
                continue

            if current == target:
                path = self._reconstruct_path(came_from, current)
                logger.debug(
                    f"[AStar] Solved in {len(path)} swaps (bound {lower_bound}), "
                    f"{expanded} states expanded, {pruned} pruned"
                )
                return self._build_result(
                    context, path, start_time, is_complete=True,
                    states_explored=expanded, pruned_branches=pruned,
                    lower_bound=lower_bound
                )

            closed.add(current)
            expanded += 1

            moves, skipped = self._candidate_moves(current, context)
            pruned += skipped

            for move in moves:
                neighbor = current.apply_move(move)
                if neighbor in closed:
                    continue

                tentative = node.g_score + 1
                if tentative >= g_scores.get(neighbor, tentative + 1):
                    continue

                g_scores[neighbor] = tentative
                came_from[neighbor] = (current, move)
                h = node.h_score + swap_delta(current, move.a, move.b, goals, grid)
                if h < best_h:
                    best_state, best_h = neighbor, h

                heapq.heappush(open_heap, SearchNode(
                    state=neighbor, g_score=tentative, h_score=h,
                    f_score=tentative + self.heuristic_weight * h, seq=next(seq)
                ))

            context.checkpoint(expanded)

        # Budget spent or cancelled: best partial path, possibly empty
        path = []
        if best_state != start:
            path = self._reconstruct_path(came_from, best_state)

        logger.debug(
            f"[AStar] Stopped after {expanded} expansions "
            f"(cancelled={was_cancelled}, timeout={timed_out}, budget={budget_exhausted}), "
            f"partial path {len(path)} swaps, h {h_start} -> {best_h}"
        )

        return self._build_result(
            context, path, start_time, is_complete=False,
            states_explored=expanded, pruned_branches=pruned,
            was_cancelled=was_cancelled, timed_out=timed_out,
            budget_exhausted=budget_exhausted,
            lower_bound=lower_bound
        )

    def _candidate_moves(self, state: PermutationState,
                         context: SearchContext) -> Tuple[List[Move], int]:
        """
        Swaps to expand from state.

        Returns:
            Tuple of (moves, pruned_count)
        """
        if not self.prune_with_lower_bound:
            return list(self.neighbors(state)), 0

        n = len(state)
        labels, count = cycle_labels(state, context.target)
        members: List[List[int]] = [[] for _ in range(count)]
        position = [0] * n
        for slot, label in enumerate(labels):
            position[slot] = len(members[label])
            members[label].append(slot)

        # Same (a, b) order as neighbors(), built from each cycle's members
        moves = []
        for a in range(n):
            cycle = members[labels[a]]
            for b in cycle[position[a] + 1:]:
                moves.append(Move(a, b))
        return moves, n * (n - 1) // 2 - len(moves)

    def _reconstruct_path(
        self,
        came_from: Dict[PermutationState, Tuple[PermutationState, Move]],
        state: PermutationState
    ) -> List[Move]:
        """Walk parent links back to the start."""
        path: List[Move] = []
        while state in came_from:
            state, move = came_from[state]
            path.append(move)
        path.reverse()
        return path
