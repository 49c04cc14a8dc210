"""
Heuristic Module - Distance estimates between permutation states.

Provides the structural-distance heuristic that guides the search and the
cycle decomposition that gives the exact minimum number of swaps.
"""

from typing import Dict, List, Optional, Tuple

from .state import GridSize, PermutationState

# Cost charged for a piece that cannot be found in the target state
MISSING_PIECE_PENALTY = 100


def target_index(target: PermutationState) -> Dict[int, int]:
    """Map each piece to its slot in the target state."""
    return {piece: slot for slot, piece in enumerate(target.slots)}


def heuristic(
    state: PermutationState,
    target: Optional[PermutationState] = None,
    grid: Optional[GridSize] = None
) -> int:
    """
    Estimate remaining distance from state to target.

    Sum over slots of the structural distance between the slot and the
    target slot of the piece it holds.

    Args:
        state: Current state
        target: Goal state (identity if omitted)
        grid: Grid used for structural distance (square grid if omitted)

    Returns:
        Non-negative integer, 0 only when state == target
    """
    n = len(state)
    grid = grid or GridSize.square_for(n)
    goals = target_index(target) if target is not None else None

    total = 0
    for slot, piece in enumerate(state.slots):
        goal = piece if goals is None else goals.get(piece)
        if goal is None:
            total += MISSING_PIECE_PENALTY
        else:
            total += grid.distance(slot, goal)
    return total


def swap_delta(
    state: PermutationState,
    a: int,
    b: int,
    goals: Dict[int, int],
    grid: GridSize
) -> int:
    """
    Heuristic change caused by swapping slots a and b, in O(1).

    Args:
        state: State before the swap
        a: First slot
        b: Second slot
        goals: Piece -> target slot map (see target_index)
        grid: Grid for structural distance

    Returns:
        heuristic(after) - heuristic(before)
    """
    goal_a = goals[state.slots[a]]
    goal_b = goals[state.slots[b]]
    before = grid.distance(a, goal_a) + grid.distance(b, goal_b)
    after = grid.distance(b, goal_a) + grid.distance(a, goal_b)
    return after - before


def cycle_labels(state: PermutationState,
                 target: Optional[PermutationState] = None) -> Tuple[List[int], int]:
    """
    Label every slot with the permutation cycle it belongs to.

    Following slot -> target slot of its piece partitions the slots into
    cycles. Swapping two slots of one cycle splits it in two; swapping
    slots of different cycles merges them.

    Returns:
        (labels, cycle_count) where labels[slot] is the cycle number
    """
    n = len(state)
    goals = target_index(target) if target is not None else None
    labels = [-1] * n
    count = 0
    for start in range(n):
        if labels[start] != -1:
            continue
        slot = start
        while labels[slot] == -1:
            labels[slot] = count
            piece = state.slots[slot]
            slot = piece if goals is None else goals[piece]
        count += 1
    return labels, count


def cycle_decomposition(state: PermutationState,
                        target: Optional[PermutationState] = None) -> List[Tuple[int, ...]]:
    """
    Decompose the state into cycles of slots, in traversal order.

    Fixed points are returned as 1-cycles.
    """
    n = len(state)
    goals = target_index(target) if target is not None else None
    seen = [False] * n
    cycles = []
    for start in range(n):
        if seen[start]:
            continue
        cycle = []
        slot = start
        while not seen[slot]:
            seen[slot] = True
            cycle.append(slot)
            piece = state.slots[slot]
            slot = piece if goals is None else goals[piece]
        cycles.append(tuple(cycle))
    return cycles


def minimum_swaps(state: PermutationState,
                  target: Optional[PermutationState] = None) -> int:
    """
    Exact minimum number of swaps needed to reach target.

    A cycle of length L needs L - 1 swaps, so the total is N - #cycles.
    """
    _, count = cycle_labels(state, target)
    return len(state) - count
