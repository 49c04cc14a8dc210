"""
Difficulty Module - 0-100 difficulty score for a puzzle arrangement.

The score combines four signals, each normalized to [0, 100]:

    complexity    piece count relative to the largest puzzle tier
    displacement  total structural distance of pieces from their goals,
                  relative to the 180-degree rotation (the maximum)
    clustering    mean pairwise distance between misplaced pieces,
                  relative to the grid diameter
    pattern       bonuses for row inversions, wrong corners, wrong edges
                  and pieces sitting at the rotation of their goal

    score = 0.30*complexity + 0.25*displacement + 0.25*clustering + 0.20*pattern
"""

import logging
from dataclasses import dataclass
from typing import Dict

import numpy as np

from .state import GridSize, PermutationState

logger = logging.getLogger(__name__)

WEIGHTS: Dict[str, float] = {
    "complexity": 0.30,
    "displacement": 0.25,
    "clustering": 0.25,
    "pattern": 0.20,
}

# Piece count of the largest puzzle tier (8x10 expert jigsaw)
REFERENCE_PIECE_COUNT = 80

ROW_SWAP_BONUS = 10
CORNER_BONUS = 5
EDGE_BONUS = 3
ROTATION_BONUS = 15


@dataclass(frozen=True)
class DifficultySignals:
    """
    Normalized difficulty signals, each in [0, 100].

    Attributes:
        complexity: Base complexity from piece count
        displacement: Total displacement signal
        clustering: Clustering signal of misplaced pieces
        pattern: Pattern complexity signal
    """
    complexity: float
    displacement: float
    clustering: float
    pattern: float

    @property
    def score(self) -> float:
        """Weighted combination clamped to [0, 100] and rounded to 2 places."""
        total = (
            WEIGHTS["complexity"] * self.complexity
            + WEIGHTS["displacement"] * self.displacement
            + WEIGHTS["clustering"] * self.clustering
            + WEIGHTS["pattern"] * self.pattern
        )
        return round(float(np.clip(total, 0.0, 100.0)), 2)


def _coordinates(slots: np.ndarray, grid: GridSize) -> np.ndarray:
    """(k, 2) array of (row, col) for an array of slots."""
    return np.stack(np.divmod(slots, grid.cols), axis=-1)


def base_complexity(piece_count: int) -> float:
    """Complexity signal proportional to piece count."""
    return 100.0 * min(1.0, piece_count / REFERENCE_PIECE_COUNT)


def total_displacement(state: PermutationState, grid: GridSize) -> int:
    """Sum of structural distances between each slot and its piece's goal."""
    current = _coordinates(np.arange(len(state)), grid)
    goal = _coordinates(np.asarray(state.slots), grid)
    return int(np.abs(current - goal).sum())


def max_displacement(grid: GridSize) -> int:
    """
    Largest total displacement possible on the grid.

    Reached by the 180-degree rotation, which reverses both rows and
    columns and so maximizes each axis independently.
    """
    rows = np.arange(grid.rows)
    cols = np.arange(grid.cols)
    row_part = np.abs(2 * rows - (grid.rows - 1)).sum() * grid.cols
    col_part = np.abs(2 * cols - (grid.cols - 1)).sum() * grid.rows
    return int(row_part + col_part)


def displacement_signal(state: PermutationState, grid: GridSize) -> float:
    limit = max_displacement(grid)
    if limit == 0:
        return 0.0
    return 100.0 * total_displacement(state, grid) / limit


def clustering_coefficient(state: PermutationState, grid: GridSize) -> float:
    """
    Mean pairwise structural distance between misplaced pieces.

    Uses the slots the misplaced pieces currently occupy. Scattered errors
    give a larger value than a single misplaced block.

    Returns:
        Mean distance, 0.0 with fewer than two misplaced pieces
    """
    misplaced = np.asarray(state.misplaced_slots())
    if misplaced.size < 2:
        return 0.0
    coords = _coordinates(misplaced, grid)
    pairwise = np.abs(coords[:, None, :] - coords[None, :, :]).sum(axis=-1)
    upper = np.triu_indices(misplaced.size, k=1)
    return float(pairwise[upper].mean())


def clustering_signal(state: PermutationState, grid: GridSize) -> float:
    diameter = (grid.rows - 1) + (grid.cols - 1)
    if diameter == 0:
        return 0.0
    return min(100.0, 100.0 * clustering_coefficient(state, grid) / diameter)


def count_row_swaps(state: PermutationState, grid: GridSize) -> int:
    """
    Count inverted pairs among pieces already in their goal row.

    For every row, pieces that belong in that row and sit in it are
    compared pairwise; a pair whose goal columns are in the opposite order
    of their current columns is one inversion.
    """
    inversions = 0
    for row in range(grid.rows):
        first = row * grid.cols
        goal_cols = [
            piece % grid.cols
            for piece in state.slots[first:first + grid.cols]
            if piece // grid.cols == row
        ]
        for i in range(len(goal_cols)):
            for j in range(i + 1, len(goal_cols)):
                if goal_cols[i] > goal_cols[j]:
                    inversions += 1
    return inversions


def count_wrong_corners(state: PermutationState, grid: GridSize) -> int:
    return sum(1 for slot in grid.corner_slots() if state.slots[slot] != slot)


def count_wrong_edges(state: PermutationState, grid: GridSize) -> int:
    """Border slots (corners included) holding a foreign piece."""
    return sum(1 for slot in grid.edge_slots() if state.slots[slot] != slot)


def count_rotated_pieces(state: PermutationState, grid: GridSize) -> int:
    """Misplaced pieces sitting at the 180-degree rotation of their goal."""
    return sum(
        1 for slot, piece in enumerate(state.slots)
        if piece != slot and grid.rotated_slot(piece) == slot
    )


def pattern_complexity(state: PermutationState, grid: GridSize) -> float:
    """Pattern bonus signal capped at 100."""
    bonus = (
        ROW_SWAP_BONUS * count_row_swaps(state, grid)
        + CORNER_BONUS * count_wrong_corners(state, grid)
        + EDGE_BONUS * count_wrong_edges(state, grid)
        + ROTATION_BONUS * count_rotated_pieces(state, grid)
    )
    return float(min(100, bonus))


def difficulty_signals(state: PermutationState, grid: GridSize) -> DifficultySignals:
    """Compute all four normalized signals for a state."""
    if grid.piece_count != len(state):
        raise ValueError(
            f"Grid {grid.rows}x{grid.cols} does not match {len(state)} pieces"
        )
    return DifficultySignals(
        complexity=base_complexity(len(state)),
        displacement=displacement_signal(state, grid),
        clustering=clustering_signal(state, grid),
        pattern=pattern_complexity(state, grid),
    )


def estimate_difficulty(state: PermutationState, grid: GridSize) -> float:
    """
    Estimate how hard an arrangement is to solve.

    Args:
        state: Current arrangement
        grid: Grid dimensions

    Returns:
        Score in [0, 100]; exactly 0 for the solved state
    """
    if state.is_solved:
        return 0.0

    signals = difficulty_signals(state, grid)
    logger.debug(
        f"Difficulty signals: complexity={signals.complexity:.1f} "
        f"displacement={signals.displacement:.1f} clustering={signals.clustering:.1f} "
        f"pattern={signals.pattern:.1f} -> {signals.score}"
    )
    return signals.score
