"""
Tests for the difficulty estimator and the stuck-level classifier.

Usage:
    pytest tests/test_difficulty.py
"""

import itertools
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from puzzle_ai.engine import (
    DifficultySignals,
    GridSize,
    PermutationState,
    StuckLevel,
    classify_stuck_level,
    difficulty_signals,
    estimate_difficulty,
)
from puzzle_ai.engine.difficulty import (
    clustering_coefficient,
    clustering_signal,
    count_rotated_pieces,
    count_row_swaps,
    count_wrong_corners,
    count_wrong_edges,
    max_displacement,
    total_displacement,
)

BORDER_ROTATION = (3, 0, 1, 6, 4, 2, 7, 8, 5)
GRID_3x3 = GridSize(rows=3, cols=3)


def _rotated(grid):
    """State where every piece sits at the 180-degree rotation of its goal."""
    return PermutationState.from_list(range(grid.piece_count - 1, -1, -1))


# -- weights ------------------------------------------------------------------


@pytest.mark.parametrize("signals, expected", [
    ((100, 0, 0, 0), 30.0),
    ((0, 100, 0, 0), 25.0),
    ((0, 0, 100, 0), 25.0),
    ((0, 0, 0, 100), 20.0),
    ((40, 60, 20, 10), 34.0),
    ((100, 100, 100, 100), 100.0),
])
def test_signal_weights(signals, expected):
    assert DifficultySignals(*signals).score == pytest.approx(expected)


# -- bounds -------------------------------------------------------------------


def test_solved_state_scores_zero():
    assert estimate_difficulty(PermutationState.identity(9), GRID_3x3) == 0.0


def test_scores_stay_in_bounds_for_every_2x3_permutation():
    grid = GridSize(rows=2, cols=3)
    for perm in itertools.permutations(range(6)):
        score = estimate_difficulty(PermutationState.from_list(perm), grid)
        assert 0.0 <= score <= 100.0


def test_maximally_scrambled_expert_puzzle_is_near_top():
    grid = GridSize(rows=8, cols=10)
    state = _rotated(grid)
    signals = difficulty_signals(state, grid)

    assert signals.complexity == 100.0
    assert signals.displacement == pytest.approx(100.0)
    assert signals.pattern == 100.0
    assert estimate_difficulty(state, grid) > 80.0


def test_rotation_reaches_max_displacement():
    grid = GridSize(rows=3, cols=4)
    assert total_displacement(_rotated(grid), grid) == max_displacement(grid)
    assert max_displacement(GRID_3x3) == 24


# -- signals ------------------------------------------------------------------


def test_border_rotation_signals():
    state = PermutationState.from_list(BORDER_ROTATION)
    signals = difficulty_signals(state, GRID_3x3)

    assert signals.complexity == pytest.approx(11.25)
    assert signals.displacement == pytest.approx(100 * 8 / 24)
    assert signals.clustering == pytest.approx(100 * (60 / 28) / 4)
    assert signals.pattern == 44.0
    assert estimate_difficulty(state, GRID_3x3) == pytest.approx(33.9, abs=0.01)


def test_scattered_errors_cluster_higher_than_a_block():
    grid = GridSize(rows=4, cols=4)
    # Swap 0<->1 and 4<->5: one 2x2 block in the corner
    block = list(range(16))
    block[0], block[1], block[4], block[5] = 1, 0, 5, 4
    # Swap 0<->3 and 12<->15: the four corners
    scattered = list(range(16))
    scattered[0], scattered[3], scattered[12], scattered[15] = 3, 0, 15, 12

    block_state = PermutationState.from_list(block)
    scattered_state = PermutationState.from_list(scattered)

    assert clustering_coefficient(block_state, grid) == pytest.approx(8 / 6)
    assert clustering_coefficient(scattered_state, grid) == pytest.approx(4.0)
    assert clustering_signal(scattered_state, grid) > clustering_signal(block_state, grid)


def test_clustering_needs_two_misplaced_pieces():
    assert clustering_coefficient(PermutationState.identity(4), GridSize(2, 2)) == 0.0


def test_pattern_counts():
    grid = GridSize(rows=2, cols=3)
    reversed_top_row = PermutationState.from_list([2, 1, 0, 3, 4, 5])
    assert count_row_swaps(reversed_top_row, grid) == 3
    assert count_wrong_corners(reversed_top_row, grid) == 2
    assert count_wrong_edges(reversed_top_row, grid) == 2

    square = GridSize(rows=2, cols=2)
    assert count_rotated_pieces(_rotated(square), square) == 4

    border = PermutationState.from_list(BORDER_ROTATION)
    assert count_row_swaps(border, GRID_3x3) == 0
    assert count_wrong_corners(border, GRID_3x3) == 4
    assert count_wrong_edges(border, GRID_3x3) == 8
    assert count_rotated_pieces(border, GRID_3x3) == 0


def test_grid_mismatch_rejected():
    with pytest.raises(ValueError):
        difficulty_signals(PermutationState.from_list([1, 0, 2, 3]), GRID_3x3)


# -- stuck level --------------------------------------------------------------


@pytest.mark.parametrize("moves, expected", [
    (0, StuckLevel.NONE),
    (4, StuckLevel.NONE),
    (5, StuckLevel.SLIGHT),
    (9, StuckLevel.SLIGHT),
    (10, StuckLevel.MODERATE),
    (18, StuckLevel.MODERATE),
    (19, StuckLevel.SEVERE),
])
def test_stuck_thresholds(moves, expected):
    # N = 9, no piece placed: excess == moves
    assert classify_stuck_level(moves, correct_count=0, piece_count=9) is expected


def test_correct_pieces_offset_excess():
    assert classify_stuck_level(10, correct_count=5, piece_count=9) is StuckLevel.SLIGHT


def test_stuck_level_is_monotonic_in_moves():
    ranks = [
        classify_stuck_level(moves, correct_count=3, piece_count=16).rank
        for moves in range(0, 80)
    ]
    assert ranks == sorted(ranks)
    assert ranks[0] == 0 and ranks[-1] == 3


def test_stuck_level_is_idempotent():
    first = classify_stuck_level(30, correct_count=2, piece_count=9)
    assert classify_stuck_level(30, correct_count=2, piece_count=9) is first
