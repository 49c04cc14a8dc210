"""
Stuck Level Module - Classifies excess effort relative to progress.
"""

from enum import Enum


class StuckLevel(Enum):
    """
    How far the player's move count runs ahead of their progress.

    States:
        NONE: On track
        SLIGHT: More than N/2 excess moves
        MODERATE: More than N excess moves
        SEVERE: More than 2N excess moves
    """
    NONE = "none"
    SLIGHT = "slight"
    MODERATE = "moderate"
    SEVERE = "severe"

    @property
    def rank(self) -> int:
        """0 for NONE up to 3 for SEVERE."""
        return _RANKS[self]


_RANKS = {
    StuckLevel.NONE: 0,
    StuckLevel.SLIGHT: 1,
    StuckLevel.MODERATE: 2,
    StuckLevel.SEVERE: 3,
}


def expected_moves_for_progress(correct_count: int) -> int:
    """Moves a player is expected to need for the pieces placed so far."""
    return correct_count


def excess_moves(moves: int, correct_count: int) -> int:
    return moves - expected_moves_for_progress(correct_count)


def classify_stuck_level(moves: int, correct_count: int, piece_count: int) -> StuckLevel:
    """
    Bucket the player's status from moves made and pieces placed.

    Recomputed from scratch on every call; for a fixed arrangement the
    level never decreases as moves grows.

    Args:
        moves: Moves made so far
        correct_count: Pieces on their correct slot
        piece_count: Total pieces N

    Returns:
        StuckLevel bucket
    """
    excess = excess_moves(moves, correct_count)
    if excess > 2 * piece_count:
        return StuckLevel.SEVERE
    if excess > piece_count:
        return StuckLevel.MODERATE
    if excess > piece_count / 2:
        return StuckLevel.SLIGHT
    return StuckLevel.NONE
