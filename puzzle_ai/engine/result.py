"""
Result Module - Immutable output of one puzzle analysis.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .hints import Hint
from .move import Move
from .stuck import StuckLevel


@dataclass(frozen=True)
class AnalysisResult:
    """
    Everything the game layer needs to display for one arrangement.

    Attributes:
        difficulty: Difficulty score 0-100
        progress: Percentage of pieces on their correct slot
        stuck_level: Player stuck classification
        hints: Ranked hints (critical first)
        next_optimal_move: First swap of a complete solution, None when the
            search gave no suggestion
        estimated_time_to_solve: Seconds
        solver_path: Suggested swap sequence (partial if search incomplete)
        optimal_moves: Length of solver_path
        minimum_swaps: Exact minimum swaps from cycle decomposition
        search_complete: True if solver_path reaches the solved state
    """
    difficulty: float
    progress: float
    stuck_level: StuckLevel
    hints: Tuple[Hint, ...]
    next_optimal_move: Optional[Move]
    estimated_time_to_solve: float
    solver_path: Tuple[Move, ...]
    optimal_moves: int
    minimum_swaps: int
    search_complete: bool

    @property
    def top_hint(self) -> Optional[Hint]:
        """Highest-ranked hint, or None."""
        return self.hints[0] if self.hints else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "difficulty": self.difficulty,
            "progress": self.progress,
            "stuckLevel": self.stuck_level.value,
            "hints": [h.to_dict() for h in self.hints],
            "nextOptimalMove": (
                self.next_optimal_move.to_dict() if self.next_optimal_move else None
            ),
            "estimatedTimeToSolve": self.estimated_time_to_solve,
            "solverPath": [m.to_dict() for m in self.solver_path],
            "optimalMoves": self.optimal_moves,
            "minimumSwaps": self.minimum_swaps,
            "searchComplete": self.search_complete,
        }
