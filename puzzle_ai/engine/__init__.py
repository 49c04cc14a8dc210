"""
Engine Package - Puzzle analysis engine for swap-based tile puzzles.

Given the current arrangement of pieces, the engine scores difficulty,
searches for a short sequence of corrective swaps, classifies whether the
player is stuck and produces ranked hints. Results are memoized per
arrangement and move count.

Public API:
    - PuzzleSnapshot / PuzzlePiece / GridSize: Validated caller input
    - PermutationState: Immutable slot -> piece permutation
    - Move: Swap of two slots
    - SearchContext / SearchResult / SearchMetrics: Search plumbing
    - SearchStrategy: Abstract base for strategies
    - create_strategy(): Factory function
    - AnalysisCache: Bounded result cache (FIFO or LRU)
    - PuzzleAnalyzer: Facade running the whole pipeline
    - AnalysisResult / Hint: Output values

Usage:
    from puzzle_ai.engine import PuzzleAnalyzer, PuzzleSnapshot

    analyzer = PuzzleAnalyzer()
    snapshot = PuzzleSnapshot.from_dicts(pieces, rows=3, cols=3, moves=12)
    result = analyzer.analyze(snapshot)

    for hint in result.hints:
        print(f"[{hint.priority.value}] {hint.description}")
"""

# Core data structures
from .state import GridSize, InvalidPuzzleError, PermutationState, PuzzlePiece, PuzzleSnapshot
from .move import Move
from .heuristic import heuristic, minimum_swaps, cycle_decomposition
from .solution import SearchResult, SearchMetrics
from .context import SearchContext

# Strategy framework
from .base import SearchStrategy
from .factory import (
    create_strategy,
    get_strategy_names,
    get_strategy_info,
    get_default_strategy_name,
    register_strategy,
)

# Import strategies to register them
from . import strategies

# Analysis pipeline
from .difficulty import DifficultySignals, difficulty_signals, estimate_difficulty
from .stuck import StuckLevel, classify_stuck_level
from .hints import Hint, HintPriority, HintType, VisualHint, generate_hints
from .result import AnalysisResult
from .cache import AnalysisCache, EvictionPolicy, FIFOEviction, LRUEviction, create_eviction_policy
from .analyzer import PuzzleAnalyzer

__all__ = [
    # Data structures
    "GridSize",
    "InvalidPuzzleError",
    "PermutationState",
    "PuzzlePiece",
    "PuzzleSnapshot",
    "Move",
    "SearchResult",
    "SearchMetrics",
    "SearchContext",
    "heuristic",
    "minimum_swaps",
    "cycle_decomposition",
    # Strategy framework
    "SearchStrategy",
    "create_strategy",
    "get_strategy_names",
    "get_strategy_info",
    "get_default_strategy_name",
    "register_strategy",
    # Analysis
    "DifficultySignals",
    "difficulty_signals",
    "estimate_difficulty",
    "StuckLevel",
    "classify_stuck_level",
    "Hint",
    "HintPriority",
    "HintType",
    "VisualHint",
    "generate_hints",
    "AnalysisResult",
    "AnalysisCache",
    "EvictionPolicy",
    "FIFOEviction",
    "LRUEviction",
    "create_eviction_policy",
    "PuzzleAnalyzer",
]
