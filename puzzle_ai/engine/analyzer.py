"""
Analyzer Module - Facade running the full puzzle analysis pipeline.

    cache lookup -> difficulty -> search -> stuck level -> hints -> cache store

Each PuzzleAnalyzer owns its cache and strategy; create one per game
screen (or share one explicitly) instead of relying on a global instance.
"""

import logging
import threading
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from .cache import AnalysisCache, create_eviction_policy
from .context import SearchContext
from .base import SearchStrategy
from .difficulty import estimate_difficulty
from .factory import create_strategy, get_default_strategy_name
from .hints import generate_hints
from .result import AnalysisResult
from .solution import SearchResult
from .state import PuzzleSnapshot
from .stuck import StuckLevel, classify_stuck_level

logger = logging.getLogger(__name__)

SECONDS_PER_MOVE = 2.0

STUCK_TIME_MULTIPLIERS = {
    StuckLevel.NONE: 1.0,
    StuckLevel.SLIGHT: 1.3,
    StuckLevel.MODERATE: 2.0,
    StuckLevel.SEVERE: 3.0,
}


def estimate_solving_time(move_estimate: int, stuck_level: StuckLevel) -> float:
    """
    Estimate seconds to finish the puzzle.

    Args:
        move_estimate: Swaps still needed
        stuck_level: Current stuck classification

    Returns:
        Seconds, rounded to 2 places
    """
    return round(move_estimate * SECONDS_PER_MOVE * STUCK_TIME_MULTIPLIERS[stuck_level], 2)


class PuzzleAnalyzer:
    """
    Analyses puzzle snapshots and memoizes the results.

    analyze() is synchronous; run it on a worker thread (see
    puzzle_ai.analysis_worker) if the caller cannot block.

    Example:
        analyzer = PuzzleAnalyzer()
        snapshot = PuzzleSnapshot.from_slots([1, 0, 2, 3], rows=2, cols=2, moves=3)
        result = analyzer.analyze(snapshot)
        if result.next_optimal_move:
            print(result.hints[0].description)
    """

    def __init__(
        self,
        cache: Optional[AnalysisCache] = None,
        strategy: Optional[SearchStrategy] = None,
        max_iterations: int = 5000,
        timeout_sec: float = 2.0,
        yield_every: int = 256,
        on_yield: Optional[Callable[[int], None]] = None
    ):
        """
        Initialize analyzer.

        Args:
            cache: Result cache (new 100-entry FIFO cache if omitted)
            strategy: Search strategy (registry default if omitted)
            max_iterations: Expansion budget per search
            timeout_sec: Wall-clock budget per search
            yield_every: Expansions between cooperative yield points
            on_yield: Hook invoked at yield points
        """
        self.cache = cache if cache is not None else AnalysisCache()
        self.strategy = strategy or create_strategy(get_default_strategy_name())
        self.max_iterations = max_iterations
        self.timeout_sec = timeout_sec
        self.yield_every = yield_every
        self.on_yield = on_yield

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any],
                      on_yield: Optional[Callable[[int], None]] = None) -> 'PuzzleAnalyzer':
        """
        Build an analyzer from a settings dictionary (see puzzle_ai.settings).

        Raises:
            ValueError: On unknown strategy or eviction policy names
        """
        cache = AnalysisCache(
            capacity=int(settings.get("cache_capacity", 100)),
            policy=create_eviction_policy(settings.get("eviction_policy", "fifo")),
        )
        strategy = create_strategy(settings.get("strategy_name") or get_default_strategy_name())
        return cls(
            cache=cache,
            strategy=strategy,
            max_iterations=int(settings.get("max_iterations", 5000)),
            timeout_sec=float(settings.get("timeout_sec", 2.0)),
            yield_every=int(settings.get("yield_every", 256)),
            on_yield=on_yield,
        )

    def set_strategy(self, strategy_name: str) -> None:
        """
        Change the search strategy.

        Cached results from the previous strategy are dropped.
        """
        self.strategy = create_strategy(strategy_name)
        self.cache.clear()
        logger.info(f"Strategy changed to: {strategy_name}")

    def analyze(
        self,
        snapshot: PuzzleSnapshot,
        cancel_flag: Optional[threading.Event] = None,
        progress_callback: Optional[Callable[[float, str], None]] = None
    ) -> AnalysisResult:
        """
        Analyse one puzzle snapshot.

        Args:
            snapshot: Validated puzzle input
            cancel_flag: Set by the caller to abandon the search early;
                results of cancelled or timed-out searches are not cached
            progress_callback: Optional search progress callback

        Returns:
            AnalysisResult (shared immutable value on a cache hit)
        """
        key = snapshot.fingerprint()
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug(f"Cache hit for {key}")
            return cached

        state = snapshot.state
        difficulty = estimate_difficulty(state, snapshot.grid)
        search = self.search(snapshot, cancel_flag, progress_callback)
        stuck_level = classify_stuck_level(
            snapshot.moves, snapshot.correct_count, snapshot.piece_count
        )
        hints = generate_hints(snapshot, difficulty, stuck_level, search)

        minimum = search.metrics.lower_bound
        move_estimate = search.move_count if search.is_complete else minimum

        result = AnalysisResult(
            difficulty=difficulty,
            progress=round(snapshot.progress, 2),
            stuck_level=stuck_level,
            hints=tuple(hints),
            next_optimal_move=search.next_move,
            estimated_time_to_solve=estimate_solving_time(move_estimate, stuck_level),
            solver_path=tuple(search.moves),
            optimal_moves=search.move_count,
            minimum_swaps=minimum,
            search_complete=search.is_complete,
        )

        if search.was_cancelled or (cancel_flag is not None and cancel_flag.is_set()):
            logger.debug(f"Analysis of {key} cancelled, result not cached")
            return result
        if search.timed_out:
            logger.warning(
                f"Search for {key} hit the {self.timeout_sec}s timeout after "
                f"{search.metrics.states_explored} expansions, result not cached"
            )
            return result

        self.cache.put(key, result)
        logger.info(
            f"Analysed {snapshot.grid.rows}x{snapshot.grid.cols} puzzle: "
            f"difficulty {difficulty}, progress {result.progress}%, "
            f"stuck {stuck_level.value}, {search.move_count} swaps "
            f"(min {minimum}, complete={search.is_complete}), {len(hints)} hints"
        )
        return result

    def analyze_pieces(
        self,
        pieces: Iterable[Mapping[str, Any]],
        rows: Optional[int] = None,
        cols: Optional[int] = None,
        moves: int = 0,
        cancel_flag: Optional[threading.Event] = None
    ) -> AnalysisResult:
        """
        Analyse raw game-layer piece data.

        Raises:
            InvalidPuzzleError: If the pieces do not form a valid puzzle
        """
        snapshot = PuzzleSnapshot.from_dicts(pieces, rows=rows, cols=cols, moves=moves)
        return self.analyze(snapshot, cancel_flag=cancel_flag)

    def search(
        self,
        snapshot: PuzzleSnapshot,
        cancel_flag: Optional[threading.Event] = None,
        progress_callback: Optional[Callable[[float, str], None]] = None
    ) -> SearchResult:
        """
        Run the configured strategy on a snapshot without touching the cache.

        Returns:
            SearchResult from the strategy
        """
        context = SearchContext(
            start=snapshot.state,
            grid=snapshot.grid,
            timeout_sec=self.timeout_sec,
            max_iterations=self.max_iterations,
            yield_every=self.yield_every,
            on_yield=self.on_yield,
            progress_callback=progress_callback,
        )
        if cancel_flag is not None:
            context.cancel_flag = cancel_flag

        result = self.strategy.solve(context)

        if result.is_complete and result.move_count > result.metrics.lower_bound:
            logger.warning(
                f"[{self.strategy.name}] Returned {result.move_count} swaps, "
                f"minimum is {result.metrics.lower_bound}"
            )
        return result

    def cache_stats(self) -> Dict[str, Any]:
        return self.cache.stats()
