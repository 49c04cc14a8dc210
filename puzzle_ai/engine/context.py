"""
Search Context Module - Budget, cancellation and progress for one search.

A context is created per search call and never shared between searches;
the cancel flag is the only piece a caller may hold on to and set from
another thread.
"""

import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from .state import GridSize, PermutationState


@dataclass
class SearchContext:
    """
    Everything a strategy needs besides the algorithm itself.

    Attributes:
        start: State to sort
        target: Goal state (identity of the start's size if omitted)
        grid: Grid used for structural distance (square grid if omitted)
        cancel_flag: Set by the caller to stop the search early
        timeout_sec: Wall-clock safety net in seconds
        max_iterations: Node expansions allowed before giving up
        yield_every: Expansions between cooperative yield points (0 disables)
        on_yield: Hook called at yield points with the expansion count
        progress_callback: Receives (fraction 0.0-1.0, message)
        started_at: perf_counter() value when the context was created
    """
    start: PermutationState
    target: Optional[PermutationState] = None
    grid: Optional[GridSize] = None
    cancel_flag: threading.Event = field(default_factory=threading.Event)
    timeout_sec: float = 2.0
    max_iterations: int = 5000
    yield_every: int = 256
    on_yield: Optional[Callable[[int], None]] = None
    progress_callback: Optional[Callable[[float, str], None]] = None
    started_at: float = field(default_factory=time.perf_counter)

    def __post_init__(self):
        n = len(self.start)
        if self.target is None:
            self.target = PermutationState.identity(n)
        elif len(self.target) != n:
            raise ValueError(
                f"Target has {len(self.target)} pieces, start has {n}"
            )
        if self.grid is None:
            self.grid = GridSize.square_for(n)

    @property
    def deadline(self) -> float:
        return self.started_at + self.timeout_sec

    def cancel_requested(self) -> bool:
        return self.cancel_flag.is_set()

    def timed_out(self) -> bool:
        return time.perf_counter() > self.deadline

    def is_cancelled(self) -> bool:
        """True once the caller cancelled or the timeout passed."""
        return self.cancel_requested() or self.timed_out()

    def iterations_exhausted(self, iterations: int) -> bool:
        """True once the expansion budget is spent."""
        return iterations >= self.max_iterations

    def checkpoint(self, iterations: int) -> None:
        """
        Cooperative yield point, called by strategies after every expansion.

        Every yield_every expansions hands control to on_yield and reports
        progress as the fraction of the expansion budget used. Has no effect
        on which nodes are expanded.
        """
        if self.yield_every <= 0 or iterations % self.yield_every:
            return
        if self.on_yield is not None:
            self.on_yield(iterations)
        fraction = min(0.99, iterations / max(1, self.max_iterations))
        self.report_progress(fraction, f"{iterations} states expanded")

    def report_progress(self, fraction: float, message: str = "") -> None:
        if self.progress_callback is not None:
            self.progress_callback(fraction, message)
