"""
Analysis Worker Module for Puzzle AI

Provides a background QThread worker that runs one puzzle analysis off the
UI thread. Communicates with the UI via Qt signals for thread-safe delivery.
"""

import logging
import threading
from typing import Optional

from PyQt5.QtCore import QThread, pyqtSignal

from puzzle_ai.engine import AnalysisResult, InvalidPuzzleError, PuzzleAnalyzer, PuzzleSnapshot


# Configure module logger
logger = logging.getLogger(__name__)


class AnalysisWorker(QThread):
    """
    Background worker thread for a single analysis.

    A new worker is started whenever the player makes a move. If the
    player moves again before it finishes, request_stop() cancels the
    search and the stale result is dropped instead of emitted.

    Signals:
        analysis_ready(object): Emitted with the AnalysisResult
        progress_changed(float, str): Search progress (0.0-1.0, message)
        error_occurred(str): Emitted when the snapshot is invalid or the
            analysis fails

    Example:
        worker = AnalysisWorker(analyzer, snapshot)
        worker.analysis_ready.connect(ui.show_hints)
        worker.start()
        # ...
        worker.request_stop()
        worker.wait()
    """

    analysis_ready = pyqtSignal(object)
    progress_changed = pyqtSignal(float, str)
    error_occurred = pyqtSignal(str)

    def __init__(self, analyzer: PuzzleAnalyzer, snapshot: PuzzleSnapshot):
        """
        Initialize the analysis worker.

        Args:
            analyzer: Caller-owned analyzer (and its cache)
            snapshot: Puzzle to analyse
        """
        super().__init__()
        self.analyzer = analyzer
        self.snapshot = snapshot
        self._cancel_flag = threading.Event()
        self._result: Optional[AnalysisResult] = None

    def run(self):
        """
        Run the analysis. Called when thread starts.

        Errors are reported through error_occurred, never raised into the
        UI thread.
        """
        logger.debug(f"Analysis worker started for {self.snapshot.fingerprint()}")

        try:
            result = self.analyzer.analyze(
                self.snapshot,
                cancel_flag=self._cancel_flag,
                progress_callback=self._on_progress,
            )
        except InvalidPuzzleError as e:
            logger.warning(f"Invalid puzzle snapshot: {e}")
            self.error_occurred.emit(str(e))
            return
        except Exception as e:
            logger.exception("Error in analysis worker")
            self.error_occurred.emit(str(e))
            return

        if self._cancel_flag.is_set():
            logger.debug("Analysis cancelled, dropping result")
            return

        self._result = result
        self.analysis_ready.emit(result)

    def _on_progress(self, percent: float, message: str) -> None:
        self.progress_changed.emit(percent, message)

    def request_stop(self):
        """
        Request the worker to stop.

        The search stops at its next cancellation check and no result is
        emitted. Use wait() after calling this to block until stopped.
        """
        logger.info("Analysis stop requested")
        self._cancel_flag.set()

    def is_cancelled(self) -> bool:
        return self._cancel_flag.is_set()

    @property
    def result(self) -> Optional[AnalysisResult]:
        """Last emitted result, if any."""
        return self._result
