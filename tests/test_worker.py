"""
Tests for the QThread analysis worker.

run() is called directly so signals are delivered synchronously on the
test thread.
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

QtCore = pytest.importorskip("PyQt5.QtCore")

from puzzle_ai.analysis_worker import AnalysisWorker
from puzzle_ai.engine import PuzzleAnalyzer, PuzzleSnapshot, SearchStrategy

BORDER_ROTATION = (3, 0, 1, 6, 4, 2, 7, 8, 5)


class ExplodingStrategy(SearchStrategy):
    name = "exploding"
    description = "Always fails"

    def solve(self, context):
        raise RuntimeError("search exploded")


@pytest.fixture(scope="module")
def qt_app():
    app = QtCore.QCoreApplication.instance() or QtCore.QCoreApplication([])
    yield app


def _collect(worker):
    received = {"ready": [], "error": []}
    worker.analysis_ready.connect(received["ready"].append)
    worker.error_occurred.connect(received["error"].append)
    return received


def _snapshot():
    return PuzzleSnapshot.from_slots(BORDER_ROTATION, rows=3, cols=3, moves=2)


def test_emits_result(qt_app):
    analyzer = PuzzleAnalyzer(timeout_sec=30.0)
    worker = AnalysisWorker(analyzer, _snapshot())
    received = _collect(worker)

    worker.run()

    assert received["error"] == []
    assert len(received["ready"]) == 1
    assert worker.result is received["ready"][0]
    assert worker.result.search_complete


def test_emits_error_when_strategy_fails(qt_app):
    analyzer = PuzzleAnalyzer(strategy=ExplodingStrategy())
    worker = AnalysisWorker(analyzer, _snapshot())
    received = _collect(worker)

    worker.run()

    assert received["ready"] == []
    assert received["error"] == ["search exploded"]
    assert worker.result is None


def test_stopped_worker_drops_result(qt_app):
    analyzer = PuzzleAnalyzer(timeout_sec=30.0)
    worker = AnalysisWorker(analyzer, _snapshot())
    received = _collect(worker)

    worker.request_stop()
    worker.run()

    assert worker.is_cancelled()
    assert received["ready"] == []
    assert received["error"] == []
    assert len(analyzer.cache) == 0
