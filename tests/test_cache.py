"""
Tests for the bounded analysis cache and its eviction policies.

Usage:
    pytest tests/test_cache.py
"""

import sys
import threading
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from puzzle_ai.engine import (
    AnalysisCache,
    AnalysisResult,
    FIFOEviction,
    LRUEviction,
    StuckLevel,
    create_eviction_policy,
)


def _result(difficulty: float = 0.0) -> AnalysisResult:
    return AnalysisResult(
        difficulty=difficulty,
        progress=100.0,
        stuck_level=StuckLevel.NONE,
        hints=(),
        next_optimal_move=None,
        estimated_time_to_solve=0.0,
        solver_path=(),
        optimal_moves=0,
        minimum_swaps=0,
        search_complete=True,
    )


def test_get_returns_stored_value():
    cache = AnalysisCache()
    result = _result(12.5)
    cache.put("a", result)

    assert cache.get("a") is result
    assert cache.get("missing") is None
    assert cache.hits == 1
    assert cache.misses == 1


def test_fifo_keeps_exactly_capacity_entries_oldest_removed_first():
    cache = AnalysisCache(capacity=3)
    for i in range(5):
        cache.put(f"k{i}", _result(i))

    assert len(cache) == 3
    assert cache.keys() == ["k2", "k3", "k4"]
    assert "k0" not in cache
    assert "k1" not in cache


def test_fifo_reads_do_not_promote():
    cache = AnalysisCache(capacity=2, policy=FIFOEviction())
    cache.put("a", _result())
    cache.put("b", _result())
    cache.get("a")
    cache.put("c", _result())

    assert "a" not in cache
    assert cache.keys() == ["b", "c"]


def test_lru_reads_promote():
    cache = AnalysisCache(capacity=2, policy=LRUEviction())
    cache.put("a", _result())
    cache.put("b", _result())
    cache.get("a")
    cache.put("c", _result())

    assert "b" not in cache
    assert cache.keys() == ["a", "c"]


def test_last_writer_wins_without_growing():
    cache = AnalysisCache(capacity=2)
    cache.put("a", _result(1))
    cache.put("b", _result(2))
    cache.put("a", _result(3))

    assert len(cache) == 2
    assert cache.get("a").difficulty == 3
    # Overwrite keeps the original insertion position
    assert cache.keys() == ["a", "b"]


def test_corrupt_entry_is_treated_as_miss():
    cache = AnalysisCache()
    cache.put("good", _result())
    cache._entries["bad"] = "not an entry"

    assert cache.get("bad") is None
    assert "bad" not in cache
    assert cache.get("good") is not None


def test_clear_and_stats():
    cache = AnalysisCache(capacity=4, policy=LRUEviction())
    cache.put("a", _result())
    cache.get("a")
    cache.get("b")

    stats = cache.stats()
    assert stats["size"] == 1
    assert stats["policy"] == "lru"
    assert stats["hit_rate"] == 0.5

    cache.clear()
    assert len(cache) == 0
    assert cache.keys() == []


def test_invalid_configuration():
    with pytest.raises(ValueError):
        AnalysisCache(capacity=0)
    with pytest.raises(ValueError, match="Unknown eviction policy"):
        create_eviction_policy("random")
    assert isinstance(create_eviction_policy("lru"), LRUEviction)


def test_concurrent_writers_respect_capacity():
    cache = AnalysisCache(capacity=100)

    def writer(worker_id):
        for i in range(50):
            cache.put(f"w{worker_id}-{i}", _result(i))

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(cache) == 100
    assert len(cache.keys()) == 100
