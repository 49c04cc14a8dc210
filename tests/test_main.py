"""
Tests for the command line entry point.
"""

import json
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from main import main


def test_analyse_slots(tmp_path, capsys):
    code = main([
        "--slots", "3,0,1,6,4,2,7,8,5", "--rows", "3", "--cols", "3",
        "--settings", str(tmp_path / "none.json"),
    ])

    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["optimalMoves"] == 7
    assert data["searchComplete"] is True


def test_analyse_snapshot_file(tmp_path, capsys):
    snapshot = tmp_path / "snapshot.json"
    snapshot.write_text(json.dumps({
        "rows": 2,
        "cols": 2,
        "moves": 1,
        "pieces": [
            {"pieceId": 10, "currentSlot": 0, "correctSlot": 1},
            {"pieceId": 11, "currentSlot": 1, "correctSlot": 0},
            {"pieceId": 12, "currentSlot": 2, "correctSlot": 2},
            {"pieceId": 13, "currentSlot": 3, "correctSlot": 3},
        ],
    }), encoding="utf-8")

    code = main([str(snapshot), "--strategy", "cycle",
                 "--settings", str(tmp_path / "none.json")])

    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["nextOptimalMove"] == {"from": 0, "to": 1}
    assert data["progress"] == 50.0


def test_invalid_input_returns_error_code(tmp_path):
    code = main([
        "--slots", "0,0,1,2", "--rows", "2", "--cols", "2",
        "--settings", str(tmp_path / "none.json"),
    ])
    assert code == 2


def test_slots_without_dimensions(tmp_path):
    assert main(["--slots", "1,0", "--settings", str(tmp_path / "none.json")]) == 2


def test_list_strategies(capsys):
    assert main(["--list-strategies"]) == 0
    out = capsys.readouterr().out
    assert "astar" in out
    assert "cycle" in out


GOOD_PIECES = [
    {"pieceId": 0, "currentSlot": 0, "correctSlot": 1},
    {"pieceId": 1, "currentSlot": 1, "correctSlot": 0},
]


@pytest.mark.parametrize("document", [
    {"rows": 1, "cols": 2, "pieces": [{"pieceId": None, "currentSlot": 0, "correctSlot": 0}]},
    {"rows": 1, "cols": 2, "pieces": [{"pieceId": "a", "currentSlot": 0, "correctSlot": 0}]},
    {"rows": "1", "cols": 2, "pieces": GOOD_PIECES},
    {"rows": 1, "cols": 2, "moves": "3", "pieces": GOOD_PIECES},
    {"rows": 1, "cols": 2, "pieces": 7},
    [1, 2],
    "just a string",
])
def test_malformed_snapshot_file_returns_error_code(tmp_path, document):
    snapshot = tmp_path / "snapshot.json"
    snapshot.write_text(json.dumps(document), encoding="utf-8")

    assert main([str(snapshot), "--settings", str(tmp_path / "none.json")]) == 2


def test_unreadable_snapshot_file_returns_error_code(tmp_path):
    snapshot = tmp_path / "snapshot.json"
    snapshot.write_text("{broken", encoding="utf-8")
    assert main([str(snapshot), "--settings", str(tmp_path / "none.json")]) == 2
