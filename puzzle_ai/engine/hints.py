"""
Hints Module - Turns an analysis into a ranked list of player hints.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .move import Move
from .solution import SearchResult
from .state import PuzzleSnapshot
from .stuck import StuckLevel

# Misplaced pieces at most this far from their goal count as near-correct
NEAR_CORRECT_DISTANCE = 2

# Many moves with little progress suggests the player is undoing work
REGRESSION_MOVE_THRESHOLD = 10
REGRESSION_PROGRESS_THRESHOLD = 30.0

ANIMATIONS = ("pulse", "glow", "arrow", "path")


class HintType(Enum):
    OPTIMAL_MOVE = "optimal_move"
    PATTERN_HINT = "pattern_hint"
    STRATEGY_TIP = "strategy_tip"
    WARNING = "warning"


class HintPriority(Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Sort key: 0 for CRITICAL up to 3 for LOW."""
        return _PRIORITY_RANKS[self]


_PRIORITY_RANKS = {
    HintPriority.CRITICAL: 0,
    HintPriority.HIGH: 1,
    HintPriority.MEDIUM: 2,
    HintPriority.LOW: 3,
}


@dataclass(frozen=True)
class VisualHint:
    """
    Display payload for a hint.

    Attributes:
        slots: Slots the UI should highlight
        animation: One of pulse, glow, arrow, path
        highlight_color: Hex color for the highlight
    """
    slots: Tuple[int, ...]
    animation: str
    highlight_color: str

    def __post_init__(self):
        if self.animation not in ANIMATIONS:
            raise ValueError(f"Unknown animation: {self.animation}. Available: {', '.join(ANIMATIONS)}")


@dataclass(frozen=True)
class Hint:
    """
    A single hint shown to the player.

    Attributes:
        hint_type: Kind of hint
        priority: Display priority
        description: Human-readable text
        confidence: Confidence in [0, 1]
        visual_hint: Optional highlight payload
        target_slot: Slot the hint is mainly about
        suggested_move: Swap the hint recommends, if any
    """
    hint_type: HintType
    priority: HintPriority
    description: str
    confidence: float
    visual_hint: Optional[VisualHint] = None
    target_slot: Optional[int] = None
    suggested_move: Optional[Move] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "type": self.hint_type.value,
            "priority": self.priority.value,
            "description": self.description,
            "confidence": self.confidence,
        }
        if self.target_slot is not None:
            data["targetSlot"] = self.target_slot
        if self.suggested_move is not None:
            data["suggestedMove"] = self.suggested_move.to_dict()
        if self.visual_hint is not None:
            data["visualHint"] = {
                "slots": list(self.visual_hint.slots),
                "animation": self.visual_hint.animation,
                "highlightColor": self.visual_hint.highlight_color,
            }
        return data


def corner_and_edge_targets(snapshot: PuzzleSnapshot) -> Tuple[int, ...]:
    """
    Border slots worth working on, corners first.

    Returns the misplaced corner and edge slots; if the border is already
    correct, every border slot.
    """
    grid = snapshot.grid
    state = snapshot.state
    ordered = list(grid.corner_slots()) + [
        s for s in grid.edge_slots() if s not in grid.corner_slots()
    ]
    wrong = tuple(s for s in ordered if state.slots[s] != s)
    return wrong or tuple(ordered)


def near_correct_slots(snapshot: PuzzleSnapshot) -> Tuple[int, ...]:
    """Slots of misplaced pieces within NEAR_CORRECT_DISTANCE of their goal."""
    grid = snapshot.grid
    return tuple(
        p.current_slot for p in snapshot.pieces
        if not p.is_correct
        and grid.distance(p.current_slot, p.correct_slot) <= NEAR_CORRECT_DISTANCE
    )


def detect_regressive_move(snapshot: PuzzleSnapshot) -> Optional[Move]:
    """
    Flag a likely regression: many moves but little progress.

    Returns:
        The swap that would place the first misplaced piece, or None
    """
    if snapshot.moves <= REGRESSION_MOVE_THRESHOLD:
        return None
    if snapshot.progress >= REGRESSION_PROGRESS_THRESHOLD:
        return None
    for piece in snapshot.pieces:
        if not piece.is_correct:
            return Move(piece.current_slot, piece.correct_slot)
    return None


def rank_hints(hints: Sequence[Hint]) -> List[Hint]:
    """Sort by priority (critical first), keeping insertion order within a priority."""
    return sorted(hints, key=lambda h: h.priority.rank)


def generate_hints(
    snapshot: PuzzleSnapshot,
    difficulty: float,
    stuck_level: StuckLevel,
    search: SearchResult
) -> List[Hint]:
    """
    Build the ranked hint list for one analysis.

    Args:
        snapshot: Puzzle being analysed
        difficulty: Difficulty score 0-100
        stuck_level: Player stuck classification
        search: Search result for the current state

    Returns:
        Hints ordered critical, high, medium, low; empty when solved
    """
    if snapshot.state.is_solved:
        return []

    hints: List[Hint] = []

    if stuck_level is StuckLevel.SEVERE:
        hints.append(Hint(
            hint_type=HintType.STRATEGY_TIP,
            priority=HintPriority.HIGH,
            description=(
                f"This one is tough (difficulty {difficulty:.0f}/100). Try focusing on "
                "corner and edge pieces first. They have fewer possible positions."
            ),
            confidence=0.9,
            visual_hint=VisualHint(
                slots=corner_and_edge_targets(snapshot),
                animation="glow",
                highlight_color="#FF6B6B",
            ),
        ))

    if stuck_level is StuckLevel.MODERATE:
        hints.append(Hint(
            hint_type=HintType.PATTERN_HINT,
            priority=HintPriority.MEDIUM,
            description=(
                "I notice a pattern. Try working on pieces that are close "
                "to their correct position."
            ),
            confidence=0.8,
            visual_hint=VisualHint(
                slots=near_correct_slots(snapshot),
                animation="pulse",
                highlight_color="#4ECDC4",
            ),
        ))

    next_move = search.next_move
    if next_move is not None:
        first = snapshot.piece_at(next_move.a)
        second = snapshot.piece_at(next_move.b)
        hints.append(Hint(
            hint_type=HintType.OPTIMAL_MOVE,
            priority=HintPriority.HIGH,
            description=(
                f"Swap piece {first.piece_id} with piece {second.piece_id} - "
                "this gets you closer to the solution!"
            ),
            confidence=0.95,
            target_slot=next_move.a,
            suggested_move=next_move,
            visual_hint=VisualHint(
                slots=next_move.slots,
                animation="arrow",
                highlight_color="#10B981",
            ),
        ))

    regressive = detect_regressive_move(snapshot)
    if regressive is not None:
        hints.append(Hint(
            hint_type=HintType.WARNING,
            priority=HintPriority.CRITICAL,
            description="Be careful! Recent moves might be undoing your progress.",
            confidence=0.7,
            target_slot=regressive.a,
            suggested_move=regressive,
            visual_hint=VisualHint(
                slots=regressive.slots,
                animation="pulse",
                highlight_color="#EF4444",
            ),
        ))

    return rank_hints(hints)
