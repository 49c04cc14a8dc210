"""
State Module - Immutable puzzle snapshot and permutation state.

A PuzzleSnapshot is what the game layer hands to the engine: the pieces
with their current and correct slots, the grid dimensions and the player's
move count. The engine works on the PermutationState derived from it,
where slot i holds the identifier of the piece placed there and the piece
identifier is that piece's correct slot (so solved == identity).
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .move import Move


class InvalidPuzzleError(ValueError):
    """Raised when caller-supplied puzzle data is not a valid permutation."""


@dataclass(frozen=True)
class PuzzlePiece:
    """
    A single movable piece.

    Attributes:
        piece_id: Caller identifier of the piece
        current_slot: Slot the piece occupies now
        correct_slot: Slot the piece belongs in
    """
    piece_id: int
    current_slot: int
    correct_slot: int

    @property
    def is_correct(self) -> bool:
        """True if the piece sits on its goal slot."""
        return self.current_slot == self.correct_slot

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'PuzzlePiece':
        """
        Build a piece from a camelCase or snake_case mapping.

        Args:
            data: Mapping with pieceId/currentSlot/correctSlot keys
                  (piece_id/current_slot/correct_slot also accepted)

        Returns:
            PuzzlePiece instance

        Raises:
            InvalidPuzzleError: If a key is missing or a value is not an integer
        """
        try:
            return cls(
                piece_id=_as_int(_pick(data, "pieceId", "piece_id")),
                current_slot=_as_int(_pick(data, "currentSlot", "current_slot")),
                correct_slot=_as_int(_pick(data, "correctSlot", "correct_slot")),
            )
        except KeyError as e:
            raise InvalidPuzzleError(f"Piece data missing field {e}: {data!r}") from e
        except (TypeError, ValueError) as e:
            raise InvalidPuzzleError(f"Malformed piece data {data!r}: {e}") from e


def _pick(data: Mapping[str, Any], camel: str, snake: str) -> Any:
    if camel in data:
        return data[camel]
    return data[snake]


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _as_int(value: Any) -> int:
    if not _is_int(value):
        raise TypeError(f"expected an integer, got {value!r}")
    return value


@dataclass(frozen=True)
class GridSize:
    """
    Puzzle grid dimensions. Slots are numbered row-major.

    Attributes:
        rows: Number of rows
        cols: Number of columns
    """
    rows: int
    cols: int

    def __post_init__(self):
        if not (_is_int(self.rows) and _is_int(self.cols)):
            raise InvalidPuzzleError(
                f"Grid dimensions must be integers, got {self.rows!r}x{self.cols!r}"
            )
        if self.rows < 1 or self.cols < 1:
            raise InvalidPuzzleError(
                f"Grid dimensions must be positive, got {self.rows}x{self.cols}"
            )

    @classmethod
    def square_for(cls, piece_count: int) -> 'GridSize':
        """
        Build the grid used when a caller gives no dimensions.

        Uses ceil(sqrt(n)) columns and as many rows as needed.
        """
        if piece_count < 1:
            raise InvalidPuzzleError("Puzzle must contain at least one piece")
        cols = math.ceil(math.sqrt(piece_count))
        rows = math.ceil(piece_count / cols)
        return cls(rows=rows, cols=cols)

    @property
    def piece_count(self) -> int:
        """Number of slots in the grid."""
        return self.rows * self.cols

    def position(self, slot: int) -> Tuple[int, int]:
        """Get (row, col) of a slot."""
        return divmod(slot, self.cols)

    def distance(self, a: int, b: int) -> int:
        """Structural (row + column) distance between two slots."""
        ra, ca = divmod(a, self.cols)
        rb, cb = divmod(b, self.cols)
        return abs(ra - rb) + abs(ca - cb)

    def is_edge(self, slot: int) -> bool:
        """True for slots on the outer border (corners included)."""
        row, col = self.position(slot)
        return row == 0 or row == self.rows - 1 or col == 0 or col == self.cols - 1

    def corner_slots(self) -> Tuple[int, ...]:
        """Distinct corner slots in top-left, top-right, bottom-left, bottom-right order."""
        last = self.piece_count - 1
        corners = (0, self.cols - 1, last - (self.cols - 1), last)
        return tuple(dict.fromkeys(corners))

    def edge_slots(self) -> Tuple[int, ...]:
        """All border slots in slot order."""
        return tuple(s for s in range(self.piece_count) if self.is_edge(s))

    def rotated_slot(self, slot: int) -> int:
        """Slot reached by rotating the grid 180 degrees."""
        return self.piece_count - 1 - slot


@dataclass(frozen=True)
class PermutationState:
    """
    Immutable permutation of pieces over slots.

    Uses a tuple for hashability. slots[i] is the piece held by slot i;
    every piece 0..N-1 appears exactly once.

    Attributes:
        slots: Tuple of piece identifiers indexed by slot
    """
    slots: Tuple[int, ...]

    def __post_init__(self):
        n = len(self.slots)
        if sorted(self.slots) != list(range(n)):
            raise InvalidPuzzleError(
                f"State is not a permutation of 0..{n - 1}: {self.slots}"
            )

    @classmethod
    def identity(cls, piece_count: int) -> 'PermutationState':
        """Create the solved state for a puzzle of the given size."""
        return cls(slots=tuple(range(piece_count)))

    @classmethod
    def from_list(cls, slots: Iterable[int]) -> 'PermutationState':
        """Create a state from any iterable of piece identifiers."""
        return cls(slots=tuple(slots))

    def apply_move(self, move: 'Move') -> 'PermutationState':
        """
        Apply a swap to create a new state. Original state is unchanged.

        Args:
            move: Move to apply

        Returns:
            New PermutationState with the two slots exchanged
        """
        new_slots = list(self.slots)
        new_slots[move.a], new_slots[move.b] = new_slots[move.b], new_slots[move.a]
        # A swap preserves the permutation, skip re-validation
        return PermutationState._trusted(tuple(new_slots))

    @classmethod
    def _trusted(cls, slots: Tuple[int, ...]) -> 'PermutationState':
        state = object.__new__(cls)
        object.__setattr__(state, "slots", slots)
        return state

    @property
    def is_solved(self) -> bool:
        """True if every slot holds its own piece."""
        return all(piece == slot for slot, piece in enumerate(self.slots))

    def locate(self, piece: int) -> Optional[int]:
        """Get the slot holding a piece, or None if absent."""
        try:
            return self.slots.index(piece)
        except ValueError:
            return None

    def misplaced_slots(self) -> List[int]:
        """Slots whose piece belongs elsewhere."""
        return [slot for slot, piece in enumerate(self.slots) if piece != slot]

    def correct_count(self) -> int:
        """Number of pieces on their goal slot."""
        return sum(1 for slot, piece in enumerate(self.slots) if piece == slot)

    def __len__(self) -> int:
        return len(self.slots)


@dataclass(frozen=True)
class PuzzleSnapshot:
    """
    Validated input for one analysis.

    Attributes:
        pieces: Pieces ordered by current slot
        grid: Grid dimensions
        moves: Moves the player has made so far
    """
    pieces: Tuple[PuzzlePiece, ...]
    grid: GridSize
    moves: int = 0

    def __post_init__(self):
        ordered = tuple(sorted(self.pieces, key=lambda p: p.current_slot))
        object.__setattr__(self, "pieces", ordered)
        self._validate()

    def _validate(self) -> None:
        n = len(self.pieces)
        if n == 0:
            raise InvalidPuzzleError("Puzzle must contain at least one piece")
        if n != self.grid.piece_count:
            raise InvalidPuzzleError(
                f"Grid {self.grid.rows}x{self.grid.cols} needs {self.grid.piece_count} "
                f"pieces, got {n}"
            )
        if not _is_int(self.moves):
            raise InvalidPuzzleError(f"Move count must be an integer, got {self.moves!r}")
        if self.moves < 0:
            raise InvalidPuzzleError(f"Move count cannot be negative: {self.moves}")

        ids = [p.piece_id for p in self.pieces]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise InvalidPuzzleError(f"Duplicate piece ids: {duplicates}")

        expected = set(range(n))
        for label, slots in (
            ("current", [p.current_slot for p in self.pieces]),
            ("correct", [p.correct_slot for p in self.pieces]),
        ):
            if len(set(slots)) != n or set(slots) != expected:
                missing = sorted(expected - set(slots))
                repeated = sorted({s for s in slots if slots.count(s) > 1})
                out_of_range = sorted(set(slots) - expected)
                raise InvalidPuzzleError(
                    f"{label.capitalize()} slots are not a permutation of 0..{n - 1} "
                    f"(missing={missing}, repeated={repeated}, out_of_range={out_of_range})"
                )

    @classmethod
    def from_dicts(
        cls,
        pieces: Iterable[Mapping[str, Any]],
        rows: Optional[int] = None,
        cols: Optional[int] = None,
        moves: int = 0
    ) -> 'PuzzleSnapshot':
        """
        Create a snapshot from game-layer piece mappings.

        Args:
            pieces: Mappings with pieceId/currentSlot/correctSlot
            rows: Grid rows (derived from piece count if omitted with cols)
            cols: Grid columns
            moves: Player move count

        Returns:
            Validated PuzzleSnapshot

        Raises:
            InvalidPuzzleError: On malformed or inconsistent data
        """
        try:
            parsed = tuple(PuzzlePiece.from_dict(p) for p in pieces)
        except TypeError as e:
            raise InvalidPuzzleError(f"Pieces must be a list of mappings: {e}") from e
        if rows is None and cols is None:
            grid = GridSize.square_for(len(parsed))
        elif rows is None or cols is None:
            raise InvalidPuzzleError("Both rows and cols must be given, or neither")
        else:
            grid = GridSize(rows=rows, cols=cols)
        return cls(pieces=parsed, grid=grid, moves=moves)

    @classmethod
    def from_slots(cls, slots: Iterable[int], rows: int, cols: int,
                   moves: int = 0) -> 'PuzzleSnapshot':
        """
        Create a snapshot where slot i holds the piece whose goal is slots[i].

        Piece ids equal their correct slot. Convenient for tests and the CLI.
        """
        pieces = tuple(
            PuzzlePiece(piece_id=goal, current_slot=slot, correct_slot=goal)
            for slot, goal in enumerate(slots)
        )
        return cls(pieces=pieces, grid=GridSize(rows=rows, cols=cols), moves=moves)

    @property
    def piece_count(self) -> int:
        return len(self.pieces)

    @property
    def state(self) -> PermutationState:
        """Permutation state of this snapshot."""
        return PermutationState(slots=tuple(p.correct_slot for p in self.pieces))

    def piece_at(self, slot: int) -> PuzzlePiece:
        """Get the piece occupying a slot."""
        return self.pieces[slot]

    @property
    def correct_count(self) -> int:
        return sum(1 for p in self.pieces if p.is_correct)

    @property
    def progress(self) -> float:
        """Percentage (0-100) of pieces on their correct slot."""
        return self.correct_count / self.piece_count * 100

    def fingerprint(self) -> str:
        """
        Deterministic, order-sensitive cache key for arrangement + move count.

        Returns:
            String like "3x3|0:0@0,...|#12"
        """
        placement = ",".join(
            f"{p.piece_id}:{p.correct_slot}@{p.current_slot}" for p in self.pieces
        )
        return f"{self.grid.rows}x{self.grid.cols}|{placement}|#{self.moves}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rows": self.grid.rows,
            "cols": self.grid.cols,
            "moves": self.moves,
            "pieces": [
                {"pieceId": p.piece_id, "currentSlot": p.current_slot,
                 "correctSlot": p.correct_slot}
                for p in self.pieces
            ],
        }
