"""
Ring Puzzle - Core Types

Data structures shared by the board geometry, piece registry, move log,
scrambler and solve detector.
"""

from typing import Any, Dict, List, Optional, Tuple
from dataclasses import dataclass, field
from enum import Enum


NUM_POSITIONS = 12  # angular slots per ring, 30 degrees apart
NUM_COLUMNS = 6     # radial columns crossing the center


class MoveMode(Enum):
    """Which kind of selection a move acts on."""
    SPIN = "spin"    # a ring
    SHIFT = "shift"  # a column


class SolveStatus(Enum):
    """Per-piece classification produced by the solve detector."""
    UNCHECKED = "unchecked"
    CHECKED = "checked"
    SOLVED = "solved"


class GroupKind(Enum):
    """Shape of the group a piece was created in."""
    COLUMN = "column"
    SQUARE = "square"


class ErrorCode(Enum):
    """错误码"""
    OK = "OK"
    MOVE_IN_PROGRESS = "MoveInProgress"
    INVALID_AXIS = "InvalidAxis"
    NO_SOLUTION = "NoSolution"


class InvalidMoveSequenceError(ValueError):
    """Raised when an externally supplied move sequence breaks the log invariants."""


class ScrambleError(RuntimeError):
    """Raised when the scrambler cannot fit the requested groups on the board."""


@dataclass(frozen=True)
class Cell:
    """A (ring, position) slot. Rings are 1-based, positions 0-11."""
    ring: int
    position: int

    def to_tuple(self) -> Tuple[int, int]:
        return (self.ring, self.position)

    @property
    def column(self) -> int:
        return self.position % NUM_COLUMNS


@dataclass(frozen=True)
class Move:
    """
    A spin or shift on one axis, repeated ``reps`` times.

    ``axis`` is the ring number for a spin and the column index (0-5) for a
    shift. ``direction`` True means clockwise for a spin.
    """
    mode: MoveMode
    axis: int
    direction: bool
    reps: int = 1

    @property
    def key(self) -> Tuple[MoveMode, int]:
        """Moves sharing a key are mergeable."""
        return (self.mode, self.axis)

    def inverted(self) -> 'Move':
        return Move(self.mode, self.axis, not self.direction, self.reps)

    def with_reps(self, reps: int) -> 'Move':
        return Move(self.mode, self.axis, self.direction, reps)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mode": self.mode.value,
            "axis": self.axis,
            "direction": self.direction,
            "reps": self.reps,
        }

    @staticmethod
    def spin(ring: int, direction: bool, reps: int = 1) -> 'Move':
        return Move(MoveMode.SPIN, ring, direction, reps)

    @staticmethod
    def shift(column: int, direction: bool, reps: int = 1) -> 'Move':
        return Move(MoveMode.SHIFT, column, direction, reps)

    def __str__(self) -> str:
        return f"{self.mode.value} {self.axis} {self.direction} {self.reps}"


@dataclass
class Piece:
    """A piece resting on the board."""
    id: int
    cell: Cell
    color: str = "white"
    group: Optional[GroupKind] = None
    group_id: Optional[int] = None
    status: SolveStatus = SolveStatus.UNCHECKED

    @property
    def ring(self) -> int:
        return self.cell.ring

    @property
    def position(self) -> int:
        return self.cell.position

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "ring": self.ring,
            "position": self.position,
            "color": self.color,
            "group": self.group.value if self.group else None,
            "group_id": self.group_id,
            "status": self.status.value,
        }


@dataclass
class MoveStep:
    """One discrete transform step of a (possibly repeated) move."""
    move: Move
    index: int  # 0-based repetition index
    moved: List[Tuple[int, Cell, Cell]] = field(default_factory=list)  # (piece id, from, to)

    @property
    def crossed_boundary(self) -> bool:
        """True if any piece jumped across the center or the outer edge."""
        return any(src.position != dst.position for _, src, dst in self.moved
                   if self.move.mode == MoveMode.SHIFT)


@dataclass
class MoveResult:
    """Result of a move request"""
    success: bool
    error: ErrorCode
    move: Optional[Move] = None
    steps: List[MoveStep] = field(default_factory=list)
    message: str = ""
