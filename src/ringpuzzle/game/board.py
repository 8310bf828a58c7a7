"""
Piece registry - the authoritative set of occupied cells.
"""

from typing import Dict, Iterator, List, Optional
from dataclasses import dataclass, field

import numpy as np

from .game_core import (
    Cell, Move, MoveStep, Piece, GroupKind, SolveStatus, NUM_POSITIONS
)
from .geometry import affects, step, validate_cell, validate_move


EMPTY = -1


@dataclass
class PieceRegistry:
    """
    All pieces on one board.

    Pieces are mutated in place by moves. Two pieces never share a cell at
    rest: every move is a permutation of the cells on one ring or column.
    """
    ring_count: int = 4
    pieces: List[Piece] = field(default_factory=list)
    _next_id: int = 0

    def __len__(self) -> int:
        return len(self.pieces)

    def __iter__(self) -> Iterator[Piece]:
        return iter(self.pieces)

    def add_piece(self, cell: Cell, color: str = "white",
                  group: Optional[GroupKind] = None,
                  group_id: Optional[int] = None) -> Piece:
        """Create a piece on ``cell``. Raises ValueError if the cell is invalid or taken."""
        validate_cell(cell, self.ring_count)
        if self.piece_at(cell) is not None:
            raise ValueError(f"Cell {cell.to_tuple()} is already occupied")
        piece = Piece(id=self._next_id, cell=cell, color=color, group=group, group_id=group_id)
        self._next_id += 1
        self.pieces.append(piece)
        return piece

    def remove_piece(self, piece_id: int) -> bool:
        for i, piece in enumerate(self.pieces):
            if piece.id == piece_id:
                del self.pieces[i]
                return True
        return False

    def clear(self) -> None:
        self.pieces = []
        self._next_id = 0

    def get_piece(self, piece_id: int) -> Optional[Piece]:
        for piece in self.pieces:
            if piece.id == piece_id:
                return piece
        return None

    def piece_at(self, cell: Cell) -> Optional[Piece]:
        for piece in self.pieces:
            if piece.cell == cell:
                return piece
        return None

    def by_cell(self) -> Dict[Cell, Piece]:
        """Snapshot index of cell -> piece."""
        return {piece.cell: piece for piece in self.pieces}

    def at_position(self, position: int) -> List[Piece]:
        return [p for p in self.pieces if p.position == position]

    def affected_by(self, move: Move) -> List[Piece]:
        return [p for p in self.pieces if affects(p.cell, move)]

    def occupied_cells(self) -> List[Cell]:
        return [p.cell for p in self.pieces]

    # ------------------------------------------------------------------ #
    # Moves
    # ------------------------------------------------------------------ #
    def iter_move_steps(self, move: Move) -> Iterator[MoveStep]:
        """
        Apply ``move`` one repetition at a time, yielding after each step.

        The affected pieces are chosen once up front; a spin never leaves its
        ring and a shift never leaves its column, so the set is stable.
        """
        validate_move(move, self.ring_count)
        targets = self.affected_by(move)
        for i in range(move.reps):
            moved = []
            for piece in targets:
                src = piece.cell
                piece.cell = step(src, move, self.ring_count)
                moved.append((piece.id, src, piece.cell))
            yield MoveStep(move=move, index=i, moved=moved)

    def apply_move(self, move: Move) -> List[MoveStep]:
        """Apply every repetition of ``move``; returns the steps taken."""
        return list(self.iter_move_steps(move))

    # ------------------------------------------------------------------ #
    # Views
    # ------------------------------------------------------------------ #
    def reset_statuses(self) -> None:
        for piece in self.pieces:
            piece.status = SolveStatus.UNCHECKED

    def occupancy_grid(self) -> np.ndarray:
        """
        Board as a (ring_count, 12) int array of piece ids.

        Row 0 is ring 1. Empty cells hold -1.
        """
        grid = np.full((self.ring_count, NUM_POSITIONS), EMPTY, dtype=int)
        for piece in self.pieces:
            grid[piece.ring - 1, piece.position] = piece.id
        return grid

    def snapshot(self) -> Dict[int, Cell]:
        """piece id -> current cell"""
        return {piece.id: piece.cell for piece in self.pieces}

    def to_dict(self) -> Dict[str, object]:
        return {
            "ring_count": self.ring_count,
            "pieces": [piece.to_dict() for piece in self.pieces],
        }
