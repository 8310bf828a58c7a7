"""
Board geometry: how a single cell moves under a spin or a shift.

All functions are pure. A repeated move is always applied one step at a
time because a shift that crosses the center or the outer edge changes the
piece's half of the board, and with it the effective direction of the next
step.
"""

from typing import Iterator, List

from .game_core import Cell, Move, MoveMode, NUM_COLUMNS, NUM_POSITIONS


def normalize_position(position: int) -> int:
    """Reduce any integer to an angular position in [0, 11]."""
    return position % NUM_POSITIONS


def column_of(position: int) -> int:
    """Column index (0-5) of an angular position."""
    return position % NUM_COLUMNS


def opposite(position: int) -> int:
    """Angular position diametrically across the center."""
    return (position + NUM_COLUMNS) % NUM_POSITIONS


def validate_cell(cell: Cell, ring_count: int) -> None:
    """Raise ValueError if the cell is not a legal resting cell."""
    if not 1 <= cell.ring <= ring_count:
        raise ValueError(f"Ring must be 1-{ring_count}, got {cell.ring}")
    if not 0 <= cell.position < NUM_POSITIONS:
        raise ValueError(f"Position must be 0-{NUM_POSITIONS - 1}, got {cell.position}")


def validate_move(move: Move, ring_count: int) -> None:
    """Raise ValueError if the move's axis or repetition count is out of range."""
    if move.mode == MoveMode.SPIN:
        if not 1 <= move.axis <= ring_count:
            raise ValueError(f"Spin ring must be 1-{ring_count}, got {move.axis}")
    elif not 0 <= move.axis < NUM_COLUMNS:
        raise ValueError(f"Shift column must be 0-{NUM_COLUMNS - 1}, got {move.axis}")
    if move.reps < 1:
        raise ValueError(f"Move reps must be >= 1, got {move.reps}")


def spin_step(cell: Cell, direction: bool) -> Cell:
    """Rotate one slot around the ring. True is clockwise (decreasing position)."""
    return Cell(cell.ring, (cell.position + (-1 if direction else 1) + NUM_POSITIONS) % NUM_POSITIONS)


def shift_step(cell: Cell, direction: bool, ring_count: int) -> Cell:
    """
    Slide one ring inward or outward along the cell's column.

    The raw direction is flipped on positions 0-5 so that both halves of a
    column travel the same way. Leaving the board through the center or past
    the outer ring reflects the piece onto the opposite half of the column.
    """
    effective = direction != (cell.position // NUM_COLUMNS == 0)
    ring = cell.ring + (-1 if effective else 1)
    position = cell.position

    if ring <= 0:
        ring = -ring + 1
        position = opposite(position)
    elif ring > ring_count:
        ring = ring_count - (ring - (ring_count + 1))
        position = opposite(position)

    return Cell(ring, position)


def affects(cell: Cell, move: Move) -> bool:
    """Whether ``move`` relocates a piece resting on ``cell``."""
    if move.mode == MoveMode.SPIN:
        return cell.ring == move.axis
    return column_of(cell.position) == move.axis


def step(cell: Cell, move: Move, ring_count: int) -> Cell:
    """Apply a single repetition of ``move`` to ``cell``."""
    if not affects(cell, move):
        return cell
    if move.mode == MoveMode.SPIN:
        return spin_step(cell, move.direction)
    return shift_step(cell, move.direction, ring_count)


def iter_path(cell: Cell, move: Move, ring_count: int) -> Iterator[Cell]:
    """Yield the cell after each repetition of ``move``."""
    current = cell
    for _ in range(move.reps):
        current = step(current, move, ring_count)
        yield current


def apply_move(cell: Cell, move: Move, ring_count: int) -> Cell:
    """Apply every repetition of ``move`` and return the resting cell."""
    current = cell
    for current in iter_path(cell, move, ring_count):
        pass
    return current


def apply_moves(cell: Cell, moves: List[Move], ring_count: int) -> Cell:
    """Apply a sequence of moves in order."""
    for move in moves:
        cell = apply_move(cell, move, ring_count)
    return cell
