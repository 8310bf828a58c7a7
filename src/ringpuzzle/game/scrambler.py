"""
Scrambler - build a solved board, then mix it up with random moves.

The raw moves applied are recorded as the solution log. Undoing them from
the last one back restores the solved layout.
"""

import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .board import PieceRegistry
from .game_core import (
    Cell, GroupKind, Move, ScrambleError, NUM_POSITIONS
)
from .detection import check_solve
from .geometry import column_of


DEFAULT_COLORS = ["red", "blue", "green"]


@dataclass
class ScrambleResult:
    """Outcome of building one puzzle."""
    groups: int
    moves_to_solve: int
    solution: List[Move] = field(default_factory=list)


class Scrambler:
    """
    Random puzzle generator.

    Args:
        ring_count: Number of rings on the board.
        max_sets: Upper bound on the number of piece groups (at least one is placed).
        max_moves: Upper bound on the number of scramble moves (at least one is made).
        max_spin_reps: Upper bound on repetitions of a scramble spin.
        colors: Color per group, in placement order.
        default_color: Color for groups beyond the palette.
        max_attempts: Rejected placements or moves tolerated before giving up.
        seed: Random seed (for reproducibility).
    """

    def __init__(self, ring_count: int = 4, max_sets: int = 3, max_moves: int = 3,
                 max_spin_reps: int = 6, colors: Optional[Sequence[str]] = None,
                 default_color: str = "white", max_attempts: int = 1000,
                 seed: Optional[int] = None):
        self.ring_count = ring_count
        self.max_sets = max_sets
        self.max_moves = max_moves
        self.max_spin_reps = max_spin_reps
        self.colors = list(colors) if colors is not None else list(DEFAULT_COLORS)
        self.default_color = default_color
        self.max_attempts = max_attempts
        self.rng = random.Random(seed)
        self.solution: List[Move] = []

    # ------------------------------------------------------------------ #
    # Solved layout
    # ------------------------------------------------------------------ #
    def can_place_column(self, registry: PieceRegistry, position: int) -> bool:
        """No piece on any ring may already sit at ``position``."""
        return not registry.at_position(position)

    def place_column(self, registry: PieceRegistry, position: int, color: str, group_id: int) -> None:
        for ring in range(1, self.ring_count + 1):
            registry.add_piece(Cell(ring, position), color=color,
                               group=GroupKind.COLUMN, group_id=group_id)

    def can_place_square(self, registry: PieceRegistry, position: int) -> bool:
        """Rings 1-2 must be empty at ``position`` and the slot clockwise of it."""
        if self.ring_count < 2:
            return False
        nxt = (position + 1) % NUM_POSITIONS
        for piece in registry:
            if piece.position in (position, nxt) and piece.ring in (1, 2):
                return False
        return True

    def place_square(self, registry: PieceRegistry, position: int, color: str, group_id: int) -> None:
        for ring in (1, 2):
            for pos in (position, (position + 1) % NUM_POSITIONS):
                registry.add_piece(Cell(ring, pos), color=color,
                                   group=GroupKind.SQUARE, group_id=group_id)

    def build_solved_layout(self, registry: PieceRegistry) -> int:
        """
        Place a random number of groups on an empty registry.

        Returns:
            Number of groups placed.
        """
        sets = self.rng.randint(1, self.max_sets)
        placed = 0
        attempts = 0
        while placed < sets:
            attempts += 1
            if attempts > self.max_attempts:
                raise ScrambleError(
                    f"Could not place {sets} groups on a {self.ring_count}-ring board "
                    f"after {self.max_attempts} attempts"
                )
            kind = self.rng.choice([GroupKind.SQUARE, GroupKind.COLUMN])
            position = self.rng.randrange(NUM_POSITIONS)
            color = self.colors[placed] if placed < len(self.colors) else self.default_color
            if kind == GroupKind.SQUARE:
                if self.can_place_square(registry, position):
                    self.place_square(registry, position, color, placed)
                    placed += 1
            elif self.can_place_column(registry, position):
                self.place_column(registry, position, color, placed)
                placed += 1
        return placed

    # ------------------------------------------------------------------ #
    # Scramble moves
    # ------------------------------------------------------------------ #
    def random_move(self, registry: PieceRegistry) -> Move:
        """
        Pick a move that touches at least one piece.

        A random piece is chosen first and the axis is taken from it.
        """
        target = self.rng.choice(registry.pieces)
        direction = self.rng.random() > 0.5
        if self.rng.randrange(2) == 0:
            return Move.spin(target.ring, direction, self.rng.randint(1, self.max_spin_reps))
        return Move.shift(column_of(target.position), direction,
                          self.rng.randint(1, self.ring_count))

    def try_move(self, registry: PieceRegistry, move: Move) -> bool:
        """
        Apply and record ``move`` unless it acts on the same axis as the previous one.
        """
        if self.solution and self.solution[-1].key == move.key:
            return False
        registry.apply_move(move)
        self.solution.append(move)
        return True

    def scramble(self, registry: PieceRegistry, num_moves: Optional[int] = None) -> List[Move]:
        """
        Apply ``num_moves`` random moves (default: random in 1..max_moves).

        Returns:
            The solution log (raw moves in the order applied).
        """
        if not registry.pieces:
            raise ScrambleError("Cannot scramble an empty board")
        if num_moves is None:
            num_moves = self.rng.randint(1, self.max_moves)
        made = 0
        attempts = 0
        while made < num_moves:
            attempts += 1
            if attempts > self.max_attempts:
                raise ScrambleError(f"Gave up after {self.max_attempts} rejected scramble moves")
            if self.try_move(registry, self.random_move(registry)):
                made += 1
        return list(self.solution)

    def build(self, registry: PieceRegistry) -> ScrambleResult:
        """
        Clear ``registry``, place a solved layout and scramble it.

        A scramble that happens to land on a solved board (a column shifted
        all the way to the opposite half, say) is thrown away and rebuilt.
        """
        for _ in range(self.max_attempts):
            registry.clear()
            self.solution = []
            groups = self.build_solved_layout(registry)
            solution = self.scramble(registry)
            solved = check_solve(registry).solved
            registry.reset_statuses()
            if not solved:
                return ScrambleResult(groups=groups, moves_to_solve=len(solution), solution=solution)
        raise ScrambleError(f"Every scramble left the board solved after {self.max_attempts} attempts")

    def unscramble_sequence(self) -> List[Move]:
        """Moves that undo the scramble, in the order they must be applied."""
        return [move.inverted() for move in reversed(self.solution)]


def is_valid_solution_log(moves: Sequence[Move]) -> bool:
    """True if no two adjacent moves act on the same axis."""
    return all(a.key != b.key for a, b in zip(moves, moves[1:]))
