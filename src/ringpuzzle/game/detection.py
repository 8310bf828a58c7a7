"""
Solve detector.

Pieces are solved when they form a full radial column (one piece on every
ring at the same position) or a 2x2 square on the two innermost rings.
Columns are checked first: anything on the outer ring can only belong to a
column.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from .board import PieceRegistry
from .game_core import Cell, GroupKind, Piece, SolveStatus
from .geometry import normalize_position


# (ring offset, position offset) of the other three members of a square,
# seen from its ring-2 anchor
SQUARE_OFFSETS = [(0, 1), (-1, 0), (-1, 1)]


@dataclass
class SolveReport:
    """Result of one detector pass."""
    solved: bool
    counts: Dict[SolveStatus, int] = field(default_factory=dict)
    groups: List[Dict[str, object]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {
            "solved": self.solved,
            "counts": {status.value: n for status, n in self.counts.items()},
            "groups": self.groups,
        }


class SolveDetector:
    """Classifies every piece of a registry as unchecked, checked or solved."""

    def __init__(self, registry: PieceRegistry):
        self.registry = registry
        self.ring_count = registry.ring_count
        self._index: Dict[Cell, Piece] = {}
        self.groups: List[Dict[str, object]] = []

    def _at(self, ring: int, position: int) -> Optional[Piece]:
        return self._index.get(Cell(ring, normalize_position(position)))

    def run(self) -> SolveReport:
        self.registry.reset_statuses()
        self._index = self.registry.by_cell()
        self.groups = []

        for piece in self.registry:
            self._solve_column(piece)
        for piece in self.registry:
            self._solve_square(piece, set())

        counts = {status: 0 for status in SolveStatus}
        for piece in self.registry:
            counts[piece.status] += 1
        solved = counts[SolveStatus.SOLVED] == len(self.registry)
        return SolveReport(solved=solved, counts=counts, groups=list(self.groups))

    def _solve_column(self, piece: Piece) -> None:
        if piece.status != SolveStatus.UNCHECKED or piece.ring != self.ring_count:
            return
        found = [piece]
        complete = True
        for ring in range(self.ring_count - 1, 0, -1):
            other = self._at(ring, piece.position)
            if other is None:
                complete = False
            else:
                found.append(other)
        status = SolveStatus.SOLVED if complete else SolveStatus.CHECKED
        for member in found:
            member.status = status
        if complete:
            self._record(GroupKind.COLUMN, found)

    def _solve_square(self, piece: Piece, visiting: Set[int]) -> None:
        """
        Evaluate the square anchored at ``piece`` (ring 2).

        The counter-clockwise neighbour is evaluated first so a square is
        always anchored on its counter-clockwise member; the middle of a 2x4
        block is never counted as a square of its own.
        """
        if piece.status == SolveStatus.SOLVED or piece.ring != 2:
            return
        visiting.add(piece.id)

        neighbour = self._at(2, piece.position - 1)
        if neighbour is not None and neighbour.id not in visiting:
            self._solve_square(neighbour, visiting)
            if piece.status == SolveStatus.SOLVED:
                return

        found = [piece]
        for ring_offset, pos_offset in SQUARE_OFFSETS:
            other = self._at(piece.ring + ring_offset, piece.position + pos_offset)
            if other is not None and other.status != SolveStatus.SOLVED:
                found.append(other)
        status = SolveStatus.SOLVED if len(found) == 4 else SolveStatus.CHECKED
        for member in found:
            member.status = status
        if status == SolveStatus.SOLVED:
            self._record(GroupKind.SQUARE, found)

    def _record(self, kind: GroupKind, members: List[Piece]) -> None:
        self.groups.append({
            "kind": kind.value,
            "pieces": sorted(p.id for p in members),
            "cells": sorted(p.cell.to_tuple() for p in members),
        })


def check_solve(registry: PieceRegistry) -> SolveReport:
    """Run the detector once over ``registry``."""
    return SolveDetector(registry).run()
