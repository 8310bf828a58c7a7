"""
Shared pytest fixtures for ringpuzzle tests.

Board fixtures are function-scoped; every test gets its own registry and
session so moves never leak between tests.
"""

from typing import Callable, Iterable, List

import pytest

from ringpuzzle.core.config import Config
from ringpuzzle.game import Cell, GroupKind, PieceRegistry
from ringpuzzle.session import PuzzleSession


# =============================================================================
# Board fixtures
# =============================================================================


@pytest.fixture
def registry() -> PieceRegistry:
    """Empty four-ring board."""
    return PieceRegistry(ring_count=4)


@pytest.fixture
def place() -> Callable[[PieceRegistry, Iterable[tuple]], List]:
    """Put plain pieces on the given (ring, position) cells."""
    def _place(reg: PieceRegistry, cells: Iterable[tuple], color: str = "red") -> List:
        return [reg.add_piece(Cell(ring, position), color=color) for ring, position in cells]
    return _place


@pytest.fixture
def column_board(registry: PieceRegistry) -> PieceRegistry:
    """A solved column at position 5."""
    for ring in range(1, 5):
        registry.add_piece(Cell(ring, 5), color="red", group=GroupKind.COLUMN, group_id=0)
    return registry


@pytest.fixture
def square_board(registry: PieceRegistry) -> PieceRegistry:
    """A solved 2x2 square on rings 1-2 at positions 0 and 1."""
    for ring in (1, 2):
        for position in (0, 1):
            registry.add_piece(Cell(ring, position), color="blue", group=GroupKind.SQUARE, group_id=0)
    return registry


# =============================================================================
# Session fixtures
# =============================================================================


@pytest.fixture
def config() -> Config:
    return Config.from_dict({
        "board": {"ring_count": 4},
        "rules": {"type": "origami", "max_sets": 3, "max_moves": 5, "seed": 1234},
    })


@pytest.fixture
def session(config: Config) -> PuzzleSession:
    """Session with a freshly scrambled puzzle."""
    s = PuzzleSession(config)
    s.new_puzzle(seed=1234)
    return s


@pytest.fixture
def blank_session(config: Config) -> PuzzleSession:
    """Session with an empty board and no solution."""
    return PuzzleSession(config)
