"""
Ring puzzle game logic: geometry, piece registry, move log, scrambler and
solve detector.
"""

from .game_core import (
    NUM_POSITIONS, NUM_COLUMNS,
    MoveMode, SolveStatus, GroupKind, ErrorCode,
    InvalidMoveSequenceError, ScrambleError,
    Cell, Move, Piece, MoveStep, MoveResult,
)

from .geometry import (
    spin_step, shift_step, step, apply_move, apply_moves, affects,
    column_of, normalize_position, opposite,
)

from .board import PieceRegistry
from .move_log import MoveLog
from .scrambler import Scrambler, ScrambleResult, is_valid_solution_log
from .detection import SolveDetector, SolveReport, check_solve

__all__ = [
    # Core types
    'NUM_POSITIONS', 'NUM_COLUMNS',
    'MoveMode', 'SolveStatus', 'GroupKind', 'ErrorCode',
    'InvalidMoveSequenceError', 'ScrambleError',
    'Cell', 'Move', 'Piece', 'MoveStep', 'MoveResult',
    # Geometry
    'spin_step', 'shift_step', 'step', 'apply_move', 'apply_moves', 'affects',
    'column_of', 'normalize_position', 'opposite',
    # Board state
    'PieceRegistry', 'MoveLog',
    # Generation and detection
    'Scrambler', 'ScrambleResult', 'is_valid_solution_log',
    'SolveDetector', 'SolveReport', 'check_solve',
]
