"""
Puzzle session - one board, its move log and the move gate.

The session is the boundary to the outside world: input layers request
spins and shifts, animation/audio layers subscribe to move events, and a UI
reads the remaining-move count and the solved flag.

Moves are applied to the board immediately. A consumer that animates them
can pace the per-step sequence from ``iter_steps()`` (or the event) and call
``complete_move()`` when done; until then no other move is accepted. With
``auto_complete`` the gate reopens as soon as the move is applied. Undo-all
and solve queue their macro moves and play one per ``complete_move()``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional

from ringpuzzle.core.base import BaseRules
from ringpuzzle.core.config import Config
from ringpuzzle.core.registry import RULES_REGISTRY
from ringpuzzle.game.board import PieceRegistry
from ringpuzzle.game.game_core import ErrorCode, Move, MoveResult, MoveStep
from ringpuzzle.game.geometry import validate_move
from ringpuzzle.game.move_log import MoveLog


class SessionState(Enum):
    """Whether a move may be accepted."""
    IDLE = "idle"
    MOVE_IN_PROGRESS = "move_in_progress"


class MoveSource(Enum):
    """Why a move was applied."""
    PLAYER = "player"
    UNDO = "undo"
    SOLVE = "solve"


@dataclass
class MoveEvent:
    """Emitted once per accepted move."""
    move: Move
    step_time: float  # duration hint per repetition
    source: MoveSource
    steps: List[MoveStep] = field(default_factory=list)
    remaining_moves: Optional[int] = None
    wait_time: float = 0.0  # pause between repetitions

    @property
    def reps(self) -> int:
        return self.move.reps

    def to_dict(self) -> Dict[str, Any]:
        return {
            "move": self.move.to_dict(),
            "step_time": self.step_time,
            "wait_time": self.wait_time,
            "source": self.source.value,
            "moved": [
                [[pid, src.to_tuple(), dst.to_tuple()] for pid, src, dst in s.moved]
                for s in self.steps
            ],
            "remaining_moves": self.remaining_moves,
        }


@dataclass
class SolveCheckEvent:
    """Emitted after every solve check."""
    solved: bool
    report: Optional[Dict[str, Any]] = None


class PuzzleSession:
    """
    A single puzzle being played.

    Args:
        config: Full configuration; defaults are used if omitted.
        rules: Rule set instance. Built from ``config.rules`` via the rules
            registry if omitted.
        auto_complete: Reopen the gate right after each move is applied.
    """

    def __init__(self, config: Optional[Config] = None,
                 rules: Optional[BaseRules] = None,
                 auto_complete: bool = True):
        self.config = config or Config()
        ring_count = self.config.board.ring_count
        self.registry = PieceRegistry(ring_count=ring_count)
        if rules is None:
            rules_cls = RULES_REGISTRY.get(self.config.rules.type)
            if rules_cls is None:
                raise ValueError(f"Unknown rules type '{self.config.rules.type}'")
            rules = rules_cls(self.config.rules, ring_count)
        self.rules = rules
        self.rules.registry = self.registry
        self.move_log = MoveLog(replay=self._replay)
        self.state = SessionState.IDLE
        self.auto_complete = auto_complete
        self.moves_to_solve: Optional[int] = None
        self.solved: Optional[bool] = None
        self.last_steps: List[MoveStep] = []

        self._move_listeners: List[Callable[[MoveEvent], None]] = []
        self._solve_listeners: List[Callable[[SolveCheckEvent], None]] = []
        self._replay_source = MoveSource.UNDO
        self._replay_time = self.config.board.undo_time
        self._pending: List[Callable[[], None]] = []

    # ------------------------------------------------------------------ #
    # Listeners
    # ------------------------------------------------------------------ #
    def add_move_listener(self, callback: Callable[[MoveEvent], None]) -> None:
        self._move_listeners.append(callback)

    def remove_move_listener(self, callback: Callable[[MoveEvent], None]) -> None:
        if callback in self._move_listeners:
            self._move_listeners.remove(callback)

    def add_solve_listener(self, callback: Callable[[SolveCheckEvent], None]) -> None:
        self._solve_listeners.append(callback)

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #
    @property
    def can_move(self) -> bool:
        return self.state == SessionState.IDLE

    @property
    def remaining_moves(self) -> Optional[int]:
        """Moves left to the scramble's solution; None when not tracked."""
        if self.moves_to_solve is None:
            return None
        return self.moves_to_solve - len(self.move_log)

    def new_puzzle(self, seed: Optional[int] = None) -> int:
        """
        Clear the board and build a freshly scrambled puzzle.

        Returns:
            Number of moves needed to solve it.
        """
        if seed is not None and hasattr(self.rules, "reseed"):
            self.rules.reseed(seed)
        self.clear()
        self.moves_to_solve = self.rules.build_puzzle(self.registry)
        return self.moves_to_solve

    def clear(self) -> None:
        """Remove all pieces and forget every logged move."""
        self.rules.clear_puzzle()
        self.registry.clear()
        self.move_log.clear()
        self._pending = []
        self.state = SessionState.IDLE
        self.moves_to_solve = None
        self.solved = None
        self.last_steps = []

    # ------------------------------------------------------------------ #
    # Move requests
    # ------------------------------------------------------------------ #
    def request_spin(self, ring: int, direction: bool) -> MoveResult:
        return self.request_move(Move.spin(ring, direction))

    def request_shift(self, column: int, direction: bool) -> MoveResult:
        return self.request_move(Move.shift(column, direction))

    def request_move(self, move: Move) -> MoveResult:
        """
        Apply a player move unless another move is still in progress.

        Rejections leave the board and the log untouched.
        """
        if not self.can_move:
            return MoveResult(success=False, error=ErrorCode.MOVE_IN_PROGRESS,
                              message="A move is already in progress")
        try:
            validate_move(move, self.registry.ring_count)
        except ValueError as e:
            return MoveResult(success=False, error=ErrorCode.INVALID_AXIS, message=str(e))
        return self._perform(move, MoveSource.PLAYER, self.config.board.move_time)

    def complete_move(self) -> None:
        """
        Reopen the gate once the consumer has finished playing a move.

        If an undo-all or solve is still running, its next macro move is
        applied straight away and the gate closes again.
        """
        self.state = SessionState.IDLE
        self._advance()

    def _advance(self) -> None:
        while self._pending and self.can_move:
            self._pending.pop(0)()

    def iter_steps(self) -> Iterator[MoveStep]:
        """Steps of the most recently applied move, in order."""
        yield from self.last_steps

    def _perform(self, move: Move, source: MoveSource, step_time: float) -> MoveResult:
        self.state = SessionState.MOVE_IN_PROGRESS
        steps = self.registry.apply_move(move)
        self.move_log.append(move)
        self.last_steps = steps

        event = MoveEvent(move=move, step_time=step_time, source=source,
                          steps=steps, remaining_moves=self.remaining_moves,
                          wait_time=self.config.board.wait_time if step_time else 0.0)
        for callback in list(self._move_listeners):
            callback(event)

        if self.auto_complete:
            self.state = SessionState.IDLE
        return MoveResult(success=True, error=ErrorCode.OK, move=move, steps=steps,
                          message=f"Applied {move}")

    def _replay(self, move: Move) -> None:
        self._perform(move, self._replay_source, self._replay_time)

    # ------------------------------------------------------------------ #
    # Undo / solve
    # ------------------------------------------------------------------ #
    def undo(self) -> MoveResult:
        """Reverse the last logged move. An empty log is a no-op."""
        if not self.can_move:
            return MoveResult(success=False, error=ErrorCode.MOVE_IN_PROGRESS,
                              message="A move is already in progress")
        self._replay_source = MoveSource.UNDO
        self._replay_time = self.config.board.undo_time
        inverse = self.move_log.undo_last()
        if inverse is None:
            return MoveResult(success=True, error=ErrorCode.OK, message="Nothing to undo")
        return MoveResult(success=True, error=ErrorCode.OK, move=inverse,
                          steps=list(self.last_steps), message=f"Undid with {inverse}")

    def undo_all(self) -> int:
        """
        Reverse every logged move, newest first.

        Without ``auto_complete`` one macro move is applied now and each
        ``complete_move()`` applies the next.

        Returns:
            Number of macro moves replayed (the log length beforehand).
        """
        if not self.can_move:
            return 0
        count = len(self.move_log)
        self._queue_undos(count, MoveSource.UNDO, self.config.board.undo_time)
        self._advance()
        return count

    def solve(self) -> int:
        """
        Undo the player's moves instantly, then play back the scramble's solution.

        The solution log is handed to the move log once the player's moves
        are gone and consumed through the same undo path, paced like
        ``undo_all``. The remaining-move count is no longer tracked afterwards.

        Returns:
            Number of solution moves played, 0 if no solution is available.
        """
        if not self.can_move:
            return 0
        self._queue_undos(len(self.move_log), MoveSource.UNDO, 0.0)

        solution = self.rules.take_solution() or []
        if solution:
            def install() -> None:
                self.move_log.install_solution(solution)
                self.moves_to_solve = None

            self._pending.append(install)
            self._queue_undos(len(solution), MoveSource.SOLVE, self.config.board.undo_time)
        self._advance()
        return len(solution)

    def _queue_undos(self, count: int, source: MoveSource, step_time: float) -> None:
        def undo_step() -> None:
            self._replay_source = source
            self._replay_time = step_time
            if self.move_log.undo_last() is None:
                raise RuntimeError("Undo queued on an empty move log")

        self._pending.extend([undo_step] * count)

    def check_solve(self) -> bool:
        """Run the solve detector and notify solve listeners."""
        self.solved = self.rules.check_solve()
        report = getattr(self.rules, "last_report", None)
        event = SolveCheckEvent(solved=self.solved,
                                report=report.to_dict() if report is not None else None)
        for callback in list(self._solve_listeners):
            callback(event)
        return self.solved

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "ring_count": self.registry.ring_count,
            "pieces": [p.to_dict() for p in self.registry],
            "move_log": self.move_log.to_dicts(),
            "moves_to_solve": self.moves_to_solve,
            "remaining_moves": self.remaining_moves,
            "solved": self.solved,
        }
