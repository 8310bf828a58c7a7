"""
Move log - the net moves a player has made since the puzzle was built.

Consecutive moves on the same ring (or column) are merged into a single
entry, so the log length is the number of moves counted against the
player and ``undo_all`` takes exactly that many macro steps.
"""

from typing import Callable, Iterable, Iterator, List, Optional

from .game_core import InvalidMoveSequenceError, Move


class MoveLog:
    """
    Ordered, merge-on-append record of moves.

    Args:
        replay: Called with the inverse of the last entry on undo. It must
            apply the move and route it back through ``append``; the merge
            then removes the entry. Defaults to ``append`` alone, which keeps
            a bare log consistent without touching any board.
    """

    def __init__(self, replay: Optional[Callable[[Move], None]] = None):
        self._log: List[Move] = []
        self._replay = replay or self.append

    def __len__(self) -> int:
        return len(self._log)

    def __iter__(self) -> Iterator[Move]:
        return iter(self._log)

    def __getitem__(self, index: int) -> Move:
        return self._log[index]

    @property
    def last(self) -> Optional[Move]:
        return self._log[-1] if self._log else None

    def to_list(self) -> List[Move]:
        return list(self._log)

    def append(self, move: Move) -> None:
        """
        Add a move, merging it into the last entry if both act on the same axis.

        Same direction adds repetitions, opposite direction removes them. A
        merge that nets to zero drops the entry (the move was undone). The
        direction of the existing entry is kept unless the new move overshoots
        it, in which case the remainder is recorded in the new direction.
        """
        last = self.last
        if last is None or last.key != move.key:
            self._log.append(move)
            return

        reps = last.reps + move.reps * (1 if last.direction == move.direction else -1)
        if reps == 0:
            self._log.pop()
        elif reps > 0:
            self._log[-1] = last.with_reps(reps)
        else:
            self._log[-1] = Move(last.mode, last.axis, not last.direction, -reps)

    def undo_last(self) -> Optional[Move]:
        """
        Replay the inverse of the last entry. Returns it, or None if the log is empty.
        """
        last = self.last
        if last is None:
            return None
        inverse = last.inverted()
        self._replay(inverse)
        return inverse

    def undo_all(self) -> int:
        """
        Undo until the log is empty; returns the number of macro steps taken.
        """
        count = 0
        while self._log:
            before = len(self._log)
            self.undo_last()
            if len(self._log) >= before:
                raise RuntimeError("Undo replay did not shrink the move log")
            count += 1
        return count

    def install_solution(self, moves: Iterable[Move]) -> None:
        """
        Replace the log wholesale with ``moves``.

        Raises InvalidMoveSequenceError (leaving the log untouched) if an entry
        is not a Move, has fewer than one repetition, or shares its axis with
        the entry before it.
        """
        moves = list(moves)
        for i, move in enumerate(moves):
            if not isinstance(move, Move):
                raise InvalidMoveSequenceError(f"Entry {i} is not a Move: {move!r}")
            if move.reps < 1:
                raise InvalidMoveSequenceError(f"Entry {i} has reps {move.reps}, expected >= 1")
            if i > 0 and moves[i - 1].key == move.key:
                raise InvalidMoveSequenceError(
                    f"Entries {i - 1} and {i} both act on {move.mode.value} {move.axis}"
                )
        self._log = moves

    def clear(self) -> None:
        self._log = []

    def to_dicts(self) -> List[dict]:
        return [move.to_dict() for move in self._log]
