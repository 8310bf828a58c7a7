"""
Origami rules.

Pieces are grouped in columns of one piece per ring, or in 2x2 squares on
the inner two rings. A puzzle is built solved and then scrambled with a few
random moves; a move is a run of spins on one ring or shifts on one column,
so spinning the same ring four times is still a single move.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ringpuzzle.core import BaseRules, RulesConfig, register_rules, register_rules_config
from ringpuzzle.game.board import PieceRegistry
from ringpuzzle.game.detection import SolveReport, check_solve
from ringpuzzle.game.game_core import Move
from ringpuzzle.game.scrambler import DEFAULT_COLORS, Scrambler


@register_rules_config("origami")
@dataclass
class OrigamiRulesConfig(RulesConfig):
    """Configuration for the origami rule set."""

    max_sets: int = 3        # groups of pieces in a puzzle
    max_moves: int = 3       # moves needed to solve
    max_spin_reps: int = 6
    seed: Optional[int] = None
    colors: List[str] = field(default_factory=lambda: list(DEFAULT_COLORS))
    default_color: str = "white"
    max_attempts: int = 1000

    def __post_init__(self) -> None:
        if not isinstance(self.max_sets, int) or self.max_sets < 1:
            raise ValueError("max_sets must be a positive integer")
        if not isinstance(self.max_moves, int) or self.max_moves < 1:
            raise ValueError("max_moves must be a positive integer")
        if not isinstance(self.max_spin_reps, int) or self.max_spin_reps < 1:
            raise ValueError("max_spin_reps must be a positive integer")
        if not isinstance(self.max_attempts, int) or self.max_attempts < 1:
            raise ValueError("max_attempts must be a positive integer")
        if not isinstance(self.colors, list):
            raise ValueError("colors must be a list of color names")


@register_rules("origami")
class OrigamiRules(BaseRules):
    """Column and square groups, scrambled by the Scrambler."""

    def __init__(self, config: OrigamiRulesConfig, ring_count: int = 4):
        super().__init__(config, ring_count)
        self.config: OrigamiRulesConfig
        self.scrambler = self._make_scrambler(config.seed)
        self.solve_log: List[Move] = []
        self.moves_to_solve: int = 0
        self.last_report: Optional[SolveReport] = None

    def _make_scrambler(self, seed: Optional[int]) -> Scrambler:
        return Scrambler(
            ring_count=self.ring_count,
            max_sets=self.config.max_sets,
            max_moves=self.config.max_moves,
            max_spin_reps=self.config.max_spin_reps,
            colors=self.config.colors,
            default_color=self.config.default_color,
            max_attempts=self.config.max_attempts,
            seed=seed,
        )

    def reseed(self, seed: Optional[int]) -> None:
        self.scrambler = self._make_scrambler(seed)

    def build_puzzle(self, registry: PieceRegistry) -> int:
        """Creates a solved puzzle on ``registry``, then scrambles it."""
        self.registry = registry
        result = self.scrambler.build(registry)
        self.solve_log = list(result.solution)
        self.moves_to_solve = result.moves_to_solve
        self.last_report = None
        return self.moves_to_solve

    def check_solve(self) -> bool:
        if self.registry is None:
            return False
        self.last_report = check_solve(self.registry)
        return self.last_report.solved

    def take_solution(self) -> List[Move]:
        """
        Give away the solution log. A second call returns an empty list until
        the next puzzle is built.
        """
        solution, self.solve_log = self.solve_log, []
        return solution

    def clear_puzzle(self) -> None:
        """Removes all pieces and forgets the solution."""
        super().clear_puzzle()
        self.solve_log = []
        self.moves_to_solve = 0
        self.last_report = None
