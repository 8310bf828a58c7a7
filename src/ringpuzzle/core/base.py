"""
Base classes and interfaces for the ring puzzle.

This module defines the abstractions for rule sets and tool-driven
environments, plus the plain data objects passed between them.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, TYPE_CHECKING
from dataclasses import dataclass, field
from abc import ABC, abstractmethod

from ringpuzzle.game.board import PieceRegistry
from ringpuzzle.game.game_core import Move
if TYPE_CHECKING:
    from ringpuzzle.core.config import RulesConfig, EnvironmentConfig


@dataclass
class Action:
    """Represents a tool call to be executed in the environment."""
    action_type: str
    parameters: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert action to dictionary representation."""
        return {
            "action_type": self.action_type,
            "parameters": self.parameters,
        }


@dataclass
class State:
    """Represents the state of the puzzle at a given step."""
    step: int
    pieces: List[Dict[str, Any]]
    metadata: Optional[Dict[str, Any]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert state to dictionary representation."""
        return {
            "step": self.step,
            "pieces": self.pieces,
            "metadata": self.metadata,
        }


@dataclass
class Observation:
    """Observation returned after every environment step."""
    state: State
    description: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state.to_dict(),
            "description": self.description,
        }


class BaseRules(ABC):
    """
    Base class for rule sets.

    A rule set decides how a puzzle is laid out and scrambled and when it
    counts as solved. It owns the solution log of the current puzzle.
    """

    def __init__(self, config: RulesConfig, ring_count: int = 4):
        self.config: RulesConfig = config
        self.ring_count = ring_count
        self.registry: Optional[PieceRegistry] = None

    @abstractmethod
    def build_puzzle(self, registry: PieceRegistry) -> int:
        """Lay out and scramble a new puzzle on ``registry``; returns moves to solve."""
        pass

    @abstractmethod
    def check_solve(self) -> bool:
        """Classify every piece and report whether the puzzle is solved."""
        pass

    @abstractmethod
    def take_solution(self) -> List[Move]:
        """Hand over the recorded solution log (consumed once)."""
        pass

    def clear_puzzle(self) -> None:
        if self.registry is not None:
            self.registry.clear()


class BaseEnvironment(ABC):
    """Base class for tool-driven puzzle environments."""

    def __init__(self, config: EnvironmentConfig):
        self.config: EnvironmentConfig = config

    @abstractmethod
    def reset(self) -> Observation:
        """Reset environment to a freshly scrambled puzzle."""
        pass

    @abstractmethod
    def step(self, action: Action) -> Observation:
        """Execute action and return new observation."""
        pass

    @abstractmethod
    def get_tool_schemas(self) -> List[Dict[str, Any]]:
        """Get JSON schemas for the tool functions."""
        pass

    @abstractmethod
    def execute_tool_call(self, tool_name: str, arguments: Dict[str, Any]) -> Dict[str, Any]:
        """Execute a tool call."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Clean up environment resources."""
        pass
