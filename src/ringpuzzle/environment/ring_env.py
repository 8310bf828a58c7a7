"""
Tool-call environment for the ring puzzle.

Wraps a PuzzleSession so an agent (or a script) can drive the puzzle through
named tools and receive JSON-friendly results.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ringpuzzle.core import (
    EnvironmentConfig,
    BaseEnvironment,
    Config,
    register_environment,
)
from ringpuzzle.core.base import Action, Observation, State
from ringpuzzle.game.game_core import ErrorCode, MoveResult, ScrambleError
from ringpuzzle.session import PuzzleSession
from ringpuzzle.utils.display import render_board_text


def _direction(value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"direction must be true or false, got {value!r}")
    return value


def _result_dict(result: MoveResult) -> Dict[str, Any]:
    if result.success:
        out = {"status": "success", "message": result.message}
        if result.move is not None:
            out["move"] = result.move.to_dict()
        return out
    return {"status": "error", "message": result.message, "error": result.error.value}


@register_environment("ring_puzzle")
class RingPuzzleEnvironment(BaseEnvironment):
    """Tool-driven wrapper around a PuzzleSession."""

    def __init__(self, config: Config):
        super().__init__(config.environment)
        self.config: EnvironmentConfig
        self.session = PuzzleSession(config)
        self.step_count: int = 0
        self.current_state: Optional[State] = None
        self._tool_handlers = {
            "state": self._tool_state,
            "spin": self._tool_spin,
            "shift": self._tool_shift,
            "undo": self._tool_undo,
            "undo_all": self._tool_undo_all,
            "check_solve": self._tool_check_solve,
            "solve": self._tool_solve,
            "reset": self._tool_reset,
        }

    # ------------------------------------------------------------------ #
    # BaseEnvironment API
    # ------------------------------------------------------------------ #
    def reset(self, seed: Optional[int] = None) -> Observation:
        """Build a new puzzle and return the first observation."""
        self.step_count = 0
        self.session.new_puzzle(seed=seed if seed is not None else self.config.seed)
        self.current_state = self._get_current_state()
        return self._create_observation()

    def step(self, action: Action) -> Observation:
        """Execute an action (tool call) and return new observation."""
        self.step_count += 1
        tool_result = self.execute_tool_call(action.action_type, action.parameters)
        self.current_state = self._get_current_state(
            metadata={
                "tool_call": action.to_dict(),
                "tool_result": tool_result,
            }
        )
        return self._create_observation()

    @property
    def done(self) -> bool:
        return bool(self.session.solved) or self.step_count >= self.config.max_steps

    def get_tool_schemas(self) -> List[Dict[str, Any]]:
        """Return JSON schemas for the tools."""
        def build_schema(name: str, desc: str, properties: Dict[str, Any], required: List[str]) -> Dict[str, Any]:
            return {
                "type": "function",
                "function": {
                    "name": name,
                    "description": desc,
                    "parameters": {
                        "type": "object",
                        "properties": properties,
                        "required": required,
                    },
                },
            }

        ring_count = self.session.registry.ring_count
        direction = {"type": "boolean", "description": "Direction of the move."}
        return [
            build_schema(
                "state",
                "Show the board: every piece with its ring and position, the move log and remaining moves.",
                {},
                [],
            ),
            build_schema(
                "spin",
                "Rotate every piece on one ring by one position. direction=true is clockwise.",
                {
                    "ring": {"type": "integer", "minimum": 1, "maximum": ring_count,
                             "description": "Ring to spin, 1 is innermost."},
                    "direction": direction,
                },
                ["ring", "direction"],
            ),
            build_schema(
                "shift",
                "Slide every piece in one column by one ring. Pieces leaving through the center or "
                "past the outer ring reappear on the opposite side of the column.",
                {
                    "column": {"type": "integer", "minimum": 0, "maximum": 5,
                               "description": "Column index; column c spans positions c and c+6."},
                    "direction": direction,
                },
                ["column", "direction"],
            ),
            build_schema("undo", "Reverse the last logged move.", {}, []),
            build_schema("undo_all", "Reverse every logged move.", {}, []),
            build_schema("check_solve", "Check whether every piece is in a finished column or square.", {}, []),
            build_schema("solve", "Undo all moves and play back the scramble's solution.", {}, []),
            build_schema(
                "reset",
                "Discard the current puzzle and build a new one.",
                {"seed": {"type": "integer", "description": "Optional random seed."}},
                [],
            ),
        ]

    def execute_tool_call(self, tool_name: str, arguments: Dict[str, Any]) -> Dict[str, Any]:
        """Dispatch tool calls."""
        handler = self._tool_handlers.get(tool_name)
        if not handler:
            return {"status": "error", "message": f"Unknown tool '{tool_name}'"}
        try:
            return handler(**arguments)
        except (TypeError, ValueError, ScrambleError) as exc:
            return {"status": "error", "message": f"Tool '{tool_name}' failed: {exc}"}

    def close(self) -> None:
        """Drop the puzzle."""
        self.session.clear()

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _get_current_state(self, metadata: Optional[Dict[str, Any]] = None) -> State:
        meta = {
            "moves_to_solve": self.session.moves_to_solve,
            "remaining_moves": self.session.remaining_moves,
            "move_log": self.session.move_log.to_dicts(),
            "solved": self.session.solved,
        }
        if metadata:
            meta.update(metadata)
        return State(
            step=self.step_count,
            pieces=[p.to_dict() for p in self.session.registry],
            metadata=meta,
        )

    def _create_observation(self) -> Observation:
        return Observation(state=self.current_state, description=self._get_state_description())

    def _get_state_description(self) -> str:
        """Textual description for the prompt history."""
        if not self.current_state:
            return "Ring puzzle not initialized."

        desc_lines = [
            f"Rings: {self.session.registry.ring_count}, pieces: {len(self.session.registry)}",
            render_board_text(self.session.registry, show_status=self.session.solved is not None),
        ]
        remaining = self.session.remaining_moves
        if remaining is not None:
            desc_lines.append(f"Moves remaining: {remaining}")
        tool_call = self.current_state.metadata.get("tool_call")
        tool_res = self.current_state.metadata.get("tool_result")
        if tool_call and tool_res:
            desc_lines.append(
                f"Last tool: {tool_call.get('action_type')} with {tool_call.get('parameters')}, "
                f"result: {tool_res.get('status')} - {tool_res.get('message')}"
            )
        if self.session.solved:
            desc_lines.append("Puzzle solved.")
        return "\n".join(desc_lines)

    # ------------------------------------------------------------------ #
    # Tool implementations
    # ------------------------------------------------------------------ #
    def _tool_state(self) -> Dict[str, Any]:
        return {"status": "success", "message": "State retrieved", "state": self.session.to_dict()}

    def _tool_spin(self, ring: int, direction: bool) -> Dict[str, Any]:
        return _result_dict(self.session.request_spin(int(ring), _direction(direction)))

    def _tool_shift(self, column: int, direction: bool) -> Dict[str, Any]:
        return _result_dict(self.session.request_shift(int(column), _direction(direction)))

    def _tool_undo(self) -> Dict[str, Any]:
        return _result_dict(self.session.undo())

    def _tool_undo_all(self) -> Dict[str, Any]:
        count = self.session.undo_all()
        return {"status": "success", "message": f"Undid {count} moves", "undone": count}

    def _tool_check_solve(self) -> Dict[str, Any]:
        solved = self.session.check_solve()
        return {"status": "success", "message": "Solved" if solved else "Not solved", "solved": solved}

    def _tool_solve(self) -> Dict[str, Any]:
        count = self.session.solve()
        if count == 0:
            return {"status": "error", "message": "No solution available",
                    "error": ErrorCode.NO_SOLUTION.value}
        return {"status": "success", "message": f"Played {count} solution moves", "played": count}

    def _tool_reset(self, seed: Optional[int] = None) -> Dict[str, Any]:
        moves = self.session.new_puzzle(seed=seed)
        return {"status": "success", "message": f"New puzzle, {moves} moves to solve", "moves_to_solve": moves}
