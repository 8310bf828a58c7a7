import os
import json
from datetime import datetime
from typing import Any, Dict, List, Optional

from ringpuzzle.session import MoveEvent, PuzzleSession, SolveCheckEvent


class SessionLogger:
    def __init__(self, log_dir: str, experiment_name: str):
        """
        Initializes the logger for a puzzle session.

        Args:
            log_dir (str): The base directory for logs.
            experiment_name (str): A name for the run; a timestamp is appended.
        """
        self.timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.experiment_name = f"{experiment_name}_{self.timestamp}"
        self.run_dir = os.path.join(log_dir, self.experiment_name)
        self.logs: List[Dict[str, Any]] = []
        self.verbose = False
        self._step = 0

        os.makedirs(self.run_dir, exist_ok=True)

    def attach(self, session: PuzzleSession, verbose: bool = False) -> None:
        """Subscribe to a session's move and solve events."""
        self.verbose = verbose
        session.add_move_listener(self.on_move)
        session.add_solve_listener(self.on_solve_check)
        self.log_step({
            "step_type": "initial",
            "moves_to_solve": session.moves_to_solve,
            "pieces": [p.to_dict() for p in session.registry],
        })

    def on_move(self, event: MoveEvent) -> None:
        self.log_step({"step_type": "move", **event.to_dict()})

    def on_solve_check(self, event: SolveCheckEvent) -> None:
        self.log_step({"step_type": "solve_check", "solved": event.solved, "report": event.report})

    def log_step(self, data: Dict[str, Any], step: Optional[int] = None):
        """
        Logs a single step of the session.

        Args:
            data (Dict[str, Any]): A dictionary of data to log for the step.
            step (int): Step number; defaults to the next one.
        """
        if step is None:
            step = self._step
        self._step = step + 1
        log_entry = {"step": step, "timestamp": datetime.now().isoformat(), **data}

        if self.verbose:
            step_type = data.get("step_type", "unknown")
            if step_type == "initial":
                print(f"🚀 Step {step}: Puzzle built, {data.get('moves_to_solve')} moves to solve")
            elif step_type == "move":
                move = data.get("move", {})
                print(f"⚡ Step {step}: {data.get('source')} {move.get('mode')} "
                      f"{move.get('axis')} x{move.get('reps')}")
            elif step_type == "solve_check":
                print(f"🔍 Step {step}: {'Solved' if data.get('solved') else 'Not solved'}")

        self.logs.append(log_entry)

    def save_logs(self):
        """Saves all collected logs to a JSON file."""
        log_file = os.path.join(self.run_dir, "session_log.json")
        with open(log_file, "w") as f:
            json.dump(self.logs, f, indent=2, default=str)

        summary_file = os.path.join(self.run_dir, "summary.txt")
        self._create_summary_file(summary_file)

        if self.verbose:
            print(f"📁 Logs saved to: {log_file}")
            print(f"📋 Summary saved to: {summary_file}")
        return log_file

    def _create_summary_file(self, summary_file: str):
        """Create a human-readable summary file."""
        moves = [log for log in self.logs if log.get("step_type") == "move"]
        by_source = {}
        for log in moves:
            by_source[log.get("source")] = by_source.get(log.get("source"), 0) + 1
        checks = [log for log in self.logs if log.get("step_type") == "solve_check"]

        with open(summary_file, "w") as f:
            f.write(f"Session Summary: {self.experiment_name}\n")
            f.write("=" * 60 + "\n")
            f.write(f"Moves Applied: {len(moves)}\n")
            for source, count in sorted(by_source.items()):
                f.write(f"  {source}: {count}\n")
            f.write(f"Solve Checks: {len(checks)}\n")
            if checks:
                f.write(f"Last Check: {'Solved' if checks[-1].get('solved') else 'Not solved'}\n")
            f.write("\nStep-by-step breakdown:\n")
            f.write("-" * 30 + "\n")

            for log in self.logs:
                step = log.get("step", "?")
                step_type = log.get("step_type", "unknown")
                if step_type == "initial":
                    f.write(f"Step {step}: Puzzle built ({log.get('moves_to_solve')} moves to solve)\n")
                elif step_type == "move":
                    move = log.get("move", {})
                    f.write(f"Step {step}: {log.get('source')} {move.get('mode')} {move.get('axis')} "
                            f"dir={move.get('direction')} reps={move.get('reps')}\n")
                elif step_type == "solve_check":
                    f.write(f"Step {step}: Solve check - {'solved' if log.get('solved') else 'not solved'}\n")
