"""
User-friendly display utilities for ringpuzzle.
"""

from typing import Any, Dict
from datetime import datetime

from ringpuzzle.game.board import PieceRegistry
from ringpuzzle.game.game_core import NUM_POSITIONS, SolveStatus


STATUS_MARKS = {
    SolveStatus.UNCHECKED: "",
    SolveStatus.CHECKED: "?",
    SolveStatus.SOLVED: "*",
}


def render_board_text(registry: PieceRegistry, show_status: bool = False) -> str:
    """
    Render the board as a ring-by-position table, outer ring on top.

    Each occupied cell shows the first letter of the piece color; with
    ``show_status`` a trailing ``*`` marks solved pieces and ``?`` checked ones.
    """
    grid = registry.occupancy_grid()
    lines = ["ring | " + " ".join(f"{p:>3}" for p in range(NUM_POSITIONS))]
    lines.append("-" * len(lines[0]))
    for ring in range(registry.ring_count, 0, -1):
        cells = []
        for position in range(NUM_POSITIONS):
            piece_id = grid[ring - 1, position]
            if piece_id < 0:
                cells.append("  .")
                continue
            piece = registry.get_piece(int(piece_id))
            label = piece.color[:1].upper()
            if show_status:
                label += STATUS_MARKS[piece.status]
            cells.append(f"{label:>3}")
        lines.append(f"{ring:>4} | " + " ".join(cells))
    return "\n".join(lines)


class StatusDisplay:
    """Handles status display for different operations."""

    @staticmethod
    def print_header(title: str, width: int = 80):
        """Print a formatted header."""
        print("\n" + "=" * width)
        print(f"{title:^{width}}")
        print("=" * width)

    @staticmethod
    def print_section(title: str, width: int = 60):
        """Print a section header."""
        print(f"\n📋 {title}")
        print("-" * width)

    @staticmethod
    def print_config(config_dict: Dict[str, Any], title: str = "Configuration"):
        """Print configuration in a nice format."""
        StatusDisplay.print_section(title)
        for key, value in config_dict.items():
            print(f"  {key:<20} : {value}")

    @staticmethod
    def print_status(message: str, status: str = "info"):
        """Print a status message with appropriate emoji."""
        icons = {
            "info": "ℹ️",
            "success": "✅",
            "warning": "⚠️",
            "error": "❌",
            "processing": "🔄"
        }
        icon = icons.get(status, "ℹ️")
        timestamp = datetime.now().strftime("%H:%M:%S")
        print(f"{icon} [{timestamp}] {message}")

    @staticmethod
    def print_results(results: Dict[str, Any], title: str = "Results"):
        """Print results in a nice format."""
        StatusDisplay.print_section(title)
        for key, value in results.items():
            if isinstance(value, bool):
                icon = "✅" if value else "❌"
                print(f"  {key:<20} : {icon} {value}")
            elif isinstance(value, float):
                print(f"  {key:<20} : {value:.3f}")
            else:
                print(f"  {key:<20} : {value}")

    @staticmethod
    def ask_confirmation(message: str) -> bool:
        """Ask for user confirmation."""
        response = input(f"❓ {message} (y/N): ").strip().lower()
        return response in ['y', 'yes']


class LiveLogger:
    """Live logging with real-time updates."""

    def __init__(self, verbose: bool = True):
        self.verbose = verbose

    def log_action(self, action_name: str, details: str = ""):
        """Log an action being performed."""
        if self.verbose:
            message = f"Executing: {action_name}"
            if details:
                message += f" - {details}"
            StatusDisplay.print_status(message, "processing")

    def log_result(self, message: str, success: bool = True):
        """Log a result."""
        if self.verbose:
            status = "success" if success else "error"
            StatusDisplay.print_status(message, status)

    def log_info(self, message: str):
        """Log an info message."""
        if self.verbose:
            StatusDisplay.print_status(message, "info")

    def log_warning(self, message: str):
        """Log a warning message."""
        if self.verbose:
            StatusDisplay.print_status(message, "warning")

    def log_error(self, message: str):
        """Log an error message."""
        if self.verbose:
            StatusDisplay.print_status(message, "error")
