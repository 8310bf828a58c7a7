"""Utility modules for ringpuzzle."""

from ringpuzzle.utils.logger import SessionLogger
from ringpuzzle.utils.display import StatusDisplay, LiveLogger, render_board_text

__all__ = [
    "SessionLogger",
    "StatusDisplay",
    "LiveLogger",
    "render_board_text",
]
