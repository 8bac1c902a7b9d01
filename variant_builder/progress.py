"""Terminal progress sink for the bundler's progress hook.

Updates are drawn over the current stderr line while progress is below the
threshold; near completion the bundler's own summary takes over. Output only
happens on an interactive terminal.
"""

from __future__ import annotations

from rich.console import Console
from rich.control import Control, ControlType

PROGRESS_THRESHOLD = 0.71


class TerminalProgress:
    def __init__(self, console: Console | None = None, threshold: float = PROGRESS_THRESHOLD):
        self.console = console or Console(stderr=True)
        self.threshold = threshold

    def __call__(self, fraction: float, message: str) -> None:
        if not self.console.is_terminal or fraction >= self.threshold:
            return
        self.console.control(Control.move_to_column(0))
        self.console.print(f"📦   {message}", end="", markup=False, highlight=False)
        self.console.control(Control((ControlType.ERASE_IN_LINE, 0)))


def null_progress(fraction: float, message: str) -> None:
    return None
