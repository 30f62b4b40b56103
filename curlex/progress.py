"""An animated progress indicator shown while tests run."""

from __future__ import annotations

import sys
import threading
from typing import TextIO

SPINNER_FRAMES = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")
FRAME_INTERVAL = 0.08
BAR_WIDTH = 30


def _is_terminal(stream: TextIO) -> bool:
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


class Progress:
    """Shows a spinner and progress bar on a terminal; does nothing elsewhere."""

    def __init__(
        self,
        total: int,
        no_color: bool = False,
        writer: TextIO | None = None,
        is_terminal: bool | None = None,
    ) -> None:
        self.writer = writer if writer is not None else sys.stderr
        self.total = total
        self.current = 0
        self.no_color = no_color
        self.is_terminal = _is_terminal(self.writer) if is_terminal is None else is_terminal
        self.active = False
        self._lock = threading.Lock()
        self._done = threading.Event()
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        """Begin drawing the indicator, if the output is a terminal."""
        if not self.is_terminal:
            return
        with self._lock:
            if self.active:
                return
            self.active = True
        self._done.clear()
        self._thread = threading.Thread(target=self._render, daemon=True)
        self._thread.start()

    def increment(self) -> None:
        """Record one more finished test."""
        with self._lock:
            self.current += 1

    def stop(self) -> None:
        """Stop drawing and erase the indicator line."""
        with self._lock:
            if not self.active:
                return
            self.active = False
        self._done.set()
        if self._thread is not None:
            self._thread.join(timeout=1.0)
            self._thread = None
        self.clear()

    def __enter__(self) -> Progress:
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    def _render(self) -> None:
        frame = 0
        while not self._done.wait(FRAME_INTERVAL):
            with self._lock:
                if not self.active:
                    return
                current, total = self.current, self.total
            spinner = SPINNER_FRAMES[frame]
            if total > 0:
                display = self.format_progress_bar(current, total, spinner)
            else:
                display = self.format_spinner(current, spinner)
            self.writer.write("\r" + display)
            self.writer.flush()
            frame = (frame + 1) % len(SPINNER_FRAMES)

    def format_progress_bar(self, current: int, total: int, spinner: str) -> str:
        """Render a progress bar for ``current`` of ``total`` tests."""
        percentage = current / total * 100
        filled = int(BAR_WIDTH * current / total)
        done_part = "█" * filled
        todo_part = "░" * (BAR_WIDTH - filled)

        if self.no_color:
            return (
                f"{spinner} Running tests [{done_part}{todo_part}] "
                f"{current}/{total} ({percentage:.0f}%)"
            )
        spinner_colored = f"\033[36m{spinner}\033[0m"
        bar_colored = f"\033[32m{done_part}\033[90m{todo_part}\033[0m"
        return (
            f"{spinner_colored} Running tests [{bar_colored}] "
            f"\033[1m{current}/{total}\033[0m \033[90m({percentage:.0f}%)\033[0m"
        )

    def format_spinner(self, current: int, spinner: str) -> str:
        """Render a spinner for a run whose total is unknown."""
        if self.no_color:
            return f"{spinner} Running tests... {current} completed"
        return f"\033[36m{spinner}\033[0m Running tests... \033[1m{current}\033[0m completed"

    def clear(self) -> None:
        """Erase the indicator line on a terminal."""
        if not self.is_terminal:
            return
        self.writer.write("\r\033[K")
        self.writer.flush()