"""Terminal mode ownership and keyboard input with timeout.

The terminal mode is process-wide state; ``TerminalSession`` is the single
owner of it. Entering the session switches stdin to cbreak mode, leaving it
restores the saved attributes on every exit path.
"""

from __future__ import annotations

import logging
import os
import select
import sys
import termios
import tty
from typing import TextIO

from .exceptions import TerminalError

logger = logging.getLogger(__name__)

# Time to wait for the rest of an escape sequence after ESC.
ESCAPE_TIMEOUT = 0.05

ESCAPE_SEQUENCES = {
    "[A": "up",
    "[B": "down",
    "[C": "right",
    "[D": "left",
    "OA": "up",
    "OB": "down",
    "OC": "right",
    "OD": "left",
}

SINGLE_KEYS = {
    "\r": "enter",
    "\n": "enter",
    "\x7f": "backspace",
    "\x08": "backspace",
}


class TerminalSession:
    """Context manager that owns stdin's terminal mode."""

    def __init__(self, stream: TextIO | None = None) -> None:
        """Initialize terminal session.

        Args:
            stream: Input stream to drive (defaults to sys.stdin)
        """
        self.stream = stream or sys.stdin
        self._fd: int | None = None
        self._saved_attrs: list | None = None

    @property
    def active(self) -> bool:
        return self._saved_attrs is not None

    def __enter__(self) -> TerminalSession:
        try:
            self._fd = self.stream.fileno()
            self._saved_attrs = termios.tcgetattr(self._fd)
        except (OSError, ValueError, termios.error) as err:
            raise TerminalError(f"stdin is not a terminal: {err}") from err

        tty.setcbreak(self._fd)
        logger.debug("Terminal switched to cbreak mode")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.restore()

    def restore(self) -> None:
        """Restore the saved terminal attributes (idempotent)."""
        if not self.active or self._fd is None:
            return

        try:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved_attrs)
            logger.debug("Terminal mode restored")
        except termios.error as err:
            logger.warning(f"Failed to restore terminal mode: {err}")
        finally:
            self._saved_attrs = None

    def _ready(self, timeout: float) -> bool:
        ready, _, _ = select.select([self._fd], [], [], timeout)
        return bool(ready)

    def _read_char(self) -> str:
        return os.read(self._fd, 1).decode("utf-8", errors="replace")

    def read_key(self, timeout: float) -> str | None:
        """Wait up to ``timeout`` seconds for a key press.

        Args:
            timeout: Timeout in seconds

        Returns:
            Key name ("up", "down", "enter", "escape", ...) or the typed
            character; None if the timeout expired without input
        """
        if self._fd is None:
            self._fd = self.stream.fileno()

        if not self._ready(timeout):
            return None

        char = self._read_char()
        if char == "\x1b":
            return self._read_escape_sequence()
        return SINGLE_KEYS.get(char, char)

    def _read_escape_sequence(self) -> str:
        """Decode an arrow-key sequence, or report a bare ESC."""
        if not self._ready(ESCAPE_TIMEOUT):
            return "escape"

        seq = self._read_char()
        if seq not in ("[", "O") or not self._ready(ESCAPE_TIMEOUT):
            return "escape"

        seq += self._read_char()
        key = ESCAPE_SEQUENCES.get(seq)
        if key is None:
            logger.debug(f"Unknown escape sequence {seq!r}")
            return "escape"
        return key
