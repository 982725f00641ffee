"""Seek-based tail extraction for monitored files.

Both readers work on an already open binary handle and only ever look at a
bounded window at the end of the file, so cost does not grow with file size.
The window sizes are fixed budgets, independent of the terminal geometry,
which is what lets a cached last line survive pane resizes.
"""

from __future__ import annotations

import logging
import os
from typing import BinaryIO

from rich.cells import get_character_cell_size

logger = logging.getLogger(__name__)

MAX_LINE_BYTES = 127
TAIL_WINDOW_BYTES = 1024

LINE_TERMINATORS = b"\r\n"

# Rows and columns taken by the pane border.
BORDER_SIZE = 2


def _read_tail(handle: BinaryIO, window: int) -> bytes:
    """Read at most ``window`` bytes from the end of the file.

    Falls back to the start of the file when it is shorter than the window.
    """
    size = os.fstat(handle.fileno()).st_size
    handle.seek(max(0, size - window))
    return handle.read(window)


def last_line_of(data: bytes, max_bytes: int = MAX_LINE_BYTES) -> bytes:
    """Return the last complete line of ``data``, capped at ``max_bytes``.

    Trailing terminators are skipped first, so ``b"a\\nb\\n\\n"`` yields
    ``b"b"``. Data without any terminator is returned whole (capped).

    Examples:
        >>> last_line_of(b"line1\\nline2\\n")
        b'line2'
        >>> last_line_of(b"no newline")
        b'no newline'
        >>> last_line_of(b"")
        b''
    """
    end = len(data)
    while end > 0 and data[end - 1] in LINE_TERMINATORS:
        end -= 1

    start = end
    while start > 0 and data[start - 1] not in LINE_TERMINATORS:
        start -= 1

    line = data[start:end]
    if len(line) <= max_bytes:
        return line

    # Back up over UTF-8 continuation bytes so no character is split.
    cut = max_bytes
    while cut > 0 and max_bytes - cut < 3 and line[cut] & 0xC0 == 0x80:
        cut -= 1
    return line[:cut]


def extract_last_line(
    handle: BinaryIO,
    max_bytes: int = MAX_LINE_BYTES,
    window: int = TAIL_WINDOW_BYTES,
) -> str:
    """Return the last line of an open file as text.

    Args:
        handle: Open binary read handle
        max_bytes: Longest line kept; longer lines are truncated silently
        window: Number of bytes read from the end of the file

    Returns:
        Decoded last line (undecodable bytes replaced), "" for an empty file
    """
    data = _read_tail(handle, window)
    return last_line_of(data, max_bytes).decode("utf-8", errors="replace")


def wrap_text(text: str, width: int, max_lines: int) -> list[str]:
    """Hard-wrap ``text`` at ``width`` terminal cells, keeping the last ``max_lines`` lines.

    Wide characters count as two cells and are never split across lines.
    Every source line terminator starts a new line (``\\r\\n`` counts once).
    A terminator directly after an automatic wrap is absorbed instead of
    producing an empty line.
    """
    if width <= 0 or max_lines <= 0:
        return []

    lines: list[str] = []
    current: list[str] = []
    current_cells = 0
    just_wrapped = False
    previous = ""

    for char in text:
        if char in "\r\n":
            if char == "\n" and previous == "\r":
                previous = char
                continue
            previous = char
            if just_wrapped:
                just_wrapped = False
                continue
            lines.append("".join(current))
            current = []
            current_cells = 0
            continue

        previous = char
        just_wrapped = False
        # Unprintable characters are drawn as a single placeholder cell.
        cells = get_character_cell_size(char) if char.isprintable() else 1
        if current and current_cells + cells > width:
            lines.append("".join(current))
            current = []
            current_cells = 0

        current.append(char)
        current_cells += cells
        if current_cells >= width:
            lines.append("".join(current))
            current = []
            current_cells = 0
            just_wrapped = True

    if current:
        lines.append("".join(current))

    return lines[-max_lines:]


def extract_detail_view(handle: BinaryIO, rows: int, cols: int) -> str:
    """Render the tail of an open file wrapped to fit a ``rows`` x ``cols`` pane.

    The byte budget is the pane's inner area, ``(rows-2) * (cols-2)``. The
    result is never cached: pane dimensions may change between draws.
    Read failures yield an empty pane instead of raising.
    """
    width = cols - BORDER_SIZE
    height = rows - BORDER_SIZE
    if width <= 0 or height <= 0:
        return ""

    try:
        data = _read_tail(handle, width * height)
    except (OSError, ValueError) as err:
        logger.debug(f"Detail view read failed: {err}")
        return ""

    text = data.decode("utf-8", errors="replace")
    return "\n".join(wrap_text(text, width, height))
