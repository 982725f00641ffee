"""Footer bar renderer for status indicators.

This module provides the render_footer_bar function that displays
a status bar with the monitored file count, error messages, and key hints.
"""

from __future__ import annotations

from rich.text import Text

from ..models import ViewMode
from ..tui_utils import truncate_text

LIST_HINT = "↑/↓ j/k: move · Enter: open · q: quit"
DETAIL_HINT = "Esc/Space: back · q: quit"


def render_footer_bar(
    file_count: int,
    view_mode: ViewMode = ViewMode.LIST,
    error_message: str | None = None,
    terminal_width: int = 80,
    position: tuple[int, int] | None = None,
) -> Text:
    """Build Rich Text displaying footer status bar.

    Args:
        file_count: Number of monitored files
        view_mode: Current view, selects the key hint
        error_message: Current error message to display, if any
        terminal_width: Terminal width for truncation calculations
        position: (highlighted row, total rows), both 1-based

    Returns:
        Rich Text component ready for rendering
    """
    parts = []

    # File count
    if file_count > 0:
        count_text = "1 file" if file_count == 1 else f"{file_count} files"
        if position is not None:
            count_text += f" [{position[0]}/{position[1]}]"
        parts.append((count_text, "green"))
    else:
        parts.append(("No files", "dim"))

    help_hint = DETAIL_HINT if view_mode is ViewMode.DETAIL else LIST_HINT

    # Error message (truncated if needed)
    if error_message:
        # Format: "[count] | [error] | [hint]"
        count_part = parts[0][0] + " | "
        available_width = terminal_width - len(count_part) - len(help_hint) - 3

        if available_width > 10:
            parts.append((" | ", "dim"))
            parts.append((truncate_text(error_message, available_width), "red"))

    parts.append((" | ", "dim"))
    parts.append((help_hint, "cyan"))

    footer = Text(no_wrap=True, overflow="crop")
    for text, style in parts:
        footer.append(text, style=style)

    return footer
