"""Detail pane renderer for the tail of one file."""

from __future__ import annotations

from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from ..models import MonitoredFile
from ..tail import extract_detail_view
from ..tui_utils import printable


def render_detail_pane(entry: MonitoredFile, rows: int, cols: int) -> Panel:
    """Build Rich Panel showing the wrapped tail of ``entry``.

    The text is re-extracted on every call at the given pane size, two rows
    and two columns of which are taken by the border.

    Args:
        entry: File to show
        rows: Pane height including the border
        cols: Pane width including the border

    Returns:
        Rich Panel sized exactly ``cols`` x ``rows``
    """
    content = extract_detail_view(entry.handle, rows, cols)
    body = Text(
        "\n".join(printable(line) for line in content.split("\n")) if content else "",
        no_wrap=True,
        overflow="crop",
    )

    return Panel(
        body,
        title=f"[bold]{escape(entry.display_name)}[/bold]",
        subtitle="[dim]Esc/Space: back[/dim]",
        border_style="cyan",
        width=cols,
        height=rows,
        padding=(0, 0),
    )
