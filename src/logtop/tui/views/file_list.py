"""Selectable list of monitored files.

Row ``i`` of the widget always shows registry entry ``i``; the mapping is
fixed when the widget is built and the list never resizes afterwards.
"""

from __future__ import annotations

from collections.abc import Collection, Sequence
from dataclasses import dataclass

from rich.text import Text

from ..tui_utils import pad_text, printable

UPDATED_MARKER = "*"
HIGHLIGHT_STYLE = "reverse"


@dataclass
class FileRow:
    """Label and secondary text of one list row."""

    label: str
    description: str = ""


class FileListWidget:
    """Scrollable list widget with a clamped highlight."""

    def __init__(self, labels: Sequence[str]) -> None:
        """Initialize the widget.

        Args:
            labels: One label per registry entry, in registry order
        """
        self.rows = [FileRow(label=label) for label in labels]
        self.selected_index = 0
        self.offset = 0

    def __len__(self) -> int:
        return len(self.rows)

    @property
    def label_width(self) -> int:
        return max((len(row.label) for row in self.rows), default=0)

    def set_description(self, index: int, text: str) -> None:
        """Replace the secondary text of row ``index``."""
        self.rows[index].description = text

    def move_up(self) -> None:
        if self.selected_index > 0:
            self.selected_index -= 1

    def move_down(self) -> None:
        if self.selected_index < len(self.rows) - 1:
            self.selected_index += 1

    def _capacity(self, height: int) -> int:
        """Rows that fit in ``height`` lines, leaving room for scroll hints."""
        if len(self.rows) <= height or height < 3:
            return max(height, 0)
        return height - 2

    def _scroll_to_selection(self, height: int) -> None:
        """Shift the viewport so the highlighted row is visible."""
        if height <= 0:
            return
        if self.selected_index < self.offset:
            self.offset = self.selected_index
        elif self.selected_index >= self.offset + height:
            self.offset = self.selected_index - height + 1
        self.offset = max(0, min(self.offset, max(0, len(self.rows) - height)))

    def render_row(self, index: int, width: int, marked: bool = False) -> Text:
        """Render one row padded to exactly ``width`` columns."""
        row = self.rows[index]
        marker = UPDATED_MARKER if marked else " "
        label = pad_text(printable(row.label), self.label_width)
        prefix = f"{marker} {label}  "
        line = pad_text(prefix + printable(row.description), width)

        text = Text(no_wrap=True, overflow="crop")
        style = HIGHLIGHT_STYLE if index == self.selected_index else ""
        marker_style = "bold yellow" if marked else ""
        text.append(line[:1], style=f"{style} {marker_style}".strip())
        text.append(line[1 : len(prefix)], style=f"{style} bold".strip())
        text.append(line[len(prefix) :], style=style)
        return text

    def render(self, width: int, height: int, marked: Collection[int] = ()) -> Text:
        """Render the visible rows.

        Args:
            width: Surface width in columns
            height: Number of visible rows
            marked: Row indices to draw with the "updated" marker

        Returns:
            Rich Text with one line per visible row
        """
        if not self.rows:
            return Text("No readable files to monitor", style="dim italic")

        capacity = self._capacity(height)
        self._scroll_to_selection(capacity)
        visible = range(self.offset, min(len(self.rows), self.offset + capacity))
        show_hints = capacity < height

        lines: list[Text] = []
        if show_hints:
            above = f"↑ {self.offset} more above" if self.offset else ""
            lines.append(Text(above, style="dim"))
        lines.extend(self.render_row(index, width, index in marked) for index in visible)
        if show_hints:
            hidden_below = len(self.rows) - visible.stop
            below = f"↓ {hidden_below} more below" if hidden_below else ""
            lines.append(Text(below, style="dim"))

        return Text("\n", no_wrap=True, overflow="crop").join(lines)
