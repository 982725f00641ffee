"""State models for the logtop dashboard."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import BinaryIO


class ChangeState(Enum):
    """Whether a monitored file changed since it was last rendered."""

    UNCHANGED = "unchanged"
    UPDATED = "updated"


class ViewMode(Enum):
    """Which surface the dashboard is showing."""

    LIST = "list"
    DETAIL = "detail"


@dataclass
class MonitoredFile:
    """One tracked file and its cached tail.

    The entry owns ``handle`` for its whole lifetime. ``last_modified`` starts
    as None so the first poll always differs from the real mtime.
    """

    path: Path
    handle: BinaryIO = field(repr=False)
    last_modified: float | None = None
    tail_line: str = ""
    change_state: ChangeState = ChangeState.UNCHANGED

    @property
    def display_name(self) -> str:
        """Final path segment, used as the list label."""
        return self.path.name or str(self.path)

    @property
    def is_updated(self) -> bool:
        return self.change_state is ChangeState.UPDATED

    @property
    def is_closed(self) -> bool:
        return self.handle.closed


@dataclass
class AppState:
    """Navigation state of the dashboard.

    ``selected_index`` is the highlighted list row; ``detail_index`` is the
    registry index shown in the detail pane, or None in list view.
    """

    file_count: int = 0
    view_mode: ViewMode = ViewMode.LIST
    selected_index: int = 0
    detail_index: int | None = None
    should_quit: bool = False
    current_error: str | None = None

    @property
    def has_files(self) -> bool:
        return self.file_count > 0

    def open_detail(self, index: int) -> None:
        self.detail_index = index
        self.view_mode = ViewMode.DETAIL

    def close_detail(self) -> None:
        self.detail_index = None
        self.view_mode = ViewMode.LIST
