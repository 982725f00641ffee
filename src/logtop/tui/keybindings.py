"""Keyboard input handling for the dashboard.

This module maps key names to navigation actions and implements the
two-state view machine: LIST (no detail shown) and DETAIL (one file open).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .models import ViewMode

if TYPE_CHECKING:
    from .models import AppState
    from .views.file_list import FileListWidget

logger = logging.getLogger(__name__)

UP_KEYS = ("up", "k")
DOWN_KEYS = ("down", "j")
OPEN_KEYS = ("enter", "l")
CLOSE_KEYS = ("escape", " ", "h", "backspace")
QUIT_KEYS = ("q", "Q")


class KeybindingHandler:
    """Handles keyboard input and dispatches navigation actions."""

    def __init__(self, app_state: AppState, file_list: FileListWidget) -> None:
        """Initialize keybinding handler.

        Args:
            app_state: Application state for view tracking
            file_list: List widget owning the highlighted row
        """
        self.app_state = app_state
        self.file_list = file_list

    def handle_key(self, key: str) -> tuple[bool, str | None]:
        """Process keyboard input and execute corresponding action.

        Args:
            key: Key name from TerminalSession.read_key (e.g. "up", "enter", "q")

        Returns:
            Tuple of (handled, message):
                - handled: True if the key changed or could change state
                - message: "quit" when the loop should stop, otherwise None
        """
        if key in QUIT_KEYS:
            return self._handle_quit()

        if self.app_state.view_mode is ViewMode.DETAIL:
            if key in CLOSE_KEYS:
                return self._handle_close()
            return False, None

        if key in UP_KEYS:
            return self._handle_move_up()
        if key in DOWN_KEYS:
            return self._handle_move_down()
        if key in OPEN_KEYS:
            return self._handle_open()

        return False, None

    def _handle_move_up(self) -> tuple[bool, str | None]:
        """Move the highlight one row up, stopping at the first row."""
        self.file_list.move_up()
        self.app_state.selected_index = self.file_list.selected_index
        return True, None

    def _handle_move_down(self) -> tuple[bool, str | None]:
        """Move the highlight one row down, stopping at the last row."""
        self.file_list.move_down()
        self.app_state.selected_index = self.file_list.selected_index
        return True, None

    def _handle_open(self) -> tuple[bool, str | None]:
        """Open the highlighted file in the detail pane."""
        if not self.app_state.has_files:
            return True, None

        self.app_state.open_detail(self.file_list.selected_index)
        logger.debug(f"Opened detail view for row {self.file_list.selected_index}")
        return True, None

    def _handle_close(self) -> tuple[bool, str | None]:
        """Return from the detail pane to the list."""
        self.app_state.close_detail()
        logger.debug("Closed detail view")
        return True, None

    def _handle_quit(self) -> tuple[bool, str | None]:
        self.app_state.should_quit = True
        logger.info("Quit requested")
        return True, "quit"
