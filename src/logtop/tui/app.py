"""Main dashboard loop and layout.

This module owns the display surfaces (outer frame, file list, detail pane,
footer) and the single poll-and-redraw loop that drives them. Every
iteration polls the registry, renders one frame and then blocks on the
keyboard for at most the refresh interval.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.markup import escape
from rich.panel import Panel

from ..utils import Config
from .exceptions import MonitorError, TerminalError
from .keybindings import KeybindingHandler
from .models import AppState
from .registry import FileRegistry
from .terminal import TerminalSession
from .views.detail_pane import render_detail_pane
from .views.file_list import FileListWidget
from .views.footer_bar import render_footer_bar

logger = logging.getLogger(__name__)

TITLE = "logtop"
MIN_TERMINAL_COLS = 20
MIN_TERMINAL_ROWS = 6

# Rows and columns taken by the outer frame and the footer.
FRAME_BORDER = 2
FOOTER_ROWS = 1


class LogtopApp:
    """Dashboard controller: display surfaces plus the input/poll loop."""

    def __init__(
        self,
        config: Config,
        registry: FileRegistry,
        console: Console | None = None,
        terminal: TerminalSession | None = None,
    ):
        """Initialize the dashboard.

        Args:
            config: Runtime configuration
            registry: Populated file registry; row i of the list is entry i
            console: Console to draw on
            terminal: Owner of the terminal mode and key input
        """
        self.config = config
        self.registry = registry
        self.console = console or Console()
        self.error_console = Console(stderr=True)
        self.terminal = terminal or TerminalSession()

        self.app_state = AppState(file_count=len(registry))
        self.file_list = FileListWidget([entry.display_name for entry in registry])
        self.keybinding_handler = KeybindingHandler(self.app_state, self.file_list)

    def _body_size(self) -> tuple[int, int]:
        """Return (columns, rows) available inside the frame above the footer."""
        width, height = self.console.size
        return (
            max(0, width - FRAME_BORDER),
            max(0, height - FRAME_BORDER - FOOTER_ROWS),
        )

    def _check_terminal_size(self) -> bool:
        width, height = self.console.size
        return width >= MIN_TERMINAL_COLS and height >= MIN_TERMINAL_ROWS

    def _sync_terminal_error(self) -> None:
        width, height = self.console.size
        if not self._check_terminal_size():
            self.app_state.current_error = (
                f"Terminal too small! Need {MIN_TERMINAL_COLS}x{MIN_TERMINAL_ROWS}, "
                f"got {width}x{height}"
            )
        elif (
            self.app_state.current_error
            and "Terminal too small" in self.app_state.current_error
        ):
            self.app_state.current_error = None

    def render(self) -> Panel:
        """Render one frame from the current registry state.

        Updated entries push their tail line into their list row and get the
        "updated" marker for this frame only; their change state is reset
        afterwards.

        Returns:
            Outer frame holding the list (or detail pane) and the footer
        """
        updated = self.registry.updated_indices()
        for index in updated:
            self.file_list.set_description(index, self.registry[index].tail_line)

        self._sync_terminal_error()
        body_width, body_height = self._body_size()

        body = self.file_list.render(body_width, body_height, marked=set(updated))
        self.registry.clear_updates()

        detail_index = self.app_state.detail_index
        if detail_index is not None and body_width > 0 and body_height > 0:
            body = render_detail_pane(self.registry[detail_index], body_height, body_width)

        position = None
        if self.app_state.has_files:
            position = (self.file_list.selected_index + 1, len(self.file_list))
        footer = render_footer_bar(
            file_count=len(self.registry),
            view_mode=self.app_state.view_mode,
            error_message=self.app_state.current_error,
            terminal_width=body_width,
            position=position,
        )

        layout = Layout()
        layout.split_column(
            Layout(body, name="body", ratio=1),
            Layout(footer, name="footer", size=FOOTER_ROWS),
        )

        return Panel(
            layout,
            title=f"[bold]{TITLE}[/bold]",
            title_align="center",
            border_style="blue",
            height=self.console.size.height,
            padding=(0, 0),
        )

    def tick(self) -> Panel:
        """Run one monitoring pass and render the resulting frame.

        Raises:
            MonitorError: If a monitored file can no longer be stat'ed
        """
        self.registry.poll()
        return self.render()

    def handle_key(self, key: str | None) -> None:
        """Dispatch one key press; None means the read timed out."""
        if key is None:
            return

        handled, message = self.keybinding_handler.handle_key(key)
        if handled and message == "quit":
            self.app_state.should_quit = True

    def run(self) -> int:
        """Run the dashboard until the quit key is pressed.

        The terminal is restored before any final diagnostic is printed.

        Returns:
            Exit code (0 for quit, 1 for a fatal monitoring error, 130 for Ctrl+C)
        """
        refresh_seconds = self.config.refresh_seconds
        logger.info(
            "Dashboard starting",
            extra={
                "extra_context": {
                    "files": len(self.registry),
                    "refresh_seconds": refresh_seconds,
                }
            },
        )

        try:
            with self.terminal, Live(
                console=self.console,
                screen=True,
                auto_refresh=False,
            ) as live:
                while not self.app_state.should_quit:
                    live.update(self.tick(), refresh=True)
                    self.handle_key(self.terminal.read_key(refresh_seconds))

            logger.info("Dashboard loop exited")
            return 0

        except KeyboardInterrupt:
            logger.info("Dashboard interrupted by user")
            return 130

        except (MonitorError, TerminalError) as err:
            logger.error(f"Dashboard stopped: {err}", exc_info=True)
            self.error_console.print(
                f"[red]\\[logtop] \\[error] {escape(str(err))}[/red]",
                highlight=False,
                soft_wrap=True,
            )
            return 1
