"""Registry of monitored files with mtime-based change detection.

The registry is built once at startup and polled on every tick of the
main loop. Opening is tolerant (unreadable paths are skipped with a
warning), polling is not (a path that can no longer be stat'ed is fatal).
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from .exceptions import FileVanishedError
from .models import ChangeState, MonitoredFile
from .tail import MAX_LINE_BYTES, TAIL_WINDOW_BYTES, extract_last_line

logger = logging.getLogger(__name__)


class FileRegistry:
    """Owns one MonitoredFile per readable path, in a stable order."""

    def __init__(
        self,
        entries: list[MonitoredFile] | None = None,
        max_line_bytes: int = MAX_LINE_BYTES,
        tail_window_bytes: int = TAIL_WINDOW_BYTES,
    ) -> None:
        """Initialize the registry.

        Args:
            entries: Already opened entries, in display order
            max_line_bytes: Cap on the cached last line of each file
            tail_window_bytes: Bytes read from the end of a file per extraction
        """
        self.entries: list[MonitoredFile] = list(entries or [])
        self.max_line_bytes = max_line_bytes
        self.tail_window_bytes = tail_window_bytes
        self._closed = False

    @classmethod
    def initialize(
        cls,
        paths: Iterable[Path],
        *,
        max_line_bytes: int = MAX_LINE_BYTES,
        tail_window_bytes: int = TAIL_WINDOW_BYTES,
        console: Console | None = None,
    ) -> FileRegistry:
        """Open every path and build the registry.

        Each new entry is placed in front of the previous ones, so the
        resulting order is the reverse of ``paths``. Paths that cannot be
        opened produce a warning on stderr and no entry.

        Args:
            paths: Paths in config-file order
            max_line_bytes: Cap on the cached last line of each file
            tail_window_bytes: Bytes read from the end of a file per extraction
            console: Console for warnings (defaults to stderr)

        Returns:
            Registry holding the opened entries
        """
        err_console = console or Console(stderr=True)
        entries: list[MonitoredFile] = []

        for path in paths:
            try:
                handle = open(path, "rb")
            except OSError as err:
                err_console.print(
                    "[yellow]\\[logtop] \\[warning] "
                    f"Could not open file: '{escape(str(path))}'[/yellow]",
                    highlight=False,
                    soft_wrap=True,
                )
                logger.warning(
                    f"Could not open file {path}: {err}",
                    extra={"extra_context": {"path": str(path)}},
                )
                continue

            entries.insert(0, MonitoredFile(path=Path(path), handle=handle))

        logger.info(f"Monitoring {len(entries)} file(s)")
        return cls(entries, max_line_bytes=max_line_bytes, tail_window_bytes=tail_window_bytes)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[MonitoredFile]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> MonitoredFile:
        return self.entries[index]

    def __enter__(self) -> FileRegistry:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def refresh_entry(self, entry: MonitoredFile) -> bool:
        """Re-read the tail of one entry if its path has a new mtime.

        Args:
            entry: Entry to check

        Returns:
            True if the entry was updated

        Raises:
            FileVanishedError: If the path can no longer be stat'ed
        """
        try:
            mtime = os.stat(entry.path).st_mtime
        except OSError as err:
            logger.error(
                f"Monitored file vanished: {entry.path}",
                extra={"extra_context": {"path": str(entry.path), "error": str(err)}},
            )
            raise FileVanishedError(entry.path, err.strerror or err) from err

        if mtime == entry.last_modified:
            return False

        entry.tail_line = extract_last_line(
            entry.handle, self.max_line_bytes, self.tail_window_bytes
        )
        entry.last_modified = mtime
        entry.change_state = ChangeState.UPDATED
        return True

    def poll(self) -> list[int]:
        """Run one change-detection pass over every entry, in registry order.

        Returns:
            Indices of the entries updated by this pass

        Raises:
            FileVanishedError: If any monitored path can no longer be stat'ed
        """
        changed = [index for index, entry in enumerate(self.entries) if self.refresh_entry(entry)]
        if changed:
            logger.debug(
                "Poll detected changes",
                extra={
                    "extra_context": {"changed": [self.entries[i].display_name for i in changed]}
                },
            )
        return changed

    def updated_indices(self) -> list[int]:
        return [index for index, entry in enumerate(self.entries) if entry.is_updated]

    def clear_updates(self) -> None:
        """Mark every entry as rendered."""
        for entry in self.entries:
            entry.change_state = ChangeState.UNCHANGED

    def close(self) -> None:
        """Close every handle exactly once."""
        if self._closed:
            return

        for entry in self.entries:
            if entry.is_closed:
                continue
            try:
                entry.handle.close()
            except OSError as err:
                logger.warning(f"Failed to close {entry.path}: {err}")

        self._closed = True
        logger.info("File registry closed")
