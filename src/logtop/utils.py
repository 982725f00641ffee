"""Shared helpers for loading logtop configuration."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from .tui.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_LOG_FILE = Path("~/.cache/logtop/logtop.log")


@dataclass(frozen=True)
class Config:
    """Runtime configuration assembled from command line arguments."""

    watch_list: Path
    refresh_seconds: int = 1
    max_line_bytes: int = 127
    tail_window_bytes: int = 1024
    comment_char: str = "#"
    log_file: Path = field(default_factory=lambda: DEFAULT_LOG_FILE.expanduser())
    debug: bool = False

    @classmethod
    def from_dict(cls, payload: dict) -> Config:
        """Create a Config object from a raw dictionary."""
        watch_list = Path(os.path.expanduser(str(payload["watch_list"])))
        log_file = Path(
            os.path.expanduser(str(payload.get("log_file") or DEFAULT_LOG_FILE))
        )

        refresh_seconds = int(payload.get("refresh_seconds", 1))
        max_line_bytes = int(payload.get("max_line_bytes", 127))
        tail_window_bytes = int(payload.get("tail_window_bytes", 1024))
        comment_char = str(payload.get("comment_char", "#"))

        if refresh_seconds <= 0:
            raise ValueError(f"refresh_seconds must be positive, got {refresh_seconds}")
        if max_line_bytes <= 0:
            raise ValueError(f"max_line_bytes must be positive, got {max_line_bytes}")
        if tail_window_bytes <= 0:
            raise ValueError(f"tail_window_bytes must be positive, got {tail_window_bytes}")
        if len(comment_char) != 1:
            raise ValueError(f"comment_char must be a single character, got {comment_char!r}")

        return cls(
            watch_list=watch_list,
            refresh_seconds=refresh_seconds,
            max_line_bytes=max_line_bytes,
            tail_window_bytes=tail_window_bytes,
            comment_char=comment_char,
            log_file=log_file,
            debug=bool(payload.get("debug", False)),
        )


def parse_watch_line(line: str, comment_char: str = "#") -> str | None:
    """Return the path named on one config line, or None for blank/comment lines.

    Args:
        line: Raw line from the config file
        comment_char: Everything from this character onwards is ignored

    Returns:
        Stripped path text, or None when nothing is left

    Examples:
        >>> parse_watch_line("  /var/log/syslog  # system\\n")
        '/var/log/syslog'
        >>> parse_watch_line("# only a comment") is None
        True
    """
    text = line.split(comment_char, 1)[0].strip()
    return text or None


def load_watch_list(path: Path, comment_char: str = "#") -> list[Path]:
    """Read the list of files to monitor, in config-file order.

    Paths are not opened here; files that cannot be read are reported
    and skipped when the registry is built.

    Raises:
        ConfigError: If the config file itself cannot be read
    """
    try:
        with path.open("r", encoding="utf-8", errors="replace") as handle:
            lines = handle.readlines()
    except OSError as err:
        raise ConfigError(f"Could not open config file '{path}': {err}") from err

    paths: list[Path] = []
    for line in lines:
        entry = parse_watch_line(line, comment_char)
        if entry is None:
            continue
        paths.append(Path(os.path.expanduser(entry)))

    logger.info(
        f"Loaded {len(paths)} path(s) from {path}",
        extra={"extra_context": {"config": str(path), "count": len(paths)}},
    )
    return paths
