"""Shared fixtures for TUI tests."""

from __future__ import annotations

import io
from pathlib import Path

import pytest
from rich.console import Console

from logtop.utils import Config


def _plain_console(width: int, height: int) -> Console:
    return Console(
        width=width,
        height=height,
        file=io.StringIO(),
        color_system=None,
        legacy_windows=False,
    )


@pytest.fixture
def render_plain():
    """Return a helper rendering a Rich object to plain text at a fixed size."""

    def _render(renderable, width: int = 60, height: int = 12) -> str:
        console = _plain_console(width, height)
        console.print(renderable)
        return console.file.getvalue()

    return _render


@pytest.fixture
def plain_console() -> Console:
    """A non-terminal 60x12 console without colours."""
    return _plain_console(60, 12)


@pytest.fixture
def config(tmp_path: Path) -> Config:
    """Runtime config pointing its log file into tmp_path."""
    return Config(watch_list=tmp_path / "files.conf", log_file=tmp_path / "logtop.log")
