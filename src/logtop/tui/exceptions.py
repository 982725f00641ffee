"""Custom exceptions for logtop.

This module defines a hierarchy of exceptions for the different failure
classes of the dashboard: tolerated at load time, fatal at run time.
"""


class TUIError(Exception):
    """Base exception for all logtop errors."""


class ConfigError(TUIError):
    """Raised when the watch-list config file cannot be loaded."""


class MonitorError(TUIError):
    """Raised when monitoring a file fails while the dashboard is running."""


class FileVanishedError(MonitorError):
    """Raised when a monitored path can no longer be stat'ed."""

    def __init__(self, path, reason: object = None) -> None:
        self.path = path
        message = f"Could not stat monitored file '{path}'"
        if reason is not None:
            message = f"{message}: {reason}"
        super().__init__(message)


class TerminalError(TUIError):
    """Raised when stdin is not a terminal the dashboard can drive."""
