"""CLI entry point for the logtop dashboard.

This module handles command-line argument parsing, logging setup,
signal handling, and the main entry point.
"""

from __future__ import annotations

import argparse
import json
import logging
import logging.handlers
import signal
import sys
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from ..utils import DEFAULT_LOG_FILE, Config, load_watch_list
from .app import LogtopApp
from .exceptions import ConfigError
from .registry import FileRegistry

logger = logging.getLogger(__name__)


class JSONFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON-formatted log line
        """
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "event": record.getMessage(),
            "context": {
                "module": record.module,
                "function": record.funcName,
                "line": record.lineno,
            },
        }

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Add extra context from record if present
        if hasattr(record, "extra_context"):
            log_data["context"].update(record.extra_context)

        return json.dumps(log_data, default=str)


def _setup_logging(log_file: Path, debug: bool) -> None:
    """Setup structured JSON logging to file.

    The dashboard owns the terminal, so nothing is logged to it.

    Args:
        log_file: Path to log file
        debug: Enable debug level logging
    """
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if debug else logging.INFO)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Create rotating file handler (10MB max, 3 backups)
    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=3,
        encoding="utf-8",
    )
    file_handler.setFormatter(JSONFormatter())
    file_handler.setLevel(logging.DEBUG if debug else logging.INFO)

    root_logger.addHandler(file_handler)

    logger.info(
        "Logging initialized",
        extra={"extra_context": {"log_file": str(log_file), "debug": debug}},
    )


class UsageParser(argparse.ArgumentParser):
    """Argument parser whose usage errors exit with status 0.

    logtop has always treated a bad command line like a help request:
    usage plus the reason, then a zero exit.
    """

    def error(self, message: str) -> None:
        self.print_usage(sys.stderr)
        self.exit(0, f"{self.prog}: error: {message}\n")


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as err:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from err
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive number of seconds, got {number}")
    return number


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed arguments
    """
    parser = UsageParser(
        prog="logtop",
        description="Terminal dashboard tailing the files listed in a config file",
    )

    parser.add_argument(
        "config",
        type=Path,
        help="Config file listing one file path per line ('#' starts a comment)",
    )

    parser.add_argument(
        "-r",
        "--refresh",
        type=_positive_int,
        default=1,
        metavar="SECONDS",
        help="Refresh interval in whole seconds (default: 1)",
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help=f"Path to the JSON log file (default: {DEFAULT_LOG_FILE})",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    return parser.parse_args(argv)


# Global app instance for signal handlers
_app_instance: LogtopApp | None = None


def _signal_handler(signum: int, frame) -> None:
    """Handle shutdown signals.

    Args:
        signum: Signal number
        frame: Current stack frame
    """
    if _app_instance is None:
        sys.exit(1)

    # Loop exits after the current key read returns
    logger.info("Received SIGTERM, stopping dashboard")
    _app_instance.app_state.should_quit = True


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the dashboard.

    Returns:
        Exit code (0=success or usage error, 1=error, 130=SIGINT)
    """
    global _app_instance

    args = _parse_args(argv)

    config = Config.from_dict(
        {
            "watch_list": args.config,
            "refresh_seconds": args.refresh,
            "log_file": args.log_file,
            "debug": args.debug,
        }
    )
    _setup_logging(config.log_file, config.debug)

    console = Console()
    err_console = Console(stderr=True)

    logger.info(
        "logtop starting",
        extra={
            "extra_context": {
                "config_path": str(config.watch_list),
                "refresh_seconds": config.refresh_seconds,
            }
        },
    )

    try:
        paths = load_watch_list(config.watch_list, config.comment_char)
    except ConfigError as err:
        err_console.print(
            f"[red]\\[logtop] \\[error] {escape(str(err))}[/red]", highlight=False, soft_wrap=True
        )
        logger.error(
            "Config load failed",
            extra={"extra_context": {"error": str(err)}},
        )
        return 1

    console.print(
        f"Using config: {escape(str(config.watch_list))}", highlight=False, soft_wrap=True
    )

    with FileRegistry.initialize(
        paths,
        max_line_bytes=config.max_line_bytes,
        tail_window_bytes=config.tail_window_bytes,
        console=err_console,
    ) as registry:
        _app_instance = LogtopApp(config, registry, console=console)
        previous_handler = signal.signal(signal.SIGTERM, _signal_handler)

        try:
            exit_code = _app_instance.run()
        finally:
            signal.signal(signal.SIGTERM, previous_handler)
            _app_instance = None

    logger.info(
        "logtop exited",
        extra={"extra_context": {"exit_code": exit_code}},
    )
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
