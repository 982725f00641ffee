"""Terminal dashboard that tails a list of log files."""

__version__ = "0.1.0"
