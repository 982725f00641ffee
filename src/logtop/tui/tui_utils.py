"""TUI utility functions for formatting and display helpers."""


def truncate_text(text: str, max_len: int) -> str:
    """
    Truncate text to max length, adding ellipsis if needed.

    Args:
        text: Text to truncate
        max_len: Maximum length including ellipsis

    Returns:
        Truncated text with "..." suffix if text exceeds max_len

    Examples:
        >>> truncate_text("short", 10)
        'short'
        >>> truncate_text("this is a long text", 10)
        'this is...'
    """
    if len(text) <= max_len:
        return text

    if max_len <= 3:
        return "..."[: max(max_len, 0)]

    return text[: max_len - 3] + "..."


def pad_text(text: str, width: int) -> str:
    """
    Cut or pad text to exactly ``width`` columns.

    Rows padded to the full surface width overwrite whatever the previous
    frame drew there.

    Examples:
        >>> pad_text("abc", 5)
        'abc  '
        >>> pad_text("abcdef", 4)
        'abcd'
    """
    if width <= 0:
        return ""
    return text[:width].ljust(width)


def printable(text: str) -> str:
    """
    Replace control characters so a line cannot move the cursor.

    Examples:
        >>> printable("a\\tb\\x07c")
        'a b?c'
    """
    return "".join(
        " " if char == "\t" else char if char.isprintable() else "?" for char in text
    )
