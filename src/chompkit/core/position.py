"""Position utilities for parse sources.

Converts token offsets to line/column positions for error reporting.
Text sources (str) and byte sources (bytes, bytearray, memoryview) are split
on LF; any other token sequence is treated as a single line.

CRLF input works because the LF is still present. CR-only line endings
are not recognised as line breaks.
"""

from collections.abc import Sequence

__all__ = [
    "column_offset",
    "format_position",
    "get_error_context",
    "line_offset",
]


def _text(source: Sequence[object]) -> str | None:
    """Return source as text for line-oriented rendering, or None."""
    if isinstance(source, str):
        return source
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source).decode("utf-8", errors="replace")
    return None


def _clamp(source: Sequence[object], pos: int) -> int:
    if pos < 0:
        msg = f"Position must be >= 0, got {pos}"
        raise ValueError(msg)
    return min(pos, len(source))


def line_offset(source: Sequence[object], pos: int) -> int:
    """Get 0-based line number from token offset.

    Args:
        source: Complete source sequence
        pos: Token offset in source

    Returns:
        0-based line number

    Example:
        >>> line_offset("line1\\nline2\\nline3", 6)
        1
        >>> line_offset(b"a\\nb", 2)
        1
    """
    pos = _clamp(source, pos)
    if isinstance(source, str):
        return source.count("\n", 0, pos)
    if isinstance(source, (bytes, bytearray)):
        return source.count(b"\n", 0, pos)
    if isinstance(source, memoryview):
        return source[:pos].tobytes().count(b"\n")
    return 0


def column_offset(source: Sequence[object], pos: int) -> int:
    """Get 0-based column number from token offset.

    Args:
        source: Complete source sequence
        pos: Token offset in source

    Returns:
        0-based column number (tokens from line start)

    Example:
        >>> column_offset("hello\\nworld", 8)
        2
    """
    pos = _clamp(source, pos)
    if isinstance(source, str):
        line_start = source.rfind("\n", 0, pos)
    elif isinstance(source, (bytes, bytearray)):
        line_start = source.rfind(b"\n", 0, pos)
    elif isinstance(source, memoryview):
        line_start = source[:pos].tobytes().rfind(b"\n")
    else:
        return pos

    if line_start == -1:
        return pos
    return pos - line_start - 1


def format_position(source: Sequence[object], pos: int, zero_based: bool = True) -> str:
    """Format position as human-readable line:column string.

    Example:
        >>> format_position("hello\\nworld", 6, zero_based=False)
        '2:1'
    """
    line = line_offset(source, pos)
    col = column_offset(source, pos)

    if not zero_based:
        line += 1
        col += 1

    return f"{line}:{col}"


def get_error_context(
    source: Sequence[object], pos: int, context_lines: int = 2, marker: str = "^"
) -> str:
    """Get formatted error context showing position in source.

    Shows the error line with surrounding lines and a marker under the
    error column. Token sequences that are not text or bytes render as
    their repr around the position.

    Args:
        source: Complete source sequence
        pos: Token offset of error
        context_lines: Number of lines to show before/after error
        marker: Character to use for error marker

    Returns:
        Formatted error context string

    Example:
        >>> print(get_error_context("line1\\nerror here\\nline3", 9, context_lines=0))
        error here
           ^
    """
    text = _text(source)
    if text is None:
        pos = _clamp(source, pos)
        head = ", ".join(repr(t) for t in source[max(0, pos - 3) : pos])
        tail = ", ".join(repr(t) for t in source[pos : pos + 3])
        return f"[{head} >>> {tail}]"

    line_num = line_offset(source, pos)
    col_num = column_offset(source, pos)
    lines = text.split("\n")

    start_line = max(0, line_num - context_lines)
    end_line = min(len(lines), line_num + context_lines + 1)

    context = []
    for i in range(start_line, end_line):
        context.append(lines[i].rstrip("\r"))
        if i == line_num:
            context.append(" " * col_num + marker)

    return "\n".join(context)
