"""Diagnostic codes and data structures.

Defines error codes, source spans, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Parse errors (input did not match the grammar)
        2000-2999: Stream errors (driver-level outcomes of incremental parsing)
        3000-3999: Contract errors (misuse of the parser API)
    """

    # Parse errors (1000-1999)
    UNEXPECTED_TOKEN = 1001
    UNEXPECTED_EOF = 1002
    PARSE_FAILED = 1003
    INCOMPLETE_AT_END = 1004

    # Stream errors (2000-2999)
    END_OF_INPUT = 2001
    INCOMPLETE_INPUT = 2002
    RETRY = 2003
    STREAM_PARSE_FAILED = 2004
    BUFFER_LIMIT_EXCEEDED = 2005

    # Contract errors (3000-3999)
    MARK_MISMATCH = 3001
    INVALID_PARSER_RESULT = 3002
    INVALID_ARGUMENT = 3003
    FEED_AFTER_EOF = 3004
    NO_DATA_SOURCE = 3005


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Source location for error reporting.

    Note:
        Positions are token offsets: bytes for byte sources, code points for
        text sources, items for token lists.

    Attributes:
        start: Starting token offset (0-indexed)
        end: Ending token offset (exclusive)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If start is negative, end precedes start, or line/column
                are less than 1 (both are 1-indexed).
        """
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        span: Source location (None when no position applies)
        hint: Suggestion for fixing the error
        expected: Description of what the grammar expected (parse errors)
        found: Repr of the token actually found (parse errors)
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    expected: str | None = None
    found: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Example output:
            error[UNEXPECTED_TOKEN]: Unexpected b'x' at position 3
              --> line 1, column 4
              = expected: digit
              = help: Check the input against the grammar

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
