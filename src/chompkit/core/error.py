"""Default grammar error type and the error factory protocol.

The parser core is polymorphic over the error representation. The only
capability it needs from an error type is construction from "unexpected
token (or end of input) at position P, expected description D"; that is
what an ErrorFactory provides. ParseError is the factory used when the
caller supplies none.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from chompkit.constants import DEFAULT_CONTEXT_LINES, MAX_REPR_LENGTH
from chompkit.core.position import column_offset, get_error_context, line_offset
from chompkit.diagnostics import Diagnostic, ErrorTemplate, SourceSpan

__all__ = ["ErrorFactory", "ParseError", "describe_token"]


class ErrorFactory[E](Protocol):
    """Builds a grammar error value from a failure description.

    Arguments are positional: the token offset of the failure, a description
    of what was expected (or None), and the offending token (None at end of
    input).
    """

    def __call__(self, position: int, expected: str | None, found: object | None, /) -> E: ...


def describe_token(found: object | None) -> str:
    """Render a token for diagnostics.

    Byte tokens (ints from a bytes source) render as bytes literals so
    ``120`` reads as ``b'x'``.

    Example:
        >>> describe_token(120)
        "b'x'"
        >>> describe_token("x")
        "'x'"
        >>> describe_token(None)
        'end of input'
    """
    if found is None:
        return "end of input"
    if isinstance(found, int) and not isinstance(found, bool) and 0 <= found <= 0xFF:
        return repr(bytes((found,)))
    text = repr(found)
    if len(text) > MAX_REPR_LENGTH:
        return text[:MAX_REPR_LENGTH] + "..."
    return text


@dataclass(frozen=True, slots=True)
class ParseError:
    """Grammar error with location and expectation.

    Design:
        - Stores only the token offset; line:column is computed on demand
          against the source it came from
        - Expected description is free text ("digit", "b'HTTP/'")
        - found is None when the input ended

    Example:
        >>> error = ParseError(2, expected="'}'", found="x")
        >>> str(error)
        "Unexpected 'x' at position 2 (expected '}')"
        >>> error.format_error("a\\nbx")
        "2:1: Unexpected 'x' (expected '}')"
    """

    position: int
    expected: str | None = None
    found: object | None = None

    @classmethod
    def unexpected(
        cls, position: int, expected: str | None, found: object | None, /
    ) -> "ParseError":
        """ErrorFactory entry point."""
        return cls(position, expected, found)

    @property
    def is_eof(self) -> bool:
        """True when the failure was caused by the end of input."""
        return self.found is None

    @property
    def message(self) -> str:
        """Failure description without position."""
        if self.is_eof:
            return "Unexpected end of input"
        return f"Unexpected {describe_token(self.found)}"

    def __str__(self) -> str:
        text = f"{self.message} at position {self.position}"
        if self.expected:
            text += f" (expected {self.expected})"
        return text

    def format_error(self, source: Sequence[object]) -> str:
        """Format error with 1-based line:column against its source.

        Args:
            source: The complete source the position refers to

        Returns:
            Formatted error string with location
        """
        line = line_offset(source, self.position) + 1
        col = column_offset(source, self.position) + 1
        text = f"{line}:{col}: {self.message}"
        if self.expected:
            text += f" (expected {self.expected})"
        return text

    def format_with_context(
        self, source: Sequence[object], context_lines: int = DEFAULT_CONTEXT_LINES
    ) -> str:
        """Format error with source context and caret pointer.

        Args:
            source: The complete source the position refers to
            context_lines: Number of lines to show before/after error

        Returns:
            Multi-line formatted error with context
        """
        context = get_error_context(source, self.position, context_lines)
        return f"{self.format_error(source)}\n\n{context}"

    def to_diagnostic(self, source: Sequence[object] | None = None) -> Diagnostic:
        """Convert to a structured Diagnostic.

        Args:
            source: Source for line/column computation (optional)

        Returns:
            UNEXPECTED_EOF or UNEXPECTED_TOKEN diagnostic
        """
        span: SourceSpan | None = None
        if source is not None:
            end = self.position if self.is_eof else self.position + 1
            span = SourceSpan(
                start=self.position,
                end=end,
                line=line_offset(source, self.position) + 1,
                column=column_offset(source, self.position) + 1,
            )
        if self.is_eof:
            return ErrorTemplate.unexpected_eof(self.expected, span)
        return ErrorTemplate.unexpected_token(describe_token(self.found), self.expected, span)
