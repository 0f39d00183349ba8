"""Immutable input cursor for parser combinators.

Implements the immutable cursor pattern over any token sequence.
Python 3.13+. Zero external dependencies.

Design Philosophy:
    - Input is immutable (frozen dataclass); every step returns a NEW Input
    - The underlying sequence is borrowed, never copied
    - EOF is a state (is_eof), not a return value
    - Backtracking is an O(1) integer operation: mark() / restore()
    - partial=True means more data may still be appended after the end
      of the current sequence; running off the end is then Incomplete,
      not a grammar error

Token types:
    bytes, bytearray and memoryview sources yield int tokens; str sources
    yield 1-character strings; any other Sequence yields its items.
    Slices keep the source's own type, so a memoryview source produces
    zero-copy views.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from chompkit.core.error import ErrorFactory, ParseError
from chompkit.core.position import column_offset, line_offset
from chompkit.core.result import Failure, Incomplete, Success
from chompkit.diagnostics import ErrorTemplate, MarkMismatchError

__all__ = ["Input", "Mark"]


@dataclass(frozen=True, slots=True)
class Mark:
    """Snapshot of an Input's offset for backtracking.

    Holds a reference to the source it was taken from so a mark can only be
    restored onto the same buffer. Copying a Mark never copies data, and
    equality and hashing look at the offset only.
    """

    source: Sequence[Any] = field(repr=False, compare=False)
    pos: int


@dataclass(frozen=True, slots=True, repr=False)
class Input[T]:
    """Immutable positioned view over a token sequence.

    Key Design Decisions:
        1. Frozen dataclass - Immutability enforced by Python
        2. Slots - Memory efficiency (one Input per parser step)
        3. Simple position - Just an integer offset
        4. current raises EOFError - run() turns that into Incomplete/Failure
        5. Error factory travels with the Input so every parser builds the
           caller's error type

    Example:
        >>> i = Input(b"GET /")
        >>> i.current
        71
        >>> j = i.advance(3)
        >>> j.slice_ahead(2)
        b' /'
        >>> i.pos  # Original unchanged
        0
        >>> j.restore(i.mark()) == i
        True

    Attributes:
        source: Token sequence being parsed (borrowed)
        pos: Current offset, always within [0, len(source)]
        partial: More data may arrive after the end of source
        incomplete: The operation that produced this Input ran off the end
            of partial data
        error_factory: Builds grammar errors (defaults to ParseError)
    """

    source: Sequence[T]
    pos: int = 0
    partial: bool = False
    incomplete: bool = False
    error_factory: ErrorFactory[Any] = field(
        default=ParseError.unexpected, compare=False
    )

    def __post_init__(self) -> None:
        """Validate offset bounds.

        Raises:
            ValueError: If pos is outside [0, len(source)]
        """
        if not 0 <= self.pos <= len(self.source):
            msg = f"Input.pos must be within [0, {len(self.source)}], got {self.pos}"
            raise ValueError(msg)

    def __repr__(self) -> str:
        return (
            f"Input(pos={self.pos}, remaining={self.remaining}, "
            f"partial={self.partial}, incomplete={self.incomplete})"
        )

    def _at(self, pos: int) -> "Input[T]":
        return Input(self.source, pos, self.partial, False, self.error_factory)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    @property
    def is_eof(self) -> bool:
        """True when no tokens are left in the current data."""
        return self.pos >= len(self.source)

    @property
    def remaining(self) -> int:
        """Number of tokens left in the current data."""
        return len(self.source) - self.pos

    @property
    def current(self) -> T:
        """Token at the current position.

        Raises:
            EOFError: If at end of the current data
        """
        if self.pos >= len(self.source):
            diagnostic = ErrorTemplate.unexpected_eof(None)
            raise EOFError(diagnostic.message)
        return self.source[self.pos]

    def peek(self, offset: int = 0) -> T | None:
        """Token at position + offset without advancing, or None beyond the end."""
        target = self.pos + offset
        if target >= len(self.source):
            return None
        return self.source[target]

    def advance(self, count: int = 1) -> "Input[T]":
        """Return new Input advanced by count tokens, clamped to the end."""
        return self._at(min(self.pos + count, len(self.source)))

    def slice_ahead(self, n: int) -> Sequence[T]:
        """Next n tokens (fewer near the end) without advancing."""
        return self.source[self.pos : self.pos + n]

    def slice_to(self, end_pos: int) -> Sequence[T]:
        """Tokens from the current position up to end_pos (exclusive)."""
        return self.source[self.pos : end_pos]

    def slice_from(self, mark: Mark) -> Sequence[T]:
        """Tokens consumed since mark was taken."""
        self._check_mark(mark)
        return self.source[mark.pos : self.pos]

    def consume_remaining(self) -> Sequence[T]:
        """Unconsumed tail of the current data, for diagnostics.

        Pure: the Input itself is unchanged.
        """
        return self.source[self.pos :]

    def line_col(self) -> tuple[int, int]:
        """1-based (line, column) of the current position.

        O(n) in the position; meant for error reporting only.
        """
        return (
            line_offset(self.source, self.pos) + 1,
            column_offset(self.source, self.pos) + 1,
        )

    # ------------------------------------------------------------------
    # Backtracking
    # ------------------------------------------------------------------

    def mark(self) -> Mark:
        """Snapshot the current offset."""
        return Mark(self.source, self.pos)

    def restore(self, mark: Mark) -> "Input[T]":
        """Rewind (or fast-forward) to a previously taken mark.

        Raises:
            MarkMismatchError: If mark was taken from a different source
        """
        self._check_mark(mark)
        return self._at(mark.pos)

    def _check_mark(self, mark: Mark) -> None:
        if mark.source is not self.source:
            raise MarkMismatchError(ErrorTemplate.mark_mismatch(mark.pos))

    # ------------------------------------------------------------------
    # Outcome constructors
    # ------------------------------------------------------------------

    def ret[V](self, value: V) -> Success[V]:
        """Succeed with value at the current position."""
        return Success(self, value)

    def err[E](self, error: E) -> Failure[E]:
        """Fail with a caller-built error at the current position."""
        return Failure(self, error)

    def fail(self, expected: str | None = None) -> Failure[Any]:
        """Fail on the current token using the error factory."""
        return self.err(self.error_factory(self.pos, expected, self.peek()))

    def need(self, needed: int | None = None) -> Incomplete:
        """Report that more data is required to decide."""
        flagged = Input(self.source, self.pos, self.partial, True, self.error_factory)
        return Incomplete(flagged, needed)

    def ran_out(
        self, expected: str | None = None, needed: int | None = None
    ) -> Incomplete | Failure[Any]:
        """Outcome for running off the end of the current data.

        Incomplete when more data may arrive, otherwise a Failure reporting
        end of input at the end of the source. Either way nothing is consumed.
        """
        if self.partial:
            return self.need(needed)
        return self.err(self.error_factory(len(self.source), expected, None))
