"""Stream over a complete in-memory sequence.

The whole input is available up front, so parsers run on complete
(non-partial) Input: running off the end is a definite failure, and a
parser that still reports Incomplete is told the input has ended.
"""

from collections.abc import Iterator, Sequence
from typing import Any

from chompkit.buffer.stream import iterparse
from chompkit.core.error import ErrorFactory, ParseError
from chompkit.core.input import Input
from chompkit.core.result import Parser, run
from chompkit.diagnostics import EndOfInputError, ErrorTemplate, StreamParseError

__all__ = ["SliceStream"]


class SliceStream[T]:
    """Stream over a borrowed sequence (bytes, str, memoryview, token list).

    Values returned by slicing parsers are slices of that sequence.

    Example:
        >>> stream = SliceStream(b"12,34")
        >>> stream.parse(decimal)
        12
        >>> stream.remaining
        3
    """

    __slots__ = ("_data", "_error_factory", "_pos")

    def __init__(
        self, data: Sequence[T], *, error_factory: ErrorFactory[Any] | None = None
    ) -> None:
        self._data = data
        self._pos = 0
        self._error_factory = error_factory if error_factory is not None else ParseError.unexpected

    def __repr__(self) -> str:
        return f"SliceStream(consumed={self._pos}, remaining={self.remaining})"

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    @property
    def consumed(self) -> int:
        return self._pos

    @property
    def is_exhausted(self) -> bool:
        return self._pos >= len(self._data)

    def parse[V](self, parser: Parser[V, Any]) -> V:
        """Parse one value from the unconsumed data.

        Success and Failure both commit what was consumed before they
        returned; Incomplete commits nothing.

        Raises:
            EndOfInputError: If the stream is exhausted or the parser wants more
            StreamParseError: On a grammar error
        """
        if self.is_exhausted:
            raise EndOfInputError(ErrorTemplate.end_of_input())

        input = Input(self._data, self._pos, error_factory=self._error_factory)
        outcome = run(parser, input)
        if outcome.is_incomplete:
            raise EndOfInputError(ErrorTemplate.end_of_input())

        self._pos = outcome.input.pos
        if outcome.is_failure:
            raise StreamParseError(
                ErrorTemplate.stream_parse_failed(outcome.error, self._pos),
                error=outcome.error,
                remaining=self._data[self._pos :],
            )
        return outcome.value

    def iterparse[V](self, parser: Parser[V, Any]) -> Iterator[V]:
        """Yield values of parser until the data is exhausted."""
        return iterparse(self, parser)
