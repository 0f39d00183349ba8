"""Stream protocol shared by the streaming drivers.

A Stream owns a backing store and a running consumed offset. parse()
hands the parser a fresh Input over the unconsumed data and returns the
parsed value; every other outcome is raised as a StreamError subclass:

    EndOfInputError       - exhausted, or the parser wants data that will never come
    IncompleteInputError  - the parser wants more data and the source may supply it
    StreamParseError      - definite grammar error (with the unconsumed tail)

Python 3.13+. Zero external dependencies.
"""

import logging
from collections.abc import Iterator
from typing import Any, Protocol

from chompkit.core.result import Parser
from chompkit.diagnostics import EndOfInputError

__all__ = ["Stream", "iterparse"]

logger = logging.getLogger(__name__)


class Stream(Protocol):
    """Structural type of SliceStream and Source."""

    @property
    def remaining(self) -> int:
        """Number of buffered, not yet consumed tokens."""
        ...

    @property
    def consumed(self) -> int:
        """Total number of tokens committed by successful parses."""
        ...

    @property
    def is_exhausted(self) -> bool:
        """True once the end of input is known and everything is consumed."""
        ...

    def parse[T](self, parser: Parser[T, Any]) -> T:
        """Run parser on the unconsumed data and commit what it consumed."""
        ...


def iterparse[T](stream: Stream, parser: Parser[T, Any]) -> Iterator[T]:
    """Yield values of parser until the stream is cleanly exhausted.

    Running out in the middle of a value (EndOfInputError with data still
    buffered) is re-raised. A parser that succeeds without consuming
    anything ends the iteration.

    Raises:
        EndOfInputError: If input ends inside a value
        StreamParseError: On a grammar error
    """
    while not stream.is_exhausted:
        before = stream.consumed
        try:
            value = stream.parse(parser)
        except EndOfInputError:
            if stream.remaining:
                raise
            return
        yield value
        if stream.consumed == before:
            logger.warning(
                "iterparse stopped: parser succeeded at offset %d without consuming input",
                before,
            )
            return
