"""Refillable byte stream for incremental parsing.

Source buffers bytes arriving in chunks (fed by the caller, or pulled from
a data source) and drives a parser over them. Parsers run on an immutable bytes copy of the
buffer, taken once per feed and shared by every parse() until the next
one; Incomplete commits nothing, so a retry after more data arrives
starts from exactly the same position. Error positions are relative to
the first unconsumed byte.

Buffer management:
    - Consumed bytes are dropped from the front of the buffer once they
      exceed compact_threshold
    - Unconsumed data beyond max_buffer_size raises BufferLimitExceededError

Components:
    DataSource - Protocol for pull-based chunk providers
    ReadDataSource - Reads fixed-size chunks from a binary file-like object
    IteratorDataSource - Takes chunks from any iterable of bytes
    Source - The refillable stream

Python 3.13+. Zero external dependencies.
"""

import logging
from collections.abc import Iterable, Iterator
from typing import Any, BinaryIO, Protocol

from chompkit.buffer.stream import iterparse
from chompkit.constants import COMPACT_THRESHOLD, DEFAULT_CHUNK_SIZE, MAX_BUFFER_SIZE
from chompkit.core.error import ErrorFactory, ParseError
from chompkit.core.input import Input
from chompkit.core.result import Parser, run
from chompkit.diagnostics import (
    BufferLimitExceededError,
    ContractError,
    EndOfInputError,
    ErrorTemplate,
    IncompleteInputError,
    RetryError,
    StreamParseError,
)

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "DataSource",
    # Concrete data sources
    "ReadDataSource",
    "IteratorDataSource",
    # Stream
    "Source",
]

logger = logging.getLogger(__name__)

type ByteChunk = bytes | bytearray | memoryview


class DataSource(Protocol):
    """Pull-based provider of byte chunks.

    read() returns:
        - a non-empty chunk of data
        - an empty chunk at end of input
        - None when no data is available right now (non-blocking readers)
    """

    def read(self) -> ByteChunk | None: ...


class ReadDataSource:
    """Reads chunks from a binary file-like object (file, socket file, BytesIO).

    A non-blocking reader returning None is passed through as "no data yet".
    """

    __slots__ = ("_chunk_size", "_reader")

    def __init__(self, reader: BinaryIO, chunk_size: int | None = None) -> None:
        self._reader = reader
        self._chunk_size = chunk_size if chunk_size is not None else DEFAULT_CHUNK_SIZE

    def read(self) -> ByteChunk | None:
        return self._reader.read(self._chunk_size)


class IteratorDataSource:
    """Takes chunks from an iterable; empty chunks are skipped."""

    __slots__ = ("_chunks",)

    def __init__(self, chunks: Iterable[ByteChunk]) -> None:
        self._chunks = iter(chunks)

    def read(self) -> ByteChunk | None:
        for chunk in self._chunks:
            if chunk:
                return chunk
        return b""


class Source:
    """Refillable byte stream.

    Feed it manually with feed()/feed_eof(), or build it over a data source
    with from_reader()/from_iterable(); with autofill (the default) parse()
    then pulls chunks by itself until the parser can decide.

    Example:
        >>> source = Source()
        >>> source.feed(b"12")
        >>> source.parse(decimal)  # "12" might continue
        Traceback (most recent call last):
        chompkit.diagnostics.errors.IncompleteInputError: Incomplete input: parser needs more input
        >>> source.feed(b"3;")
        >>> source.parse(decimal)
        123
        >>> source.consumed, source.remaining
        (3, 1)

    Attributes:
        autofill: parse() refills from the data source on Incomplete
    """

    __slots__ = (
        "_buffer",
        "_compact_threshold",
        "_consumed",
        "_data_source",
        "_eof",
        "_error_factory",
        "_max_buffer_size",
        "_pos",
        "_store",
        "autofill",
    )

    def __init__(
        self,
        data: ByteChunk = b"",
        *,
        data_source: DataSource | None = None,
        autofill: bool = True,
        max_buffer_size: int | None = None,
        compact_threshold: int | None = None,
        error_factory: ErrorFactory[Any] | None = None,
    ) -> None:
        """Initialize Source.

        Args:
            data: Initial buffered bytes
            data_source: Chunk provider for fill() (None: fed manually)
            autofill: Let parse() refill from data_source on Incomplete
            max_buffer_size: Ceiling for unconsumed bytes (None: default, 0: no limit)
            compact_threshold: Consumed prefix size that triggers compaction
            error_factory: Builds grammar errors (default: ParseError)
        """
        self._buffer = bytearray()
        self._pos = 0
        self._consumed = 0
        self._store: bytes | None = None
        self._eof = False
        self._data_source = data_source
        self.autofill = autofill
        self._max_buffer_size = max_buffer_size if max_buffer_size is not None else MAX_BUFFER_SIZE
        self._compact_threshold = (
            compact_threshold if compact_threshold is not None else COMPACT_THRESHOLD
        )
        self._error_factory = error_factory if error_factory is not None else ParseError.unexpected
        if data:
            self.feed(data)

    @classmethod
    def from_reader(
        cls, reader: BinaryIO, chunk_size: int | None = None, **kwargs: Any
    ) -> "Source":
        """Source pulling chunk_size reads from a binary file-like object."""
        return cls(data_source=ReadDataSource(reader, chunk_size), **kwargs)

    @classmethod
    def from_iterable(cls, chunks: Iterable[ByteChunk], **kwargs: Any) -> "Source":
        """Source pulling chunks from an iterable of bytes."""
        return cls(data_source=IteratorDataSource(chunks), **kwargs)

    def __repr__(self) -> str:
        return (
            f"Source(consumed={self._consumed}, remaining={self.remaining}, eof={self._eof})"
        )

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def remaining(self) -> int:
        """Number of buffered, not yet consumed bytes."""
        return len(self._buffer) - self._pos

    @property
    def consumed(self) -> int:
        """Total bytes committed since the source was created."""
        return self._consumed

    @property
    def at_eof(self) -> bool:
        """True once no more data will be appended."""
        return self._eof

    @property
    def is_exhausted(self) -> bool:
        """True once end of input is known and every byte is consumed."""
        return self._eof and self.remaining == 0

    def buffered(self) -> bytes:
        """Copy of the unconsumed bytes."""
        return bytes(self._buffer[self._pos :])

    # ------------------------------------------------------------------
    # Filling
    # ------------------------------------------------------------------

    def feed(self, data: ByteChunk) -> None:
        """Append a chunk of data.

        Raises:
            ContractError: If feed_eof() was already called
            BufferLimitExceededError: If unconsumed data would exceed max_buffer_size
        """
        if self._eof:
            raise ContractError(ErrorTemplate.feed_after_eof(len(data)))
        size = self.remaining + len(data)
        if self._max_buffer_size and size > self._max_buffer_size:
            raise BufferLimitExceededError(
                ErrorTemplate.buffer_limit_exceeded(size, self._max_buffer_size)
            )
        self._compact()
        self._buffer += data
        self._store = None

    def feed_eof(self) -> None:
        """Mark the end of input; buffered data can still be parsed."""
        if not self._eof:
            self._eof = True
            logger.debug("Source reached end of input with %d byte(s) buffered", self.remaining)

    def fill(self) -> int:
        """Pull one chunk from the data source.

        Returns:
            Number of bytes appended (0 at end of input)

        Raises:
            ContractError: If the source has no data source
            RetryError: If the data source has nothing available right now
        """
        if self._data_source is None:
            raise ContractError(ErrorTemplate.no_data_source())
        if self._eof:
            return 0
        chunk = self._data_source.read()
        if chunk is None:
            logger.debug("Data source had no data available; retry later")
            raise RetryError(ErrorTemplate.retry())
        if not chunk:
            self.feed_eof()
            return 0
        self.feed(chunk)
        logger.debug("Filled %d byte(s) (%d buffered)", len(chunk), self.remaining)
        return len(chunk)

    def _compact(self) -> None:
        if self._pos and self._pos >= self._compact_threshold:
            del self._buffer[: self._pos]
            logger.debug("Compacted %d consumed byte(s)", self._pos)
            self._pos = 0

    def _commit(self, count: int) -> None:
        if count:
            self._pos += count
            self._consumed += count
            logger.debug("Committed %d byte(s) (consumed=%d)", count, self._consumed)

    def _errors_from(self, base: int) -> ErrorFactory[Any]:
        """Error factory reporting positions relative to offset base of the store."""
        factory = self._error_factory
        if not base:
            return factory

        def relative(position: int, expected: str | None, found: object | None, /) -> Any:
            return factory(position - base, expected, found)

        return relative

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def parse[T](self, parser: Parser[T, Any]) -> T:
        """Parse one value from the buffered data.

        Success and Failure commit what was consumed before they returned.
        Incomplete commits nothing: after end of input it raises
        EndOfInputError, with autofill and a data source it refills and
        retries, otherwise it raises IncompleteInputError.

        Raises:
            EndOfInputError: If the stream is exhausted or ended mid-value
            IncompleteInputError: If more data must be fed first
            RetryError: If autofill hit a data source with no data yet
            StreamParseError: On a grammar error
        """
        while True:
            if self.is_exhausted:
                raise EndOfInputError(ErrorTemplate.end_of_input())

            if self._store is None:
                self._store = bytes(self._buffer)
            base = self._pos
            input = Input(
                self._store, base, partial=not self._eof, error_factory=self._errors_from(base)
            )
            outcome = run(parser, input)

            if outcome.is_success:
                self._commit(outcome.input.pos - base)
                return outcome.value

            if outcome.is_failure:
                self._commit(outcome.input.pos - base)
                raise StreamParseError(
                    ErrorTemplate.stream_parse_failed(outcome.error, self._consumed),
                    error=outcome.error,
                    remaining=self.buffered(),
                )

            if self._eof:
                raise EndOfInputError(ErrorTemplate.end_of_input())
            if not (self.autofill and self._data_source is not None):
                raise IncompleteInputError(
                    ErrorTemplate.incomplete_input(outcome.needed), needed=outcome.needed
                )
            self.fill()

    def iterparse[T](self, parser: Parser[T, Any]) -> Iterator[T]:
        """Yield values of parser until the source is cleanly exhausted."""
        return iterparse(self, parser)
