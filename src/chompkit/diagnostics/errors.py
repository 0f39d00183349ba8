"""chompkit exception hierarchy with structured diagnostics.

Grammar errors and incomplete input are ordinary values inside the parser
core. These exceptions are raised only at driver boundaries (one-shot
parsing, streams) and for API contract violations.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class ChompError(Exception):
    """Base exception for all chompkit errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize ChompError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)


class ParseFailedError(ChompError):
    """One-shot parse ended with a grammar error.

    Attributes:
        error: Grammar error value produced by the parser (caller's error type)
        remaining: Unconsumed part of the input at the point of failure
    """

    def __init__(self, message: str | Diagnostic, *, error: object, remaining: object) -> None:
        """Initialize ParseFailedError.

        Args:
            message: Error message string OR Diagnostic object
            error: Grammar error value
            remaining: Unconsumed input tail
        """
        super().__init__(message)
        self.error = error
        self.remaining = remaining


class StreamError(ChompError):
    """Base class for outcomes of Stream.parse() other than a value."""


class EndOfInputError(StreamError):
    """Stream is exhausted and cannot supply what the parser still wants."""


class IncompleteInputError(StreamError):
    """Parser needs more data; the source may still provide it.

    Attributes:
        needed: Size hint in tokens, or None when unknown
    """

    def __init__(self, message: str | Diagnostic, *, needed: int | None = None) -> None:
        """Initialize IncompleteInputError.

        Args:
            message: Error message string OR Diagnostic object
            needed: Size hint in tokens (optional)
        """
        super().__init__(message)
        self.needed = needed


class RetryError(StreamError):
    """Non-blocking data source had nothing to read; try again later."""


class StreamParseError(StreamError):
    """Definite grammar error while parsing from a stream.

    Attributes:
        error: Grammar error value produced by the parser
        remaining: Unconsumed buffered data at the point of failure
    """

    def __init__(self, message: str | Diagnostic, *, error: object, remaining: object) -> None:
        """Initialize StreamParseError.

        Args:
            message: Error message string OR Diagnostic object
            error: Grammar error value
            remaining: Unconsumed buffered data
        """
        super().__init__(message)
        self.error = error
        self.remaining = remaining


class BufferLimitExceededError(ChompError):
    """Source would buffer more unconsumed data than its configured limit."""


class ContractError(ChompError):
    """Parser API used in a way its contract forbids."""


class MarkMismatchError(ContractError):
    """Mark restored onto an Input over a different source."""


class InvalidParserResultError(ContractError, TypeError):
    """Parser returned something that is not a parse outcome."""


class InvalidArgumentError(ContractError, ValueError):
    """Combinator constructed with an invalid argument."""
