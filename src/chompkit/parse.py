"""One-shot entry points for parsing complete input.

run_parser() returns the raw outcome; parse_only() returns the value and
raises on anything else. Both treat the data as complete: running off its
end is a grammar error, not Incomplete.
"""

from collections.abc import Sequence
from typing import Any

from chompkit.core.error import ErrorFactory, ParseError
from chompkit.core.input import Input
from chompkit.core.result import ParseResult, Parser, run
from chompkit.diagnostics import ErrorTemplate, IncompleteInputError, ParseFailedError

__all__ = ["parse_only", "run_parser"]


def run_parser[T, E](
    parser: Parser[T, E],
    data: Sequence[Any],
    *,
    partial: bool = False,
    error_factory: ErrorFactory[E] | None = None,
) -> ParseResult[T, E]:
    """Run parser over data and return its outcome.

    Args:
        parser: Parser to run
        data: Token sequence (bytes, str, memoryview, list)
        partial: Treat data as a prefix that more data may follow
        error_factory: Builds grammar errors (default: ParseError)

    Returns:
        Success, Failure or Incomplete
    """
    factory = error_factory if error_factory is not None else ParseError.unexpected
    return run(parser, Input(data, partial=partial, error_factory=factory))


def parse_only[T](
    parser: Parser[T, Any],
    data: Sequence[Any],
    *,
    error_factory: ErrorFactory[Any] | None = None,
) -> T:
    """Parse complete data and return the value.

    Trailing data the parser did not consume is ignored; follow the
    grammar with eof to require a full match.

    Example:
        >>> parse_only(sep_by(decimal, token(ord(","))), b"1,2,3")
        [1, 2, 3]

    Raises:
        ParseFailedError: On a grammar error (carries .error and .remaining)
        IncompleteInputError: If a parser reports Incomplete on complete data
    """
    outcome = run_parser(parser, data, error_factory=error_factory)
    if outcome.is_success:
        return outcome.value
    if outcome.is_failure:
        remaining = outcome.input.consume_remaining()
        raise ParseFailedError(
            ErrorTemplate.parse_failed(outcome.error, len(remaining)),
            error=outcome.error,
            remaining=remaining,
        )
    raise IncompleteInputError(
        ErrorTemplate.incomplete_at_end(outcome.needed), needed=outcome.needed
    )
