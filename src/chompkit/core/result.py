"""Three-way parse outcome algebra and primitive step execution.

Every parser is a function from Input to exactly one of:

    Success(input, value)   - value parsed, input positioned after it
    Failure(input, error)   - grammar error; input at the last confirmed position
    Incomplete(input, needed) - cannot decide without more data

Outcomes are immutable. Combinators inspect them and build new ones; they
never convert Incomplete into Success or Failure.

Chaining methods (bind, then, map, map_err, inspect) replace sequencing
sugar: on Failure and Incomplete they return the outcome unchanged.

Example:
    >>> from chompkit.core.input import Input
    >>> from chompkit.parsers import token, take
    >>> r = run(token(ord("f")), Input(b"foo")).then(take(2))
    >>> r.value, r.input.pos
    (b'oo', 3)
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from chompkit.diagnostics import ErrorTemplate, InvalidParserResultError

if TYPE_CHECKING:
    from chompkit.core.input import Input

__all__ = ["Failure", "Incomplete", "ParseResult", "Parser", "Success", "run"]


@dataclass(frozen=True, slots=True)
class Success[T]:
    """Parsed value plus the Input positioned right after it."""

    input: "Input[Any]"
    value: T

    is_success: ClassVar[bool] = True
    is_failure: ClassVar[bool] = False
    is_incomplete: ClassVar[bool] = False

    def bind[U, E](
        self, f: "Callable[[Input[Any], T], ParseResult[U, E] | None]"
    ) -> "ParseResult[U, E]":
        """Continue with f(remaining_input, value)."""
        value = self.value
        return run(lambda i: f(i, value), self.input)

    def then[U, E](self, parser: "Parser[U, E]") -> "ParseResult[U, E]":
        """Discard the value and run parser on the remaining input."""
        return run(parser, self.input)

    def map[U](self, f: Callable[[T], U]) -> "Success[U]":
        """Transform the value."""
        return Success(self.input, f(self.value))

    def map_err(self, f: Callable[[Any], Any]) -> "Success[T]":
        """No error to transform."""
        return self

    def inspect(self, f: Callable[[T], object]) -> "Success[T]":
        """Call f with the value (for debugging) and return self."""
        f(self.value)
        return self


@dataclass(frozen=True, slots=True)
class Failure[E]:
    """Grammar error plus the Input at the last confirmed position."""

    input: "Input[Any]"
    error: E

    is_success: ClassVar[bool] = False
    is_failure: ClassVar[bool] = True
    is_incomplete: ClassVar[bool] = False

    def bind(self, f: Callable[..., Any]) -> "Failure[E]":
        return self

    def then(self, parser: Callable[..., Any]) -> "Failure[E]":
        return self

    def map(self, f: Callable[[Any], Any]) -> "Failure[E]":
        return self

    def map_err[F](self, f: Callable[[E], F]) -> "Failure[F]":
        """Transform the error, e.g. into the caller's own error type."""
        return Failure(self.input, f(self.error))

    def inspect(self, f: Callable[[Any], object]) -> "Failure[E]":
        return self


@dataclass(frozen=True, slots=True)
class Incomplete:
    """More data is needed before the parser can decide.

    Attributes:
        input: Input at the point the data ran out (incomplete flag set)
        needed: Size hint in tokens, or None when unknown
    """

    input: "Input[Any]"
    needed: int | None = None

    is_success: ClassVar[bool] = False
    is_failure: ClassVar[bool] = False
    is_incomplete: ClassVar[bool] = True

    def bind(self, f: Callable[..., Any]) -> "Incomplete":
        return self

    def then(self, parser: Callable[..., Any]) -> "Incomplete":
        return self

    def map(self, f: Callable[[Any], Any]) -> "Incomplete":
        return self

    def map_err(self, f: Callable[[Any], Any]) -> "Incomplete":
        return self

    def inspect(self, f: Callable[[Any], object]) -> "Incomplete":
        return self


type ParseResult[T, E] = Success[T] | Failure[E] | Incomplete

type Parser[T, E] = Callable[[Input[Any]], ParseResult[T, E] | None]


def run[T, E](parser: Parser[T, E], input: "Input[Any]") -> ParseResult[T, E]:
    """Invoke parser exactly once and classify its outcome.

    Classification:
        - Success / Failure / Incomplete: passed through unchanged
        - None: Failure on the current token
        - EOFError raised (e.g. by Input.current): the parser ran out of
          data, so Incomplete on partial input, Failure otherwise

    Args:
        parser: Function from Input to an outcome (or None)
        input: Input to run it on

    Returns:
        Exactly one of Success, Failure, Incomplete

    Raises:
        InvalidParserResultError: If the parser returned anything else
    """
    try:
        outcome = parser(input)
    except EOFError:
        return input.ran_out()
    if outcome is None:
        return input.fail()
    if isinstance(outcome, (Success, Failure, Incomplete)):
        return outcome
    raise InvalidParserResultError(
        ErrorTemplate.invalid_parser_result(type(outcome).__name__)
    )
