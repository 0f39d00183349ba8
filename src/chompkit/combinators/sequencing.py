"""Sequencing helpers.

Plain-function replacements for bind-then-continue chaining: each helper
runs its parsers left to right and stops at the first outcome that is not
a Success, returning that outcome untouched.
"""

from collections.abc import Callable, Sequence
from typing import Any

from chompkit.core.input import Input
from chompkit.core.result import ParseResult, Parser, Success, run

__all__ = [
    "delimited",
    "fail_with",
    "mapped",
    "matched_by",
    "preceded",
    "ret",
    "seq",
    "terminated",
]


def ret[T](value: T) -> Parser[T, Any]:
    """Parser that consumes nothing and succeeds with value."""

    def parse_ret(input: Input[Any]) -> ParseResult[T, Any]:
        return input.ret(value)

    return parse_ret


def fail_with(expected: str | None = None) -> Parser[Any, Any]:
    """Parser that consumes nothing and always fails."""

    def parse_fail(input: Input[Any]) -> ParseResult[Any, Any]:
        return input.fail(expected)

    return parse_fail


def seq(*parsers: Parser[Any, Any]) -> Parser[tuple[Any, ...], Any]:
    """Run parsers in order and collect their values into a tuple.

    Example:
        >>> run(seq(token(ord("a")), token(ord("b"))), Input(b"ab")).value
        (97, 98)
    """

    def parse_seq(input: Input[Any]) -> ParseResult[tuple[Any, ...], Any]:
        values = []
        for parser in parsers:
            outcome = run(parser, input)
            if not outcome.is_success:
                return outcome
            values.append(outcome.value)
            input = outcome.input
        return input.ret(tuple(values))

    return parse_seq


def preceded[T](prefix: Parser[Any, Any], parser: Parser[T, Any]) -> Parser[T, Any]:
    """Run prefix, discard its value, then run parser."""

    def parse_preceded(input: Input[Any]) -> ParseResult[T, Any]:
        return run(prefix, input).then(parser)

    return parse_preceded


def terminated[T](parser: Parser[T, Any], suffix: Parser[Any, Any]) -> Parser[T, Any]:
    """Run parser, then suffix, keeping parser's value."""

    def parse_terminated(input: Input[Any]) -> ParseResult[T, Any]:
        return run(parser, input).bind(
            lambda rest, value: run(suffix, rest).map(lambda _: value)
        )

    return parse_terminated


def delimited[T](
    opening: Parser[Any, Any], parser: Parser[T, Any], closing: Parser[Any, Any]
) -> Parser[T, Any]:
    """Run opening, parser and closing; keep the middle value."""
    return preceded(opening, terminated(parser, closing))


def mapped[T, U](parser: Parser[T, Any], f: Callable[[T], U]) -> Parser[U, Any]:
    """Transform the value of a successful parse."""

    def parse_mapped(input: Input[Any]) -> ParseResult[U, Any]:
        return run(parser, input).map(f)

    return parse_mapped


def matched_by[T](parser: Parser[T, Any]) -> Parser[tuple[Sequence[Any], T], Any]:
    """Run parser and also return the exact slice of input it consumed.

    Returns:
        Parser yielding (matched, value); matched is a slice of the source
        (a zero-copy view for memoryview sources)

    Example:
        >>> run(matched_by(decimal), Input(b"42 apples")).value
        (b'42', 42)
    """

    def parse_matched_by(input: Input[Any]) -> ParseResult[tuple[Sequence[Any], T], Any]:
        outcome = run(parser, input)
        if not outcome.is_success:
            return outcome
        rest = outcome.input
        return Success(rest, (input.slice_to(rest.pos), outcome.value))

    return parse_matched_by
