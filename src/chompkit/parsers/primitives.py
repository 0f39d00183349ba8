"""Token-level parsers.

Small producers built directly on the Input contract. Each factory returns
a parser function ``(Input) -> ParseResult``; parsers that take no
configuration (any_token, eof, ...) are parser functions themselves.

Running off the end of the data:
    - partial input (streaming): Incomplete, with a size hint where known
    - complete input: Failure "unexpected end of input", except for the
      "while" family (take_while, skip_while, scan) which simply stop

Failures never consume input: the Failure's Input is the parser's starting
Input, and the error value carries the offending position.
"""

from collections.abc import Callable, Sequence
from typing import Any

from chompkit.core.error import describe_token
from chompkit.core.input import Input
from chompkit.core.result import ParseResult, Parser

__all__ = [
    "any_token",
    "eof",
    "not_token",
    "peek",
    "peek_next",
    "run_scanner",
    "satisfy",
    "satisfy_with",
    "scan",
    "skip_while",
    "string",
    "take",
    "take_remainder",
    "take_till",
    "take_while",
    "take_while1",
    "token",
]


def any_token(input: Input[Any]) -> ParseResult[Any, Any]:
    """Consume and return the next token, whatever it is."""
    if input.is_eof:
        return input.ran_out("any token", 1)
    return input.advance().ret(input.current)


def eof(input: Input[Any]) -> ParseResult[None, Any]:
    """Succeed only at the true end of input.

    On partial input an empty buffer is not the end yet, so the answer is
    Incomplete until the source is closed.
    """
    if not input.is_eof:
        return input.fail("end of input")
    if input.partial:
        return input.need()
    return input.ret(None)


def peek(input: Input[Any]) -> ParseResult[Any, Any]:
    """Return the next token without consuming it, or None at end of input."""
    if input.is_eof:
        if input.partial:
            return input.need(1)
        return input.ret(None)
    return input.ret(input.current)


def peek_next(input: Input[Any]) -> ParseResult[Any, Any]:
    """Return the next token without consuming it; fails at end of input."""
    if input.is_eof:
        return input.ran_out("any token", 1)
    return input.ret(input.current)


def take_remainder(input: Input[Any]) -> ParseResult[Sequence[Any], Any]:
    """Consume everything up to the true end of input."""
    if input.partial:
        return input.need()
    rest = input.consume_remaining()
    return input.advance(input.remaining).ret(rest)


def token[T](expected: T) -> Parser[T, Any]:
    """Match one token equal to expected.

    Example:
        >>> run(token(ord("G")), Input(b"GET")).value
        71
    """
    description = describe_token(expected)

    def parse_token(input: Input[Any]) -> ParseResult[T, Any]:
        if input.is_eof:
            return input.ran_out(description, 1)
        if input.current == expected:
            return input.advance().ret(input.current)
        return input.fail(description)

    return parse_token


def not_token[T](rejected: T) -> Parser[T, Any]:
    """Match one token that is not equal to rejected."""
    description = f"anything but {describe_token(rejected)}"

    def parse_not_token(input: Input[Any]) -> ParseResult[T, Any]:
        if input.is_eof:
            return input.ran_out(description, 1)
        if input.current != rejected:
            return input.advance().ret(input.current)
        return input.fail(description)

    return parse_not_token


def satisfy[T](
    predicate: Callable[[T], bool], expected: str | None = None
) -> Parser[T, Any]:
    """Match one token for which predicate is true."""

    def parse_satisfy(input: Input[T]) -> ParseResult[T, Any]:
        if input.is_eof:
            return input.ran_out(expected, 1)
        if predicate(input.current):
            return input.advance().ret(input.current)
        return input.fail(expected)

    return parse_satisfy


def satisfy_with[T, U](
    transform: Callable[[T], U],
    predicate: Callable[[U], bool],
    expected: str | None = None,
) -> Parser[U, Any]:
    """Transform the next token, match if predicate holds on the result.

    Returns the transformed value. transform is called once per attempt.
    """

    def parse_satisfy_with(input: Input[T]) -> ParseResult[U, Any]:
        if input.is_eof:
            return input.ran_out(expected, 1)
        value = transform(input.current)
        if predicate(value):
            return input.advance().ret(value)
        return input.fail(expected)

    return parse_satisfy_with


def take(count: int) -> Parser[Sequence[Any], Any]:
    """Consume exactly count tokens."""
    description = f"{count} token(s)"

    def parse_take(input: Input[Any]) -> ParseResult[Sequence[Any], Any]:
        if input.remaining < count:
            return input.ran_out(description, count - input.remaining)
        return input.advance(count).ret(input.slice_ahead(count))

    return parse_take


def _scan_while[T](input: Input[T], predicate: Callable[[T], bool]) -> int:
    """End offset of the longest run of tokens satisfying predicate."""
    source = input.source
    end = len(source)
    pos = input.pos
    while pos < end and predicate(source[pos]):
        pos += 1
    return pos


def take_while[T](predicate: Callable[[T], bool]) -> Parser[Sequence[T], Any]:
    """Consume the longest (possibly empty) run of matching tokens.

    On partial input a run reaching the end of the buffer is Incomplete:
    the next chunk may continue it.
    """

    def parse_take_while(input: Input[T]) -> ParseResult[Sequence[T], Any]:
        end = _scan_while(input, predicate)
        if end == len(input.source) and input.partial:
            return input.need()
        return input.advance(end - input.pos).ret(input.slice_to(end))

    return parse_take_while


def take_while1[T](
    predicate: Callable[[T], bool], expected: str | None = None
) -> Parser[Sequence[T], Any]:
    """Like take_while, but at least one token must match."""

    def parse_take_while1(input: Input[T]) -> ParseResult[Sequence[T], Any]:
        if input.is_eof:
            return input.ran_out(expected, 1)
        if not predicate(input.current):
            return input.fail(expected)
        end = _scan_while(input, predicate)
        if end == len(input.source) and input.partial:
            return input.need()
        return input.advance(end - input.pos).ret(input.slice_to(end))

    return parse_take_while1


def take_till[T](
    predicate: Callable[[T], bool], expected: str | None = None
) -> Parser[Sequence[T], Any]:
    """Consume tokens up to (not including) the first one matching predicate.

    The terminator is required: reaching the end of input without it is
    Incomplete on partial input and a Failure otherwise.
    """

    def parse_take_till(input: Input[T]) -> ParseResult[Sequence[T], Any]:
        end = _scan_while(input, lambda t: not predicate(t))
        if end == len(input.source):
            return input.ran_out(expected)
        return input.advance(end - input.pos).ret(input.slice_to(end))

    return parse_take_till


def skip_while[T](predicate: Callable[[T], bool]) -> Parser[None, Any]:
    """Skip the longest (possibly empty) run of matching tokens."""

    def parse_skip_while(input: Input[T]) -> ParseResult[None, Any]:
        end = _scan_while(input, predicate)
        if end == len(input.source) and input.partial:
            return input.need()
        return input.advance(end - input.pos).ret(None)

    return parse_skip_while


def string[T](expected: Sequence[T]) -> Parser[Sequence[T], Any]:
    """Match the exact token sequence expected (bytes, str, list or tuple).

    Tokens are compared one by one, so the container types of expected
    and the source need not agree.

    Example:
        >>> run(string(b"HTTP/"), Input(b"HTTP/1.1")).value
        b'HTTP/'
    """
    length = len(expected)
    description = repr(expected)

    def parse_string(input: Input[T]) -> ParseResult[Sequence[T], Any]:
        chunk = input.slice_ahead(length)
        if chunk == expected:
            return input.advance(length).ret(chunk)
        for offset, (have, want) in enumerate(zip(chunk, expected)):
            if have != want:
                return input.err(
                    input.error_factory(input.pos + offset, description, have)
                )
        if len(chunk) < length:
            return input.ran_out(description, length - len(chunk))
        return input.advance(length).ret(chunk)

    return parse_string


def scan[T, S](
    state: S, step: Callable[[S, T], S | None]
) -> Parser[Sequence[T], Any]:
    """Consume tokens while step(state, token) returns a new state.

    step returns None to stop before the current token.
    """
    parse_scanner = run_scanner(state, step)

    def parse_scan(input: Input[T]) -> ParseResult[Sequence[T], Any]:
        return parse_scanner(input).map(lambda matched: matched[0])

    return parse_scan


def run_scanner[T, S](
    state: S, step: Callable[[S, T], S | None]
) -> Parser[tuple[Sequence[T], S], Any]:
    """Like scan, but also return the final scanner state."""

    def parse_run_scanner(input: Input[T]) -> ParseResult[tuple[Sequence[T], S], Any]:
        source = input.source
        end = len(source)
        pos = input.pos
        current = state
        while pos < end:
            following = step(current, source[pos])
            if following is None:
                break
            current = following
            pos += 1
        else:
            if input.partial:
                return input.need()
        return input.advance(pos - input.pos).ret((input.slice_to(pos), current))

    return parse_run_scanner
