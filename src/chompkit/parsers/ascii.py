"""ASCII character classes and small number parsers.

Predicates accept byte tokens (ints, from bytes/bytearray/memoryview
sources) and text tokens (1-character strings) alike, so the same grammar
runs over either kind of source.
"""

from collections.abc import Sequence
from typing import Any

from chompkit.core.input import Input
from chompkit.core.result import ParseResult, Parser, Success, run
from chompkit.parsers.primitives import satisfy, skip_while, take_while1

__all__ = [
    "decimal",
    "digit",
    "end_of_line",
    "is_alpha",
    "is_alphanumeric",
    "is_digit",
    "is_end_of_line",
    "is_horizontal_space",
    "is_lowercase",
    "is_uppercase",
    "is_whitespace",
    "signed",
    "skip_whitespace",
]

_CR = 0x0D
_LF = 0x0A
_PLUS = 0x2B
_MINUS = 0x2D


def _code(token: object) -> int:
    """Code point of a token, or -1 for tokens that are not characters."""
    if isinstance(token, int):
        return token
    if isinstance(token, str) and len(token) == 1:
        return ord(token)
    return -1


def is_digit(token: object) -> bool:
    return 0x30 <= _code(token) <= 0x39


def is_lowercase(token: object) -> bool:
    return 0x61 <= _code(token) <= 0x7A


def is_uppercase(token: object) -> bool:
    return 0x41 <= _code(token) <= 0x5A


def is_alpha(token: object) -> bool:
    return is_lowercase(token) or is_uppercase(token)


def is_alphanumeric(token: object) -> bool:
    return is_alpha(token) or is_digit(token)


def is_horizontal_space(token: object) -> bool:
    """Space or horizontal tab."""
    return _code(token) in (0x20, 0x09)


def is_end_of_line(token: object) -> bool:
    """Carriage return or line feed."""
    return _code(token) in (_CR, _LF)


def is_whitespace(token: object) -> bool:
    return is_horizontal_space(token) or is_end_of_line(token)


skip_whitespace: Parser[None, Any] = skip_while(is_whitespace)
"""Skip any run of spaces, tabs, CR and LF."""

digit: Parser[Any, Any] = satisfy(is_digit, "digit")
"""Match a single ASCII digit and return the token."""

_digits = take_while1(is_digit, "digit")


def _digits_value(tokens: Sequence[Any]) -> int:
    value = 0
    for token in tokens:
        value = value * 10 + _code(token) - 0x30
    return value


def decimal(input: Input[Any]) -> ParseResult[int, Any]:
    """Parse one or more ASCII digits as a non-negative integer.

    Example:
        >>> run(decimal, Input(b"123;")).value
        123
    """
    return run(_digits, input).map(_digits_value)


def signed(parser: Parser[int, Any]) -> Parser[int, Any]:
    """Allow an optional leading '+' or '-' before a numeric parser."""

    def parse_signed(input: Input[Any]) -> ParseResult[int, Any]:
        if input.is_eof:
            return input.ran_out("sign or digit", 1)
        sign = _code(input.current)
        if sign == _MINUS:
            return run(parser, input.advance()).map(lambda value: -value)
        if sign == _PLUS:
            return run(parser, input.advance())
        return run(parser, input)

    return parse_signed


def end_of_line(input: Input[Any]) -> ParseResult[Sequence[Any], Any]:
    """Match a line terminator: LF or CRLF. Returns the matched tokens."""
    if input.is_eof:
        return input.ran_out("end of line", 1)
    first = _code(input.current)
    if first == _LF:
        return Success(input.advance(), input.slice_ahead(1))
    if first != _CR:
        return input.fail("end of line")
    if input.remaining < 2:
        return input.ran_out("end of line", 1)
    if _code(input.peek(1)) != _LF:
        return input.err(input.error_factory(input.pos + 1, "end of line", input.peek(1)))
    return Success(input.advance(2), input.slice_ahead(2))
