"""Alternation and optional parsing.

Every combinator here tries a branch from its own starting Input. Because
Input is immutable, retrying from that Input is the rewind; nothing a
failed branch consumed leaks into the next attempt.

Incomplete is never speculated past: if a branch needs more data, the
combinator reports Incomplete without trying the remaining branches.
"""

from dataclasses import dataclass
from typing import Any

from chompkit.core.input import Input
from chompkit.core.result import ParseResult, Parser, Success, run
from chompkit.diagnostics import ErrorTemplate, InvalidArgumentError

__all__ = ["Left", "Right", "choice", "either", "look_ahead", "option", "or_"]


@dataclass(frozen=True, slots=True)
class Left[T]:
    """Value produced by the first branch of either()."""

    value: T


@dataclass(frozen=True, slots=True)
class Right[T]:
    """Value produced by the second branch of either()."""

    value: T


def option[T, D](parser: Parser[T, Any], default: D) -> Parser[T | D, Any]:
    """Run parser; on a definite failure succeed with default, consuming nothing.

    Example:
        >>> run(option(token(ord("-")), None), Input(b"42")).value is None
        True
    """

    def parse_option(input: Input[Any]) -> ParseResult[T | D, Any]:
        outcome = run(parser, input)
        if outcome.is_failure:
            return input.ret(default)
        return outcome

    return parse_option


def or_[T](first: Parser[T, Any], second: Parser[T, Any]) -> Parser[T, Any]:
    """Try first; if it fails, try second from the same position."""

    def parse_or(input: Input[Any]) -> ParseResult[T, Any]:
        outcome = run(first, input)
        if outcome.is_failure:
            return run(second, input)
        return outcome

    return parse_or


def either[L, R](
    left: Parser[L, Any], right: Parser[R, Any]
) -> Parser[Left[L] | Right[R], Any]:
    """Like or_, but tag the value with the branch that produced it."""

    def parse_either(input: Input[Any]) -> ParseResult[Left[L] | Right[R], Any]:
        outcome = run(left, input).map(Left)
        if outcome.is_failure:
            return run(right, input).map(Right)
        return outcome

    return parse_either


def choice[T](*parsers: Parser[T, Any]) -> Parser[T, Any]:
    """Try each parser in turn and return the first success.

    If every branch fails, the failure of the last branch is returned.
    """
    if not parsers:
        raise InvalidArgumentError(
            ErrorTemplate.invalid_argument("parsers", parsers, "at least one parser is required")
        )

    def parse_choice(input: Input[Any]) -> ParseResult[T, Any]:
        for parser in parsers:
            outcome = run(parser, input)
            if not outcome.is_failure:
                return outcome
        return outcome

    return parse_choice


def look_ahead[T](parser: Parser[T, Any]) -> Parser[T, Any]:
    """Run parser and return its value without consuming any input."""

    def parse_look_ahead(input: Input[Any]) -> ParseResult[T, Any]:
        outcome = run(parser, input)
        if outcome.is_success:
            return Success(input, outcome.value)
        return outcome

    return parse_look_ahead
