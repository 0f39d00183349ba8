"""Repetition combinators built on one shared iterator loop.

_Repeat runs an element parser again and again, yielding each value and
remembering the Input right after the last confirmed success. Every
collecting combinator hands that iterator to a builder (``into``, any
callable taking an iterable; list by default) and then inspects what
stopped the loop.

Invariant: whatever a failing final attempt consumed is discarded. The
Input of the returned Success or Failure is always the position right
after the last confirmed success. Incomplete is propagated unchanged.

Example:
    >>> from chompkit.parsers import token, decimal
    >>> r = run(sep_by(decimal, token(ord(","))), Input(b"1,2,3;"))
    >>> r.value, r.input.pos
    ([1, 2, 3], 5)
"""

import logging
from collections.abc import Callable, Iterable, Iterator
from itertools import chain
from typing import Any

from chompkit.combinators.sequencing import preceded
from chompkit.core.input import Input
from chompkit.core.result import Failure, Incomplete, ParseResult, Parser, Success, run
from chompkit.diagnostics import ErrorTemplate, InvalidArgumentError

__all__ = [
    "bounded",
    "count",
    "many",
    "many1",
    "many_till",
    "sep_by",
    "sep_by1",
    "skip_many",
    "skip_many1",
]

logger = logging.getLogger(__name__)

type Into[T, C] = Callable[[Iterable[T]], C]


def _parser_name(parser: Parser[Any, Any]) -> str:
    return getattr(parser, "__qualname__", repr(parser))


class _Repeat[T](Iterator[T]):
    """Iterator over successive values of an element parser.

    Once exhausted:
        input: Input right after the last confirmed success
        count: Number of values yielded
        outcome: The Failure or Incomplete that stopped the loop, or None
            if it stopped by itself (limit reached, end matched, no progress)
        ended: True if the end parser matched (many_till only)

    Builders must consume the whole iterator before the state is read.
    """

    __slots__ = ("_done", "_end", "_limit", "_min", "_parser", "count", "ended", "input", "outcome")

    def __init__(
        self,
        parser: Parser[T, Any],
        input: Input[Any],
        *,
        min_count: int = 0,
        limit: int | None = None,
        end: Parser[Any, Any] | None = None,
    ) -> None:
        self._parser = parser
        self._min = min_count
        self._limit = limit
        self._end = end
        self._done = False
        self.input = input
        self.count = 0
        self.outcome: Failure[Any] | Incomplete | None = None
        self.ended = False

    def __next__(self) -> T:
        if self._done:
            raise StopIteration
        if self._limit is not None and self.count >= self._limit:
            return self._stop()

        start = self.input
        end_failure = None
        if self._end is not None:
            finished = run(self._end, start)
            if finished.is_success:
                self.input = finished.input
                self.ended = True
                return self._stop()
            if finished.is_incomplete:
                return self._stop(finished)
            end_failure = finished

        outcome = run(self._parser, start)
        if not outcome.is_success:
            return self._stop(outcome)

        self.input = outcome.input
        self.count += 1
        if self._limit is None and outcome.input.pos == start.pos and self.count >= self._min:
            logger.warning(
                "Repetition of %s stopped: element matched at position %d without consuming input",
                _parser_name(self._parser),
                start.pos,
            )
            self._done = True
            self.outcome = end_failure
        return outcome.value

    def _stop(self, outcome: Failure[Any] | Incomplete | None = None) -> Any:
        self._done = True
        self.outcome = outcome
        raise StopIteration


def _check_range(min_count: int, max_count: int | None) -> None:
    if min_count < 0:
        raise InvalidArgumentError(
            ErrorTemplate.invalid_argument("min_count", min_count, "must be >= 0")
        )
    if max_count is not None and max_count < min_count:
        raise InvalidArgumentError(
            ErrorTemplate.invalid_argument("max_count", max_count, "must be >= min_count")
        )


def _finish[C](
    items: _Repeat[Any], collected: C, min_count: int
) -> ParseResult[C, Any]:
    """Turn the state of an exhausted loop into the combinator's outcome."""
    outcome = items.outcome
    if outcome is not None and outcome.is_incomplete:
        return outcome
    if items.count < min_count:
        return Failure(items.input, outcome.error)
    return Success(items.input, collected)


def _discard(items: Iterable[Any]) -> None:
    for _ in items:
        pass


def bounded[T, C](
    parser: Parser[T, Any],
    min_count: int,
    max_count: int | None = None,
    *,
    into: Into[T, C] = list,
) -> Parser[C, Any]:
    """Run parser between min_count and max_count times (no upper bound if None).

    Stops trying once max_count values are collected. Fewer than min_count
    successes is a Failure carrying the element parser's error, positioned
    right after the last success.

    Args:
        parser: Element parser
        min_count: Required number of successes
        max_count: Maximum number of attempts, or None for unbounded
        into: Builder for the collected values

    Raises:
        InvalidArgumentError: If the range is empty or negative
    """
    _check_range(min_count, max_count)

    def parse_bounded(input: Input[Any]) -> ParseResult[C, Any]:
        items = _Repeat(parser, input, min_count=min_count, limit=max_count)
        collected = into(items)
        return _finish(items, collected, min_count)

    return parse_bounded


def many[T, C](parser: Parser[T, Any], *, into: Into[T, C] = list) -> Parser[C, Any]:
    """Collect zero or more values of parser.

    The loop ends at the first failure, which is not an error of many().
    Incomplete from any attempt is propagated: more data could extend the run.
    """
    return bounded(parser, 0, into=into)


def many1[T, C](parser: Parser[T, Any], *, into: Into[T, C] = list) -> Parser[C, Any]:
    """Collect one or more values of parser."""
    return bounded(parser, 1, into=into)


def count[T, C](parser: Parser[T, Any], n: int, *, into: Into[T, C] = list) -> Parser[C, Any]:
    """Run parser exactly n times."""
    return bounded(parser, n, n, into=into)


def skip_many(parser: Parser[Any, Any]) -> Parser[None, Any]:
    """Skip zero or more matches of parser."""
    return bounded(parser, 0, into=_discard)


def skip_many1(parser: Parser[Any, Any]) -> Parser[None, Any]:
    """Skip one or more matches of parser."""
    return bounded(parser, 1, into=_discard)


def many_till[T, C](
    parser: Parser[T, Any], end: Parser[Any, Any], *, into: Into[T, C] = list
) -> Parser[C, Any]:
    """Collect values of parser until end matches.

    end is tried before every attempt of parser. When it matches, its
    input is consumed and its value dropped. If parser then fails, the
    result is parser's Failure, not end's. An element parser that
    matches without consuming input stops the loop with end's Failure.

    Example:
        >>> r = run(many_till(any_token, string(b"-->")), Input(b"ab-->c"))
        >>> bytes(r.value), r.input.pos
        (b'ab', 5)
    """

    def parse_many_till(input: Input[Any]) -> ParseResult[C, Any]:
        items = _Repeat(parser, input, end=end)
        collected = into(items)
        if items.ended:
            return Success(items.input, collected)
        outcome = items.outcome
        if outcome.is_incomplete:
            return outcome
        return Failure(items.input, outcome.error)

    return parse_many_till


def _sep_by[T, C](
    parser: Parser[T, Any], sep: Parser[Any, Any], into: Into[T, C], required: bool
) -> Parser[C, Any]:
    following = preceded(sep, parser)

    def parse_sep_by(input: Input[Any]) -> ParseResult[C, Any]:
        first = run(parser, input)
        if first.is_incomplete or (first.is_failure and required):
            return first
        if first.is_failure:
            return input.ret(into(()))
        items = _Repeat(following, first.input)
        collected = into(chain((first.value,), items))
        return _finish(items, collected, 0)

    return parse_sep_by


def sep_by[T, C](
    parser: Parser[T, Any], sep: Parser[Any, Any], *, into: Into[T, C] = list
) -> Parser[C, Any]:
    """Collect zero or more values of parser separated by sep.

    A trailing separator not followed by parser is left unconsumed.
    """
    return _sep_by(parser, sep, into, required=False)


def sep_by1[T, C](
    parser: Parser[T, Any], sep: Parser[Any, Any], *, into: Into[T, C] = list
) -> Parser[C, Any]:
    """Collect one or more values of parser separated by sep."""
    return _sep_by(parser, sep, into, required=True)
