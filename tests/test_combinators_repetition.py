"""Tests for many, many1, count, bounded, skip_many, many_till, sep_by.

The central invariant throughout: the Input of the returned Success or
Failure sits right after the last confirmed success, never inside the
attempt that failed.
"""

from __future__ import annotations

import logging
from typing import Any

import pytest
from hypothesis import given, settings

from chompkit import Input, ParseError, run
from chompkit.combinators import (
    bounded,
    count,
    many,
    many1,
    many_till,
    ret,
    sep_by,
    sep_by1,
    seq,
    skip_many,
    skip_many1,
)
from chompkit.diagnostics import InvalidArgumentError
from chompkit.parsers import any_token, decimal, digit, satisfy, string, token
from chompkit.parsers.ascii import is_alpha
from tests.helpers.outcomes import assert_failure, assert_incomplete, assert_success
from tests.strategies import letters, number_lists

letter = satisfy(is_alpha, "letter")
comma = token(",")
a = token("a")


class TestMany:
    """many and many1."""

    def test_first_failure_consumes_nothing(self) -> None:
        outcome = assert_success(run(many(token("x")), Input("abc")))
        assert outcome.value == []
        assert outcome.input.pos == 0

    def test_collects_run(self) -> None:
        outcome = assert_success(run(many(a), Input("aaab")))
        assert outcome.value == ["a", "a", "a"]
        assert outcome.input.pos == 3

    def test_partially_consumed_attempt_is_discarded(self) -> None:
        pair = seq(token("a"), token("b"))
        outcome = assert_success(run(many(pair), Input("ababac")))
        assert outcome.value == [("a", "b"), ("a", "b")]
        assert outcome.input.pos == 4

    def test_complete_input_end_stops_loop(self) -> None:
        outcome = assert_success(run(many(a), Input("aa")))
        assert outcome.value == ["a", "a"]
        assert outcome.input.is_eof

    def test_incomplete_on_first_attempt_propagates(self) -> None:
        assert_incomplete(run(many(a), Input("", partial=True)))

    def test_incomplete_after_successes_propagates(self) -> None:
        assert_incomplete(run(many(a), Input("aa", partial=True)))

    def test_definite_failure_on_partial_input_succeeds(self) -> None:
        outcome = assert_success(run(many(a), Input("aab", partial=True)))
        assert outcome.input.pos == 2

    def test_into_builder(self) -> None:
        outcome = assert_success(run(many(letter, into="".join), Input("abc1")))
        assert outcome.value == "abc"
        outcome = assert_success(run(many(letter, into=set), Input("abab")))
        assert outcome.value == {"a", "b"}

    def test_many1_zero_is_failure(self) -> None:
        failure = assert_failure(run(many1(digit), Input(b"x")))
        assert failure.input.pos == 0
        assert failure.error == ParseError(0, "digit", ord("x"))

    def test_many1_one_or_more(self) -> None:
        assert assert_success(run(many1(digit), Input(b"12x"))).value == [ord("1"), ord("2")]

    @given(text=letters)
    @settings(max_examples=200)
    def test_many_collects_maximal_run(self, text: str) -> None:
        """PROPERTY: p cannot succeed once more on what many(p) left over."""
        outcome = assert_success(run(many(a), Input(text)))
        expected = len(text) - len(text.lstrip("a"))
        assert len(outcome.value) == expected
        assert outcome.input.pos == expected
        assert not run(a, outcome.input).is_success


class TestNonProgressGuard:
    """Element parsers that succeed without consuming."""

    def test_many_stops_after_one_item(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="chompkit.combinators.repetition"):
            outcome = assert_success(run(many(ret(1)), Input("abc")))
        assert outcome.value == [1]
        assert outcome.input.pos == 0
        assert any("without consuming input" in r.getMessage() for r in caplog.records)

    def test_bounded_minimum_still_reached(self) -> None:
        outcome = assert_success(run(bounded(ret(1), 3), Input("")))
        assert outcome.value == [1, 1, 1]

    def test_count_is_not_guarded(self) -> None:
        assert assert_success(run(count(ret("x"), 4), Input(""))).value == ["x"] * 4


class TestCount:
    """count and bounded."""

    def test_count_exact(self) -> None:
        outcome = assert_success(run(count(a, 2), Input("aaa")))
        assert outcome.value == ["a", "a"]
        assert outcome.input.pos == 2

    def test_count_failure_is_after_last_success(self) -> None:
        failure = assert_failure(run(count(a, 3), Input("aab")))
        assert failure.input.pos == 2
        assert failure.error == ParseError(2, "'a'", "b")

    def test_count_failure_inside_attempt_rewinds(self) -> None:
        failure = assert_failure(run(count(string("ab"), 3), Input("ababac")))
        assert failure.input.pos == 4
        assert failure.error.position == 5

    def test_count_does_not_ask_for_more_than_n(self) -> None:
        assert_success(run(count(a, 2), Input("aa", partial=True)))

    def test_count_incomplete(self) -> None:
        assert_incomplete(run(count(a, 3), Input("aa", partial=True)))

    def test_count_zero(self) -> None:
        outcome = assert_success(run(count(a, 0), Input("aaa")))
        assert (outcome.value, outcome.input.pos) == ([], 0)

    def test_bounded_range(self) -> None:
        parser = bounded(a, 2, 3)
        assert assert_success(run(parser, Input("aaaaa"))).value == ["a"] * 3
        assert assert_success(run(parser, Input("aab"))).value == ["a"] * 2
        assert assert_failure(run(parser, Input("ab"))).input.pos == 1

    @pytest.mark.parametrize(("low", "high"), [(-1, None), (3, 2), (-2, -1)])
    def test_invalid_range(self, low: int, high: int | None) -> None:
        with pytest.raises(InvalidArgumentError):
            bounded(a, low, high)

    def test_negative_count(self) -> None:
        with pytest.raises(ValueError, match="min_count"):
            count(a, -1)


class TestSkipMany:
    """skip_many and skip_many1."""

    def test_skip_many(self) -> None:
        outcome = assert_success(run(skip_many(token(" ")), Input("   x")))
        assert (outcome.value, outcome.input.pos) == (None, 3)

    def test_skip_many1_requires_one(self) -> None:
        assert_failure(run(skip_many1(token(" ")), Input("x")))


class TestManyTill:
    """many_till."""

    def test_end_matching_immediately_never_runs_parser(self) -> None:
        calls: list[int] = []

        def tracked(i: Input[Any]) -> Any:
            calls.append(i.pos)
            return run(any_token, i)

        outcome = assert_success(run(many_till(tracked, string("-->")), Input("-->x")))
        assert outcome.value == []
        assert outcome.input.pos == 3
        assert calls == []

    def test_collects_until_end(self) -> None:
        outcome = assert_success(run(many_till(any_token, string("-->")), Input("ab-->c")))
        assert outcome.value == ["a", "b"]
        assert outcome.input.pos == 5

    def test_parser_failure_is_reported(self) -> None:
        failure = assert_failure(run(many_till(digit, token(ord(";"))), Input(b"12x")))
        assert failure.input.pos == 2
        assert failure.error.expected == "digit"

    def test_incomplete_when_neither_matches_yet(self) -> None:
        assert_incomplete(run(many_till(digit, token(ord(";"))), Input(b"12", partial=True)))

    def test_incomplete_end_propagates(self) -> None:
        assert_incomplete(run(many_till(any_token, string("-->")), Input("ab--", partial=True)))

    def test_stalled_parser_reports_end_failure(self) -> None:
        failure = assert_failure(run(many_till(ret(1), token(";")), Input("x")))
        assert failure.input.pos == 0
        assert failure.error.expected == "';'"


class TestSepBy:
    """sep_by and sep_by1."""

    def test_list(self) -> None:
        outcome = assert_success(run(sep_by(letter, comma), Input("a,b,c")))
        assert outcome.value == ["a", "b", "c"]
        assert outcome.input.is_eof

    def test_trailing_separator_is_not_consumed(self) -> None:
        outcome = assert_success(run(sep_by(letter, comma), Input("a,b,")))
        assert outcome.value == ["a", "b"]
        assert outcome.input.consume_remaining() == ","

    def test_empty(self) -> None:
        outcome = assert_success(run(sep_by(letter, comma), Input("1")))
        assert (outcome.value, outcome.input.pos) == ([], 0)

    def test_sep_by1_requires_one(self) -> None:
        failure = assert_failure(run(sep_by1(letter, comma), Input("1")))
        assert failure.error.expected == "letter"

    def test_sep_by1_list(self) -> None:
        assert assert_success(run(sep_by1(letter, comma), Input("x,y"))).value == ["x", "y"]

    def test_incomplete_after_element(self) -> None:
        assert_incomplete(run(sep_by(letter, comma), Input("a,b", partial=True)))

    def test_into_builder(self) -> None:
        outcome = assert_success(run(sep_by(letter, comma, into=tuple), Input("a,b")))
        assert outcome.value == ("a", "b")

    @given(sample=number_lists())
    @settings(max_examples=200)
    def test_numbers(self, sample: tuple[bytes, list[int]]) -> None:
        """PROPERTY: sep_by(decimal, ',') reads back any rendered list."""
        data, values = sample
        outcome = assert_success(run(sep_by(decimal, token(ord(","))), Input(data)))
        assert outcome.value == values
        assert outcome.input.is_eof
