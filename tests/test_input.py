"""Tests for Input and Mark: navigation, backtracking, outcome constructors."""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from chompkit import Failure, Incomplete, Input, Mark, ParseError, Success
from chompkit.diagnostics import MarkMismatchError
from tests.strategies import inputs, token_sources


class TestInputConstruction:
    """Input validation and defaults."""

    def test_defaults(self) -> None:
        i = Input(b"abc")
        assert i.pos == 0
        assert i.partial is False
        assert i.incomplete is False
        assert i.error_factory == ParseError.unexpected

    @pytest.mark.parametrize("pos", [-1, 4, 100])
    def test_rejects_out_of_range_position(self, pos: int) -> None:
        with pytest.raises(ValueError, match="within"):
            Input(b"abc", pos)

    def test_position_at_end_is_valid(self) -> None:
        assert Input(b"abc", 3).is_eof

    def test_repr_omits_source(self) -> None:
        text = repr(Input(b"secret data", 2, partial=True))
        assert "secret" not in text
        assert "pos=2" in text
        assert "partial=True" in text

    def test_is_frozen(self) -> None:
        i = Input(b"abc")
        with pytest.raises(AttributeError):
            i.pos = 1  # type: ignore[misc]


class TestInputNavigation:
    """Token access and advancing."""

    def test_current_on_bytes_is_int(self) -> None:
        assert Input(b"G").current == ord("G")

    def test_current_on_str_is_char(self) -> None:
        assert Input("G").current == "G"

    def test_current_on_list_is_item(self) -> None:
        assert Input([("kw", "if")]).current == ("kw", "if")

    def test_current_at_eof_raises_eoferror(self) -> None:
        with pytest.raises(EOFError):
            _ = Input(b"").current

    def test_peek(self) -> None:
        i = Input(b"ab")
        assert i.peek() == ord("a")
        assert i.peek(1) == ord("b")
        assert i.peek(2) is None

    def test_advance_is_clamped(self) -> None:
        i = Input(b"abc").advance(10)
        assert i.pos == 3
        assert i.is_eof

    def test_remaining(self) -> None:
        assert Input(b"abcd", 1).remaining == 3

    def test_slices_keep_source_type(self) -> None:
        view = memoryview(b"GET /")
        chunk = Input(view).slice_ahead(3)
        assert isinstance(chunk, memoryview)
        assert chunk == b"GET"

    def test_slice_to(self) -> None:
        assert Input("hello world", 6).slice_to(11) == "world"

    def test_consume_remaining_is_pure(self) -> None:
        i = Input(b"abcdef", 4)
        assert i.consume_remaining() == b"ef"
        assert i.pos == 4

    def test_line_col(self) -> None:
        assert Input("ab\ncd", 4).line_col() == (2, 2)


class TestMarkRestore:
    """Backtracking with marks."""

    def test_restore_rewinds(self) -> None:
        start = Input(b"abcdef", 1)
        mark = start.mark()
        moved = start.advance(3)
        assert moved.restore(mark) == start

    def test_slice_from_mark(self) -> None:
        start = Input(b"abcdef")
        mark = start.mark()
        assert start.advance(4).slice_from(mark) == b"abcd"

    def test_mark_at_end_restores_to_identity(self) -> None:
        end = Input(b"abc", 3)
        assert end.restore(end.mark()) == end

    def test_restore_twice_is_idempotent(self) -> None:
        start = Input(b"abcdef", 2)
        mark = start.mark()
        moved = start.advance(2)
        assert moved.restore(mark) == moved.restore(mark) == start

    def test_restore_clears_incomplete_flag(self) -> None:
        start = Input(b"ab", partial=True)
        flagged = start.need().input
        assert flagged.incomplete
        assert flagged.restore(start.mark()).incomplete is False

    def test_mark_from_other_source_raises(self) -> None:
        mark = Input(b"abc").mark()
        with pytest.raises(MarkMismatchError):
            Input(bytearray(b"abc")).restore(mark)

    def test_slice_from_foreign_mark_raises(self) -> None:
        with pytest.raises(MarkMismatchError):
            Input(b"abc").slice_from(Mark(bytearray(b"abc"), 0))

    def test_marks_compare_and_hash_by_offset(self) -> None:
        mark = Input(bytearray(b"abc"), 1).mark()
        assert {mark: "seen"}[mark] == "seen"
        assert mark == Mark([0] * 3, 1)
        assert mark != Mark(bytearray(b"abc"), 2)

    @given(start=inputs(), data=st.data())
    @settings(max_examples=200)
    def test_restore_round_trip(self, start: Input[object], data: st.DataObject) -> None:
        """PROPERTY: restore(x, mark(s)) == s for any x derived from s."""
        mark = start.mark()
        steps = data.draw(st.integers(min_value=0, max_value=start.remaining + 2))
        derived = start.advance(steps)
        restored = derived.restore(mark)
        assert restored == start
        assert restored.source is start.source


class TestOutcomeConstructors:
    """ret/err/fail/need/ran_out."""

    def test_ret(self) -> None:
        i = Input(b"abc", 1)
        outcome = i.ret("v")
        assert isinstance(outcome, Success)
        assert outcome.value == "v"
        assert outcome.input is i

    def test_err_keeps_caller_error(self) -> None:
        outcome = Input(b"abc").err("bad")
        assert isinstance(outcome, Failure)
        assert outcome.error == "bad"

    def test_fail_uses_current_token(self) -> None:
        outcome = Input(b"abc", 1).fail("digit")
        assert isinstance(outcome, Failure)
        assert outcome.error == ParseError(1, "digit", ord("b"))

    def test_fail_uses_custom_error_factory(self) -> None:
        def factory(position: int, expected: str | None, found: object | None) -> str:
            return f"{position}:{expected}:{found}"

        outcome = Input(b"abc", error_factory=factory).fail("x")
        assert isinstance(outcome, Failure)
        assert outcome.error == "0:x:97"

    def test_need_sets_incomplete_flag(self) -> None:
        outcome = Input(b"ab", 2, partial=True).need(3)
        assert isinstance(outcome, Incomplete)
        assert outcome.needed == 3
        assert outcome.input.incomplete
        assert outcome.input.pos == 2

    def test_ran_out_on_partial_input_is_incomplete(self) -> None:
        outcome = Input(b"ab", 1, partial=True).ran_out("digit", 2)
        assert isinstance(outcome, Incomplete)
        assert outcome.needed == 2

    def test_ran_out_on_complete_input_fails_at_end(self) -> None:
        outcome = Input(b"ab", 1).ran_out("digit", 2)
        assert isinstance(outcome, Failure)
        assert outcome.input.pos == 1
        assert outcome.error == ParseError(2, "digit", None)
        assert outcome.error.is_eof


class TestInputProperties:
    """Hypothesis properties of navigation."""

    @given(source=token_sources())
    @settings(max_examples=100)
    def test_advance_never_exceeds_length(self, source: bytes | str | list[int]) -> None:
        i = Input(source)
        while not i.is_eof:
            i = i.advance(2)
        assert i.pos == len(source)
        assert i.remaining == 0

    @given(start=inputs(), count=st.integers(min_value=0, max_value=50))
    @settings(max_examples=200)
    def test_advance_returns_new_input(self, start: Input[object], count: int) -> None:
        original = start.pos
        moved = start.advance(count)
        assert start.pos == original
        assert moved.pos == min(original + count, len(start.source))
