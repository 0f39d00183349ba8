"""Tests for ParseError, describe_token and position utilities."""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from chompkit import ParseError
from chompkit.core.error import describe_token
from chompkit.core.position import (
    column_offset,
    format_position,
    get_error_context,
    line_offset,
)
from chompkit.diagnostics import DiagnosticCode
from tests.strategies import ASCII_TEXT


class TestDescribeToken:
    """Token rendering in messages."""

    @pytest.mark.parametrize(
        ("token", "expected"),
        [
            (120, "b'x'"),
            (0, "b'\\x00'"),
            ("x", "'x'"),
            (None, "end of input"),
            (1000, "1000"),
            (("kw", "if"), "('kw', 'if')"),
        ],
    )
    def test_rendering(self, token: object, expected: str) -> None:
        assert describe_token(token) == expected

    def test_long_reprs_are_truncated(self) -> None:
        text = describe_token("x" * 500)
        assert text.endswith("...")
        assert len(text) < 50


class TestParseError:
    """Default grammar error type."""

    def test_str(self) -> None:
        assert str(ParseError(2, "'}'", "x")) == "Unexpected 'x' at position 2 (expected '}')"

    def test_str_without_expectation(self) -> None:
        assert str(ParseError(0, None, 97)) == "Unexpected b'a' at position 0"

    def test_eof(self) -> None:
        error = ParseError(5, "digit")
        assert error.is_eof
        assert error.message == "Unexpected end of input"

    def test_unexpected_factory(self) -> None:
        assert ParseError.unexpected(1, "a", "b") == ParseError(1, "a", "b")

    def test_format_error_uses_line_and_column(self) -> None:
        formatted = ParseError(3, "'}'", "x").format_error("a\nbx")
        assert formatted == "2:2: Unexpected 'x' (expected '}')"

    def test_format_with_context(self) -> None:
        text = ParseError(7, "digit", "b").format_with_context("line1\nabx\nline3", 1)
        assert text.splitlines() == [
            "2:2: Unexpected 'b' (expected digit)",
            "",
            "line1",
            "abx",
            " ^",
            "line3",
        ]

    def test_to_diagnostic_token(self) -> None:
        diagnostic = ParseError(1, "digit", ord("x")).to_diagnostic(b"1x")
        assert diagnostic.code == DiagnosticCode.UNEXPECTED_TOKEN
        assert diagnostic.found == "b'x'"
        assert diagnostic.expected == "digit"
        assert diagnostic.span is not None
        assert (diagnostic.span.start, diagnostic.span.end) == (1, 2)
        assert (diagnostic.span.line, diagnostic.span.column) == (1, 2)

    def test_to_diagnostic_eof_without_source(self) -> None:
        diagnostic = ParseError(4, "digit").to_diagnostic()
        assert diagnostic.code == DiagnosticCode.UNEXPECTED_EOF
        assert diagnostic.span is None


class TestPosition:
    """Offset to line/column conversion."""

    def test_line_and_column_in_text(self) -> None:
        source = "line1\nline2\nline3"
        assert line_offset(source, 6) == 1
        assert column_offset(source, 8) == 2

    def test_bytes_and_memoryview_agree(self) -> None:
        data = b"ab\r\ncd\nef"
        for source in (data, bytearray(data), memoryview(data)):
            assert line_offset(source, 8) == 2
            assert column_offset(source, 8) == 1

    def test_token_lists_are_one_line(self) -> None:
        tokens = [1, 2, 3, 4]
        assert line_offset(tokens, 3) == 0
        assert column_offset(tokens, 3) == 3

    def test_negative_position_raises(self) -> None:
        with pytest.raises(ValueError, match=">= 0"):
            line_offset("abc", -1)

    def test_position_beyond_end_is_clamped(self) -> None:
        assert column_offset("abc", 99) == 3

    def test_format_position(self) -> None:
        assert format_position("hello\nworld", 6) == "1:0"
        assert format_position("hello\nworld", 6, zero_based=False) == "2:1"

    def test_context_for_token_list(self) -> None:
        assert get_error_context([1, 2, 3, 4, 5], 2) == "[1, 2 >>> 3, 4, 5]"

    def test_context_strips_carriage_returns(self) -> None:
        context = get_error_context(b"GET /\r\nHost\r\n", 8, context_lines=0)
        assert context == "Host\n ^"

    @given(source=ASCII_TEXT, data=st.data())
    @settings(max_examples=200)
    def test_line_col_reconstructs_offset(self, source: str, data: st.DataObject) -> None:
        """PROPERTY: line/column map back to the original offset."""
        pos = data.draw(st.integers(min_value=0, max_value=len(source)))
        lines = source.split("\n")
        line = line_offset(source, pos)
        col = column_offset(source, pos)
        assert sum(len(x) + 1 for x in lines[:line]) + col == pos
