"""Streaming an HTTP request grammar through Source in arbitrary chunks."""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from chompkit import Source, parse_only
from chompkit.combinators import many
from chompkit.diagnostics import IncompleteInputError
from chompkit.parsers import end_of_line
from tests.helpers.http import (
    MINIMAL_REQUEST,
    SINGLE_REQUEST,
    Request,
    request,
    request_line,
)
from tests.strategies import chunked, http_requests


class TestRequestLineStreaming:
    """Incomplete after the first chunk, Success after the second."""

    def test_two_chunks(self) -> None:
        source = Source()
        source.feed(b"GET /")
        with pytest.raises(IncompleteInputError):
            source.parse(request_line)
        assert source.consumed == 0
        assert source.remaining == 5

        source.feed(b" HTTP/1.1\r\n\r\n")
        line = source.parse(request_line)
        assert line == Request(method=b"GET", uri=b"/", version=b"1.1")
        assert source.consumed == len(b"GET / HTTP/1.1")
        assert source.remaining == 4

        source.parse(end_of_line)
        source.parse(end_of_line)
        assert source.consumed == len(b"GET / HTTP/1.1\r\n\r\n")
        assert source.remaining == 0

    def test_one_shot_agrees(self) -> None:
        line = parse_only(request_line, b"GET / HTTP/1.1\r\n\r\n")
        assert line == Request(method=b"GET", uri=b"/", version=b"1.1")


class TestFullRequests:
    """Whole requests, one-shot and streamed."""

    def test_single_request(self) -> None:
        line, headers = parse_only(request, SINGLE_REQUEST)
        assert line.method == b"GET"
        assert [h.name for h in headers] == [
            b"Host",
            b"User-Agent",
            b"Accept",
            b"Accept-Language",
            b"Accept-Encoding",
            b"Connection",
        ]
        assert headers[0].value == [b"www.reddit.com"]

    def test_folded_header_lines(self) -> None:
        data = b"GET / HTTP/1.0\r\nX-Long: part one\r\n  part two\r\n\r\n"
        _, headers = parse_only(request, data)
        assert headers[0].value == [b"part one", b"part two"]

    def test_pipelined_requests_byte_by_byte(self) -> None:
        data = MINIMAL_REQUEST * 3
        source = Source.from_iterable(data[i : i + 1] for i in range(len(data)))
        parsed = list(source.iterparse(request))
        assert len(parsed) == 3
        assert source.consumed == len(data)

    def test_many_requests_one_shot(self) -> None:
        assert len(parse_only(many(request), MINIMAL_REQUEST * 5)) == 5

    @given(sample=http_requests(), data=st.data())
    @settings(max_examples=100)
    def test_chunking_does_not_change_result(
        self,
        sample: tuple[bytes, bytes, list[tuple[bytes, bytes]]],
        data: st.DataObject,
    ) -> None:
        """PROPERTY: any chunk split parses to the one-shot result, consuming every byte once."""
        raw, uri, headers = sample
        expected = parse_only(request, raw)
        assert expected[0].uri == uri
        assert [(h.name, h.value) for h in expected[1]] == [(n, [v]) for n, v in headers]

        chunks = data.draw(chunked(raw))
        source = Source.from_iterable(chunks)
        assert source.parse(request) == expected
        assert source.consumed == len(raw)
