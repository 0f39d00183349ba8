"""Streaming drivers: run parsers over in-memory or chunked input."""

from chompkit.buffer.slice import SliceStream
from chompkit.buffer.source import DataSource, IteratorDataSource, ReadDataSource, Source
from chompkit.buffer.stream import Stream, iterparse

__all__ = [
    "DataSource",
    "IteratorDataSource",
    "ReadDataSource",
    "SliceStream",
    "Source",
    "Stream",
    "iterparse",
]
