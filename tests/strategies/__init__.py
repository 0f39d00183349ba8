"""Hypothesis strategies for chompkit property-based testing.

Strategies are organized by domain:

- inputs: token sources of every supported type, Inputs, number lists
- streams: chunk splits and generated HTTP requests

Usage:
    from tests.strategies import inputs, chunked
    from tests.strategies.streams import http_requests
"""

from .inputs import ASCII_TEXT, byte_sources, inputs, letters, number_lists, token_sources
from .streams import chunked, http_requests

__all__ = [
    "ASCII_TEXT",
    "byte_sources",
    "chunked",
    "http_requests",
    "inputs",
    "letters",
    "number_lists",
    "token_sources",
]
