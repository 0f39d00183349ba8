"""Fuzz testing infrastructure for chompkit.

This package contains:
- test_stream_chunking_property: one-shot vs streamed parsing agreement
  over arbitrary data and arbitrary chunk splits

Python 3.13+.
"""
