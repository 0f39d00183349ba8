"""Performance benchmarks for chompkit.

Benchmarks use pytest-benchmark to track the cost of the parser core,
the combinators and the streaming drivers on an HTTP request grammar.

Python 3.13+.
"""

from __future__ import annotations

__all__: list[str] = []
