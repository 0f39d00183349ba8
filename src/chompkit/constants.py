"""Shared constants for chompkit.

This module provides centralized configuration defaults used across the
core, combinator and buffer packages. Placing constants here avoids circular
imports and provides a single source of truth.

Constants are grouped by domain:
- Buffer limits: Memory bounds for streaming sources
- Diagnostics: Error rendering defaults

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Buffer limits
    "DEFAULT_CHUNK_SIZE",
    "MAX_BUFFER_SIZE",
    "COMPACT_THRESHOLD",
    # Diagnostics
    "DEFAULT_CONTEXT_LINES",
    "MAX_REPR_LENGTH",
]

# ============================================================================
# BUFFER LIMITS
# ============================================================================

# Number of bytes requested from a reader on every Source.fill().
DEFAULT_CHUNK_SIZE: int = 8 * 1024

# Ceiling on unconsumed bytes held by a Source (10 MiB).
# A grammar that never commits (e.g. many() over an endless stream) would
# otherwise grow the backing store without bound.
MAX_BUFFER_SIZE: int = 10 * 1024 * 1024

# Consumed prefix length after which a Source drops committed bytes
# from its backing store.
COMPACT_THRESHOLD: int = 4 * 1024

# ============================================================================
# DIAGNOSTICS
# ============================================================================

# Lines shown before/after the error line in formatted parse errors.
DEFAULT_CONTEXT_LINES: int = 2

# Maximum length of token reprs embedded in diagnostic messages.
MAX_REPR_LENGTH: int = 40
