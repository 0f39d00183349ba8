"""Parser execution substrate.

This package provides the foundation every combinator and driver builds on:

    position <- error <- result <- input

Exports:
    Input: Immutable positioned cursor over a token sequence
    Mark: Offset snapshot for backtracking
    Success, Failure, Incomplete: The three parse outcomes
    ParseResult, Parser: Type aliases for outcomes and parser functions
    run: Primitive step execution (invoke once, classify)
    ParseError: Default grammar error type
    ErrorFactory: Protocol for caller-supplied error types

Python 3.13+.
"""

from .error import ErrorFactory, ParseError
from .input import Input, Mark
from .result import Failure, Incomplete, ParseResult, Parser, Success, run

__all__ = [
    "ErrorFactory",
    "Failure",
    "Incomplete",
    "Input",
    "Mark",
    "ParseError",
    "ParseResult",
    "Parser",
    "Success",
    "run",
]
