"""chompkit - Parser combinators with incremental (streaming) input.

Parsers are plain functions from an immutable Input to exactly one of
three outcomes: Success, Failure or Incomplete. Combinators compose them;
streaming drivers feed chunked data and retry on Incomplete.

Public API:
    Input, Mark - Positioned view over tokens with O(1) backtracking
    Success, Failure, Incomplete - Parse outcomes
    run - Invoke a parser once and classify its outcome
    parse_only, run_parser - One-shot parsing of complete data
    SliceStream, Source - Streaming drivers

Exceptions:
    ChompError - Base exception class
    ParseFailedError - One-shot parse failed
    StreamError - Stream ended, needs data or hit a grammar error

Submodules:
    chompkit.combinators - many, sep_by, many_till, option, or_, ...
    chompkit.parsers - token, string, take_while, decimal, ...
    chompkit.buffer - Streams and data sources
    chompkit.diagnostics - Error codes, diagnostics and formatting
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

from .buffer import SliceStream, Source
from .core import (
    ErrorFactory,
    Failure,
    Incomplete,
    Input,
    Mark,
    ParseError,
    ParseResult,
    Parser,
    Success,
    run,
)
from .diagnostics import ChompError, ParseFailedError, StreamError
from .parse import parse_only, run_parser

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    __version__ = _get_version("chompkit")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "ChompError",
    "ErrorFactory",
    "Failure",
    "Incomplete",
    "Input",
    "Mark",
    "ParseError",
    "ParseFailedError",
    "ParseResult",
    "Parser",
    "SliceStream",
    "Source",
    "StreamError",
    "Success",
    "__version__",
    "parse_only",
    "run",
    "run_parser",
]
