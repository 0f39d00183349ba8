"""Diagnostic system for chompkit errors.

Provides structured error diagnostics with codes, spans and hints,
plus the exception hierarchy raised at driver boundaries.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan
from .errors import (
    BufferLimitExceededError,
    ChompError,
    ContractError,
    EndOfInputError,
    IncompleteInputError,
    InvalidArgumentError,
    InvalidParserResultError,
    MarkMismatchError,
    ParseFailedError,
    RetryError,
    StreamError,
    StreamParseError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "BufferLimitExceededError",
    "ChompError",
    "ContractError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "EndOfInputError",
    "ErrorTemplate",
    "IncompleteInputError",
    "InvalidArgumentError",
    "InvalidParserResultError",
    "MarkMismatchError",
    "OutputFormat",
    "ParseFailedError",
    "RetryError",
    "SourceSpan",
    "StreamError",
    "StreamParseError",
]
