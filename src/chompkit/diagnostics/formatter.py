"""Rendering of diagnostics for terminals, logs and tools.

Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import StrEnum

from .codes import Diagnostic

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]

# Parsed input ends up in messages; escape control characters so it cannot forge log lines.
_CONTROL_ESCAPES: dict[int, str] = {
    code: f"\\x{code:02x}" for code in (*range(0x20), 0x7F)
}
_CONTROL_ESCAPES.update({ord("\n"): "\\n", ord("\r"): "\\r", ord("\t"): "\\t"})

_ANSI_SEVERITY = {"error": "\033[1;31m", "warning": "\033[1;33m"}
_ANSI_RESET = "\033[0m"


class OutputFormat(StrEnum):
    """Output format options for diagnostic formatting."""

    RUST = "rust"  # Multi-line, compiler style (default)
    SIMPLE = "simple"  # CODE: message
    JSON = "json"  # One JSON object per diagnostic


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Render Diagnostic objects as text or JSON.

    Attributes:
        output_format: Output style (rust, simple, json)
        sanitize: Truncate long text (messages may embed parsed input)
        color: Colorize the severity with ANSI codes
        max_content_length: Truncation length when sanitizing

    Example:
        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        >>> print(formatter.format(ErrorTemplate.end_of_input()))
        END_OF_INPUT: Stream is exhausted
    """

    output_format: OutputFormat = OutputFormat.RUST
    sanitize: bool = False
    color: bool = False
    max_content_length: int = 100

    def format(self, diagnostic: Diagnostic) -> str:
        """Render one diagnostic in the configured output format."""
        match self.output_format:
            case OutputFormat.RUST:
                return self._format_rust(diagnostic)
            case OutputFormat.SIMPLE:
                return f"{diagnostic.code.name}: {self._text(diagnostic.message)}"
            case OutputFormat.JSON:
                return self._format_json(diagnostic)

    def format_all(self, diagnostics: Iterable[Diagnostic]) -> str:
        """Render several diagnostics; text formats are separated by blank lines."""
        separator = "\n" if self.output_format is OutputFormat.JSON else "\n\n"
        return separator.join(self.format(d) for d in diagnostics)

    def _format_rust(self, diagnostic: Diagnostic) -> str:
        severity = diagnostic.severity
        if self.color:
            severity = f"{_ANSI_SEVERITY[severity]}{severity}{_ANSI_RESET}"

        lines = [f"{severity}[{diagnostic.code.name}]: {self._text(diagnostic.message)}"]
        if diagnostic.span is not None:
            span = diagnostic.span
            lines.append(f"  --> line {span.line}, column {span.column} (offset {span.start})")
        lines.extend(
            f"  = {label}: {self._text(value)}" for label, value in _annotations(diagnostic)
        )
        return "\n".join(lines)

    def _format_json(self, diagnostic: Diagnostic) -> str:
        data: dict[str, str | int] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "severity": diagnostic.severity,
            "message": self._truncate(diagnostic.message),
        }
        if diagnostic.span is not None:
            span = diagnostic.span
            data |= {"line": span.line, "column": span.column, "start": span.start, "end": span.end}
        for label, value in _annotations(diagnostic):
            data[label] = self._truncate(value)
        return json.dumps(data, ensure_ascii=False)

    def _text(self, text: str) -> str:
        return self._truncate(text).translate(_CONTROL_ESCAPES)

    def _truncate(self, text: str) -> str:
        if self.sanitize and len(text) > self.max_content_length:
            return text[: self.max_content_length] + "..."
        return text


def _annotations(diagnostic: Diagnostic) -> Iterator[tuple[str, str]]:
    """Optional labelled fields, in display order."""
    if diagnostic.expected:
        yield "expected", diagnostic.expected
    if diagnostic.found:
        yield "found", diagnostic.found
    if diagnostic.hint:
        yield "help", diagnostic.hint
