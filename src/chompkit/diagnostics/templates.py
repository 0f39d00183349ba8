"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This keeps messages testable and documents every error case in one place.
    """

    @staticmethod
    def unexpected_token(
        found: str, expected: str | None, span: SourceSpan | None = None
    ) -> Diagnostic:
        """Input token did not match the grammar.

        Args:
            found: Repr of the offending token
            expected: Description of what was expected (optional)
            span: Location of the token (optional)

        Returns:
            Diagnostic for UNEXPECTED_TOKEN
        """
        position = f" at position {span.start}" if span is not None else ""
        msg = f"Unexpected {found}{position}"
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_TOKEN,
            message=msg,
            span=span,
            expected=expected,
            found=found,
        )

    @staticmethod
    def unexpected_eof(expected: str | None, span: SourceSpan | None = None) -> Diagnostic:
        """Input ended while the grammar demanded more.

        Args:
            expected: Description of what was expected (optional)
            span: Location of the end of input (optional)

        Returns:
            Diagnostic for UNEXPECTED_EOF
        """
        position = f" at position {span.start}" if span is not None else ""
        msg = f"Unexpected end of input{position}"
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_EOF,
            message=msg,
            span=span,
            expected=expected,
            hint="The input is truncated or the grammar expects more tokens",
        )

    @staticmethod
    def parse_failed(error: object, remaining: int) -> Diagnostic:
        """One-shot parse ended with a grammar error.

        Args:
            error: The grammar error value produced by the parser
            remaining: Number of unconsumed tokens

        Returns:
            Diagnostic for PARSE_FAILED
        """
        msg = f"Parse failed with {remaining} token(s) unconsumed: {error}"
        return Diagnostic(code=DiagnosticCode.PARSE_FAILED, message=msg)

    @staticmethod
    def incomplete_at_end(needed: int | None) -> Diagnostic:
        """Parser asked for more data although the input was complete.

        Args:
            needed: Size hint reported by the parser (optional)

        Returns:
            Diagnostic for INCOMPLETE_AT_END
        """
        amount = f"{needed} more token(s)" if needed is not None else "more input"
        msg = f"Parser requested {amount} after the end of complete input"
        return Diagnostic(
            code=DiagnosticCode.INCOMPLETE_AT_END,
            message=msg,
            hint="Parsers should use Input.ran_out() so complete input yields a failure",
        )

    @staticmethod
    def end_of_input() -> Diagnostic:
        """Stream has no more data for the parser.

        Returns:
            Diagnostic for END_OF_INPUT
        """
        return Diagnostic(code=DiagnosticCode.END_OF_INPUT, message="Stream is exhausted")

    @staticmethod
    def incomplete_input(needed: int | None) -> Diagnostic:
        """Parser needs more data than is buffered; caller should refill.

        Args:
            needed: Size hint reported by the parser (optional)

        Returns:
            Diagnostic for INCOMPLETE_INPUT
        """
        amount = f"{needed} more token(s)" if needed is not None else "more input"
        msg = f"Incomplete input: parser needs {amount}"
        return Diagnostic(
            code=DiagnosticCode.INCOMPLETE_INPUT,
            message=msg,
            hint="Feed more data into the source and call parse() again",
        )

    @staticmethod
    def retry() -> Diagnostic:
        """Data source had no data available right now.

        Returns:
            Diagnostic for RETRY
        """
        return Diagnostic(
            code=DiagnosticCode.RETRY,
            message="Data source has no data available yet",
            hint="The reader is non-blocking; call parse() again once it is readable",
        )

    @staticmethod
    def stream_parse_failed(error: object, consumed: int) -> Diagnostic:
        """Grammar error while parsing from a stream.

        Args:
            error: The grammar error value produced by the parser
            consumed: Stream offset after committing the consumed prefix

        Returns:
            Diagnostic for STREAM_PARSE_FAILED
        """
        msg = f"Parse error at stream offset {consumed}: {error}"
        return Diagnostic(code=DiagnosticCode.STREAM_PARSE_FAILED, message=msg)

    @staticmethod
    def buffer_limit_exceeded(size: int, limit: int) -> Diagnostic:
        """Buffered unconsumed data exceeds the configured ceiling.

        Args:
            size: Buffered size that would result
            limit: Configured maximum

        Returns:
            Diagnostic for BUFFER_LIMIT_EXCEEDED
        """
        msg = f"Buffered data ({size} bytes) exceeds limit of {limit} bytes"
        return Diagnostic(
            code=DiagnosticCode.BUFFER_LIMIT_EXCEEDED,
            message=msg,
            hint="Raise max_buffer_size or make the grammar commit smaller units",
        )

    @staticmethod
    def mark_mismatch(mark_pos: int) -> Diagnostic:
        """Mark restored onto an Input over a different source.

        Args:
            mark_pos: Offset stored in the mark

        Returns:
            Diagnostic for MARK_MISMATCH
        """
        msg = f"Mark at position {mark_pos} belongs to a different source"
        return Diagnostic(
            code=DiagnosticCode.MARK_MISMATCH,
            message=msg,
            hint="Only restore marks taken from the same Input lineage",
        )

    @staticmethod
    def invalid_parser_result(type_name: str) -> Diagnostic:
        """Parser returned something other than a parse outcome.

        Args:
            type_name: Type name of the returned object

        Returns:
            Diagnostic for INVALID_PARSER_RESULT
        """
        msg = f"Parser returned {type_name}, expected Success, Failure, Incomplete or None"
        return Diagnostic(code=DiagnosticCode.INVALID_PARSER_RESULT, message=msg)

    @staticmethod
    def invalid_argument(name: str, value: object, requirement: str) -> Diagnostic:
        """Combinator constructed with an invalid argument.

        Args:
            name: Argument name
            value: Rejected value
            requirement: What the argument must satisfy

        Returns:
            Diagnostic for INVALID_ARGUMENT
        """
        msg = f"Invalid {name}={value!r}: {requirement}"
        return Diagnostic(code=DiagnosticCode.INVALID_ARGUMENT, message=msg)

    @staticmethod
    def feed_after_eof(size: int) -> Diagnostic:
        """Data fed into a source that was already closed.

        Args:
            size: Length of the rejected chunk

        Returns:
            Diagnostic for FEED_AFTER_EOF
        """
        msg = f"Cannot feed {size} byte(s): source already reached end of input"
        return Diagnostic(code=DiagnosticCode.FEED_AFTER_EOF, message=msg)

    @staticmethod
    def no_data_source() -> Diagnostic:
        """fill() called on a source that is fed manually.

        Returns:
            Diagnostic for NO_DATA_SOURCE
        """
        return Diagnostic(
            code=DiagnosticCode.NO_DATA_SOURCE,
            message="Source has no data source to fill from",
            hint="Use Source.from_reader() or Source.from_iterable(), or call feed()",
        )
