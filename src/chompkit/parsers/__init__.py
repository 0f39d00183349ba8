"""Token-level parsers built on the Input contract."""

from chompkit.parsers.ascii import (
    decimal,
    digit,
    end_of_line,
    is_alpha,
    is_alphanumeric,
    is_digit,
    is_end_of_line,
    is_horizontal_space,
    is_lowercase,
    is_uppercase,
    is_whitespace,
    signed,
    skip_whitespace,
)
from chompkit.parsers.primitives import (
    any_token,
    eof,
    not_token,
    peek,
    peek_next,
    run_scanner,
    satisfy,
    satisfy_with,
    scan,
    skip_while,
    string,
    take,
    take_remainder,
    take_till,
    take_while,
    take_while1,
    token,
)

__all__ = [
    # Primitives
    "any_token",
    "eof",
    "not_token",
    "peek",
    "peek_next",
    "run_scanner",
    "satisfy",
    "satisfy_with",
    "scan",
    "skip_while",
    "string",
    "take",
    "take_remainder",
    "take_till",
    "take_while",
    "take_while1",
    "token",
    # ASCII
    "decimal",
    "digit",
    "end_of_line",
    "is_alpha",
    "is_alphanumeric",
    "is_digit",
    "is_end_of_line",
    "is_horizontal_space",
    "is_lowercase",
    "is_uppercase",
    "is_whitespace",
    "signed",
    "skip_whitespace",
]
