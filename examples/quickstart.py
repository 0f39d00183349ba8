"""Quickstart example for chompkit.

This example demonstrates building parsers from combinators, running them
over complete data, and reading the three parse outcomes.
"""

from chompkit import Input, ParseFailedError, parse_only, run
from chompkit.combinators import delimited, many_till, option, sep_by
from chompkit.parsers import any_token, decimal, signed, skip_whitespace, string, token

# Example 1: One-shot parsing
print("=" * 50)
print("Example 1: One-Shot Parsing")
print("=" * 50)

comma = delimited(skip_whitespace, token(ord(",")), skip_whitespace)
numbers = sep_by(signed(decimal), comma)

print(parse_only(numbers, b"1, -2, +3 ,4"))
# Output: [1, -2, 3, 4]

# Example 2: Outcomes
print("\n" + "=" * 50)
print("Example 2: Success, Failure, Incomplete")
print("=" * 50)

print(run(decimal, Input(b"42;")))
# Success: value 42, next input at position 2
print(run(decimal, Input(b"x")))
# Failure at position 0
print(run(decimal, Input(b"42", partial=True)))
# Incomplete: more digits might follow

# Example 3: Grammar errors
print("\n" + "=" * 50)
print("Example 3: Grammar Errors")
print("=" * 50)

try:
    parse_only(string(b"hello"), b"help!")
except ParseFailedError as e:
    print(e)
    print(f"error.position={e.error.position} remaining={e.remaining!r}")

# Example 4: Optional parts and terminators
print("\n" + "=" * 50)
print("Example 4: Optional Parts and Terminators")
print("=" * 50)

comment = many_till(any_token, string(b"*/"))
print(bytes(parse_only(comment, b"a note */ rest")))
# Output: b'a note '
print(parse_only(option(token(ord("#")), None), b"42"))
# Output: None
