"""Generic combinators: repetition, alternation and sequencing."""

from chompkit.combinators.branching import Left, Right, choice, either, look_ahead, option, or_
from chompkit.combinators.repetition import (
    bounded,
    count,
    many,
    many1,
    many_till,
    sep_by,
    sep_by1,
    skip_many,
    skip_many1,
)
from chompkit.combinators.sequencing import (
    delimited,
    fail_with,
    mapped,
    matched_by,
    preceded,
    ret,
    seq,
    terminated,
)

__all__ = [
    # Repetition
    "bounded",
    "count",
    "many",
    "many1",
    "many_till",
    "sep_by",
    "sep_by1",
    "skip_many",
    "skip_many1",
    # Alternation
    "Left",
    "Right",
    "choice",
    "either",
    "look_ahead",
    "option",
    "or_",
    # Sequencing
    "delimited",
    "fail_with",
    "mapped",
    "matched_by",
    "preceded",
    "ret",
    "seq",
    "terminated",
]
