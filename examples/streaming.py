"""Streaming Example - Parsing Data That Arrives in Pieces.

Demonstrates the streaming drivers:

1. Feeding a Source by hand and retrying on IncompleteInputError
2. Pulling chunks from a file-like object with autofill
3. Iterating over records with iterparse()
4. SliceStream over an in-memory sequence
5. Debug logging of buffer activity

Python 3.13+.
"""

from __future__ import annotations

import io
import logging


def example_1_manual_feeding() -> None:
    """Feed chunks by hand; Incomplete commits nothing."""
    from chompkit import Source
    from chompkit.diagnostics import IncompleteInputError
    from chompkit.parsers import decimal

    print("=" * 60)
    print("Example 1: Manual Feeding")
    print("=" * 60)

    source = Source()
    for chunk in (b"1", b"23", b"4;"):
        source.feed(chunk)
        try:
            value = source.parse(decimal)
        except IncompleteInputError:
            print(f"  after {chunk!r}: need more (consumed={source.consumed})")
            continue
        print(f"  after {chunk!r}: {value} (consumed={source.consumed})")

    print()


def example_2_file_reader() -> None:
    """Read 4-byte chunks from a binary file object."""
    from chompkit import Source
    from chompkit.combinators import sep_by, terminated
    from chompkit.parsers import decimal, token

    print("=" * 60)
    print("Example 2: Reading From a File Object")
    print("=" * 60)

    reader = io.BytesIO(b"10,20,30,40,50;")
    source = Source.from_reader(reader, chunk_size=4)
    values = source.parse(terminated(sep_by(decimal, token(ord(","))), token(ord(";"))))

    print(f"  values={values} consumed={source.consumed}")
    print()


def example_3_iterparse() -> None:
    """Parse line-oriented records until the source is exhausted."""
    from chompkit import Source
    from chompkit.combinators import seq, terminated
    from chompkit.parsers import decimal, end_of_line, is_alpha, take_while1, token

    print("=" * 60)
    print("Example 3: Records With iterparse()")
    print("=" * 60)

    record = terminated(
        seq(take_while1(is_alpha, "name"), token(ord("=")), decimal),
        end_of_line,
    )
    chunks = [b"wid", b"th=80\r\nhei", b"ght=2", b"4\nde", b"pth=3\n"]

    for name, _, value in Source.from_iterable(chunks).iterparse(record):
        print(f"  {name.decode()} = {value}")

    print()


def example_4_slice_stream() -> None:
    """Consume an in-memory sequence value by value."""
    from chompkit import SliceStream
    from chompkit.combinators import terminated
    from chompkit.parsers import decimal, token

    print("=" * 60)
    print("Example 4: SliceStream")
    print("=" * 60)

    stream = SliceStream(b"7;11;13;")
    primes = list(stream.iterparse(terminated(decimal, token(ord(";")))))

    print(f"  {primes} {stream!r}")
    print()


def example_5_debug_logging() -> None:
    """Show buffer activity through the chompkit loggers."""
    from chompkit import Source
    from chompkit.parsers import decimal

    print("=" * 60)
    print("Example 5: Debug Logging")
    print("=" * 60)

    logger = logging.getLogger("chompkit")
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("  %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        source = Source.from_iterable([b"12", b"34", b";"])
        print(f"  value={source.parse(decimal)}")
    finally:
        logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)

    print()


def main() -> None:
    """Run all streaming examples."""
    print()
    print("chompkit Streaming Examples")
    print()

    example_1_manual_feeding()
    example_2_file_reader()
    example_3_iterparse()
    example_4_slice_stream()
    example_5_debug_logging()

    print("=" * 60)
    print("All examples completed successfully!")
    print("=" * 60)


if __name__ == "__main__":
    main()
