#!/usr/bin/env python3
# FUZZ_PLUGIN_HEADER_START
# FUZZ_PLUGIN: stream - Chunked Streaming Agreement
# Plugin header: names the target for runners that discover fuzzers by scanning files.
# FUZZ_PLUGIN_HEADER_END
"""Chunked Streaming Agreement Fuzzer (Atheris).

Targets: chompkit.buffer.source (Source.parse), chompkit.combinators

Each iteration builds a payload, parses it once as complete input, then
feeds it to a Source split at fuzzer-chosen offsets. Both runs must reach
the same decision: the same value and consumed count, or a grammar error
at the same offset. Any disagreement, and any exception outside the
chompkit error hierarchy, is a finding.

Requires Python 3.13+ (uses PEP 695 type aliases).
"""

from __future__ import annotations

import argparse
import atexit
import gc
import json
import logging
import os
import pathlib
import sys
import time
from dataclasses import asdict, dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Sequence

# --- Dependency Checks ---
_psutil_mod: Any = None
_atheris_mod: Any = None

try:  # noqa: SIM105 - need module ref for the dependency check
    import psutil as _psutil_mod  # type: ignore[no-redef]
except ImportError:
    pass

try:  # noqa: SIM105 - need module ref for the dependency check
    import atheris as _atheris_mod  # type: ignore[no-redef]
except ImportError:
    pass

_missing = [
    name
    for name, mod in (("psutil", _psutil_mod), ("atheris", _atheris_mod))
    if mod is None
]
if _missing:
    print("-" * 80, file=sys.stderr)
    print("ERROR: Missing required dependencies for fuzzing:", file=sys.stderr)
    for _dep in _missing:
        print(f"  - {_dep}", file=sys.stderr)
    print("", file=sys.stderr)
    print('Install with: pip install -e ".[fuzz]"', file=sys.stderr)
    print("-" * 80, file=sys.stderr)
    sys.exit(1)

import atheris  # noqa: E402  # pylint: disable=C0412,C0413
import psutil  # noqa: E402  # pylint: disable=C0412,C0413

# --- Constants ---

GC_INTERVAL = 256
"""Periodic gc.collect() interval to reclaim Atheris instrumentation cycles."""

MAX_CHUNKS = 32

# Pattern definitions with weights (name, weight)
_PATTERN_WEIGHTS: Sequence[tuple[str, int]] = (
    ("number_list", 10),
    ("header_block", 10),
    ("keywords", 5),
    ("raw_bytes", 10),
)

_PATTERN_SCHEDULE: tuple[str, ...] = tuple(
    name for name, weight in _PATTERN_WEIGHTS for _ in range(weight)
)


# --- State ---


@dataclass
class StreamFuzzerState:
    """Observability state for the stream fuzzer."""

    iterations: int = 0
    findings: int = 0
    status: str = "incomplete"
    successes: int = 0
    grammar_errors: int = 0
    chunks_fed: int = 0
    initial_memory_mb: float = 0.0
    peak_memory_mb: float = 0.0
    checkpoint_interval: int = 500
    pattern_coverage: dict[str, int] = field(default_factory=dict)
    error_counts: dict[str, int] = field(default_factory=dict)


class StreamFuzzError(Exception):
    """Raised when streamed and one-shot parsing disagree."""


_state = StreamFuzzerState()
_process = psutil.Process(os.getpid())

_REPORT_DIR = pathlib.Path(".fuzz_atheris_corpus") / "stream"
_REPORT_FILENAME = "fuzz_stream_report.json"


def _rss_mb() -> float:
    return _process.memory_info().rss / (1024 * 1024)


def _emit_report() -> None:
    """Write the JSON report; registered with atexit so crashes still report."""
    if _state.status == "running":
        _state.status = "finding" if _state.findings else "complete"
    _REPORT_DIR.mkdir(parents=True, exist_ok=True)
    report = json.dumps(asdict(_state), indent=2, sort_keys=True)
    (_REPORT_DIR / _REPORT_FILENAME).write_text(report, encoding="utf-8")
    print(f"[stream] {report}", file=sys.stderr)


atexit.register(_emit_report)

# --- Suppress logging and instrument imports ---
logging.getLogger("chompkit").setLevel(logging.CRITICAL)

with atheris.instrument_imports(include=["chompkit"]):
    from chompkit import ChompError, Source, run_parser
    from chompkit.combinators import many, sep_by, seq, terminated
    from chompkit.diagnostics import StreamParseError
    from chompkit.parsers import (
        decimal,
        end_of_line,
        is_end_of_line,
        string,
        take_till,
        take_while1,
        token,
    )
    from chompkit.parsers.ascii import is_alphanumeric, skip_whitespace


# --- Grammars ---

_number_list = terminated(sep_by(decimal, token(ord(","))), token(ord(";")))
_header = seq(
    take_while1(is_alphanumeric, "name"),
    token(ord(":")),
    skip_whitespace,
    terminated(take_till(is_end_of_line, "end of line"), end_of_line),
)
_header_block = terminated(many(_header), end_of_line)
_keywords = many(string(b"chomp"))

_GRAMMARS: dict[str, Any] = {
    "number_list": _number_list,
    "header_block": _header_block,
    "keywords": _keywords,
    "raw_bytes": _header_block,
}


# --- Input Generation ---


def _generate_payload(fdp: atheris.FuzzedDataProvider, pattern_name: str) -> bytes:
    """Build a payload that is mostly well-formed for its grammar."""
    match pattern_name:
        case "number_list":
            numbers = [
                str(fdp.ConsumeIntInRange(0, 10**12)).encode()
                for _ in range(fdp.ConsumeIntInRange(0, 20))
            ]
            tail = b";" if fdp.ConsumeBool() else fdp.ConsumeBytes(2)
            return b",".join(numbers) + tail
        case "header_block":
            lines = []
            for _ in range(fdp.ConsumeIntInRange(0, 8)):
                name = fdp.ConsumeBytes(fdp.ConsumeIntInRange(1, 12))
                value = fdp.ConsumeBytes(fdp.ConsumeIntInRange(0, 40))
                lines.append(name + b": " + value + b"\r\n")
            return b"".join(lines) + b"\r\n"
        case "keywords":
            return b"chomp" * fdp.ConsumeIntInRange(0, 20) + fdp.ConsumeBytes(5)
        case _:
            return fdp.ConsumeBytes(fdp.ConsumeIntInRange(0, 256))


def _split(fdp: atheris.FuzzedDataProvider, payload: bytes) -> list[bytes]:
    if len(payload) < 2:
        return [payload]
    count = fdp.ConsumeIntInRange(0, MAX_CHUNKS)
    cuts = sorted({fdp.ConsumeIntInRange(1, len(payload) - 1) for _ in range(count)})
    bounds = [0, *cuts, len(payload)]
    return [payload[start:end] for start, end in zip(bounds, bounds[1:], strict=False)]


# --- Target ---


def _check_agreement(parser: Any, payload: bytes, chunks: list[bytes]) -> None:
    expected = run_parser(parser, payload)
    source = Source.from_iterable(chunks)
    _state.chunks_fed += len(chunks)

    if expected.is_success:
        value = source.parse(parser)
        if value != expected.value or source.consumed != expected.input.pos:
            msg = (
                f"streamed {value!r}@{source.consumed} "
                f"!= one-shot {expected.value!r}@{expected.input.pos}"
            )
            raise StreamFuzzError(msg)
        _state.successes += 1
        return

    try:
        value = source.parse(parser)
    except StreamParseError as e:
        if e.error != expected.error or source.consumed != expected.input.pos:
            msg = f"streamed error {e.error} != one-shot error {expected.error}"
            raise StreamFuzzError(msg) from e
        _state.grammar_errors += 1
        return
    msg = f"streamed value {value!r} where one-shot failed with {expected.error}"
    raise StreamFuzzError(msg)


def test_one_input(data: bytes) -> None:
    """Atheris entry point: one payload, one split, one agreement check."""
    if _state.iterations == 0:
        _state.initial_memory_mb = _rss_mb()

    _state.iterations += 1
    _state.status = "running"

    if _state.iterations % _state.checkpoint_interval == 0:
        print(
            f"[stream] iter={_state.iterations} ok={_state.successes} "
            f"errors={_state.grammar_errors} findings={_state.findings}",
            file=sys.stderr,
        )

    fdp = atheris.FuzzedDataProvider(data)

    # Round-robin pattern selection (immune to coverage-guided bias)
    pattern_name = _PATTERN_SCHEDULE[(_state.iterations - 1) % len(_PATTERN_SCHEDULE)]
    _state.pattern_coverage[pattern_name] = _state.pattern_coverage.get(pattern_name, 0) + 1

    payload = _generate_payload(fdp, pattern_name)
    if not payload:
        return
    chunks = _split(fdp, payload)

    start_time = time.perf_counter()
    try:
        _check_agreement(_GRAMMARS[pattern_name], payload, chunks)
    except ChompError as e:
        error_key = type(e).__name__
        _state.error_counts[error_key] = _state.error_counts.get(error_key, 0) + 1
    except Exception:
        # Disagreements and unexpected exceptions are findings
        _state.findings += 1
        raise
    finally:
        if (time.perf_counter() - start_time) > 1.0:
            _state.error_counts["slow_input"] = _state.error_counts.get("slow_input", 0) + 1

        if _state.iterations % GC_INTERVAL == 0:
            gc.collect()

        if _state.iterations % 100 == 0:
            _state.peak_memory_mb = max(_state.peak_memory_mb, _rss_mb())


def main() -> None:
    """Run the stream fuzzer with CLI support."""
    parser = argparse.ArgumentParser(
        description="Chunked streaming agreement fuzzer using Atheris/libFuzzer",
        epilog="All unrecognized arguments are passed to libFuzzer.",
    )
    parser.add_argument(
        "--checkpoint-interval",
        type=int,
        default=500,
        help="Emit progress every N iterations (default: 500)",
    )

    # Parse known args, pass rest to Atheris/libFuzzer
    args, remaining = parser.parse_known_args()
    _state.checkpoint_interval = args.checkpoint_interval

    # Inject -rss_limit_mb default if not already specified
    if not any(arg.startswith("-rss_limit_mb") for arg in remaining):
        remaining.append("-rss_limit_mb=4096")

    sys.argv = [sys.argv[0], *remaining]

    print("=" * 80, file=sys.stderr)
    print("Chunked Streaming Agreement Fuzzer (Atheris)", file=sys.stderr)
    print("Target:     chompkit.buffer.source (Source.parse)", file=sys.stderr)
    print(
        f"Patterns:   {len(_PATTERN_WEIGHTS)} ({len(_PATTERN_SCHEDULE)} weighted slots)",
        file=sys.stderr,
    )
    print("=" * 80, file=sys.stderr)

    atheris.Setup(sys.argv, test_one_input)
    atheris.Fuzz()


if __name__ == "__main__":
    main()
