"""Pytest configuration for the chompkit test suite.

Hypothesis profiles (the only place max_examples is set globally):
- dev: local runs, 500 examples
- ci: CI runs, 50 derandomized examples
- verbose: 100 examples with progress output

Selection: HYPOTHESIS_PROFILE env var, else "ci" when CI=true, else "dev".
Example: HYPOTHESIS_PROFILE=verbose pytest tests/

Tests marked @pytest.mark.fuzz (tests/fuzz/) are skipped in regular runs.
Run them with: pytest -m fuzz
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

_PHASES = [Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink]
_PROFILES = ("dev", "ci", "verbose")

settings.register_profile("dev", max_examples=500, phases=_PHASES, derandomize=False)
settings.register_profile(
    "ci", max_examples=50, phases=_PHASES, derandomize=True, print_blob=True
)
settings.register_profile(
    "verbose",
    max_examples=100,
    phases=_PHASES,
    derandomize=False,
    verbosity=Verbosity.verbose,
)


def _detect_profile() -> str:
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in _PROFILES:
        return explicit
    if os.environ.get("CI") == "true":
        return "ci"
    return "dev"


settings.load_profile(_detect_profile())


def pytest_configure(config: pytest.Config) -> None:
    """Register the 'fuzz' marker for intensive property tests."""
    config.addinivalue_line(
        "markers",
        "fuzz: Intensive property tests for fuzzing (excluded from normal test runs)",
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Skip fuzz-marked tests unless they were asked for.

    They run when the marker expression mentions fuzz (pytest -m fuzz) or
    when a fuzz path is passed explicitly (pytest tests/fuzz/).
    """
    if "fuzz" in str(config.getoption("-m", default="")):
        return
    if any("fuzz" in str(arg) for arg in config.invocation_params.args):
        return

    skip_fuzz = pytest.mark.skip(reason="Fuzzing test - run with: pytest -m fuzz")
    for item in items:
        if "fuzz" in item.keywords:
            item.add_marker(skip_fuzz)
