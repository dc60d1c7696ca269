"""Shared pytest setup for braceformat.

Hypothesis runs under one of three registered profiles:

    dev      500 examples, the default on a workstation
    ci       50 derandomized examples, chosen when CI=true
    verbose  100 examples with per-example output

HYPOTHESIS_PROFILE picks a profile explicitly, e.g.
``HYPOTHESIS_PROFILE=verbose pytest tests/test_properties.py``.

The differential and junk-input runs under ``tests/fuzz/`` carry the
``fuzz`` marker and are skipped unless selected with ``-m fuzz`` or by
naming that directory on the command line.
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

_PHASES = [Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink]
_PROFILES = ("dev", "ci", "verbose")

settings.register_profile("dev", max_examples=500, phases=_PHASES)
settings.register_profile(
    "ci", max_examples=50, phases=_PHASES, derandomize=True, print_blob=True
)
settings.register_profile(
    "verbose", max_examples=100, phases=_PHASES, verbosity=Verbosity.verbose
)


def _select_profile() -> str:
    requested = os.environ.get("HYPOTHESIS_PROFILE")
    if requested in _PROFILES:
        return requested
    return "ci" if os.environ.get("CI") == "true" else "dev"


settings.load_profile(_select_profile())


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "fuzz: long-running differential and junk-input runs, skipped by default",
    )


def _fuzz_requested(config: pytest.Config) -> bool:
    if "fuzz" in str(config.getoption("-m", default="")):
        return True
    return any(
        "fuzz" in str(arg).replace("\\", "/").split("/")
        for arg in config.invocation_params.args
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip fuzz-marked items unless the run asked for them."""
    if _fuzz_requested(config):
        return
    skip_fuzz = pytest.mark.skip(reason="fuzz run - select with: pytest -m fuzz")
    for item in items:
        if item.get_closest_marker("fuzz") is not None:
            item.add_marker(skip_fuzz)
