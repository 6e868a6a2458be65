"""Shared pytest setup for the localize tests.

Hypothesis profiles decide how many examples each property test draws:
- dev (default): 500 examples for catalogs, keys and arguments
- ci: 50 derandomized examples, selected when CI=true
- verbose: 100 examples with every draw printed

HYPOTHESIS_PROFILE names a profile explicitly and wins over CI.

Tests marked ``fuzz`` race many threads against the engine or draw large
catalogs. They are skipped unless the marker expression selects them:

    pytest -m fuzz

Python 3.13+.
"""

import os

import pytest
from hypothesis import HealthCheck, Phase, Verbosity, settings

_PHASES = [Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink]

# Provider refreshes and Babel formatting make some draws slow.
_SLOW_OK = [HealthCheck.too_slow]

settings.register_profile(
    "dev",
    max_examples=500,
    phases=_PHASES,
    suppress_health_check=_SLOW_OK,
)
settings.register_profile(
    "ci",
    max_examples=50,
    phases=_PHASES,
    derandomize=True,
    print_blob=True,
    suppress_health_check=_SLOW_OK,
)
settings.register_profile(
    "verbose",
    max_examples=100,
    phases=_PHASES,
    verbosity=Verbosity.verbose,
)

_PROFILES = frozenset({"dev", "ci", "verbose"})


def _profile_name() -> str:
    """Pick the Hypothesis profile for this run."""
    requested = os.environ.get("HYPOTHESIS_PROFILE")
    if requested in _PROFILES:
        return requested
    return "ci" if os.environ.get("CI") == "true" else "dev"


settings.load_profile(_profile_name())


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "fuzz: thread races and large generated catalogs; run with -m fuzz",
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Skip fuzz tests when the marker expression does not ask for them."""
    if "fuzz" in str(config.getoption("-m", default="")):
        return

    skip = pytest.mark.skip(reason="fuzz test; select it with -m fuzz")
    for item in items:
        if item.get_closest_marker("fuzz") is not None:
            item.add_marker(skip)
