"""Hypothesis strategies for localize property-based testing.

This package provides reusable strategies for generating test data
across multiple test modules.

Usage:
    from tests.strategies import message_keys, provider_catalogs
    from tests.strategies.localization import argument_values, locale_codes

Event-Emitting Strategies (HypoFuzz-Optimized):
    These strategies emit hypothesis.event() calls for coverage-guided fuzzing:
    - message_keys, provider_catalogs, argument_values
"""

from .localization import (
    LOCALE_POOL,
    argument_names,
    argument_values,
    locale_codes,
    message_keys,
    plain_templates,
    positional_batches,
    provider_catalogs,
    provider_keys,
)

__all__ = [
    "LOCALE_POOL",
    "argument_names",
    "argument_values",
    "locale_codes",
    "message_keys",
    "plain_templates",
    "positional_batches",
    "provider_catalogs",
    "provider_keys",
]
