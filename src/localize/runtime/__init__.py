"""Formatting runtime for localize.

Provides the default formatting strategy and the message formatter it
delegates to. Both are replaceable collaborators: the engine depends only
on the ``(bundle, request) -> str | None`` strategy contract.

Python 3.13+. Depends on Babel for CLDR plural rules and number formatting.
"""

from .messageformat import format_message
from .plural_rules import select_plural_category
from .strategy import DEFAULT_FORMATTING_STRATEGY, format_request

__all__ = [
    "DEFAULT_FORMATTING_STRATEGY",
    "format_message",
    "format_request",
    "select_plural_category",
]
