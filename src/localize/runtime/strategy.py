"""Default formatting strategy.

A formatting strategy turns a bundle and a request into a string, or
returns None to tell the engine "this bundle has no value for the key,
try the next one". Strategies may raise; the engine treats any exception
as a processing error.

Python 3.13+. Depends on Babel (through format_message).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from localize.runtime.messageformat import format_message

if TYPE_CHECKING:
    from localize.localization.request import LocalizationRequest
    from localize.localization.types import Bundle, FormattingStrategy

__all__ = ["DEFAULT_FORMATTING_STRATEGY", "format_request"]


def format_request(bundle: Bundle, request: LocalizationRequest) -> str | None:
    """Look up ``request.key`` in ``bundle`` and format it.

    Templates are only run through the message formatter when the request
    carries arguments, so a template without arguments is returned exactly
    as stored (apostrophes and braces included).

    Args:
        bundle: Bundle to search
        request: Key and arguments

    Returns:
        Formatted value, or None if the bundle does not define the key

    Raises:
        MessageFormatError: If the template is malformed
    """
    if not bundle.has(request.key):
        return None
    template = bundle.get(request.key)
    if not request.has_arguments:
        return template
    return format_message(template, request.arguments, getattr(bundle, "locale", None))


DEFAULT_FORMATTING_STRATEGY: Final[FormattingStrategy] = format_request
