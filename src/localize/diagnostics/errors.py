"""Localize exception hierarchy with structured diagnostics.

All exceptions optionally store a Diagnostic for rich error information.

Hierarchy:
    LocalizeError (base)
    ├─ MissingBundleError   (policy-gated: ignore_missing_bundles)
    ├─ ValueNotFoundError   (policy-gated: throw_when_not_found)
    ├─ MessageFormatError   (processing error raised by the bundled formatter)
    └─ ArgumentModeError    (always fatal: positional/named mixing)

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from .codes import Diagnostic

__all__ = [
    "ArgumentModeError",
    "LocalizeError",
    "MessageFormatError",
    "MissingBundleError",
    "ValueNotFoundError",
]


class LocalizeError(Exception):
    """Base exception for all localize errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize LocalizeError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class MissingBundleError(LocalizeError, LookupError):
    """A bundle provider could not produce a bundle for a locale.

    Providers raise this to signal "bundle not found". Whether it reaches
    the caller of register()/refresh()/set_locale() is decided by
    ``LocalizeConfig.ignore_missing_bundles``.

    Attributes:
        provider_key: Registry key of the failing provider, filled in by the
            engine when the provider did not set it
        locale: Locale code that was requested
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        provider_key: str | None = None,
        locale: str | None = None,
    ) -> None:
        super().__init__(message)
        self.provider_key = provider_key
        self.locale = locale


class ValueNotFoundError(LocalizeError, LookupError):
    """No registered bundle produced a value for a key.

    Raised only when ``LocalizeConfig.throw_when_not_found`` is enabled;
    otherwise the configured default missing value is returned.

    Attributes:
        key: The requested message key
        bundles: Snapshot of the bundles that were searched
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        key: str,
        bundles: Sequence[Any] = (),
    ) -> None:
        super().__init__(message)
        self.key = key
        self.bundles = tuple(bundles)


class MessageFormatError(LocalizeError, ValueError):
    """A message template could not be formatted.

    Raised by the bundled message formatter for malformed templates. To the
    resolution engine this is an ordinary processing error, gated by
    ``LocalizeConfig.ignore_processing_errors``.

    Attributes:
        template: The template that failed
        position: Zero-based offset of the failure within the template
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        template: str = "",
        position: int = -1,
    ) -> None:
        super().__init__(message)
        self.template = template
        self.position = position


class ArgumentModeError(LocalizeError, RuntimeError):
    """Positional and named arguments were mixed on one builder.

    Always fatal: this is a programming error at the call site, never a
    runtime condition.

    Attributes:
        key: Message key of the offending builder
    """

    def __init__(self, message: str | Diagnostic, *, key: str = "") -> None:
        super().__init__(message)
        self.key = key
