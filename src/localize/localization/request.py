"""Request and configuration value types.

LocalizationRequest is the immutable unit of work passed from a builder
through the resolution engine to the formatting strategy.
LocalizeConfig holds the policy flags the engine reads at resolution time.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from localize.constants import DEFAULT_MISSING_VALUE
from localize.localization.types import MessageKey

__all__ = ["LocalizationRequest", "LocalizeConfig"]


@dataclass(frozen=True, slots=True)
class LocalizationRequest:
    """Immutable key plus argument mapping.

    Positional arguments are keyed by their index in string form ("0",
    "1", ...); named arguments by their name. A request never mixes the two.

    The arguments mapping is copied at construction and exposed read-only,
    so later mutation of the caller's dict cannot leak into a request.

    Attributes:
        key: Key associated with the requested value
        arguments: Read-only argument mapping (empty when no arguments)

    Example:
        >>> request = LocalizationRequest("MyApp.say", {"0": "Hi", "1": "Anna"})
        >>> request.has_arguments
        True
        >>> request.arguments["1"]
        'Anna'
    """

    key: MessageKey
    arguments: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate the key and freeze the argument mapping.

        Raises:
            TypeError: If key or arguments is None, or key is not a string
        """
        if self.key is None:
            msg = "key must not be None"
            raise TypeError(msg)
        if not isinstance(self.key, str):
            msg = f"key must be a string, got {type(self.key).__name__}"
            raise TypeError(msg)
        if self.arguments is None:
            msg = "arguments must not be None"
            raise TypeError(msg)
        object.__setattr__(self, "arguments", MappingProxyType(dict(self.arguments)))

    @property
    def has_arguments(self) -> bool:
        """Check if any named or positional arguments were provided."""
        return len(self.arguments) > 0

    def with_arguments(self, arguments: Mapping[str, Any]) -> LocalizationRequest:
        """Return a request for the same key with different arguments."""
        return LocalizationRequest(self.key, arguments)


@dataclass(slots=True)
class LocalizeConfig:
    """Policy flags controlling error and fallback behavior.

    Instances are mutable and are read by the engine on every resolution,
    never snapshotted: changing a flag takes effect on the next call.

    Attributes:
        throw_when_not_found: Raise ValueNotFoundError when no bundle has a
            value for the key, instead of returning default_missing_value
            (default: False).
        ignore_processing_errors: Log and skip bundles whose formatting
            strategy raises, continuing with the next bundle (default: False).
        ignore_missing_bundles: Mark an entry's bundle as absent when its
            provider raises MissingBundleError, instead of propagating the
            error (default: False).
        default_missing_value: Returned for unresolvable keys when
            throw_when_not_found is off (default: "").

    Example:
        >>> config = LocalizeConfig(default_missing_value="???")
        >>> l10n = create_localize("en", config, default_locale="en")
        >>> l10n.get_value("Missing.key")
        '???'
        >>> config.throw_when_not_found = True
        >>> l10n.get_value("Missing.key")
        Traceback (most recent call last):
        ...
        localize.diagnostics.errors.ValueNotFoundError: ...
    """

    throw_when_not_found: bool = False
    ignore_processing_errors: bool = False
    ignore_missing_bundles: bool = False
    default_missing_value: str = DEFAULT_MISSING_VALUE

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            TypeError: If default_missing_value is not a string
        """
        if not isinstance(self.default_missing_value, str):
            msg = (
                "default_missing_value must be a string, "
                f"got {type(self.default_missing_value).__name__}"
            )
            raise TypeError(msg)
