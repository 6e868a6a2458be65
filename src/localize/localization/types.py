"""Type aliases and protocols for the localization domain.

Provides semantic type aliases used throughout the localization package
and by user code when annotating call sites, plus the structural
protocols for the two collaborators the engine consumes: bundles and
bundle providers.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from babel import Locale

    from localize.localization.request import LocalizationRequest

__all__ = [
    "Bundle",
    "BundleProvider",
    "FormattingStrategy",
    "LocalizationKey",
    "MessageKey",
    "ProviderKey",
]

type MessageKey = str
"""Key of a localized value (e.g., 'MyApp.greet', 'Button.ok')."""

type ProviderKey = str
"""Registry key a bundle provider is registered under (e.g., 'app', 'plugin')."""


@runtime_checkable
class LocalizationKey(Protocol):
    """Anything exposing a message key.

    Lets applications pass their own key objects (dataclasses, enum
    members with a ``key`` attribute) wherever a key string is accepted.
    ``str`` subclasses such as StrEnum members are accepted as plain keys
    and need not implement this protocol.

    Example:
        >>> class Keys(Enum):
        ...     GREET = "MyApp.greet"
        ...     @property
        ...     def key(self) -> str:
        ...         return self.value
        >>> l10n.get_value(Keys.GREET)
    """

    @property
    def key(self) -> MessageKey: ...


class Bundle(Protocol):
    """Key to template-string lookup scoped to one locale.

    Attributes:
        locale: Locale whose content the bundle holds; drives plural
            selection and number formatting in the default strategy
    """

    @property
    def locale(self) -> Locale: ...

    def has(self, key: MessageKey) -> bool:
        """Return True if the bundle defines ``key``."""

    def get(self, key: MessageKey) -> str:
        """Return the raw template for ``key``.

        Raises:
            KeyError: If the bundle does not define ``key``
        """


type BundleProvider = Callable[[Locale], Bundle]
"""Produces a Bundle for a locale; raises MissingBundleError if it has none."""

type FormattingStrategy = Callable[[Bundle, LocalizationRequest], str | None]
"""Turns (bundle, request) into a string, or None for "not found"."""
