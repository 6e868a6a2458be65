"""Priority-ordered resolution across registered bundle providers.

Implements Localize, the resolution engine. It owns the provider
registry, the policy configuration, the active locale and the formatting
strategy, and implements two protocols on top of them:

Refresh:
    Every registered provider holds the bundle it produced for the
    active locale. Registering a provider, changing the locale, and
    calling refresh() ask providers for new bundles. A provider that
    raises MissingBundleError leaves its entry without a bundle; whether
    the error reaches the caller is decided by the configuration.

Resolution:
    resolve() walks the providers in registration order and returns the
    first string the formatting strategy produces. Strategies return None
    for "not found"; exceptions are processing errors. When nothing is
    found the configured default is returned, or ValueNotFoundError raised.

Thread Safety:
    Resolution never locks; it iterates the registry snapshot valid when it
    started. Registration, locale changes and refreshes serialize on one
    reentrant lock, so a provider registered during a locale change is
    always refreshed with the final locale.

Python 3.13+. Depends on Babel for Locale.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from localize.constants import LOG_TRUNCATE_DEBUG, LOG_TRUNCATE_WARNING
from localize.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    MissingBundleError,
    ValueNotFoundError,
)
from localize.locale_utils import coerce_locale
from localize.localization.builder import ValueBuilder
from localize.localization.registry import ProviderEntry, ProviderRegistry
from localize.localization.request import LocalizeConfig
from localize.localization.types import LocalizationKey
from localize.runtime.strategy import DEFAULT_FORMATTING_STRATEGY

if TYPE_CHECKING:
    from babel import Locale

    from localize.localization.request import LocalizationRequest
    from localize.localization.types import (
        Bundle,
        BundleProvider,
        FormattingStrategy,
        MessageKey,
        ProviderKey,
    )

__all__ = ["Localize", "create_localize", "resolve_key"]

logger = logging.getLogger(__name__)


def resolve_key(key: MessageKey | LocalizationKey) -> MessageKey:
    """Return the message key string of ``key``.

    Strings (including StrEnum members) are returned unchanged; objects
    implementing LocalizationKey contribute their ``key`` attribute.

    Raises:
        TypeError: If key is None or neither a string nor a LocalizationKey
    """
    if isinstance(key, str):
        return key
    if key is None:
        msg = "key must not be None"
        raise TypeError(msg)
    if isinstance(key, LocalizationKey):
        return resolve_key(key.key)
    msg = f"key must be a string or expose a 'key' attribute, got {type(key).__name__}"
    raise TypeError(msg)


class Localize:
    """Localization engine resolving keys across priority-ordered providers.

    Providers are searched in registration order: the first registered
    provider has the highest priority. Re-registering a key replaces the
    provider without changing its priority.

    Example:
        >>> l10n = create_localize("en", default_locale="en")
        >>> l10n.register("app", CatalogBundleProvider({"en": {"Greeting": "Hi"}}))
        True
        >>> l10n.register("base", CatalogBundleProvider({
        ...     "en": {"Greeting": "Hello", "Farewell": "Bye"},
        ... }))
        True
        >>> l10n.get_value("Greeting"), l10n.get_value("Farewell")
        ('Hi', 'Bye')
    """

    __slots__ = (
        "__weakref__",
        "_config",
        "_default_locale",
        "_locale",
        "_lock",
        "_registry",
        "_strategy",
    )

    def __init__(
        self,
        locale: Locale | str | None = None,
        config: LocalizeConfig | None = None,
        *,
        default_locale: Locale | str,
        formatting_strategy: FormattingStrategy | None = None,
    ) -> None:
        """Initialize Localize.

        Args:
            locale: Initial locale; defaults to default_locale
            config: Policy configuration; defaults to LocalizeConfig()
            default_locale: Locale the engine falls back to. Pass
                get_system_babel_locale() to follow the environment
            formatting_strategy: Strategy turning (bundle, request) into a
                string; defaults to DEFAULT_FORMATTING_STRATEGY

        Raises:
            TypeError: If default_locale is None, or a locale is not a
                Locale or string
            ValueError: If a locale string is empty or malformed
            babel.core.UnknownLocaleError: If a locale has no CLDR data
        """
        if default_locale is None:
            msg = "default_locale must not be None"
            raise TypeError(msg)
        self._default_locale = coerce_locale(default_locale)
        self._locale = self._default_locale if locale is None else coerce_locale(locale)
        self._config = LocalizeConfig() if config is None else config
        self._strategy: FormattingStrategy = (
            DEFAULT_FORMATTING_STRATEGY if formatting_strategy is None else formatting_strategy
        )
        self._registry = ProviderRegistry()
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def locale(self) -> Locale:
        """Active locale."""
        return self._locale

    @property
    def default_locale(self) -> Locale:
        """Locale the engine was created with as its default."""
        return self._default_locale

    @property
    def config(self) -> LocalizeConfig:
        """Policy configuration, read on every operation."""
        return self._config

    @property
    def formatting_strategy(self) -> FormattingStrategy:
        """Strategy turning (bundle, request) into a string or None."""
        return self._strategy

    def get_locale(self) -> Locale:
        """Return the active locale."""
        return self._locale

    def set_config(self, config: LocalizeConfig) -> None:
        """Replace the policy configuration.

        Raises:
            TypeError: If config is None
        """
        if config is None:
            msg = "config must not be None"
            raise TypeError(msg)
        self._config = config

    def set_formatting_strategy(self, strategy: FormattingStrategy) -> None:
        """Replace the formatting strategy.

        Raises:
            TypeError: If strategy is None
        """
        if strategy is None:
            msg = "formatting strategy must not be None"
            raise TypeError(msg)
        self._strategy = strategy

    # ------------------------------------------------------------------
    # Provider registration
    # ------------------------------------------------------------------

    def register(self, key: ProviderKey, provider: BundleProvider) -> bool:
        """Register ``provider`` under ``key``.

        The provider is asked for a bundle for the active locale before it
        is stored. If that raises and the error propagates, the registry is
        left untouched.

        Args:
            key: Registry key
            provider: Callable producing a Bundle for a Locale

        Returns:
            True if the key was new (lowest priority), False if an existing
            provider was replaced in its current position

        Raises:
            TypeError: If key or provider is None
            MissingBundleError: If the provider has no bundle for the active
                locale and ignore_missing_bundles is off
        """
        entry = ProviderEntry(key, provider)
        with self._lock:
            self._refresh_entry(entry, self._locale)
            return self._registry.register(entry)

    def unregister(self, key: ProviderKey) -> bool:
        """Remove the provider registered under ``key``.

        Returns:
            True if a provider was removed
        """
        return self._registry.unregister(key)

    def provider_keys(self) -> tuple[ProviderKey, ...]:
        """Return the registered provider keys in priority order."""
        return self._registry.keys()

    def get_bundles(self) -> tuple[Bundle, ...]:
        """Return the present bundles in priority order."""
        return self._registry.current_bundles()

    # ------------------------------------------------------------------
    # Refresh protocol
    # ------------------------------------------------------------------

    def set_locale(self, locale: Locale | str) -> None:
        """Change the active locale and refresh every provider.

        Setting the active locale again does nothing; no provider is called.

        Raises:
            TypeError: If locale is None or not a Locale or string
            MissingBundleError: If a provider has no bundle for the new
                locale and ignore_missing_bundles is off. The locale is
                changed and every other provider refreshed regardless.
        """
        if locale is None:
            msg = "locale must not be None"
            raise TypeError(msg)
        self._apply_locale(coerce_locale(locale))

    def refresh(self, key: ProviderKey | None = None) -> bool:
        """Ask providers for new bundles for the active locale.

        Args:
            key: Provider to refresh; every provider when omitted

        Returns:
            False if ``key`` names no registered provider, True otherwise

        Raises:
            MissingBundleError: If a provider has no bundle and
                ignore_missing_bundles is off
        """
        with self._lock:
            if key is None:
                try:
                    self._refresh_all(self._locale)
                finally:
                    self._on_bundles_changed()
                return True

            entry = self._registry.lookup(key)
            if entry is None:
                logger.debug("Refresh skipped: no provider '%s'", key)
                return False
            try:
                self._refresh_entry(entry, self._locale)
            finally:
                self._on_bundles_changed()
            return True

    def _apply_locale(self, locale: Locale) -> None:
        with self._lock:
            if locale == self._locale:
                return
            previous = self._locale
            self._locale = locale
            logger.info("Locale changed from %s to %s", previous, locale)
            try:
                self._refresh_all(locale)
            finally:
                self._on_bundles_changed()

    def _on_bundles_changed(self) -> None:
        """Hook called after every refresh, including failed ones."""

    def _refresh_entry(self, entry: ProviderEntry, locale: Locale) -> None:
        try:
            entry.refresh(locale)
        except MissingBundleError as e:
            entry.bundle = None
            if e.provider_key is None:
                e.provider_key = entry.key
            if e.locale is None:
                e.locale = str(locale)
            if not self._config.ignore_missing_bundles:
                raise
            logger.warning(
                "Provider '%s' has no bundle for %s: %s",
                entry.key,
                locale,
                str(e)[:LOG_TRUNCATE_WARNING],
            )
        else:
            logger.debug("Refreshed provider '%s' for %s", entry.key, locale)

    def _refresh_all(self, locale: Locale) -> None:
        failures: list[MissingBundleError] = []
        for entry in self._registry.snapshot():
            try:
                self._refresh_entry(entry, locale)
            except MissingBundleError as e:
                failures.append(e)

        if failures:
            first, *others = failures
            if others:
                keys = ", ".join(repr(error.provider_key) for error in others)
                first.add_note(f"Bundles for {locale} are also missing from providers: {keys}")
            raise first

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def get(self, key: MessageKey | LocalizationKey) -> ValueBuilder:
        """Start building a formatted value for ``key``.

        Raises:
            TypeError: If key is None
        """
        return ValueBuilder(resolve_key(key), self.resolve)

    def get_value(self, key: MessageKey | LocalizationKey) -> str:
        """Resolve ``key`` without arguments.

        Equivalent to ``get(key).value()``.
        """
        return self.get(key).value()

    def resolve(self, request: LocalizationRequest) -> str:
        """Resolve ``request`` against the providers in priority order.

        Args:
            request: Key and arguments

        Returns:
            The first string the formatting strategy produces (an empty
            string counts), or config.default_missing_value

        Raises:
            TypeError: If request is None
            ValueNotFoundError: If no provider has the key and
                throw_when_not_found is on
            Exception: Whatever the strategy raised, unless
                ignore_processing_errors is on
        """
        if request is None:
            msg = "request must not be None"
            raise TypeError(msg)

        config = self._config
        strategy = self._strategy
        for entry in self._registry.snapshot():
            bundle = entry.bundle
            if bundle is None:
                continue
            try:
                result = strategy(bundle, request)
            except Exception as e:  # pylint: disable=broad-exception-caught
                if not config.ignore_processing_errors:
                    raise
                logger.warning(
                    "Failed to process '%s' with provider '%s': %s",
                    request.key[:LOG_TRUNCATE_WARNING],
                    entry.key,
                    str(e)[:LOG_TRUNCATE_WARNING],
                )
                continue
            if result is not None:
                return result

        if config.throw_when_not_found:
            diagnostic = Diagnostic(
                code=DiagnosticCode.VALUE_NOT_FOUND,
                message=f"No bundle contains a value for '{request.key}'",
                key=request.key,
                locale=str(self._locale),
                hint="Register a provider whose bundle defines the key",
            )
            raise ValueNotFoundError(
                diagnostic, key=request.key, bundles=self._registry.current_bundles()
            )
        logger.debug(
            "No value for '%s'; using default missing value", request.key[:LOG_TRUNCATE_DEBUG]
        )
        return config.default_missing_value

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(locale={str(self._locale)!r}, "
            f"providers={list(self._registry.keys())!r})"
        )


def create_localize(
    locale: Locale | str | None = None,
    config: LocalizeConfig | None = None,
    *,
    default_locale: Locale | str,
) -> Localize:
    """Create a localization engine.

    Args:
        locale: Initial locale; defaults to default_locale
        config: Policy configuration; defaults to LocalizeConfig()
        default_locale: Fallback locale

    Returns:
        A new Localize with no providers registered

    Example:
        >>> l10n = create_localize(
        ...     "de-DE", LocalizeConfig(throw_when_not_found=True), default_locale="en"
        ... )
        >>> l10n.locale
        Locale('de', territory='DE')
    """
    return Localize(locale, config, default_locale=default_locale)
