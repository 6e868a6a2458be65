"""Reactive localization engine.

ReactiveLocalize adds bindings to the resolution engine: builders it hands
out can produce a Binding, and every locale change or refresh signals the
engine's locale observable so that bindings recompute.

Locale assignment and bundle refresh always run synchronously on the
calling thread. Only the notification is marshalled onto the execution
context that owns the bindings; it runs inline when the caller already is
the owner, when there is no context, or when the context can no longer
accept tasks.

Python 3.13+. Depends on Babel for Locale.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from localize.locale_utils import coerce_locale
from localize.localization.orchestrator import Localize, resolve_key
from localize.reactive.binding import Binding, ReactiveValueBuilder
from localize.reactive.context import run_on_owner
from localize.reactive.observable import ListenerList

if TYPE_CHECKING:
    from babel import Locale

    from localize.localization.request import LocalizeConfig
    from localize.localization.types import FormattingStrategy, LocalizationKey, MessageKey
    from localize.reactive.context import ExecutionContext
    from localize.reactive.observable import Listener, Unsubscribe

__all__ = ["LocaleProperty", "ReactiveLocalize", "create_reactive_localize"]

logger = logging.getLogger(__name__)


class LocaleProperty:
    """Observable view of a ReactiveLocalize's active locale.

    ``get()`` returns the engine's active locale; ``set()`` is
    ``ReactiveLocalize.set_locale()``. Subscribers are signalled after every
    locale change and every refresh, even when the locale stayed the same.
    """

    __slots__ = ("__weakref__", "_engine", "_listeners")

    def __init__(self, engine: ReactiveLocalize) -> None:
        self._engine = engine
        self._listeners = ListenerList()

    def get(self) -> Locale:
        """Return the active locale."""
        return self._engine.locale

    def set(self, locale: Locale | str | None) -> None:
        """Change the active locale; None or "" selects the default locale."""
        self._engine.set_locale(locale)

    def fire(self) -> None:
        """Signal subscribers without changing the locale."""
        self._listeners.notify()

    def subscribe(self, listener: Listener) -> Unsubscribe:
        """Call ``listener`` after every locale change and refresh."""
        return self._listeners.add(listener)

    def __repr__(self) -> str:
        return f"LocaleProperty({str(self._engine.locale)!r})"


class ReactiveLocalize(Localize):
    """Localization engine whose values can be bound reactively.

    Example:
        >>> l10n = create_reactive_localize(
        ...     "en", default_locale="en", context=QueueExecutionContext()
        ... )
        >>> l10n.register("app", CatalogBundleProvider({
        ...     "en": {"Greeting": "Hello"},
        ...     "de": {"Greeting": "Hallo"},
        ... }))
        True
        >>> greeting = l10n.get_binding("Greeting")
        >>> greeting.get()
        'Hello'
        >>> l10n.locale_observable().set("de")
        >>> greeting.get()
        'Hallo'
    """

    __slots__ = ("_context", "_locale_property")

    def __init__(
        self,
        locale: Locale | str | None = None,
        config: LocalizeConfig | None = None,
        *,
        default_locale: Locale | str,
        formatting_strategy: FormattingStrategy | None = None,
        context: ExecutionContext | None = None,
    ) -> None:
        """Initialize ReactiveLocalize.

        Args:
            locale: Initial locale; defaults to default_locale
            config: Policy configuration; defaults to LocalizeConfig()
            default_locale: Locale selected by set_locale(None)
            formatting_strategy: Strategy turning (bundle, request) into a
                string; defaults to DEFAULT_FORMATTING_STRATEGY
            context: Owner of binding notifications; notifications run on
                the calling thread when omitted
        """
        super().__init__(
            locale,
            config,
            default_locale=default_locale,
            formatting_strategy=formatting_strategy,
        )
        self._context = context
        self._locale_property = LocaleProperty(self)

    @property
    def context(self) -> ExecutionContext | None:
        """Owner of binding notifications, if any."""
        return self._context

    def locale_observable(self) -> LocaleProperty:
        """Return the observable active locale bindings depend on."""
        return self._locale_property

    def set_locale(self, locale: Locale | str | None) -> None:
        """Change the active locale and refresh every provider.

        ``None`` and the empty string select the default locale. Bindings
        are notified once the refresh has finished, also when it raised.

        Raises:
            TypeError: If locale is not a Locale, string or None
            MissingBundleError: If a provider has no bundle for the new
                locale and ignore_missing_bundles is off
        """
        if locale is None or (isinstance(locale, str) and not locale.strip()):
            target = self._default_locale
        else:
            target = coerce_locale(locale)
        self._apply_locale(target)

    def get(self, key: MessageKey | LocalizationKey) -> ReactiveValueBuilder:
        """Start building a formatted value or binding for ``key``.

        Raises:
            TypeError: If key is None
        """
        return ReactiveValueBuilder(resolve_key(key), self.resolve, self._locale_property)

    def get_binding(self, key: MessageKey | LocalizationKey) -> Binding:
        """Bind ``key`` without arguments.

        Equivalent to ``get(key).binding()``.
        """
        return self.get(key).binding()

    def _on_bundles_changed(self) -> None:
        logger.debug("Notifying bindings of %s", self)
        run_on_owner(self._context, self._locale_property.fire)


def create_reactive_localize(
    locale: Locale | str | None = None,
    config: LocalizeConfig | None = None,
    *,
    default_locale: Locale | str,
    context: ExecutionContext | None = None,
) -> ReactiveLocalize:
    """Create a reactive localization engine.

    Args:
        locale: Initial locale; defaults to default_locale
        config: Policy configuration; defaults to LocalizeConfig()
        default_locale: Locale selected by set_locale(None)
        context: Owner of binding notifications

    Returns:
        A new ReactiveLocalize with no providers registered
    """
    return ReactiveLocalize(locale, config, default_locale=default_locale, context=context)
