"""Lazily recomputed localized values.

A Binding is the reactive counterpart of ``ValueBuilder.value()``: it
remembers the key, the arguments and the resolve callback, and produces
the formatted string on demand. It depends on the engine's locale
observable and on every argument that is itself observable; when any of
them signals, the binding is invalidated and recomputes on the next
``get()``.

Invalidation follows the usual lazy-binding contract: listeners of a
binding are notified when it goes from valid to invalid, not on every
upstream signal. A listener that wants further notifications reads the
binding again with ``get()``, which makes it valid.

Bindings subscribe to their dependencies weakly. A binding nobody
references any more is garbage collected and unsubscribes itself;
``dispose()`` does the same explicitly.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import weakref
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from localize.constants import LOG_TRUNCATE_DEBUG
from localize.localization.builder import ValueBuilder
from localize.localization.request import LocalizationRequest
from localize.reactive.observable import ListenerList, ObservableValue

if TYPE_CHECKING:
    from babel import Locale

    from localize.localization.builder import Resolver
    from localize.localization.types import MessageKey
    from localize.reactive.observable import Listener, Unsubscribe

__all__ = ["Binding", "ReactiveValueBuilder"]

logger = logging.getLogger(__name__)


def _unsubscribe_all(unsubscribers: tuple[Unsubscribe, ...]) -> None:
    for unsubscribe in unsubscribers:
        unsubscribe()


def _invalidator(binding: Binding) -> Listener:
    ref = weakref.ref(binding)

    def invalidate() -> None:
        target = ref()
        if target is not None:
            target.invalidate()

    return invalidate


class Binding:
    """Observable localized string that recomputes when invalidated.

    Not thread-safe: a binding belongs to the execution context its engine
    notifies on.

    Example:
        >>> count = ObservableProperty(1)
        >>> clicked = l10n.get("MyApp.clicked").named("count", count).binding()
        >>> clicked.get()
        'Clicked 1 time!'
        >>> count.set(2)
        >>> clicked.get()
        'Clicked 2 times!'
    """

    __slots__ = (
        "__weakref__",
        "_arguments",
        "_dependencies",
        "_finalizer",
        "_key",
        "_listeners",
        "_resolve",
        "_valid",
        "_value",
    )

    def __init__(
        self,
        key: MessageKey,
        arguments: Mapping[str, Any],
        resolve: Resolver,
        locale: ObservableValue[Locale],
    ) -> None:
        """Initialize Binding and subscribe to its dependencies.

        Args:
            key: Key of the localized value
            arguments: Argument snapshot; observable values are read on
                every recomputation, other values are used as they are
            resolve: Callback turning a request into a string
            locale: Observable active locale of the engine

        Raises:
            TypeError: If key, arguments, resolve or locale is None
        """
        if key is None or arguments is None or resolve is None or locale is None:
            msg = "key, arguments, resolve and locale must not be None"
            raise TypeError(msg)
        self._key = key
        self._arguments = dict(arguments)
        self._resolve = resolve
        self._listeners = ListenerList()
        self._valid = False
        self._value = ""

        unique: dict[int, ObservableValue[Any]] = {id(locale): locale}
        for value in self._arguments.values():
            if isinstance(value, ObservableValue):
                unique.setdefault(id(value), value)
        self._dependencies: tuple[ObservableValue[Any], ...] = tuple(unique.values())

        listener = _invalidator(self)
        unsubscribers = tuple(dependency.subscribe(listener) for dependency in self._dependencies)
        self._finalizer = weakref.finalize(self, _unsubscribe_all, unsubscribers)

    @property
    def key(self) -> MessageKey:
        """Key of the localized value."""
        return self._key

    @property
    def dependencies(self) -> tuple[ObservableValue[Any], ...]:
        """Locale observable followed by the distinct observable arguments."""
        return self._dependencies

    @property
    def valid(self) -> bool:
        """True while the cached value is current."""
        return self._valid

    @property
    def disposed(self) -> bool:
        return not self._finalizer.alive

    def get(self) -> str:
        """Return the localized string, recomputing it if invalid.

        Raises:
            Whatever the engine raises while resolving; the binding then
            stays invalid
        """
        if not self._valid:
            current = {
                name: value.get() if isinstance(value, ObservableValue) else value
                for name, value in self._arguments.items()
            }
            self._value = self._resolve(LocalizationRequest(self._key, current))
            self._valid = True
            logger.debug(
                "Recomputed binding '%s': %r",
                self._key[:LOG_TRUNCATE_DEBUG],
                self._value[:LOG_TRUNCATE_DEBUG],
            )
        return self._value

    def invalidate(self) -> None:
        """Mark the cached value stale and notify listeners if it was valid."""
        if self._valid:
            self._valid = False
            self._listeners.notify()

    def subscribe(self, listener: Listener) -> Unsubscribe:
        """Call ``listener`` when this binding becomes invalid."""
        return self._listeners.add(listener)

    def dispose(self) -> None:
        """Unsubscribe from every dependency; the binding stops updating."""
        self._finalizer()

    def __repr__(self) -> str:
        state = "valid" if self._valid else "invalid"
        return f"Binding(key={self._key!r}, {state}, dependencies={len(self._dependencies)})"


class ReactiveValueBuilder(ValueBuilder):
    """ValueBuilder that can also produce a Binding."""

    __slots__ = ("_locale",)

    def __init__(self, key: MessageKey, resolve: Resolver, locale: ObservableValue[Locale]) -> None:
        super().__init__(key, resolve)
        self._locale = locale

    def binding(self) -> Binding:
        """Capture the accumulated arguments into a Binding."""
        return Binding(self._key, self._arguments, self._resolve, self._locale)

