"""Observable values with change notification.

A deliberately small replacement for a UI toolkit's property machinery:
an observable is anything with ``get()`` and ``subscribe(listener)``,
where ``subscribe`` returns a callable that removes the listener again.
Listeners take no arguments; they re-read the value with ``get()``.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Protocol, runtime_checkable

__all__ = ["Listener", "ListenerList", "ObservableProperty", "ObservableValue", "Unsubscribe"]

logger = logging.getLogger(__name__)

type Listener = Callable[[], None]
"""Called without arguments when an observable changes or is invalidated."""

type Unsubscribe = Callable[[], None]
"""Removes the listener it was returned for; calling it twice is harmless."""


@runtime_checkable
class ObservableValue[T](Protocol):
    """A value that notifies subscribers when it changes.

    Example:
        >>> counter = ObservableProperty(1)
        >>> unsubscribe = counter.subscribe(lambda: print("now", counter.get()))
        >>> counter.set(2)
        now 2
        >>> unsubscribe()
        >>> counter.set(3)
    """

    def get(self) -> T:
        """Return the current value."""

    def subscribe(self, listener: Listener) -> Unsubscribe:
        """Call ``listener`` on every change until unsubscribed."""


class ListenerList:
    """Thread-safe list of listeners.

    Notification iterates a snapshot taken under the lock and runs the
    listeners outside it, so a listener may subscribe or unsubscribe
    without deadlocking. A listener that raises is logged and the
    remaining listeners still run.
    """

    __slots__ = ("_listeners", "_lock")

    def __init__(self) -> None:
        self._listeners: list[Listener] = []
        self._lock = threading.Lock()

    def add(self, listener: Listener) -> Unsubscribe:
        """Append ``listener`` and return the function that removes it.

        Raises:
            TypeError: If listener is None
        """
        if listener is None:
            msg = "listener must not be None"
            raise TypeError(msg)
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                try:
                    self._listeners.remove(listener)
                except ValueError:
                    pass

        return unsubscribe

    def notify(self) -> None:
        """Call every listener once."""
        with self._lock:
            listeners = tuple(self._listeners)
        for listener in listeners:
            try:
                listener()
            except Exception:  # pylint: disable=broad-exception-caught
                logger.exception("Listener %r failed", listener)

    def __len__(self) -> int:
        return len(self._listeners)


class ObservableProperty[T]:
    """Mutable holder that notifies subscribers when its value changes.

    ``set()`` notifies only when the new value differs (``!=``) from the
    current one; ``fire()`` notifies unconditionally.

    Example:
        >>> count = ObservableProperty(1)
        >>> clicked = l10n.get("MyApp.clicked").named("count", count).binding()
        >>> clicked.get()
        'Clicked 1 time!'
        >>> count.set(2)
        >>> clicked.get()
        'Clicked 2 times!'
    """

    __slots__ = ("__weakref__", "_listeners", "_value")

    def __init__(self, value: T) -> None:
        self._value = value
        self._listeners = ListenerList()

    def get(self) -> T:
        """Return the current value."""
        return self._value

    def set(self, value: T) -> None:
        """Store ``value`` and notify subscribers if it changed."""
        if value == self._value:
            return
        self._value = value
        self._listeners.notify()

    def fire(self) -> None:
        """Notify subscribers without changing the value."""
        self._listeners.notify()

    def subscribe(self, listener: Listener) -> Unsubscribe:
        """Call ``listener`` on every change until unsubscribed."""
        return self._listeners.add(listener)

    def __repr__(self) -> str:
        return f"ObservableProperty({self._value!r})"
