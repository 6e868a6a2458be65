"""Ordered, keyed registry of bundle providers.

The registry is the only structure shared between concurrent callers of
the engine. It is copy-on-write: every structural mutation builds a new
tuple of entries under a single writer lock and swaps the reference, so
readers never lock, never block, and always iterate a complete snapshot.

Priority is positional. The first registered entry is searched first;
re-registering a key replaces the entry in its existing slot so fallback
order survives provider replacement.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from babel import Locale

    from localize.localization.types import Bundle, BundleProvider, ProviderKey

__all__ = ["ProviderEntry", "ProviderRegistry"]

logger = logging.getLogger(__name__)


class ProviderEntry:
    """A registered provider and the bundle it last produced.

    Identity is the key: two entries are equal when their keys are equal.

    The bundle is replaced only by refresh(). Assigning an attribute is
    atomic, so a concurrent reader sees either the old or the new bundle.

    Attributes:
        key: Registry key of this entry
        provider: Callable producing a Bundle for a Locale
        bundle: Most recently produced bundle, or None when absent
    """

    __slots__ = ("bundle", "key", "provider")

    def __init__(self, key: ProviderKey, provider: BundleProvider) -> None:
        """Initialize ProviderEntry.

        Args:
            key: Registry key
            provider: Bundle provider

        Raises:
            TypeError: If key or provider is None
        """
        if key is None:
            msg = "key must not be None"
            raise TypeError(msg)
        if provider is None:
            msg = "provider must not be None"
            raise TypeError(msg)
        self.key = key
        self.provider = provider
        self.bundle: Bundle | None = None

    def refresh(self, locale: Locale) -> None:
        """Fetch a new bundle from the provider.

        Exceptions from the provider propagate; policy handling belongs to
        the engine.
        """
        self.bundle = self.provider(locale)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProviderEntry):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __repr__(self) -> str:
        state = "absent" if self.bundle is None else "loaded"
        return f"ProviderEntry(key={self.key!r}, bundle={state})"


class ProviderRegistry:
    """Copy-on-write ordered collection of ProviderEntry.

    Thread Safety:
        Writers (register, unregister) serialize on an internal lock.
        Readers (snapshot, lookup, iteration, len) take the current tuple
        reference without locking. The tuple is never mutated after it is
        published, so a reader can never observe a half-applied mutation.

    Invariants:
        - No two entries share a key
        - Iteration order equals registration order, modulo in-place
          replacement

    Example:
        >>> registry = ProviderRegistry()
        >>> registry.register(ProviderEntry("app", app_provider))
        True
        >>> registry.register(ProviderEntry("plugin", plugin_provider))
        True
        >>> registry.register(ProviderEntry("app", other_provider))  # same slot
        False
        >>> [entry.key for entry in registry]
        ['app', 'plugin']
    """

    __slots__ = ("_entries", "_write_lock")

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._entries: tuple[ProviderEntry, ...] = ()
        self._write_lock = threading.Lock()

    def register(self, entry: ProviderEntry) -> bool:
        """Insert ``entry``, or replace the entry with the same key in place.

        Args:
            entry: Entry to store

        Returns:
            True if the key was new (appended at lowest priority), False if
            an existing entry was replaced in its current position.
        """
        with self._write_lock:
            entries = self._entries
            for index, existing in enumerate(entries):
                if existing.key == entry.key:
                    self._entries = (*entries[:index], entry, *entries[index + 1 :])
                    logger.debug("Replaced provider '%s' at priority %d", entry.key, index)
                    return False
            self._entries = (*entries, entry)
            logger.debug("Registered provider '%s' at priority %d", entry.key, len(entries))
            return True

    def unregister(self, key: ProviderKey) -> bool:
        """Remove the entry registered under ``key``.

        Returns:
            True if an entry was removed
        """
        with self._write_lock:
            remaining = tuple(entry for entry in self._entries if entry.key != key)
            if len(remaining) == len(self._entries):
                return False
            self._entries = remaining
            logger.debug("Unregistered provider '%s'", key)
            return True

    def lookup(self, key: ProviderKey) -> ProviderEntry | None:
        """Return the entry registered under ``key``, or None."""
        for entry in self._entries:
            if entry.key == key:
                return entry
        return None

    def snapshot(self) -> tuple[ProviderEntry, ...]:
        """Return the entries in priority order as of this call."""
        return self._entries

    def current_bundles(self) -> tuple[Bundle, ...]:
        """Return the present bundles in priority order, skipping absent ones."""
        return tuple(entry.bundle for entry in self._entries if entry.bundle is not None)

    def keys(self) -> tuple[ProviderKey, ...]:
        """Return the registered keys in priority order."""
        return tuple(entry.key for entry in self._entries)

    def __contains__(self, key: object) -> bool:
        return any(entry.key == key for entry in self._entries)

    def __iter__(self) -> Iterator[ProviderEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ProviderRegistry(keys={self.keys()!r})"
