"""Reactive Example - Bindings That Follow Arguments and Locale.

A Binding recomputes its text when an observable argument changes or the
locale changes. Here an asyncio event loop plays the role of a UI thread:
bindings belong to it, and locale changes made by worker threads are
delivered to it with call_soon_threadsafe.

Python 3.13+.
"""

from __future__ import annotations

import asyncio

from localize import CatalogBundleProvider, ObservableProperty, create_reactive_localize
from localize.reactive import AsyncioExecutionContext

CATALOG = {
    "en": {"MyApp.clicked": "Clicked {count, plural, one{# time} other{# times}}!"},
    "de": {"MyApp.clicked": "{count, plural, one{Einmal} other{# Mal}} geklickt!"},
}


async def main() -> None:
    """Run a small counter whose label is a binding."""
    print("=" * 60)
    print("Reactive Counter")
    print("=" * 60)

    l10n = create_reactive_localize(
        "en",
        default_locale="en",
        context=AsyncioExecutionContext.from_running_loop(),
    )
    l10n.register("app", CatalogBundleProvider(CATALOG))

    count = ObservableProperty(1)
    label = l10n.get("MyApp.clicked").named("count", count).binding()
    label.subscribe(lambda: print("  [label invalidated]"))

    print(label.get())
    # Output: Clicked 1 time!

    count.set(2)
    print(label.get())
    # Output: Clicked 2 times!

    # Change the locale from a worker thread; the notification is
    # scheduled on this loop.
    await asyncio.to_thread(l10n.set_locale, "de")
    await asyncio.sleep(0)
    print(label.get())
    # Output: 2 Mal geklickt!

    count.set(1)
    print(label.get())
    # Output: Einmal geklickt!

    label.dispose()


if __name__ == "__main__":
    asyncio.run(main())
