"""Thread Safety Example - Sharing One Localize Across Threads.

Demonstrates:
1. Concurrent resolution (never blocks)
2. Registering and unregistering providers while other threads resolve
3. Changing the locale while other threads resolve

Thread Safety:
    Resolution iterates an immutable snapshot of the provider registry
    and never takes a lock. Registration, locale changes and refreshes
    serialize on one lock inside the engine. Builders are per-caller and
    must not be shared.

Python 3.13+.
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor, as_completed

from localize import CatalogBundleProvider, create_localize

CATALOG = {
    "en": {"Processing": "Processing {filename}...", "Status": "Status: {status}"},
    "fr": {"Processing": "Traitement de {filename}...", "Status": "Statut : {status}"},
}


def example_1_concurrent_reads() -> None:
    """Example 1: Many threads resolving from one engine."""
    print("=" * 60)
    print("Example 1: Concurrent Resolution")
    print("=" * 60)

    l10n = create_localize("en", default_locale="en")
    l10n.register("app", CatalogBundleProvider(CATALOG))

    def process_file(filename: str) -> str:
        processing = l10n.get("Processing").named("filename", filename).value()
        status = l10n.get("Status").named("status", "done").value()
        return f"{processing} -> {status}"

    files = [f"file{i}.txt" for i in range(5)]
    with ThreadPoolExecutor(max_workers=3) as executor:
        futures = {executor.submit(process_file, f): f for f in files}
        for future in as_completed(futures):
            print(f"  {future.result()}")


def example_2_dynamic_providers() -> None:
    """Example 2: Plugins come and go while readers keep resolving."""
    print("\n" + "=" * 60)
    print("Example 2: Dynamic Providers")
    print("=" * 60)

    l10n = create_localize("en", default_locale="en")
    l10n.register("app", CatalogBundleProvider(CATALOG))

    def plugin_lifecycle(index: int) -> None:
        key = f"plugin-{index}"
        l10n.register(key, CatalogBundleProvider({"en": {f"Plugin{index}": f"Plugin {index} ready"}}))
        print(f"  [{threading.current_thread().name}] {l10n.get_value(f'Plugin{index}')}")
        l10n.unregister(key)

    threads = [threading.Thread(target=plugin_lifecycle, args=(i,)) for i in range(3)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    print(f"  Remaining providers: {list(l10n.provider_keys())}")
    # Output:   Remaining providers: ['app']


def example_3_locale_switch() -> None:
    """Example 3: A locale change is visible to readers as soon as it completes."""
    print("\n" + "=" * 60)
    print("Example 3: Locale Switch Under Load")
    print("=" * 60)

    l10n = create_localize("en", default_locale="en")
    l10n.register("app", CatalogBundleProvider(CATALOG))

    switcher = threading.Thread(target=l10n.set_locale, args=("fr",))
    switcher.start()
    switcher.join()

    print(f"  {l10n.get('Status').named('status', 'ok').value()}")
    # Output:   Statut : ok


if __name__ == "__main__":
    example_1_concurrent_reads()
    example_2_dynamic_providers()
    example_3_locale_switch()

    print("\n" + "=" * 60)
    print("[SUCCESS] All thread safety examples complete!")
    print("=" * 60)
