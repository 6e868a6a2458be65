"""Provider Example - Priority Order and Locale Fallback.

Demonstrates how providers combine:
1. Priority: an application provider overriding a library's defaults
2. Locale fallback inside one provider (de_AT -> de -> root)
3. Disk-based bundles loaded from flat JSON files
4. Missing bundles: propagate or ignore

Python 3.13+.
"""

from __future__ import annotations

import json
import tempfile
from pathlib import Path

from localize import (
    CatalogBundleProvider,
    LocalizeConfig,
    MissingBundleError,
    PathBundleProvider,
    create_localize,
)


def example_1_priority() -> None:
    """Example 1: The first registered provider wins."""
    print("=" * 60)
    print("Example 1: Provider Priority")
    print("=" * 60)

    l10n = create_localize("en", default_locale="en")
    l10n.register("app", CatalogBundleProvider({"en": {"Greeting": "Hi"}}))
    l10n.register("widgets", CatalogBundleProvider({
        "en": {"Greeting": "Hello", "Farewell": "Bye"},
    }))

    print(f"Greeting: {l10n.get_value('Greeting')}")
    # Output: Greeting: Hi
    print(f"Farewell: {l10n.get_value('Farewell')}")
    # Output: Farewell: Bye

    l10n.unregister("app")
    print(f"Greeting without 'app': {l10n.get_value('Greeting')}")
    # Output: Greeting without 'app': Hello


def example_2_locale_fallback() -> None:
    """Example 2: Regional bundles fall back to the language bundle."""
    print("\n" + "=" * 60)
    print("Example 2: Locale Fallback (de_AT -> de -> root)")
    print("=" * 60)

    l10n = create_localize("de_AT", default_locale="en")
    l10n.register("app", CatalogBundleProvider({
        "root": {"Brand": "Localize"},
        "de": {"Greeting": "Hallo", "Cart": "Warenkorb"},
        "de_AT": {"Greeting": "Servus"},
    }))

    for key in ("Greeting", "Cart", "Brand"):
        print(f"{key}: {l10n.get_value(key)}")
    # Output:
    # Greeting: Servus
    # Cart: Warenkorb
    # Brand: Localize


def example_3_json_files() -> None:
    """Example 3: Bundles stored as locales/<locale>/messages.json."""
    print("\n" + "=" * 60)
    print("Example 3: Disk-based Bundles")
    print("=" * 60)

    with tempfile.TemporaryDirectory() as tmpdir:
        base = Path(tmpdir)
        for code, messages in {
            "en": {"Welcome": "Welcome, {name}!"},
            "lv": {"Welcome": "Sveiki, {name}!"},
        }.items():
            (base / code).mkdir()
            (base / code / "messages.json").write_text(json.dumps(messages), encoding="utf-8")

        provider = PathBundleProvider(f"{tmpdir}/{{locale}}", "messages.json")
        l10n = create_localize("lv", default_locale="en")
        l10n.register("files", provider)

        print(l10n.get("Welcome").named("name", "Anna").value())
        # Output: Sveiki, Anna!
        l10n.set_locale("en_US")
        print(l10n.get("Welcome").named("name", "Anna").value())
        # Output: Welcome, Anna!


def example_4_missing_bundles() -> None:
    """Example 4: What happens when a provider has no bundle."""
    print("\n" + "=" * 60)
    print("Example 4: Missing Bundles")
    print("=" * 60)

    catalog = CatalogBundleProvider({"en": {"Greeting": "Hello"}})

    strict = create_localize("en", default_locale="en")
    strict.register("app", catalog)
    try:
        strict.set_locale("ja")
    except MissingBundleError as e:
        print(f"[STRICT] provider {e.provider_key!r} has no bundle for {e.locale}")

    lenient = create_localize(
        "en",
        LocalizeConfig(ignore_missing_bundles=True, default_missing_value="<missing>"),
        default_locale="en",
    )
    lenient.register("app", catalog)
    lenient.set_locale("ja")
    print(f"[LENIENT] Greeting: {lenient.get_value('Greeting')}")
    # Output: [LENIENT] Greeting: <missing>


if __name__ == "__main__":
    example_1_priority()
    example_2_locale_fallback()
    example_3_json_files()
    example_4_missing_bundles()

    print("\n" + "=" * 60)
    print("[SUCCESS] All provider examples complete!")
    print("=" * 60)
