"""Quickstart example for localize.

This example demonstrates basic usage of localize: registering a provider,
resolving keys with positional and named arguments, plurals, and the
policy flags that decide what happens when a key is missing.

Python 3.13+.
"""

from __future__ import annotations

from localize import (
    CatalogBundleProvider,
    LocalizeConfig,
    ValueNotFoundError,
    create_localize,
)

CATALOG = {
    "en": {
        "MyApp.hello": "Hello, World!",
        "MyApp.say": "{0}, {1}",
        "MyApp.people": (
            "{num_people, plural, =0{There are no people} one{There is one person} "
            "other{There are # people}} on {location}."
        ),
        "MyApp.total": "Total: {amount, number}",
    },
    "de": {
        "MyApp.hello": "Hallo, Welt!",
        "MyApp.say": "{0}, {1}",
        "MyApp.people": (
            "{num_people, plural, =0{Niemand ist} one{Eine Person ist} "
            "other{# Personen sind}} in {location}."
        ),
        "MyApp.total": "Summe: {amount, number}",
    },
}

# Example 1: Simple value
print("=" * 50)
print("Example 1: Simple Value")
print("=" * 50)

l10n = create_localize("en", default_locale="en")
l10n.register("app", CatalogBundleProvider(CATALOG))

print(l10n.get_value("MyApp.hello"))
# Output: Hello, World!

# Example 2: Positional arguments
print("\n" + "=" * 50)
print("Example 2: Positional Arguments")
print("=" * 50)

print(l10n.get("MyApp.say").arg("Hi").arg("Anna").value())
# Output: Hi, Anna
print(l10n.get("MyApp.say").args("Hi", "Anna").value())
# Output: Hi, Anna

# Example 3: Named arguments and plurals
print("\n" + "=" * 50)
print("Example 3: Named Arguments and Plurals")
print("=" * 50)

for count in (0, 1, 100):
    print(l10n.get("MyApp.people").named("num_people", count).named("location", "campus").value())
# Output:
# There are no people on campus.
# There is one person on campus.
# There are 100 people on campus.

# Example 4: Switching locale
print("\n" + "=" * 50)
print("Example 4: Switching Locale")
print("=" * 50)

l10n.set_locale("de")
print(l10n.get_value("MyApp.hello"))
# Output: Hallo, Welt!
print(l10n.get("MyApp.total").named("amount", 1234.5).value())
# Output: Summe: 1.234,5

# Example 5: Missing keys
print("\n" + "=" * 50)
print("Example 5: Missing Keys")
print("=" * 50)

config = LocalizeConfig(default_missing_value="???")
l10n.set_config(config)
print(repr(l10n.get_value("MyApp.unknown")))
# Output: '???'

config.throw_when_not_found = True
try:
    l10n.get_value("MyApp.unknown")
except ValueNotFoundError as e:
    print(f"ValueNotFoundError: key={e.key!r}, searched {len(e.bundles)} bundle(s)")
