"""CLDR plural rules implementation using Babel.

Provides plural category selection for all locales using Babel's CLDR data.

Python 3.13+. Depends on Babel for CLDR data.

Reference: https://www.unicode.org/cldr/charts/47/supplemental/language_plural_rules.html
"""

from __future__ import annotations

from decimal import Decimal

from babel import Locale

__all__ = ["select_plural_category"]


def select_plural_category(
    n: int | float | Decimal,
    locale: Locale | None,
    *,
    ordinal: bool = False,
) -> str:
    """Select CLDR plural category for number using Babel's CLDR data.

    Args:
        n: Number to categorize
        locale: Babel Locale, or None when the bundle carries no locale
        ordinal: Use ordinal rules (1st, 2nd, 3rd) instead of cardinal rules

    Returns:
        Plural category: "zero", "one", "two", "few", "many", or "other"

    Examples:
        >>> select_plural_category(0, Locale.parse("lv_LV"))
        'zero'
        >>> select_plural_category(1, Locale.parse("en_US"))
        'one'
        >>> select_plural_category(5, Locale.parse("ru_RU"))
        'many'
        >>> select_plural_category(2, Locale.parse("en"), ordinal=True)
        'two'

    Without a locale the most common pattern applies: n == 1 is "one",
    everything else is "other".
    """
    if locale is None:
        return "one" if abs(n) == 1 else "other"

    plural_rule = locale.ordinal_form if ordinal else locale.plural_form
    return plural_rule(n)
