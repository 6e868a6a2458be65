"""Locale utilities for BCP-47 to POSIX conversion and Babel coercion.

Centralizes locale normalization used throughout the codebase. Locales
enter the public API either as ``babel.Locale`` instances or as strings;
strings are normalized and parsed exactly once at that boundary so the
engine only ever compares and stores ``babel.Locale`` objects.

Python 3.13+. Depends on Babel for CLDR locale data.
"""

from __future__ import annotations

import functools
import logging
import os

from babel import Locale
from babel.core import UnknownLocaleError

from localize.constants import FALLBACK_LOCALE, ROOT_LOCALE

__all__ = [
    "coerce_locale",
    "fallback_candidates",
    "get_babel_locale",
    "get_system_babel_locale",
    "get_system_locale",
    "normalize_locale",
]

logger = logging.getLogger(__name__)


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    BCP-47 uses hyphens (en-US), while Babel/POSIX uses underscores (en_US).

    Args:
        locale_code: BCP-47 locale code (e.g., "en-US", "pt-BR")

    Returns:
        POSIX-formatted locale code (e.g., "en_US", "pt_BR")

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("en")  # Already normalized
        'en'
    """
    return locale_code.replace("-", "_")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Parses the locale code once and caches the result. Thread-safe via
    lru_cache internal locking.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    return Locale.parse(normalize_locale(locale_code))


def coerce_locale(locale: Locale | str) -> Locale:
    """Return ``locale`` as a Babel Locale.

    Args:
        locale: Babel Locale, or a BCP-47/POSIX locale code

    Returns:
        Babel Locale object

    Raises:
        TypeError: If locale is neither a Locale nor a string
        ValueError: If the string is empty or not a valid locale code
        babel.core.UnknownLocaleError: If the locale has no CLDR data
    """
    if isinstance(locale, Locale):
        return locale
    if isinstance(locale, str):
        if not locale.strip():
            msg = "Locale code cannot be empty"
            raise ValueError(msg)
        return get_babel_locale(locale.strip())
    msg = f"Expected babel.Locale or str, got {type(locale).__name__}"
    raise TypeError(msg)


def fallback_candidates(locale: Locale) -> tuple[str, ...]:
    """List the locale codes to try for a bundle, most specific first.

    Mirrors CLDR inheritance: every trailing subtag is dropped in turn and
    the chain ends with the locale-neutral root.

    Example:
        >>> fallback_candidates(Locale.parse("zh_Hant_TW"))
        ('zh_Hant_TW', 'zh_Hant', 'zh', 'root')
        >>> fallback_candidates(Locale.parse("en"))
        ('en', 'root')
    """
    parts = str(locale).split("_")
    candidates = ["_".join(parts[:end]) for end in range(len(parts), 0, -1)]
    candidates.append(ROOT_LOCALE)
    return tuple(candidates)


def get_system_locale(*, raise_on_failure: bool = False) -> str:
    """Detect system locale from OS and environment variables.

    Detection order:
    1. Python locale.getlocale() (OS-level locale)
    2. LC_ALL environment variable (overrides all)
    3. LC_MESSAGES environment variable (for message catalogs)
    4. LANG environment variable (default locale)

    Filters out "C" and "POSIX" pseudo-locales.

    Args:
        raise_on_failure: If True, raise RuntimeError when locale cannot be
            determined. If False (default), return "en_US" as fallback.

    Returns:
        Detected locale code in POSIX format.

    Raises:
        RuntimeError: If raise_on_failure is True and locale cannot be determined.
    """
    import locale as locale_module  # noqa: PLC0415

    try:
        system_locale, _ = locale_module.getlocale()
        system_locale = (system_locale or "").split(".")[0]
        if system_locale and system_locale not in ("C", "POSIX"):
            return normalize_locale(system_locale)
    except (ValueError, AttributeError):
        pass

    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        # Strip encoding suffix (e.g., ".UTF-8")
        value = os.environ.get(var, "").split(".")[0]
        if value and value not in ("C", "POSIX"):
            return normalize_locale(value)

    if raise_on_failure:
        msg = (
            "Could not determine system locale. "
            "Set LC_ALL, LC_MESSAGES, or LANG environment variable."
        )
        raise RuntimeError(msg)

    return FALLBACK_LOCALE


def get_system_babel_locale() -> Locale:
    """Detect the system locale as a Babel Locale.

    Falls back to ``FALLBACK_LOCALE`` when the detected code has no CLDR
    data. Callers pass the result as an engine's default_locale when they
    want the environment to decide.

    Returns:
        Babel Locale object
    """
    locale_code = get_system_locale()
    try:
        return get_babel_locale(locale_code)
    except (UnknownLocaleError, ValueError) as e:
        logger.warning(
            "Unknown system locale '%s': %s. Falling back to %s",
            locale_code,
            e,
            FALLBACK_LOCALE,
        )
        return get_babel_locale(FALLBACK_LOCALE)
