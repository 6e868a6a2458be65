"""Shared constants for localize.

Centralized values used across the localization, runtime, and reactive
packages. Keeping them here avoids circular imports and gives one place
to look up defaults.

Constants are grouped by domain:
- Configuration defaults: initial LocalizeConfig values
- Locale defaults: fallback locale when detection fails
- Fallback strings: rendering of unresolvable placeholders
- Template limits: nesting depth accepted by the message formatter
- Logging limits: truncation of values in log lines

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Configuration defaults
    "DEFAULT_MISSING_VALUE",
    # Locale defaults
    "FALLBACK_LOCALE",
    "ROOT_LOCALE",
    # Fallback strings
    "FALLBACK_MISSING_ARGUMENT",
    "NULL_ARGUMENT",
    # Template limits
    "MAX_DEPTH",
    # Logging limits
    "LOG_TRUNCATE_DEBUG",
    "LOG_TRUNCATE_WARNING",
]

# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================

# Value returned for keys that no provider can resolve (throw_when_not_found off).
DEFAULT_MISSING_VALUE: str = ""

# ============================================================================
# LOCALE DEFAULTS
# ============================================================================

# Used when the system locale cannot be detected or parsed.
FALLBACK_LOCALE: str = "en_US"

# Candidate name for locale-neutral ("base") bundles in fallback chains.
ROOT_LOCALE: str = "root"

# ============================================================================
# FALLBACK STRINGS
# ============================================================================

# Placeholder rendered when an argument referenced by a template is absent.
# Format string - use .format(name=...)
FALLBACK_MISSING_ARGUMENT: str = "{{{name}}}"  # e.g., {count}

# Rendering of a None argument value.
NULL_ARGUMENT: str = "null"

# ============================================================================
# TEMPLATE LIMITS
# ============================================================================

# Maximum nesting of plural/select arguments inside one template.
MAX_DEPTH: int = 100

# ============================================================================
# LOGGING LIMITS
# ============================================================================

# Warnings show more context as they're surfaced to users.
LOG_TRUNCATE_WARNING: int = 100

# Debug messages are high-volume; shorter keeps logs manageable.
LOG_TRUNCATE_DEBUG: int = 50
