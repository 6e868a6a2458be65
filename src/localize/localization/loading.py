"""Reference bundles and bundle providers.

The engine consumes any callable ``(Locale) -> Bundle``. This module ships
the implementations most applications start with:

Components:
    MappingBundle - Immutable in-memory key to template mapping
    CatalogBundleProvider - Provider over an in-memory {locale: {key: template}} catalog
    PathBundleProvider - Disk-based provider reading flat JSON files,
        with path-traversal prevention

Both providers resolve a locale through its fallback candidates
(en_US -> en -> root). Every candidate that exists contributes its keys,
more specific candidates overriding less specific ones, so a key missing
from ``en_US`` is still found in ``en`` or the root bundle. When no
candidate exists the provider raises MissingBundleError.

Python 3.13+. Depends on Babel for Locale.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from babel import Locale

from localize.diagnostics import Diagnostic, DiagnosticCode, MissingBundleError
from localize.locale_utils import fallback_candidates, normalize_locale
from localize.localization.types import MessageKey

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Bundle
    "MappingBundle",
    # Providers
    "CatalogBundleProvider",
    "PathBundleProvider",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MappingBundle:
    """Bundle backed by an in-memory mapping.

    The mapping is copied at construction and exposed read-only.

    Attributes:
        locale: Locale the bundle was produced for
        mapping: Key to template mapping

    Example:
        >>> bundle = MappingBundle(Locale.parse("en"), {"Greeting": "Hi"})
        >>> bundle.has("Greeting")
        True
        >>> bundle.get("Greeting")
        'Hi'
    """

    locale: Locale
    mapping: Mapping[MessageKey, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Freeze the mapping."""
        object.__setattr__(self, "mapping", MappingProxyType(dict(self.mapping)))

    def has(self, key: MessageKey) -> bool:
        """Return True if the bundle defines ``key``."""
        return key in self.mapping

    def get(self, key: MessageKey) -> str:
        """Return the raw template for ``key``.

        Raises:
            KeyError: If the bundle does not define ``key``
        """
        return self.mapping[key]

    def __len__(self) -> int:
        return len(self.mapping)


def _missing_bundle(
    name: str, locale: Locale, candidates: tuple[str, ...]
) -> MissingBundleError:
    diagnostic = Diagnostic(
        code=DiagnosticCode.BUNDLE_MISSING,
        message=f"No bundle '{name}' for locale {locale} (tried {', '.join(candidates)})",
        locale=str(locale),
        hint="Add a bundle for the locale, one of its parents, or the root locale",
    )
    return MissingBundleError(diagnostic, locale=str(locale))


class CatalogBundleProvider:
    """Bundle provider over an in-memory catalog.

    Catalog keys are locale codes in BCP-47 or POSIX form, plus ``"root"``
    for locale-neutral values.

    Example:
        >>> provider = CatalogBundleProvider({
        ...     "root": {"Farewell": "Bye"},
        ...     "en": {"Greeting": "Hello"},
        ...     "en_GB": {"Greeting": "Hello there"},
        ... })
        >>> bundle = provider(Locale.parse("en_GB"))
        >>> bundle.get("Greeting"), bundle.get("Farewell")
        ('Hello there', 'Bye')
    """

    __slots__ = ("_catalog", "_name")

    def __init__(
        self,
        catalog: Mapping[str, Mapping[MessageKey, str]],
        *,
        name: str = "catalog",
    ) -> None:
        """Initialize CatalogBundleProvider.

        Args:
            catalog: Mapping of locale code to key/template mapping
            name: Name used in MissingBundleError messages

        Raises:
            TypeError: If catalog is None
        """
        if catalog is None:
            msg = "catalog must not be None"
            raise TypeError(msg)
        self._catalog = {
            normalize_locale(code): MappingProxyType(dict(values))
            for code, values in catalog.items()
        }
        self._name = name

    @property
    def locales(self) -> tuple[str, ...]:
        """Locale codes the catalog holds bundles for."""
        return tuple(self._catalog)

    def __call__(self, locale: Locale) -> MappingBundle:
        """Produce the merged bundle for ``locale``.

        Raises:
            MissingBundleError: If no fallback candidate of ``locale`` is in the catalog
        """
        candidates = fallback_candidates(locale)
        found = [code for code in candidates if code in self._catalog]
        if not found:
            raise _missing_bundle(self._name, locale, candidates)

        merged: dict[MessageKey, str] = {}
        for code in reversed(found):
            merged.update(self._catalog[code])
        logger.debug("Catalog '%s' resolved %s from %s", self._name, locale, found)
        return MappingBundle(locale, merged)

    def __repr__(self) -> str:
        return f"CatalogBundleProvider(name={self._name!r}, locales={self.locales!r})"


@dataclass(frozen=True, slots=True)
class PathBundleProvider:
    """File system bundle provider using path templates.

    Reads flat JSON objects (``{"Key": "template", ...}``) from
    ``<base_path with {locale} substituted>/<resource_id>``. The root
    locale's file lives under the directory named ``root``.

    Security:
        Locale codes containing path separators or ".." are rejected.
        Resource IDs containing ".." or absolute paths are rejected.
        All resolved paths are validated against a fixed root directory.

    Example:
        >>> provider = PathBundleProvider("locales/{locale}", "messages.json")
        >>> bundle = provider(Locale.parse("en_US"))
        # Reads locales/root/messages.json, locales/en/messages.json and
        # locales/en_US/messages.json, whichever exist

    Attributes:
        base_path: Path template with {locale} placeholder
        resource_id: JSON file name inside each locale directory
        root_dir: Fixed root directory for path traversal validation.
                  Defaults to the static prefix of base_path.
    """

    base_path: str
    resource_id: str
    root_dir: str | None = None
    _resolved_root: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate the template and resource id, and cache the root directory.

        Raises:
            ValueError: If base_path lacks the {locale} placeholder or
                resource_id is unsafe
        """
        if "{locale}" not in self.base_path:
            msg = (
                f"base_path must contain '{{locale}}' placeholder for locale substitution, "
                f"got: '{self.base_path}'"
            )
            raise ValueError(msg)
        self._validate_resource_id(self.resource_id)

        if self.root_dir is not None:
            resolved = Path(self.root_dir).resolve()
        else:
            static_prefix = self.base_path.split("{locale}")[0].rstrip("/\\")
            resolved = Path(static_prefix).resolve() if static_prefix else Path.cwd().resolve()
        object.__setattr__(self, "_resolved_root", resolved)

    @staticmethod
    def _validate_locale(locale_code: str) -> None:
        if not locale_code:
            msg = "Locale code cannot be empty"
            raise ValueError(msg)
        if ".." in locale_code:
            msg = f"Path traversal sequences not allowed in locale: '{locale_code}'"
            raise ValueError(msg)
        if "/" in locale_code or "\\" in locale_code:
            msg = f"Path separators not allowed in locale: '{locale_code}'"
            raise ValueError(msg)

    @staticmethod
    def _validate_resource_id(resource_id: str) -> None:
        if not resource_id or resource_id.strip() != resource_id:
            msg = f"Resource ID must be non-empty without surrounding whitespace: {resource_id!r}"
            raise ValueError(msg)
        if Path(resource_id).is_absolute() or resource_id.startswith(("/", "\\")):
            msg = f"Absolute paths not allowed in resource_id: '{resource_id}'"
            raise ValueError(msg)
        if ".." in resource_id:
            msg = f"Path traversal sequences not allowed in resource_id: '{resource_id}'"
            raise ValueError(msg)

    def describe_path(self, locale_code: str) -> str:
        """Return the human-readable path of one candidate's file."""
        return f"{self.base_path.replace('{locale}', locale_code)}/{self.resource_id}"

    def _resolve(self, locale_code: str) -> Path:
        self._validate_locale(locale_code)
        # replace() rather than format() so other braces in the template survive
        locale_dir = Path(self.base_path.replace("{locale}", locale_code))
        full_path = (locale_dir / self.resource_id).resolve()
        try:
            full_path.relative_to(self._resolved_root)
        except ValueError:
            msg = (
                f"Path traversal detected: resolved path escapes root directory. "
                f"locale='{locale_code}', resource_id='{self.resource_id}'"
            )
            raise ValueError(msg) from None
        return full_path

    def _read(self, locale_code: str) -> dict[MessageKey, str] | None:
        path = self._resolve(locale_code)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

        data = json.loads(text)
        if not isinstance(data, dict) or not all(
            isinstance(key, str) and isinstance(value, str) for key, value in data.items()
        ):
            msg = (
                "Bundle file must hold a flat JSON object of strings: "
                f"{self.describe_path(locale_code)}"
            )
            raise ValueError(msg)
        return data

    def __call__(self, locale: Locale) -> MappingBundle:
        """Read and merge the bundle files for ``locale``.

        Raises:
            MissingBundleError: If no fallback candidate has a file
            ValueError: If a locale or path is unsafe, or a file is not a
                flat JSON object of strings
            OSError: If an existing file cannot be read
        """
        candidates = fallback_candidates(locale)
        layers: list[dict[MessageKey, str]] = []
        for code in candidates:
            data = self._read(code)
            if data is not None:
                logger.debug("Loaded %s", self.describe_path(code))
                layers.append(data)
        if not layers:
            raise _missing_bundle(self.resource_id, locale, candidates)

        merged: dict[MessageKey, str] = {}
        for layer in reversed(layers):
            merged.update(layer)
        return MappingBundle(locale, merged)

