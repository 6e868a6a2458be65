"""Localization package: registry, builder and resolution engine.

Provides the non-reactive localization stack: type aliases and protocols,
request and configuration value types, the provider registry, the argument
builder, reference bundle providers, and the resolution engine.

Submodules:
    types        - PEP 695 type aliases and Bundle / LocalizationKey protocols
    request      - LocalizationRequest, LocalizeConfig
    registry     - ProviderEntry, ProviderRegistry (copy-on-write)
    builder      - ValueBuilder (positional/named argument state machine)
    loading      - MappingBundle, CatalogBundleProvider, PathBundleProvider
    orchestrator - Localize (resolution engine), create_localize

Python 3.13+. Depends on Babel for Locale.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from localize.enums import ArgumentMode
from localize.localization.builder import ValueBuilder
from localize.localization.loading import (
    CatalogBundleProvider,
    MappingBundle,
    PathBundleProvider,
)
from localize.localization.orchestrator import Localize, create_localize, resolve_key
from localize.localization.registry import ProviderEntry, ProviderRegistry
from localize.localization.request import LocalizationRequest, LocalizeConfig
from localize.localization.types import (
    Bundle,
    BundleProvider,
    FormattingStrategy,
    LocalizationKey,
    MessageKey,
    ProviderKey,
)

__all__ = [
    # Engine
    "Localize",
    "create_localize",
    "resolve_key",
    # Values and configuration
    "LocalizationRequest",
    "LocalizeConfig",
    # Argument builder
    "ArgumentMode",
    "ValueBuilder",
    # Registry
    "ProviderEntry",
    "ProviderRegistry",
    # Reference bundles and providers
    "MappingBundle",
    "CatalogBundleProvider",
    "PathBundleProvider",
    # Type aliases and protocols for user code annotations
    "Bundle",
    "BundleProvider",
    "FormattingStrategy",
    "LocalizationKey",
    "MessageKey",
    "ProviderKey",
]
