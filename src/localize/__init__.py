"""localize - priority-ordered bundle localization with reactive bindings.

Resolves a key plus optional arguments into a locale-appropriate string.
Values come from an ordered set of pluggable bundle providers: the first
registered provider that has the key wins. Bindings recompute when the
active locale or an observable argument changes.

Public API:
    Localize - Resolution engine over priority-ordered providers
    ReactiveLocalize - Engine whose values can be bound reactively
    create_localize / create_reactive_localize - Engine factories
    LocalizeConfig - Policy flags for missing values, bundles and errors
    LocalizationRequest - Immutable key plus arguments
    ObservableProperty - Mutable observable holder for binding arguments
    CatalogBundleProvider / PathBundleProvider - Reference providers

Exceptions:
    LocalizeError - Base exception class
    MissingBundleError - A provider has no bundle for a locale
    ValueNotFoundError - No provider has a value for a key
    MessageFormatError - A message template could not be formatted
    ArgumentModeError - Positional and named arguments were mixed

Submodules:
    localize.localization - Registry, builder, engine, reference providers
    localize.reactive - Bindings, observables, execution contexts
    localize.runtime - Default formatting strategy and message formatter
    localize.diagnostics - Error codes and exception types
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

# Essential Public API - Minimal exports for clean namespace
from .diagnostics import (
    ArgumentModeError,
    LocalizeError,
    MessageFormatError,
    MissingBundleError,
    ValueNotFoundError,
)
from .localization import (
    CatalogBundleProvider,
    LocalizationRequest,
    Localize,
    LocalizeConfig,
    MappingBundle,
    PathBundleProvider,
    create_localize,
)
from .reactive import ObservableProperty, ReactiveLocalize, create_reactive_localize
from .runtime import DEFAULT_FORMATTING_STRATEGY, format_message

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    __version__ = _get_version("localize")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "ArgumentModeError",
    "CatalogBundleProvider",
    "DEFAULT_FORMATTING_STRATEGY",
    "LocalizationRequest",
    "Localize",
    "LocalizeConfig",
    "LocalizeError",
    "MappingBundle",
    "MessageFormatError",
    "MissingBundleError",
    "ObservableProperty",
    "PathBundleProvider",
    "ReactiveLocalize",
    "ValueNotFoundError",
    "__version__",
    "create_localize",
    "create_reactive_localize",
    "format_message",
]
