"""Reactive binding layer.

Bindings are localized strings that recompute when the active locale
changes, when bundles are refreshed, or when an observable argument
changes. Notifications are delivered on a single owning execution context.

Submodules:
    observable   - ObservableValue protocol, ObservableProperty
    context      - ExecutionContext protocol, asyncio and queue contexts
    binding      - Binding, ReactiveValueBuilder
    orchestrator - ReactiveLocalize, LocaleProperty, create_reactive_localize

Python 3.13+. Depends on Babel for Locale.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from localize.reactive.binding import Binding, ReactiveValueBuilder
from localize.reactive.context import (
    AsyncioExecutionContext,
    ExecutionContext,
    QueueExecutionContext,
    run_on_owner,
)
from localize.reactive.observable import ObservableProperty, ObservableValue
from localize.reactive.orchestrator import (
    LocaleProperty,
    ReactiveLocalize,
    create_reactive_localize,
)

__all__ = [
    # Engine
    "ReactiveLocalize",
    "create_reactive_localize",
    "LocaleProperty",
    # Bindings
    "Binding",
    "ReactiveValueBuilder",
    # Observables
    "ObservableProperty",
    "ObservableValue",
    # Execution contexts
    "ExecutionContext",
    "AsyncioExecutionContext",
    "QueueExecutionContext",
    "run_on_owner",
]
