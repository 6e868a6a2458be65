"""Argument builder for localized value requests.

A ValueBuilder accumulates the arguments of one request, enforcing that
positional and named arguments are never mixed, and then hands an
immutable LocalizationRequest to a resolve callback supplied by the
engine. The builder itself knows nothing about providers or bundles;
the reactive layer reuses the same accumulated snapshot for bindings.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Self

from localize.diagnostics import ArgumentModeError, Diagnostic, DiagnosticCode
from localize.enums import ArgumentMode
from localize.localization.request import LocalizationRequest
from localize.localization.types import MessageKey

__all__ = ["ValueBuilder"]

type Resolver = Callable[[LocalizationRequest], str]


class ValueBuilder:
    """Builder for one formatted localized value.

    Builders are NOT thread-safe and are meant to be used by a single
    caller for a single request.

    Positional and named arguments are mutually exclusive. The first
    argument added fixes the builder's mode; adding an argument of the
    other kind raises ArgumentModeError.

    Example - positional:
        >>> l10n.get("MyApp.say").arg("Hi").arg("Anna").value()
        'Hi, Anna'
        >>> l10n.get("MyApp.say").args("Hi", "Anna").value()
        'Hi, Anna'

    Example - named (insertion order does not matter):
        >>> l10n.get("MyApp.people").named("location", "campus").named("num_people", 100).value()
        'There are 100 people on campus.'
        >>> l10n.get("MyApp.people").named_args({"num_people": 0, "location": "campus"}).value()
        'There are no people on campus.'

    Example - mixing is an error:
        >>> l10n.get("MyApp.say").arg("Hi").named("name", "Anna")
        Traceback (most recent call last):
        ...
        localize.diagnostics.errors.ArgumentModeError: ...
    """

    __slots__ = ("_arguments", "_key", "_mode", "_resolve")

    def __init__(self, key: MessageKey, resolve: Resolver) -> None:
        """Initialize ValueBuilder.

        Args:
            key: Key to request a formatted localized value for
            resolve: Callback turning the built request into a string

        Raises:
            TypeError: If key or resolve is None
        """
        if key is None:
            msg = "key must not be None"
            raise TypeError(msg)
        if resolve is None:
            msg = "resolve must not be None"
            raise TypeError(msg)
        self._key = key
        self._resolve = resolve
        self._arguments: dict[str, Any] = {}
        self._mode = ArgumentMode.UNSET

    @property
    def key(self) -> MessageKey:
        """Key this builder requests a value for."""
        return self._key

    @property
    def mode(self) -> ArgumentMode:
        """Argument mode adopted so far."""
        return self._mode

    @property
    def arguments(self) -> Mapping[str, Any]:
        """Copy of the arguments accumulated so far."""
        return dict(self._arguments)

    def arg(self, value: Any) -> Self:
        """Add a positional argument at the next index.

        Args:
            value: Argument value (may be None)

        Returns:
            This builder

        Raises:
            ArgumentModeError: If named arguments were added before
        """
        self._enter_mode(ArgumentMode.POSITIONAL)
        self._arguments[str(len(self._arguments))] = value
        return self

    def args(self, *values: Any) -> Self:
        """Add positional arguments in order.

        Calling with no values is a no-op and does not fix the mode.

        Returns:
            This builder

        Raises:
            ArgumentModeError: If named arguments were added before
        """
        if not values:
            return self
        self._enter_mode(ArgumentMode.POSITIONAL)
        for value in values:
            self._arguments[str(len(self._arguments))] = value
        return self

    def named(self, name: str, value: Any) -> Self:
        """Add (or overwrite) a named argument.

        Args:
            name: Argument name
            value: Argument value (may be None)

        Returns:
            This builder

        Raises:
            TypeError: If name is None
            ArgumentModeError: If positional arguments were added before
        """
        if name is None:
            msg = "Argument name must not be None"
            raise TypeError(msg)
        self._enter_mode(ArgumentMode.NAMED)
        self._arguments[name] = value
        return self

    def named_args(self, arguments: Mapping[str, Any]) -> Self:
        """Add every pair of ``arguments`` as named arguments.

        Returns:
            This builder

        Raises:
            TypeError: If arguments or any name in it is None
            ArgumentModeError: If positional arguments were added before
        """
        if arguments is None:
            msg = "arguments must not be None"
            raise TypeError(msg)
        for name, value in arguments.items():
            self.named(name, value)
        return self

    def build(self) -> LocalizationRequest:
        """Snapshot the accumulated arguments into an immutable request.

        Does not resolve anything; the builder stays usable afterwards.
        """
        return LocalizationRequest(self._key, self._arguments)

    def value(self) -> str:
        """Resolve the built request into a formatted localized string."""
        return self._resolve(self.build())

    def _enter_mode(self, mode: ArgumentMode) -> None:
        if self._mode is ArgumentMode.UNSET:
            self._mode = mode
        elif self._mode is not mode:
            diagnostic = Diagnostic(
                code=DiagnosticCode.ARGUMENT_MODE_CONFLICT,
                message=f"Cannot add {mode} argument: builder already holds {self._mode} arguments",
                key=self._key,
                hint="Use either arg()/args() or named()/named_args() on one builder, not both",
            )
            raise ArgumentModeError(diagnostic, key=self._key)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(key={self._key!r}, mode={self._mode.value}, "
            f"arguments={len(self._arguments)})"
        )
