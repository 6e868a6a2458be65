"""Diagnostic system for localize errors.

Provides structured error diagnostics with codes, keys, and hints.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    ArgumentModeError,
    LocalizeError,
    MessageFormatError,
    MissingBundleError,
    ValueNotFoundError,
)

__all__ = [
    "ArgumentModeError",
    "Diagnostic",
    "DiagnosticCode",
    "LocalizeError",
    "MessageFormatError",
    "MissingBundleError",
    "ValueNotFoundError",
]
