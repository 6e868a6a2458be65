"""Diagnostic codes and data structures.

Defines error codes and the structured diagnostic carried by every
localize exception.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Lookup errors (missing values, missing bundles)
        2000-2999: Processing errors (formatting strategy failures)
        3000-3999: Usage errors (programming mistakes at the call site)
    """

    # Lookup errors (1000-1999)
    VALUE_NOT_FOUND = 1001
    BUNDLE_MISSING = 1002

    # Processing errors (2000-2999)
    PROCESSING_FAILED = 2001
    TEMPLATE_INVALID = 2002

    # Usage errors (3000-3999)
    ARGUMENT_MODE_CONFLICT = 3001


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        key: Message key or provider key involved (optional)
        locale: Locale code active when the error occurred (optional)
        hint: Suggestion for fixing the error (optional)
    """

    code: DiagnosticCode
    message: str
    key: str | None = None
    locale: str | None = None
    hint: str | None = None

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic in compiler style.

        Example output:
            error[VALUE_NOT_FOUND]: No bundle contains a value for 'Greeting'
              = key: Greeting
              = locale: en_US
              = help: Register a provider whose bundle defines the key

        Control characters in the message are escaped so the result is safe
        to write to single-line log records.

        Returns:
            Formatted error message
        """
        lines = [f"error[{self.code.name}]: {_escape(self.message)}"]
        if self.key is not None:
            lines.append(f"  = key: {_escape(self.key)}")
        if self.locale is not None:
            lines.append(f"  = locale: {self.locale}")
        if self.hint is not None:
            lines.append(f"  = help: {self.hint}")
        return "\n".join(lines)


def _escape(text: str) -> str:
    return text.replace("\r", "\\r").replace("\n", "\\n").replace("\t", "\\t")
