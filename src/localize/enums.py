"""Enumerations for localize type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class ArgumentMode(StrEnum):
    """Argument indexing convention adopted by a ValueBuilder.

    A builder starts UNSET and moves to exactly one of NAMED or POSITIONAL
    on the first argument it accepts. The move is permanent.

    StrEnum provides automatic string conversion: str(ArgumentMode.NAMED) == "named"
    """

    UNSET = "unset"
    """No argument added yet"""

    NAMED = "named"
    """Arguments keyed by caller-chosen names: {name}"""

    POSITIONAL = "positional"
    """Arguments keyed by call order: {0}, {1}, ..."""


__all__ = [
    "ArgumentMode",
]
