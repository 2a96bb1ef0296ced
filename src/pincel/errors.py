"""Exception classes for Pincel.

Provides standardized exceptions for error handling throughout Pincel.

Only configuration problems are raised to callers. A rule that finds no
acceptable occurrence in a region is a normal outcome (the matcher returns
an empty list), and reservation conflicts are retried inside the matcher.
"""

from __future__ import annotations

from typing import Any


class PincelError(Exception):
    """Base exception for all Pincel errors.

    Subclass this for specific error categories.
    """

    pass


class InvalidParameter(PincelError, ValueError):
    """Malformed construct parameters given to the pattern library.

    Raised at pattern-construction time (never while matching), e.g. for an
    unsupported nesting level, a two-line title delimiter that is not exactly
    two characters long, or a contradictory list level/sub-type combination.
    """

    def __init__(self, parameter: str, value: Any, message: str) -> None:
        """Initialize with the offending parameter.

        Args:
            parameter: Name of the parameter (e.g., "level", "delimiter")
            value: The rejected value
            message: Description of what is wrong
        """
        self.parameter = parameter
        self.value = value
        super().__init__(f"Invalid {parameter}={value!r}: {message}")


class UnresolvedReplacement(PincelError):
    """A replacement matched but no substitution text could be produced.

    Only raised when a caller asks for strict resolution. In normal
    classification the span keeps its REPLACEMENT category and carries no
    substitution text, so the presentation layer shows the source text.
    """

    def __init__(self, name: str, matched_text: str) -> None:
        """Initialize unresolved replacement error.

        Args:
            name: Name of the replacement rule (e.g., "named-entity")
            matched_text: Source text the rule matched
        """
        self.name = name
        self.matched_text = matched_text
        super().__init__(f"Replacement '{name}' could not resolve {matched_text!r}")
