"""Inline quote patterns (emphasis, strong, monospace, ...).

Constrained quotes are bounded by non-word characters::

    a *strong* word        matches
    a*b*c                  does not match

Unconstrained quotes (doubled delimiters) work anywhere::

    a**b**c                matches "b"

Quoted text may continue on at most one additional line.
"""

from __future__ import annotations

import re
from enum import Enum, auto
from functools import lru_cache

from pincel.categories import GroupRole
from pincel.charsets import CONSTRAINED_BOUNDARY_EXTRA
from pincel.errors import InvalidParameter
from pincel.patterns.core import Pattern, make_pattern

QUOTE_ATTRIBUTES = 1
QUOTE_OPEN = 2
QUOTE_TEXT = 3
QUOTE_CLOSE = 4


class QuoteKind(Enum):
    """Boundary behaviour of a quote."""

    CONSTRAINED = auto()
    UNCONSTRAINED = auto()


_ROLES = {
    QUOTE_ATTRIBUTES: GroupRole.META,
    QUOTE_OPEN: GroupRole.DELIMITER,
    QUOTE_TEXT: GroupRole.TEXT,
    QUOTE_CLOSE: GroupRole.DELIMITER,
}


@lru_cache(maxsize=64)
def quote(kind: QuoteKind, left: str, right: str | None = None) -> Pattern:
    """Pattern for a quoted span.

    Args:
        kind: CONSTRAINED or UNCONSTRAINED
        left: Opening delimiter
        right: Closing delimiter; defaults to ``left``

    Groups:
        1 optional ``[attributes]`` directly before the opening delimiter
        2 opening delimiter
        3 quoted text
        4 closing delimiter

    Raises:
        InvalidParameter: For an unknown kind or empty delimiters
    """
    if not isinstance(kind, QuoteKind):
        raise InvalidParameter("kind", kind, "expected a QuoteKind")
    if right is None:
        right = left
    for parameter, value in (("left", left), ("right", right)):
        if not isinstance(value, str) or not value or any(c.isspace() for c in value):
            raise InvalidParameter(parameter, value, "quote delimiters must be non-empty and contain no whitespace")

    qleft = re.escape(left)
    qright = re.escape(right)
    extra = re.escape(CONSTRAINED_BOUNDARY_EXTRA)

    if kind is QuoteKind.CONSTRAINED:
        expression = rf"""
            (?<![\w{extra}\\])                  # no word char before
            (\[[^\[\]\n]+\])?                   # 1 attributes
            ({qleft})                           # 2 opening delimiter
            (\S|\S[^\n]*?(?:\n[^\n]*?)??\S)     # 3 text, no outer whitespace
            ({qright})                          # 4 closing delimiter
            (?!\w)                              # no word char after
        """
    else:
        expression = rf"""
            (?<!\\)
            (\[[^\[\]\n]+\])?                   # 1 attributes
            ({qleft})                           # 2 opening delimiter
            ([^\n]+?(?:\n[^\n]+?)??)            # 3 text
            ({qright})                          # 4 closing delimiter
        """
    name = f"{kind.name.lower()}-quote-{left}{right}"
    return make_pattern(name, expression, _ROLES)
