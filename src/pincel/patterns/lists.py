"""List item patterns.

Only the item's marker line prefix is matched; the item text is left to the
inline rules.

Unordered and numbered items share one group layout:
    1 leading whitespace
    2 marker
    3 whitespace between marker and text

Labeled items:
    1 leading whitespace
    2 label text, incl. whitespace before the delimiter
    3 delimiter incl. trailing whitespace
    4 delimiter only

Nesting levels are encoded by repeating the marker (unordered ``*``/``**``,
implicitly numbered ``.``/``..``) or by the delimiter (labeled ``::``/``;;``).
"""

from __future__ import annotations

import re
from functools import lru_cache

from pincel.categories import GroupRole
from pincel.charsets import (
    EXPLICIT_NUMBERING,
    IMPLICIT_MARKER,
    LABELED_DELIMITERS,
    MAX_IMPLICIT_LEVEL,
    MAX_UNORDERED_LEVEL,
    UNORDERED_LEVEL0_MARKER,
    UNORDERED_MARKER,
)
from pincel.errors import InvalidParameter
from pincel.patterns.core import Pattern, check_level, make_pattern

LIST_LEADING = 1
LIST_MARKER = 2
LIST_TRAILING = 3

LABEL_LEADING = 1
LABEL_TEXT = 2
LABEL_DELIMITER_WITH_SPACE = 3
LABEL_DELIMITER = 4

_ITEM_ROLES = {
    LIST_LEADING: GroupRole.META,
    LIST_MARKER: GroupRole.DELIMITER,
    LIST_TRAILING: GroupRole.META,
}

_LABEL_ROLES = {
    LABEL_LEADING: GroupRole.META,
    LABEL_TEXT: GroupRole.TEXT,
    LABEL_DELIMITER_WITH_SPACE: GroupRole.DELIMITER,
    LABEL_DELIMITER: GroupRole.DELIMITER,
}


def _item(name: str, marker: str, leading: str = r"[ \t]*") -> Pattern:
    expression = rf"""
        ^({leading})                # 1 leading whitespace
        ({marker})                  # 2 marker
        ([ \t]+)                    # 3 whitespace before the text
    """
    return make_pattern(name, expression, _ITEM_ROLES)


@lru_cache(maxsize=16)
def unordered_list_item(level: int | None = None, subtype: str | None = None) -> Pattern:
    """Pattern for an unordered list item.

    Args:
        level: 0 for ``-``, 1-5 for ``*`` repeated ``level`` times;
            None matches every level
        subtype: None/"normal", or "bibliography" (``+`` marker, which has
            no levels)

    Raises:
        InvalidParameter: For unsupported levels or a level given together
            with the bibliography sub-type
    """
    if subtype in (None, "normal"):
        check_level("unordered list item", level, MAX_UNORDERED_LEVEL)
        if level is None:
            marker = (
                f"{UNORDERED_LEVEL0_MARKER}|{re.escape(UNORDERED_MARKER)}{{1,{MAX_UNORDERED_LEVEL}}}"
            )
        elif level == 0:
            marker = UNORDERED_LEVEL0_MARKER
        else:
            marker = re.escape(UNORDERED_MARKER) * level
        name = "unordered-item" if level is None else f"unordered-item-{level}"
        return _item(name, marker)
    if subtype == "bibliography":
        if level is not None:
            raise InvalidParameter(
                "level", level, "bibliography list items have no nesting level"
            )
        return _item("unordered-item-bibliography", r"\+")
    raise InvalidParameter("subtype", subtype, "unordered list items: 'normal' or 'bibliography'")


@lru_cache(maxsize=8)
def explicit_list_item(subtype: int | None = None, level: int | None = None) -> Pattern:
    """Pattern for an explicitly numbered list item (``1.``, ``a.``, ``iv)``).

    Args:
        subtype: Index into decimal, lower alpha, upper alpha, lower roman,
            upper roman; None matches all of them
        level: Must be None; explicit numbering carries no nesting level

    Raises:
        InvalidParameter: If a level is given or the subtype is unknown
    """
    if level is not None:
        raise InvalidParameter("level", level, "explicitly numbered items have no nesting level")
    if subtype is None:
        marker = "|".join(EXPLICIT_NUMBERING)
        name = "explicit-item"
    else:
        check_level("explicit list item subtype", subtype, len(EXPLICIT_NUMBERING) - 1)
        marker = EXPLICIT_NUMBERING[subtype]
        name = f"explicit-item-{subtype}"
    return _item(name, marker)


@lru_cache(maxsize=8)
def implicit_list_item(level: int | None = None) -> Pattern:
    """Pattern for an implicitly numbered list item (``.`` to ``.....``).

    Args:
        level: 0-4, the marker is ``level + 1`` dots; None matches all

    Raises:
        InvalidParameter: For levels outside 0-4
    """
    check_level("implicit list item", level, MAX_IMPLICIT_LEVEL)
    if level is None:
        marker = f"{re.escape(IMPLICIT_MARKER)}{{1,{MAX_IMPLICIT_LEVEL + 1}}}"
        name = "implicit-item"
    else:
        marker = re.escape(IMPLICIT_MARKER) * (level + 1)
        name = f"implicit-item-{level}"
    return _item(name, marker)


@lru_cache(maxsize=1)
def callout_list_item() -> Pattern:
    """Pattern for a callout list item (``<1> text``); the number is required."""
    return _item("callout-item", r"<[0-9]+>", leading="")


@lru_cache(maxsize=16)
def labeled_list_item(level: int | None = None, subtype: str = "normal") -> Pattern:
    """Pattern for a labeled list item (``label:: text``).

    Args:
        level: 0-3 selecting ``::``, ``;;``, ``:::``, ``::::``; required for
            the normal subtype
        subtype: "normal", "qanda" (``question??``) or "horizontal"
            (``label::`` at end of line); the latter two take no level

    Groups 1-4 as described in the module docstring. The label must not end
    with the delimiter's first character, so ``a:::`` is never read as label
    ``a:`` with delimiter ``::``.

    Raises:
        InvalidParameter: For unknown subtypes or contradictory levels
    """
    if subtype == "normal":
        if level is None:
            raise InvalidParameter("level", level, "normal labeled items need a level 0-3")
        check_level("labeled list item", level, len(LABELED_DELIMITERS) - 1)
        raw = LABELED_DELIMITERS[level]
        delimiter = re.escape(raw)
        first = re.escape(raw[0])
        expression = rf"""
            ^([ \t]*)                       # 1 leading whitespace
            ([^\n]*?[^{first}\n])           # 2 label, up to the first delimiter
            (({delimiter})(?:[ \t]+|$))     # 3 delimiter incl. whitespace, 4 delimiter
        """
        return make_pattern(f"labeled-item-{level}", expression, _LABEL_ROLES)

    if level is not None:
        raise InvalidParameter("level", level, f"labeled {subtype} items have no nesting level")
    if subtype == "qanda":
        expression = r"""
            ^([ \t]*)                       # 1 leading whitespace
            ([^\n]*[^ \t\n])                # 2 question
            ((\?\?))$                       # 3, 4 delimiter
        """
        return make_pattern("labeled-item-qanda", expression, _LABEL_ROLES)
    if subtype == "horizontal":
        expression = r"""
            ^([ \t]*)                       # 1 leading whitespace
            ([^\n]*[^ \t\n:])               # 2 label
            ((::))[ \t]*$                   # 3, 4 delimiter
        """
        return make_pattern("labeled-item-horizontal", expression, _LABEL_ROLES)
    raise InvalidParameter("subtype", subtype, "labeled items: 'normal', 'qanda' or 'horizontal'")
