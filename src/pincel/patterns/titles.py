"""Heading (title) patterns.

One-line titles::

    == Section title
    == Section title ==

Two-line titles (text underlined with a repeated two-character delimiter)::

    Section title
    -------------

A two-line title match is only a candidate: the underline must also be about
as long as the text (see ``two_line_title_guard``). Without that check, any
line of text directly above a delimited block's opening line would look
like a title.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from enum import Enum, auto
from functools import lru_cache

from pincel.categories import GroupRole
from pincel.charsets import MAX_TITLE_LEVEL, TITLE_MARKER
from pincel.errors import InvalidParameter
from pincel.patterns.core import Pattern, check_level, make_pattern


class TitleKind(Enum):
    """How a title is written."""

    ONE_LINE = auto()
    TWO_LINE = auto()


class TitleSubtype(Enum):
    """Delimiter style of a one-line title."""

    LEADING_ONLY = auto()  # == Title
    LEADING_AND_TRAILING = auto()  # == Title ==


# One-line title groups
ONE_LINE_LEADING = 1  # leading delimiter incl. whitespace up to the text
ONE_LINE_TEXT = 2
ONE_LINE_TRAILING = 3  # whitespace, optional trailing delimiter, newline
ONE_LINE_TRAILING_DELIMITER = 4

# Two-line title groups
TWO_LINE_TEXT = 2
TWO_LINE_UNDERLINE = 3


@lru_cache(maxsize=64)
def one_line_title(
    level: int | None = None,
    subtype: TitleSubtype | None = None,
    max_level: int = MAX_TITLE_LEVEL,
) -> Pattern:
    """Pattern for a one-line title.

    Args:
        level: Title level 0..max_level; None matches any level
        subtype: Restrict to titles without (LEADING_ONLY) or with
            (LEADING_AND_TRAILING) the symmetric trailing delimiter;
            None accepts both
        max_level: Highest level matched when ``level`` is None

    Groups:
        1 leading delimiter incl. whitespace between delimiter and text
        2 title text, without leading/trailing whitespace
        3 trailing whitespace, optional trailing delimiter and the newline;
          at least one character long except at the end of the buffer
        4 trailing delimiter only

    Raises:
        InvalidParameter: For levels outside 0..max_level
    """
    check_level("max_level", max_level, MAX_TITLE_LEVEL)
    check_level("one-line title", level, max_level)
    if subtype is not None and not isinstance(subtype, TitleSubtype):
        raise InvalidParameter("subtype", subtype, "expected a TitleSubtype")

    if level is None:
        delimiter = f"{TITLE_MARKER}{{1,{max_level + 1}}}"
    else:
        delimiter = TITLE_MARKER * (level + 1)

    guard = ""
    trailing = rf"((?:[ \t]+({delimiter}))?[ \t]*(?:\n|\Z))"
    if subtype is TitleSubtype.LEADING_ONLY:
        guard = rf"(?![^\n]*[ \t]{delimiter}[ \t]*$)"
    elif subtype is TitleSubtype.LEADING_AND_TRAILING:
        trailing = rf"([ \t]+({delimiter})[ \t]*(?:\n|\Z))"

    expression = rf"""
        ^{guard}
        ({delimiter}[ \t]+)         # 1 leading delimiter
        ([^ \t\n][^\n]*?)           # 2 text
        {trailing}                  # 3 trailing part, 4 trailing delimiter
    """
    name = "one-line-title" if level is None else f"one-line-title-{level}"
    if subtype is not None:
        name += f"-{subtype.name.lower()}"
    return make_pattern(
        name,
        expression,
        {
            ONE_LINE_LEADING: GroupRole.DELIMITER,
            ONE_LINE_TEXT: GroupRole.TEXT,
            ONE_LINE_TRAILING: GroupRole.DELIMITER,
            ONE_LINE_TRAILING_DELIMITER: GroupRole.DELIMITER,
        },
    )


@lru_cache(maxsize=16)
def two_line_title(delimiter: str) -> Pattern:
    """Pattern for a two-line title candidate.

    Matching this pattern is necessary but not sufficient; combine it with
    ``two_line_title_guard`` for the underline length check.

    Args:
        delimiter: Exactly two characters; the underline repeats them

    Groups:
        1 empty, so that group 2 is the text as for one-line titles
        2 title text; starts with a word character
        3 underline

    Raises:
        InvalidParameter: If ``delimiter`` is not exactly two characters
    """
    if not isinstance(delimiter, str) or len(delimiter) != 2:
        raise InvalidParameter(
            "delimiter", delimiter, "two-line title delimiters must be exactly 2 characters"
        )
    first = re.escape(delimiter[0])
    pair = re.escape(delimiter[0]) + re.escape(delimiter[1])
    expression = rf"""
        ^()                         # 1 placeholder
        (\w[^\n]*?)[ \t]*\n         # 2 text
        ((?:{pair})+{first}?)       # 3 underline
        [ \t]*$
    """
    return make_pattern(
        f"two-line-title-{delimiter}",
        expression,
        {
            TWO_LINE_TEXT: GroupRole.TEXT,
            TWO_LINE_UNDERLINE: GroupRole.DELIMITER,
        },
    )


def two_line_title_accepted(
    text: str,
    underline: str,
    tolerance: int = 3,
    disabled_length: int | None = None,
) -> bool:
    """Length heuristic telling a real underline from other delimiter lines.

    Args:
        text: Title text (group 2)
        underline: Underline (group 3)
        tolerance: Lengths must differ by fewer than this many characters
        disabled_length: Underlines of exactly this length never qualify

    Returns:
        True if the pair is classified as a two-line title

    Examples:
        >>> two_line_title_accepted("Title", "---")
        True
        >>> two_line_title_accepted("Some body text", "----")
        False
    """
    if disabled_length is not None and len(underline) == disabled_length:
        return False
    return abs(len(text) - len(underline)) < tolerance


def two_line_title_guard(
    tolerance: int = 3,
    disabled_length: int | None = None,
) -> Callable[[re.Match[str]], bool]:
    """Build a match guard applying ``two_line_title_accepted``.

    Raises:
        InvalidParameter: If ``tolerance`` < 1 or ``disabled_length`` < 1
    """
    if isinstance(tolerance, bool) or not isinstance(tolerance, int) or tolerance < 1:
        raise InvalidParameter("tolerance", tolerance, "must be a positive int")
    if disabled_length is not None and (
        isinstance(disabled_length, bool) or not isinstance(disabled_length, int) or disabled_length < 1
    ):
        raise InvalidParameter("disabled_length", disabled_length, "must be a positive int or None")

    def guard(match: re.Match[str]) -> bool:
        return two_line_title_accepted(
            match.group(TWO_LINE_TEXT),
            match.group(TWO_LINE_UNDERLINE),
            tolerance,
            disabled_length,
        )

    return guard
