"""Block-level patterns: delimited blocks, tables, attributes and friends.

Everything here is anchored at a line start. Delimited blocks match the
whole block (start line, body, end line) so the body can be reserved in one
go; the remaining constructs match a single line.
"""

from __future__ import annotations

import re
from functools import lru_cache

from pincel.categories import GroupRole
from pincel.charsets import DELIMITED_BLOCK_KINDS, DELIMITED_BLOCK_MARKERS, OPEN_BLOCK_DELIMITER
from pincel.errors import InvalidParameter
from pincel.patterns.core import Pattern, make_pattern

BLOCK_START = 1
BLOCK_BODY = 2
BLOCK_END = 3

D = GroupRole.DELIMITER
T = GroupRole.TEXT
S = GroupRole.SECONDARY_TEXT
M = GroupRole.META


@lru_cache(maxsize=16)
def delimited_block(kind: str) -> Pattern:
    """Pattern for a complete delimited block.

    Args:
        kind: One of comment, passthrough, listing, literal, quote, example,
            sidebar (4 or more marker characters) or open (exactly ``--``)

    Groups:
        1 start delimiter
        2 body, possibly empty; the shortest run of lines up to the first
          end line
        3 end delimiter; identical to the start delimiter

    Raises:
        InvalidParameter: For unknown kinds
    """
    if kind == "open":
        start = re.escape(OPEN_BLOCK_DELIMITER)
    elif kind in DELIMITED_BLOCK_MARKERS:
        start = re.escape(DELIMITED_BLOCK_MARKERS[kind]) + "{4,}"
    else:
        raise InvalidParameter(
            "kind", kind, f"unknown delimited block, expected one of {DELIMITED_BLOCK_KINDS}"
        )
    expression = rf"""
        ^({start})[ \t]*\n          # 1 start line
        ((?:[^\n]*\n)*?)            # 2 body
        (\1)[ \t]*$                 # 3 end line
    """
    return make_pattern(f"{kind}-block", expression, {BLOCK_START: D, BLOCK_BODY: T, BLOCK_END: D})


@lru_cache(maxsize=1)
def table_delimiter() -> Pattern:
    """``|===`` (also ``!===``, ``,===``, ``:===``) table start/end line."""
    return make_pattern("table-delimiter", r"^([|!,:]={3,})[ \t]*$", {1: D})


@lru_cache(maxsize=1)
def table_cell_separator() -> Pattern:
    """A ``|`` cell separator at line start or after whitespace."""
    return make_pattern("table-cell", r"(?:^|(?<=[ \t]))(\|)", {1: D})


@lru_cache(maxsize=1)
def attribute_entry() -> Pattern:
    """``:name: value`` attribute entry.

    Groups: 1 ``:``, 2 name (incl. ``!`` unset markers), 3 ``:``,
    4 whitespace, 5 value.
    """
    expression = r"""
        ^(:)(!?[A-Za-z0-9_][-A-Za-z0-9_]*!?)(:)     # 1-3 :name:
        (?:([ \t]+)([^\n]*?))?[ \t]*$               # 4 whitespace, 5 value
    """
    return make_pattern("attribute-entry", expression, {1: D, 2: M, 3: D, 4: M, 5: S})


@lru_cache(maxsize=1)
def attribute_list() -> Pattern:
    """``[attributes]`` block attribute line."""
    return make_pattern(
        "attribute-list", r"^(\[)([^\[\]\n]*)(\])[ \t]*$", {1: D, 2: M, 3: D}
    )


@lru_cache(maxsize=1)
def block_anchor() -> Pattern:
    """``[[id]]`` or ``[[id,reftext]]`` on its own line.

    Groups: 1 ``[[``, 2 id, 3 ``,``, 4 reference text, 5 ``]]``.
    """
    expression = r"""
        ^(\[\[)([A-Za-z_:][-\w:.]*)     # 1 [[, 2 id
        (?:(,)([^\]\n]*))?              # 3 comma, 4 reftext
        (\]\])[ \t]*$                   # 5 ]]
    """
    return make_pattern("block-anchor", expression, {1: D, 2: M, 3: D, 4: S, 5: D})


@lru_cache(maxsize=1)
def block_title() -> Pattern:
    """``.Title`` line; the text may not start with a dot or whitespace."""
    return make_pattern("block-title", r"^(\.)([^.\s][^\n]*)$", {1: D, 2: T})


@lru_cache(maxsize=1)
def block_macro() -> Pattern:
    """``name::target[attributes]`` on its own line.

    Groups: 1 name, 2 ``::``, 3 target, 4 ``[``, 5 attributes, 6 ``]``.
    """
    expression = r"""
        ^([A-Za-z0-9_]+)(::)            # 1 name, 2 ::
        ([^\s\[]*)                      # 3 target
        (\[)([^\]\n]*)(\])[ \t]*$       # 4 [, 5 attributes, 6 ]
    """
    return make_pattern("block-macro", expression, {1: M, 2: D, 3: M, 4: D, 5: S, 6: D})


@lru_cache(maxsize=1)
def preprocessor_directive() -> Pattern:
    """``include::``, ``ifdef::``, ``ifndef::``, ``ifeval::``, ``endif::`` lines.

    Groups as for ``block_macro``.
    """
    expression = r"""
        ^(include|ifdef|ifndef|ifeval|endif)(::)    # 1 directive, 2 ::
        ([^\[\n]*)                                  # 3 target / expression
        (\[)([^\]\n]*)(\])[ \t]*$                   # 4 [, 5 attributes, 6 ]
    """
    return make_pattern("preprocessor", expression, {1: M, 2: D, 3: M, 4: D, 5: S, 6: D})


@lru_cache(maxsize=1)
def line_comment() -> Pattern:
    """``// comment`` line (but not a ``////`` comment block delimiter)."""
    return make_pattern("line-comment", r"^(//(?!//)[^\n]*)$", {1: M})


@lru_cache(maxsize=1)
def list_continuation() -> Pattern:
    """A ``+`` alone on a line, attaching the next block to a list item."""
    return make_pattern("list-continuation", r"^(\+)[ \t]*$", {1: D})


@lru_cache(maxsize=1)
def page_break() -> Pattern:
    """``<<<`` page break."""
    return make_pattern("page-break", r"^(<{3,})[ \t]*$", {1: D})


@lru_cache(maxsize=1)
def horizontal_rule() -> Pattern:
    """``'''`` horizontal rule."""
    return make_pattern("horizontal-rule", r"^('{3,})[ \t]*$", {1: D})


@lru_cache(maxsize=8)
def admonition_paragraph(labels: tuple[str, ...]) -> Pattern:
    """``NOTE: text`` admonition paragraph start.

    Args:
        labels: Admonition labels, e.g. ("NOTE", "TIP")

    Groups: 1 label, 2 ``:``, 3 whitespace.

    Raises:
        InvalidParameter: If ``labels`` is empty or contains blank labels
    """
    if not labels or any(not isinstance(label, str) or not label.strip() for label in labels):
        raise InvalidParameter("labels", labels, "need at least one non-blank admonition label")
    alternatives = "|".join(re.escape(label) for label in labels)
    return make_pattern(
        "admonition-paragraph",
        rf"^({alternatives})(:)([ \t]+)",
        {1: M, 2: D, 3: M},
    )


@lru_cache(maxsize=1)
def literal_paragraph() -> Pattern:
    """Indented paragraph after a blank line (or at buffer start)."""
    expression = r"""
        (?:\A|(?<=\n\n))
        ([ \t]+[^ \t\n][^\n]*       # 1 first indented line
        (?:\n[^\n]+)*)              #   and following non-blank lines
    """
    return make_pattern("literal-paragraph", expression, {1: T})


@lru_cache(maxsize=1)
def delimiter_line() -> Pattern:
    """Fallback for lone delimiter lines (unterminated blocks, stray ``--``).

    Groups: 1 delimiter, 2 delimiter character (internal).
    """
    return make_pattern(
        "delimiter-line",
        r"^(([/+\-._=*~^])\2{3,}|--)[ \t]*$",
        {1: D},
    )
