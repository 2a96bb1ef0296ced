"""Inline patterns: passthroughs, attribute references, macros, anchors.

Passthrough patterns run before every other inline rule; their content is
reserved so later rules (quotes, replacements, macros) leave it alone.
"""

from __future__ import annotations

import re
from functools import lru_cache

from pincel.categories import GroupRole
from pincel.errors import InvalidParameter
from pincel.patterns.core import Pattern, make_pattern

D = GroupRole.DELIMITER
T = GroupRole.TEXT
S = GroupRole.SECONDARY_TEXT
M = GroupRole.META

URL_SCHEMES = ("https?", "ftp", "file", "irc")


# =============================================================================
# Passthroughs
# =============================================================================


@lru_cache(maxsize=1)
def triple_plus_passthrough() -> Pattern:
    """``+++text+++``; groups 1 delimiter, 2 text, 3 delimiter."""
    return make_pattern(
        "triple-plus-passthrough",
        r"(\+\+\+)([^\n]*?(?:\n[^\n]*?)??)(\+\+\+)",
        {1: D, 2: T, 3: D},
    )


@lru_cache(maxsize=1)
def double_dollar_passthrough() -> Pattern:
    """``$$text$$``; groups 1 delimiter, 2 text, 3 delimiter."""
    return make_pattern(
        "double-dollar-passthrough",
        r"(\$\$)([^\n]*?(?:\n[^\n]*?)??)(\$\$)",
        {1: D, 2: T, 3: D},
    )


@lru_cache(maxsize=1)
def pass_macro() -> Pattern:
    """``pass:[text]`` or ``pass:quotes[text]``.

    Groups: 1 ``pass:`` plus substitution list, 2 ``[``, 3 text, 4 ``]``.
    """
    return make_pattern(
        "pass-macro",
        r"(pass:[a-z,]*)(\[)((?:[^\]\\\n]|\\.)*)(\])",
        {1: D, 2: D, 3: T, 4: D},
    )


@lru_cache(maxsize=1)
def literal_monospace() -> Pattern:
    """```text``` monospaced literal (constrained, content passed through)."""
    return make_pattern(
        "literal-monospace",
        r"(?<![\w`\\])(`)([^`\s]|[^`\s][^`\n]*?[^`\s])(`)(?![\w`])",
        {1: D, 2: T, 3: D},
    )


# =============================================================================
# Attribute references
# =============================================================================


@lru_cache(maxsize=1)
def attribute_reference() -> Pattern:
    """``{name}`` and ``{name=default}`` style references.

    Groups: 1 ``{``, 2 name, 3 optional operator and argument, 4 ``}``.
    """
    return make_pattern(
        "attribute-reference",
        r"(?<!\\)(\{)([A-Za-z0-9_][-A-Za-z0-9_]*)((?:[=?!#%@$][^}\n]*)?)(\})",
        {1: D, 2: M, 3: S, 4: D},
    )


# =============================================================================
# Inline macros
# =============================================================================


@lru_cache(maxsize=1)
def url_with_text() -> Pattern:
    """``https://example.org[caption]``.

    Groups: 1 url, 2 ``[``, 3 caption, 4 ``]``.
    """
    schemes = "|".join(URL_SCHEMES)
    return make_pattern(
        "url-with-text",
        rf"(?<![\w/<>\\])((?:{schemes}|mailto):[^\s\[\]]+)(\[)([^\]\n]*)(\])",
        {1: M, 2: D, 3: S, 4: D},
    )


@lru_cache(maxsize=1)
def url() -> Pattern:
    """Bare URL such as ``https://example.org/page``."""
    schemes = "|".join(URL_SCHEMES)
    return make_pattern(
        "url",
        rf"(?<![\w/<>\\])((?:{schemes})://[^\s\[\]<>\"]*[\w/])",
        {1: M},
    )


@lru_cache(maxsize=1)
def link_macro() -> Pattern:
    """``link:target[caption]``, ``mailto:addr[caption]``, ``xref:id[caption]``.

    Groups: 1 macro name, 2 ``:``, 3 target, 4 ``[``, 5 caption, 6 ``]``.
    """
    return make_pattern(
        "link-macro",
        r"(?<![\w\\])(link|mailto|xref)(:)([^\s\[]+)(\[)([^\]\n]*)(\])",
        {1: M, 2: D, 3: M, 4: D, 5: S, 6: D},
    )


@lru_cache(maxsize=1)
def image_macro() -> Pattern:
    """Inline ``image:target[alt]`` and ``icon:name[]``.

    Groups as for ``link_macro``.
    """
    return make_pattern(
        "image-macro",
        r"(?<![\w\\])(image|icon)(:)([^\s:\[][^\s\[]*)(\[)([^\]\n]*)(\])",
        {1: M, 2: D, 3: M, 4: D, 5: S, 6: D},
    )


@lru_cache(maxsize=1)
def bibliography_anchor() -> Pattern:
    """``[[[id]]]`` bibliography anchor; groups 1 ``[[[``, 2 id, 3 ``]]]``."""
    return make_pattern(
        "bibliography-anchor",
        r"(\[\[\[)([A-Za-z_:][-\w:.]*)(\]\]\])",
        {1: D, 2: M, 3: D},
    )


@lru_cache(maxsize=1)
def inline_anchor() -> Pattern:
    """``[[id]]`` or ``[[id,reftext]]`` inside text.

    Groups: 1 ``[[``, 2 id, 3 ``,``, 4 reftext, 5 ``]]``.
    """
    return make_pattern(
        "inline-anchor",
        r"(?<!\\)(\[\[)([A-Za-z_:][-\w:.]*)(?:(,)([^\]\n]*))?(\]\])",
        {1: D, 2: M, 3: D, 4: S, 5: D},
    )


@lru_cache(maxsize=1)
def cross_reference() -> Pattern:
    """``<<id>>`` or ``<<id,caption>>``.

    Groups: 1 ``<<``, 2 target, 3 ``,``, 4 caption, 5 ``>>``.
    """
    return make_pattern(
        "cross-reference",
        r"(?<!\\)(<<)([-\w:./#]+)(?:(,)([^>\n]*))?(>>)",
        {1: D, 2: M, 3: D, 4: S, 5: D},
    )


@lru_cache(maxsize=1)
def footnote() -> Pattern:
    """``footnote:[text]``; groups 1 name, 2 ``:``, 3 ``[``, 4 text, 5 ``]``."""
    return make_pattern(
        "footnote",
        r"(?<![\w\\])(footnote)(:)(\[)([^\]\n]*)(\])",
        {1: M, 2: D, 3: D, 4: S, 5: D},
    )


@lru_cache(maxsize=1)
def footnoteref() -> Pattern:
    """``footnoteref:[id]`` or ``footnoteref:[id,text]``.

    Groups: 1 name, 2 ``:``, 3 ``[``, 4 id, 5 ``,``, 6 text, 7 ``]``.
    """
    return make_pattern(
        "footnoteref",
        r"(?<![\w\\])(footnoteref)(:)(\[)([^,\]\n]+)(?:(,)([^\]\n]*))?(\])",
        {1: M, 2: D, 3: D, 4: M, 5: D, 6: S, 7: D},
    )


@lru_cache(maxsize=2)
def index_term(concealed: bool = False) -> Pattern:
    """``((visible term))`` or ``(((concealed,terms)))``.

    Groups: 1 opening parens, 2 term(s), 3 closing parens.
    """
    if concealed:
        return make_pattern(
            "concealed-index-term",
            r"(?<!\()(\(\(\()([^()\n]+)(\)\)\))(?!\))",
            {1: D, 2: S, 3: D},
        )
    return make_pattern(
        "index-term",
        r"(?<!\()(\(\()([^()\n]+)(\)\))(?!\))",
        {1: D, 2: T, 3: D},
    )


@lru_cache(maxsize=1)
def inline_macro() -> Pattern:
    """Any other ``name:target[attributes]`` macro (``kbd:[Ctrl+C]``, ...).

    Groups as for ``link_macro``.
    """
    return make_pattern(
        "inline-macro",
        r"(?<![\w\\])([a-z][a-z0-9_]*)(:)([^\s\[]*)(\[)([^\]\n]*)(\])",
        {1: M, 2: D, 3: M, 4: D, 5: S, 6: D},
    )


@lru_cache(maxsize=8)
def special_words(words: tuple[str, ...]) -> Pattern:
    """Whole-word match of any of ``words``.

    Raises:
        InvalidParameter: If ``words`` is empty or contains blank entries
    """
    if not words or any(not isinstance(w, str) or not w.strip() for w in words):
        raise InvalidParameter("words", words, "need at least one non-blank special word")
    # longest first so "TODO-LATER" wins over "TODO"
    alternatives = "|".join(re.escape(w) for w in sorted(words, key=len, reverse=True))
    return make_pattern("special-words", rf"(?<!\w)({alternatives})(?!\w)", {1: T})
