"""Textual replacements and their resolvers.

A replacement rule classifies a short piece of source text (``(C)``, ``--``,
``&#65;``) and can tell the presentation layer what it stands for::

    >>> resolve_replacement("copyright", "(C)")
    '©'
    >>> resolve_replacement("decimal-reference", "&#65;")
    'A'
    >>> resolve_replacement("named-reference", "&unknownname;") is None
    True

Named character references need a resolver (name -> code point or text).
None is returned when no resolver is given or the resolver does not know
the name; the match still counts for classification and the presentation
layer falls back to the literal source text.
"""

from __future__ import annotations

import html.entities
from collections.abc import Callable
from dataclasses import dataclass
from functools import lru_cache

from pincel.categories import GroupRole
from pincel.config import NamedCharacterResolver
from pincel.errors import InvalidParameter, UnresolvedReplacement
from pincel.patterns.core import Pattern, make_pattern

REPLACEMENT_GROUP = 1

# Highest Unicode code point
_MAX_CODE_POINT = 0x10FFFF

Resolve = Callable[[str, NamedCharacterResolver | None], str | None]


@dataclass(frozen=True, slots=True)
class Replacement:
    """A replacement pattern plus its resolver.

    Attributes:
        name: Stable identifier (e.g. "em-dash")
        pattern: Pattern whose group 1 is the replaced text
        resolve_fn: Computes the substitution text for the matched text

    """

    name: str
    pattern: Pattern
    resolve_fn: Resolve

    def resolve(
        self,
        matched_text: str,
        resolver: NamedCharacterResolver | None = None,
        *,
        strict: bool = False,
    ) -> str | None:
        """Substitution text for ``matched_text``.

        Args:
            matched_text: Text of group 1
            resolver: Named character resolver, used by "named-reference"
            strict: Raise instead of returning None

        Returns:
            Replacement text, or None if it cannot be resolved

        Raises:
            UnresolvedReplacement: If ``strict`` and nothing was resolved
        """
        value = self.resolve_fn(matched_text, resolver)
        if value is None and strict:
            raise UnresolvedReplacement(self.name, matched_text)
        return value


def _fixed(text: str) -> Resolve:
    def resolve(matched_text: str, resolver: NamedCharacterResolver | None) -> str | None:
        return text

    return resolve


def _code_point(value: int) -> str | None:
    if 0 <= value <= _MAX_CODE_POINT and not 0xD800 <= value <= 0xDFFF:
        return chr(value)
    return None


def _decimal_reference(matched_text: str, resolver: NamedCharacterResolver | None) -> str | None:
    return _code_point(int(matched_text[2:-1]))


def _hex_reference(matched_text: str, resolver: NamedCharacterResolver | None) -> str | None:
    return _code_point(int(matched_text[3:-1], 16))


def _named_reference(matched_text: str, resolver: NamedCharacterResolver | None) -> str | None:
    if resolver is None:
        return None
    value = resolver(matched_text[1:-1])
    if value is None:
        return None
    if isinstance(value, int):
        return _code_point(value)
    return value


def html_entity_resolver(name: str) -> int | None:
    """Resolve an HTML entity name (``copy``, ``nbsp``) to its code point.

    Ready-made resolver for ``GrammarConfig.named_character_resolver``.
    """
    return html.entities.name2codepoint.get(name)


def _replacement(name: str, expression: str, resolve_fn: Resolve) -> Replacement:
    pattern = make_pattern(name, expression, {REPLACEMENT_GROUP: GroupRole.TEXT})
    return Replacement(name, pattern, resolve_fn)


@lru_cache(maxsize=1)
def replacement_table() -> tuple[Replacement, ...]:
    """First-pass replacements, in rule order."""
    return (
        _replacement("copyright", r"(\(C\))", _fixed("©")),
        _replacement("registered", r"(\(R\))", _fixed("®")),
        _replacement("trademark", r"(\(TM\))", _fixed("™")),
        _replacement("em-dash", r"(?<=[\w ])(--)(?=[\w ]|$)", _fixed("—")),
        _replacement("ellipsis", r"(\.\.\.)", _fixed("…")),
        _replacement("right-arrow", r"(->)", _fixed("→")),
        _replacement("right-double-arrow", r"(=>)", _fixed("⇒")),
        _replacement("left-arrow", r"(<-)", _fixed("←")),
        _replacement("left-double-arrow", r"(<=)", _fixed("⇐")),
        _replacement("apostrophe", r"(?<=\w)(')(?=\w)", _fixed("’")),
        _replacement("decimal-reference", r"(&\#[0-9]{1,7};)", _decimal_reference),
        _replacement("hex-reference", r"(&\#[xX][0-9a-fA-F]{1,6};)", _hex_reference),
        _replacement("named-reference", r"(&[A-Za-z][A-Za-z0-9]{0,31};)", _named_reference),
    )


@lru_cache(maxsize=1)
def line_break() -> Replacement:
    """Second-pass replacement: a trailing `` +`` forces a line break."""
    return _replacement("line-break", r"(?<=[ \t])(\+)[ \t]*$", _fixed("\n"))


@lru_cache(maxsize=1)
def _by_name() -> dict[str, Replacement]:
    table = {r.name: r for r in replacement_table()}
    table["line-break"] = line_break()
    return table


def get_replacement(name: str) -> Replacement:
    """Look up a replacement by name.

    Raises:
        InvalidParameter: For unknown names
    """
    try:
        return _by_name()[name]
    except KeyError:
        raise InvalidParameter("name", name, "unknown replacement") from None


def resolve_replacement(
    name: str,
    matched_text: str,
    resolver: NamedCharacterResolver | None = None,
    *,
    strict: bool = False,
) -> str | None:
    """Resolve ``matched_text`` with the replacement called ``name``.

    Args:
        name: Replacement name (see ``replacement_table``)
        matched_text: The matched source text
        resolver: Named character resolver, only used for named references
        strict: Raise UnresolvedReplacement instead of returning None

    Returns:
        Substitution text or None
    """
    return get_replacement(name).resolve(matched_text, resolver, strict=strict)
