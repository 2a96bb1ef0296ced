"""Tests for textual replacements and their resolution."""

import pytest

from pincel import InvalidParameter, UnresolvedReplacement
from pincel.patterns import (
    get_replacement,
    html_entity_resolver,
    line_break,
    replacement_table,
    resolve_replacement,
)


class TestReplacementTable:
    def test_names_unique(self) -> None:
        names = [r.name for r in replacement_table()]
        assert len(names) == len(set(names))

    def test_every_pattern_has_group_one(self) -> None:
        for replacement in replacement_table():
            assert replacement.pattern.groups >= 1

    @pytest.mark.parametrize(
        ("name", "text"),
        [
            ("copyright", "(C)"),
            ("registered", "(R)"),
            ("trademark", "(TM)"),
            ("em-dash", "a -- b"),
            ("ellipsis", "wait..."),
            ("right-arrow", "a -> b"),
            ("right-double-arrow", "a => b"),
            ("left-arrow", "a <- b"),
            ("left-double-arrow", "a <= b"),
            ("apostrophe", "it's"),
            ("decimal-reference", "&#169;"),
            ("hex-reference", "&#xA9;"),
            ("named-reference", "&copy;"),
        ],
    )
    def test_patterns_match(self, name: str, text: str) -> None:
        assert get_replacement(name).pattern.search(text) is not None

    def test_em_dash_needs_context(self) -> None:
        assert get_replacement("em-dash").pattern.search("<!--x") is None


class TestResolveReplacement:
    @pytest.mark.parametrize(
        ("name", "matched", "expected"),
        [
            ("copyright", "(C)", "©"),
            ("registered", "(R)", "®"),
            ("trademark", "(TM)", "™"),
            ("em-dash", "--", "—"),
            ("ellipsis", "...", "…"),
            ("right-arrow", "->", "→"),
            ("left-double-arrow", "<=", "⇐"),
            ("apostrophe", "'", "’"),
            ("decimal-reference", "&#65;", "A"),
            ("hex-reference", "&#x41;", "A"),
            ("line-break", "+", "\n"),
        ],
    )
    def test_fixed_and_numeric(self, name: str, matched: str, expected: str) -> None:
        assert resolve_replacement(name, matched) == expected

    def test_out_of_range_code_point(self) -> None:
        assert resolve_replacement("decimal-reference", "&#1114112;") is None
        assert resolve_replacement("hex-reference", "&#xD800;") is None

    def test_named_without_resolver(self) -> None:
        assert resolve_replacement("named-reference", "&copy;") is None

    def test_named_with_html_resolver(self) -> None:
        assert resolve_replacement("named-reference", "&copy;", html_entity_resolver) == "©"

    def test_named_unknown(self) -> None:
        assert resolve_replacement("named-reference", "&bogus;", html_entity_resolver) is None

    def test_resolver_returning_text(self) -> None:
        assert resolve_replacement("named-reference", "&brand;", lambda name: "ACME") == "ACME"

    def test_strict(self) -> None:
        with pytest.raises(UnresolvedReplacement):
            resolve_replacement("named-reference", "&copy;", strict=True)

    def test_unknown_name(self) -> None:
        with pytest.raises(InvalidParameter):
            resolve_replacement("no-such-replacement", "x")

    def test_line_break_pattern(self) -> None:
        match = line_break().pattern.search("first line +\nsecond")
        assert match is not None
        assert match.group(1) == "+"
        assert line_break().pattern.search("a+\nb") is None
