"""Tests for passthrough, attribute reference and inline macro patterns."""

import pytest

from pincel import InvalidParameter
from pincel.patterns import (
    attribute_reference,
    bibliography_anchor,
    cross_reference,
    double_dollar_passthrough,
    footnote,
    footnoteref,
    image_macro,
    index_term,
    inline_anchor,
    inline_macro,
    link_macro,
    literal_monospace,
    pass_macro,
    special_words,
    triple_plus_passthrough,
    url,
    url_with_text,
)


class TestPassthroughs:
    def test_triple_plus(self) -> None:
        match = triple_plus_passthrough().search("a +++<b>+++ c")
        assert match is not None
        assert match.group(2) == "<b>"

    def test_double_dollar(self) -> None:
        match = double_dollar_passthrough().search("$$*raw*$$")
        assert match is not None
        assert match.group(2) == "*raw*"

    def test_pass_macro(self) -> None:
        match = pass_macro().search("pass:[<u>x</u>] and pass:q[*y*]")
        assert match is not None
        assert match.group(1) == "pass:"
        assert match.group(3) == "<u>x</u>"

    def test_literal_monospace(self) -> None:
        match = literal_monospace().search("use `x+y` here")
        assert match is not None
        assert match.group(2) == "x+y"
        assert literal_monospace().search("a`b`c") is None


class TestAttributeReference:
    def test_simple(self) -> None:
        match = attribute_reference().search("Version {version}.")
        assert match is not None
        assert match.group(2) == "version"
        assert match.group(3) == ""

    def test_with_operator(self) -> None:
        match = attribute_reference().search("{name=default}")
        assert match is not None
        assert match.group(3) == "=default"

    def test_escaped(self) -> None:
        assert attribute_reference().search("\\{version}") is None


class TestUrls:
    def test_bare_url(self) -> None:
        match = url().search("see https://example.org/page.")
        assert match is not None
        assert match.group(1) == "https://example.org/page"

    def test_url_with_text(self) -> None:
        match = url_with_text().search("https://example.org[Example site]")
        assert match is not None
        assert match.group(1) == "https://example.org"
        assert match.group(3) == "Example site"

    def test_mailto_with_text(self) -> None:
        match = url_with_text().search("mailto:me@example.org[Mail me]")
        assert match is not None
        assert match.group(3) == "Mail me"


class TestMacros:
    def test_link_macro(self) -> None:
        match = link_macro().search("link:index.html[Home]")
        assert match is not None
        assert match.group(1) == "link"
        assert match.group(3) == "index.html"
        assert match.group(5) == "Home"

    def test_image_macro(self) -> None:
        match = image_macro().search("Press image:save.png[Save] now")
        assert match is not None
        assert match.group(3) == "save.png"
        # block image macros use "::" and are not inline images
        assert image_macro().search("image::save.png[Save]") is None

    def test_inline_macro(self) -> None:
        match = inline_macro().search("Press kbd:[Ctrl+C].")
        assert match is not None
        assert match.group(1) == "kbd"
        assert match.group(3) == ""
        assert match.group(5) == "Ctrl+C"

    def test_footnote(self) -> None:
        match = footnote().search("Text.footnote:[A note.]")
        assert match is not None
        assert match.group(4) == "A note."

    def test_footnoteref(self) -> None:
        match = footnoteref().search("footnoteref:[disclaimer,Use at own risk.]")
        assert match is not None
        assert match.group(4) == "disclaimer"
        assert match.group(6) == "Use at own risk."

    def test_footnoteref_reuse(self) -> None:
        match = footnoteref().search("footnoteref:[disclaimer]")
        assert match is not None
        assert match.group(6) is None


class TestAnchorsAndReferences:
    def test_cross_reference(self) -> None:
        match = cross_reference().search("see <<intro,the intro>>")
        assert match is not None
        assert match.group(2) == "intro"
        assert match.group(4) == "the intro"

    def test_cross_reference_without_caption(self) -> None:
        match = cross_reference().search("<<x>>")
        assert match is not None
        assert match.group(3) is None

    def test_inline_anchor(self) -> None:
        match = inline_anchor().search("Some [[point]] here")
        assert match is not None
        assert match.group(2) == "point"

    def test_bibliography_anchor(self) -> None:
        match = bibliography_anchor().search("+ [[[taoup]]] Raymond")
        assert match is not None
        assert match.group(2) == "taoup"

    def test_index_terms(self) -> None:
        visible = index_term().search("The ((Sun)) rises")
        assert visible is not None
        assert visible.group(2) == "Sun"
        concealed = index_term(concealed=True).search("(((Sun,Star)))")
        assert concealed is not None
        assert concealed.group(2) == "Sun,Star"
        assert index_term().search("(((Sun)))") is None


class TestSpecialWords:
    def test_whole_words_only(self) -> None:
        pattern = special_words(("TODO",))
        matches = [m.group(1) for m in pattern.expression.finditer("TODO: fix TODOS")]
        assert matches == ["TODO"]

    def test_longest_first(self) -> None:
        match = special_words(("TODO", "TODO-LATER")).search("TODO-LATER")
        assert match is not None
        assert match.group(1) == "TODO-LATER"

    def test_regex_characters_escaped(self) -> None:
        match = special_words(("C++",)).search("We use C++ here")
        assert match is not None
        assert match.group(1) == "C++"
        assert special_words(("a.b",)).search("axb") is None

    def test_empty(self) -> None:
        with pytest.raises(InvalidParameter):
            special_words(())
