"""Tests for list item patterns."""

import pytest

from pincel import InvalidParameter
from pincel.patterns import (
    callout_list_item,
    explicit_list_item,
    implicit_list_item,
    labeled_list_item,
    unordered_list_item,
)


class TestUnorderedListItem:
    def test_groups(self) -> None:
        match = unordered_list_item().search("  * item")
        assert match is not None
        assert match.group(1) == "  "
        assert match.group(2) == "*"
        assert match.group(3) == " "

    @pytest.mark.parametrize(("line", "marker"), [("- a", "-"), ("** a", "**"), ("***** a", "*****")])
    def test_levels(self, line: str, marker: str) -> None:
        match = unordered_list_item().search(line)
        assert match is not None
        assert match.group(2) == marker

    def test_specific_level(self) -> None:
        pattern = unordered_list_item(level=2)
        assert pattern.search("* a") is None
        match = pattern.search("* a\n** b")
        assert match is not None
        assert match.start() == 4

    def test_needs_whitespace_after_marker(self) -> None:
        assert unordered_list_item().search("*bold* text") is None

    def test_bibliography(self) -> None:
        match = unordered_list_item(subtype="bibliography").search("+ [[[ref]]] Book")
        assert match is not None
        assert match.group(2) == "+"

    def test_bibliography_has_no_level(self) -> None:
        with pytest.raises(InvalidParameter):
            unordered_list_item(level=1, subtype="bibliography")

    def test_invalid(self) -> None:
        with pytest.raises(InvalidParameter):
            unordered_list_item(level=6)
        with pytest.raises(InvalidParameter):
            unordered_list_item(subtype="fancy")


class TestNumberedListItems:
    @pytest.mark.parametrize("line", ["1. one", "a. one", "B. one", "iv) one", "XI) one"])
    def test_explicit(self, line: str) -> None:
        assert explicit_list_item().search(line) is not None

    def test_explicit_subtype(self) -> None:
        assert explicit_list_item(0).search("12. twelve") is not None
        assert explicit_list_item(0).search("a. alpha") is None

    def test_explicit_rejects_level(self) -> None:
        with pytest.raises(InvalidParameter):
            explicit_list_item(level=1)

    def test_explicit_unknown_subtype(self) -> None:
        with pytest.raises(InvalidParameter):
            explicit_list_item(5)

    def test_implicit(self) -> None:
        match = implicit_list_item().search("... third level")
        assert match is not None
        assert match.group(2) == "..."

    def test_implicit_level(self) -> None:
        assert implicit_list_item(0).search(". one") is not None
        assert implicit_list_item(0).search(".. two") is None

    def test_implicit_is_not_block_title(self) -> None:
        assert implicit_list_item().search(".Title") is None

    def test_implicit_invalid_level(self) -> None:
        with pytest.raises(InvalidParameter):
            implicit_list_item(5)


class TestCalloutListItem:
    @pytest.mark.parametrize("line", ["<1> first", "<12> twelfth"])
    def test_matches(self, line: str) -> None:
        assert callout_list_item().search(line) is not None

    @pytest.mark.parametrize("line", ["> quoted", "<.> auto", "1> a", "10> ten"])
    def test_needs_bracketed_digits(self, line: str) -> None:
        assert callout_list_item().search(line) is None

    def test_no_leading_whitespace(self) -> None:
        assert callout_list_item().search("  <1> first") is None


class TestLabeledListItem:
    def test_groups(self) -> None:
        match = labeled_list_item(0).search("CPU:: The processor")
        assert match is not None
        assert match.group(1) == ""
        assert match.group(2) == "CPU"
        assert match.group(3) == ":: "
        assert match.group(4) == "::"

    def test_label_at_end_of_line(self) -> None:
        match = labeled_list_item(0).search("CPU::\n")
        assert match is not None
        assert match.group(3) == "::"

    def test_label_ends_at_first_delimiter(self) -> None:
        match = labeled_list_item(0).search("a:: b:: c")
        assert match is not None
        assert match.group(2) == "a"
        assert match.group(3) == ":: "

    def test_levels_do_not_overlap(self) -> None:
        assert labeled_list_item(0).search("a::: b") is None
        assert labeled_list_item(2).search("a::: b") is not None
        assert labeled_list_item(1).search("term;; def") is not None

    def test_qanda(self) -> None:
        match = labeled_list_item(subtype="qanda").search("What is it??")
        assert match is not None
        assert match.group(2) == "What is it"
        assert match.group(4) == "??"

    def test_horizontal(self) -> None:
        match = labeled_list_item(subtype="horizontal").search("CPU::\n")
        assert match is not None
        assert match.group(2) == "CPU"
        assert labeled_list_item(subtype="horizontal").search("CPU:: text") is None

    def test_normal_needs_level(self) -> None:
        with pytest.raises(InvalidParameter):
            labeled_list_item()

    @pytest.mark.parametrize("subtype", ["qanda", "horizontal"])
    def test_level_with_special_subtype(self, subtype: str) -> None:
        with pytest.raises(InvalidParameter):
            labeled_list_item(0, subtype=subtype)

    def test_invalid(self) -> None:
        with pytest.raises(InvalidParameter):
            labeled_list_item(4)
        with pytest.raises(InvalidParameter):
            labeled_list_item(subtype="glossary")
