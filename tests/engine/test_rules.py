"""Tests for Rule, RuleTable and build_rule_table()."""

import pytest

from pincel import GrammarConfig, InvalidParameter, ReservationTag, Rule, RuleTable
from pincel.categories import Category
from pincel.engine.rules import QUOTES, build_rule_table, make_rule
from pincel.patterns import one_line_title, quote


class TestRule:
    def test_make_rule_orders_assignments(self) -> None:
        rule = make_rule(
            "title",
            one_line_title(1),
            free=(0,),
            tags={3: ReservationTag.BLOCK_DELIMITER, 1: ReservationTag.BLOCK_DELIMITER},
            categories={2: Category.TITLE_1, 1: Category.DELIMITER},
        )
        assert rule.tag_assignment == (
            (1, ReservationTag.BLOCK_DELIMITER),
            (3, ReservationTag.BLOCK_DELIMITER),
        )
        assert rule.category_assignment == ((1, Category.DELIMITER), (2, Category.TITLE_1))

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"free": (9,)},
            {"no_block_del": (5,)},
            {"tags": {7: ReservationTag.OTHER}},
            {"categories": {-1: Category.STRONG}},
        ],
    )
    def test_unknown_groups_rejected(self, kwargs: dict) -> None:
        with pytest.raises(InvalidParameter):
            make_rule("bad", one_line_title(1), **kwargs)

    def test_frozen(self) -> None:
        rule = make_rule("title", one_line_title(1))
        with pytest.raises(AttributeError):
            rule.name = "other"  # type: ignore[misc]


class TestRuleTable:
    def test_duplicate_names_rejected(self) -> None:
        rule = make_rule("title", one_line_title(1))
        with pytest.raises(InvalidParameter):
            RuleTable((rule, rule))

    def test_lookup(self) -> None:
        table = build_rule_table()
        assert table.get("listing-block").name == "listing-block"
        assert table[table.priority_of("url")].name == "url"
        with pytest.raises(KeyError):
            table.priority_of("no-such-rule")

    def test_iteration_matches_names(self) -> None:
        table = build_rule_table()
        assert [rule.name for rule in table] == table.names()
        assert len(table) == len(table.names())
        assert all(isinstance(rule, Rule) for rule in table)


class TestBuildRuleTable:
    def test_cached_per_config(self) -> None:
        assert build_rule_table(GrammarConfig()) is build_rule_table(GrammarConfig())
        assert build_rule_table(GrammarConfig()) is not build_rule_table(
            GrammarConfig(special_words=("TODO",))
        )

    def test_precedence_order(self) -> None:
        table = build_rule_table()
        ordered = [
            "preprocessor",
            "comment-block",
            "line-comment",
            "one-line-title-0",
            "one-line-title-4",
            "two-line-title-0",
            "two-line-title-4",
            "block-macro",
            "unordered-item",
            "labeled-item-3",
            "labeled-item-0",
            "callout-item",
            "list-continuation",
            "passthrough-block",
            "listing-block",
            "open-block",
            "table-delimiter",
            "table-cell",
            "attribute-entry",
            "block-anchor",
            "attribute-list",
            "block-title",
            "admonition-paragraph",
            "literal-paragraph",
            "delimiter-line",
            "triple-plus-passthrough",
            "literal-monospace",
            "copyright",
            "attribute-reference",
            "url-with-text",
            "url",
            "cross-reference",
            "inline-macro",
            "line-break",
        ]
        priorities = [table.priority_of(name) for name in ordered]
        assert priorities == sorted(priorities)

    def test_quotes_between_passthroughs_and_replacements(self) -> None:
        table = build_rule_table()
        quote_names = [quote(kind, left, right).name for kind, left, right, _ in QUOTES]
        positions = [table.priority_of(name) for name in quote_names]
        assert positions == sorted(positions)
        assert table.priority_of("literal-monospace") < positions[0]
        assert positions[-1] < table.priority_of("copyright")

    def test_strong_before_emphasis(self) -> None:
        table = build_rule_table()
        categories = [
            dict(rule.category_assignment)[3]
            for rule in table
            if "-quote-" in rule.name
        ]
        assert categories[0] is Category.STRONG
        assert categories.index(Category.STRONG) < categories.index(Category.EMPHASIS)

    def test_line_break_is_last(self) -> None:
        assert build_rule_table().names()[-1] == "line-break"

    def test_special_words_only_when_configured(self) -> None:
        assert "special-words" not in build_rule_table().names()
        table = build_rule_table(GrammarConfig(special_words=("TODO",)))
        assert table.priority_of("special-words") < table.priority_of("copyright")

    def test_title_max_level(self) -> None:
        names = build_rule_table(GrammarConfig(title_max_level=2)).names()
        assert "one-line-title-2" in names
        assert "one-line-title-3" not in names
        assert "two-line-title-3" not in names

    def test_two_line_titles_disabled(self) -> None:
        names = build_rule_table(GrammarConfig(enable_two_line_titles=False)).names()
        assert not any(name.startswith("two-line-title") for name in names)

    def test_no_admonition_labels(self) -> None:
        names = build_rule_table(GrammarConfig(admonition_labels=())).names()
        assert "admonition-paragraph" not in names

    def test_two_line_titles_guarded(self) -> None:
        table = build_rule_table()
        assert table.get("two-line-title-1").guard is not None
        assert table.get("one-line-title-1").guard is None

    def test_replacement_rules_carry_resolvers(self) -> None:
        table = build_rule_table()
        assert table.get("copyright").replacement is not None
        assert table.get("line-break").replacement is not None
        assert dict(table.get("line-break").category_assignment)[1] is Category.LINE_BREAK
