"""Rule and RuleTable: the ordered classification grammar.

A Rule pairs a Pattern with the reservation checks a candidate match must
pass and with what an accepted match writes (reservation tags for later
rules, categories for the presentation layer).

Table order is precedence:

    document structure  > block macros > lists > delimited blocks > tables
    > attribute entries/lists > block title > paragraphs
    > inline: passthrough, quotes, special words, replacements,
              attribute references, inline macros, second replacement pass

A rule never sees through an earlier rule's reservations, so e.g. quote
rules leave the body of a listing block alone without any nesting logic.

Thread Safety:
Rule and RuleTable are frozen. Built tables are cached per GrammarConfig
and safe to share across threads.

"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from functools import lru_cache

from pincel.categories import Category, ReservationTag
from pincel.config import GrammarConfig
from pincel.errors import InvalidParameter
from pincel.patterns import blocks, inline, lists, titles
from pincel.patterns.core import Pattern
from pincel.patterns.quotes import QuoteKind, quote
from pincel.patterns.replacements import (
    REPLACEMENT_GROUP,
    Replacement,
    line_break,
    replacement_table,
)
from pincel.utils.logger import get_logger

logger = get_logger(__name__)

BLOCK_DEL = ReservationTag.BLOCK_DELIMITER
OTHER = ReservationTag.OTHER

MatchGuard = Callable[[re.Match[str]], bool]


@dataclass(frozen=True, slots=True)
class Rule:
    """One entry of the rule table.

    Attributes:
        name: Unique name within a table
        pattern: What to search for
        must_be_free: Groups that must be entirely FREE for a match to be
            accepted
        must_not_be_block_delimiter: Groups that must not touch a
            BLOCK_DELIMITER position
        tag_assignment: (group, tag) pairs written on acceptance
        category_assignment: (group, category) pairs emitted on acceptance
        guard: Extra acceptance predicate over the match (e.g. the two-line
            title length check)
        replacement: Resolver for replacement rules (group 1 is replaced)

    Groups that did not participate in a match are skipped by every check
    and assignment.

    """

    name: str
    pattern: Pattern
    must_be_free: tuple[int, ...] = ()
    must_not_be_block_delimiter: tuple[int, ...] = ()
    tag_assignment: tuple[tuple[int, ReservationTag], ...] = ()
    category_assignment: tuple[tuple[int, Category], ...] = ()
    guard: MatchGuard | None = field(default=None, compare=False)
    replacement: Replacement | None = None

    def __post_init__(self) -> None:
        referenced = [
            *self.must_be_free,
            *self.must_not_be_block_delimiter,
            *(g for g, _ in self.tag_assignment),
            *(g for g, _ in self.category_assignment),
        ]
        for group in referenced:
            if not self.pattern.has_group(group):
                raise InvalidParameter(
                    "group",
                    group,
                    f"rule {self.name!r}: pattern {self.pattern.name!r} "
                    f"has only {self.pattern.groups} groups",
                )


def make_rule(
    name: str,
    pattern: Pattern,
    *,
    free: tuple[int, ...] = (),
    no_block_del: tuple[int, ...] = (),
    tags: Mapping[int, ReservationTag] | None = None,
    categories: Mapping[int, Category] | None = None,
    guard: MatchGuard | None = None,
    replacement: Replacement | None = None,
) -> Rule:
    """Build a Rule from mappings (ordered by group index)."""
    return Rule(
        name=name,
        pattern=pattern,
        must_be_free=tuple(free),
        must_not_be_block_delimiter=tuple(no_block_del),
        tag_assignment=tuple(sorted((tags or {}).items())),
        category_assignment=tuple(sorted((categories or {}).items())),
        guard=guard,
        replacement=replacement,
    )


@dataclass(frozen=True, slots=True)
class RuleTable:
    """Immutable, ordered rule sequence. Index = priority (0 is highest)."""

    rules: tuple[Rule, ...]
    config: GrammarConfig = field(default_factory=GrammarConfig)

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for rule in self.rules:
            if rule.name in seen:
                raise InvalidParameter("rules", rule.name, "duplicate rule name")
            seen.add(rule.name)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def __getitem__(self, index: int) -> Rule:
        return self.rules[index]

    def names(self) -> list[str]:
        """Rule names in priority order."""
        return [rule.name for rule in self.rules]

    def priority_of(self, name: str) -> int:
        """Priority (index) of the rule called ``name``.

        Raises:
            KeyError: If no rule has that name
        """
        for index, rule in enumerate(self.rules):
            if rule.name == name:
                return index
        raise KeyError(name)

    def get(self, name: str) -> Rule:
        """Rule called ``name``.

        Raises:
            KeyError: If no rule has that name
        """
        return self.rules[self.priority_of(name)]


# =============================================================================
# Document structure
# =============================================================================


def _structure_rules(config: GrammarConfig) -> list[Rule]:
    rules = [
        make_rule(
            "preprocessor",
            blocks.preprocessor_directive(),
            free=(0,),
            tags={0: OTHER},
            categories={
                1: Category.PREPROCESSOR,
                2: Category.DELIMITER,
                3: Category.REFERENCE,
                4: Category.DELIMITER,
                5: Category.SECONDARY_TEXT,
                6: Category.DELIMITER,
            },
        ),
        make_rule(
            "comment-block",
            blocks.delimited_block("comment"),
            free=(0,),
            tags={1: BLOCK_DEL, 2: OTHER, 3: BLOCK_DEL},
            categories={0: Category.COMMENT},
        ),
        make_rule(
            "line-comment",
            blocks.line_comment(),
            free=(0,),
            tags={1: OTHER},
            categories={1: Category.COMMENT},
        ),
    ]

    max_level = config.title_max_level
    for level in range(max_level + 1):
        rules.append(
            make_rule(
                f"one-line-title-{level}",
                titles.one_line_title(level, max_level=max_level),
                free=(0,),
                tags={titles.ONE_LINE_LEADING: BLOCK_DEL, titles.ONE_LINE_TRAILING: BLOCK_DEL},
                categories={
                    titles.ONE_LINE_LEADING: Category.DELIMITER,
                    titles.ONE_LINE_TEXT: Category.title(level),
                    titles.ONE_LINE_TRAILING_DELIMITER: Category.DELIMITER,
                },
            )
        )

    if config.enable_two_line_titles:
        guard = titles.two_line_title_guard(
            config.two_line_title_tolerance, config.two_line_title_disabled_length
        )
        delimiters = config.two_line_title_delimiters
        if len(delimiters) < max_level + 1:
            raise InvalidParameter(
                "two_line_title_delimiters",
                delimiters,
                f"need one delimiter per title level 0..{max_level}",
            )
        for level, delimiter in enumerate(delimiters[: max_level + 1]):
            rules.append(
                make_rule(
                    f"two-line-title-{level}",
                    titles.two_line_title(delimiter),
                    free=(0,),
                    tags={titles.TWO_LINE_UNDERLINE: BLOCK_DEL},
                    categories={
                        titles.TWO_LINE_TEXT: Category.title(level),
                        titles.TWO_LINE_UNDERLINE: Category.DELIMITER,
                    },
                    guard=guard,
                )
            )
    return rules


def _block_macro_rules() -> list[Rule]:
    return [
        make_rule(
            "block-macro",
            blocks.block_macro(),
            free=(0,),
            tags={1: OTHER, 2: OTHER, 3: OTHER, 4: OTHER, 6: OTHER},
            categories={
                1: Category.META,
                2: Category.DELIMITER,
                3: Category.REFERENCE,
                4: Category.DELIMITER,
                5: Category.SECONDARY_TEXT,
                6: Category.DELIMITER,
            },
        )
    ]


# =============================================================================
# Lists
# =============================================================================


def _list_item_rule(name: str, pattern: Pattern) -> Rule:
    return make_rule(
        name,
        pattern,
        free=(0,),
        tags={0: BLOCK_DEL},
        categories={lists.LIST_MARKER: Category.LIST_MARKER},
    )


def _labeled_item_rule(name: str, pattern: Pattern) -> Rule:
    return make_rule(
        name,
        pattern,
        free=(lists.LABEL_DELIMITER_WITH_SPACE,),
        no_block_del=(lists.LABEL_TEXT,),
        tags={lists.LABEL_DELIMITER_WITH_SPACE: BLOCK_DEL},
        categories={
            lists.LABEL_TEXT: Category.LIST_TEXT,
            lists.LABEL_DELIMITER: Category.LIST_MARKER,
        },
    )


def _list_rules() -> list[Rule]:
    rules = [
        _list_item_rule("unordered-item", lists.unordered_list_item()),
        _list_item_rule(
            "bibliography-item", lists.unordered_list_item(subtype="bibliography")
        ),
        _list_item_rule("explicit-item", lists.explicit_list_item()),
        _list_item_rule("implicit-item", lists.implicit_list_item()),
        _labeled_item_rule("labeled-item-qanda", lists.labeled_list_item(subtype="qanda")),
        _labeled_item_rule(
            "labeled-item-horizontal", lists.labeled_list_item(subtype="horizontal")
        ),
    ]
    # deepest first: "::::" must not be read as "::" by a shallower rule
    for level in (3, 2, 1, 0):
        rules.append(_labeled_item_rule(f"labeled-item-{level}", lists.labeled_list_item(level)))
    rules.append(_list_item_rule("callout-item", lists.callout_list_item()))
    rules.append(
        make_rule(
            "list-continuation",
            blocks.list_continuation(),
            free=(0,),
            tags={1: BLOCK_DEL},
            categories={1: Category.DELIMITER},
        )
    )
    return rules


# =============================================================================
# Delimited blocks and tables
# =============================================================================

# Block kind -> category of its body; bodies with a category are reserved
_BLOCK_BODIES: tuple[tuple[str, Category | None], ...] = (
    ("passthrough", Category.PASSTHROUGH),
    ("listing", Category.VERBATIM),
    ("literal", Category.VERBATIM),
    ("quote", None),
    ("example", None),
    ("sidebar", None),
    ("open", None),
)


def _delimited_block_rules() -> list[Rule]:
    rules = []
    for kind, body in _BLOCK_BODIES:
        tags = {blocks.BLOCK_START: BLOCK_DEL, blocks.BLOCK_END: BLOCK_DEL}
        categories = {
            blocks.BLOCK_START: Category.BLOCK_DELIMITER,
            blocks.BLOCK_END: Category.BLOCK_DELIMITER,
        }
        if body is not None:
            tags[blocks.BLOCK_BODY] = OTHER
            categories[blocks.BLOCK_BODY] = body
        rules.append(
            make_rule(
                f"{kind}-block",
                blocks.delimited_block(kind),
                free=(blocks.BLOCK_START, blocks.BLOCK_END),
                tags=tags,
                categories=categories,
            )
        )
    for name, pattern in (
        ("page-break", blocks.page_break()),
        ("horizontal-rule", blocks.horizontal_rule()),
    ):
        rules.append(
            make_rule(
                name,
                pattern,
                free=(1,),
                tags={1: BLOCK_DEL},
                categories={1: Category.BLOCK_DELIMITER},
            )
        )
    return rules


def _table_rules() -> list[Rule]:
    return [
        make_rule(
            "table-delimiter",
            blocks.table_delimiter(),
            free=(0,),
            tags={1: BLOCK_DEL},
            categories={1: Category.TABLE_MARKER},
        ),
        make_rule(
            "table-cell",
            blocks.table_cell_separator(),
            free=(1,),
            tags={1: OTHER},
            categories={1: Category.TABLE_MARKER},
        ),
    ]


# =============================================================================
# Attributes, block titles, paragraphs
# =============================================================================


def _attribute_rules() -> list[Rule]:
    return [
        make_rule(
            "attribute-entry",
            blocks.attribute_entry(),
            free=(1, 2, 3),
            tags={1: OTHER, 2: OTHER, 3: OTHER},
            categories={
                1: Category.DELIMITER,
                2: Category.ATTRIBUTE_NAME,
                3: Category.DELIMITER,
                5: Category.ATTRIBUTE_VALUE,
            },
        ),
        make_rule(
            "block-anchor",
            blocks.block_anchor(),
            free=(0,),
            tags={0: OTHER},
            categories={
                1: Category.DELIMITER,
                2: Category.ANCHOR,
                3: Category.DELIMITER,
                4: Category.SECONDARY_TEXT,
                5: Category.DELIMITER,
            },
        ),
        make_rule(
            "attribute-list",
            blocks.attribute_list(),
            free=(0,),
            tags={0: OTHER},
            categories={1: Category.DELIMITER, 2: Category.META, 3: Category.DELIMITER},
        ),
    ]


def _block_title_rules() -> list[Rule]:
    return [
        make_rule(
            "block-title",
            blocks.block_title(),
            free=(0,),
            tags={1: OTHER},
            categories={1: Category.DELIMITER, 2: Category.BLOCK_TITLE},
        )
    ]


def _paragraph_rules(config: GrammarConfig) -> list[Rule]:
    rules = []
    if config.admonition_labels:
        rules.append(
            make_rule(
                "admonition-paragraph",
                blocks.admonition_paragraph(tuple(config.admonition_labels)),
                free=(1, 2),
                tags={1: OTHER, 2: OTHER},
                categories={1: Category.ADMONITION, 2: Category.DELIMITER},
            )
        )
    rules.append(
        make_rule(
            "literal-paragraph",
            blocks.literal_paragraph(),
            free=(1,),
            tags={1: OTHER},
            categories={1: Category.VERBATIM},
        )
    )
    rules.append(
        make_rule(
            "delimiter-line",
            blocks.delimiter_line(),
            free=(1,),
            tags={1: BLOCK_DEL},
            categories={1: Category.BLOCK_DELIMITER},
        )
    )
    return rules


# =============================================================================
# Inline substitutions
# =============================================================================


def _passthrough_rules() -> list[Rule]:
    rules = []
    for name, pattern in (
        ("triple-plus-passthrough", inline.triple_plus_passthrough()),
        ("double-dollar-passthrough", inline.double_dollar_passthrough()),
    ):
        rules.append(
            make_rule(
                name,
                pattern,
                free=(0,),
                tags={0: OTHER},
                categories={
                    1: Category.HIDDEN_DELIMITER,
                    2: Category.PASSTHROUGH,
                    3: Category.HIDDEN_DELIMITER,
                },
            )
        )
    rules.append(
        make_rule(
            "pass-macro",
            inline.pass_macro(),
            free=(0,),
            tags={0: OTHER},
            categories={
                1: Category.HIDDEN_DELIMITER,
                2: Category.HIDDEN_DELIMITER,
                3: Category.PASSTHROUGH,
                4: Category.HIDDEN_DELIMITER,
            },
        )
    )
    rules.append(
        make_rule(
            "literal-monospace",
            inline.literal_monospace(),
            free=(0,),
            tags={0: OTHER},
            categories={1: Category.DELIMITER, 2: Category.MONOSPACE, 3: Category.DELIMITER},
        )
    )
    return rules


# (kind, left delimiter, right delimiter, category), in rule order
QUOTES: tuple[tuple[QuoteKind, str, str | None, Category], ...] = (
    (QuoteKind.UNCONSTRAINED, "**", None, Category.STRONG),
    (QuoteKind.CONSTRAINED, "*", None, Category.STRONG),
    (QuoteKind.CONSTRAINED, "``", "''", Category.DOUBLE_QUOTED),
    (QuoteKind.CONSTRAINED, "'", None, Category.EMPHASIS),
    (QuoteKind.CONSTRAINED, "`", "'", Category.SINGLE_QUOTED),
    (QuoteKind.UNCONSTRAINED, "++", None, Category.MONOSPACE),
    (QuoteKind.CONSTRAINED, "+", None, Category.MONOSPACE),
    (QuoteKind.UNCONSTRAINED, "__", None, Category.EMPHASIS),
    (QuoteKind.CONSTRAINED, "_", None, Category.EMPHASIS),
    (QuoteKind.UNCONSTRAINED, "##", None, Category.HIGHLIGHT),
    (QuoteKind.CONSTRAINED, "#", None, Category.HIGHLIGHT),
    (QuoteKind.UNCONSTRAINED, "~", None, Category.SUBSCRIPT),
    (QuoteKind.UNCONSTRAINED, "^", None, Category.SUPERSCRIPT),
)


def quote_rule(kind: QuoteKind, left: str, right: str | None, category: Category) -> Rule:
    """Rule for one quote: delimiters must be free, text must not cross a
    block delimiter; only the delimiters are reserved so quotes can nest."""
    pattern = quote(kind, left, right)
    return make_rule(
        pattern.name,
        pattern,
        free=(1, 2, 4),
        no_block_del=(3,),
        tags={1: OTHER, 2: OTHER, 4: OTHER},
        categories={1: Category.META, 2: Category.DELIMITER, 3: category, 4: Category.DELIMITER},
    )


def _quote_rules() -> list[Rule]:
    return [quote_rule(*entry) for entry in QUOTES]


def _special_word_rules(config: GrammarConfig) -> list[Rule]:
    if not config.special_words:
        return []
    return [
        make_rule(
            "special-words",
            inline.special_words(tuple(config.special_words)),
            free=(1,),
            categories={1: Category.SPECIAL_WORD},
        )
    ]


def replacement_rule(replacement: Replacement, category: Category = Category.REPLACEMENT) -> Rule:
    """Rule classifying (and reserving) group 1 of a replacement."""
    return make_rule(
        replacement.name,
        replacement.pattern,
        free=(REPLACEMENT_GROUP,),
        tags={REPLACEMENT_GROUP: OTHER},
        categories={REPLACEMENT_GROUP: category},
        replacement=replacement,
    )


def _replacement_rules() -> list[Rule]:
    return [replacement_rule(r) for r in replacement_table()]


def _attribute_reference_rules() -> list[Rule]:
    return [
        make_rule(
            "attribute-reference",
            inline.attribute_reference(),
            free=(0,),
            tags={0: OTHER},
            categories={
                1: Category.DELIMITER,
                2: Category.ATTRIBUTE_REFERENCE,
                3: Category.SECONDARY_TEXT,
                4: Category.DELIMITER,
            },
        )
    ]


def _macro_rule(name: str, pattern: Pattern, target: Category = Category.REFERENCE) -> Rule:
    # name:target[caption] layout shared by link, image and generic macros
    return make_rule(
        name,
        pattern,
        free=(1, 2, 3, 4, 6),
        no_block_del=(5,),
        tags={1: OTHER, 2: OTHER, 3: OTHER, 4: OTHER, 6: OTHER},
        categories={
            1: Category.META,
            2: Category.DELIMITER,
            3: target,
            4: Category.DELIMITER,
            5: Category.SECONDARY_TEXT,
            6: Category.DELIMITER,
        },
    )


def _anchor_rule(name: str, pattern: Pattern, secondary: bool = True) -> Rule:
    categories = {1: Category.DELIMITER, 2: Category.ANCHOR, 3: Category.DELIMITER}
    if secondary:
        categories.update({4: Category.SECONDARY_TEXT, 5: Category.DELIMITER})
    return make_rule(name, pattern, free=(0,), tags={0: OTHER}, categories=categories)


def _inline_macro_rules() -> list[Rule]:
    return [
        make_rule(
            "url-with-text",
            inline.url_with_text(),
            free=(1, 2, 4),
            no_block_del=(3,),
            tags={1: OTHER, 2: OTHER, 4: OTHER},
            categories={
                1: Category.REFERENCE,
                2: Category.DELIMITER,
                3: Category.SECONDARY_TEXT,
                4: Category.DELIMITER,
            },
        ),
        make_rule(
            "url",
            inline.url(),
            free=(1,),
            tags={1: OTHER},
            categories={1: Category.REFERENCE},
        ),
        _macro_rule("link-macro", inline.link_macro()),
        _macro_rule("image-macro", inline.image_macro()),
        _anchor_rule("bibliography-anchor", inline.bibliography_anchor(), secondary=False),
        _anchor_rule("inline-anchor", inline.inline_anchor()),
        make_rule(
            "cross-reference",
            inline.cross_reference(),
            free=(1, 2, 5),
            no_block_del=(4,),
            tags={1: OTHER, 2: OTHER, 3: OTHER, 5: OTHER},
            categories={
                1: Category.DELIMITER,
                2: Category.INTERNAL_REFERENCE,
                3: Category.DELIMITER,
                4: Category.SECONDARY_TEXT,
                5: Category.DELIMITER,
            },
        ),
        make_rule(
            "footnoteref",
            inline.footnoteref(),
            free=(1, 2, 3, 4, 7),
            tags={1: OTHER, 2: OTHER, 3: OTHER, 4: OTHER, 5: OTHER, 7: OTHER},
            categories={
                1: Category.META,
                2: Category.DELIMITER,
                3: Category.DELIMITER,
                4: Category.INTERNAL_REFERENCE,
                5: Category.DELIMITER,
                6: Category.FOOTNOTE,
                7: Category.DELIMITER,
            },
        ),
        make_rule(
            "footnote",
            inline.footnote(),
            free=(1, 2, 3, 5),
            no_block_del=(4,),
            tags={1: OTHER, 2: OTHER, 3: OTHER, 5: OTHER},
            categories={
                1: Category.META,
                2: Category.DELIMITER,
                3: Category.DELIMITER,
                4: Category.FOOTNOTE,
                5: Category.DELIMITER,
            },
        ),
        make_rule(
            "concealed-index-term",
            inline.index_term(concealed=True),
            free=(1, 3),
            tags={1: OTHER, 3: OTHER},
            categories={1: Category.DELIMITER, 2: Category.INDEX_TERM, 3: Category.DELIMITER},
        ),
        make_rule(
            "index-term",
            inline.index_term(),
            free=(1, 3),
            tags={1: OTHER, 3: OTHER},
            categories={1: Category.DELIMITER, 2: Category.INDEX_TERM, 3: Category.DELIMITER},
        ),
        _macro_rule("inline-macro", inline.inline_macro()),
    ]


def _second_replacement_rules() -> list[Rule]:
    return [replacement_rule(line_break(), Category.LINE_BREAK)]


# =============================================================================
# Table construction
# =============================================================================


@lru_cache(maxsize=32)
def build_rule_table(config: GrammarConfig | None = None) -> RuleTable:
    """Build the ordered rule table for a grammar configuration.

    Tables are cached per config; build a new GrammarConfig to change the
    grammar rather than mutating anything.

    Args:
        config: Grammar configuration (defaults to ``GrammarConfig()``)

    Returns:
        Immutable RuleTable

    Raises:
        InvalidParameter: If the configuration yields malformed patterns
            (e.g. a two-line title delimiter that is not 2 characters)
    """
    if config is None:
        config = GrammarConfig()
    rules = [
        *_structure_rules(config),
        *_block_macro_rules(),
        *_list_rules(),
        *_delimited_block_rules(),
        *_table_rules(),
        *_attribute_rules(),
        *_block_title_rules(),
        *_paragraph_rules(config),
        *_passthrough_rules(),
        *_quote_rules(),
        *_special_word_rules(config),
        *_replacement_rules(),
        *_attribute_reference_rules(),
        *_inline_macro_rules(),
        *_second_replacement_rules(),
    ]
    table = RuleTable(tuple(rules), config)
    logger.debug("Built rule table with %d rules", len(table))
    return table
