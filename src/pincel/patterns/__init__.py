"""Pattern library: pure constructors for every construct of the grammar.

Each constructor returns an immutable Pattern (compiled expression plus the
role of each capture group) or raises InvalidParameter. Constructors are
memoized by their parameter tuple.

Families:
    titles.py        one-line and two-line titles
    lists.py         unordered, numbered, labeled and callout list items
    blocks.py        delimited blocks, tables, attributes, block titles, ...
    quotes.py        constrained and unconstrained quotes
    inline.py        passthroughs, attribute references, inline macros
    replacements.py  textual replacements and their resolvers
"""

from pincel.patterns.blocks import (
    admonition_paragraph,
    attribute_entry,
    attribute_list,
    block_anchor,
    block_macro,
    block_title,
    delimited_block,
    delimiter_line,
    horizontal_rule,
    line_comment,
    list_continuation,
    literal_paragraph,
    page_break,
    preprocessor_directive,
    table_cell_separator,
    table_delimiter,
)
from pincel.patterns.core import Pattern, make_pattern
from pincel.patterns.inline import (
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
from pincel.patterns.lists import (
    callout_list_item,
    explicit_list_item,
    implicit_list_item,
    labeled_list_item,
    unordered_list_item,
)
from pincel.patterns.quotes import QuoteKind, quote
from pincel.patterns.replacements import (
    Replacement,
    get_replacement,
    html_entity_resolver,
    line_break,
    replacement_table,
    resolve_replacement,
)
from pincel.patterns.titles import (
    TitleKind,
    TitleSubtype,
    one_line_title,
    two_line_title,
    two_line_title_accepted,
    two_line_title_guard,
)

__all__ = [
    # Core
    "Pattern",
    "make_pattern",
    # Titles
    "TitleKind",
    "TitleSubtype",
    "one_line_title",
    "two_line_title",
    "two_line_title_accepted",
    "two_line_title_guard",
    # Lists
    "callout_list_item",
    "explicit_list_item",
    "implicit_list_item",
    "labeled_list_item",
    "unordered_list_item",
    # Blocks
    "admonition_paragraph",
    "attribute_entry",
    "attribute_list",
    "block_anchor",
    "block_macro",
    "block_title",
    "delimited_block",
    "delimiter_line",
    "horizontal_rule",
    "line_comment",
    "list_continuation",
    "literal_paragraph",
    "page_break",
    "preprocessor_directive",
    "table_cell_separator",
    "table_delimiter",
    # Quotes
    "QuoteKind",
    "quote",
    # Inline
    "attribute_reference",
    "bibliography_anchor",
    "cross_reference",
    "double_dollar_passthrough",
    "footnote",
    "footnoteref",
    "image_macro",
    "index_term",
    "inline_anchor",
    "inline_macro",
    "link_macro",
    "literal_monospace",
    "pass_macro",
    "special_words",
    "triple_plus_passthrough",
    "url",
    "url_with_text",
    # Replacements
    "Replacement",
    "get_replacement",
    "html_entity_resolver",
    "line_break",
    "replacement_table",
    "resolve_replacement",
]
