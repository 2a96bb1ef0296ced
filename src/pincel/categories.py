"""Category, ReservationTag and GroupRole definitions.

Two separate channels describe a classified region:

- ReservationTag: parser-internal state. Tells later rules which positions
  were already claimed and how (plain claim vs. block delimiter).
- Category: render-facing result. Tells the presentation layer what a span
  is (heading text, list marker, emphasis, ...).

Thread Safety:
All types here are enums (inherently immutable) or frozensets.

"""

from enum import Enum, auto


class ReservationTag(Enum):
    """Per-position reservation state within one classification pass.

    A position's tag is monotonic within a pass: once it leaves FREE it never
    reverts, and a later write never replaces an earlier non-FREE tag.

    """

    FREE = auto()
    BLOCK_DELIMITER = auto()  # list markers, block delimiter lines, title markup
    OTHER = auto()  # any other claim (verbatim bodies, quote delimiters, ...)


class GroupRole(Enum):
    """Semantic role of a capture group within a pattern."""

    DELIMITER = auto()  # markup characters (==, **, ::, [[ ...)
    TEXT = auto()  # primary content (title text, quoted text)
    SECONDARY_TEXT = auto()  # captions, link texts, attribute values
    META = auto()  # names, targets, attribute lists, leading whitespace


class Category(Enum):
    """Syntactic categories produced by the rule table.

    Organized by family:
    - Titles (one per level)
    - Structural/meta markup (always dominant in the cleanup pass)
    - Text-level styling and content

    """

    # Titles
    TITLE_0 = auto()  # = Document title
    TITLE_1 = auto()  # == Section
    TITLE_2 = auto()
    TITLE_3 = auto()
    TITLE_4 = auto()

    # Structural / meta
    DELIMITER = auto()  # inline and title markup characters
    HIDDEN_DELIMITER = auto()  # passthrough markup (+++, $$, pass:[])
    BLOCK_DELIMITER = auto()  # ----, ====, |===, <<<, '''
    LIST_MARKER = auto()  # *, -, 1., a., ::, <1>
    TABLE_MARKER = auto()  # | cell separators
    ANCHOR = auto()  # [[id]], [[[bib]]]
    COMMENT = auto()  # // line, //// block
    PREPROCESSOR = auto()  # include::, ifdef::
    META = auto()  # macro names, attribute lists
    ATTRIBUTE_NAME = auto()  # :name:

    # Text level
    EMPHASIS = auto()
    STRONG = auto()
    MONOSPACE = auto()
    SUPERSCRIPT = auto()
    SUBSCRIPT = auto()
    HIGHLIGHT = auto()  # #unquoted#
    DOUBLE_QUOTED = auto()  # ``text''
    SINGLE_QUOTED = auto()  # `text'
    PASSTHROUGH = auto()
    VERBATIM = auto()  # listing/literal bodies, literal paragraphs
    BLOCK_TITLE = auto()  # .Title
    ADMONITION = auto()  # NOTE:
    LIST_TEXT = auto()  # labeled list label
    SECONDARY_TEXT = auto()  # link captions, macro attributes
    REFERENCE = auto()  # URLs, macro targets
    INTERNAL_REFERENCE = auto()  # <<id>> targets
    ATTRIBUTE_VALUE = auto()
    ATTRIBUTE_REFERENCE = auto()  # {name}
    REPLACEMENT = auto()  # (C), --, &#65; ...
    LINE_BREAK = auto()  # trailing " +"
    SPECIAL_WORD = auto()
    FOOTNOTE = auto()
    INDEX_TERM = auto()

    @property
    def is_structural(self) -> bool:
        """True for structural/meta categories (dominant in cleanup)."""
        return self in STRUCTURAL_CATEGORIES

    @classmethod
    def title(cls, level: int) -> "Category":
        """Title category for a level (0-4)."""
        return TITLE_CATEGORIES[level]


TITLE_CATEGORIES: tuple[Category, ...] = (
    Category.TITLE_0,
    Category.TITLE_1,
    Category.TITLE_2,
    Category.TITLE_3,
    Category.TITLE_4,
)

STRUCTURAL_CATEGORIES: frozenset[Category] = frozenset(
    {
        Category.DELIMITER,
        Category.HIDDEN_DELIMITER,
        Category.BLOCK_DELIMITER,
        Category.LIST_MARKER,
        Category.TABLE_MARKER,
        Category.ANCHOR,
        Category.COMMENT,
        Category.PREPROCESSOR,
        Category.META,
        Category.ATTRIBUTE_NAME,
    }
)

TEXT_CATEGORIES: frozenset[Category] = frozenset(Category) - STRUCTURAL_CATEGORIES
