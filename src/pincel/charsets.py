"""Marker characters and constant tables of the markup grammar.

All sets are frozensets and all tables tuples/dicts built once at import:
- O(1) membership testing
- Immutability (thread-safe)
- Module-level caching (no per-call allocation)

Usage:
    from pincel.charsets import DELIMITED_BLOCK_MARKERS

    marker = DELIMITED_BLOCK_MARKERS["listing"]  # "-"
"""

# One-line title marker, repeated level+1 times
TITLE_MARKER = "="

# Highest title level the grammar knows about (levels are 0-based)
MAX_TITLE_LEVEL = 4

# Delimited block kind -> repeated marker character (4 or more)
DELIMITED_BLOCK_MARKERS: dict[str, str] = {
    "comment": "/",
    "passthrough": "+",
    "listing": "-",
    "literal": ".",
    "quote": "_",
    "example": "=",
    "sidebar": "*",
}

# The open block is the only one with a fixed-length delimiter
OPEN_BLOCK_DELIMITER = "--"

DELIMITED_BLOCK_KINDS: tuple[str, ...] = (*DELIMITED_BLOCK_MARKERS, "open")

# Characters a bare delimiter line may consist of (fallback rule)
DELIMITER_LINE_CHARS: frozenset[str] = frozenset("/+-._=*~^")

# Unordered list markers: level 0 is "-", levels 1-5 are "*" repeated
UNORDERED_LEVEL0_MARKER = "-"
UNORDERED_MARKER = "*"
MAX_UNORDERED_LEVEL = 5

# Implicitly numbered list: "." repeated level+1 times
IMPLICIT_MARKER = "."
MAX_IMPLICIT_LEVEL = 4

# Explicitly numbered list sub-types, indexed 0-4
EXPLICIT_NUMBERING: tuple[str, ...] = (
    r"[0-9]+\.",  # decimal    1.
    r"[a-z]\.",  # lower alpha a.
    r"[A-Z]\.",  # upper alpha A.
    r"[ivx]+\)",  # lower roman iv)
    r"[IVX]+\)",  # upper roman IV)
)

# Labeled list delimiters, indexed by nesting level
LABELED_DELIMITERS: tuple[str, ...] = ("::", ";;", ":::", "::::")

# Besides word characters, a constrained quote's opening delimiter must not
# follow these. &<> are later substituted by entities.
CONSTRAINED_BOUNDARY_EXTRA = "&<>"
