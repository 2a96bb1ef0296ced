"""Title Descriptor query.

Answers "is there a title at this offset, and which one?" without running a
classification pass. Uses the same patterns and two-line length check as the
rule table, so the answer agrees with ``classify`` for titles that no
higher-priority rule (comment, preprocessor directive) claims first.

Example:
    >>> title_descriptor("== Install ==\\n", 3)
    TitleDescriptor(kind=<TitleKind.ONE_LINE: 1>, ...)

"""

from __future__ import annotations

from dataclasses import dataclass

from pincel.config import GrammarConfig, get_grammar_config
from pincel.errors import InvalidParameter
from pincel.patterns.titles import (
    ONE_LINE_TEXT,
    ONE_LINE_TRAILING_DELIMITER,
    TWO_LINE_TEXT,
    TitleKind,
    TitleSubtype,
    one_line_title,
    two_line_title,
    two_line_title_guard,
)


@dataclass(frozen=True, slots=True)
class TitleDescriptor:
    """A title found at a buffer offset.

    Attributes:
        kind: One-line or two-line
        subtype: Delimiter style; None for two-line titles
        level: 0 (document title) .. title_max_level
        text: Title text without delimiters
        span: ``(start, end)`` of the whole title, including the underline
            of two-line titles and the newline ending the title

    """

    kind: TitleKind
    subtype: TitleSubtype | None
    level: int
    text: str
    span: tuple[int, int]


def _line_bounds(text: str, pos: int) -> tuple[int, int]:
    """Start of the line containing ``pos`` and the end incl. its newline."""
    start = text.rfind("\n", 0, pos) + 1
    newline = text.find("\n", pos)
    end = len(text) if newline == -1 else newline + 1
    return start, end


def _one_line(text: str, start: int, end: int, config: GrammarConfig) -> TitleDescriptor | None:
    for level in range(config.title_max_level + 1):
        pattern = one_line_title(level, max_level=config.title_max_level)
        match = pattern.expression.match(text, start, end)
        if match is None:
            continue
        subtype = (
            TitleSubtype.LEADING_AND_TRAILING
            if match.group(ONE_LINE_TRAILING_DELIMITER) is not None
            else TitleSubtype.LEADING_ONLY
        )
        return TitleDescriptor(
            TitleKind.ONE_LINE, subtype, level, match.group(ONE_LINE_TEXT), match.span()
        )
    return None


def _two_line(text: str, start: int, end: int, config: GrammarConfig) -> TitleDescriptor | None:
    guard = two_line_title_guard(
        config.two_line_title_tolerance, config.two_line_title_disabled_length
    )
    delimiters = config.two_line_title_delimiters[: config.title_max_level + 1]
    for level, delimiter in enumerate(delimiters):
        match = two_line_title(delimiter).expression.match(text, start, end)
        if match is None or not guard(match):
            continue
        return TitleDescriptor(
            TitleKind.TWO_LINE, None, level, match.group(TWO_LINE_TEXT), match.span()
        )
    return None


def title_descriptor(
    text: str,
    pos: int,
    config: GrammarConfig | None = None,
) -> TitleDescriptor | None:
    """Describe the title covering ``pos``, if any.

    Checks the line containing ``pos`` for a one-line title, then for a
    two-line title whose text line or underline is that line.

    Args:
        text: Whole buffer
        pos: Offset anywhere on the title (0..len(text))
        config: Grammar config (None = the context's active config)

    Returns:
        TitleDescriptor, or None when there is no title at ``pos``

    Raises:
        InvalidParameter: If ``pos`` is outside the buffer
    """
    if isinstance(pos, bool) or not isinstance(pos, int) or not 0 <= pos <= len(text):
        raise InvalidParameter("pos", pos, f"must be an offset between 0 and {len(text)}")
    if config is None:
        config = get_grammar_config()

    start, end = _line_bounds(text, pos)
    found = _one_line(text, start, end, config)
    if found is not None or not config.enable_two_line_titles:
        return found

    # pos on the text line: the underline is the next line
    _, next_end = _line_bounds(text, end) if end < len(text) else (end, end)
    found = _two_line(text, start, next_end, config)
    if found is not None:
        return found

    # pos on the underline: the text is the previous line
    if start > 0:
        previous_start, _ = _line_bounds(text, start - 1)
        found = _two_line(text, previous_start, end, config)
    return found
