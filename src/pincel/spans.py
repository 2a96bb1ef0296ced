"""Offset-based value types: regions, match results and classified spans.

All offsets are 0-indexed character positions in the text buffer and all
ranges are half-open ``[start, end)``.

Thread Safety:
Every type here is a frozen dataclass and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pincel.errors import InvalidParameter

if TYPE_CHECKING:
    from pincel.categories import Category, GroupRole, ReservationTag


@dataclass(frozen=True, slots=True)
class Region:
    """Offset range ``[start, end)`` classified by one pass.

    Examples:
        >>> Region(0, 10)
        Region(start=0, end=10)
        >>> len(Region(4, 10))
        6

    """

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0:
            raise InvalidParameter("start", self.start, "region start must be >= 0")
        if self.end < self.start:
            raise InvalidParameter("end", self.end, f"region end must be >= start ({self.start})")

    def __len__(self) -> int:
        return self.end - self.start

    def __contains__(self, pos: object) -> bool:
        return isinstance(pos, int) and self.start <= pos < self.end

    @classmethod
    def whole(cls, text: str) -> Region:
        """Region covering the entire buffer."""
        return cls(0, len(text))

    @classmethod
    def for_lines(cls, text: str, start: int, end: int) -> Region:
        """Expand ``[start, end)`` outward to whole lines.

        Line-oriented constructs only classify correctly when the region
        begins at a line start, so callers re-classifying an edited area
        should widen it with this first.

        Args:
            text: The buffer
            start: Any offset on the first line of interest
            end: Any offset on the last line of interest

        Returns:
            Region from the start of the first line to the end of the last
            line (including its newline when present)
        """
        start = max(0, min(start, len(text)))
        end = max(start, min(end, len(text)))
        line_start = text.rfind("\n", 0, start) + 1
        newline = text.find("\n", end)
        line_end = len(text) if newline == -1 else newline + 1
        return cls(line_start, line_end)

    def overlaps(self, start: int, end: int) -> bool:
        """True if ``[start, end)`` intersects this region."""
        return start < self.end and self.start < end


@dataclass(frozen=True, slots=True)
class MatchResult:
    """One candidate found by the matcher loop.

    Attributes:
        span: ``(start, end)`` of the whole match (group 0)
        group_spans: ``(start, end)`` per group, ``None`` for groups that did
            not participate; index 0 is the whole match
        accepted: Whether the reservation checks (and guard) passed
        rule: Name of the rule that produced the candidate

    """

    span: tuple[int, int]
    group_spans: tuple[tuple[int, int] | None, ...]
    accepted: bool
    rule: str

    def group(self, index: int) -> tuple[int, int] | None:
        """Span of a group, or None if it did not participate."""
        if index < len(self.group_spans):
            return self.group_spans[index]
        return None

    def text(self, source: str, index: int = 0) -> str | None:
        """Source text of a group, or None if it did not participate."""
        span = self.group(index)
        if span is None:
            return None
        return source[span[0] : span[1]]


@dataclass(frozen=True, slots=True)
class ClassifiedSpan:
    """A (span, category, structural-role) triple handed to presentation.

    Attributes:
        start: Start offset (inclusive)
        end: End offset (exclusive)
        category: What the span is
        role: Role of the capture group that produced it
        rule: Name of the producing rule
        replacement: Substitution text for replacement rules (None when the
            span is not a replacement or could not be resolved)

    """

    start: int
    end: int
    category: Category
    role: GroupRole
    rule: str
    replacement: str | None = None

    def __len__(self) -> int:
        return self.end - self.start

    def text(self, source: str) -> str:
        """Source text covered by this span."""
        return source[self.start : self.end]

    def with_bounds(self, start: int, end: int) -> ClassifiedSpan:
        """Copy restricted to ``[start, end)``."""
        return ClassifiedSpan(start, end, self.category, self.role, self.rule, self.replacement)


@dataclass(frozen=True, slots=True)
class Classification:
    """Output of one classification pass over one region.

    Attributes:
        region: The classified region
        spans: Cleaned classified spans, ordered by position
        tags: Final reservation tag per position of the region
            (``tags[i]`` belongs to offset ``region.start + i``)

    """

    region: Region
    spans: tuple[ClassifiedSpan, ...]
    tags: tuple[ReservationTag, ...]

    def tag_at(self, pos: int) -> ReservationTag:
        """Final reservation tag of an absolute offset inside the region."""
        if pos not in self.region:
            raise IndexError(f"offset {pos} outside region {self.region}")
        return self.tags[pos - self.region.start]

    def categories_at(self, pos: int) -> list[Category]:
        """Categories covering an absolute offset, in emission order."""
        return [s.category for s in self.spans if s.start <= pos < s.end]

    def spans_of(self, category: Category) -> list[ClassifiedSpan]:
        """All spans carrying the given category."""
        return [s for s in self.spans if s.category is category]
