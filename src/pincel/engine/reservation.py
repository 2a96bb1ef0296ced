"""Reservation tracking for one classification pass.

Records which positions of the region earlier rules already claimed, so a
later rule cannot re-interpret them (a quote delimiter inside a listing
block, a strong quote swallowing the next line's list marker).

Thread Safety:
ReservationTracker instances are single-use per classification pass.
All state is instance-local; never share one across concurrent passes.

"""

from __future__ import annotations

from dataclasses import dataclass, field

from pincel.categories import ReservationTag
from pincel.spans import Region

_FREE = ReservationTag.FREE
_BLOCK_DELIMITER = ReservationTag.BLOCK_DELIMITER


@dataclass(slots=True)
class ReservationTracker:
    """Position-indexed reservation tags over a region.

    Positions are absolute buffer offsets. Positions outside the region are
    FREE and cannot be written.

    Usage:
        tracker = ReservationTracker(Region(0, len(text)))
        if tracker.is_free(4, 9):
            tracker.apply(4, 9, ReservationTag.OTHER)

    Complexity:
        - tag_of(): O(1)
        - is_free(), overlaps_block_delimiter(), apply(): O(range length)

    """

    region: Region
    _tags: list[ReservationTag] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._tags = [_FREE] * len(self.region)

    def _clip(self, start: int, end: int) -> tuple[int, int]:
        base = self.region.start
        lo = max(start, base) - base
        hi = min(end, self.region.end) - base
        return lo, hi

    def tag_of(self, pos: int) -> ReservationTag:
        """Tag of an absolute position (FREE outside the region)."""
        if pos not in self.region:
            return _FREE
        return self._tags[pos - self.region.start]

    def is_free(self, start: int, end: int) -> bool:
        """True iff every position in ``[start, end)`` is FREE.

        Empty ranges are free.
        """
        lo, hi = self._clip(start, end)
        tags = self._tags
        return all(tags[i] is _FREE for i in range(lo, hi))

    def overlaps_block_delimiter(self, start: int, end: int) -> bool:
        """True if any position in ``[start, end)`` is a BLOCK_DELIMITER."""
        lo, hi = self._clip(start, end)
        tags = self._tags
        return any(tags[i] is _BLOCK_DELIMITER for i in range(lo, hi))

    def apply(self, start: int, end: int, tag: ReservationTag) -> None:
        """Tag every FREE position in ``[start, end)``.

        Already tagged positions keep their tag, so tags are monotonic and
        the first (highest priority) claim wins. Writing FREE is a no-op.
        Callers check ``is_free`` themselves where a rule requires it.
        """
        if tag is _FREE:
            return
        lo, hi = self._clip(start, end)
        tags = self._tags
        for i in range(lo, hi):
            if tags[i] is _FREE:
                tags[i] = tag

    def reserved_count(self) -> int:
        """Number of non-FREE positions."""
        return sum(1 for t in self._tags if t is not _FREE)

    def snapshot(self) -> tuple[ReservationTag, ...]:
        """Immutable copy of the tags, index 0 = ``region.start``."""
        return tuple(self._tags)
