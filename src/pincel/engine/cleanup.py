"""Conflict cleanup pass.

Structural categories (delimiters, markers, anchors, comments, ...) win over
text-level categories wherever both cover the same offset. Text-level spans
are cut around every structural span; fragments that end up empty are
dropped. Structural spans are never modified.

Running the pass on its own output returns the same sequence.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from pincel.spans import ClassifiedSpan


def _merge(intervals: Iterable[tuple[int, int]]) -> list[tuple[int, int]]:
    merged: list[tuple[int, int]] = []
    for start, end in sorted(intervals):
        if merged and start <= merged[-1][1]:
            if end > merged[-1][1]:
                merged[-1] = (merged[-1][0], end)
        else:
            merged.append((start, end))
    return merged


def _subtract(
    start: int, end: int, holes: Sequence[tuple[int, int]]
) -> list[tuple[int, int]]:
    pieces = []
    cursor = start
    for lo, hi in holes:
        if hi <= cursor:
            continue
        if lo >= end:
            break
        if lo > cursor:
            pieces.append((cursor, lo))
        cursor = max(cursor, hi)
        if cursor >= end:
            break
    if cursor < end:
        pieces.append((cursor, end))
    return pieces


def cleanup(spans: Sequence[ClassifiedSpan]) -> list[ClassifiedSpan]:
    """Remove text-level categories from offsets that carry a structural one.

    Args:
        spans: Spans in emission order

    Returns:
        Non-empty spans sorted by (start, end); ties keep emission order
    """
    structural = _merge(
        (s.start, s.end) for s in spans if s.category.is_structural and s.end > s.start
    )

    kept: list[tuple[int, int, ClassifiedSpan]] = []
    for order, span in enumerate(spans):
        if span.end <= span.start:
            continue
        if span.category.is_structural or not structural:
            kept.append((span.start, order, span))
            continue
        for start, end in _subtract(span.start, span.end, structural):
            if (start, end) == (span.start, span.end):
                kept.append((start, order, span))
            else:
                kept.append((start, order, span.with_bounds(start, end)))

    kept.sort(key=lambda item: (item[0], item[2].end, item[1]))
    return [span for _, _, span in kept]
