"""Matcher loop: finds and accepts the matches of one rule inside a region.

The loop searches forward from a cursor. A candidate is accepted when every
``must_be_free`` group is FREE, no ``must_not_be_block_delimiter`` group
touches a BLOCK_DELIMITER position and the rule's guard (if any) agrees.
Accepted candidates write their reservation tags immediately, so later
candidates of the same rule already see them.

After a rejection the search resumes one unit past the previous search
start. Every search started between that point and the rejected
candidate's start finds the same candidate again (a search result does not
depend on where inside ``[pos, candidate.start]`` it began), so the loop
resumes at ``candidate.start + 1`` directly. The outcome is identical and
each rejected position is visited once.

Thread Safety:
Stateless functions. The tracker passed in is mutated and must not be
shared across concurrent passes.

"""

from __future__ import annotations

import re

from pincel.engine.reservation import ReservationTracker
from pincel.engine.rules import Rule
from pincel.spans import MatchResult, Region
from pincel.utils.logger import get_logger

logger = get_logger(__name__)


def _group_span(match: re.Match[str], index: int) -> tuple[int, int] | None:
    start, end = match.span(index)
    if start == -1:
        return None
    return start, end


def is_acceptable(rule: Rule, match: re.Match[str], tracker: ReservationTracker) -> bool:
    """Check a candidate against the rule's reservation checks and guard.

    Groups that did not participate in the match are skipped.
    """
    for index in rule.must_be_free:
        span = _group_span(match, index)
        if span is not None and not tracker.is_free(*span):
            return False
    for index in rule.must_not_be_block_delimiter:
        span = _group_span(match, index)
        if span is not None and tracker.overlaps_block_delimiter(*span):
            return False
    if rule.guard is not None and not rule.guard(match):
        return False
    return True


def reserve(rule: Rule, match: re.Match[str], tracker: ReservationTracker) -> None:
    """Write the rule's tag assignment for an accepted match."""
    for index, tag in rule.tag_assignment:
        span = _group_span(match, index)
        if span is not None:
            tracker.apply(span[0], span[1], tag)


def to_result(rule: Rule, match: re.Match[str], accepted: bool) -> MatchResult:
    """Freeze an ``re.Match`` into an offset-only MatchResult."""
    spans = tuple(_group_span(match, i) for i in range(match.re.groups + 1))
    return MatchResult(match.span(), spans, accepted, rule.name)


def run(
    rule: Rule,
    text: str,
    region: Region,
    tracker: ReservationTracker,
    *,
    include_rejected: bool = False,
) -> list[MatchResult]:
    """Run one rule over a region.

    Args:
        rule: The rule to apply
        text: Whole buffer; matches never extend past ``region.end`` but
            lookbehinds may see text before ``region.start``
        region: Where to search
        tracker: Reservation state, updated for every accepted match
        include_rejected: Also return rejected candidates (accepted=False)

    Returns:
        Matches in buffer order (accepted only unless ``include_rejected``)

    Raises:
        RuntimeError: If the loop fails to make progress. The cursor
            advances by at least one unit per iteration, so this signals an
            internal error rather than a pathological input.
    """
    pattern = rule.pattern
    cursor = region.start
    limit = len(region) + 1
    iterations = 0
    rejected = 0
    results: list[MatchResult] = []

    while cursor <= region.end:
        iterations += 1
        if iterations > limit:
            raise RuntimeError(
                f"Matcher loop for rule {rule.name!r} exceeded {limit} iterations "
                f"over region {region}"
            )

        match = pattern.search(text, cursor, region.end)
        if match is None:
            break

        if is_acceptable(rule, match, tracker):
            reserve(rule, match, tracker)
            results.append(to_result(rule, match, True))
            start, end = match.span()
            # zero-length matches still advance
            cursor = end if end > start else end + 1
        else:
            rejected += 1
            if include_rejected:
                results.append(to_result(rule, match, False))
            cursor = match.start() + 1

    if rejected:
        logger.debug(
            "Rule %s: %d accepted, %d rejected",
            rule.name,
            len(results) - (rejected if include_rejected else 0),
            rejected,
        )
    return results
