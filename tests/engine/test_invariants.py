"""Property-based tests for classification invariants using Hypothesis.

These hold for any input buffer and any region of it, which is what an
editor throws at the classifier while the user types.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from pincel import Classifier, Region, ReservationTag, cleanup
from pincel.engine import ReservationTracker, build_rule_table, run

# Markup-heavy alphabet so the rules actually fire
ASCIIDOC_ALPHABET = "ab =*_`+#-.:|/[]<>()'\n\t"

asciidoc_text = st.text(alphabet=ASCIIDOC_ALPHABET, max_size=120)


@st.composite
def text_and_region(draw: st.DrawFn) -> tuple[str, Region]:
    text = draw(asciidoc_text)
    start = draw(st.integers(min_value=0, max_value=len(text)))
    end = draw(st.integers(min_value=start, max_value=len(text)))
    return text, Region(start, end)


CLASSIFIER = Classifier()


class TestOutputInvariants:
    """Properties of the spans and tags a pass returns."""

    @given(text_and_region())
    @settings(max_examples=200)
    def test_deterministic(self, case: tuple[str, Region]) -> None:
        text, region = case
        assert CLASSIFIER.classify(text, region) == CLASSIFIER.classify(text, region)

    @given(text_and_region())
    @settings(max_examples=200)
    def test_spans_non_empty_and_inside_region(self, case: tuple[str, Region]) -> None:
        text, region = case
        result = CLASSIFIER.classify(text, region)
        for span in result.spans:
            assert region.start <= span.start < span.end <= region.end

    @given(text_and_region())
    @settings(max_examples=200)
    def test_one_tag_per_position(self, case: tuple[str, Region]) -> None:
        text, region = case
        assert len(CLASSIFIER.classify(text, region).tags) == len(region)

    @given(asciidoc_text)
    @settings(max_examples=200)
    def test_no_text_span_overlaps_structural_span(self, text: str) -> None:
        spans = CLASSIFIER.classify(text).spans
        structural = [s for s in spans if s.category.is_structural]
        for span in spans:
            if span.category.is_structural:
                continue
            for other in structural:
                assert span.end <= other.start or other.end <= span.start, (span, other)

    @given(asciidoc_text)
    @settings(max_examples=100)
    def test_cleanup_idempotent(self, text: str) -> None:
        spans = list(CLASSIFIER.classify(text).spans)
        assert cleanup(spans) == spans

    @given(asciidoc_text)
    @settings(max_examples=100)
    def test_spans_sorted(self, text: str) -> None:
        spans = CLASSIFIER.classify(text).spans
        assert [(s.start, s.end) for s in spans] == sorted((s.start, s.end) for s in spans)


class TestPassInvariants:
    """Properties of the rule-by-rule pass, checked with the engine pieces."""

    @given(asciidoc_text)
    @settings(max_examples=100)
    def test_accepted_matches_respect_prior_reservations(self, text: str) -> None:
        region = Region.whole(text)
        tracker = ReservationTracker(region)
        for rule in build_rule_table():
            before = tracker.snapshot()
            for match in run(rule, text, region, tracker):
                for index in rule.must_be_free:
                    bounds = match.group(index)
                    if bounds is not None:
                        assert all(
                            before[i] is ReservationTag.FREE for i in range(*bounds)
                        ), (rule.name, index)
                for index in rule.must_not_be_block_delimiter:
                    bounds = match.group(index)
                    if bounds is not None:
                        assert all(
                            before[i] is not ReservationTag.BLOCK_DELIMITER
                            for i in range(*bounds)
                        ), (rule.name, index)

    @given(asciidoc_text)
    @settings(max_examples=100)
    def test_tags_are_monotonic(self, text: str) -> None:
        region = Region.whole(text)
        tracker = ReservationTracker(region)
        for rule in build_rule_table():
            before = tracker.snapshot()
            run(rule, text, region, tracker)
            after = tracker.snapshot()
            for old, new in zip(before, after, strict=True):
                if old is not ReservationTag.FREE:
                    assert new is old, rule.name

    @given(asciidoc_text)
    @settings(max_examples=50)
    def test_matcher_terminates_on_every_rule(self, text: str) -> None:
        region = Region.whole(text)
        for rule in build_rule_table():
            results = run(rule, text, region, ReservationTracker(region), include_rejected=True)
            assert len(results) <= len(text) + 1
