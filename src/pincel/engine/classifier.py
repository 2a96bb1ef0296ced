"""Classifier: one classification pass per region.

A pass creates a fresh ReservationTracker, runs every rule of the table in
priority order through the matcher loop, turns the accepted matches into
ClassifiedSpans and finally applies the conflict cleanup pass.

Thread Safety:
Classifier holds only immutable state (config and rule table). Each call to
classify() owns its tracker, so one Classifier can serve many threads.

"""

from __future__ import annotations

from collections.abc import Iterable
from time import perf_counter

from pincel.cache import ClassificationCache, hash_config, hash_content
from pincel.categories import GroupRole
from pincel.config import GrammarConfig, get_grammar_config
from pincel.engine.cleanup import cleanup
from pincel.engine.matcher import run
from pincel.engine.reservation import ReservationTracker
from pincel.engine.rules import Rule, RuleTable, build_rule_table
from pincel.errors import InvalidParameter
from pincel.patterns.replacements import REPLACEMENT_GROUP
from pincel.spans import Classification, ClassifiedSpan, MatchResult, Region
from pincel.utils.logger import debug_enabled, get_logger

logger = get_logger(__name__)


class Classifier:
    """Classifies regions of an AsciiDoc buffer.

    The grammar config is resolved once, at construction: explicitly passed,
    or the one active in the current context (see ``grammar_config_context``).

    Usage:
        >>> classifier = Classifier()
        >>> result = classifier.classify("== Title\\n")
        >>> [span.category.name for span in result.spans]
        ['DELIMITER', 'TITLE_1']

    """

    __slots__ = ("_config", "_rules")

    def __init__(self, config: GrammarConfig | None = None) -> None:
        self._config = config if config is not None else get_grammar_config()
        self._rules = build_rule_table(self._config)

    @property
    def config(self) -> GrammarConfig:
        """The grammar config this classifier was built with."""
        return self._config

    @property
    def rules(self) -> RuleTable:
        """The rule table in priority order."""
        return self._rules

    def classify(
        self,
        text: str,
        region: Region | None = None,
        *,
        cache: ClassificationCache | None = None,
    ) -> Classification:
        """Classify ``region`` of ``text``.

        Args:
            text: Whole buffer
            region: Region to classify (None = whole buffer). Line-oriented
                constructs need the region to start at a line start; see
                ``Region.for_lines``.
            cache: Optional content-addressed cache. Bypassed when the
                config carries a named character resolver.

        Returns:
            Classification with cleaned spans and final reservation tags

        Raises:
            InvalidParameter: If the region does not fit inside the buffer
        """
        if region is None:
            region = Region.whole(text)
        elif region.end > len(text):
            raise InvalidParameter(
                "region", region, f"region ends past the buffer (length {len(text)})"
            )

        config_hash = hash_config(self._config) if cache is not None else ""
        if cache is not None and config_hash:
            cached = cache.get(hash_content(text, region), config_hash)
            if cached is not None:
                logger.debug("Cache hit for region %s", region)
                return cached

        result = self._classify(text, region)

        if cache is not None and config_hash:
            cache.put(hash_content(text, region), config_hash, result)
        return result

    def classify_many(
        self,
        texts: Iterable[str],
        *,
        cache: ClassificationCache | None = None,
    ) -> list[Classification]:
        """Classify several whole buffers with the same grammar.

        When cache is provided, duplicate buffers within the batch hit cache.
        """
        return [self.classify(text, cache=cache) for text in texts]

    def _classify(self, text: str, region: Region) -> Classification:
        timed = debug_enabled(logger)
        started = perf_counter() if timed else 0.0
        tracker = ReservationTracker(region)
        emitted: list[ClassifiedSpan] = []
        accepted = 0

        for rule in self._rules:
            matches = run(rule, text, region, tracker)
            accepted += len(matches)
            for match in matches:
                emitted.extend(self._spans_for(rule, match, text, region))

        spans = cleanup(emitted)
        if timed:
            logger.debug(
                "Classified region %s: %d matches, %d spans, %d reserved positions in %.2fms",
                region,
                accepted,
                len(spans),
                tracker.reserved_count(),
                (perf_counter() - started) * 1000,
            )
        return Classification(region, tuple(spans), tracker.snapshot())

    def _spans_for(
        self, rule: Rule, match: MatchResult, text: str, region: Region
    ) -> list[ClassifiedSpan]:
        replacement_text = None
        if rule.replacement is not None:
            matched = match.text(text, REPLACEMENT_GROUP)
            if matched is not None:
                replacement_text = rule.replacement.resolve(
                    matched, self._config.named_character_resolver
                )

        spans = []
        roles = rule.pattern.roles
        for index, category in rule.category_assignment:
            bounds = match.group(index)
            if bounds is None:
                continue
            start = max(bounds[0], region.start)
            end = min(bounds[1], region.end)
            if end <= start:
                continue
            spans.append(
                ClassifiedSpan(
                    start,
                    end,
                    category,
                    roles.get(index, GroupRole.TEXT),
                    rule.name,
                    replacement_text if index == REPLACEMENT_GROUP else None,
                )
            )
        return spans


def classify(
    text: str,
    region: Region | None = None,
    *,
    config: GrammarConfig | None = None,
    cache: ClassificationCache | None = None,
) -> Classification:
    """Classify ``region`` of ``text`` with a one-off Classifier.

    Rule tables are cached per config, so repeated calls are cheap.

    Args:
        text: Whole buffer
        region: Region to classify (None = whole buffer)
        config: Grammar config (None = the context's active config)
        cache: Optional content-addressed classification cache

    Returns:
        Classification

    Example:
        >>> result = classify("*strong* text")
        >>> [s.text("*strong* text") for s in result.spans]
        ['*', 'strong', '*']
    """
    return Classifier(config).classify(text, region, cache=cache)
