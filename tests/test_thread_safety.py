"""Thread safety tests for Pincel.

Classifier documents that one instance (and its cached rule table) can
serve many threads, each classify() call owning its reservation tracker.
These tests use real threads to catch shared mutable state.
"""

from concurrent.futures import ThreadPoolExecutor

from pincel import (
    Category,
    Classifier,
    GrammarConfig,
    Region,
    build_rule_table,
    classify,
    grammar_config_context,
)

DOCUMENTS = [
    "= Doc\n\n== Section\n\nSome *strong* and _emphasis_ text.\n",
    "* item one\n* item **two**\n\n. step\n",
    "----\n*not bold*\n----\n\n|===\n| a | b\n|===\n",
    "Visit https://example.org[site] (C) 2024 -- ok +\nnext\n",
    ":toc: left\n// comment *x*\n[[anchor]]\n.Block title\n",
]


class TestSharedClassifier:
    def test_concurrent_results_match_sequential(self) -> None:
        classifier = Classifier()
        expected = [classifier.classify(doc) for doc in DOCUMENTS]

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(classifier.classify, DOCUMENTS * 20))

        assert results == expected * 20

    def test_concurrent_regions(self) -> None:
        text = "".join(DOCUMENTS)
        classifier = Classifier()
        regions = [Region.for_lines(text, pos, pos) for pos in range(0, len(text), 7)]
        expected = [classifier.classify(text, region) for region in regions]

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda r: classifier.classify(text, r), regions))

        assert results == expected


class TestConfigIsolation:
    def test_context_config_is_per_thread(self) -> None:
        text = "fix TODO now"

        def with_words(words: tuple[str, ...]) -> int:
            with grammar_config_context(GrammarConfig(special_words=words)):
                return len(classify(text).spans_of(Category.SPECIAL_WORD))

        with ThreadPoolExecutor(max_workers=4) as pool:
            counts = list(pool.map(with_words, [("TODO",), ("NOPE",)] * 10))

        assert counts == [1, 0] * 10

    def test_rule_table_built_concurrently(self) -> None:
        config = GrammarConfig(title_max_level=2, special_words=("XXX",))
        with ThreadPoolExecutor(max_workers=8) as pool:
            tables = list(pool.map(lambda _: build_rule_table(config), range(16)))
        assert all(table.names() == tables[0].names() for table in tables)
