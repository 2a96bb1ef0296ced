"""Tests for Pincel utility modules."""

from dataclasses import dataclass

from pincel import GrammarConfig


class TestHashStr:
    """Tests for hash_str function."""

    def test_known_digest(self) -> None:
        from pincel.utils.hashing import hash_str

        assert hash_str("hello") == (
            "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"
        )

    def test_truncate(self) -> None:
        from pincel.utils.hashing import hash_str

        assert hash_str("hello world", truncate=16) == "b94d27b9934d3e08"

    def test_md5(self) -> None:
        from pincel.utils.hashing import hash_str

        assert hash_str("hello", algorithm="md5") == "5d41402abc4b2a76b9719d911017c592"


class TestStructuralHash:
    """Tests for structural_hash function."""

    def test_equal_configs_hash_equal(self) -> None:
        from pincel.utils.hashing import structural_hash

        assert structural_hash(GrammarConfig()) == structural_hash(GrammarConfig())

    def test_field_change_changes_hash(self) -> None:
        from pincel.utils.hashing import structural_hash

        assert structural_hash(GrammarConfig()) != structural_hash(
            GrammarConfig(title_max_level=3)
        )

    def test_nested_values(self) -> None:
        from pincel.utils.hashing import structural_hash

        @dataclass(frozen=True)
        class Point:
            xs: tuple[int, ...]
            tags: frozenset[str]
            label: str | None

        a = Point((1, 2), frozenset({"a", "b"}), None)
        b = Point((1, 2), frozenset({"b", "a"}), None)
        c = Point((2, 1), frozenset({"a", "b"}), None)
        assert structural_hash(a) == structural_hash(b)
        assert structural_hash(a) != structural_hash(c)
        assert len(structural_hash(a)) == 16


class TestGetLogger:
    """Tests for get_logger function."""

    def test_prefix_added(self) -> None:
        from pincel.utils.logger import get_logger

        assert get_logger("mymodule").name == "pincel.mymodule"

    def test_package_names_unchanged(self) -> None:
        from pincel.utils.logger import get_logger

        assert get_logger("pincel.engine.matcher").name == "pincel.engine.matcher"
        assert get_logger("pincel").name == "pincel"

    def test_debug_enabled_follows_level(self) -> None:
        import logging

        from pincel.utils.logger import debug_enabled, get_logger

        logger = get_logger("tests.debug_enabled")
        logger.setLevel(logging.DEBUG)
        assert debug_enabled(logger)
        logger.setLevel(logging.WARNING)
        assert not debug_enabled(logger)

    def test_classify_logs_summary_at_debug(self, caplog) -> None:
        import logging

        from pincel import classify

        with caplog.at_level(logging.DEBUG, logger="pincel"):
            classify("== Title\n")
        assert any("Classified region" in record.getMessage() for record in caplog.records)
