"""Content-addressed classification cache for Pincel.

Provides (content_hash, config_hash) -> Classification caching so an editor
re-classifying an unchanged region (undo/revert, re-display, duplicate
content) skips the rule table entirely.

Thread Safety:
    DictClassificationCache is not thread-safe. For parallel classification,
    use a cache implementation with internal locking (e.g. threading.Lock
    around get/put).

Example:
    >>> from pincel import classify, DictClassificationCache
    >>> cache = DictClassificationCache()
    >>> first = classify("== Title", cache=cache)
    >>> second = classify("== Title", cache=cache)  # Cache hit
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from pincel.spans import Region
from pincel.utils.hashing import hash_str, structural_hash

if TYPE_CHECKING:
    from pincel.config import GrammarConfig
    from pincel.spans import Classification


class ClassificationCache(Protocol):
    """Protocol for content-addressed classification caches.

    Cache key is (content_hash, config_hash). Cached value is a
    Classification, which is immutable and safe to share across threads.
    """

    def get(self, content_hash: str, config_hash: str) -> Classification | None:
        """Return cached Classification if present, else None."""
        ...

    def put(self, content_hash: str, config_hash: str, result: Classification) -> None:
        """Store Classification in cache."""
        ...


class DictClassificationCache:
    """In-memory classification cache using a dict.

    Not thread-safe. For parallel classification, wrap with a lock or use a
    thread-safe implementation.
    """

    __slots__ = ("_data",)

    def __init__(self) -> None:
        self._data: dict[tuple[str, str], Classification] = {}

    def __len__(self) -> int:
        return len(self._data)

    def get(self, content_hash: str, config_hash: str) -> Classification | None:
        """Return cached Classification if present, else None."""
        return self._data.get((content_hash, config_hash))

    def put(self, content_hash: str, config_hash: str, result: Classification) -> None:
        """Store Classification in cache."""
        self._data[(content_hash, config_hash)] = result

    def clear(self) -> None:
        """Drop every entry."""
        self._data.clear()


# Characters before the region that patterns can observe: the longest
# lookbehind in the rule table (literal paragraphs check for "\n\n")
CONTEXT_BEFORE = 2


def hash_content(text: str, region: Region | None = None) -> str:
    """Compute SHA256 hash of the classified text for cache key.

    Covers the region slice, the ``CONTEXT_BEFORE`` characters before it
    (lookbehinds and ``^`` see them) and the region offsets.

    Args:
        text: Whole buffer
        region: Classified region (None = whole buffer)

    Returns:
        Hex digest of SHA256 hash
    """
    if region is None:
        region = Region.whole(text)
    context = text[max(0, region.start - CONTEXT_BEFORE) : region.end]
    return hash_str(f"{region.start}:{region.end}\x00{context}")


def hash_config(config: GrammarConfig) -> str:
    """Compute hash of GrammarConfig for cache key.

    When named_character_resolver is set, returns empty string to disable
    caching (resolved replacement text depends on an arbitrary callable).

    Args:
        config: GrammarConfig to hash

    Returns:
        Hex digest of config hash, or "" if cache should be bypassed
    """
    if config.named_character_resolver is not None:
        return ""
    return structural_hash(config)


__all__ = [
    "ClassificationCache",
    "DictClassificationCache",
    "hash_config",
    "hash_content",
]
