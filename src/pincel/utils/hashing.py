"""Hashing utilities for Pincel cache keys.

Example:
    >>> from pincel.utils.hashing import hash_str
    >>> hash_str("hello world", truncate=16)
    'b94d27b9934d3e08'
"""

import hashlib
from dataclasses import fields, is_dataclass
from typing import Any


def hash_str(
    content: str,
    truncate: int | None = None,
    algorithm: str = "sha256",
) -> str:
    """Hash string content using specified algorithm.

    Args:
        content: String content to hash
        truncate: Truncate result to N characters (None = full hash)
        algorithm: Hash algorithm ('sha256', 'md5')

    Returns:
        Hex digest of hash, optionally truncated

    Examples:
        >>> hash_str("hello")
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    hasher = hashlib.new(algorithm)
    hasher.update(content.encode("utf-8"))
    digest = hasher.hexdigest()
    return digest[:truncate] if truncate is not None else digest


def structural_hash(value: Any, *, truncate: int = 16) -> str:
    """Deterministic hash of a dataclass value (e.g. a GrammarConfig).

    Walks dataclass fields, tuples and frozensets so the result is stable
    across process runs (unlike the builtin ``hash`` of strings).
    """

    def update(hasher: Any, item: Any) -> None:
        if is_dataclass(item):
            hasher.update(type(item).__name__.encode("utf-8"))
            for field in fields(item):
                hasher.update(field.name.encode("utf-8"))
                update(hasher, getattr(item, field.name))
            return

        if isinstance(item, tuple):
            hasher.update(b"tuple[")
            for element in item:
                update(hasher, element)
            hasher.update(b"]")
            return

        if isinstance(item, frozenset):
            hasher.update(b"frozenset{")
            for element in sorted(repr(e) for e in item):
                hasher.update(element.encode("utf-8"))
            hasher.update(b"}")
            return

        if item is None:
            hasher.update(b"None")
            return

        hasher.update(repr(item).encode("utf-8"))

    hasher = hashlib.sha256()
    update(hasher, value)
    return hasher.hexdigest()[:truncate]
