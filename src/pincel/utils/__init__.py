"""Utility modules for Pincel.

Provides:
- hashing: hash_str, structural_hash for cache keys
- logger: get_logger, debug_enabled
"""

from pincel.utils.hashing import hash_str, structural_hash
from pincel.utils.logger import debug_enabled, get_logger

__all__ = [
    "debug_enabled",
    "get_logger",
    "hash_str",
    "structural_hash",
]
