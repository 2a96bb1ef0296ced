"""Grammar configuration for Pincel.

GrammarConfig is an immutable value describing the grammar variant a rule
table is built from (title levels, two-line title delimiters, heuristics,
special words). Changing grammar means building a new config and a new rule
table; nothing is mutated in place.

A ContextVar (PEP 567) holds the ambient config so applications can set it
once per thread/context instead of threading it through every call.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    # Explicit
    classifier = Classifier(GrammarConfig(title_max_level=2))

    # Ambient, via the context manager
    with grammar_config_context(GrammarConfig(special_words=("TODO",))):
        result = classify(text)

"""

from collections.abc import Callable
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any, Iterator

# Maps an entity name ("amp", "copy") to a code point or replacement string.
NamedCharacterResolver = Callable[[str], int | str | None]

DEFAULT_TWO_LINE_TITLE_DELIMITERS: tuple[str, ...] = ("==", "--", "~~", "^^", "++")
DEFAULT_ADMONITION_LABELS: tuple[str, ...] = ("NOTE", "TIP", "IMPORTANT", "WARNING", "CAUTION")


@dataclass(frozen=True, slots=True)
class GrammarConfig:
    """Immutable grammar configuration.

    Frozen dataclass ensures thread-safety (immutable after creation) and
    makes configs usable as cache keys for built rule tables.

    Attributes:
        title_max_level: Highest title level (0-based) that gets a rule.
            Must be between 0 and 4.
        two_line_title_delimiters: Underline delimiter per title level,
            each exactly two characters.
        enable_two_line_titles: Classify two-line (underlined) titles at all
        two_line_title_tolerance: Underline length must differ from the title
            text length by fewer than this many characters
        two_line_title_disabled_length: Underlines of exactly this length are
            never two-line titles (e.g. 4, so "----" always opens a block)
        special_words: Words classified as SPECIAL_WORD; empty disables the rule
        admonition_labels: Paragraph labels recognized as admonitions
        named_character_resolver: Resolves ``&name;`` references; None leaves
            them unresolved

    """

    title_max_level: int = 4
    two_line_title_delimiters: tuple[str, ...] = DEFAULT_TWO_LINE_TITLE_DELIMITERS
    enable_two_line_titles: bool = True
    two_line_title_tolerance: int = 3
    two_line_title_disabled_length: int | None = None
    special_words: tuple[str, ...] = ()
    admonition_labels: tuple[str, ...] = DEFAULT_ADMONITION_LABELS
    named_character_resolver: NamedCharacterResolver | None = None

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "GrammarConfig":
        """Create GrammarConfig from dictionary.

        Useful when settings come from external sources (editor settings,
        TOML/YAML files). Lists are converted to tuples so the result stays
        hashable. Unknown keys are silently ignored.

        Args:
            config_dict: Dictionary with config values. Keys should match
                GrammarConfig attribute names.

        Returns:
            New GrammarConfig instance with values from dict.

        Example:
            >>> config = GrammarConfig.from_dict({
            ...     "title_max_level": 2,
            ...     "special_words": ["TODO", "FIXME"],
            ...     "unknown_key": "ignored",
            ... })
            >>> config.special_words
            ('TODO', 'FIXME')

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {
            k: tuple(v) if isinstance(v, list) else v
            for k, v in config_dict.items()
            if k in valid_fields
        }
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: GrammarConfig = GrammarConfig()

_grammar_config: ContextVar[GrammarConfig] = ContextVar(
    "grammar_config",
    default=_DEFAULT_CONFIG,
)


def get_grammar_config() -> GrammarConfig:
    """Get current grammar configuration (thread-local).

    Returns:
        The active GrammarConfig for this thread/context.

    """
    return _grammar_config.get()


def set_grammar_config(config: GrammarConfig) -> None:
    """Set grammar configuration for current context.

    Args:
        config: GrammarConfig instance to use for this context.

    """
    _grammar_config.set(config)


def reset_grammar_config() -> None:
    """Reset to default configuration.

    Reuses the module-level _DEFAULT_CONFIG singleton, avoiding allocation.

    """
    _grammar_config.set(_DEFAULT_CONFIG)


@contextmanager
def grammar_config_context(config: GrammarConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: GrammarConfig to use within the context.

    Yields:
        None

    Example:
        >>> with grammar_config_context(GrammarConfig(title_max_level=1)):
        ...     result = classify("=== Too deep")
        >>> # Automatically reset to previous config

    Thread Safety:
        Only affects the current thread's context. Properly restores previous
        config even if an exception is raised.

    """
    previous = _grammar_config.get()
    _grammar_config.set(config)
    try:
        yield
    finally:
        _grammar_config.set(previous)


__all__ = [
    "DEFAULT_ADMONITION_LABELS",
    "DEFAULT_TWO_LINE_TITLE_DELIMITERS",
    "GrammarConfig",
    "NamedCharacterResolver",
    "get_grammar_config",
    "grammar_config_context",
    "reset_grammar_config",
    "set_grammar_config",
]
