"""
Pincel: AsciiDoc syntax classification for editors

Classifies regions of an AsciiDoc buffer into spans (titles, list markers,
delimited blocks, quotes, macros, replacements, ...) for syntax
highlighting. A prioritized rule table runs over the region; earlier rules
reserve what they matched so later rules cannot re-interpret it. Zero
runtime dependencies.

Quick Start:
    >>> from pincel import classify
    >>> text = "== Install\\n\\nRun *make* -- then relax.\\n"
    >>> result = classify(text)
    >>> [(s.category.name, s.text(text)) for s in result.spans][:2]
    [('DELIMITER', '== '), ('TITLE_1', 'Install')]

    >>> # Reuse one Classifier (and its rule table) for a whole editor session
    >>> from pincel import Classifier, GrammarConfig, Region
    >>> classifier = Classifier(GrammarConfig(special_words=("TODO",)))
    >>> region = Region.for_lines(text, 12, 12)
    >>> result = classifier.classify(text, region)

Title queries:
    >>> from pincel import title_descriptor
    >>> title_descriptor(text, 4).level
    1

Installation:
    pip install pincel
"""

from pincel.cache import (
    ClassificationCache,
    DictClassificationCache,
    hash_config,
    hash_content,
)
from pincel.categories import (
    STRUCTURAL_CATEGORIES,
    TEXT_CATEGORIES,
    TITLE_CATEGORIES,
    Category,
    GroupRole,
    ReservationTag,
)
from pincel.config import (
    GrammarConfig,
    get_grammar_config,
    grammar_config_context,
    reset_grammar_config,
    set_grammar_config,
)
from pincel.engine import (
    Classifier,
    ReservationTracker,
    Rule,
    RuleTable,
    build_rule_table,
    classify,
    cleanup,
)
from pincel.errors import InvalidParameter, PincelError, UnresolvedReplacement
from pincel.patterns import (
    Pattern,
    Replacement,
    TitleKind,
    TitleSubtype,
    html_entity_resolver,
    resolve_replacement,
)
from pincel.spans import Classification, ClassifiedSpan, MatchResult, Region
from pincel.titles import TitleDescriptor, title_descriptor

__version__ = "0.1.0"

__all__ = [
    # Main API
    "classify",
    "Classifier",
    "title_descriptor",
    "resolve_replacement",
    # Configuration
    "GrammarConfig",
    "get_grammar_config",
    "set_grammar_config",
    "reset_grammar_config",
    "grammar_config_context",
    # Caching
    "ClassificationCache",
    "DictClassificationCache",
    "hash_config",
    "hash_content",
    # Results
    "Classification",
    "ClassifiedSpan",
    "MatchResult",
    "Region",
    "TitleDescriptor",
    "TitleKind",
    "TitleSubtype",
    # Categories
    "Category",
    "GroupRole",
    "ReservationTag",
    "STRUCTURAL_CATEGORIES",
    "TEXT_CATEGORIES",
    "TITLE_CATEGORIES",
    # Engine
    "Pattern",
    "Replacement",
    "ReservationTracker",
    "Rule",
    "RuleTable",
    "build_rule_table",
    "cleanup",
    "html_entity_resolver",
    # Errors
    "PincelError",
    "InvalidParameter",
    "UnresolvedReplacement",
    # Version
    "__version__",
]
