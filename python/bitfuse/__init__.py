"""
bitfuse - Approximate string search with the Bitap algorithm

A pure Python library for typo-tolerant search over lists of strings or
structured records: Bitap matching with location-aware scoring, weighted
multi-field search, tokenized queries and word completion.

Example usage:
    >>> import bitfuse as bf

    # Match one pattern against one text
    >>> bf.match("od mn war", "Old Man's War").is_match
    True

    # Rank a collection (returns the matching items, best first)
    >>> bf.search(["you", "to", "the"], "yu")
    ['you']

    # Weighted multi-field search with scores
    >>> books = [{"title": "Old Man's War", "author": "John Scalzi"}]
    >>> fuse = bf.Fuse(books, keys=[("title", 0.3), ("author", 0.7)], include_score=True)
    >>> [r.item["title"] for r in fuse.search("scalzi")]
    ["Old Man's War"]
"""

from importlib.metadata import version as _get_version

# Register the .bitap expression namespace
import bitfuse.expr  # noqa: F401

# Import polars subpackage for `from bitfuse import polars` style
from bitfuse import polars
from bitfuse.accessor import DeepValueAccessor, FieldAccessor, deep_value
from bitfuse.alphabet import pattern_alphabet
from bitfuse.bitap import (
    NEAR_EXACT_SCORE,
    Bitap,
    bitap_score,
    bitap_search,
    match,
    matched_indices,
)
from bitfuse.enums import CollectionKind
from bitfuse.exceptions import BitfuseError, ConfigurationError, ValidationError
from bitfuse.fallback import FALLBACK_SCORE, regex_search
from bitfuse.fuse import CandidateEntry, FieldScore, Fuse, search
from bitfuse.options import FieldSpec, MatchOptions, SearchOptions

# -----------------------------------------------------------------------------
# Polars Integration (polars_ext)
# -----------------------------------------------------------------------------
# Ranked search over Series and DataFrames.
# See: bitfuse.polars_ext module docstring for details.
from bitfuse.polars_ext import search_dataframe, search_series
from bitfuse.results import FieldMatch, MatchResult, SearchResult, Span
from bitfuse.suggest import (
    Suggester,
    Suggestions,
    WordSpan,
    apply_suggestion,
    current_word,
    word_start,
)

__version__ = _get_version("bitfuse")
__all__ = [
    # Version
    "__version__",
    # Exceptions
    "BitfuseError",
    "ValidationError",
    "ConfigurationError",
    # Options
    "MatchOptions",
    "SearchOptions",
    "FieldSpec",
    # Result types
    "MatchResult",
    "FieldMatch",
    "SearchResult",
    "Span",
    # Enums
    "CollectionKind",
    # Matching
    "Bitap",
    "NEAR_EXACT_SCORE",
    "bitap_score",
    "bitap_search",
    "match",
    "matched_indices",
    "pattern_alphabet",
    "FALLBACK_SCORE",
    "regex_search",
    # Field access
    "FieldAccessor",
    "DeepValueAccessor",
    "deep_value",
    # Search engine
    "Fuse",
    "CandidateEntry",
    "FieldScore",
    "search",
    # Suggestions
    "Suggester",
    "Suggestions",
    "WordSpan",
    "apply_suggestion",
    "current_word",
    "word_start",
    # Polars Integration
    "search_series",
    "search_dataframe",
    # Polars subpackage
    "polars",
]
