"""Result types returned by the matcher and the search engine."""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

Span = Tuple[int, int]
"""Inclusive ``(start, end)`` character indices of a matched run."""


@dataclass(frozen=True)
class MatchResult:
    """
    Outcome of matching one pattern against one text.

    Attributes:
        is_match: Whether a match was found within the threshold
        score: 0.0 for an exact match up to 1.0 for no match
        matched_indices: Ascending, non-overlapping inclusive spans of the
            characters that belong to the pattern

    Supports equality comparison and hashing for use in sets and as dict keys.
    """

    is_match: bool
    score: float
    matched_indices: Tuple[Span, ...] = ()


@dataclass(frozen=True)
class FieldMatch:
    """
    Match details of one searched field value.

    Attributes:
        indices: Matched spans within ``value``
        value: The searched string
        key: Field path the value came from (None for string collections)
        array_index: Position of the value among the values resolved for
            ``key`` (None for string collections)
    """

    indices: Tuple[Span, ...]
    value: str
    key: Optional[str] = None
    array_index: Optional[int] = None


@dataclass
class SearchResult:
    """
    Annotated search result, produced when scores or matches are requested.

    Attributes:
        item: The matched record, or its identifier when ``id`` is configured
        index: Position of the record in the searched collection
        score: Aggregate score (lower is better), when ``include_score``
        matches: Per-field match details, when ``include_matches``
    """

    item: Any
    index: int
    score: Optional[float] = None
    matches: Optional[List[FieldMatch]] = field(default=None)


__all__ = ["Span", "MatchResult", "FieldMatch", "SearchResult"]
