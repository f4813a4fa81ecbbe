"""Option records for the matcher and the search engine.

Both records are frozen dataclasses validated eagerly in ``__post_init__``,
so a bad value fails at construction time instead of in the middle of a
search. Derive variants with :func:`dataclasses.replace`:

    >>> from dataclasses import replace
    >>> from bitfuse import SearchOptions
    >>> strict = replace(SearchOptions(), threshold=0.2)
"""

import re
from dataclasses import dataclass, field, fields
from operator import attrgetter
from typing import Any, Callable, Mapping, Optional, Tuple, Union

from bitfuse._utils import (
    DEFAULT_TOKEN_SEPARATOR,
    check_bool,
    check_int,
    check_number,
    compile_separator,
)
from bitfuse.accessor import DeepValueAccessor, FieldAccessor
from bitfuse.exceptions import ConfigurationError

KeySpec = Union[str, "FieldSpec", Mapping[str, Any], Tuple[str, float]]


@dataclass(frozen=True)
class FieldSpec:
    """A searchable field path and its importance.

    Attributes:
        name: Dotted path resolved against every record (e.g. ``"author.name"``)
        weight: Relative importance in (0, 1]. A weight of 1 is the default
            and makes the field part of the plain average; smaller weights
            make the field compete for the best weighted score.
    """

    name: str
    weight: float = 1.0

    def __post_init__(self):
        if not isinstance(self.name, str):
            raise ConfigurationError(f"Key name must be a string, got {type(self.name).__name__}")
        weight = self.weight
        if isinstance(weight, bool) or not isinstance(weight, (int, float)):
            raise ConfigurationError(f"Key weight must be a number, got {type(weight).__name__}")
        if not 0 < weight <= 1:
            raise ConfigurationError(f"Key weight has to be > 0 and <= 1, got {weight} for {self.name!r}")

    @property
    def factor(self) -> float:
        """Multiplier applied to this field's score (``1 - weight``, or 1 for the default weight)."""
        return (1 - self.weight) or 1


def normalize_key(key: KeySpec) -> FieldSpec:
    """Convert any supported key shape to a FieldSpec.

    Example:
        >>> normalize_key("title")
        FieldSpec(name='title', weight=1.0)
        >>> normalize_key({"name": "author", "weight": 0.7})
        FieldSpec(name='author', weight=0.7)
    """
    if isinstance(key, FieldSpec):
        return key
    if isinstance(key, str):
        return FieldSpec(key)
    if isinstance(key, Mapping):
        if "name" not in key:
            raise ConfigurationError(f"Key mapping must have a 'name': {dict(key)!r}")
        return FieldSpec(key["name"], key.get("weight", 1.0))
    if isinstance(key, tuple) and len(key) == 2:
        return FieldSpec(*key)
    raise ConfigurationError(
        f"Key must be str, FieldSpec, mapping or (name, weight) pair, got {key!r}"
    )


@dataclass(frozen=True)
class MatchOptions:
    """Tunables of a single approximate match.

    Attributes:
        location: Approximately where in the text the pattern is expected.
        distance: How far from ``location`` a match may stray. An exact
            match ``distance`` characters away scores as a complete
            mismatch; 0 requires the match at exactly ``location``.
        threshold: Score at which the matcher gives up. 0.0 requires a
            perfect match of both letters and location, 1.0 accepts anything.
        max_pattern_length: Longest pattern searched with Bitap; longer
            patterns fall back to a literal alternation search.
        case_sensitive: Compare characters as-is instead of lowercased.
        token_separator: Regex separating words (tokenized search and the
            regex fallback).
        find_all_matches: Keep scanning to the end of the text even after a
            perfect match, so every near-match run is reported.
        min_match_char_length: Shortest run of matched characters reported.
    """

    location: int = 0
    distance: float = 100
    threshold: float = 0.6
    max_pattern_length: int = 32
    case_sensitive: bool = False
    token_separator: Union[str, re.Pattern] = DEFAULT_TOKEN_SEPARATOR
    find_all_matches: bool = False
    min_match_char_length: int = 1

    def __post_init__(self):
        check_int("location", self.location, 0)
        check_number("distance", self.distance)
        check_number("threshold", self.threshold, 0.0, 1.0)
        check_int("max_pattern_length", self.max_pattern_length, 1)
        check_bool("case_sensitive", self.case_sensitive)
        check_bool("find_all_matches", self.find_all_matches)
        check_int("min_match_char_length", self.min_match_char_length, 1)
        object.__setattr__(self, "token_separator", compile_separator(self.token_separator))


@dataclass(frozen=True)
class SearchOptions(MatchOptions):
    """Options of the scored search engine, on top of the match tunables.

    Attributes:
        id: Path of an identifier field. When set, results carry the
            identifier instead of the whole record.
        keys: Searchable fields, as strings, FieldSpec, ``{"name", "weight"}``
            mappings or ``(name, weight)`` pairs.
        should_sort: Rank results by ``sort_key``.
        get_fn: Strategy resolving a path against a record.
        sort_key: Key function over candidates; ascending order.
        tokenize: Also search the individual words of the query and combine
            their scores with the full-query score.
        match_all_tokens: Only accept records where every query token
            matched some word. Requires ``tokenize``.
        include_matches: Attach matched indices per field to the results.
        include_score: Attach the aggregate score to the results.
        verbose: Trace the search through the ``bitfuse`` logger.
    """

    id: Optional[str] = None
    keys: Tuple[KeySpec, ...] = ()
    should_sort: bool = True
    get_fn: FieldAccessor = field(default_factory=DeepValueAccessor)
    sort_key: Callable[[Any], Any] = attrgetter("score")
    tokenize: bool = False
    match_all_tokens: bool = False
    include_matches: bool = False
    include_score: bool = False
    verbose: bool = False

    def __post_init__(self):
        super().__post_init__()
        if self.id is not None and not isinstance(self.id, str):
            raise ConfigurationError(f"id must be a path string, got {type(self.id).__name__}")
        if isinstance(self.keys, (str, Mapping)):
            raise ConfigurationError("keys must be a sequence of keys, not a single key")
        object.__setattr__(self, "keys", tuple(normalize_key(k) for k in self.keys))
        if not callable(self.get_fn):
            raise ConfigurationError("get_fn must be callable as get_fn(record, path)")
        if not callable(self.sort_key):
            raise ConfigurationError("sort_key must be callable")
        for name in ("should_sort", "tokenize", "match_all_tokens", "include_matches",
                     "include_score", "verbose"):
            check_bool(name, getattr(self, name))

    def match_options(self) -> MatchOptions:
        """The subset of these options that drives a single match."""
        return MatchOptions(**{f.name: getattr(self, f.name) for f in fields(MatchOptions)})


__all__ = ["FieldSpec", "KeySpec", "MatchOptions", "SearchOptions", "normalize_key"]
